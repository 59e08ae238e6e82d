"""Simulated KYC verification provider: cancellable delayed checks, one pending task per customer"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from loan_gateway.domain.exceptions import VerificationCancelledError, VerificationTimeoutError
from loan_gateway.domain.kyc import simulate_verification
from loan_gateway.domain.models import KycRecord, VerificationResult

logger = logging.getLogger(__name__)

DisconnectProbe = Callable[[], Awaitable[bool]]


async def _never_disconnected() -> bool:
    return False


@dataclass
class _PendingVerification:
    task: "asyncio.Task[VerificationResult]"
    waiters: int = 0


class VerificationCoordinator:
    """
    Runs the simulated verification as an asyncio task.

    Callers asking for a customer that already has a verification in flight
    join the existing task instead of starting a new one. Each caller waits
    under its own timeout budget and disconnect probe; when the last waiter
    leaves before the task finishes, the task is cancelled so no timer
    outlives the request.
    """

    def __init__(
        self,
        rng: random.Random,
        min_delay_seconds: float = 5.0,
        max_delay_seconds: float = 10.0,
        timeout_seconds: float = 30.0,
        poll_interval_seconds: float = 0.25,
    ):
        self.rng = rng
        self.min_delay_seconds = min_delay_seconds
        self.max_delay_seconds = max_delay_seconds
        self.timeout_seconds = timeout_seconds
        self.poll_interval_seconds = poll_interval_seconds
        self._pending: Dict[str, _PendingVerification] = {}

    def is_pending(self, customer_id: str) -> bool:
        return customer_id in self._pending

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def _run(self, record: KycRecord) -> VerificationResult:
        delay = self.rng.uniform(self.min_delay_seconds, self.max_delay_seconds)
        await asyncio.sleep(delay)
        return simulate_verification(record, self.rng)

    def _start(self, record: KycRecord) -> _PendingVerification:
        customer_id = record.customer_id
        task = asyncio.get_running_loop().create_task(self._run(record))
        entry = _PendingVerification(task=task)
        self._pending[customer_id] = entry

        def _forget(finished: asyncio.Task) -> None:
            if self._pending.get(customer_id) is entry:
                del self._pending[customer_id]

        task.add_done_callback(_forget)
        return entry

    async def _wait(self, task: asyncio.Task, is_disconnected: DisconnectProbe) -> VerificationResult:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout_seconds

        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise VerificationTimeoutError(f"Verification exceeded {self.timeout_seconds}s")

            done, _ = await asyncio.wait({task}, timeout=min(self.poll_interval_seconds, remaining))
            if done:
                return task.result()

            if await is_disconnected():
                raise VerificationCancelledError("Client disconnected during verification")

    async def verify(
        self,
        record: KycRecord,
        is_disconnected: Optional[DisconnectProbe] = None,
    ) -> VerificationResult:
        """
        Wait for the verification result for this customer.

        Raises:
            VerificationTimeoutError: result not ready within timeout_seconds
            VerificationCancelledError: is_disconnected reported the caller gone
        """
        entry = self._pending.get(record.customer_id)
        if entry is None:
            entry = self._start(record)
        else:
            logger.info("Joining pending verification", extra={"customer_id": record.customer_id})

        entry.waiters += 1
        try:
            return await self._wait(entry.task, is_disconnected or _never_disconnected)
        finally:
            entry.waiters -= 1
            if entry.waiters == 0 and not entry.task.done():
                entry.task.cancel()
                if self._pending.get(record.customer_id) is entry:
                    del self._pending[record.customer_id]
                logger.warning(
                    "Verification cancelled",
                    extra={"customer_id": record.customer_id, "step": "kyc_verification_cancelled"},
                )

    async def shutdown(self) -> None:
        """Cancel every in-flight verification and wait for them to unwind"""
        tasks = [entry.task for entry in self._pending.values()]
        self._pending.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
