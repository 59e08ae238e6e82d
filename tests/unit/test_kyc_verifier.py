"""Unit tests for the cancellable KYC verification coordinator"""

import asyncio
import random
import pytest
from loan_gateway.domain.exceptions import VerificationCancelledError, VerificationTimeoutError
from loan_gateway.domain.models import KycRecord
from loan_gateway.infrastructure.clients.kyc_verifier import VerificationCoordinator


def make_coordinator(delay: float = 0.0, timeout: float = 2.0) -> VerificationCoordinator:
    return VerificationCoordinator(
        rng=random.Random(99),
        min_delay_seconds=delay,
        max_delay_seconds=delay,
        timeout_seconds=timeout,
        poll_interval_seconds=0.01,
    )


def make_record(customer_id: str = "C100") -> KycRecord:
    return KycRecord(customer_id=customer_id, income_proof="Salary Slip")


async def test_verify_returns_result_and_leaves_nothing_pending():
    coordinator = make_coordinator()

    result = await coordinator.verify(make_record())

    assert result.customer_id == "C100"
    assert 80 <= result.confidence_score <= 99
    await asyncio.sleep(0)
    assert coordinator.pending_count == 0


async def test_concurrent_requests_share_one_verification():
    coordinator = make_coordinator(delay=0.1)

    first = asyncio.create_task(coordinator.verify(make_record()))
    second = asyncio.create_task(coordinator.verify(make_record()))
    await asyncio.sleep(0.02)

    assert coordinator.pending_count == 1
    assert coordinator.is_pending("C100")

    a, b = await asyncio.gather(first, second)
    assert a is b
    await asyncio.sleep(0)
    assert coordinator.pending_count == 0


async def test_different_customers_verified_independently():
    coordinator = make_coordinator(delay=0.05)

    results = await asyncio.gather(
        coordinator.verify(make_record("C100")),
        coordinator.verify(make_record("C200")),
    )

    assert [r.customer_id for r in results] == ["C100", "C200"]


async def test_timeout_cancels_pending_verification():
    coordinator = make_coordinator(delay=5.0, timeout=0.05)

    with pytest.raises(VerificationTimeoutError):
        await coordinator.verify(make_record())

    assert coordinator.pending_count == 0
    assert not coordinator.is_pending("C100")


async def test_disconnect_cancels_pending_verification():
    coordinator = make_coordinator(delay=5.0)

    async def gone() -> bool:
        return True

    with pytest.raises(VerificationCancelledError):
        await coordinator.verify(make_record(), is_disconnected=gone)

    assert coordinator.pending_count == 0


async def test_remaining_waiter_keeps_verification_alive():
    coordinator = make_coordinator(delay=0.1)

    async def gone() -> bool:
        return True

    staying = asyncio.create_task(coordinator.verify(make_record()))
    await asyncio.sleep(0.01)

    with pytest.raises(VerificationCancelledError):
        await coordinator.verify(make_record(), is_disconnected=gone)

    assert coordinator.is_pending("C100")
    result = await staying
    assert result.customer_id == "C100"


async def test_cancelled_handler_releases_verification():
    coordinator = make_coordinator(delay=5.0)

    waiter = asyncio.create_task(coordinator.verify(make_record()))
    await asyncio.sleep(0.02)
    assert coordinator.pending_count == 1

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert coordinator.pending_count == 0


async def test_shutdown_cancels_everything():
    coordinator = make_coordinator(delay=5.0)

    waiters = [asyncio.create_task(coordinator.verify(make_record(cid))) for cid in ("C1", "C2")]
    await asyncio.sleep(0.02)
    assert coordinator.pending_count == 2

    await coordinator.shutdown()

    assert coordinator.pending_count == 0
    results = await asyncio.gather(*waiters, return_exceptions=True)
    assert all(isinstance(r, asyncio.CancelledError) for r in results)
