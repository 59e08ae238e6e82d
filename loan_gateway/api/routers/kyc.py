"""KYC endpoints: completion status, document submission and simulated verification"""

import logging
import random
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from loan_gateway.api.routers.schemas import KycSubmitRequest
from loan_gateway.api.dependencies import get_kyc_repository, get_kyc_verifier, get_request_id, get_rng
from loan_gateway.infrastructure.clients.kyc_verifier import VerificationCoordinator
from loan_gateway.infrastructure.database.repositories import KycRepository
from loan_gateway.infrastructure.database.session import get_db
from loan_gateway.domain.exceptions import VerificationCancelledError, VerificationTimeoutError
from loan_gateway.domain.kyc import apply_verification, kyc_status, next_steps, record_document_upload
from loan_gateway.domain.models import KycRecord, VerificationResult
from loan_gateway.infrastructure.observability.metrics import kyc_document_counter, kyc_verification_counter

router = APIRouter()

CLIENT_CLOSED_REQUEST = 499


@router.get("/{customer_id}")
def get_kyc(customer_id: str, kyc_records: KycRepository = Depends(get_kyc_repository)):
    """KYC record with completion score, outstanding documents and derived status"""
    record = kyc_records.get(customer_id)
    if record is None:
        raise HTTPException(status_code=404, detail="KYC record not found")

    status = kyc_status(record)
    data = asdict(record)
    data["completion_score"] = status.completion_score
    data["documents_required"] = status.documents_required
    data["status"] = status.status
    return {"success": True, "data": data}


@router.post("/submit/{customer_id}")
def submit_document(
    customer_id: str,
    body: KycSubmitRequest,
    db: Session = Depends(get_db),
    kyc_records: KycRepository = Depends(get_kyc_repository),
    rng: random.Random = Depends(get_rng),
):
    """
    Record a simulated document upload and recompute the KYC score.

    A record is created for customers who have none yet.
    """
    record = kyc_records.get_or_create(customer_id)
    document = record_document_upload(record, body.document_type, body.file_name, rng, status=body.status)
    kyc_records.save(record)
    db.commit()

    kyc_document_counter.labels(verified=str(document.verified).lower()).inc()

    return {
        "success": True,
        "customer_id": customer_id,
        "document_uploaded": asdict(document),
        "updated_kyc_score": record.kyc_score,
        "next_steps": next_steps(record),
    }


def _store_verification(
    db: Session,
    kyc_records: KycRepository,
    record: KycRecord,
    result: VerificationResult,
) -> None:
    # Reload: documents may have been submitted while verification was running
    current = kyc_records.get(record.customer_id) or record
    kyc_records.save(apply_verification(current, result))
    db.commit()


@router.post("/verify/{customer_id}")
async def verify_kyc(
    customer_id: str,
    request: Request,
    db: Session = Depends(get_db),
    kyc_records: KycRepository = Depends(get_kyc_repository),
    verifier: VerificationCoordinator = Depends(get_kyc_verifier),
):
    """
    Run the delayed verification for a customer.

    Concurrent calls for the same customer share one pending verification.
    The wait is abandoned (and the verification cancelled) if the client
    disconnects or the timeout budget runs out.
    """
    request_id = get_request_id(request)
    record = await run_in_threadpool(kyc_records.get, customer_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Customer KYC record not found")

    try:
        result = await verifier.verify(record, request.is_disconnected)
    except VerificationTimeoutError as e:
        kyc_verification_counter.labels(outcome="timeout").inc()
        logging.warning(f"KYC verification timed out: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=504, detail="KYC verification timed out")
    except VerificationCancelledError as e:
        kyc_verification_counter.labels(outcome="cancelled").inc()
        logging.info(f"KYC verification abandoned: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=CLIENT_CLOSED_REQUEST, detail="Client closed request")

    await run_in_threadpool(_store_verification, db, kyc_records, record, result)

    kyc_verification_counter.labels(outcome=result.overall_status).inc()
    return {"success": True, "data": asdict(result)}
