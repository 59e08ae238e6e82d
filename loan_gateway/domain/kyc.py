"""KYC completion scoring and simulated document checks"""

import random
from typing import List, Optional

from loan_gateway.domain.models import DocumentRecord, KycRecord, KycStatus, VerificationResult
from loan_gateway.utils.date_utils import utc_now_iso

APPROVED_THRESHOLD = 80
PENDING_THRESHOLD = 50

# Placeholder values that mean the document is not actually on file
INCOME_PROOF_MISSING = {"Pending", "Upload Failed"}
BANK_STATEMENT_MISSING = {"Not uploaded", "Upload Failed"}

DOCUMENT_VERIFY_PROBABILITY = 0.7


def _has_income_proof(record: KycRecord) -> bool:
    return bool(record.income_proof) and record.income_proof not in INCOME_PROOF_MISSING


def _has_bank_statement(record: KycRecord) -> bool:
    return bool(record.bank_statement) and record.bank_statement not in BANK_STATEMENT_MISSING


def completion_score(record: KycRecord) -> int:
    """
    Weighted document completeness, 0-100.

    Aadhaar 25, PAN 25, address proof 20, income proof 20, bank statement 10.
    """
    score = 0
    if record.aadhaar_number:
        score += 25
    if record.pan_number:
        score += 25
    if record.address_proof:
        score += 20
    if _has_income_proof(record):
        score += 20
    if _has_bank_statement(record):
        score += 10
    return score


def missing_documents(record: KycRecord) -> List[str]:
    missing = []
    if not record.aadhaar_number:
        missing.append("Aadhaar Card")
    if not record.pan_number:
        missing.append("PAN Card")
    if not record.address_proof:
        missing.append("Address Proof")
    if not _has_income_proof(record):
        missing.append("Income Proof (Salary Slip/ITR)")
    if not _has_bank_statement(record):
        missing.append("Bank Statement (3 months)")
    return missing


def kyc_status(record: KycRecord) -> KycStatus:
    score = completion_score(record)
    if score >= APPROVED_THRESHOLD:
        status = "APPROVED"
    elif score >= PENDING_THRESHOLD:
        status = "PENDING"
    else:
        status = "NOT_STARTED"

    return KycStatus(
        completion_score=score,
        status=status,
        documents_required=missing_documents(record) if score < APPROVED_THRESHOLD else [],
    )


def record_document_upload(
    record: KycRecord,
    document_type: str,
    file_name: Optional[str],
    rng: random.Random,
    status: Optional[str] = None,
) -> DocumentRecord:
    """
    Attach a simulated upload to the record and update the matching field.

    The upload "verifies" with a fixed probability drawn from rng; a failed
    upload clears identity fields and marks proof fields as failed. The
    record's score and status are recomputed.
    """
    document = DocumentRecord(
        type=document_type,
        file_name=file_name,
        uploaded_at=utc_now_iso(),
        status=status or "PENDING_VERIFICATION",
        size=rng.randint(100, 5099),
        verified=rng.random() < DOCUMENT_VERIFY_PROBABILITY,
    )
    record.documents.append(document)

    kind = document_type.strip().lower()
    if kind == "aadhaar":
        record.aadhaar_number = "VERIFIED_AADHAAR" if document.verified else None
    elif kind == "pan":
        record.pan_number = "VERIFIED_PAN" if document.verified else None
    elif kind in ("salary slip", "income proof"):
        record.income_proof = f"Verified: {file_name}" if document.verified else "Upload Failed"
    elif kind == "bank statement":
        record.bank_statement = f"Verified: {file_name}" if document.verified else "Upload Failed"
    elif kind == "address proof":
        record.address_proof = f"Verified: {file_name}" if document.verified else None

    updated = kyc_status(record)
    record.kyc_score = updated.completion_score
    record.verification_status = updated.status
    return document


def next_steps(record: KycRecord) -> List[str]:
    if completion_score(record) >= APPROVED_THRESHOLD:
        return ["CREDIT_EVALUATION"]
    return missing_documents(record)


def simulate_verification(record: KycRecord, rng: random.Random) -> VerificationResult:
    """Roll the individual document checks and derive an overall outcome"""
    aadhaar_ok = rng.random() > 0.1
    pan_ok = rng.random() > 0.05
    address_ok = rng.random() > 0.15
    income_ok = _has_income_proof(record) and rng.random() > 0.2
    confidence = rng.randint(80, 99)

    issues = []
    if not aadhaar_ok:
        issues.append("Aadhaar verification failed")
    if not pan_ok:
        issues.append("PAN verification failed")
    if not address_ok:
        issues.append("Address could not be verified")
    if not income_ok:
        issues.append("Income proof could not be verified")

    return VerificationResult(
        customer_id=record.customer_id,
        verification_timestamp=utc_now_iso(),
        aadhaar_verified=aadhaar_ok,
        pan_verified=pan_ok,
        address_verified=address_ok,
        income_verified=income_ok,
        overall_status="APPROVED" if not issues else "REVIEW_REQUIRED",
        confidence_score=confidence,
        issues=issues,
    )


def apply_verification(record: KycRecord, result: VerificationResult) -> KycRecord:
    record.verification_status = result.overall_status
    record.last_verified = result.verification_timestamp
    record.kyc_score = result.confidence_score
    return record
