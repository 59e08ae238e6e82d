"""Data access layer for customers, bureau reports, KYC records and offers"""

import threading
from dataclasses import asdict
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from loan_gateway.infrastructure.database import models as orm
from loan_gateway.domain.exceptions import InvalidInputError
from loan_gateway.domain.models import (
    CreditReport,
    CustomerProfile,
    DocumentRecord,
    KycRecord,
    LoanOffer,
)

COUNTRY_PREFIX = "+91"

# Serializes find-or-create so one phone never yields two customers
_directory_write_lock = threading.Lock()


def normalize_phone(phone: str) -> str:
    normalized = "".join((phone or "").split())
    if normalized.startswith(COUNTRY_PREFIX):
        normalized = normalized[len(COUNTRY_PREFIX):]
    return normalized


def _to_profile(row: orm.Customer) -> CustomerProfile:
    return CustomerProfile(
        customer_id=row.customer_id,
        name=row.name,
        phone=row.phone,
        email=row.email,
        city=row.city,
        employment_type=row.employment_type,
        monthly_income=row.monthly_income or 0.0,
        current_monthly_emi=row.current_monthly_emi or 0.0,
        pre_approved_limit=row.pre_approved_limit or 0.0,
        credit_score=row.credit_score,
        loan_amount=row.loan_amount,
        purpose=row.purpose,
        status=row.status,
        created_at=row.created_at.isoformat() if row.created_at else None,
    )


class CustomerRepository:
    """Customer directory keyed by id and by normalized phone"""

    def __init__(self, db: Session):
        self.db = db

    def _row_by_phone(self, phone: str) -> Optional[orm.Customer]:
        return self.db.query(orm.Customer).filter(orm.Customer.phone == phone).first()

    def _next_customer_id(self) -> str:
        ids = [customer_id for (customer_id,) in self.db.query(orm.Customer.customer_id).all()]
        numbers = [int(cid[1:]) for cid in ids if cid.startswith("C") and cid[1:].isdigit()]
        return f"C{max(numbers, default=0) + 1:03d}"

    def list_all(self) -> List[CustomerProfile]:
        rows = self.db.query(orm.Customer).order_by(orm.Customer.customer_id).all()
        return [_to_profile(row) for row in rows]

    def find_by_id(self, customer_id: str) -> Optional[CustomerProfile]:
        row = self.db.get(orm.Customer, customer_id)
        return _to_profile(row) if row else None

    def find_by_phone(self, phone: str) -> Optional[CustomerProfile]:
        row = self._row_by_phone(normalize_phone(phone))
        return _to_profile(row) if row else None

    def upsert(
        self,
        phone: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        loan_amount: Optional[float] = None,
        purpose: Optional[str] = None,
    ) -> Tuple[CustomerProfile, bool]:
        """
        Find the customer for this phone or create a new inquiry record.

        Commits immediately while holding the directory lock; the unique
        phone constraint catches writers outside this process.

        Returns: (customer, created)
        """
        normalized = normalize_phone(phone)
        if not normalized:
            raise InvalidInputError("phone is required")

        with _directory_write_lock:
            existing = self._row_by_phone(normalized)
            if existing is not None:
                return _to_profile(existing), False

            row = orm.Customer(
                customer_id=self._next_customer_id(),
                name=name or "New Customer",
                phone=normalized,
                email=email or f"{normalized}@example.com",
                monthly_income=0.0,
                current_monthly_emi=0.0,
                pre_approved_limit=0.0,
                loan_amount=loan_amount or 100000,
                purpose=purpose or "Personal",
                status="NEW_INQUIRY",
            )
            self.db.add(row)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                existing = self._row_by_phone(normalized)
                if existing is None:
                    raise
                return _to_profile(existing), False

            self.db.refresh(row)
            return _to_profile(row), True


class CreditReportRepository:
    """Read-only bureau store"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, customer_id: str) -> Optional[CreditReport]:
        row = self.db.get(orm.CreditReport, customer_id)
        if row is None:
            return None
        return CreditReport(
            customer_id=row.customer_id,
            cibil_score=row.cibil_score,
            utilization_ratio=row.utilization_ratio,
            inquiries_last_6m=row.inquiries_last_6m,
            payment_history=tuple(row.payment_history or ()),
            defaults_count=row.defaults_count,
            active_loans=row.active_loans,
            credit_age_months=row.credit_age_months,
        )


class KycRepository:
    """KYC records; documents are stored as a JSON list"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, customer_id: str) -> Optional[KycRecord]:
        row = self.db.get(orm.KycRecord, customer_id)
        if row is None:
            return None
        return KycRecord(
            customer_id=row.customer_id,
            aadhaar_number=row.aadhaar_number,
            pan_number=row.pan_number,
            address_proof=row.address_proof,
            income_proof=row.income_proof,
            bank_statement=row.bank_statement,
            kyc_score=row.kyc_score,
            verification_status=row.verification_status,
            last_verified=row.last_verified,
            documents=[DocumentRecord(**doc) for doc in (row.documents or [])],
        )

    def get_or_create(self, customer_id: str) -> KycRecord:
        return self.get(customer_id) or KycRecord(customer_id=customer_id)

    def save(self, record: KycRecord) -> None:
        """Insert or update; caller commits"""
        row = self.db.get(orm.KycRecord, record.customer_id)
        if row is None:
            row = orm.KycRecord(customer_id=record.customer_id)
            self.db.add(row)

        row.aadhaar_number = record.aadhaar_number
        row.pan_number = record.pan_number
        row.address_proof = record.address_proof
        row.income_proof = record.income_proof
        row.bank_statement = record.bank_statement
        row.kyc_score = record.kyc_score
        row.verification_status = record.verification_status
        row.last_verified = record.last_verified
        row.documents = [asdict(doc) for doc in record.documents]
        self.db.flush()


class OfferRepository:
    """Loan product catalog"""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[LoanOffer]:
        rows = self.db.query(orm.LoanOffer).order_by(orm.LoanOffer.display_order).all()
        return [
            LoanOffer(
                offer_id=row.offer_id,
                product_name=row.product_name,
                loan_type=row.loan_type,
                interest_rate_range=(row.interest_rate_min, row.interest_rate_max),
                min_amount=row.min_amount,
                max_amount=row.max_amount,
                tenure_options=tuple(row.tenure_options or ()),
                processing_fee_percent=row.processing_fee_percent,
                min_credit_score=row.min_credit_score,
                min_monthly_income=row.min_monthly_income,
                features=tuple(row.features or ()),
            )
            for row in rows
        ]
