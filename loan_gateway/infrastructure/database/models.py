"""SQLAlchemy ORM models for the customer directory, bureau, KYC and offer stores"""

from sqlalchemy import Column, String, Float, DateTime, Integer, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Customer(Base):
    """Customer directory entry"""

    __tablename__ = "customer"

    customer_id = Column(String(16), primary_key=True)
    name = Column(Text, nullable=False)
    phone = Column(String(20), nullable=False, unique=True, index=True)  # normalized, no +91
    email = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    employment_type = Column(Text, nullable=True)
    monthly_income = Column(Float, nullable=False, default=0.0)
    current_monthly_emi = Column(Float, nullable=False, default=0.0)
    pre_approved_limit = Column(Float, nullable=False, default=0.0)
    credit_score = Column(Integer, nullable=True)
    loan_amount = Column(Float, nullable=True)
    purpose = Column(Text, nullable=True)
    status = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CreditReport(Base):
    """Bureau report snapshot"""

    __tablename__ = "credit_report"

    customer_id = Column(String(16), primary_key=True)
    cibil_score = Column(Integer, nullable=False)
    utilization_ratio = Column(Float, nullable=False, default=0.0)
    inquiries_last_6m = Column(Integer, nullable=False, default=0)
    payment_history = Column(JSON, nullable=False, default=list)
    defaults_count = Column(Integer, nullable=False, default=0)
    active_loans = Column(Integer, nullable=False, default=0)
    credit_age_months = Column(Integer, nullable=True)


class KycRecord(Base):
    """KYC document state"""

    __tablename__ = "kyc_record"

    customer_id = Column(String(16), primary_key=True)
    aadhaar_number = Column(Text, nullable=True)
    pan_number = Column(Text, nullable=True)
    address_proof = Column(Text, nullable=True)
    income_proof = Column(Text, nullable=True)
    bank_statement = Column(Text, nullable=True)
    kyc_score = Column(Integer, nullable=False, default=0)
    verification_status = Column(Text, nullable=False, default="NOT_STARTED")
    last_verified = Column(Text, nullable=True)
    documents = Column(JSON, nullable=False, default=list)


class LoanOffer(Base):
    """Loan product catalog entry"""

    __tablename__ = "loan_offer"

    offer_id = Column(String(16), primary_key=True)
    product_name = Column(Text, nullable=False)
    loan_type = Column(Text, nullable=False)
    interest_rate_min = Column(Float, nullable=False)
    interest_rate_max = Column(Float, nullable=False)
    min_amount = Column(Float, nullable=False)
    max_amount = Column(Float, nullable=False)
    tenure_options = Column(JSON, nullable=False, default=list)
    processing_fee_percent = Column(Float, nullable=False, default=0.0)
    min_credit_score = Column(Integer, nullable=False)
    min_monthly_income = Column(Float, nullable=False)
    features = Column(JSON, nullable=False, default=list)
    display_order = Column(Integer, nullable=False, default=0)
