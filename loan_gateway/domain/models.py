"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class DecisionTier(str, Enum):
    """Underwriting outcome, most to least favourable"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    APPROVED_CONDITIONAL = "APPROVED_CONDITIONAL"
    MANUAL_REVIEW = "MANUAL_REVIEW"
    DECLINED = "DECLINED"


class ScoreCategory(str, Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


@dataclass(frozen=True)
class CustomerProfile:
    """Customer directory entry"""

    customer_id: str
    name: str
    phone: str
    monthly_income: float
    current_monthly_emi: float
    pre_approved_limit: float
    credit_score: Optional[int] = None  # mirrored from the bureau report
    email: Optional[str] = None
    city: Optional[str] = None
    employment_type: Optional[str] = None
    loan_amount: Optional[float] = None
    purpose: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class CreditReport:
    """Bureau snapshot for one customer"""

    customer_id: str
    cibil_score: int
    utilization_ratio: float  # percent, 0-100
    inquiries_last_6m: int
    payment_history: Tuple[str, ...]
    defaults_count: int = 0
    active_loans: int = 0
    credit_age_months: Optional[int] = None

    def has_payment_delay(self) -> bool:
        return any(token.strip().lower() == "delay" for token in self.payment_history)


@dataclass(frozen=True)
class EvaluationRequest:
    """Loan application submitted for credit evaluation"""

    requested_amount: float
    tenure_months: int
    purpose: Optional[str] = None


@dataclass
class CreditDecision:
    """Output of the decision classifier"""

    customer_id: str
    requested_amount: float
    tenure_months: int
    purpose: Optional[str]
    credit_score: int
    current_dti: float
    projected_dti: float
    max_approved_amount: float
    decision: DecisionTier = DecisionTier.PENDING
    approved_amount: Optional[float] = None
    reasons: List[str] = field(default_factory=list)
    conditions: List[str] = field(default_factory=list)
    alternatives: Optional[List[str]] = None


@dataclass(frozen=True)
class Recommendation:
    """User-facing bundle attached to a score band"""

    status: str
    limit_percent: int
    limit: str
    rate: Optional[str] = None
    processing_time: Optional[str] = None
    additional_docs: Optional[Tuple[str, ...]] = None
    reasons: Optional[Tuple[str, ...]] = None
    suggestions: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class ScoreFactors:
    """Weighted contributions to the total score"""

    score_weight: float
    dti_weight: float
    utilization_weight: float
    inquiry_weight: float
    history_weight: float

    def total(self) -> float:
        """Correctly rounded sum of the five weights"""
        return math.fsum(
            (
                self.score_weight,
                self.dti_weight,
                self.utilization_weight,
                self.inquiry_weight,
                self.history_weight,
            )
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    """Output of the scoring model"""

    factors: ScoreFactors
    total_score: float
    category: ScoreCategory
    recommendation: Recommendation
    current_dti: float

    @property
    def score_percent(self) -> int:
        return round(self.total_score * 100)


@dataclass
class DocumentRecord:
    """Single uploaded KYC document"""

    type: str
    file_name: Optional[str]
    uploaded_at: str
    status: str
    size: int  # KB
    verified: bool


@dataclass
class KycRecord:
    """KYC state for one customer"""

    customer_id: str
    aadhaar_number: Optional[str] = None
    pan_number: Optional[str] = None
    address_proof: Optional[str] = None
    income_proof: Optional[str] = None
    bank_statement: Optional[str] = None
    kyc_score: int = 0
    verification_status: str = "NOT_STARTED"
    last_verified: Optional[str] = None
    documents: List[DocumentRecord] = field(default_factory=list)


@dataclass(frozen=True)
class KycStatus:
    completion_score: int
    status: str
    documents_required: List[str]


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of the simulated KYC verification"""

    customer_id: str
    verification_timestamp: str
    aadhaar_verified: bool
    pan_verified: bool
    address_verified: bool
    income_verified: bool
    overall_status: str
    confidence_score: int
    issues: List[str]


@dataclass(frozen=True)
class LoanOffer:
    """Catalog product"""

    offer_id: str
    product_name: str
    loan_type: str
    interest_rate_range: Tuple[float, float]
    min_amount: float
    max_amount: float
    tenure_options: Tuple[int, ...]
    processing_fee_percent: float
    min_credit_score: int
    min_monthly_income: float
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PersonalizedOffer:
    offer: LoanOffer
    personalized_interest_rate: float
    eligible_amount: float
    processing_fee: int


@dataclass(frozen=True)
class EmiQuote:
    principal: float
    annual_rate: float
    monthly_interest_rate: float
    tenure_months: int
    monthly_emi: int
    total_interest: int
    total_payable: int
