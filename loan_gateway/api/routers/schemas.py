"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from loan_gateway.domain.models import DecisionTier, ScoreCategory
from loan_gateway.utils.date_utils import utc_now_iso


class EvaluationRequestBody(BaseModel):
    """Request body for POST /credit/evaluate/{customer_id}"""

    requested_amount: float = Field(..., gt=0, description="Requested loan amount")
    tenure_months: int = Field(..., gt=0, description="Repayment tenure in months")
    purpose: Optional[str] = Field(None, description="Free-text loan purpose")


class EvaluationSchema(BaseModel):
    """Credit decision as returned to the caller"""

    model_config = ConfigDict(from_attributes=True)

    customer_id: str
    requested_amount: float
    tenure_months: int
    purpose: Optional[str] = None
    credit_score: int
    current_dti: float
    projected_dti: float
    max_approved_amount: float
    decision: DecisionTier
    approved_amount: Optional[float] = None
    reasons: List[str]
    conditions: List[str]
    alternatives: Optional[List[str]] = None
    timestamp: str = Field(default_factory=utc_now_iso)


class EvaluationResponse(BaseModel):
    """Response for POST /credit/evaluate/{customer_id}"""

    success: bool = True
    evaluation: EvaluationSchema


class ScoreFactorsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    score_weight: float
    dti_weight: float
    utilization_weight: float
    inquiry_weight: float
    history_weight: float


class RecommendationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    limit_percent: int
    limit: str
    rate: Optional[str] = None
    processing_time: Optional[str] = None
    additional_docs: Optional[List[str]] = None
    reasons: Optional[List[str]] = None
    suggestions: Optional[List[str]] = None


class ScoreBreakdownSchema(BaseModel):
    """Scoring model output attached to a credit report"""

    model_config = ConfigDict(from_attributes=True)

    category: ScoreCategory
    total_score: float
    score_percent: int
    current_dti: float
    factors: ScoreFactorsSchema
    recommendation: RecommendationSchema


class InquiryRequest(BaseModel):
    """Request body for POST /customers/inquiry"""

    phone: str = Field(..., min_length=1, description="Customer phone, with or without +91")
    name: Optional[str] = None
    email: Optional[str] = None
    loan_amount: Optional[float] = Field(None, gt=0)
    purpose: Optional[str] = None


class InquiryResponse(BaseModel):
    """Response for POST /customers/inquiry"""

    success: bool = True
    customer_exists: bool
    customer_id: str
    pre_approved_limit: Optional[float] = None
    credit_score: Optional[int] = None
    status: Optional[str] = None
    next_step: Optional[str] = None


class KycSubmitRequest(BaseModel):
    """Request body for POST /kyc/submit/{customer_id}"""

    document_type: str = Field(..., min_length=1, description="aadhaar, pan, salary slip, ...")
    file_name: Optional[str] = None
    status: Optional[str] = None


class EmiRequest(BaseModel):
    """Request body for POST /offers/calculate-emi"""

    principal: float = Field(..., gt=0)
    rate: float = Field(..., ge=0, description="Annual interest rate in percent")
    tenure_months: int = Field(..., gt=0)


class EmiResponse(BaseModel):
    """Response for POST /offers/calculate-emi"""

    success: bool = True
    principal: float
    monthly_interest_rate: float
    tenure_months: int
    monthly_emi: int
    total_interest: int
    total_payable: int


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[List[Dict]] = None
