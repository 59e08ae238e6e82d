"""Credit decision classifier - maps bureau score and DTI to an underwriting tier"""

from typing import List, Optional

from loan_gateway.domain.affordability import (
    AFFORDABILITY_INCOME_SHARE,
    REFERENCE_ANNUAL_RATE,
    compute_dti,
    compute_installment,
    max_approved_amount,
)
from loan_gateway.domain.exceptions import InvalidInputError, NotFoundError
from loan_gateway.domain.models import (
    CreditDecision,
    CreditReport,
    CustomerProfile,
    DecisionTier,
    EvaluationRequest,
)

MONITOR_CONDITION = "Monitor payment behavior closely"
MAX_INQUIRIES_BEFORE_OVERRIDE = 4

DECLINE_ALTERNATIVES = [
    "Consider smaller loan amount",
    "Improve credit score before reapplying",
    "Explore secured loan options",
]


def _validate_request(request: EvaluationRequest) -> None:
    if request.requested_amount is None or request.requested_amount <= 0:
        raise InvalidInputError("requested_amount must be positive")
    if request.tenure_months is None or request.tenure_months < 1:
        raise InvalidInputError("tenure_months must be at least 1")


def _decline_reasons(report: CreditReport, projected_dti: float) -> List[str]:
    reasons = []
    if report.cibil_score < 650:
        reasons.append("Insufficient credit score")
    if projected_dti > 60:
        reasons.append("High DTI ratio")
    if report.defaults_count > 0 or report.has_payment_delay():
        reasons.append("Payment history concerns")
    return reasons


def classify(decision: CreditDecision, report: CreditReport) -> CreditDecision:
    """
    Apply the tier rules in strict priority order; the first match wins.

    Tiers (bureau score, projected DTI):
    - >= 750 and <= 40%: APPROVED at the requested amount
    - >= 700 and <= 50%: APPROVED_CONDITIONAL at 80%
    - >= 650 and <= 60%: MANUAL_REVIEW at 60%
    - otherwise:         DECLINED with alternatives
    Granted amounts never exceed max_approved_amount.
    """
    score = report.cibil_score
    dti = decision.projected_dti
    requested = decision.requested_amount
    ceiling = decision.max_approved_amount

    if score >= 750 and dti <= 40:
        decision.decision = DecisionTier.APPROVED
        decision.approved_amount = min(requested, ceiling)
        decision.reasons = ["Excellent credit score", "Low DTI ratio"]
    elif score >= 700 and dti <= 50:
        decision.decision = DecisionTier.APPROVED_CONDITIONAL
        decision.approved_amount = min(round(requested * 0.8, 2), ceiling)
        decision.reasons = ["Good credit profile", "Acceptable DTI"]
        decision.conditions = ["Additional income verification may be required"]
    elif score >= 650 and dti <= 60:
        decision.decision = DecisionTier.MANUAL_REVIEW
        decision.approved_amount = min(round(requested * 0.6, 2), ceiling)
        decision.reasons = ["Moderate credit profile", "Borderline DTI"]
        decision.conditions = [
            "Manager approval required",
            "Additional collateral may be needed",
            "Higher interest rate applicable",
        ]
    else:
        decision.decision = DecisionTier.DECLINED
        decision.approved_amount = None
        decision.reasons = _decline_reasons(report, dti)
        decision.alternatives = list(DECLINE_ALTERNATIVES)

    return decision


def apply_overrides(decision: CreditDecision, report: CreditReport) -> CreditDecision:
    """
    Downgrade a clean approval when the bureau shows a payment delay or
    more than four recent inquiries. Only APPROVED is affected; running
    this twice changes nothing further.
    """
    flagged = report.has_payment_delay() or report.inquiries_last_6m > MAX_INQUIRIES_BEFORE_OVERRIDE
    if flagged and decision.decision == DecisionTier.APPROVED:
        decision.decision = DecisionTier.APPROVED_CONDITIONAL
        if MONITOR_CONDITION not in decision.conditions:
            decision.conditions.append(MONITOR_CONDITION)
    return decision


def evaluate_application(
    request: EvaluationRequest,
    report: Optional[CreditReport],
    profile: Optional[CustomerProfile],
    annual_rate_percent: float = REFERENCE_ANNUAL_RATE,
    income_share: float = AFFORDABILITY_INCOME_SHARE,
) -> CreditDecision:
    """
    Main entry point: evaluate a loan request against the customer's
    bureau report and income.

    Raises:
        NotFoundError: customer or bureau report missing
        InvalidInputError: non-positive amount/tenure or no income on file
    """
    if profile is None or report is None:
        raise NotFoundError("Customer data not found")
    _validate_request(request)

    projected_emi = compute_installment(request.requested_amount, annual_rate_percent, request.tenure_months)
    current = compute_dti(profile.current_monthly_emi, 0, profile.monthly_income)
    projected = compute_dti(profile.current_monthly_emi, projected_emi, profile.monthly_income)

    decision = CreditDecision(
        customer_id=profile.customer_id,
        requested_amount=request.requested_amount,
        tenure_months=request.tenure_months,
        purpose=request.purpose,
        credit_score=report.cibil_score,
        current_dti=current,
        projected_dti=projected,
        max_approved_amount=max_approved_amount(
            profile, request.tenure_months, annual_rate_percent, income_share
        ),
    )

    classify(decision, report)
    return apply_overrides(decision, report)
