"""Risk scoring engine - weighted multi-factor score over bureau and income data"""

from typing import Optional

from loan_gateway.domain.models import CreditReport, CustomerProfile, ScoreBreakdown, ScoreFactors
from loan_gateway.domain.recommendation import classify_score

# Maximum contribution of each factor; they sum to 1.0
SCORE_WEIGHT_CAP = 0.4
DTI_WEIGHT_CAP = 0.2
UTILIZATION_WEIGHT_CAP = 0.15
INQUIRY_WEIGHT_CAP = 0.1
HISTORY_WEIGHT_CAP = 0.15

DTI_CEILING = 60.0  # percent at which the DTI factor reaches zero
INQUIRY_CEILING = 6  # inquiries in six months at which the inquiry factor reaches zero
WORST_CASE_DTI = 100.0


def _bounded(value: float, cap: float) -> float:
    return min(max(value, 0.0), cap)


def current_dti(profile: Optional[CustomerProfile]) -> float:
    """
    Existing EMI burden as a percentage of income.

    No profile or no income on file counts as the worst case rather than a
    division by zero.
    """
    if profile is None or profile.monthly_income <= 0:
        return WORST_CASE_DTI
    return profile.current_monthly_emi / profile.monthly_income * 100


def calculate_factors(report: CreditReport, dti: float) -> ScoreFactors:
    """
    Scoring weights:
    - 40%: Bureau score (score / 1000, so anything from 400 up maxes out)
    - 20%: DTI (linear from 0% DTI down to zero at 60%)
    - 15%: Utilization (unused share of available credit)
    - 10%: Inquiries (linear down to zero at 6 in six months)
    - 15%: History (all or nothing on defaults)
    """
    return ScoreFactors(
        score_weight=_bounded(report.cibil_score / 1000, SCORE_WEIGHT_CAP),
        dti_weight=_bounded((DTI_CEILING - dti) / DTI_CEILING * DTI_WEIGHT_CAP, DTI_WEIGHT_CAP),
        utilization_weight=_bounded(
            (1 - report.utilization_ratio / 100) * UTILIZATION_WEIGHT_CAP, UTILIZATION_WEIGHT_CAP
        ),
        inquiry_weight=_bounded(
            (1 - report.inquiries_last_6m / INQUIRY_CEILING) * INQUIRY_WEIGHT_CAP, INQUIRY_WEIGHT_CAP
        ),
        history_weight=HISTORY_WEIGHT_CAP if report.defaults_count == 0 else 0.0,
    )


def score_credit_profile(report: CreditReport, profile: Optional[CustomerProfile]) -> ScoreBreakdown:
    """
    Main entry point: score a bureau report against the customer's income.

    Returns the five factors, their sum, the category and recommendation
    from the shared band table.
    """
    dti = current_dti(profile)
    factors = calculate_factors(report, dti)
    total_score = factors.total()
    band = classify_score(total_score)

    return ScoreBreakdown(
        factors=factors,
        total_score=total_score,
        category=band.category,
        recommendation=band.recommendation,
        current_dti=dti,
    )
