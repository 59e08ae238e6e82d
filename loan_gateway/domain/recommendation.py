"""Score bands shared by category assignment and the recommendation bundle"""

from dataclasses import dataclass
from typing import Tuple

from loan_gateway.domain.models import Recommendation, ScoreCategory


@dataclass(frozen=True)
class ScoreBand:
    lower_bound: float  # inclusive
    category: ScoreCategory
    recommendation: Recommendation


# Ordered high to low; the first band whose lower bound the score reaches wins.
SCORE_BANDS: Tuple[ScoreBand, ...] = (
    ScoreBand(
        lower_bound=0.75,
        category=ScoreCategory.EXCELLENT,
        recommendation=Recommendation(
            status="FULL_APPROVAL",
            limit_percent=100,
            limit="Up to 100% of pre-approved limit",
            rate="Best available rates (8.5-10%)",
            processing_time="Instant approval",
        ),
    ),
    ScoreBand(
        lower_bound=0.60,
        category=ScoreCategory.GOOD,
        recommendation=Recommendation(
            status="CONDITIONAL_APPROVAL",
            limit_percent=80,
            limit="Up to 80% of pre-approved limit",
            rate="Standard rates (10-12%)",
            processing_time="2-4 hours",
        ),
    ),
    ScoreBand(
        lower_bound=0.45,
        category=ScoreCategory.FAIR,
        recommendation=Recommendation(
            status="MANUAL_REVIEW",
            limit_percent=50,
            limit="Up to 50% of pre-approved limit",
            rate="Higher rates (12-14%)",
            processing_time="24-48 hours",
            additional_docs=("Bank statements", "Income proof", "Collateral details"),
        ),
    ),
    ScoreBand(
        lower_bound=0.0,
        category=ScoreCategory.POOR,
        recommendation=Recommendation(
            status="DECLINED",
            limit_percent=0,
            limit="Not eligible at this time",
            reasons=("Low credit score", "High DTI", "Poor payment history"),
            suggestions=(
                "Improve credit score (pay bills on time)",
                "Reduce existing debt",
                "Consider smaller loan amount",
                "Reapply after 6 months",
            ),
        ),
    ),
)


def classify_score(total_score: float) -> ScoreBand:
    """Return the band for a normalized score; anything below every bound is POOR"""
    for band in SCORE_BANDS:
        if total_score >= band.lower_bound:
            return band
    return SCORE_BANDS[-1]


def recommend(total_score: float) -> Recommendation:
    return classify_score(total_score).recommendation
