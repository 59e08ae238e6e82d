"""Offer eligibility, personalized pricing and standalone EMI quotes"""

import math
from typing import Iterable, List

from loan_gateway.domain.affordability import compute_installment
from loan_gateway.domain.exceptions import ComputationDegenerateError
from loan_gateway.domain.models import CustomerProfile, EmiQuote, LoanOffer, PersonalizedOffer

PRIME_SCORE = 750
SUBPRIME_SCORE = 650
PRIME_DISCOUNT = 0.5
SUBPRIME_PREMIUM = 1.0
INCOME_MULTIPLE = 60  # eligible amount is capped at 60 months of income less existing EMIs


def is_eligible(offer: LoanOffer, profile: CustomerProfile) -> bool:
    credit_score = profile.credit_score or 0
    return credit_score >= offer.min_credit_score and profile.monthly_income >= offer.min_monthly_income


def personalized_rate(offer: LoanOffer, credit_score: int) -> float:
    """
    Start from the bottom of the offer's rate range for prime borrowers and
    from the top for everyone else, then apply the score adjustment.
    """
    low, high = offer.interest_rate_range
    rate = low if credit_score >= PRIME_SCORE else high
    if credit_score > PRIME_SCORE:
        rate -= PRIME_DISCOUNT
    elif credit_score < SUBPRIME_SCORE:
        rate += SUBPRIME_PREMIUM
    return round(rate, 2)


def eligible_amount(profile: CustomerProfile) -> float:
    income_cap = max(0.0, profile.monthly_income * INCOME_MULTIPLE - profile.current_monthly_emi)
    return min(profile.pre_approved_limit, income_cap)


def personalize_offers(offers: Iterable[LoanOffer], profile: CustomerProfile) -> List[PersonalizedOffer]:
    """Filter the catalog for this customer and price each eligible offer, cheapest first"""
    amount = eligible_amount(profile)
    personalized = [
        PersonalizedOffer(
            offer=offer,
            personalized_interest_rate=personalized_rate(offer, profile.credit_score or 0),
            eligible_amount=amount,
            processing_fee=round(amount * offer.processing_fee_percent / 100),
        )
        for offer in offers
        if is_eligible(offer, profile)
    ]
    return sorted(personalized, key=lambda p: p.personalized_interest_rate)


def quote_emi(principal: float, annual_rate: float, tenure_months: int) -> EmiQuote:
    emi = compute_installment(principal, annual_rate, tenure_months)
    total_payable = emi * tenure_months
    if not math.isfinite(total_payable):
        raise ComputationDegenerateError(f"total payable is not finite for principal={principal}")
    return EmiQuote(
        principal=principal,
        annual_rate=annual_rate,
        monthly_interest_rate=annual_rate / 12,
        tenure_months=tenure_months,
        monthly_emi=round(emi),
        total_interest=round(total_payable - principal),
        total_payable=round(total_payable),
    )
