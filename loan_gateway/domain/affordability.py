"""Affordability math: amortized installments, DTI ratios and the affordability cap"""

import math
from decimal import Decimal, ROUND_HALF_UP

from loan_gateway.domain.exceptions import ComputationDegenerateError, InvalidInputError
from loan_gateway.domain.models import CustomerProfile

REFERENCE_ANNUAL_RATE = 10.5  # percent, used to project EMI on a requested loan
AFFORDABILITY_INCOME_SHARE = 0.5


def round_half_up(value: float, places: int = 1) -> float:
    """Round half-up at the given decimal place (Python's round() is banker's rounding)"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_installment(principal: float, annual_rate_percent: float, tenure_months: int) -> float:
    """
    Equated monthly installment for an amortizing loan.

        r = annual_rate / 1200
        EMI = P * r * (1+r)^n / ((1+r)^n - 1)

    A zero rate (or a rate so small the denominator collapses to zero)
    falls back to straight-line repayment: P / n. When (1+r)^n is too large
    to represent the installment converges to P * r.

    Raises:
        InvalidInputError: principal <= 0, negative rate, or tenure < 1
        ComputationDegenerateError: the installment itself is not representable
    """
    if principal <= 0:
        raise InvalidInputError(f"principal must be positive, got {principal}")
    if annual_rate_percent < 0:
        raise InvalidInputError(f"annual rate must not be negative, got {annual_rate_percent}")
    if isinstance(tenure_months, bool) or int(tenure_months) != tenure_months or tenure_months < 1:
        raise InvalidInputError(f"tenure must be a whole number of months >= 1, got {tenure_months}")

    tenure_months = int(tenure_months)
    monthly_rate = annual_rate_percent / 1200
    if monthly_rate == 0:
        return principal / tenure_months

    try:
        growth = (1 + monthly_rate) ** tenure_months
    except OverflowError:
        growth = math.inf

    if growth - 1 == 0:
        return principal / tenure_months

    installment = principal * monthly_rate / (1 - 1 / growth)
    if not math.isfinite(installment):
        raise ComputationDegenerateError(
            f"installment is not finite for principal={principal}, rate={annual_rate_percent}, "
            f"tenure={tenure_months}"
        )
    return installment


def compute_dti(existing_emi: float, new_emi: float, monthly_income: float) -> float:
    """Debt-to-income percentage, rounded half-up to one decimal"""
    if monthly_income <= 0:
        raise InvalidInputError(f"monthly income must be positive, got {monthly_income}")
    return round_half_up((existing_emi + new_emi) / monthly_income * 100, 1)


def max_approved_amount(
    profile: CustomerProfile,
    tenure_months: int,
    annual_rate_percent: float = REFERENCE_ANNUAL_RATE,
    income_share: float = AFFORDABILITY_INCOME_SHARE,
) -> float:
    """
    Largest amount the customer can be granted for this tenure.

    The residual budget (income_share of income minus existing EMIs) is
    scaled by tenure and divided by the installment on one unit of
    principal. A negative budget clamps to zero; the result never exceeds
    the pre-approved limit.
    """
    installment_per_unit = compute_installment(1, annual_rate_percent, tenure_months)
    residual_budget = profile.monthly_income * income_share - profile.current_monthly_emi
    affordability_cap = max(0.0, residual_budget * tenure_months / installment_per_unit)
    limit = max(0.0, profile.pre_approved_limit)
    return round(min(limit, affordability_cap), 2)
