"""Offer catalog, personalized pricing and the standalone EMI calculator"""

from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException

from loan_gateway.api.routers.schemas import EmiRequest, EmiResponse
from loan_gateway.api.dependencies import get_customer_repository, get_offer_repository
from loan_gateway.infrastructure.database.repositories import CustomerRepository, OfferRepository
from loan_gateway.domain.exceptions import ComputationDegenerateError, InvalidInputError
from loan_gateway.domain.models import LoanOffer, PersonalizedOffer
from loan_gateway.domain.offers import personalize_offers, quote_emi
from loan_gateway.utils.date_utils import utc_now_iso

router = APIRouter()


def _offer_payload(offer: LoanOffer) -> Dict[str, Any]:
    return {
        "offer_id": offer.offer_id,
        "product_name": offer.product_name,
        "loan_type": offer.loan_type,
        "interest_rate_range": list(offer.interest_rate_range),
        "min_amount": offer.min_amount,
        "max_amount": offer.max_amount,
        "tenure_options": list(offer.tenure_options),
        "processing_fee_percent": offer.processing_fee_percent,
        "eligibility_criteria": {
            "min_credit_score": offer.min_credit_score,
            "min_monthly_income": offer.min_monthly_income,
        },
        "features": list(offer.features),
    }


def _personalized_payload(personalized: PersonalizedOffer) -> Dict[str, Any]:
    payload = _offer_payload(personalized.offer)
    payload["personalized_interest_rate"] = personalized.personalized_interest_rate
    payload["eligible_amount"] = personalized.eligible_amount
    payload["processing_fee"] = personalized.processing_fee
    return payload


@router.get("")
def list_offers(offers: OfferRepository = Depends(get_offer_repository)):
    return {
        "success": True,
        "data": [_offer_payload(offer) for offer in offers.list_all()],
        "timestamp": utc_now_iso(),
    }


@router.get("/personalized/{phone}")
def get_personalized_offers(
    phone: str,
    customers: CustomerRepository = Depends(get_customer_repository),
    offers: OfferRepository = Depends(get_offer_repository),
):
    """Offers this customer qualifies for, priced for their credit score, cheapest first"""
    customer = customers.find_by_phone(phone)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    eligible = [_personalized_payload(p) for p in personalize_offers(offers.list_all(), customer)]
    return {
        "success": True,
        "customer_id": customer.customer_id,
        "eligible_offers": eligible,
        "recommended_offer": eligible[0] if eligible else None,
    }


@router.post("/calculate-emi", response_model=EmiResponse)
def calculate_emi(body: EmiRequest):
    """EMI, total interest and total payable for a principal/rate/tenure"""
    try:
        quote = quote_emi(body.principal, body.rate, body.tenure_months)
    except (InvalidInputError, ComputationDegenerateError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return EmiResponse(
        principal=quote.principal,
        monthly_interest_rate=quote.monthly_interest_rate,
        tenure_months=quote.tenure_months,
        monthly_emi=quote.monthly_emi,
        total_interest=quote.total_interest,
        total_payable=quote.total_payable,
    )
