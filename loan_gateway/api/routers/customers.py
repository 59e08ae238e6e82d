"""Customer directory endpoints: listing, lookup by phone and find-or-create inquiry"""

import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from loan_gateway.api.routers.schemas import InquiryRequest, InquiryResponse
from loan_gateway.api.dependencies import (
    get_credit_report_repository,
    get_customer_repository,
    get_kyc_repository,
    get_request_id,
)
from loan_gateway.infrastructure.database.repositories import (
    CreditReportRepository,
    CustomerRepository,
    KycRepository,
)
from loan_gateway.domain.exceptions import InvalidInputError
from loan_gateway.infrastructure.observability.metrics import customer_inquiry_counter

router = APIRouter()


@router.get("")
def list_customers(customers: CustomerRepository = Depends(get_customer_repository)):
    return {"success": True, "data": [asdict(c) for c in customers.list_all()]}


@router.get("/{phone}")
def get_customer(
    phone: str,
    customers: CustomerRepository = Depends(get_customer_repository),
    kyc_records: KycRepository = Depends(get_kyc_repository),
    reports: CreditReportRepository = Depends(get_credit_report_repository),
):
    """Customer record with its KYC and bureau snapshots (empty objects when absent)"""
    customer = customers.find_by_phone(phone)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    kyc = kyc_records.get(customer.customer_id)
    report = reports.get(customer.customer_id)

    data = asdict(customer)
    data["kyc"] = asdict(kyc) if kyc else {}
    data["credit"] = asdict(report) if report else {}
    return {"success": True, "data": data}


@router.post("/inquiry", response_model=InquiryResponse, response_model_exclude_none=True)
def create_inquiry(
    body: InquiryRequest,
    request: Request,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """
    Idempotent find-or-create by phone.

    Returns the existing customer's id and limit, or the new id with the
    next onboarding step.
    """
    request_id = get_request_id(request)
    try:
        customer, created = customers.upsert(
            body.phone,
            name=body.name,
            email=body.email,
            loan_amount=body.loan_amount,
            purpose=body.purpose,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    customer_inquiry_counter.labels(result="created" if created else "existing").inc()
    logging.info(
        "Customer inquiry",
        extra={"request_id": request_id, "customer_id": customer.customer_id, "created": created},
    )

    if not created:
        return InquiryResponse(
            customer_exists=True,
            customer_id=customer.customer_id,
            pre_approved_limit=customer.pre_approved_limit,
            credit_score=customer.credit_score,
        )

    return InquiryResponse(
        customer_exists=False,
        customer_id=customer.customer_id,
        status="NEW_CUSTOMER",
        next_step="KYC_VERIFICATION",
    )
