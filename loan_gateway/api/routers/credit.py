"""GET /credit/{customer_id} and POST /credit/evaluate/{customer_id} - bureau report and credit decision"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from loan_gateway.api.routers.schemas import (
    EvaluationRequestBody,
    EvaluationResponse,
    EvaluationSchema,
    ScoreBreakdownSchema,
)
from loan_gateway.api.dependencies import (
    get_credit_report_repository,
    get_customer_repository,
    get_request_id,
    get_settings,
)
from loan_gateway.config import Settings
from loan_gateway.infrastructure.database.repositories import CreditReportRepository, CustomerRepository
from loan_gateway.domain.decisioning import evaluate_application
from loan_gateway.domain.exceptions import ComputationDegenerateError, InvalidInputError, NotFoundError
from loan_gateway.domain.models import EvaluationRequest
from loan_gateway.domain.scoring import score_credit_profile
from loan_gateway.infrastructure.observability.metrics import record_evaluation, score_category_counter
from loan_gateway.infrastructure.observability.logging import log_evaluation
from loan_gateway.utils.date_utils import utc_now_iso

router = APIRouter()


@router.get("/{customer_id}")
def get_credit_report(
    customer_id: str,
    customers: CustomerRepository = Depends(get_customer_repository),
    reports: CreditReportRepository = Depends(get_credit_report_repository),
):
    """
    Bureau report enriched with customer context and the score breakdown.

    A report without a matching customer is still scored, with DTI treated
    as the worst case.
    """
    report = reports.get(customer_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Credit report not found")

    customer = customers.find_by_id(customer_id)
    breakdown = score_credit_profile(report, customer)
    score_category_counter.labels(category=breakdown.category.value).inc()

    data = asdict(report)
    data["customer_details"] = {
        "name": customer.name if customer else None,
        "monthly_income": customer.monthly_income if customer else None,
        "current_emi": customer.current_monthly_emi if customer else None,
    }
    data["decision"] = ScoreBreakdownSchema.model_validate(breakdown).model_dump(exclude_none=True)
    data["report_generated"] = utc_now_iso()

    return {"success": True, "data": data}


@router.post("/evaluate/{customer_id}", response_model=EvaluationResponse, response_model_exclude_none=True)
def evaluate_credit(
    customer_id: str,
    body: EvaluationRequestBody,
    request: Request,
    customers: CustomerRepository = Depends(get_customer_repository),
    reports: CreditReportRepository = Depends(get_credit_report_repository),
    app_settings: Settings = Depends(get_settings),
):
    """
    Run the decision classifier for a loan request.

    Flow:
    1. Load the customer profile and bureau report
    2. Project DTI with the requested loan at the reference rate
    3. Classify into a tier and apply the payment-behaviour override
    4. Record metrics and return the evaluation
    """
    start_time = time.time()
    request_id = get_request_id(request)

    customer = customers.find_by_id(customer_id)
    report = reports.get(customer_id)

    try:
        decision = evaluate_application(
            EvaluationRequest(
                requested_amount=body.requested_amount,
                tenure_months=body.tenure_months,
                purpose=body.purpose,
            ),
            report,
            customer,
            annual_rate_percent=app_settings.reference_annual_rate,
            income_share=app_settings.affordability_income_share,
        )
    except NotFoundError as e:
        logging.warning(
            f"Evaluation requested without customer data: {customer_id}",
            extra={"request_id": request_id, "customer_id": customer_id},
        )
        raise HTTPException(status_code=400, detail=str(e))
    except (InvalidInputError, ComputationDegenerateError) as e:
        logging.warning(f"Invalid evaluation input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_evaluation(decision.decision.value, decision.approved_amount)
    log_evaluation(
        request_id,
        customer_id,
        decision.decision.value,
        decision.approved_amount,
        decision.projected_dti,
        duration_ms,
    )

    return EvaluationResponse(evaluation=EvaluationSchema.model_validate(decision))
