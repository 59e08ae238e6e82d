"""Prometheus metrics for decision mix, score distribution, KYC outcomes and inquiries"""

from typing import Optional
from prometheus_client import Counter, Histogram

# Decision metrics
evaluation_counter = Counter(
    "loan_gateway_evaluation_total",
    "Credit evaluations by decision tier",
    ["decision"],  # APPROVED | APPROVED_CONDITIONAL | MANUAL_REVIEW | DECLINED
)

approved_amount_histogram = Histogram(
    "loan_gateway_approved_amount",
    "Approved loan amounts",
    buckets=[50_000, 100_000, 250_000, 500_000, 1_000_000, 2_500_000],
)

score_category_counter = Counter(
    "loan_gateway_score_category_total",
    "Credit report score categories served",
    ["category"],
)

# KYC metrics
kyc_verification_counter = Counter(
    "loan_gateway_kyc_verification_total",
    "Simulated KYC verifications by outcome",
    ["outcome"],  # APPROVED | REVIEW_REQUIRED | timeout | cancelled
)

kyc_document_counter = Counter(
    "loan_gateway_kyc_document_total",
    "KYC document uploads",
    ["verified"],
)

# Customer directory
customer_inquiry_counter = Counter(
    "loan_gateway_customer_inquiry_total",
    "Customer inquiries",
    ["result"],  # existing | created
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(decision: str, approved_amount: Optional[float]) -> None:
    """Record decision metrics for monitoring the approval mix"""
    evaluation_counter.labels(decision=decision).inc()
    if approved_amount:
        approved_amount_histogram.observe(approved_amount)
