"""Dependency injection for FastAPI endpoints"""

import random
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from loan_gateway.config import Settings
from loan_gateway.infrastructure.clients.kyc_verifier import VerificationCoordinator
from loan_gateway.infrastructure.database.repositories import (
    CreditReportRepository,
    CustomerRepository,
    KycRepository,
    OfferRepository,
)
from loan_gateway.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with"""
    return request.app.state.settings


def get_rng(request: Request) -> random.Random:
    """Shared randomness source for simulated document outcomes"""
    return request.app.state.rng


def get_kyc_verifier(request: Request) -> VerificationCoordinator:
    """Provide the app-wide verification coordinator"""
    return request.app.state.kyc_verifier


def get_customer_repository(db: Session = Depends(get_db)) -> CustomerRepository:
    return CustomerRepository(db)


def get_credit_report_repository(db: Session = Depends(get_db)) -> CreditReportRepository:
    return CreditReportRepository(db)


def get_kyc_repository(db: Session = Depends(get_db)) -> KycRepository:
    return KycRepository(db)


def get_offer_repository(db: Session = Depends(get_db)) -> OfferRepository:
    return OfferRepository(db)
