"""Pytest fixtures for testing"""

import pytest
from typing import Generator, Tuple
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from loan_gateway.api.main import create_app
from loan_gateway.config import Settings
from loan_gateway.domain.models import CreditReport, CustomerProfile
from loan_gateway.infrastructure.database.fixtures import seed_database
from loan_gateway.infrastructure.database.models import Base
from loan_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database, seed the demo records and open a session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed_database(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_settings() -> Settings:
    """Deterministic, instant KYC verification"""
    return Settings(
        seed_fixtures=False,
        random_seed=1234,
        kyc_verification_min_delay_seconds=0.0,
        kyc_verification_max_delay_seconds=0.0,
        kyc_verification_timeout_seconds=5.0,
        kyc_verification_poll_interval_seconds=0.01,
    )


@pytest.fixture
def client(db: Session, test_settings: Settings) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(test_settings)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def strong_applicant() -> Tuple[CustomerProfile, CreditReport]:
    """Salaried customer with a clean bureau file and a 10% existing DTI"""
    profile = CustomerProfile(
        customer_id="C100",
        name="Test Applicant",
        phone="9000000000",
        monthly_income=100000,
        current_monthly_emi=10000,
        pre_approved_limit=500000,
        credit_score=780,
    )
    report = CreditReport(
        customer_id="C100",
        cibil_score=780,
        utilization_ratio=20,
        inquiries_last_6m=1,
        payment_history=("ontime",) * 12,
        defaults_count=0,
    )
    return profile, report
