"""Static demo records loaded into a fresh database"""

import logging
from sqlalchemy.orm import Session
from loan_gateway.infrastructure.database import models as orm

logger = logging.getLogger(__name__)

ON_TIME_YEAR = ["ontime"] * 12

CUSTOMERS = [
    {
        "customer_id": "C001", "name": "Rahul Sharma", "phone": "9876543210",
        "email": "rahul.sharma@example.com", "city": "Mumbai", "employment_type": "Salaried",
        "monthly_income": 100000, "current_monthly_emi": 10000, "pre_approved_limit": 500000,
        "credit_score": 780, "status": "ACTIVE",
    },
    {
        "customer_id": "C002", "name": "Priya Patel", "phone": "9876543211",
        "email": "priya.patel@example.com", "city": "Ahmedabad", "employment_type": "Salaried",
        "monthly_income": 100000, "current_monthly_emi": 10000, "pre_approved_limit": 500000,
        "credit_score": 790, "status": "ACTIVE",
    },
    {
        "customer_id": "C003", "name": "Amit Kumar", "phone": "9876543212",
        "email": "amit.kumar@example.com", "city": "Patna", "employment_type": "Self-Employed",
        "monthly_income": 50000, "current_monthly_emi": 30000, "pre_approved_limit": 100000,
        "credit_score": 600, "status": "ACTIVE",
    },
    {
        "customer_id": "C004", "name": "Sneha Reddy", "phone": "9876543213",
        "email": "sneha.reddy@example.com", "city": "Hyderabad", "employment_type": "Salaried",
        "monthly_income": 75000, "current_monthly_emi": 15000, "pre_approved_limit": 400000,
        "credit_score": 720, "status": "ACTIVE",
    },
    {
        "customer_id": "C005", "name": "Vikram Singh", "phone": "9876543214",
        "email": "vikram.singh@example.com", "city": "Jaipur", "employment_type": "Self-Employed",
        "monthly_income": 60000, "current_monthly_emi": 12000, "pre_approved_limit": 250000,
        "credit_score": 670, "status": "ACTIVE",
    },
    {
        "customer_id": "C006", "name": "Ananya Iyer", "phone": "9876543215",
        "email": "ananya.iyer@example.com", "city": "Chennai", "employment_type": "Salaried",
        "monthly_income": 120000, "current_monthly_emi": 0, "pre_approved_limit": 800000,
        "credit_score": 810, "status": "ACTIVE",
    },
    {
        "customer_id": "C007", "name": "Rohan Mehta", "phone": "9876543216",
        "email": "rohan.mehta@example.com", "city": "Pune", "employment_type": "Salaried",
        "monthly_income": 45000, "current_monthly_emi": 25000, "pre_approved_limit": 150000,
        "credit_score": 700, "status": "ACTIVE",
    },
    {
        "customer_id": "C008", "name": "Kavya Nair", "phone": "9876543217",
        "email": "kavya.nair@example.com", "city": "Kochi", "employment_type": "Salaried",
        "monthly_income": 85000, "current_monthly_emi": 20000, "pre_approved_limit": 350000,
        "credit_score": 755, "status": "ACTIVE",
    },
]

# C008 has no bureau report on file
CREDIT_REPORTS = [
    {"customer_id": "C001", "cibil_score": 780, "utilization_ratio": 20, "inquiries_last_6m": 1,
     "payment_history": ON_TIME_YEAR, "defaults_count": 0, "active_loans": 1, "credit_age_months": 72},
    {"customer_id": "C002", "cibil_score": 790, "utilization_ratio": 25, "inquiries_last_6m": 2,
     "payment_history": ["ontime"] * 9 + ["delay"] + ["ontime"] * 2, "defaults_count": 0,
     "active_loans": 1, "credit_age_months": 60},
    {"customer_id": "C003", "cibil_score": 600, "utilization_ratio": 85, "inquiries_last_6m": 5,
     "payment_history": ["ontime", "delay", "delay", "ontime", "delay", "ontime"], "defaults_count": 2,
     "active_loans": 4, "credit_age_months": 30},
    {"customer_id": "C004", "cibil_score": 720, "utilization_ratio": 40, "inquiries_last_6m": 2,
     "payment_history": ON_TIME_YEAR, "defaults_count": 0, "active_loans": 2, "credit_age_months": 48},
    {"customer_id": "C005", "cibil_score": 670, "utilization_ratio": 60, "inquiries_last_6m": 3,
     "payment_history": ["ontime"] * 10 + ["delay", "ontime"], "defaults_count": 1,
     "active_loans": 2, "credit_age_months": 40},
    {"customer_id": "C006", "cibil_score": 810, "utilization_ratio": 10, "inquiries_last_6m": 6,
     "payment_history": ON_TIME_YEAR, "defaults_count": 0, "active_loans": 0, "credit_age_months": 96},
    {"customer_id": "C007", "cibil_score": 700, "utilization_ratio": 55, "inquiries_last_6m": 3,
     "payment_history": ON_TIME_YEAR, "defaults_count": 0, "active_loans": 3, "credit_age_months": 36},
]

KYC_RECORDS = [
    {"customer_id": "C001", "aadhaar_number": "XXXX-XXXX-1234", "pan_number": "ABCPS1234K",
     "address_proof": "Utility Bill", "income_proof": "Salary Slip", "bank_statement": "Uploaded",
     "kyc_score": 100, "verification_status": "APPROVED"},
    {"customer_id": "C002", "aadhaar_number": "XXXX-XXXX-2345", "pan_number": "BCDPP2345L",
     "address_proof": "Rental Agreement", "income_proof": "Pending", "bank_statement": "Not uploaded",
     "kyc_score": 70, "verification_status": "PENDING"},
    {"customer_id": "C003", "aadhaar_number": "XXXX-XXXX-3456", "pan_number": None,
     "address_proof": None, "income_proof": "Pending", "bank_statement": "Not uploaded",
     "kyc_score": 25, "verification_status": "NOT_STARTED"},
    {"customer_id": "C004", "aadhaar_number": "XXXX-XXXX-4567", "pan_number": "DEFPR4567N",
     "address_proof": "Passport", "income_proof": "ITR", "bank_statement": "Not uploaded",
     "kyc_score": 90, "verification_status": "APPROVED"},
    {"customer_id": "C005", "aadhaar_number": "XXXX-XXXX-5678", "pan_number": "EFGPS5678P",
     "address_proof": None, "income_proof": "ITR", "bank_statement": "Not uploaded",
     "kyc_score": 70, "verification_status": "PENDING"},
    {"customer_id": "C006", "aadhaar_number": "XXXX-XXXX-6789", "pan_number": "FGHPI6789Q",
     "address_proof": "Utility Bill", "income_proof": "Salary Slip", "bank_statement": "Uploaded",
     "kyc_score": 100, "verification_status": "APPROVED"},
    {"customer_id": "C007", "aadhaar_number": "XXXX-XXXX-7890", "pan_number": "GHIPM7890R",
     "address_proof": None, "income_proof": "Pending", "bank_statement": "Not uploaded",
     "kyc_score": 50, "verification_status": "PENDING"},
]

LOAN_OFFERS = [
    {"offer_id": "OFF001", "product_name": "Personal Loan Prime", "loan_type": "PERSONAL",
     "interest_rate_min": 10.5, "interest_rate_max": 13.0, "min_amount": 50000, "max_amount": 2500000,
     "tenure_options": [12, 24, 36, 48, 60], "processing_fee_percent": 1.5,
     "min_credit_score": 750, "min_monthly_income": 50000,
     "features": ["Instant disbursal", "No foreclosure charges after 12 months"]},
    {"offer_id": "OFF002", "product_name": "Personal Loan Standard", "loan_type": "PERSONAL",
     "interest_rate_min": 12.0, "interest_rate_max": 16.0, "min_amount": 25000, "max_amount": 1000000,
     "tenure_options": [12, 24, 36, 48], "processing_fee_percent": 2.0,
     "min_credit_score": 700, "min_monthly_income": 30000,
     "features": ["Minimal documentation"]},
    {"offer_id": "OFF003", "product_name": "Quick Cash Loan", "loan_type": "PERSONAL",
     "interest_rate_min": 14.0, "interest_rate_max": 18.0, "min_amount": 10000, "max_amount": 300000,
     "tenure_options": [6, 12, 24], "processing_fee_percent": 2.5,
     "min_credit_score": 650, "min_monthly_income": 20000,
     "features": ["Disbursal within 24 hours"]},
    {"offer_id": "OFF004", "product_name": "Home Renovation Loan", "loan_type": "HOME_IMPROVEMENT",
     "interest_rate_min": 11.0, "interest_rate_max": 14.0, "min_amount": 100000, "max_amount": 1500000,
     "tenure_options": [24, 36, 48, 60, 84], "processing_fee_percent": 1.0,
     "min_credit_score": 720, "min_monthly_income": 40000,
     "features": ["Longer tenures", "Top-up eligible"]},
]


def seed_database(db: Session) -> bool:
    """Load the demo records into an empty database. Returns False if data already exists."""
    if db.query(orm.Customer).first() is not None:
        return False

    db.add_all(orm.Customer(**customer) for customer in CUSTOMERS)
    db.add_all(orm.CreditReport(**report) for report in CREDIT_REPORTS)
    db.add_all(orm.KycRecord(documents=[], **record) for record in KYC_RECORDS)
    db.add_all(
        orm.LoanOffer(display_order=position, **offer) for position, offer in enumerate(LOAN_OFFERS)
    )
    db.commit()

    logger.info(
        "Seeded fixtures",
        extra={"customers": len(CUSTOMERS), "credit_reports": len(CREDIT_REPORTS), "offers": len(LOAN_OFFERS)},
    )
    return True
