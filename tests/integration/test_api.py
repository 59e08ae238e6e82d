"""Integration tests for API endpoints"""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["timestamp"]
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/credit/evaluate/C001", json={"requested_amount": 300000, "tenure_months": 36})
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "loan_gateway_evaluation_total" in response.text


# --- credit ---


def test_get_credit_report(client: TestClient):
    response = client.get("/credit/C001")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["cibil_score"] == 780
    assert data["customer_details"] == {"name": "Rahul Sharma", "monthly_income": 100000, "current_emi": 10000}
    assert data["decision"]["category"] == "EXCELLENT"
    assert data["decision"]["score_percent"] == 92
    assert data["decision"]["recommendation"]["status"] == "FULL_APPROVAL"
    assert set(data["decision"]["factors"]) == {
        "score_weight",
        "dti_weight",
        "utilization_weight",
        "inquiry_weight",
        "history_weight",
    }
    assert data["report_generated"]


def test_get_credit_report_not_found(client: TestClient):
    response = client.get("/credit/C008")  # customer exists, no bureau report
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Credit report not found"}


def test_evaluate_credit(client: TestClient):
    response = client.post(
        "/credit/evaluate/C001",
        json={"requested_amount": 300000, "tenure_months": 36, "purpose": "Home renovation"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    evaluation = body["evaluation"]
    assert evaluation["decision"] == "APPROVED"
    assert evaluation["approved_amount"] == 300000
    assert evaluation["current_dti"] == 10.0
    assert evaluation["projected_dti"] == 19.8
    assert evaluation["max_approved_amount"] == 500000
    assert evaluation["purpose"] == "Home renovation"
    assert evaluation["timestamp"]
    assert "alternatives" not in evaluation


def test_evaluate_credit_missing_customer_data(client: TestClient):
    response = client.post("/credit/evaluate/C008", json={"requested_amount": 100000, "tenure_months": 12})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Customer data not found"}

    response = client.post("/credit/evaluate/C999", json={"requested_amount": 100000, "tenure_months": 12})
    assert response.status_code == 400


def test_evaluate_credit_invalid_body(client: TestClient):
    for body in (
        {"tenure_months": 12},
        {"requested_amount": 0, "tenure_months": 12},
        {"requested_amount": 100000, "tenure_months": 0},
        {"requested_amount": 100000, "tenure_months": -12},
    ):
        response = client.post("/credit/evaluate/C001", json=body)
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["details"]


# --- customers ---


def test_list_customers(client: TestClient):
    response = client.get("/customers")
    assert response.status_code == 200
    ids = [c["customer_id"] for c in response.json()["data"]]
    assert ids[:3] == ["C001", "C002", "C003"]


def test_get_customer_by_phone(client: TestClient):
    response = client.get("/customers/+919876543210")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["customer_id"] == "C001"
    assert data["kyc"]["pan_number"] == "ABCPS1234K"
    assert data["credit"]["cibil_score"] == 780


def test_get_customer_without_kyc_or_report(client: TestClient):
    data = client.get("/customers/9876543217").json()["data"]
    assert data["customer_id"] == "C008"
    assert data["kyc"] == {}
    assert data["credit"] == {}


def test_get_customer_not_found(client: TestClient):
    response = client.get("/customers/9000000000")
    assert response.status_code == 404
    assert response.json()["error"] == "Customer not found"


def test_inquiry_existing_customer(client: TestClient):
    response = client.post("/customers/inquiry", json={"phone": "+919876543210"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "customer_exists": True,
        "customer_id": "C001",
        "pre_approved_limit": 500000,
        "credit_score": 780,
    }


def test_inquiry_creates_customer_once(client: TestClient):
    payload = {"phone": "+91 9123456789", "name": "Meera Joshi", "loan_amount": 200000}

    first = client.post("/customers/inquiry", json=payload).json()
    assert first == {
        "success": True,
        "customer_exists": False,
        "customer_id": "C009",
        "status": "NEW_CUSTOMER",
        "next_step": "KYC_VERIFICATION",
    }

    second = client.post("/customers/inquiry", json={"phone": "9123456789"}).json()
    assert second["customer_exists"] is True
    assert second["customer_id"] == "C009"

    created = client.get("/customers/9123456789").json()["data"]
    assert created["name"] == "Meera Joshi"
    assert created["email"] == "9123456789@example.com"
    assert created["status"] == "NEW_INQUIRY"


def test_inquiry_requires_phone(client: TestClient):
    response = client.post("/customers/inquiry", json={"name": "No Phone"})
    assert response.status_code == 400

    response = client.post("/customers/inquiry", json={"phone": "+91"})
    assert response.status_code == 400
    assert response.json()["error"] == "phone is required"


# --- kyc ---


def test_get_kyc(client: TestClient):
    response = client.get("/kyc/C002")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["completion_score"] == 70
    assert data["status"] == "PENDING"
    assert data["documents_required"] == ["Income Proof (Salary Slip/ITR)", "Bank Statement (3 months)"]


def test_get_kyc_not_found(client: TestClient):
    response = client.get("/kyc/C008")
    assert response.status_code == 404
    assert response.json()["error"] == "KYC record not found"


def test_submit_document(client: TestClient):
    response = client.post(
        "/kyc/submit/C002",
        json={"document_type": "Bank Statement", "file_name": "statement.pdf"},
    )

    assert response.status_code == 200
    body = response.json()
    document = body["document_uploaded"]
    assert document["type"] == "Bank Statement"
    assert document["status"] == "PENDING_VERIFICATION"
    assert 100 <= document["size"] <= 5099

    expected_score = 80 if document["verified"] else 70
    assert body["updated_kyc_score"] == expected_score

    kyc = client.get("/kyc/C002").json()["data"]
    assert kyc["completion_score"] == expected_score
    assert len(kyc["documents"]) == 1


def test_submit_document_creates_record(client: TestClient):
    response = client.post("/kyc/submit/C008", json={"document_type": "pan", "file_name": "pan.jpg"})
    assert response.status_code == 200
    assert response.json()["next_steps"]

    assert client.get("/kyc/C008").status_code == 200


def test_submit_document_requires_type(client: TestClient):
    response = client.post("/kyc/submit/C002", json={"file_name": "x.pdf"})
    assert response.status_code == 400


def test_verify_kyc(client: TestClient):
    response = client.post("/kyc/verify/C001")

    assert response.status_code == 200
    result = response.json()["data"]
    assert result["customer_id"] == "C001"
    assert result["overall_status"] in ("APPROVED", "REVIEW_REQUIRED")
    assert 80 <= result["confidence_score"] <= 99

    kyc = client.get("/kyc/C001").json()["data"]
    assert kyc["verification_status"] == result["overall_status"]
    assert kyc["last_verified"] == result["verification_timestamp"]
    assert kyc["kyc_score"] == result["confidence_score"]


def test_verify_kyc_not_found(client: TestClient):
    response = client.post("/kyc/verify/C008")
    assert response.status_code == 404


# --- offers ---


def test_list_offers(client: TestClient):
    response = client.get("/offers")

    assert response.status_code == 200
    body = response.json()
    assert len(body["data"]) == 4
    assert body["data"][0]["eligibility_criteria"] == {"min_credit_score": 750, "min_monthly_income": 50000}
    assert body["timestamp"]


def test_personalized_offers(client: TestClient):
    response = client.get("/offers/personalized/9876543210")

    assert response.status_code == 200
    body = response.json()
    assert body["customer_id"] == "C001"
    rates = [o["personalized_interest_rate"] for o in body["eligible_offers"]]
    assert rates == sorted(rates)
    recommended = body["recommended_offer"]
    assert recommended["offer_id"] == "OFF001"
    assert recommended["personalized_interest_rate"] == 10.0
    assert recommended["eligible_amount"] == 500000
    assert recommended["processing_fee"] == 7500


def test_personalized_offers_none_eligible(client: TestClient):
    body = client.get("/offers/personalized/9876543212").json()
    assert body["eligible_offers"] == []
    assert body["recommended_offer"] is None


def test_personalized_offers_unknown_customer(client: TestClient):
    assert client.get("/offers/personalized/9000000000").status_code == 404


def test_calculate_emi(client: TestClient):
    response = client.post("/offers/calculate-emi", json={"principal": 100000, "rate": 12, "tenure_months": 12})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "principal": 100000,
        "monthly_interest_rate": 1.0,
        "tenure_months": 12,
        "monthly_emi": 8885,
        "total_interest": 6619,
        "total_payable": 106619,
    }


def test_calculate_emi_invalid(client: TestClient):
    response = client.post("/offers/calculate-emi", json={"principal": 0, "rate": 12, "tenure_months": 12})
    assert response.status_code == 400
    response = client.post("/offers/calculate-emi", json={"principal": 1000, "rate": -1, "tenure_months": 12})
    assert response.status_code == 400


def test_calculate_emi_long_tenure_and_extreme_rate(client: TestClient):
    response = client.post("/offers/calculate-emi", json={"principal": 100000, "rate": 10.5, "tenure_months": 100000})
    assert response.status_code == 200
    assert response.json()["monthly_emi"] == 875

    response = client.post("/offers/calculate-emi", json={"principal": 100000, "rate": 100000, "tenure_months": 360})
    assert response.status_code == 200
    assert response.json()["monthly_emi"] == 8333333


def test_calculate_emi_unrepresentable_installment(client: TestClient):
    response = client.post("/offers/calculate-emi", json={"principal": 1.7e308, "rate": 2400, "tenure_months": 12})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_evaluate_credit_very_long_tenure(client: TestClient):
    response = client.post("/credit/evaluate/C001", json={"requested_amount": 300000, "tenure_months": 100000})

    assert response.status_code == 200
    evaluation = response.json()["evaluation"]
    assert evaluation["decision"] == "APPROVED"
    assert evaluation["max_approved_amount"] == 500000
