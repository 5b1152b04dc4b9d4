"""
Tests for the main application endpoints.
"""


def test_root_endpoint(client):
    """
    Test the root endpoint returns a welcome message.
    """
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert data["version"] == "1.0.0"


def test_health_check(client):
    """
    Test the health check endpoint returns a healthy status.
    """
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_responses_carry_request_id(client):
    """
    Test the request logging middleware tags every response.
    """
    response = client.get("/")
    assert response.headers["X-Request-ID"]
    assert float(response.headers["X-Process-Time"]) >= 0


def test_validation_errors_do_not_echo_passwords(client):
    """
    Test validation failures return 422 without the submitted values.
    """
    response = client.post("/api/v1/auth/signup", json={
        "clinic_name": "Demo Clinic",
        "owner_email": "owner@x.com",
        "owner_name": "Owner",
        "password": "short7!",
    })
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation error"
    assert "short7!" not in response.text
    assert any("password" in error["loc"] for error in body["errors"])
