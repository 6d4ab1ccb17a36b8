"""
Tests for the Token service.
"""

import pytest
from fastapi.testclient import TestClient

from service_tokens.app.main import create_app
from service_tokens.app.issuance.issuer import issue
from shared.config import get_config

KEY = "service-secret"


@pytest.fixture
def config():
    """Service configuration with a signing key."""
    return get_config("tokens", 8020, signing_key=KEY, env="test")


@pytest.fixture
def client(config):
    """Create test client."""
    app = create_app(config)
    return TestClient(app)


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "tokens"
    assert data["version"] == "1.0.0"


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "tokens"
    assert data["status"] == "ok"


def test_request_id_is_echoed(client):
    """Test request correlation header."""
    response = client.get("/health", headers={"x-request-id": "req-123"})
    assert response.headers["x-request-id"] == "req-123"


def test_issue_and_verify(client):
    """Test issuing a token and verifying it."""
    response = client.post("/tokens/issue", json={"payload": {"sub": "user1"}})
    assert response.status_code == 200
    data = response.json()
    assert data["algorithm"] == "HS256"

    response = client.post("/tokens/verify", json={"token": data["token"]})
    assert response.status_code == 200
    result = response.json()
    assert result["valid"] is True
    assert result["payload"] == {"sub": "user1"}
    assert result["header"] == {"alg": "HS256"}


def test_issue_with_explicit_algorithm(client):
    """Test header overrides the default algorithm."""
    response = client.post("/tokens/issue", json={"header": {"alg": "HS512", "typ": "JWT"}, "payload": "opaque"})
    assert response.status_code == 200
    assert response.json()["algorithm"] == "HS512"


def test_issue_unsupported_algorithm(client):
    """Test issuance errors map to an error response."""
    response = client.post("/tokens/issue", json={"header": {"alg": "XYZ"}, "payload": {"sub": "user1"}})
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "ISSUANCE_FAILED"
    assert data["details"] == {"cause": "UNSUPPORTED_ALGORITHM"}


def test_issue_without_configured_key():
    """Test HMAC issuance requires a configured key."""
    client = TestClient(create_app(get_config("tokens", 8020, signing_key=None, env="test")))
    response = client.post("/tokens/issue", json={"payload": {"sub": "user1"}})
    assert response.status_code == 400
    assert response.json()["details"] == {"cause": "INVALID_KEY"}


def test_issue_unsecured_follows_policy(config):
    """Test alg=none issuance requires the unsecured opt-in."""
    request = {"header": {"alg": "none"}, "payload": {"sub": "user1"}}

    strict = TestClient(create_app(config))
    response = strict.post("/tokens/issue", json=request)
    assert response.status_code == 400
    assert response.json()["details"] == {"cause": "UNSUPPORTED_ALGORITHM"}

    relaxed = TestClient(create_app(config.model_copy(update={"allow_unsecured": True})))
    response = relaxed.post("/tokens/issue", json=request)
    assert response.status_code == 200
    assert response.json()["token"].endswith(".")


def test_verify_wrong_key(client):
    """Test tokens signed with another key."""
    token = issue({"alg": "HS256"}, {"sub": "user1"}, "other-key")
    response = client.post("/tokens/verify", json={"token": token})
    assert response.status_code == 200
    result = response.json()
    assert result["valid"] is False
    assert result["code"] == "INVALID_SIGNATURE"


def test_verify_expired(client):
    """Test expired tokens."""
    token = issue({"alg": "HS256"}, {"exp": 1000}, KEY)
    response = client.post("/tokens/verify", json={"token": token})
    assert response.json()["code"] == "TOKEN_EXPIRED"

    response = client.post("/tokens/verify", json={"token": token, "validate_time_claims": False})
    assert response.json()["valid"] is True


def test_verify_unsecured_policy(config):
    """Test unsecured tokens follow the configured policy."""
    token = issue({"alg": "none"}, {"sub": "user1"}, None)

    strict = TestClient(create_app(config))
    assert strict.post("/tokens/verify", json={"token": token}).json()["valid"] is False

    relaxed = TestClient(create_app(config.model_copy(update={"allow_unsecured": True})))
    assert relaxed.post("/tokens/verify", json={"token": token}).json()["valid"] is True


def test_metrics_endpoint(client):
    """Test token metrics are exported."""
    client.post("/tokens/issue", json={"payload": {"sub": "user1"}})
    response = client.get("/metrics")
    assert response.status_code == 200
    assert 'tokens_issued_total{algorithm="HS256"} 1.0' in response.text


def test_config_from_environment(monkeypatch):
    """Test settings are read from TOKENS_ environment variables."""
    monkeypatch.setenv("TOKENS_LEEWAY_MS", "250")
    monkeypatch.setenv("TOKENS_ALLOW_UNSECURED", "true")
    monkeypatch.setenv("TOKENS_SIGNING_KEY", "from-env")

    config = get_config("tokens", 8020)

    assert config.leeway_ms == 250
    assert config.allow_unsecured is True
    assert config.signing_key.get_secret_value() == "from-env"
    assert "from-env" not in repr(config)
