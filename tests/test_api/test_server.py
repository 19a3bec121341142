"""test_server.py
Test the FastAPI routes with dependency overrides.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

import api.server as server
from resume_builder.auth.account_service import AccountService
from resume_builder.config import BUILDER_DEFAULTS
from resume_builder.auth.token_service import TokenService
from resume_builder.exceptions import (
    AuthConfigError,
    DeliveryError,
    MissingRequiredFieldError,
    SuggestionRequestError,
    UpstreamGenerationError,
)
from resume_builder.layout.layout_engine import LayoutEngine
from resume_builder.suggestions.suggestion_service import SuggestionService

SECRET = "test-secret"


@pytest.fixture
def token_service():
    return TokenService(secret=SECRET)


@pytest.fixture
def engine_spy():
    """Wraps a real LayoutEngine so calls can be asserted on."""
    real_engine = LayoutEngine()
    spy = MagicMock(spec=LayoutEngine)
    spy.render.side_effect = real_engine.render
    return spy


@pytest.fixture
def suggestion_service():
    return MagicMock(spec=SuggestionService)


@pytest.fixture
def client(monkeypatch, tmp_path, token_service, engine_spy, suggestion_service):
    """TestClient running in an empty working directory with test dependencies."""
    monkeypatch.chdir(tmp_path)
    account_service = AccountService(token_service)
    server.app.dependency_overrides = {
        server.get_token_service: lambda: token_service,
        server.get_account_service: lambda: account_service,
        server.get_layout_engine: lambda: engine_spy,
        server.get_suggestion_service: lambda: suggestion_service,
    }
    yield TestClient(server.app)
    server.app.dependency_overrides = {}


@pytest.fixture
def auth_headers(token_service):
    return {"Authorization": f"Bearer {token_service.issue(1, 'jane@x.com')}"}


def temp_dir_is_empty(root):
    temp_dir = root / "temp_files"
    return not temp_dir.exists() or list(temp_dir.iterdir()) == []


# ----------------------
# /signup and /login
# ----------------------
class TestAccountRoutes:
    def test_signup_returns_token(self, client, token_service):
        response = client.post("/signup", json={"name": "Jane Doe", "email": "jane@x.com", "password": "pw"})
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Jane Doe"
        assert token_service.verify(body["token"])["email"] == "jane@x.com"

    def test_duplicate_signup_is_conflict(self, client):
        payload = {"name": "Jane Doe", "email": "jane@x.com", "password": "pw"}
        client.post("/signup", json=payload)
        response = client.post("/signup", json=payload)
        assert response.status_code == 409
        assert response.json() == {"message": "User already exists."}

    def test_login_success(self, client):
        client.post("/signup", json={"name": "Jane Doe", "email": "jane@x.com", "password": "pw"})
        response = client.post("/login", json={"email": "jane@x.com", "password": "pw"})
        assert response.status_code == 200
        assert response.json()["name"] == "Jane Doe"

    def test_login_unknown_user(self, client):
        response = client.post("/login", json={"email": "nobody@x.com", "password": "pw"})
        assert response.status_code == 404
        assert response.json() == {"message": "User doesn't exist."}

    def test_login_wrong_password(self, client):
        client.post("/signup", json={"name": "Jane Doe", "email": "jane@x.com", "password": "pw"})
        response = client.post("/login", json={"email": "jane@x.com", "password": "nope"})
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email or password."}

    def test_signup_missing_field_rejected(self, client):
        response = client.post("/signup", json={"email": "jane@x.com", "password": "pw"})
        assert response.status_code == 422


# ----------------------
# /submit
# ----------------------
class TestSubmitRoute:
    def test_missing_token_is_401_and_nothing_rendered(self, client, engine_spy, tmp_path, scenario_a_payload):
        response = client.post("/submit", json=scenario_a_payload)
        assert response.status_code == 401
        engine_spy.render.assert_not_called()
        assert not (tmp_path / "temp_files").exists()

    def test_invalid_token_is_403(self, client, engine_spy, scenario_a_payload):
        response = client.post(
            "/submit",
            json=scenario_a_payload,
            headers={"Authorization": "Bearer not-a-real-token"},
        )
        assert response.status_code == 403
        engine_spy.render.assert_not_called()

    def test_token_signed_with_other_secret_is_403(self, client, scenario_a_payload):
        other = TokenService(secret="other-secret").issue(1, "jane@x.com")
        response = client.post("/submit", json=scenario_a_payload, headers={"Authorization": f"Bearer {other}"})
        assert response.status_code == 403

    def test_success_returns_pdf_attachment(self, client, auth_headers, engine_spy, tmp_path, scenario_a_payload):
        response = client.post("/submit", json=scenario_a_payload, headers=auth_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="resume.pdf"'
        assert response.content.startswith(b"%PDF-")
        engine_spy.render.assert_called_once()
        assert temp_dir_is_empty(tmp_path)

    def test_validation_failure_is_422(self, client, auth_headers, engine_spy, scenario_a_payload):
        scenario_a_payload["email"] = ""
        scenario_a_payload["technicalSkills"]["languages"] = ""
        response = client.post("/submit", json=scenario_a_payload, headers=auth_headers)
        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"email", "technicalSkills"}
        engine_spy.render.assert_not_called()

    def test_render_error_is_400(self, client, auth_headers, engine_spy, scenario_a_payload):
        engine_spy.render.side_effect = MissingRequiredFieldError("name")
        response = client.post("/submit", json=scenario_a_payload, headers=auth_headers)
        assert response.status_code == 400
        assert "missing required field" in response.json()["message"]

    def test_unexpected_render_failure_is_500(self, client, auth_headers, engine_spy, scenario_a_payload):
        engine_spy.render.side_effect = RuntimeError("font missing")
        response = client.post("/submit", json=scenario_a_payload, headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"message": "Server Error"}

    def test_delivery_failure_is_500_and_cleans_up(
        self, client, auth_headers, monkeypatch, tmp_path, scenario_a_payload
    ):
        def failing_read(path):
            raise DeliveryError(str(path), "disk unplugged")

        monkeypatch.setattr(server, "read_for_delivery", failing_read)
        response = client.post("/submit", json=scenario_a_payload, headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"message": "Error downloading File"}
        assert temp_dir_is_empty(tmp_path)

    def test_uncreatable_temp_dir_is_structured_500(
        self, client, auth_headers, tmp_path, scenario_a_payload
    ):
        # A plain file where the temp directory should be
        (tmp_path / BUILDER_DEFAULTS.TEMP_DIR).write_text("not a directory")
        response = client.post("/submit", json=scenario_a_payload, headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"message": "Error downloading File"}

    def test_missing_secret_is_500(self, client, scenario_a_payload):
        def broken_token_service():
            raise AuthConfigError("JWT_SECRET")

        server.app.dependency_overrides[server.get_token_service] = broken_token_service
        response = client.post(
            "/submit", json=scenario_a_payload, headers={"Authorization": "Bearer anything"}
        )
        assert response.status_code == 500


# ----------------------
# /suggest
# ----------------------
class TestSuggestRoute:
    def test_requires_token(self, client, suggestion_service):
        response = client.post("/suggest", json={"prompt": "x", "section": "experience"})
        assert response.status_code == 401
        suggestion_service.suggest.assert_not_called()

    def test_success(self, client, auth_headers, suggestion_service):
        suggestion_service.suggest.return_value = {"success": True, "data": ["Built X"]}
        response = client.post(
            "/suggest",
            json={"prompt": "engineer", "section": "experience", "context": {"company": "Acme"}},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": ["Built X"]}
        suggestion_service.suggest.assert_called_once_with(
            prompt="engineer", section="experience", context={"company": "Acme"}
        )

    def test_bad_request_is_400(self, client, auth_headers, suggestion_service):
        suggestion_service.suggest.side_effect = SuggestionRequestError("Unsupported section `x`.")
        response = client.post("/suggest", json={"prompt": "p", "section": "x"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Unsupported section `x`."}

    def test_upstream_failure_is_502(self, client, auth_headers, suggestion_service):
        suggestion_service.suggest.side_effect = UpstreamGenerationError(section="skills")
        response = client.post("/suggest", json={"prompt": "p", "section": "skills"}, headers=auth_headers)
        assert response.status_code == 502
        assert response.json() == {"success": False, "message": "Error generating suggestions."}
