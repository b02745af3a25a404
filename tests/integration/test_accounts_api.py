"""
Integration tests for the account service endpoints.
"""

import logging
from datetime import datetime, timedelta

import pytest

pytestmark = pytest.mark.asyncio


def _envelope_without_timestamp(response) -> dict:
    data = response.json()
    data.pop("timestamp")
    return data


class TestRegister:
    """Tests for POST /register."""

    async def test_register(self, accounts_client, sample_user_data):
        response = await accounts_client.post("/register", json=sample_user_data)

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["email"] == sample_user_data["email"]
        assert data["name"] == sample_user_data["name"]
        assert "password" not in data
        assert "createdAt" in data

    async def test_register_duplicate_email(self, accounts_client, sample_user_data):
        first = await accounts_client.post("/register", json=sample_user_data)
        second = await accounts_client.post(
            "/register", json={**sample_user_data, "name": "Someone Else"}
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["code"] == "CONFLICT"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"email": "not-an-email"},
            {"email": ""},
            {"password": ""},
            {"name": ""},
            {"password": "x" * 73},
        ],
        ids=["malformed-email", "empty-email", "empty-password", "empty-name", "long-password"],
    )
    async def test_register_invalid_input(self, accounts_client, sample_user_data, overrides):
        response = await accounts_client.post("/register", json={**sample_user_data, **overrides})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    @pytest.mark.parametrize("missing", ["email", "password", "name"])
    async def test_register_missing_field(self, accounts_client, sample_user_data, missing):
        payload = {k: v for k, v in sample_user_data.items() if k != missing}

        response = await accounts_client.post("/register", json=payload)

        assert response.status_code == 400

    async def test_validation_errors_do_not_echo_password(self, accounts_client, sample_user_data):
        response = await accounts_client.post(
            "/register", json={**sample_user_data, "email": "broken"}
        )

        assert sample_user_data["password"] not in response.text


class TestLogin:
    """Tests for POST /login."""

    async def test_login_success(self, accounts_client, sample_user_data):
        await accounts_client.post("/register", json=sample_user_data)

        response = await accounts_client.post(
            "/login",
            json={"email": sample_user_data["email"], "password": sample_user_data["password"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Connexion réussie"
        assert data["user"]["email"] == sample_user_data["email"]
        assert "password" not in data["user"]

    async def test_wrong_password_and_unknown_email_look_the_same(
        self, accounts_client, sample_user_data
    ):
        await accounts_client.post("/register", json=sample_user_data)

        wrong_password = await accounts_client.post(
            "/login", json={"email": sample_user_data["email"], "password": "wrong"}
        )
        unknown_email = await accounts_client.post(
            "/login", json={"email": "nobody@example.com", "password": "wrong"}
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert _envelope_without_timestamp(wrong_password) == _envelope_without_timestamp(unknown_email)
        assert wrong_password.json()["code"] == "INVALID_CREDENTIALS"

    async def test_login_with_mixed_case_domain(self, accounts_client, sample_user_data):
        """The address typed at registration logs in when typed the same way again."""
        payload = {**sample_user_data, "email": "Alice@Example.COM"}
        registered = await accounts_client.post("/register", json=payload)

        response = await accounts_client.post(
            "/login", json={"email": "Alice@Example.COM", "password": payload["password"]}
        )

        assert registered.status_code == 201
        assert response.status_code == 200
        assert response.json()["user"]["id"] == registered.json()["id"]

    async def test_login_with_non_email_string_is_rejected(self, accounts_client, sample_user_data):
        await accounts_client.post("/register", json=sample_user_data)

        response = await accounts_client.post(
            "/login", json={"email": "not an email", "password": sample_user_data["password"]}
        )

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "payload",
        [{"email": "alice@example.com"}, {"password": "secret"}, {"email": "", "password": "secret"}],
    )
    async def test_login_missing_fields(self, accounts_client, payload):
        response = await accounts_client.post("/login", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"


class TestGetUser:
    """Tests for GET /users/{id}."""

    async def test_get_user(self, accounts_client, sample_user_data):
        created = (await accounts_client.post("/register", json=sample_user_data)).json()

        response = await accounts_client.get(f"/users/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == sample_user_data["name"]
        assert "password" not in data

    async def test_get_unknown_user(self, accounts_client):
        response = await accounts_client.get("/users/99999")

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    async def test_get_non_numeric_id(self, accounts_client):
        response = await accounts_client.get("/users/abc")

        assert response.status_code == 400

    async def test_health_check(self, accounts_client):
        response = await accounts_client.get("/health")

        assert response.status_code == 200
        assert response.json()["service"] == "accounts"


class TestAccountsPlumbing:
    """Timestamps and request logging."""

    async def test_timestamps_carry_utc_offset(self, accounts_client, sample_user_data):
        data = (await accounts_client.post("/register", json=sample_user_data)).json()

        for field in ("createdAt", "updatedAt"):
            parsed = datetime.fromisoformat(data[field].replace("Z", "+00:00"))
            assert parsed.utcoffset() == timedelta(0)

    async def test_request_body_is_logged_with_password_redacted(
        self, accounts_client, sample_user_data, caplog
    ):
        caplog.set_level(logging.INFO, logger="bookstore.api")

        response = await accounts_client.post("/register", json=sample_user_data)

        assert response.status_code == 201
        records = [
            r for r in caplog.records
            if r.name == "bookstore.api" and r.getMessage().startswith("POST /register")
        ]
        assert records
        body = records[0].request_data["body"]
        assert "[REDACTED]" in body
        assert sample_user_data["email"] in body
        for record in caplog.records:
            assert sample_user_data["password"] not in record.getMessage()
            assert sample_user_data["password"] not in str(getattr(record, "request_data", ""))
