"""
Integration tests for POST /api/verifyResetToken
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient

from authsync.app.use_cases.password_reset import hash_reset_token
from authsync.domain.base import utcnow
from authsync.domain.entities import ResetToken


async def issue(client: AsyncClient, mailer, email="alice@example.com") -> str:
    response = await client.post("/api/sendPasswordReset", json={"email": email})
    assert response.status_code == 200
    return mailer.last_token()


@pytest.mark.asyncio
async def test_valid_token(client: AsyncClient, mailer):
    token = await issue(client, mailer)

    response = await client.post("/api/verifyResetToken", json={"token": token})

    assert response.status_code == 200
    assert response.json() == {"success": True, "email": "alice@example.com", "message": "Token is valid"}


@pytest.mark.asyncio
async def test_missing_token(client: AsyncClient):
    response = await client.post("/api/verifyResetToken", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Bad Request", "message": "Reset token is required"}


@pytest.mark.asyncio
async def test_unknown_token(client: AsyncClient):
    response = await client.post("/api/verifyResetToken", json={"token": "f" * 64})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid Token", "message": "Reset token is invalid or expired"}


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient, reset_tokens):
    plain = "e" * 64
    await reset_tokens.create(
        ResetToken(
            token_hash=hash_reset_token(plain),
            email="alice@example.com",
            subject_id="uid-alice",
            expires_at=utcnow() - timedelta(minutes=1),
        )
    )

    response = await client.post("/api/verifyResetToken", json={"token": plain})

    assert response.status_code == 400
    assert response.json() == {"error": "Expired Token", "message": "Reset token has expired"}

    again = await client.post("/api/verifyResetToken", json={"token": plain})
    assert again.json()["error"] == "Invalid Token"


@pytest.mark.asyncio
async def test_used_token(client: AsyncClient, mailer):
    token = await issue(client, mailer)
    await client.post("/api/resetPassword", json={"token": token, "newPassword": "newpass123"})

    response = await client.post("/api/verifyResetToken", json={"token": token})

    assert response.status_code == 400
    assert response.json() == {"error": "Used Token", "message": "Reset token has already been used"}
