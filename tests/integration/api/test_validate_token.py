"""
Integration tests for POST /api/validateToken
"""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_well_formed_token(client: AsyncClient, test_data):
    response = await client.post("/api/validateToken", json={"customToken": test_data.get("sample_custom_token")})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Token format appears valid",
        "note": "Actual validation should be done by Firebase Auth on client side",
    }


@pytest.mark.asyncio
async def test_needs_no_authentication(client: AsyncClient, test_data):
    response = await client.post(
        "/api/validateToken",
        json={"customToken": test_data.get("sample_custom_token")},
        headers={"Authorization": "Bearer forged-token"},
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_missing_token(client: AsyncClient):
    response = await client.post("/api/validateToken", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Bad Request", "message": "Custom token is required"}


@pytest.mark.asyncio
async def test_not_a_jwt(client: AsyncClient):
    response = await client.post("/api/validateToken", json={"customToken": "definitely-not-a-jwt"})

    assert response.status_code == 400
    assert response.json() == {"error": "Bad Request", "message": "Custom token format is invalid"}
