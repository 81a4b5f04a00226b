"""
Unit tests for account use cases: custom token minting, profile access and
custom token format checks.
"""
from datetime import datetime, UTC

import pytest

from authsync.app.services.identity_provider import (
    IdentityProviderError,
    ProviderTimeoutError,
    UserNotFoundError,
)
from authsync.app.use_cases.accounts import (
    GenerateCustomTokenUseCase,
    GetUserProfileUseCase,
    ValidateCustomTokenUseCase,
)
from authsync.domain.entities import ErrorKind, IdentityUser, VerifiedIdentity
from tests.fixtures.json_loader import TestDataLoader

ALICE = VerifiedIdentity(uid="uid-alice", email="alice@example.com")
ADMIN = VerifiedIdentity(uid="uid-admin", claims={"admin": True})


# ============================================================================
# GenerateCustomTokenUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_generate_custom_token_for_self(mock_identity_provider):
    use_case = GenerateCustomTokenUseCase(mock_identity_provider)

    result = await use_case.execute(ALICE, "uid-alice")

    assert result.is_ok()
    assert result.value.custom_token == "custom-token"
    assert result.value.expires_in == "1h"
    assert result.value.model_dump(by_alias=True) == {
        "success": True,
        "customToken": "custom-token",
        "expiresIn": "1h",
    }
    mock_identity_provider.create_custom_token.assert_called_once_with("uid-alice")


@pytest.mark.asyncio
async def test_generate_custom_token_missing_uid(mock_identity_provider):
    result = await GenerateCustomTokenUseCase(mock_identity_provider).execute(ALICE, None)

    assert result.error.code == ErrorKind.bad_request.value
    assert result.error.message == "UID is required"


@pytest.mark.asyncio
async def test_generate_custom_token_for_other_uid_is_forbidden(mock_identity_provider):
    result = await GenerateCustomTokenUseCase(mock_identity_provider).execute(ALICE, "uid-bob")

    assert result.error.code == ErrorKind.forbidden.value
    mock_identity_provider.create_custom_token.assert_not_called()


@pytest.mark.asyncio
async def test_admin_claim_does_not_allow_minting_for_others(mock_identity_provider):
    result = await GenerateCustomTokenUseCase(mock_identity_provider).execute(ADMIN, "uid-alice")

    assert result.error.code == ErrorKind.forbidden.value


@pytest.mark.asyncio
async def test_generate_custom_token_provider_failure(mock_identity_provider):
    mock_identity_provider.create_custom_token.side_effect = ProviderTimeoutError("timed out")

    result = await GenerateCustomTokenUseCase(mock_identity_provider).execute(ALICE, "uid-alice")

    assert result.error.code == ErrorKind.internal.value
    assert result.error.message == "Failed to generate custom token"


# ============================================================================
# GetUserProfileUseCase
# ============================================================================


def alice_record() -> IdentityUser:
    return IdentityUser(**TestDataLoader.get_copy("users")[0])


@pytest.mark.asyncio
async def test_owner_reads_own_profile(mock_identity_provider):
    mock_identity_provider.get_user.return_value = alice_record()

    result = await GetUserProfileUseCase(mock_identity_provider).execute(ALICE, "uid-alice")

    assert result.is_ok()
    body = result.value.model_dump(by_alias=True)
    assert body["success"] is True
    assert body["user"]["uid"] == "uid-alice"
    assert body["user"]["displayName"] == "Alice Example"
    assert body["user"]["photoURL"] == "https://example.com/alice.png"
    assert body["user"]["emailVerified"] is True
    assert body["user"]["creationTime"] == datetime(2024, 1, 15, 10, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_profile_of_other_user_is_forbidden(mock_identity_provider):
    result = await GetUserProfileUseCase(mock_identity_provider).execute(ALICE, "uid-bob")

    assert result.error.code == ErrorKind.forbidden.value
    assert result.error.message == "Access denied"
    mock_identity_provider.get_user.assert_not_called()


@pytest.mark.asyncio
async def test_admin_reads_any_profile(mock_identity_provider):
    mock_identity_provider.get_user.return_value = alice_record()

    result = await GetUserProfileUseCase(mock_identity_provider).execute(ADMIN, "uid-alice")

    assert result.is_ok()
    mock_identity_provider.get_user.assert_called_once_with("uid-alice")


def test_admin_claim_must_be_true():
    assert VerifiedIdentity(uid="x", claims={"admin": "yes"}).is_admin is False
    assert VerifiedIdentity(uid="x", claims={"admin": True}).is_admin is True
    assert VerifiedIdentity(uid="x").is_admin is False


@pytest.mark.asyncio
async def test_profile_not_found(mock_identity_provider):
    mock_identity_provider.get_user.side_effect = UserNotFoundError("uid-ghost")

    result = await GetUserProfileUseCase(mock_identity_provider).execute(ADMIN, "uid-ghost")

    assert result.error.code == ErrorKind.not_found.value


@pytest.mark.asyncio
async def test_profile_provider_failure(mock_identity_provider):
    mock_identity_provider.get_user.side_effect = IdentityProviderError("boom")

    result = await GetUserProfileUseCase(mock_identity_provider).execute(ALICE, "uid-alice")

    assert result.error.code == ErrorKind.internal.value
    assert result.error.message == "Failed to fetch user profile"


# ============================================================================
# ValidateCustomTokenUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_well_formed_custom_token_is_acknowledged():
    result = await ValidateCustomTokenUseCase().execute(TestDataLoader.get("sample_custom_token"))

    assert result.is_ok()
    assert result.value.message == "Token format appears valid"
    assert "client side" in result.value.note


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", None])
async def test_missing_custom_token(token):
    result = await ValidateCustomTokenUseCase().execute(token)

    assert result.error.code == ErrorKind.bad_request.value
    assert result.error.message == "Custom token is required"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["not-a-jwt", "a.b", "!!!.###.$$$"])
async def test_malformed_custom_token(token):
    result = await ValidateCustomTokenUseCase().execute(token)

    assert result.error.code == ErrorKind.bad_request.value
    assert result.error.message == "Custom token format is invalid"
