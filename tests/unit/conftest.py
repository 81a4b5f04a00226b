import pytest
from unittest.mock import AsyncMock, MagicMock

from authsync.adapter.repositories.in_memory_reset_token_repository import InMemoryResetTokenRepository
from authsync.domain.entities import IdentityUser


@pytest.fixture
def reset_tokens():
    return InMemoryResetTokenRepository()


@pytest.fixture
def mock_identity_provider():
    provider = MagicMock()
    provider.get_user_by_email = AsyncMock(
        return_value=IdentityUser(uid="uid-alice", email="alice@example.com")
    )
    provider.get_user = AsyncMock()
    provider.update_password = AsyncMock(return_value=None)
    provider.create_custom_token = AsyncMock(return_value="custom-token")
    provider.verify_id_token = AsyncMock()
    return provider


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.send_password_reset = AsyncMock(return_value=None)
    return mailer
