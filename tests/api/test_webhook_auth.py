from unittest.mock import patch

import pytest
from fastapi import HTTPException

from passportx.api.dependencies import verify_webhook_auth


@pytest.mark.asyncio
async def test_verify_webhook_auth_missing_header():
    """Test authentication fails when Authorization header is missing."""
    with pytest.raises(HTTPException) as exc_info:
        await verify_webhook_auth(authorization=None)

    assert exc_info.value.status_code == 401
    assert "Missing Authorization header" in exc_info.value.detail


@pytest.mark.asyncio
async def test_verify_webhook_auth_invalid_format():
    """Test authentication fails when Authorization header has invalid format."""
    with pytest.raises(HTTPException) as exc_info:
        await verify_webhook_auth(authorization="Token abc")

    assert exc_info.value.status_code == 401
    assert "Invalid Authorization format" in exc_info.value.detail


@pytest.mark.asyncio
async def test_verify_webhook_auth_invalid_token():
    """Test authentication fails when token is invalid."""
    with patch("passportx.api.dependencies.config") as mock_config:
        mock_config.api.webhook_auth = "Bearer chainhook-secret"

        with pytest.raises(HTTPException) as exc_info:
            await verify_webhook_auth(authorization="Bearer wrong-secret")

        assert exc_info.value.status_code == 401
        assert "Invalid authentication token" in exc_info.value.detail


@pytest.mark.asyncio
async def test_verify_webhook_auth_success():
    """Test authentication succeeds with valid token."""
    with patch("passportx.api.dependencies.config") as mock_config:
        mock_config.api.webhook_auth = "Bearer chainhook-secret"

        result = await verify_webhook_auth(authorization="Bearer chainhook-secret")

        assert result is None


@pytest.mark.asyncio
async def test_verify_webhook_auth_with_raw_token():
    """Test authentication with raw token in config."""
    with patch("passportx.api.dependencies.config") as mock_config:
        # Config has token without Bearer prefix
        mock_config.api.webhook_auth = "chainhook-secret"

        result = await verify_webhook_auth(authorization="Bearer chainhook-secret")

        assert result is None
