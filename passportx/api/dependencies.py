from typing import Optional

from fastapi import Header, HTTPException, Request

from passportx.config import config
from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.chainhook import ChainhookService

logger = configure_logger(__name__)


async def verify_webhook_auth(authorization: Optional[str] = Header(None)) -> None:
    """
    Verify webhook authentication using Bearer token.

    Args:
        authorization: The Authorization header value

    Raises:
        HTTPException: If authentication fails
    """
    if not authorization:
        logger.error("Missing Authorization header for webhook")
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    if not authorization.startswith("Bearer "):
        logger.error("Invalid Authorization header format for webhook")
        raise HTTPException(
            status_code=401, detail="Invalid Authorization format. Use 'Bearer <token>'"
        )

    token = authorization[len("Bearer ") :]
    expected_token = config.api.webhook_auth
    if expected_token.startswith("Bearer "):
        expected_token = expected_token[len("Bearer ") :]

    if token != expected_token:
        logger.error("Invalid webhook authentication token")
        raise HTTPException(status_code=401, detail="Invalid authentication token")


def get_chainhook_service(request: Request) -> ChainhookService:
    """Return the service built at startup, creating it on first use."""
    service = getattr(request.app.state, "chainhook_service", None)
    if service is None:
        service = ChainhookService()
        request.app.state.chainhook_service = service
    return service
