from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from passportx.api.dependencies import get_chainhook_service, verify_webhook_auth
from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.base import WebhookResponse
from passportx.services.integrations.webhooks.chainhook import ChainhookService

# Configure logger
logger = configure_logger(__name__)

# Create the router
router = APIRouter(prefix="/webhooks")


@router.post("/chainhook")
async def chainhook(
    data: Dict[str, Any] = Body(...),
    _: None = Depends(verify_webhook_auth),
    service: ChainhookService = Depends(get_chainhook_service),
) -> WebhookResponse:
    """Handle a chainhook webhook.

    This endpoint requires Bearer token authentication via the Authorization header.
    The token must match the one configured in PASSPORTX_WEBHOOK_AUTH_TOKEN.

    Always returns 200 so the chainhook node does not retry a delivery that
    failed on our side; the body reports what happened.

    Args:
        data: The webhook payload as JSON

    Returns:
        WebhookResponse: Processing summary

    Raises:
        HTTPException: If authentication fails
    """
    try:
        logger.debug(
            "Chainhook webhook received", extra={"event_type": "chainhook_webhook"}
        )
        result = await service.process(data)
        logger.info("Chainhook processing completed")
        return WebhookResponse.from_result(result)
    except Exception as e:
        logger.error(
            "Chainhook processing failed", extra={"error": str(e)}, exc_info=True
        )
        return WebhookResponse(
            success=False, message=f"Error processing chainhook webhook: {str(e)}"
        )
