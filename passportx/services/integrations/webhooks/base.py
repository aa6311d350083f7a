"""Base classes for webhook handling."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

from passportx.lib.logger import configure_logger

T = TypeVar("T")


class WebhookParser(ABC, Generic[T]):
    """Turns a deserialized webhook body into typed payload objects."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    def parse(self, raw_data: Dict[str, Any]) -> T:
        """Parse the raw webhook body.

        Args:
            raw_data: The JSON-decoded webhook body

        Returns:
            The typed payload consumed by the matching WebhookHandler
        """


class WebhookHandler(ABC, Generic[T]):
    """Acts on parsed webhook payloads."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def handle(self, parsed_data: T) -> Dict[str, Any]:
        """Handle a parsed webhook payload.

        Returns:
            Dict with at least `success` and `message` keys
        """


class WebhookResponse(BaseModel):
    """Response body returned by webhook endpoints."""

    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "WebhookResponse":
        return cls(
            success=bool(result.get("success", False)),
            message=str(result.get("message", "")),
            data=result.get("data"),
        )


class WebhookService(Generic[T]):
    """Pairs a parser with a handler for one webhook source."""

    source: str = "webhook"

    def __init__(self, parser: WebhookParser[T], handler: WebhookHandler[T]):
        self.parser = parser
        self.handler = handler
        self.logger = configure_logger(self.__class__.__name__)

    async def process(self, raw_data: Dict[str, Any]) -> Dict[str, Any]:
        """Parse and handle one webhook delivery.

        Parser and handler errors are logged here and re-raised to the caller.
        """
        try:
            parsed_data = self.parser.parse(raw_data)
            return await self.handler.handle(parsed_data)
        except Exception as e:
            self.logger.error(
                f"Error processing {self.source} webhook: {str(e)}",
                extra={"event_type": self.source},
                exc_info=True,
            )
            raise
