"""Event handler registry and dispatcher."""

import hashlib
import inspect
import json
import time
from dataclasses import asdict, is_dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Union

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.chainhook.actions import (
    ActionExecutor,
    ActionHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    ActionResult,
    DispatchResult,
    HandlerOutcome,
    OutcomeStatus,
    PredicateMatchResult,
)

EventHandler = Callable[[Any, Any], Union[Any, Awaitable[Any]]]
ErrorHandler = Callable[[Exception, Any], Union[None, Awaitable[None]]]


def handler_name(handler: Any) -> str:
    name = getattr(handler, "__name__", None)
    if isinstance(name, str) and name and name != "<lambda>":
        return name
    if inspect.isfunction(handler) or inspect.ismethod(handler):
        return "anonymous"
    return type(handler).__name__


def hash_payload(payload: Any) -> str:
    """Stable short digest of a payload, used to correlate dispatch logs."""
    try:
        if is_dataclass(payload) and not isinstance(payload, type):
            payload = asdict(payload)
        encoded = json.dumps(payload, sort_keys=True, default=str)
    except (TypeError, ValueError):
        encoded = repr(payload)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()[:16]


class EventHandlerRegistry:
    """Maps event types to ordered handler lists and dispatches payloads to them.

    Handlers registered for one event type run sequentially in registration
    order. A failing handler is recorded and reported to the error observer
    without stopping the others. Named actions for predicate matches are
    kept on the same object but run through a separate ActionExecutor.

    Create one registry per process at the composition root; tests create
    their own isolated instances.
    """

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._error_handler: Optional[ErrorHandler] = None
        self.actions = ActionExecutor()

    # ----------------------------------------------------------------
    # Registration
    # ----------------------------------------------------------------
    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        """Append a handler for an event type. Duplicates are kept."""
        if not isinstance(event_type, str):
            raise TypeError(
                f"event_type must be a string, got {type(event_type).__name__}"
            )
        if not callable(handler):
            raise TypeError(f"handler for '{event_type}' is not callable")
        self._handlers.setdefault(event_type, []).append(handler)
        self.logger.debug(
            f"Registered handler {handler_name(handler)} for '{event_type}'"
        )

    def register_error_handler(self, handler: ErrorHandler) -> None:
        """Set the error observer, replacing any previous one."""
        if not callable(handler):
            raise TypeError("error handler is not callable")
        self._error_handler = handler

    def register_action_handler(self, action_name: str, handler: ActionHandler) -> None:
        self.actions.register(action_name, handler)

    def get_handlers(self, event_type: str) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def get_event_types(self) -> Set[str]:
        return set(self._handlers)

    @property
    def error_handler(self) -> Optional[ErrorHandler]:
        return self._error_handler

    def clear(self) -> None:
        """Remove all handlers, actions and the error observer."""
        self._handlers.clear()
        self.actions.clear()
        self._error_handler = None

    # ----------------------------------------------------------------
    # Dispatch
    # ----------------------------------------------------------------
    async def dispatch(
        self, event_type: str, payload: Any, context: Any = None
    ) -> DispatchResult:
        """Invoke every handler registered for `event_type` with `(payload, context)`.

        Args:
            event_type: Registered event type key
            payload: Passed unchanged to each handler
            context: Optional extra argument passed to each handler

        Returns:
            DispatchResult: `success` is False only when nothing is registered
            for the event type; per-handler outcomes are in `actions`, in
            registration order.

        Raises:
            TypeError: If `event_type` is not a string
        """
        if not isinstance(event_type, str):
            raise TypeError(
                f"event_type must be a string, got {type(event_type).__name__}"
            )

        started = time.perf_counter()
        event_hash = hash_payload(payload)
        handlers = self.get_handlers(event_type)

        if not handlers:
            self.logger.debug(
                f"No handlers registered for '{event_type}'",
                extra={"event_type": event_type},
            )
            return DispatchResult(
                success=False,
                actions=[],
                processing_time_ms=self._elapsed_ms(started),
                event_hash=event_hash,
                handled_at=int(time.time() * 1000),
            )

        outcomes: List[HandlerOutcome] = []
        for handler in handlers:
            name = handler_name(handler)
            try:
                result = handler(payload, context)
                if inspect.isawaitable(result):
                    result = await result
                outcomes.append(
                    HandlerOutcome(name=name, status=OutcomeStatus.SUCCESS, result=result)
                )
            except Exception as e:
                self.logger.error(
                    f"Handler {name} failed: {str(e)}",
                    extra={"event_type": event_type, "event_hash": event_hash},
                    exc_info=True,
                )
                outcomes.append(
                    HandlerOutcome(name=name, status=OutcomeStatus.FAILED, error=str(e))
                )
                await self._notify_error(e, payload)

        dispatch_result = DispatchResult(
            success=True,
            actions=outcomes,
            processing_time_ms=self._elapsed_ms(started),
            event_hash=event_hash,
            handled_at=int(time.time() * 1000),
        )
        self.logger.info(
            f"Dispatched '{event_type}' to {len(outcomes)} handler(s), "
            f"{len(dispatch_result.failed)} failed",
            extra={
                "event_type": event_type,
                "dispatch": {
                    "success": dispatch_result.success,
                    "processing_time_ms": dispatch_result.processing_time_ms,
                },
            },
        )
        return dispatch_result

    async def execute_actions(
        self, predicate_result: PredicateMatchResult
    ) -> List[ActionResult]:
        return await self.actions.execute(predicate_result)

    async def _notify_error(self, error: Exception, payload: Any) -> None:
        if self._error_handler is None:
            return
        try:
            result = self._error_handler(error, payload)
            if inspect.isawaitable(result):
                await result
        except Exception as observer_error:
            self.logger.error(
                f"Error handler failed: {str(observer_error)}", exc_info=True
            )

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round(max(0.0, (time.perf_counter() - started) * 1000), 3)
