"""Execution of named actions for predicate matches."""

import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.chainhook.models import (
    ActionResult,
    OutcomeStatus,
    PredicateMatchResult,
)

ActionHandler = Callable[[Any], Union[Any, Awaitable[Any]]]


class ActionExecutor:
    """Runs the actions named by a predicate match.

    Holds at most one callable per action name; registering a name again
    replaces the previous callable.
    """

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)
        self._actions: Dict[str, ActionHandler] = {}

    def register(self, action_name: str, handler: ActionHandler) -> None:
        if not isinstance(action_name, str):
            raise TypeError(
                f"action name must be a string, got {type(action_name).__name__}"
            )
        if not callable(handler):
            raise TypeError(f"action handler for '{action_name}' is not callable")
        if action_name in self._actions:
            self.logger.debug(f"Replacing action handler for '{action_name}'")
        self._actions[action_name] = handler

    def get(self, action_name: str) -> Optional[ActionHandler]:
        return self._actions.get(action_name)

    def get_action_names(self) -> List[str]:
        return list(self._actions)

    def clear(self) -> None:
        self._actions.clear()

    async def execute(self, predicate_result: PredicateMatchResult) -> List[ActionResult]:
        """Invoke each registered action named by the predicate match, in order.

        Unregistered names are skipped without a result entry. A failing
        action is recorded and does not stop the remaining ones.
        """
        results: List[ActionResult] = []
        for action_name in predicate_result.actions or []:
            handler = self._actions.get(action_name)
            if handler is None:
                self.logger.debug(f"No action registered for '{action_name}', skipping")
                continue

            try:
                result = handler(predicate_result.event)
                if inspect.isawaitable(result):
                    result = await result
                results.append(
                    ActionResult(
                        action=action_name, status=OutcomeStatus.SUCCESS, result=result
                    )
                )
            except Exception as e:
                self.logger.error(
                    f"Action '{action_name}' failed: {str(e)}",
                    extra={"predicate_id": predicate_result.predicate_id},
                    exc_info=True,
                )
                results.append(
                    ActionResult(
                        action=action_name, status=OutcomeStatus.FAILED, error=str(e)
                    )
                )
        return results
