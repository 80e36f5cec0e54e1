"""Custom predicate rules.

A predicate takes either (value) or (value, context). The context gives
read-only access to the whole instance through context.instance, which is how
a property rule looks at sibling properties.
"""

import inspect
from typing import Any, Awaitable, Callable

from fluentval.context import ValidationContext
from fluentval.errors import ConfigurationError
from fluentval.models import ErrorCode
from fluentval.rules.base import AsyncRule, Rule


def _wants_context(predicate: Callable) -> bool:
    """True when the predicate accepts a second positional argument."""
    try:
        params = inspect.signature(predicate).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 2


class PredicateRule(Rule):
    """Fails when the predicate returns a falsy value."""

    code = ErrorCode.PREDICATE

    def __init__(self, predicate: Callable[..., bool], **options):
        super().__init__(**options)
        if not callable(predicate):
            raise ConfigurationError(f"Predicate must be callable, got {predicate!r}")
        if inspect.iscoroutinefunction(predicate):
            raise ConfigurationError("Coroutine predicates must be declared with must_async()")
        self.predicate = predicate
        self._pass_context = _wants_context(predicate)

    @property
    def name(self) -> str:
        return f"{type(self).__name__}[{getattr(self.predicate, '__name__', 'predicate')}]"

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if self._pass_context:
            return bool(self.predicate(value, context))
        return bool(self.predicate(value))


class AsyncPredicateRule(AsyncRule):
    """Awaits the predicate; fails when it resolves to a falsy value."""

    code = ErrorCode.ASYNC_PREDICATE

    def __init__(self, predicate: Callable[..., Awaitable[bool]], **options):
        super().__init__(**options)
        if not inspect.iscoroutinefunction(predicate):
            raise ConfigurationError(f"Async predicate must be a coroutine function, got {predicate!r}")
        self.predicate = predicate
        self._pass_context = _wants_context(predicate)

    @property
    def name(self) -> str:
        return f"{type(self).__name__}[{getattr(self.predicate, '__name__', 'predicate')}]"

    async def is_valid_async(self, value: Any, context: ValidationContext) -> bool:
        if self._pass_context:
            return bool(await self.predicate(value, context))
        return bool(await self.predicate(value))
