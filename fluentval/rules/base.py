"""Base rule — abstract class every property and cross-property rule implements.

Each rule is a standalone, independently testable unit. The engine only talks
to rules through evaluate() / evaluate_async().
"""

from abc import ABC, abstractmethod
from collections.abc import Sized
from typing import Any, Callable, Optional, Union

from fluentval.context import ValidationContext
from fluentval.errors import AsyncRuleInvokedSynchronouslyError
from fluentval.messages import DEFAULT_MESSAGES, format_message
from fluentval.models import ErrorCode, Failure, Severity

MessageSource = Union[str, Callable[[Any, ValidationContext], str]]
Condition = Callable[[Any], bool]


class Rule(ABC):
    """Abstract base for synchronous rules.

    Contract:
        - is_valid() is a pure function of the value and the read-only context
        - is_valid() never mutates the instance under validation
        - evaluate() returns None on success, a Failure otherwise
    """

    code: ErrorCode = ErrorCode.PREDICATE
    is_async = False

    def __init__(
        self,
        *,
        message: Optional[MessageSource] = None,
        severity: Severity = Severity.ERROR,
        error_code: Optional[str] = None,
        conditions: tuple[Condition, ...] = (),
    ):
        self.message = message
        self.severity = Severity(severity)
        self.error_code = error_code or self.code.value
        self.conditions = tuple(conditions)

    @property
    def name(self) -> str:
        """Rule kind, used in logs."""
        return type(self).__name__

    @abstractmethod
    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        ...

    def placeholders(self, value: Any) -> dict[str, Any]:
        """Extra message placeholders for this rule kind."""
        return {}

    def applies_to(self, instance: Any) -> bool:
        """True when every when/unless condition allows the rule to run."""
        return all(condition(instance) for condition in self.conditions)

    def evaluate(self, value: Any, context: ValidationContext) -> Optional[Failure]:
        if self.is_valid(value, context):
            return None
        return self._failure(value, context)

    async def evaluate_async(self, value: Any, context: ValidationContext) -> Optional[Failure]:
        return self.evaluate(value, context)

    # ── Helper Methods ──

    def _failure(self, value: Any, context: ValidationContext) -> Failure:
        """Build a Failure with this rule's message, severity and code."""
        if callable(self.message):
            message = str(self.message(value, context))
        else:
            template = self.message if self.message is not None else DEFAULT_MESSAGES[self.code]
            message = format_message(
                template,
                property_name=context.display_name,
                property_value=value,
                **self.placeholders(value),
            )
        return Failure(
            property_name=context.property_name or "",
            message=message,
            attempted_value=value,
            severity=self.severity,
            error_code=self.error_code,
        )

    def __repr__(self) -> str:
        return f"{self.name}(code={self.code.value}, severity={self.severity.value})"


class AsyncRule(Rule):
    """Base for rules that need to await something, e.g. an external lookup."""

    is_async = True

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        raise AsyncRuleInvokedSynchronouslyError(context.shape_name)

    @abstractmethod
    async def is_valid_async(self, value: Any, context: ValidationContext) -> bool:
        ...

    async def evaluate_async(self, value: Any, context: ValidationContext) -> Optional[Failure]:
        if await self.is_valid_async(value, context):
            return None
        return self._failure(value, context)


def value_length(value: Any) -> Optional[int]:
    """Length of a string or sized collection, None for anything else."""
    if isinstance(value, Sized):
        return len(value)
    return None
