"""Presence rules — NotNull and NotEmpty."""

from collections.abc import Sized
from decimal import Decimal
from typing import Any

from fluentval.context import ValidationContext
from fluentval.models import ErrorCode
from fluentval.rules.base import Rule


class NotNullRule(Rule):
    """Fails when the value is None."""

    code = ErrorCode.NOT_NULL

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        return value is not None


class NotEmptyRule(Rule):
    """Fails on None, blank strings, empty collections and zero values.

    Strings made only of whitespace count as empty. Zero values are the
    defaults of the numeric types and bool: 0, 0.0, Decimal(0), False.
    """

    code = ErrorCode.NOT_EMPTY

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, (bool, int, float, complex, Decimal)):
            return value != 0
        if isinstance(value, Sized):
            return len(value) > 0
        return True
