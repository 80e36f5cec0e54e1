"""Comparison rules — ranges, ordering and equality.

Range and ordering rules let None pass. Values that cannot be compared with
the configured bounds fail the rule instead of faulting.
"""

import operator
from typing import Any, Callable

from fluentval.context import ValidationContext
from fluentval.errors import ConfigurationError
from fluentval.models import ErrorCode
from fluentval.rules.base import Rule


def _ordered(low: Any, high: Any, strict: bool) -> bool:
    try:
        return low < high if strict else low <= high
    except TypeError as e:
        raise ConfigurationError(f"Range bounds {low!r} and {high!r} are not comparable: {e}") from e


class _BetweenRule(Rule):
    exclusive = False

    def __init__(self, low: Any, high: Any, **options):
        super().__init__(**options)
        if not _ordered(low, high, strict=self.exclusive):
            relation = "less than" if self.exclusive else "less than or equal to"
            raise ConfigurationError(f"Lower bound {low!r} must be {relation} upper bound {high!r}")
        self.low = low
        self.high = high

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        try:
            if self.exclusive:
                return self.low < value < self.high
            return self.low <= value <= self.high
        except TypeError:
            return False

    def placeholders(self, value: Any) -> dict[str, Any]:
        return {"from": self.low, "to": self.high}


class InclusiveBetweenRule(_BetweenRule):
    """Fails when value < low or value > high."""

    code = ErrorCode.INCLUSIVE_BETWEEN


class ExclusiveBetweenRule(_BetweenRule):
    """Fails when value <= low or value >= high."""

    code = ErrorCode.EXCLUSIVE_BETWEEN
    exclusive = True


class ComparisonRule(Rule):
    """Compares the value against a fixed operand with one operator."""

    _operator: Callable[[Any, Any], bool] = operator.eq
    skip_none = True

    def __init__(self, comparison_value: Any, **options):
        super().__init__(**options)
        self.comparison_value = comparison_value

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None and self.skip_none:
            return True
        try:
            return bool(type(self)._operator(value, self.comparison_value))
        except TypeError:
            return False

    def placeholders(self, value: Any) -> dict[str, Any]:
        return {"comparison_value": self.comparison_value}


class GreaterThanRule(ComparisonRule):
    code = ErrorCode.GREATER_THAN
    _operator = operator.gt


class GreaterThanOrEqualRule(ComparisonRule):
    code = ErrorCode.GREATER_THAN_OR_EQUAL
    _operator = operator.ge


class LessThanRule(ComparisonRule):
    code = ErrorCode.LESS_THAN
    _operator = operator.lt


class LessThanOrEqualRule(ComparisonRule):
    code = ErrorCode.LESS_THAN_OR_EQUAL
    _operator = operator.le


class EqualRule(ComparisonRule):
    code = ErrorCode.EQUAL
    _operator = operator.eq
    skip_none = False


class NotEqualRule(ComparisonRule):
    code = ErrorCode.NOT_EQUAL
    _operator = operator.ne
    skip_none = False
