"""Length rules for strings and sized collections.

Bounds are inclusive. None passes; presence is checked by NotNull/NotEmpty.
Values without a length (e.g. numbers) fail.
"""

from typing import Any, Optional

from fluentval.context import ValidationContext
from fluentval.errors import ConfigurationError
from fluentval.models import ErrorCode
from fluentval.rules.base import Rule, value_length


def _check_bound(name: str, bound: Any) -> int:
    if isinstance(bound, bool) or not isinstance(bound, int):
        raise ConfigurationError(f"{name} must be an integer, got {bound!r}")
    if bound < 0:
        raise ConfigurationError(f"{name} must not be negative, got {bound}")
    return bound


class LengthRule(Rule):
    """Fails when the length is outside [min_length, max_length]."""

    code = ErrorCode.LENGTH

    def __init__(self, min_length: int, max_length: Optional[int], **options):
        super().__init__(**options)
        self.min_length = _check_bound("min_length", min_length)
        self.max_length = None if max_length is None else _check_bound("max_length", max_length)
        if self.max_length is not None and self.min_length > self.max_length:
            raise ConfigurationError(
                f"min_length ({self.min_length}) must not exceed max_length ({self.max_length})"
            )

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        length = value_length(value)
        if length is None:
            return False
        if length < self.min_length:
            return False
        return self.max_length is None or length <= self.max_length

    def placeholders(self, value: Any) -> dict[str, Any]:
        length = value_length(value)
        return {
            "min_length": self.min_length,
            "max_length": self.max_length,
            "total_length": length if length is not None else "?",
        }


class MinLengthRule(LengthRule):
    code = ErrorCode.MIN_LENGTH

    def __init__(self, min_length: int, **options):
        super().__init__(min_length, None, **options)


class MaxLengthRule(LengthRule):
    code = ErrorCode.MAX_LENGTH

    def __init__(self, max_length: int, **options):
        super().__init__(0, max_length, **options)
