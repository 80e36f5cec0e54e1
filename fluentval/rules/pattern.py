"""Format rules — regular expressions and email addresses."""

import re
from typing import Any, Union

from fluentval.context import ValidationContext
from fluentval.errors import ConfigurationError
from fluentval.models import ErrorCode
from fluentval.rules.base import Rule

# Email grammar:
#   - exactly one "@"
#   - local part: one or more characters, none of them "@" or whitespace
#   - domain: two or more dot-separated labels, each one or more characters
#     that are not "@", "." or whitespace
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s.]+(\.[^@\s.]+)+")


class RegularExpressionRule(Rule):
    """Fails unless the pattern is found somewhere in the string value.

    Anchor the pattern with ^...$ to match the whole value. None passes;
    non-string values fail.
    """

    code = ErrorCode.REGULAR_EXPRESSION

    def __init__(self, pattern: Union[str, re.Pattern], flags: int = 0, **options):
        super().__init__(**options)
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            try:
                self.pattern = re.compile(pattern, flags)
            except (re.error, TypeError) as e:
                raise ConfigurationError(f"Invalid regular expression {pattern!r}: {e}") from e

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        return self.pattern.search(value) is not None

    def placeholders(self, value: Any) -> dict[str, Any]:
        return {"pattern": self.pattern.pattern}


class EmailRule(RegularExpressionRule):
    """Fails unless the value matches EMAIL_PATTERN."""

    code = ErrorCode.EMAIL

    def __init__(self, **options):
        super().__init__(EMAIL_PATTERN, **options)

    def is_valid(self, value: Any, context: ValidationContext) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        # The whole value must match; a trailing newline fails
        return self.pattern.fullmatch(value) is not None
