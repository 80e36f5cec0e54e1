"""Default message templates and display-name generation.

Templates use str.format placeholders. {property_name} is the display name and
{property_value} the attempted value; rules add their own placeholders.
Placeholders a rule does not supply are left in the text as written.
"""

import re
import string
from typing import Any, Optional

from fluentval.models import ErrorCode

DEFAULT_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NOT_NULL: "'{property_name}' must not be empty.",
    ErrorCode.NOT_EMPTY: "'{property_name}' must not be empty.",
    ErrorCode.LENGTH: (
        "'{property_name}' must be between {min_length} and {max_length} characters. "
        "You entered {total_length} characters."
    ),
    ErrorCode.MIN_LENGTH: (
        "The length of '{property_name}' must be at least {min_length} characters. "
        "You entered {total_length} characters."
    ),
    ErrorCode.MAX_LENGTH: (
        "The length of '{property_name}' must be {max_length} characters or fewer. "
        "You entered {total_length} characters."
    ),
    ErrorCode.INCLUSIVE_BETWEEN: "'{property_name}' must be between {from} and {to}. You entered {property_value}.",
    ErrorCode.EXCLUSIVE_BETWEEN: (
        "'{property_name}' must be between {from} and {to} (exclusive). You entered {property_value}."
    ),
    ErrorCode.GREATER_THAN: "'{property_name}' must be greater than '{comparison_value}'.",
    ErrorCode.GREATER_THAN_OR_EQUAL: "'{property_name}' must be greater than or equal to '{comparison_value}'.",
    ErrorCode.LESS_THAN: "'{property_name}' must be less than '{comparison_value}'.",
    ErrorCode.LESS_THAN_OR_EQUAL: "'{property_name}' must be less than or equal to '{comparison_value}'.",
    ErrorCode.EQUAL: "'{property_name}' must be equal to '{comparison_value}'.",
    ErrorCode.NOT_EQUAL: "'{property_name}' must not be equal to '{comparison_value}'.",
    ErrorCode.REGULAR_EXPRESSION: "'{property_name}' is not in the correct format.",
    ErrorCode.EMAIL: "'{property_name}' is not a valid email address.",
    ErrorCode.PREDICATE: "The specified condition was not met for '{property_name}'.",
    ErrorCode.ASYNC_PREDICATE: "The specified condition was not met for '{property_name}'.",
    ErrorCode.ACCESSOR_FAILED: "'{property_name}' could not be read.",
    ErrorCode.RULE_FAULT: "An internal error occurred while validating '{property_name}'.",
}

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_FORMATTER = string.Formatter()


def humanize(name: str) -> str:
    """Turn a property name into a display name.

    >>> humanize("FirstName")
    'First Name'
    >>> humanize("date_of_birth")
    'Date Of Birth'
    """
    words = []
    for chunk in name.replace("-", "_").split("_"):
        words.extend(w for w in _WORD_BOUNDARY.split(chunk) if w)
    return " ".join(w[:1].upper() + w[1:] for w in words)


def _field_text(field_name: str, format_spec: str, conversion: Optional[str]) -> str:
    text = "{" + field_name
    if conversion:
        text += "!" + conversion
    if format_spec:
        text += ":" + format_spec
    return text + "}"


def format_message(template: str, **placeholders: Any) -> str:
    """Fill a template, leaving unknown placeholders untouched.

    An unknown field keeps its conversion and format spec, so
    "{unit:>6}" comes back as written. Malformed braces and positional
    fields return the template verbatim.
    """
    parts = []
    try:
        parsed = list(_FORMATTER.parse(template))
    except ValueError:
        return template

    for literal, field_name, format_spec, conversion in parsed:
        parts.append(literal)
        if field_name is None:
            continue
        if not field_name or re.match(r"\d", field_name):
            return template
        field = _field_text(field_name, format_spec, conversion)
        try:
            parts.append(field.format_map(placeholders))
        except (KeyError, IndexError, AttributeError, ValueError, TypeError):
            parts.append(field)
    return "".join(parts)
