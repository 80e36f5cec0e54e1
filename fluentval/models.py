"""Validation models — severities, cascade modes, error codes, failures and results.

All models are immutable once built: a Failure never changes after it is
appended, and a ValidationResult can be shared across threads and tasks.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field

from fluentval.errors import ValidationException


class Severity(str, Enum):
    """Failure severity levels."""

    ERROR = "error"      # Makes the result invalid
    WARNING = "warning"  # Reported, but the result stays valid


class CascadeMode(str, Enum):
    """Whether a property chain keeps running after a rule fails."""

    CONTINUE = "continue"
    STOP = "stop"


class ErrorCode(str, Enum):
    """Deterministic error codes, one per built-in rule kind.

    ACCESSOR_FAILED and RULE_FAULT are reserved for failures the engine
    synthesizes itself.
    """

    # Presence
    NOT_NULL = "NOT_NULL"
    NOT_EMPTY = "NOT_EMPTY"

    # Length
    LENGTH = "LENGTH"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"

    # Comparison
    INCLUSIVE_BETWEEN = "INCLUSIVE_BETWEEN"
    EXCLUSIVE_BETWEEN = "EXCLUSIVE_BETWEEN"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"

    # Format
    REGULAR_EXPRESSION = "REGULAR_EXPRESSION"
    EMAIL = "EMAIL"

    # Custom
    PREDICATE = "PREDICATE"
    ASYNC_PREDICATE = "ASYNC_PREDICATE"

    # Engine
    ACCESSOR_FAILED = "ACCESSOR_FAILED"
    RULE_FAULT = "RULE_FAULT"


class Failure(BaseModel):
    """A single validation failure."""

    property_name: str
    message: str
    attempted_value: Any = None
    severity: Severity = Severity.ERROR
    error_code: str = ErrorCode.PREDICATE.value
    is_fault: bool = False  # True when the rule itself crashed

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """Outcome of one validation call."""

    shape_name: str = ""
    failures: tuple[Failure, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @computed_field
    @property
    def is_valid(self) -> bool:
        """True when no failure has error severity."""
        return not any(f.severity == Severity.ERROR for f in self.failures)

    @property
    def errors(self) -> list[Failure]:
        return [f for f in self.failures if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Failure]:
        return [f for f in self.failures if f.severity == Severity.WARNING]

    @property
    def faults(self) -> list[Failure]:
        """Failures caused by rules that raised, not by invalid data."""
        return [f for f in self.failures if f.is_fault]

    def to_dict(self) -> dict[str, list[str]]:
        """Group messages by property name, keeping failure order."""
        grouped: dict[str, list[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.property_name, []).append(failure.message)
        return grouped

    def raise_if_invalid(self) -> None:
        if not self.is_valid:
            raise ValidationException(self)

    def __str__(self) -> str:
        return "\n".join(f.message for f in self.failures)
