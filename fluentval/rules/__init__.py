"""Built-in rule set."""

from fluentval.rules.base import AsyncRule, Rule
from fluentval.rules.comparison import (
    EqualRule,
    ExclusiveBetweenRule,
    GreaterThanOrEqualRule,
    GreaterThanRule,
    InclusiveBetweenRule,
    LessThanOrEqualRule,
    LessThanRule,
    NotEqualRule,
)
from fluentval.rules.length import LengthRule, MaxLengthRule, MinLengthRule
from fluentval.rules.pattern import EMAIL_PATTERN, EmailRule, RegularExpressionRule
from fluentval.rules.predicate import AsyncPredicateRule, PredicateRule
from fluentval.rules.presence import NotEmptyRule, NotNullRule

__all__ = [
    "Rule",
    "AsyncRule",
    "NotNullRule",
    "NotEmptyRule",
    "LengthRule",
    "MinLengthRule",
    "MaxLengthRule",
    "InclusiveBetweenRule",
    "ExclusiveBetweenRule",
    "GreaterThanRule",
    "GreaterThanOrEqualRule",
    "LessThanRule",
    "LessThanOrEqualRule",
    "EqualRule",
    "NotEqualRule",
    "RegularExpressionRule",
    "EmailRule",
    "EMAIL_PATTERN",
    "PredicateRule",
    "AsyncPredicateRule",
]
