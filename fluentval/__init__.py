"""fluentval — fluent, declarative object validation.

Usage:
    from fluentval import ValidatorBuilder

    builder = ValidatorBuilder("Customer")
    builder.rule_for("Email").not_empty().email_address()
    validator = builder.build()

    result = validator.validate({"Email": "bad"})
    if not result.is_valid:
        # Map result.failures to an error payload
"""

from fluentval.builder import (
    ChainDeclaration,
    CrossRuleDeclaration,
    RuleBuilder,
    RuleDeclaration,
    ValidatorBuilder,
    ValidatorDeclaration,
    build_validator,
)
from fluentval.context import ValidationContext
from fluentval.engine import Validator
from fluentval.errors import (
    AsyncRuleInvokedSynchronouslyError,
    ConfigurationError,
    FluentvalError,
    ValidationCancelled,
    ValidationException,
    ValidatorNotRegisteredError,
)
from fluentval.models import CascadeMode, ErrorCode, Failure, Severity, ValidationResult
from fluentval.registry import ValidatorRegistry, registry

__all__ = [
    "ValidatorBuilder",
    "RuleBuilder",
    "build_validator",
    "ValidatorDeclaration",
    "ChainDeclaration",
    "RuleDeclaration",
    "CrossRuleDeclaration",
    "Validator",
    "ValidationContext",
    "ValidationResult",
    "Failure",
    "Severity",
    "CascadeMode",
    "ErrorCode",
    "FluentvalError",
    "ConfigurationError",
    "AsyncRuleInvokedSynchronouslyError",
    "ValidationCancelled",
    "ValidationException",
    "ValidatorNotRegisteredError",
    "ValidatorRegistry",
    "registry",
]
