"""Error taxonomy.

Invalid data is never raised: it is reported as Failure entries in a
ValidationResult. The exceptions here cover everything else.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fluentval.models import ValidationResult


class FluentvalError(Exception):
    """Base class for all library errors."""


class ConfigurationError(FluentvalError):
    """Invalid rule declaration, raised while building a validator."""


class AsyncRuleInvokedSynchronouslyError(FluentvalError):
    """A validator holding async rules was run through validate()."""

    def __init__(self, shape_name: str):
        super().__init__(
            f"Validator '{shape_name}' contains asynchronous rules; "
            "use validate_async() instead of validate()"
        )
        self.shape_name = shape_name


class ValidationCancelled(FluentvalError):
    """An async validation was cancelled before it completed.

    Carries no partial result.
    """

    def __init__(self, shape_name: str):
        super().__init__(f"Validation of '{shape_name}' was cancelled")
        self.shape_name = shape_name


class ValidationException(FluentvalError):
    """Raised by validate_and_raise when the result is invalid."""

    def __init__(self, result: "ValidationResult"):
        lines = [f" -- {f.property_name}: {f.message}" for f in result.errors]
        super().__init__("Validation failed:\n" + "\n".join(lines))
        self.result = result


class ValidatorNotRegisteredError(FluentvalError, KeyError):
    """No validator is registered for the requested shape."""

    def __init__(self, shape_name: str):
        super().__init__(f"No validator registered for shape '{shape_name}'")
        self.shape_name = shape_name

    def __str__(self) -> str:
        return self.args[0]
