"""Validator registry — resolves one shared Validator per shape name.

Applications that wire validators through a container can ignore this module;
it is a convenience for code that wants a process-wide lookup.
"""

import threading
from typing import Callable, Union

from fluentval.engine import Validator
from fluentval.errors import ValidatorNotRegisteredError
from fluentval.observability import get_logger

logger = get_logger(__name__)

ValidatorFactory = Callable[[], Validator]


class ValidatorRegistry:
    """Maps shape names to validators, building factories at most once."""

    def __init__(self):
        self._validators: dict[str, Validator] = {}
        self._factories: dict[str, ValidatorFactory] = {}
        self._lock = threading.Lock()

    def register(self, shape_name: str, validator: Union[Validator, ValidatorFactory]) -> None:
        """Register a built validator, or a factory that builds one on first use."""
        with self._lock:
            self._validators.pop(shape_name, None)
            self._factories.pop(shape_name, None)
            if isinstance(validator, Validator):
                self._validators[shape_name] = validator
            elif callable(validator):
                self._factories[shape_name] = validator
            else:
                raise TypeError(f"Expected a Validator or a factory, got {type(validator).__name__}")
        logger.debug("validator_registered", shape=shape_name, lazy=shape_name in self._factories)

    def get(self, shape_name: str) -> Validator:
        """Return the validator for a shape.

        Raises:
            ValidatorNotRegisteredError: nothing is registered under shape_name
            ConfigurationError: the registered factory failed to build
        """
        validator = self._validators.get(shape_name)
        if validator is not None:
            return validator

        with self._lock:
            validator = self._validators.get(shape_name)
            if validator is not None:
                return validator
            factory = self._factories.get(shape_name)
            if factory is None:
                raise ValidatorNotRegisteredError(shape_name)
            validator = factory()
            self._validators[shape_name] = validator
            del self._factories[shape_name]
            return validator

    def unregister(self, shape_name: str) -> None:
        with self._lock:
            self._validators.pop(shape_name, None)
            self._factories.pop(shape_name, None)

    def clear(self) -> None:
        with self._lock:
            self._validators.clear()
            self._factories.clear()

    def __contains__(self, shape_name: str) -> bool:
        return shape_name in self._validators or shape_name in self._factories

    def __len__(self) -> int:
        return len(self._validators) + len(self._factories)


# Module-level singleton
registry = ValidatorRegistry()
