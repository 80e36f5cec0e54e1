"""Root conftest — shared fixtures and settings isolation."""

import logging

import pytest
import structlog

from fluentval import ValidatorBuilder
from fluentval.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _restore_logging():
    """configure_logging() touches process-wide stdlib state; put it back."""
    root = logging.getLogger()
    library = logging.getLogger("fluentval")
    handlers, root_level, library_level = root.handlers[:], root.level, library.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(root_level)
    library.setLevel(library_level)


@pytest.fixture
def customer_validator():
    """NotEmpty(FirstName), NotEmpty(Email), EmailFormat(Email), InclusiveBetween(Age, 18, 65)."""
    builder = ValidatorBuilder("Customer")
    builder.rule_for("FirstName").not_empty()
    builder.rule_for("Email").not_empty().email_address()
    builder.rule_for("Age").inclusive_between(18, 65)
    return builder.build()
