"""Validator registry — lookup, lazy factories and isolation."""

import threading

import pytest

from fluentval import ConfigurationError, ValidatorBuilder, ValidatorNotRegisteredError, ValidatorRegistry


def _customer_validator():
    builder = ValidatorBuilder("Customer")
    builder.rule_for("Name").not_empty()
    return builder.build()


def test_register_and_get_validator():
    registry = ValidatorRegistry()
    validator = _customer_validator()
    registry.register("Customer", validator)

    assert "Customer" in registry
    assert registry.get("Customer") is validator
    assert len(registry) == 1


def test_factory_is_built_once():
    calls = []

    def factory():
        calls.append(1)
        return _customer_validator()

    registry = ValidatorRegistry()
    registry.register("Customer", factory)
    assert calls == []

    first = registry.get("Customer")
    second = registry.get("Customer")
    assert first is second
    assert calls == [1]


def test_factory_is_built_once_under_concurrent_lookups():
    calls = []
    barrier = threading.Barrier(8)

    def factory():
        calls.append(1)
        return _customer_validator()

    registry = ValidatorRegistry()
    registry.register("Customer", factory)
    results = []

    def lookup():
        barrier.wait()
        results.append(registry.get("Customer"))

    threads = [threading.Thread(target=lookup) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == [1]
    assert len({id(v) for v in results}) == 1


def test_unknown_shape():
    registry = ValidatorRegistry()
    with pytest.raises(ValidatorNotRegisteredError) as exc_info:
        registry.get("Missing")
    assert isinstance(exc_info.value, KeyError)
    assert str(exc_info.value) == "No validator registered for shape 'Missing'"


def test_failing_factory_surfaces_configuration_error():
    def factory():
        builder = ValidatorBuilder("Customer")
        builder.rule_for("Age").inclusive_between(65, 18)
        return builder.build()

    registry = ValidatorRegistry()
    registry.register("Customer", factory)
    with pytest.raises(ConfigurationError):
        registry.get("Customer")
    assert "Customer" in registry


def test_register_rejects_other_objects():
    with pytest.raises(TypeError):
        ValidatorRegistry().register("Customer", "not a validator")


def test_reregister_replaces_and_unregister_removes():
    registry = ValidatorRegistry()
    first, second = _customer_validator(), _customer_validator()
    registry.register("Customer", first)
    registry.register("Customer", second)
    assert registry.get("Customer") is second

    registry.unregister("Customer")
    assert "Customer" not in registry

    registry.register("Customer", first)
    registry.clear()
    assert len(registry) == 0
