"""Property rule chains and cross-property rule bindings.

A chain extracts one property from the instance and runs its rules in
declaration order. Nothing a rule or accessor raises escapes the chain:
accessor errors become an ACCESSOR_FAILED failure and rule errors become a
RULE_FAULT failure tagged is_fault=True, so one broken rule never hides the
rest of the object's validation.
"""

from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from fluentval.context import ValidationContext
from fluentval.errors import AsyncRuleInvokedSynchronouslyError
from fluentval.messages import DEFAULT_MESSAGES, format_message, humanize
from fluentval.models import CascadeMode, ErrorCode, Failure, Severity
from fluentval.observability import get_logger
from fluentval.rules.base import Rule

logger = get_logger(__name__)

Accessor = Callable[[Any], Any]


def default_accessor(property_name: str) -> Accessor:
    """Read a key from mappings and an attribute from everything else.

    Missing mapping keys read as None; missing attributes raise and are
    reported as ACCESSOR_FAILED.
    """

    def access(instance: Any) -> Any:
        if isinstance(instance, Mapping):
            return instance.get(property_name)
        return getattr(instance, property_name)

    access.__name__ = f"get_{property_name}"
    return access


def _rule_fault(rule: Rule, value: Any, context: ValidationContext, exc: Exception) -> Failure:
    logger.error(
        "rule_fault",
        shape=context.shape_name,
        property=context.property_name,
        rule=rule.name,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return Failure(
        property_name=context.property_name or "",
        message=format_message(DEFAULT_MESSAGES[ErrorCode.RULE_FAULT], property_name=context.display_name),
        attempted_value=value,
        severity=Severity.ERROR,
        error_code=ErrorCode.RULE_FAULT.value,
        is_fault=True,
    )


def run_rule(rule: Rule, value: Any, context: ValidationContext) -> Optional[Failure]:
    """Evaluate one synchronous rule, converting crashes into fault failures."""
    try:
        if not rule.applies_to(context.instance):
            return None
        return rule.evaluate(value, context)
    except AsyncRuleInvokedSynchronouslyError:
        raise
    except Exception as e:
        return _rule_fault(rule, value, context, e)


async def run_rule_async(rule: Rule, value: Any, context: ValidationContext) -> Optional[Failure]:
    """Evaluate one rule on the async path; sync rules are not awaited."""
    try:
        if not rule.applies_to(context.instance):
            return None
        if rule.is_async:
            return await rule.evaluate_async(value, context)
        return rule.evaluate(value, context)
    except Exception as e:
        return _rule_fault(rule, value, context, e)


class PropertyRuleChain:
    """Ordered rules bound to one property of the target shape."""

    def __init__(
        self,
        property_name: str,
        rules: Iterable[Rule],
        accessor: Optional[Accessor] = None,
        cascade_mode: CascadeMode = CascadeMode.CONTINUE,
        display_name: Optional[str] = None,
    ):
        self.property_name = property_name
        self.display_name = display_name or humanize(property_name)
        self.accessor = accessor or default_accessor(property_name)
        self.rules = tuple(rules)
        self.cascade_mode = CascadeMode(cascade_mode)

    @property
    def is_async(self) -> bool:
        return any(rule.is_async for rule in self.rules)

    def execute(self, context: ValidationContext) -> ValidationContext:
        """Run the chain synchronously and return its child context."""
        child = context.for_property(self.property_name, self.display_name)
        found, value = self._read(child)
        if not found:
            return child

        for rule in self.rules:
            failure = run_rule(rule, value, child)
            if failure is None:
                continue
            child.add_failure(failure)
            if self.cascade_mode is CascadeMode.STOP:
                break
        return child

    async def execute_async(self, context: ValidationContext) -> ValidationContext:
        """Run the chain, awaiting async rules one at a time in order."""
        child = context.for_property(self.property_name, self.display_name)
        found, value = self._read(child)
        if not found:
            return child

        for rule in self.rules:
            failure = await run_rule_async(rule, value, child)
            if failure is None:
                continue
            child.add_failure(failure)
            if self.cascade_mode is CascadeMode.STOP:
                break
        return child

    def _read(self, child: ValidationContext) -> tuple[bool, Any]:
        """Extract the property value, recording ACCESSOR_FAILED on error."""
        try:
            return True, self.accessor(child.instance)
        except Exception as e:
            logger.warning(
                "accessor_failed",
                shape=child.shape_name,
                property=self.property_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            child.add_failure(Failure(
                property_name=self.property_name,
                message=format_message(
                    DEFAULT_MESSAGES[ErrorCode.ACCESSOR_FAILED], property_name=self.display_name
                ),
                attempted_value=None,
                severity=Severity.ERROR,
                error_code=ErrorCode.ACCESSOR_FAILED.value,
            ))
            return False, None

    def __repr__(self) -> str:
        return (
            f"PropertyRuleChain({self.property_name!r}, rules={len(self.rules)}, "
            f"cascade={self.cascade_mode.value})"
        )


class CrossPropertyRule:
    """A rule that receives the whole instance as its value.

    Runs after every property chain and sees their failures through
    context.failures (read-only). It can only add failures.
    """

    def __init__(self, rule: Rule, property_name: str = "", display_name: Optional[str] = None):
        self.rule = rule
        self.property_name = property_name
        self.display_name = display_name or humanize(property_name)

    @property
    def is_async(self) -> bool:
        return self.rule.is_async

    def execute(self, context: ValidationContext) -> ValidationContext:
        child = context.for_property(self.property_name, self.display_name, inherit_failures=True)
        failure = run_rule(self.rule, context.instance, child)
        if failure is not None:
            child.add_failure(failure)
        return child

    async def execute_async(self, context: ValidationContext) -> ValidationContext:
        child = context.for_property(self.property_name, self.display_name, inherit_failures=True)
        failure = await run_rule_async(self.rule, context.instance, child)
        if failure is not None:
            child.add_failure(failure)
        return child

    def __repr__(self) -> str:
        return f"CrossPropertyRule({self.property_name!r}, {self.rule!r})"
