"""Fluent rule declaration and validator construction.

The builder only records declarations; nothing is checked or instantiated
until build_validator() runs, which either returns a complete Validator or
raises ConfigurationError.

Usage:
    builder = ValidatorBuilder("Customer")
    builder.rule_for("FirstName").not_empty()
    builder.rule_for("Email").not_empty().email_address()
    builder.rule_for("Age").inclusive_between(18, 65)
    validator = builder.build()
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from fluentval.chain import CrossPropertyRule, PropertyRuleChain
from fluentval.config import get_settings
from fluentval.engine import Validator
from fluentval.errors import ConfigurationError
from fluentval.messages import humanize
from fluentval.models import CascadeMode, Severity
from fluentval.observability import get_logger
from fluentval.rules import (
    AsyncPredicateRule,
    EmailRule,
    EqualRule,
    ExclusiveBetweenRule,
    GreaterThanOrEqualRule,
    GreaterThanRule,
    InclusiveBetweenRule,
    LengthRule,
    LessThanOrEqualRule,
    LessThanRule,
    MaxLengthRule,
    MinLengthRule,
    NotEmptyRule,
    NotEqualRule,
    NotNullRule,
    PredicateRule,
    RegularExpressionRule,
    Rule,
)

logger = get_logger(__name__)


# ── Declarations ──


class RuleDeclaration(BaseModel):
    """How to instantiate one rule, plus its per-rule options."""

    factory: Any
    args: tuple = ()
    kwargs: dict[str, Any] = Field(default_factory=dict)
    message: Any = None
    severity: Any = Severity.ERROR
    error_code: Optional[str] = None
    conditions: list[Any] = Field(default_factory=list)


class ChainDeclaration(BaseModel):
    """Rules declared for one property."""

    property_name: Any
    accessor: Any = None
    display_name: Optional[str] = None
    cascade_mode: Optional[CascadeMode] = None
    rules: list[RuleDeclaration] = Field(default_factory=list)


class CrossRuleDeclaration(BaseModel):
    """A rule evaluated against the whole instance."""

    rule: RuleDeclaration
    property_name: str = ""
    display_name: Optional[str] = None


class ValidatorDeclaration(BaseModel):
    """Everything build_validator() needs for one shape."""

    shape_name: str
    cascade_mode: Optional[CascadeMode] = None
    chains: list[ChainDeclaration] = Field(default_factory=list)
    cross_rules: list[CrossRuleDeclaration] = Field(default_factory=list)


# ── Construction ──


def _instantiate(declaration: RuleDeclaration, location: str) -> Rule:
    try:
        return declaration.factory(
            *declaration.args,
            message=declaration.message,
            severity=Severity(declaration.severity),
            error_code=declaration.error_code,
            conditions=tuple(declaration.conditions),
            **declaration.kwargs,
        )
    except ConfigurationError as e:
        raise ConfigurationError(f"{location}: {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{location}: invalid rule declaration: {e}") from e


def build_validator(
    declaration: ValidatorDeclaration,
    concurrent_async_chains: Optional[bool] = None,
) -> Validator:
    """Compile declarations into an immutable Validator.

    Raises:
        ConfigurationError: invalid rule parameters, a duplicate or empty
            property name, a non-callable accessor or a chain with no rules
    """
    shape_name = declaration.shape_name
    if not shape_name or not shape_name.strip():
        raise ConfigurationError("Validator shape name must not be empty")

    default_cascade = declaration.cascade_mode or get_settings().DEFAULT_CASCADE_MODE
    seen: set[str] = set()
    chains: list[PropertyRuleChain] = []

    for chain_decl in declaration.chains:
        name = chain_decl.property_name
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"{shape_name}: property name must be a non-empty string, got {name!r}")
        if name in seen:
            raise ConfigurationError(f"{shape_name}: duplicate rule chain for property '{name}'")
        seen.add(name)

        if chain_decl.accessor is not None and not callable(chain_decl.accessor):
            raise ConfigurationError(f"{shape_name}.{name}: accessor must be callable")
        if not chain_decl.rules:
            raise ConfigurationError(f"{shape_name}.{name}: no rules declared")

        location = f"{shape_name}.{name}"
        chains.append(PropertyRuleChain(
            property_name=name,
            rules=[_instantiate(d, location) for d in chain_decl.rules],
            accessor=chain_decl.accessor,
            cascade_mode=chain_decl.cascade_mode or default_cascade,
            display_name=chain_decl.display_name,
        ))

    cross_rules = []
    for cross_decl in declaration.cross_rules:
        location = f"{shape_name}.{cross_decl.property_name or '<instance>'}"
        display = cross_decl.display_name or humanize(cross_decl.property_name or shape_name)
        cross_rules.append(CrossPropertyRule(
            _instantiate(cross_decl.rule, location),
            property_name=cross_decl.property_name,
            display_name=display,
        ))

    validator = Validator(shape_name, chains, cross_rules, concurrent_async_chains=concurrent_async_chains)
    logger.debug(
        "validator_built",
        shape=shape_name,
        chains=len(chains),
        cross_property_rules=len(cross_rules),
        is_async=validator.is_async,
    )
    return validator


# ── Fluent API ──


class RuleBuilder:
    """Fluent rule declarations for one property chain."""

    def __init__(self, chain: ChainDeclaration):
        self._chain = chain

    @property
    def declaration(self) -> ChainDeclaration:
        return self._chain

    def _add(self, factory: Callable[..., Rule], *args: Any, **kwargs: Any) -> "RuleBuilder":
        self._chain.rules.append(RuleDeclaration(factory=factory, args=args, kwargs=kwargs))
        return self

    def _last(self, option: str) -> RuleDeclaration:
        if not self._chain.rules:
            raise ConfigurationError(
                f"{option}() on '{self._chain.property_name}' must follow a rule declaration"
            )
        return self._chain.rules[-1]

    # Presence

    def not_null(self) -> "RuleBuilder":
        return self._add(NotNullRule)

    def not_empty(self) -> "RuleBuilder":
        return self._add(NotEmptyRule)

    # Length

    def length(self, min_length: int, max_length: int) -> "RuleBuilder":
        return self._add(LengthRule, min_length, max_length)

    def min_length(self, min_length: int) -> "RuleBuilder":
        return self._add(MinLengthRule, min_length)

    def max_length(self, max_length: int) -> "RuleBuilder":
        return self._add(MaxLengthRule, max_length)

    # Comparison

    def inclusive_between(self, low: Any, high: Any) -> "RuleBuilder":
        return self._add(InclusiveBetweenRule, low, high)

    def exclusive_between(self, low: Any, high: Any) -> "RuleBuilder":
        return self._add(ExclusiveBetweenRule, low, high)

    def greater_than(self, value: Any) -> "RuleBuilder":
        return self._add(GreaterThanRule, value)

    def greater_than_or_equal(self, value: Any) -> "RuleBuilder":
        return self._add(GreaterThanOrEqualRule, value)

    def less_than(self, value: Any) -> "RuleBuilder":
        return self._add(LessThanRule, value)

    def less_than_or_equal(self, value: Any) -> "RuleBuilder":
        return self._add(LessThanOrEqualRule, value)

    def equal(self, value: Any) -> "RuleBuilder":
        return self._add(EqualRule, value)

    def not_equal(self, value: Any) -> "RuleBuilder":
        return self._add(NotEqualRule, value)

    # Format

    def matches(self, pattern: Any, flags: int = 0) -> "RuleBuilder":
        return self._add(RegularExpressionRule, pattern, flags)

    def email_address(self) -> "RuleBuilder":
        return self._add(EmailRule)

    # Custom

    def must(self, predicate: Callable[..., bool]) -> "RuleBuilder":
        return self._add(PredicateRule, predicate)

    def must_async(self, predicate: Callable[..., Any]) -> "RuleBuilder":
        return self._add(AsyncPredicateRule, predicate)

    def add_rule(self, factory: Callable[..., Rule], *args: Any, **kwargs: Any) -> "RuleBuilder":
        """Declare a user-defined Rule subclass.

        The factory is called at build time with args, kwargs and the rule
        options (message, severity, error_code, conditions).
        """
        return self._add(factory, *args, **kwargs)

    # Options for the most recent rule

    def with_message(self, message: Any) -> "RuleBuilder":
        """Message template string, or callable (value, context) -> str."""
        self._last("with_message").message = message
        return self

    def with_severity(self, severity: Severity) -> "RuleBuilder":
        self._last("with_severity").severity = severity
        return self

    def with_error_code(self, error_code: str) -> "RuleBuilder":
        self._last("with_error_code").error_code = error_code
        return self

    # Conditions for every rule declared so far

    def when(self, condition: Callable[[Any], bool]) -> "RuleBuilder":
        if not callable(condition):
            raise ConfigurationError(f"when() condition must be callable, got {condition!r}")
        for declaration in self._chain.rules:
            declaration.conditions.append(condition)
        return self

    def unless(self, condition: Callable[[Any], bool]) -> "RuleBuilder":
        if not callable(condition):
            raise ConfigurationError(f"unless() condition must be callable, got {condition!r}")
        return self.when(lambda instance: not condition(instance))

    # Chain options

    def cascade(self, mode: CascadeMode) -> "RuleBuilder":
        self._chain.cascade_mode = CascadeMode(mode)
        return self

    def with_name(self, display_name: str) -> "RuleBuilder":
        """Override the display name used in messages."""
        self._chain.display_name = display_name
        return self


class ValidatorBuilder:
    """Collects rule declarations for one shape."""

    def __init__(self, shape_name: str, cascade_mode: Optional[CascadeMode] = None):
        self.declaration = ValidatorDeclaration(shape_name=shape_name, cascade_mode=cascade_mode)

    def rule_for(self, property_name: str, accessor: Optional[Callable[[Any], Any]] = None) -> RuleBuilder:
        """Start a rule chain for one property.

        Without an accessor, mappings are read with .get(property_name) and
        other objects with getattr.
        """
        chain = ChainDeclaration(property_name=property_name, accessor=accessor)
        self.declaration.chains.append(chain)
        return RuleBuilder(chain)

    def rule(
        self,
        predicate: Callable[..., bool],
        message: Any = None,
        property_name: str = "",
        severity: Severity = Severity.ERROR,
        error_code: Optional[str] = None,
    ) -> "ValidatorBuilder":
        """Declare a cross-property rule; the predicate receives the whole instance."""
        return self._add_cross(PredicateRule, predicate, message, property_name, severity, error_code)

    def rule_async(
        self,
        predicate: Callable[..., Any],
        message: Any = None,
        property_name: str = "",
        severity: Severity = Severity.ERROR,
        error_code: Optional[str] = None,
    ) -> "ValidatorBuilder":
        return self._add_cross(AsyncPredicateRule, predicate, message, property_name, severity, error_code)

    def _add_cross(self, factory, predicate, message, property_name, severity, error_code) -> "ValidatorBuilder":
        self.declaration.cross_rules.append(CrossRuleDeclaration(
            rule=RuleDeclaration(
                factory=factory,
                args=(predicate,),
                message=message,
                severity=severity,
                error_code=error_code,
            ),
            property_name=property_name,
        ))
        return self

    def build(self, concurrent_async_chains: Optional[bool] = None) -> Validator:
        return build_validator(self.declaration, concurrent_async_chains=concurrent_async_chains)
