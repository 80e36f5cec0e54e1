"""Property rule chains — cascade, accessors and fault isolation.

Tests:
    - CONTINUE runs every rule; k failing rules give k failures in declaration order
    - STOP keeps only the first failure of the chain
    - An accessor that raises yields one ACCESSOR_FAILED failure, rules are skipped
    - A rule that raises yields a RULE_FAULT failure tagged is_fault and is logged
    - Conditions skip rules without failing them
"""

from dataclasses import dataclass

from structlog.testing import capture_logs

from fluentval import CascadeMode, ErrorCode, ValidationContext
from fluentval.chain import CrossPropertyRule, PropertyRuleChain, default_accessor
from fluentval.rules import (
    EmailRule,
    LengthRule,
    NotEmptyRule,
    NotNullRule,
    PredicateRule,
    Rule,
)


# -- Helpers -------------------------------------------------------------------

class ExplodingRule(Rule):
    def is_valid(self, value, context):
        raise RuntimeError("boom")


@dataclass
class Person:
    name: str
    email: str


def _run(chain, instance):
    return chain.execute(ValidationContext(instance, shape_name="Person")).failures


# ==============================================================================
# Cascade
# ==============================================================================


def test_continue_reports_every_failing_rule_in_order():
    chain = PropertyRuleChain("Email", [NotEmptyRule(), LengthRule(5, 10), EmailRule()])
    failures = _run(chain, {"Email": ""})
    assert [f.error_code for f in failures] == [ErrorCode.NOT_EMPTY, ErrorCode.LENGTH, ErrorCode.EMAIL]
    assert all(f.property_name == "Email" for f in failures)


def test_stop_keeps_only_the_first_failure():
    chain = PropertyRuleChain(
        "Email",
        [NotEmptyRule(), LengthRule(5, 10), EmailRule()],
        cascade_mode=CascadeMode.STOP,
    )
    failures = _run(chain, {"Email": ""})
    assert [f.error_code for f in failures] == [ErrorCode.NOT_EMPTY]


def test_stop_runs_later_rules_while_earlier_ones_pass():
    chain = PropertyRuleChain("Email", [NotEmptyRule(), EmailRule()], cascade_mode="stop")
    failures = _run(chain, {"Email": "bad"})
    assert [f.error_code for f in failures] == [ErrorCode.EMAIL]


def test_passing_chain_has_no_failures():
    chain = PropertyRuleChain("Email", [NotEmptyRule(), EmailRule()])
    assert _run(chain, {"Email": "a@b.com"}) == ()


# ==============================================================================
# Accessors
# ==============================================================================


def test_default_accessor_reads_mappings_and_attributes():
    assert default_accessor("name")({"name": "Ann"}) == "Ann"
    assert default_accessor("name")({}) is None
    assert default_accessor("name")(Person("Ann", "a@b.com")) == "Ann"


def test_missing_mapping_key_reads_as_none():
    chain = PropertyRuleChain("Name", [NotNullRule()])
    failures = _run(chain, {})
    assert [f.error_code for f in failures] == [ErrorCode.NOT_NULL]


def test_accessor_failure_is_a_single_synthetic_failure():
    def broken(instance):
        return instance.address.city

    chain = PropertyRuleChain("City", [NotEmptyRule(), LengthRule(1, 2)], accessor=broken)
    with capture_logs() as logs:
        failures = _run(chain, Person("Ann", "a@b.com"))

    assert len(failures) == 1
    assert failures[0].error_code == ErrorCode.ACCESSOR_FAILED
    assert failures[0].message == "'City' could not be read."
    assert failures[0].attempted_value is None
    assert not failures[0].is_fault
    assert logs[0]["event"] == "accessor_failed"
    assert logs[0]["error_type"] == "AttributeError"


def test_missing_attribute_is_an_accessor_failure():
    chain = PropertyRuleChain("phone", [NotEmptyRule()])
    failures = _run(chain, Person("Ann", "a@b.com"))
    assert [f.error_code for f in failures] == [ErrorCode.ACCESSOR_FAILED]


# ==============================================================================
# Rule faults
# ==============================================================================


def test_rule_fault_is_tagged_and_does_not_stop_the_chain():
    chain = PropertyRuleChain("Name", [ExplodingRule(), NotEmptyRule()])
    with capture_logs() as logs:
        failures = _run(chain, {"Name": ""})

    assert [f.error_code for f in failures] == [ErrorCode.RULE_FAULT, ErrorCode.NOT_EMPTY]
    fault = failures[0]
    assert fault.is_fault
    assert fault.message == "An internal error occurred while validating 'Name'."
    assert fault.attempted_value == ""

    fault_logs = [entry for entry in logs if entry["event"] == "rule_fault"]
    assert len(fault_logs) == 1
    assert fault_logs[0]["log_level"] == "error"
    assert fault_logs[0]["rule"] == "ExplodingRule"
    assert fault_logs[0]["error"] == "boom"


def test_rule_fault_counts_as_failure_for_stop_cascade():
    chain = PropertyRuleChain("Name", [ExplodingRule(), NotEmptyRule()], cascade_mode=CascadeMode.STOP)
    failures = _run(chain, {"Name": ""})
    assert [f.error_code for f in failures] == [ErrorCode.RULE_FAULT]


def test_predicate_that_raises_is_a_fault():
    chain = PropertyRuleChain("Age", [PredicateRule(lambda v: v > 0)])
    failures = _run(chain, {"Age": "ten"})
    assert failures[0].is_fault


def test_condition_that_raises_is_a_fault():
    rule = NotNullRule(conditions=(lambda inst: inst["missing"],))
    failures = _run(PropertyRuleChain("Name", [rule]), {"Name": None})
    assert [f.error_code for f in failures] == [ErrorCode.RULE_FAULT]


# ==============================================================================
# Conditions and naming
# ==============================================================================


def test_unmet_condition_skips_rule():
    rule = NotEmptyRule(conditions=(lambda inst: inst["kind"] == "company",))
    chain = PropertyRuleChain("VatNumber", [rule])
    assert _run(chain, {"kind": "person", "VatNumber": ""}) == ()
    assert len(_run(chain, {"kind": "company", "VatNumber": ""})) == 1


def test_display_name_defaults_to_humanized_property_name():
    chain = PropertyRuleChain("first_name", [NotEmptyRule()])
    assert chain.display_name == "First Name"
    assert _run(chain, {"first_name": ""})[0].message == "'First Name' must not be empty."


def test_chain_context_is_separate_from_root():
    root = ValidationContext({"Name": ""}, shape_name="Person")
    child = PropertyRuleChain("Name", [NotEmptyRule()]).execute(root)
    assert root.failures == ()
    root.merge(child)
    assert len(root.failures) == 1


# ==============================================================================
# Cross-property rules
# ==============================================================================


def test_cross_property_rule_sees_earlier_failures_read_only():
    seen = []

    def check(instance, context):
        seen.append(context.failures)
        return instance["Password"] == instance["Confirm"]

    root = ValidationContext({"Password": "a", "Confirm": "b", "Name": ""}, shape_name="Signup")
    root.merge(PropertyRuleChain("Name", [NotEmptyRule()]).execute(root))

    cross = CrossPropertyRule(PredicateRule(check), property_name="Confirm")
    child = cross.execute(root)

    assert isinstance(seen[0], tuple)
    assert [f.property_name for f in seen[0]] == ["Name"]
    assert [f.property_name for f in child.failures] == ["Name", "Confirm"]
    root.merge(child)
    assert [f.property_name for f in root.failures] == ["Name", "Confirm"]
