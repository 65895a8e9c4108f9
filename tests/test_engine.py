# tests/test_engine.py
"""Tests for the parameter and contract validators."""

import pytest

import parakontra
from parakontra import Accepted, Rejected
from parakontra.engine.engine import ValidationEngine, validate_parameter
from parakontra.errors import ParakontraError
from parakontra.rules.execution_plan import EVALUATION_ORDER, RuleExecutionPlan


def _plan(name="p", **constraints):
    spec = parakontra.ParameterSpec.model_validate({"name": name, "constraints": constraints})
    return spec._plan


class TestExecutionPlan:
    """Tests for plan compilation."""

    def test_order_is_fixed(self):
        assert EVALUATION_ORDER[0] == "type"
        assert EVALUATION_ORDER[-1] == "func"

    def test_rules_follow_evaluation_order_not_declaration_order(self):
        plan = _plan(func=lambda v: True, length={"min": 1}, type="string", required=True)
        assert [r.name for r in plan.rules] == ["type", "length", "func"]
        assert plan.required is True

    def test_required_must_be_bool(self):
        with pytest.raises(ValueError, match="expected true/false"):
            _plan(required="yes")

    def test_spec_carries_compiled_plan(self):
        plan = _plan(type="string")
        assert isinstance(plan, RuleExecutionPlan)
        assert [r.name for r in plan.rules] == ["type"]


class TestValidateParameter:
    """Tests for the per-parameter algorithm."""

    def test_absent_optional_is_skipped(self):
        res = validate_parameter(_plan(type="integer"), {})
        assert res.passed
        assert res.skipped
        assert res.present is False

    def test_absent_required(self):
        res = validate_parameter(_plan(type="integer", required=True), {})
        assert res.failures == ["is required"]

    def test_required_stops_other_checks(self):
        res = validate_parameter(_plan(required=True, func=lambda v: False), {})
        assert res.failures == ["is required"]

    def test_none_counts_as_present(self):
        """A supplied None is the caller's value, not an absence."""
        res = validate_parameter(_plan(required=True), {"p": None})
        assert res.passed
        assert res.present is True
        assert res.value is None

    def test_default_substituted(self):
        res = validate_parameter(_plan(default=5, required=True), {})
        assert res.passed
        assert res.value == 5

    def test_default_not_used_when_supplied(self):
        res = validate_parameter(_plan(default=5), {"p": None})
        assert res.value is None

    def test_default_is_checked(self):
        res = validate_parameter(_plan(default="x", type="integer"), {})
        assert res.failures == ["has wrong type"]

    def test_all_failures_collected_in_evaluator_order(self):
        plan = _plan(func=lambda v: False, type="integer", **{"in": [1, 2]})
        res = validate_parameter(plan, {"p": "x"})
        assert res.failures == ["has wrong type", "must be one of [1, 2]", "is invalid"]

    def test_type_failure_skips_inner_only(self):
        plan = _plan(type="map", inner={"a": {"required": True}}, func=lambda v: False)
        res = validate_parameter(plan, {"p": "not a map"})
        assert res.failures == ["has wrong type", "is invalid"]

    def test_inner_runs_without_type(self):
        plan = _plan(inner={"a": {"required": True}})
        res = validate_parameter(plan, {"p": "not a map"})
        assert res.failures == ["has wrong type"]

    def test_unknown_type_does_not_skip_inner(self):
        plan = _plan(type="record_like", inner={"a": {"required": True}})
        res = validate_parameter(plan, {"p": {}})
        assert res.failures == [{"a": ["is required"]}]


class TestContractValidation:
    """Tests for contract-level validation."""

    def test_scenario_accepted(self, scenario_contract):
        assert parakontra.validate(scenario_contract, {"b": 5}) == Accepted({"a": 1, "b": 5})

    def test_scenario_numericality(self, scenario_contract):
        assert parakontra.validate(scenario_contract, {"b": -1}) == Rejected(
            {"b": ["must be greater than 0"]}
        )

    def test_scenario_required(self, scenario_contract):
        assert parakontra.validate(scenario_contract, {}) == Rejected({"b": ["is required"]})

    def test_nested_error_map(self):
        contract = parakontra.define_contract(
            {"p": {"type": "map", "inner": {"a": {"type": "integer", "required": True}}}}
        )
        outcome = parakontra.validate(contract, {"p": {"a": "x"}})
        assert outcome == Rejected({"p": {"a": ["has wrong type"]}})

    def test_deeply_nested_error_map(self):
        contract = parakontra.define_contract(
            {
                "order": {
                    "type": "map",
                    "inner": {
                        "customer": {
                            "type": "map",
                            "required": True,
                            "inner": {"email": {"type": "string", "format": "@"}},
                        }
                    },
                }
            }
        )
        outcome = parakontra.validate(contract, {"order": {"customer": {"email": "nope"}}})
        assert outcome.errors == {"order": {"customer": {"email": ["has invalid format"]}}}

    def test_inner_mixed_with_flat_failure(self):
        """Nested map stays an element of the list when other checks also fail."""
        contract = parakontra.define_contract(
            {"p": {"inner": {"a": {"required": True}}, "func": lambda v: False}}
        )
        outcome = parakontra.validate(contract, {"p": {}})
        assert outcome.errors == {"p": [{"a": ["is required"]}, "is invalid"]}

    def test_inner_defaults_in_normalized_output(self):
        contract = parakontra.define_contract(
            {"opts": {"type": "map", "inner": {"retries": {"type": "integer", "default": 3}}}}
        )
        outcome = parakontra.validate(contract, {"opts": {"verbose": True}})
        assert outcome == Accepted({"opts": {"verbose": True, "retries": 3}})

    def test_default_and_required(self):
        contract = parakontra.define_contract({"p": {"default": "D", "required": True}})
        assert parakontra.validate(contract, {}) == Accepted({"p": "D"})

    def test_undeclared_keys_dropped(self):
        contract = parakontra.define_contract({"a": {"type": "integer"}})
        assert parakontra.validate(contract, {"a": 1, "zzz": 2}) == Accepted({"a": 1})

    def test_absent_optional_omitted(self):
        contract = parakontra.define_contract({"a": {"type": "integer"}, "b": {}})
        assert parakontra.validate(contract, {"b": 2}) == Accepted({"b": 2})

    def test_all_or_nothing(self):
        contract = parakontra.define_contract(
            {"ok": {"type": "string"}, "bad": {"type": "integer"}}
        )
        outcome = parakontra.validate(contract, {"ok": "fine", "bad": "x"})
        assert isinstance(outcome, Rejected)
        assert outcome.errors == {"bad": ["has wrong type"]}
        assert not hasattr(outcome, "params")

    def test_errors_in_declaration_order(self):
        contract = parakontra.define_contract(
            [
                {"name": "z", "required": True},
                {"name": "a", "required": True},
                {"name": "m", "required": True},
            ]
        )
        outcome = parakontra.validate(contract, {})
        assert list(outcome.errors) == ["z", "a", "m"]

    def test_multi_failure_aggregation(self):
        contract = parakontra.define_contract(
            {"p": {"type": "integer", "numericality": {"equal_to": 3}, "func": lambda v: v == 3}}
        )
        outcome = parakontra.validate(contract, {"p": 2.0})
        assert outcome.errors == {"p": ["has wrong type", "must be equal to 3", "is invalid"]}

    def test_mutable_default_not_shared(self):
        contract = parakontra.define_contract({"tags": {"type": "list", "default": []}})
        first = parakontra.validate(contract, {})
        first.params["tags"].append("x")
        second = parakontra.validate(contract, {})
        assert second.params == {"tags": []}

    def test_predicate_fault_does_not_abort_contract(self):
        contract = parakontra.define_contract(
            {"p": {"func": lambda v: 1 / 0}, "q": {"type": "string"}}
        )
        outcome = parakontra.validate(contract, {"p": 1, "q": 2})
        assert outcome.errors == {"p": ["is invalid"], "q": ["has wrong type"]}

    def test_unhashable_inner_pair_key_is_rejected(self):
        contract = parakontra.define_contract({"p": {"inner": {"a": {"type": "integer"}}}})
        outcome = parakontra.validate(contract, {"p": [([1], 2)]})
        assert outcome == Rejected({"p": ["has wrong type"]})

    def test_nested_defaults_in_pair_form(self):
        contract = parakontra.define_contract(
            {"p": {"inner": {"cfg": {"type": "map", "inner": {"x": {"default": 1}}}}}}
        )
        as_map = parakontra.validate(contract, {"p": {"cfg": {}}})
        as_pairs = parakontra.validate(contract, {"p": [("cfg", {})]})
        assert as_map.params["p"]["cfg"] == {"x": 1}
        assert dict(as_pairs.params["p"])["cfg"] == {"x": 1}

    def test_values_must_be_mapping(self, scenario_contract):
        with pytest.raises(ParakontraError):
            parakontra.validate(scenario_contract, [("b", 5)])

    def test_empty_contract_accepts_anything(self):
        contract = parakontra.define_contract([])
        assert parakontra.validate(contract, {"x": 1}) == Accepted({})


class TestEngine:
    """Tests for ValidationEngine itself."""

    def test_engine_cached_on_contract(self, scenario_contract):
        assert ValidationEngine.for_contract(scenario_contract) is ValidationEngine.for_contract(
            scenario_contract
        )

    def test_check_returns_per_parameter_results(self, scenario_contract):
        results = ValidationEngine(scenario_contract).check({"b": 0})
        assert [r.name for r in results] == ["a", "b"]
        assert results[0].value == 1
        assert results[1].failures == ["must be greater than 0"]

    def test_validate_accepts_declarations(self):
        outcome = parakontra.validate({"x": {"type": "string"}}, {"x": "hi"})
        assert outcome == Accepted({"x": "hi"})


class TestFilterDefined:
    """Tests for filter_defined."""

    def test_filters_and_defaults(self):
        contract = parakontra.define_contract({"a": {}, "b": {"default": 2}})
        assert parakontra.filter_defined(contract, {"a": 1, "c": 3}) == {"a": 1, "b": 2}

    def test_does_not_validate(self):
        contract = parakontra.define_contract({"a": {"type": "integer", "required": True}})
        assert parakontra.filter_defined(contract, {"a": "nope"}) == {"a": "nope"}
        assert parakontra.filter_defined(contract, {}) == {}
