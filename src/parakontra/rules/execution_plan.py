# src/parakontra/rules/execution_plan.py
from __future__ import annotations

"""
Per-parameter execution plan.

Flow
----
  1) Look up the supplied value
  2) Substitute `default` when absent
  3) Absent + `required` -> "is required", nothing else runs
  4) Absent otherwise -> skipped (not an error, not in the output)
  5) Value checks in EVALUATION_ORDER, all of them, collecting failures;
     a failed `type` check skips `inner` only
  6) On success, rules may normalize the value (inner defaults)
"""

from typing import Any, List, Mapping, Tuple

from parakontra.config.models import ParameterSpec
from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.factory import RuleFactory
from parakontra.rules.presence import IS_REQUIRED, MISSING, apply_default, lookup, required_flag

# Fixed evaluation order; `func` is always last.
EVALUATION_ORDER: Tuple[str, ...] = (
    "type",
    "numericality",
    "in",
    "not_in",
    "format",
    "length",
    "inner",
    "struct",
    "func",
)


class RuleExecutionPlan:
    """
    Compiled form of one ParameterSpec.

    Built once per spec; holds no per-call state, so one plan can serve
    any number of concurrent validations.
    """

    def __init__(self, spec: ParameterSpec):
        self.spec = spec
        self.name = spec.name
        self.required = required_flag(spec)
        built = RuleFactory(spec).build_rules()
        self.rules: List[BaseRule] = [built[k] for k in EVALUATION_ORDER if k in built]

    def resolve(self, values: Mapping[str, Any]) -> Tuple[bool, Any, List[Failure]]:
        """
        Presence step.

        Returns:
            (present, value, failures). ``failures`` is ["is required"] for a
            missing required parameter; ``present`` is False for a skipped one.
        """
        present, value = apply_default(self.spec, lookup(values, self.name))
        if not present and self.required:
            return False, MISSING, [IS_REQUIRED]
        return present, value, []

    def evaluate(self, value: Any) -> List[Failure]:
        """Run every value check in order and collect failures."""
        failures: List[Failure] = []
        type_failed = False

        for rule in self.rules:
            if rule.name == "inner" and type_failed:
                continue
            result = rule.check(value)
            if rule.name == "type" and result:
                type_failed = True
            failures.extend(result)

        return failures

    def normalize(self, value: Any) -> Any:
        for rule in self.rules:
            value = rule.normalize(value)
        return value

    def __repr__(self) -> str:
        kinds = ", ".join(r.name for r in self.rules)
        return f"RuleExecutionPlan({self.name}: required={self.required}, checks=[{kinds}])"
