from __future__ import annotations

"""
Validation Engine: contract-level orchestration.

Flow
----
  1) Compile the contract once: one RuleExecutionPlan per parameter
  2) For each parameter, in declaration order, validate it (presence,
     then value checks)
  3) Merge: normalized values for passing parameters, failures for the rest
  4) All-or-nothing: any failure -> Rejected(errors), else Accepted(params)

Principles
----------
- Pure: identical inputs -> identical outputs, no state between runs
- Failures are data: nothing raised for a value that fails a constraint
- Compile once: plans are built when the engine is built, never mutated
"""

from typing import Any, Dict, List, Mapping, Union

from parakontra.api.results import Accepted, ParameterResult, Rejected
from parakontra.config.models import Contract
from parakontra.errors import ParakontraError
from parakontra.logging import get_logger
from parakontra.rules.execution_plan import RuleExecutionPlan
from parakontra.rules.presence import apply_default, lookup

_logger = get_logger(__name__)


def validate_parameter(plan: RuleExecutionPlan, values: Mapping[str, Any]) -> ParameterResult:
    """Validate one declared parameter against the supplied values."""
    present, value, failures = plan.resolve(values)
    if failures:
        return ParameterResult(name=plan.name, present=False, failures=failures)
    if not present:
        return ParameterResult(name=plan.name, present=False)

    failures = plan.evaluate(value)
    if failures:
        return ParameterResult(name=plan.name, present=True, value=value, failures=failures)
    return ParameterResult(name=plan.name, present=True, value=plan.normalize(value))


class ValidationEngine:
    """
    Validates value mappings against one Contract.

    Contracts build their engine while validating, so malformed constraint
    configurations raise ContractConfigError at definition time.
    """

    def __init__(self, contract: Contract):
        self.contract = contract
        self.plans: List[RuleExecutionPlan] = [
            spec._plan if spec._plan is not None else RuleExecutionPlan(spec)
            for spec in contract.parameters
        ]

    @classmethod
    def for_contract(cls, contract: Contract) -> "ValidationEngine":
        """Return the engine cached on the contract, compiling it if absent."""
        engine = contract._engine
        if engine is None:
            engine = cls(contract)
            contract._engine = engine
        return engine

    # --------------------------------------------------------------------- #

    def check(self, values: Mapping[str, Any]) -> List[ParameterResult]:
        """Per-parameter results, in declaration order."""
        if not isinstance(values, Mapping):
            raise ParakontraError(
                f"Values must be a mapping of parameter name to value, got {type(values).__name__}"
            )
        return [validate_parameter(plan, values) for plan in self.plans]

    def run(self, values: Mapping[str, Any]) -> Union[Accepted, Rejected]:
        results = self.check(values)

        normalized: Dict[str, Any] = {}
        errors: Dict[str, Any] = {}
        for res in results:
            if not res.passed:
                errors[res.name] = res.error_entry()
            elif res.present:
                normalized[res.name] = res.value

        label = self.contract.name or "<anonymous>"
        if errors:
            _logger.debug("Contract %s rejected: %d parameter(s) failed", label, len(errors))
            return Rejected(errors=errors)
        _logger.debug("Contract %s accepted (%d parameter(s))", label, len(normalized))
        return Accepted(params=normalized)


def filter_defined(contract: Contract, values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Keep only declared parameters, filling configured defaults for absent ones.

    No constraint is checked.
    """
    out: Dict[str, Any] = {}
    for spec in contract.parameters:
        present, value = apply_default(spec, lookup(values, spec.name))
        if present:
            out[spec.name] = value
    return out
