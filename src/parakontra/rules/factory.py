# src/parakontra/rules/factory.py
from __future__ import annotations

from typing import Any, Dict, List

from parakontra.config.models import ParameterSpec
from parakontra.errors import ContractConfigError
from parakontra.rules.base import BaseRule
from parakontra.rules.registry import get_rule, register_default_rules

# Kinds that decide presence rather than check the value
PRESENCE_KINDS = ("required", "default")


class RuleFactory:
    """
    Translate a ParameterSpec into instantiated rule objects.

    Responsibilities:
      - Resolve each value-check kind from the registry
      - Instantiate with (kind, config, parameter name)
      - Surface malformed configurations as ContractConfigError
    """

    def __init__(self, spec: ParameterSpec):
        self.spec = spec
        register_default_rules()

    def build_rules(self) -> Dict[str, BaseRule]:
        """Instantiate a rule for every value-check kind the spec declares."""
        rules: Dict[str, BaseRule] = {}

        for kind, config in self.spec.constraints.items():
            if kind in PRESENCE_KINDS:
                continue

            try:
                rule_cls = get_rule(kind)
            except KeyError as e:
                raise ContractConfigError(
                    f"unknown constraint '{kind}' - not found in registry.", parameter=self.spec.name
                ) from e

            try:
                rules[kind] = rule_cls(kind, config, parameter=self.spec.name)
            except ContractConfigError:
                raise
            except Exception as e:
                raise ContractConfigError(
                    f"failed to build rule: {e}", parameter=self.spec.name, kind=kind
                ) from e

        return rules

    @staticmethod
    def summarize_rules(rules: List[BaseRule]) -> List[Dict[str, Any]]:
        """Return a summary of rule configurations (for debug/reporting)."""
        return [
            {
                "parameter": rule.parameter,
                "kind": rule.name,
                "params": rule.params,
                "class": rule.__class__.__name__,
            }
            for rule in rules
        ]
