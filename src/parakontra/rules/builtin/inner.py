# src/parakontra/rules/builtin/inner.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from parakontra.config.models import Contract
from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.builtin.dtype import WRONG_TYPE
from parakontra.rules.registry import register_rule


def as_mapping(value: Any) -> Optional[Dict[str, Any]]:
    """
    View a value as a mapping for nested validation.

    Mappings are copied; lists/tuples of (key, value) pairs are read in order
    and the first occurrence of a key wins. Anything else, including pairs
    with unhashable keys, gives None.
    """
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        out: Dict[str, Any] = {}
        for item in value:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                return None
            key, val = item
            try:
                hash(key)
            except TypeError:
                return None
            out.setdefault(key, val)
        return out
    return None


@register_rule("inner")
class InnerRule(BaseRule):
    """
    Validate the fields of a mapping value against a nested contract.

    params:
      - a Contract (ParameterSpec parses the ``{field: constraints}`` form)

    A failing nested validation contributes a single failure: the nested
    error map.
    """

    def configure(self) -> None:
        # engine imports the rule registry, so bind it lazily
        from parakontra.engine.engine import ValidationEngine

        if not isinstance(self.params, Contract):
            raise self._config_error(f"expected a nested contract, got {type(self.params).__name__}")
        self.engine = ValidationEngine.for_contract(self.params)

    def check(self, value: Any) -> List[Failure]:
        fields = as_mapping(value)
        if fields is None:
            return [WRONG_TYPE]
        outcome = self.engine.run(fields)
        if outcome.passed:
            return []
        return [outcome.errors]

    def normalize(self, value: Any) -> Any:
        fields = as_mapping(value)
        outcome = self.engine.run(fields)
        if isinstance(value, Mapping):
            merged = dict(value)
            merged.update(outcome.params)
            return merged
        # pair sequences keep their order; the first entry of each declared
        # key takes the normalized value, defaulted fields are appended
        pairs: List[Any] = []
        seen = set()
        for item in value:
            key = item[0]
            if key in outcome.params and key not in seen:
                item = type(item)((key, outcome.params[key]))
            seen.add(key)
            pairs.append(item)
        pairs.extend((k, v) for k, v in outcome.params.items() if k not in seen)
        return type(value)(pairs)
