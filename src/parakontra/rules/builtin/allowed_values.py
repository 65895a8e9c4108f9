# src/parakontra/rules/builtin/allowed_values.py
from __future__ import annotations

from typing import Any, List, Tuple

from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.registry import register_rule


def freeze_values(rule: BaseRule) -> Tuple[Any, ...]:
    """
    Normalize an in/not_in configuration into a tuple.

    Sets are sorted when their items allow it so failure messages stay
    deterministic across runs.
    """
    values = rule.params
    if isinstance(values, (set, frozenset)):
        try:
            return tuple(sorted(values))
        except TypeError:
            return tuple(sorted(values, key=repr))
    if isinstance(values, (list, tuple, range)):
        return tuple(values)
    raise rule._config_error(f"expected a list of values, got {type(values).__name__}")


def contains(values: Tuple[Any, ...], value: Any) -> bool:
    # equality membership; bool and int stay distinct (True is not 1 here)
    for v in values:
        if type(v) is bool or type(value) is bool:
            if type(v) is type(value) and v == value:
                return True
        elif v == value:
            return True
    return False


@register_rule("in")
class AllowedValuesRule(BaseRule):
    """Value must equal one of the configured values."""

    def configure(self) -> None:
        self.values = freeze_values(self)

    def check(self, value: Any) -> List[Failure]:
        if contains(self.values, value):
            return []
        return [f"must be one of {list(self.values)!r}"]
