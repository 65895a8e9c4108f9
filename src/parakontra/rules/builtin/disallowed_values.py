# src/parakontra/rules/builtin/disallowed_values.py
from __future__ import annotations

from typing import Any, List

from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.builtin.allowed_values import contains, freeze_values
from parakontra.rules.registry import register_rule


@register_rule("not_in")
class DisallowedValuesRule(BaseRule):
    """Value must not equal any of the configured values."""

    def configure(self) -> None:
        self.values = freeze_values(self)

    def check(self, value: Any) -> List[Failure]:
        if contains(self.values, value):
            return [f"must not be included in {list(self.values)!r}"]
        return []
