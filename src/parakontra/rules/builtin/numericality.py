# src/parakontra/rules/builtin/numericality.py
from __future__ import annotations

import numbers
import operator
from decimal import Decimal
from typing import Any, Callable, Dict, List, Tuple

from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.registry import register_rule

NOT_A_NUMBER = "is not a number"


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


@register_rule("numericality")
class NumericalityRule(BaseRule):
    """
    Numeric comparisons against a number value.

    params (mapping, every key optional):
      - equal_to                 (aliases: eq, equals)
      - greater_than             (alias: gt)
      - greater_than_or_equal_to (aliases: gte, min)
      - less_than                (alias: lt)
      - less_than_or_equal_to    (aliases: lte, max)

    Each comparison is evaluated on its own and every failing one reports.
    """

    _COMPARISONS: Dict[str, Tuple[Callable[[Any, Any], bool], str]] = {
        "equal_to": (operator.eq, "must be equal to {}"),
        "greater_than": (operator.gt, "must be greater than {}"),
        "greater_than_or_equal_to": (operator.ge, "must be greater than or equal to {}"),
        "less_than": (operator.lt, "must be less than {}"),
        "less_than_or_equal_to": (operator.le, "must be less than or equal to {}"),
    }

    _ALIASES = {
        "eq": "equal_to",
        "equals": "equal_to",
        "gt": "greater_than",
        "gte": "greater_than_or_equal_to",
        "min": "greater_than_or_equal_to",
        "lt": "less_than",
        "lte": "less_than_or_equal_to",
        "max": "less_than_or_equal_to",
    }

    def configure(self) -> None:
        cfg = self._require_mapping(set(self._COMPARISONS) | set(self._ALIASES))
        checks: List[Tuple[str, Any]] = []
        seen = set()
        for key, bound in cfg.items():
            canonical = self._ALIASES.get(key, key)
            if canonical in seen:
                raise self._config_error(f"comparison '{canonical}' given more than once")
            if not is_number(bound):
                raise self._config_error(f"'{key}' must be a number, got {bound!r}")
            seen.add(canonical)
            checks.append((canonical, bound))
        self._checks = checks

    def check(self, value: Any) -> List[Failure]:
        if not is_number(value):
            return [NOT_A_NUMBER]

        failures: List[Failure] = []
        for canonical, bound in self._checks:
            op, template = self._COMPARISONS[canonical]
            if not op(value, bound):
                failures.append(template.format(bound))
        return failures
