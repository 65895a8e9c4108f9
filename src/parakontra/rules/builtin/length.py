# src/parakontra/rules/builtin/length.py
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Optional, Tuple

from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.builtin.dtype import WRONG_TYPE
from parakontra.rules.registry import register_rule


def measure(value: Any) -> Optional[int]:
    """
    Size of a value for length checks, or None when it has no length.

    Strings count characters; lists, tuples and mappings count items;
    Enum members count the characters of their name.
    """
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value)
    if isinstance(value, Enum):
        return len(value.name)
    return None


@register_rule("length")
class LengthRule(BaseRule):
    """
    Size checks on strings, lists, tuples, mappings and Enum members.

    params (mapping, every key optional):
      - is:  exact size
      - min: minimum size (inclusive)
      - max: maximum size (inclusive)
      - in:  inclusive (lo, hi) pair, or a step-1 range()

    Values of any other type fail with "has wrong type".
    """

    def configure(self) -> None:
        cfg = self._require_mapping({"is", "min", "max", "in"})
        checks: List[Tuple[str, Any]] = []
        for key in ("is", "min", "max"):
            if key in cfg:
                checks.append((key, self._size(key, cfg[key])))
        if "in" in cfg:
            checks.append(("in", self._bounds(cfg["in"])))
        self._checks = checks

    def _size(self, key: str, n: Any) -> int:
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise self._config_error(f"'{key}' must be a non-negative integer, got {n!r}")
        return n

    def _bounds(self, bounds: Any) -> Tuple[int, int]:
        if isinstance(bounds, range):
            if bounds.step != 1:
                raise self._config_error("'in' range must have step 1")
            lo, hi = bounds.start, bounds.stop - 1
        elif isinstance(bounds, (list, tuple)) and len(bounds) == 2:
            lo, hi = bounds
        else:
            raise self._config_error(f"'in' must be a (min, max) pair or a range, got {bounds!r}")
        lo, hi = self._size("in", lo), self._size("in", hi)
        if lo > hi:
            raise self._config_error(f"'in' lower bound {lo} is greater than upper bound {hi}")
        return lo, hi

    def check(self, value: Any) -> List[Failure]:
        size = measure(value)
        if size is None:
            return [WRONG_TYPE]

        failures: List[Failure] = []
        for key, expected in self._checks:
            if key == "is" and size != expected:
                failures.append(f"length must be equal to {expected}")
            elif key == "min" and size < expected:
                failures.append(f"length must be greater than or equal to {expected}")
            elif key == "max" and size > expected:
                failures.append(f"length must be less than or equal to {expected}")
            elif key == "in" and not (expected[0] <= size <= expected[1]):
                failures.append(f"length must be between {expected[0]} and {expected[1]}")
        return failures
