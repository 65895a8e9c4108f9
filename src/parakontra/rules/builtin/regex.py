# src/parakontra/rules/builtin/regex.py
from __future__ import annotations

import re
from typing import Any, List

from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.registry import register_rule

INVALID_FORMAT = "has invalid format"


@register_rule("format")
class RegexRule(BaseRule):
    """
    Fails when the value is not a string or the pattern is not found in it.

    params:
      - a regex string or a compiled pattern

    Notes:
      - Matching uses `search`, so patterns are unanchored unless they
        anchor themselves with ^ / $.
    """

    def configure(self) -> None:
        if isinstance(self.params, re.Pattern):
            self.pattern = self.params
            return
        if not isinstance(self.params, str):
            raise self._config_error(f"expected a regex string, got {type(self.params).__name__}")
        try:
            self.pattern = re.compile(self.params)
        except re.error as e:
            raise self._config_error(f"invalid regex {self.params!r}: {e}") from e

    def check(self, value: Any) -> List[Failure]:
        if isinstance(value, str) and self.pattern.search(value):
            return []
        return [INVALID_FORMAT]
