# src/parakontra/rules/builtin/custom_check.py
from __future__ import annotations

from typing import Any, List

from parakontra.logging import get_logger, log_exception
from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.registry import register_rule

_logger = get_logger(__name__)

INVALID = "is invalid"


@register_rule("func")
class CustomCheckRule(BaseRule):
    """
    User predicate ``(value) -> bool``. Always evaluated last.

    A falsy return value or an exception raised by the predicate fails the
    check with "is invalid"; the exception never escapes validation.
    """

    def configure(self) -> None:
        if not callable(self.params):
            raise self._config_error(f"expected a callable, got {type(self.params).__name__}")
        self.predicate = self.params

    def check(self, value: Any) -> List[Failure]:
        try:
            ok = self.predicate(value)
        except Exception as e:
            log_exception(_logger, f"Predicate for parameter '{self.parameter}' raised", e)
            return [INVALID]
        return [] if ok else [INVALID]
