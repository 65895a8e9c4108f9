# src/parakontra/rules/builtin/struct.py
from __future__ import annotations

from typing import Any, List

from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.registry import register_rule

WRONG_STRUCT = "has wrong struct"


@register_rule("struct")
class StructRule(BaseRule):
    """
    Value must be an instance of the configured record type.

    params:
      - a class (isinstance check)
      - an instance (its class is used)
      - a class name string, matched against __name__ or __qualname__
    """

    def configure(self) -> None:
        if isinstance(self.params, str):
            if not self.params:
                raise self._config_error("struct name must not be empty")
            self.struct_name = self.params
            self.struct_cls = None
        else:
            self.struct_cls = self.params if isinstance(self.params, type) else type(self.params)
            self.struct_name = self.struct_cls.__name__

    def check(self, value: Any) -> List[Failure]:
        if self.struct_cls is not None:
            ok = isinstance(value, self.struct_cls)
        else:
            cls = type(value)
            ok = self.struct_name in (cls.__name__, cls.__qualname__)
        return [] if ok else [WRONG_STRUCT]
