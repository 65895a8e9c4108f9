# src/parakontra/rules/builtin/dtype.py
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, List

from pydantic import BaseModel

from parakontra.logging import get_logger
from parakontra.rules.base import BaseRule, Failure
from parakontra.rules.registry import register_rule

_logger = get_logger(__name__)

WRONG_TYPE = "has wrong type"


def is_struct(value: Any) -> bool:
    """Tagged-record check: dataclass instance, pydantic model or namedtuple."""
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
        return True
    return isinstance(value, tuple) and hasattr(value, "_fields")


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@register_rule("type")
class DtypeRule(BaseRule):
    """
    Structural type check of a parameter value.

    params:
      - a tag string: boolean, integer, float, string, tuple, map, struct,
        list, atom, function (plus the aliases in _ALIASES)
      - or a Python class, checked with isinstance (bool is never an int)

    Semantics:
      - An unrecognized tag string always passes; contracts written against
        a type this checker does not know must not start failing.
    """

    _CHECKS: Dict[str, Callable[[Any], bool]] = {
        "boolean": lambda v: isinstance(v, bool),
        "integer": _is_integer,
        "float": lambda v: isinstance(v, float),
        "string": lambda v: isinstance(v, str),
        "tuple": lambda v: isinstance(v, tuple),
        "map": lambda v: isinstance(v, Mapping),
        "struct": is_struct,
        "list": lambda v: isinstance(v, list),
        "atom": lambda v: isinstance(v, Enum),
        "function": callable,
    }

    _ALIASES = {
        "bool": "boolean",
        "int": "integer",
        "str": "string",
        "dict": "map",
        "mapping": "map",
        "record": "struct",
        "symbol": "atom",
        "enum": "atom",
        "callable": "function",
    }

    def configure(self) -> None:
        if isinstance(self.params, type):
            self._check = self._isinstance_check(self.params)
            return
        if not isinstance(self.params, str):
            raise self._config_error(
                f"expected a type tag string or a class, got {type(self.params).__name__}"
            )
        tag = self.params.strip().lower()
        tag = self._ALIASES.get(tag, tag)
        self._check = self._CHECKS.get(tag)
        if self._check is None:
            _logger.debug(
                "Parameter '%s': unknown type tag '%s', values will not be type-checked",
                self.parameter,
                self.params,
            )

    @staticmethod
    def _isinstance_check(cls: type) -> Callable[[Any], bool]:
        if cls is int:
            return _is_integer
        return lambda v: isinstance(v, cls)

    @property
    def known(self) -> bool:
        return self._check is not None

    def check(self, value: Any) -> List[Failure]:
        if self._check is None or self._check(value):
            return []
        return [WRONG_TYPE]
