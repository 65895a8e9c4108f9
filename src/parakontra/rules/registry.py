# src/parakontra/rules/registry.py
from __future__ import annotations

from typing import Callable, Dict, List, Type

from parakontra.rules.base import BaseRule

# Registry: constraint kind -> rule class
_RULES: Dict[str, Type[BaseRule]] = {}


def register_rule(name: str) -> Callable[[Type[BaseRule]], Type[BaseRule]]:
    """
    Decorator to register a rule class under a constraint kind.
    """

    def deco(cls: Type[BaseRule]) -> Type[BaseRule]:
        if name in _RULES:
            raise ValueError(f"Rule '{name}' is already registered.")
        _RULES[name] = cls
        cls.rule_name = name
        return cls

    return deco


def get_rule(name: str) -> Type[BaseRule]:
    return _RULES[name]


def registered_rules() -> List[str]:
    return sorted(_RULES)


def register_default_rules() -> None:
    """
    Eagerly import built-in rules so their @register_rule decorators run
    and populate the registry.
    """
    # Local imports to trigger decorator side-effects
    from parakontra.rules.builtin import allowed_values  # noqa: F401
    from parakontra.rules.builtin import custom_check  # noqa: F401
    from parakontra.rules.builtin import disallowed_values  # noqa: F401
    from parakontra.rules.builtin import dtype  # noqa: F401
    from parakontra.rules.builtin import inner  # noqa: F401
    from parakontra.rules.builtin import length  # noqa: F401
    from parakontra.rules.builtin import numericality  # noqa: F401
    from parakontra.rules.builtin import regex  # noqa: F401
    from parakontra.rules.builtin import struct  # noqa: F401
