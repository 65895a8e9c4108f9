# src/parakontra/rules/presence.py
"""
Presence constraints: ``default`` and ``required``.

These do not check a value. They decide whether a parameter counts as
present before any value check runs.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Tuple

from parakontra.config.models import ParameterSpec
from parakontra.errors import ContractConfigError

IS_REQUIRED = "is required"


class _Missing:
    """Sentinel for an absent key (distinct from a supplied None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def lookup(values: Mapping[str, Any], name: str) -> Any:
    """Return the supplied value, or MISSING if the key is absent."""
    if name in values:
        return values[name]
    return MISSING


def apply_default(spec: ParameterSpec, value: Any) -> Tuple[bool, Any]:
    """
    Substitute the configured default for an absent value.

    Returns:
        (present, value) - the default is copied so callers cannot mutate
        the contract through it
    """
    if value is MISSING:
        if spec.has_default:
            return True, copy.deepcopy(spec.default)
        return False, MISSING
    return True, value


def required_flag(spec: ParameterSpec) -> bool:
    """Read and shape-check the ``required`` configuration."""
    flag = spec.get("required", False)
    if not isinstance(flag, bool):
        raise ContractConfigError(
            f"expected true/false, got {flag!r}", parameter=spec.name, kind="required"
        )
    return flag
