# src/parakontra/api/rules.py
"""
Helper functions for inline contract definitions.

Usage:
    from parakontra import rules

    contract = parakontra.define_contract([
        rules.param("user_id", type="integer", required=True),
        rules.param("email", type="string", format=r"^[^@]+@[^@]+$"),
        rules.param("age", type="integer", numericality=rules.numericality(gte=0, lt=150)),
        rules.param("tags", type="list", length=rules.length(max=10), default=[]),
    ])

`in` is a Python keyword, so pass it as ``in_=[...]`` (``type_`` works too).
"""

from typing import Any, Dict, Mapping, Optional, Tuple, Union

Number = Union[int, float]


def param(name: str, **constraints: Any) -> Dict[str, Any]:
    """
    Declare one parameter.

    Args:
        name: Parameter name
        **constraints: Constraint kind -> configuration (type, required,
            default, numericality, in_, not_in, format, length, inner,
            struct, func)

    Returns:
        Parameter dict for use with parakontra.define_contract()
    """
    normalized: Dict[str, Any] = {}
    for key, value in constraints.items():
        if key.endswith("_"):
            key = key[:-1]
        normalized[key] = value
    return {"name": name, "constraints": normalized}


def numericality(
    equal_to: Optional[Number] = None,
    gt: Optional[Number] = None,
    gte: Optional[Number] = None,
    lt: Optional[Number] = None,
    lte: Optional[Number] = None,
) -> Dict[str, Number]:
    """
    Build a numericality configuration. Only given bounds are included.

    Raises:
        ValueError: If no bound is given, or a lower bound exceeds an upper one
    """
    cfg: Dict[str, Number] = {}
    if equal_to is not None:
        cfg["equal_to"] = equal_to
    if gt is not None:
        cfg["greater_than"] = gt
    if gte is not None:
        cfg["greater_than_or_equal_to"] = gte
    if lt is not None:
        cfg["less_than"] = lt
    if lte is not None:
        cfg["less_than_or_equal_to"] = lte

    if not cfg:
        raise ValueError("numericality: at least one comparison must be provided")

    lower = [b for b in (gt, gte) if b is not None]
    upper = [b for b in (lt, lte) if b is not None]
    if lower and upper and max(lower) > min(upper):
        raise ValueError(f"numericality: lower bound ({max(lower)}) must be <= upper bound ({min(upper)})")

    return cfg


def length(
    min: Optional[int] = None,
    max: Optional[int] = None,
    is_: Optional[int] = None,
    between: Optional[Union[Tuple[int, int], range]] = None,
) -> Dict[str, Any]:
    """
    Build a length configuration.

    Args:
        min: Minimum size (inclusive)
        max: Maximum size (inclusive)
        is_: Exact size
        between: Inclusive (lo, hi) pair or a range(); stored under ``in``

    Raises:
        ValueError: If nothing is given, or if min > max
    """
    if min is None and max is None and is_ is None and between is None:
        raise ValueError("length: at least one of 'min', 'max', 'is_' or 'between' must be provided")
    if min is not None and max is not None and min > max:
        raise ValueError(f"length: min ({min}) must be <= max ({max})")

    cfg: Dict[str, Any] = {}
    if is_ is not None:
        cfg["is"] = is_
    if min is not None:
        cfg["min"] = min
    if max is not None:
        cfg["max"] = max
    if between is not None:
        cfg["in"] = between
    return cfg


def inner(**fields: Mapping[str, Any]) -> Dict[str, Mapping[str, Any]]:
    """
    Build an inner (nested) configuration from keyword fields.

    Example:
        rules.param("address", type="map", inner=rules.inner(
            city={"type": "string", "required": True},
            zip={"type": "string", "format": r"^\\d{5}$"},
        ))
    """
    return dict(fields)


class _RulesNamespace:
    """Namespace so ``from parakontra import rules`` exposes the helpers."""

    param = staticmethod(param)
    numericality = staticmethod(numericality)
    length = staticmethod(length)
    inner = staticmethod(inner)


rules = _RulesNamespace()
