# src/parakontra/api/decorators.py
"""
Operation decorator.

Gates a unit of business logic behind a parameter contract.
"""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Any, Callable, Dict, Literal, Mapping, NoReturn, Optional, Sequence, Union

from parakontra.api.results import Completed, Interrupted, Outcome
from parakontra.config.loader import ContractLoader, build_contract
from parakontra.config.models import Contract
from parakontra.engine.engine import ValidationEngine, filter_defined
from parakontra.errors import Interrupt, ValidationError
from parakontra.logging import get_logger

_logger = get_logger(__name__)

OnFailMode = Literal["return_result", "raise"]

_ON_FAIL_MODES = ("return_result", "raise")


def interrupt(payload: Any = None) -> NoReturn:
    """
    Stop the running operation on purpose.

    The operation returns ``Interrupted(payload)`` instead of a completed
    result, whatever its ``on_fail`` mode.
    """
    raise Interrupt(payload)


def _resolve_contract(
    params: Optional[Union[Sequence[Any], Mapping[str, Any]]],
    contract: Optional[Union[Contract, str, Path]],
    name: str,
) -> Contract:
    if isinstance(contract, Contract):
        return contract
    if contract is not None:
        return ContractLoader.from_path(contract)
    return build_contract(params, name=name)


def operation(
    params: Optional[Union[Sequence[Any], Mapping[str, Any]]] = None,
    contract: Optional[Union[Contract, str, Path]] = None,
    on_fail: Optional[OnFailMode] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that validates keyword values before running business logic.

    The decorated function receives the normalized values as keyword
    arguments (declared parameters only, defaults filled in). Absent
    optional parameters are not passed, so give them Python defaults.

    Args:
        params: Parameter declarations (list or mapping, see define_contract)
        contract: A Contract, or a path to a YAML contract (alternative to params)
        on_fail: Behaviour when validation fails:
            - "return_result": return Rejected(errors); success returns
              Completed(value)
            - "raise": raise ValidationError; success returns the bare value
            Defaults to ParakontraConfig.on_fail.

    Returns:
        Decorated function. It also exposes ``.contract`` and
        ``.defined_params(values)``.

    Raises:
        ValueError: If neither or both of params/contract are given, or on
            an unknown on_fail mode
        ContractConfigError: If the contract is malformed

    Example:
        ```python
        from parakontra import operation, interrupt, rules

        @operation(params=[
            rules.param("user_id", type="integer", required=True),
            rules.param("notify", type="boolean", default=False),
        ])
        def deactivate_user(user_id, notify):
            if user_id == 1:
                interrupt({"reason": "cannot deactivate the admin"})
            return {"user_id": user_id, "notified": notify}

        deactivate_user(user_id=7)      # Completed({'user_id': 7, 'notified': False})
        deactivate_user(user_id="7")    # Rejected({'user_id': ['has wrong type']})
        deactivate_user(user_id=1)      # Interrupted({'reason': ...})
        ```
    """
    if (params is None) == (contract is None):
        raise ValueError("Exactly one of 'params' or 'contract' must be provided")

    mode = on_fail
    if mode is None:
        from parakontra.config.settings import load_config

        mode = load_config().on_fail
    if mode not in _ON_FAIL_MODES:
        raise ValueError(f"on_fail must be one of {_ON_FAIL_MODES}, got {mode!r}")

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        resolved = _resolve_contract(params, contract, func.__name__)
        engine = ValidationEngine.for_contract(resolved)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Union[Outcome, Any]:
            values = _collect_values(func.__name__, args, kwargs)
            outcome = engine.run(values)

            if not outcome.passed:
                _logger.debug("Operation %s rejected: %s", func.__name__, outcome.errors)
                if mode == "raise":
                    raise ValidationError(outcome)
                return outcome

            try:
                value = func(**outcome.params)
            except Interrupt as signal:
                _logger.debug("Operation %s interrupted", func.__name__)
                return Interrupted(payload=signal.payload)

            if mode == "raise":
                return value
            return Completed(value=value, params=outcome.params)

        wrapper.contract = resolved  # type: ignore[attr-defined]
        wrapper.defined_params = functools.partial(filter_defined, resolved)  # type: ignore[attr-defined]
        return wrapper

    return decorator


def _collect_values(name: str, args: Sequence[Any], kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Accept ``op(values_mapping)``, ``op(**values)`` or both (keywords win)."""
    if len(args) > 1 or (args and not isinstance(args[0], Mapping)):
        raise TypeError(f"{name}() takes a single mapping of values and/or keyword values")
    values: Dict[str, Any] = dict(args[0]) if args else {}
    values.update(kwargs)
    return values
