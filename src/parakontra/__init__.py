# src/parakontra/__init__.py
"""
Parakontra - Declarative parameter contracts

Usage:
    # CLI
    $ parakontra validate contract.yml --values values.json
    $ parakontra check contract.yml

    # Python API - Define and validate
    import parakontra
    from parakontra import rules

    contract = parakontra.define_contract([
        rules.param("a", type="integer", default=1),
        rules.param("b", type="integer", required=True, numericality={"greater_than": 0}),
    ])
    parakontra.validate(contract, {"b": 5})     # Accepted({'a': 1, 'b': 5})
    parakontra.validate(contract, {"b": -1})    # Rejected({'b': ['must be greater than 0']})

    # Python API - Operations
    @parakontra.operation(params={"name": {"type": "string", "required": True}})
    def greet(name):
        return f"hello {name}"
"""

from parakontra.version import VERSION as __version__

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

# API types
from parakontra.api.results import (
    Accepted,
    Completed,
    Interrupted,
    Outcome,
    OutcomeStatus,
    ParameterResult,
    Rejected,
)

# Operations
from parakontra.api.decorators import interrupt, operation

# Contract model
from parakontra.config.loader import ContractLoader, build_contract
from parakontra.config.models import ConstraintKind, Contract, ParameterSpec
from parakontra.config.settings import ParakontraConfig, load_config

# Core engine (for advanced usage)
from parakontra.engine.engine import ValidationEngine, filter_defined

from parakontra.errors import (
    ContractConfigError,
    ContractLoadError,
    Interrupt,
    ParakontraError,
    SettingsError,
    ValidationError,
)

# Logging
from parakontra.logging import configure_logging, get_logger

# Rules helpers. Keep after every subpackage import: loading the
# parakontra.rules subpackage rebinds this name.
from parakontra.api.rules import rules


# =============================================================================
# Core Functions
# =============================================================================


def define_contract(
    parameters: Union[Sequence[Any], Mapping[str, Any]],
    name: Optional[str] = None,
) -> Contract:
    """
    Build an immutable, compiled contract.

    Args:
        parameters: Either a list of parameter declarations
            (``rules.param(...)``, ``{"name": ..., **constraints}`` dicts or
            ParameterSpec objects) or a mapping ``{name: constraints}``
        name: Optional contract name (used in logs and reports)

    Returns:
        Contract

    Raises:
        ContractConfigError: Duplicate names, unknown constraint kinds, or a
            constraint configuration of the wrong shape

    Example:
        contract = parakontra.define_contract({
            "email": {"type": "string", "required": True, "format": r"@"},
            "age": {"type": "integer", "numericality": {"gte": 18}},
        })
    """
    return build_contract(parameters, name=name)


def load_contract(path: Union[str, Path]) -> Contract:
    """Load and compile a YAML contract file."""
    return ContractLoader.from_path(path)


def validate(
    contract: Union[Contract, Sequence[Any], Mapping[str, Any], str, Path],
    values: Mapping[str, Any],
) -> Union[Accepted, Rejected]:
    """
    Validate a mapping of values against a contract.

    Args:
        contract: A Contract, a YAML contract path, or parameter
            declarations accepted by define_contract()
        values: Parameter name -> supplied value

    Returns:
        Accepted(params) with normalized values, or Rejected(errors) with the
        error map. Validation failures are never raised.
    """
    if isinstance(contract, (str, Path)):
        contract = load_contract(contract)
    elif not isinstance(contract, Contract):
        contract = define_contract(contract)
    return ValidationEngine.for_contract(contract).run(values)


__all__ = [
    "__version__",
    # core
    "define_contract",
    "load_contract",
    "validate",
    "filter_defined",
    "operation",
    "interrupt",
    "rules",
    # types
    "Accepted",
    "Rejected",
    "Interrupted",
    "Completed",
    "Outcome",
    "OutcomeStatus",
    "ParameterResult",
    "Contract",
    "ParameterSpec",
    "ConstraintKind",
    "ContractLoader",
    "ValidationEngine",
    # config
    "ParakontraConfig",
    "load_config",
    # errors
    "ParakontraError",
    "ContractConfigError",
    "ContractLoadError",
    "ValidationError",
    "SettingsError",
    "Interrupt",
    # logging
    "configure_logging",
    "get_logger",
]
