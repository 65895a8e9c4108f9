# src/parakontra/config/loader.py
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from parakontra.config.models import Contract, unwrap_config_error
from parakontra.errors import ContractConfigError, ContractLoadError
from parakontra.logging import get_logger

_logger = get_logger(__name__)

ParametersInput = Union[Sequence[Any], Mapping[str, Any]]


def build_contract(parameters: ParametersInput, name: Optional[str] = None) -> Contract:
    """
    Parse and compile a contract, raising ContractConfigError on any
    malformed definition.
    """
    try:
        contract = Contract.model_validate({"name": name, "parameters": parameters})
    except PydanticValidationError as e:
        raise unwrap_config_error(e) from e

    _logger.debug("Contract %s defined with %d parameter(s)", name or "<anonymous>", len(contract))
    return contract


def resolve_object(ref: str) -> Any:
    """Import ``"package.module:attr"`` (attr may be dotted)."""
    module_name, _, attr = ref.partition(":")
    if not module_name or not attr:
        raise ContractConfigError(f"'{ref}' is not of the form 'package.module:attr'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ContractConfigError(f"cannot import module '{module_name}': {e}") from e
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ContractConfigError(f"'{module_name}' has no attribute '{attr}'") from e
    return obj


class ContractLoader:
    """
    Load contracts from YAML files or plain dicts.

    File layout::

        name: create_user
        parameters:
          - name: email
            type: string
            required: true
            format: "^[^@]+@[^@]+$"
          - name: age
            type: integer
            numericality: {greater_than_or_equal_to: 0}
          - name: validator
            func: "myapp.checks:is_valid_age"

    ``parameters`` may also be a mapping of name -> constraints. ``func``
    values and ``struct`` values containing ':' are import references.
    """

    @staticmethod
    def from_path(path: Union[str, Path]) -> Contract:
        p = Path(path)
        if not p.exists():
            raise ContractLoadError(str(path), "file not found")
        if p.is_dir():
            raise ContractLoadError(str(path), "path is a directory, not a file")
        try:
            text = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContractLoadError(str(path), f"cannot read file: {e}") from e
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ContractLoadError(str(path), f"invalid YAML: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ContractLoadError(str(path), "top level must be a mapping")
        data.setdefault("name", p.stem)
        return ContractLoader.from_dict(data)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Contract:
        unknown = set(data) - {"name", "parameters"}
        if unknown:
            raise ContractConfigError(f"unknown contract key(s): {', '.join(sorted(unknown))}")
        parameters = _resolve_references(data.get("parameters") or [])
        return build_contract(parameters, name=data.get("name"))


def _resolve_references(parameters: Any) -> Any:
    if isinstance(parameters, Mapping):
        return {k: _resolve_constraints(v) for k, v in parameters.items()}
    if isinstance(parameters, list):
        out = []
        for item in parameters:
            if isinstance(item, Mapping) and "constraints" in item:
                item = dict(item)
                item["constraints"] = _resolve_constraints(item["constraints"])
                out.append(item)
            else:
                out.append(_resolve_constraints(item))
        return out
    return parameters


def _resolve_constraints(cfg: Any) -> Any:
    if not isinstance(cfg, Mapping):
        return cfg
    out: Dict[str, Any] = dict(cfg)
    if isinstance(out.get("func"), str):
        out["func"] = resolve_object(out["func"])
    if isinstance(out.get("struct"), str) and ":" in out["struct"]:
        out["struct"] = resolve_object(out["struct"])
    if "inner" in out:
        out["inner"] = _resolve_references(out["inner"])
    return out
