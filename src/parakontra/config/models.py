# src/parakontra/config/models.py
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from parakontra.errors import ContractConfigError


class ConstraintKind(str, Enum):
    """
    Closed set of constraint kinds a parameter may declare.

    `default` and `required` decide presence; the rest are value checks and
    run in the order fixed by `parakontra.rules.execution_plan`.
    """

    TYPE = "type"
    REQUIRED = "required"
    DEFAULT = "default"
    NUMERICALITY = "numericality"
    IN = "in"
    NOT_IN = "not_in"
    FORMAT = "format"
    LENGTH = "length"
    INNER = "inner"
    STRUCT = "struct"
    FUNC = "func"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def names(cls) -> List[str]:
        return [k.value for k in cls]


def _normalize_kind(key: str) -> str:
    # `in_` / `type_` spelling for keyword-argument call sites
    if key.endswith("_") and key[:-1] in ConstraintKind.names():
        return key[:-1]
    return key


def unwrap_config_error(exc: PydanticValidationError) -> ContractConfigError:
    """Turn a pydantic ValidationError from contract parsing into a ContractConfigError."""
    for err in exc.errors():
        inner = (err.get("ctx") or {}).get("error")
        if isinstance(inner, ContractConfigError):
            return inner
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", str(exc))
    return ContractConfigError(f"{loc}: {msg}" if loc else msg)


class ParameterSpec(BaseModel):
    """
    One declared parameter: its name plus a mapping of constraint kind to
    constraint configuration.

    Accepts either ``{"name": ..., "constraints": {...}}`` or the flat form
    ``{"name": ..., "type": "integer", "required": True}``. An ``inner``
    configuration is parsed into a nested `Contract`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Parameter name, unique within its contract.")
    constraints: Dict[str, Any] = Field(
        default_factory=dict, description="Constraint kind -> constraint configuration."
    )

    _plan: Any = PrivateAttr(default=None)

    @model_validator(mode="before")
    @classmethod
    def _gather_flat_constraints(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "constraints" not in data:
            data = dict(data)
            name = data.pop("name", None)
            return {"name": name, "constraints": data}
        return data

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ContractConfigError("parameter name must be a non-empty string")
        return v

    @field_validator("constraints", mode="after")
    @classmethod
    def _check_constraints(cls, v: Dict[str, Any], info: ValidationInfo) -> Mapping[str, Any]:
        name = info.data.get("name", "?")
        known = ConstraintKind.names()
        out: Dict[str, Any] = {}
        for raw_key, cfg in v.items():
            key = _normalize_kind(raw_key)
            if key not in known:
                raise ContractConfigError(
                    f"unknown constraint '{raw_key}' (expected one of: {', '.join(known)})",
                    parameter=name,
                )
            if key in out:
                raise ContractConfigError(f"constraint '{key}' declared twice", parameter=name)
            if key == ConstraintKind.INNER.value:
                cfg = _parse_inner(name, cfg)
            out[key] = cfg
        return MappingProxyType(out)

    @model_validator(mode="after")
    def _compile_plan(self) -> "ParameterSpec":
        # per-kind configuration shape is checked by building the rules
        from parakontra.rules.execution_plan import RuleExecutionPlan

        self._plan = RuleExecutionPlan(self)
        return self

    # ------------------------------------------------------------------ #

    def has(self, kind: str) -> bool:
        return str(kind) in self.constraints

    def get(self, kind: str, default: Any = None) -> Any:
        return self.constraints.get(str(kind), default)

    @property
    def has_default(self) -> bool:
        return self.has(ConstraintKind.DEFAULT)

    @property
    def default(self) -> Any:
        return self.get(ConstraintKind.DEFAULT)

    def __str__(self) -> str:
        return f"{self.name}({dict(self.constraints)})"


def _parse_inner(name: str, cfg: Any) -> "Contract":
    if isinstance(cfg, Contract):
        return cfg
    if not isinstance(cfg, (Mapping, list, tuple)):
        raise ContractConfigError(
            f"expected a mapping of field name to constraints, got {type(cfg).__name__}",
            parameter=name,
            kind="inner",
        )
    try:
        return Contract.model_validate({"name": name, "parameters": cfg})
    except PydanticValidationError as e:
        nested = unwrap_config_error(e)
        raise ContractConfigError(str(nested), parameter=name, kind="inner") from e


class Contract(BaseModel):
    """
    Ordered, immutable set of parameter specs for one operation.

    ``parameters`` may be given as a list of specs / spec dicts or as a
    mapping ``{name: constraints}`` (declaration order is kept).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: Optional[str] = None
    parameters: Tuple[ParameterSpec, ...] = ()

    _engine: Any = PrivateAttr(default=None)

    @field_validator("parameters", mode="before")
    @classmethod
    def _coerce_parameters(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, Mapping):
            specs = []
            for pname, cfg in v.items():
                if isinstance(cfg, ParameterSpec):
                    specs.append(cfg)
                elif cfg is None:
                    specs.append({"name": pname, "constraints": {}})
                elif isinstance(cfg, Mapping):
                    specs.append({"name": pname, "constraints": dict(cfg)})
                else:
                    raise ContractConfigError(
                        f"constraints must be a mapping, got {type(cfg).__name__}", parameter=str(pname)
                    )
            return tuple(specs)
        if isinstance(v, (list, tuple)):
            return tuple(v)
        raise ContractConfigError(f"parameters must be a list or mapping, got {type(v).__name__}")

    @model_validator(mode="after")
    def _check_and_compile(self) -> "Contract":
        seen = set()
        for spec in self.parameters:
            if spec.name in seen:
                raise ContractConfigError("duplicate parameter name", parameter=spec.name)
            seen.add(spec.name)

        from parakontra.engine.engine import ValidationEngine

        self._engine = ValidationEngine(self)
        return self

    # ------------------------------------------------------------------ #

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.parameters]

    def get(self, name: str) -> Optional[ParameterSpec]:
        for p in self.parameters:
            if p.name == name:
                return p
        return None

    def __len__(self) -> int:
        return len(self.parameters)
