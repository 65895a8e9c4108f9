# src/parakontra/rules/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from parakontra.errors import ContractConfigError

# A failure is a human-readable message, or a nested error map (inner).
Failure = Union[str, Dict[str, Any]]


class BaseRule(ABC):
    """
    Abstract base class for all constraint evaluators.

    A rule is built once per (parameter, constraint kind) from the declared
    configuration value and is then applied to any number of values.
    """

    name: str
    params: Any

    def __init__(self, name: str, params: Any, parameter: str = "?"):
        self.name = name
        self.params = params
        # parameter is set by the factory (owning ParameterSpec name)
        self.parameter = parameter
        self.configure()

    def __str__(self) -> str:
        return f"{self.name}({self.params!r})"

    def __repr__(self) -> str:
        return str(self)

    def configure(self) -> None:
        """Validate and pre-process ``self.params``. Override to reject bad shapes."""

    @abstractmethod
    def check(self, value: Any) -> List[Failure]:
        """Evaluate the constraint. An empty list means the value passed."""
        ...

    def normalize(self, value: Any) -> Any:
        """Return the value to expose after every check passed (identity by default)."""
        return value

    def _config_error(self, message: str) -> ContractConfigError:
        return ContractConfigError(message, parameter=self.parameter, kind=self.name)

    def _require_mapping(self, allowed_keys) -> Dict[str, Any]:
        """
        Check that params is a mapping whose keys are all in ``allowed_keys``.

        Returns:
            A plain dict copy of the params

        Raises:
            ContractConfigError: On a non-mapping or an unknown key
        """
        if not isinstance(self.params, dict) and not hasattr(self.params, "items"):
            raise self._config_error(f"expected a mapping, got {type(self.params).__name__}")
        cfg = dict(self.params.items())
        unknown = [k for k in cfg if k not in allowed_keys]
        if unknown:
            raise self._config_error(
                f"unknown option(s) {', '.join(map(str, unknown))} "
                f"(expected: {', '.join(sorted(allowed_keys))})"
            )
        return cfg
