# src/parakontra/errors.py
"""
Exception taxonomy for Parakontra.

Validation failures are data (see `parakontra.api.results.Rejected`) and are
never raised by the engine. Exceptions here cover contract configuration,
contract loading, the strict operation mode and the interrupt signal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from parakontra.api.results import Rejected


class ParakontraError(Exception):
    """Base class for all Parakontra errors."""


class ContractConfigError(ParakontraError, ValueError):
    """
    A contract definition is malformed.

    Raised at contract-construction time (duplicate parameter names,
    unknown constraint kinds, constraint values of the wrong shape).
    """

    def __init__(self, message: str, parameter: Optional[str] = None, kind: Optional[str] = None):
        self.parameter = parameter
        self.kind = kind
        prefix = ""
        if parameter is not None and kind is not None:
            prefix = f"Parameter '{parameter}', constraint '{kind}': "
        elif parameter is not None:
            prefix = f"Parameter '{parameter}': "
        super().__init__(prefix + message)


class ContractLoadError(ParakontraError):
    """A contract file could not be found or parsed."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot load contract '{path}': {detail}")


class ValidationError(ParakontraError):
    """
    Raised by operations in ``on_fail="raise"`` mode when validation rejects
    the supplied values. The structured outcome is kept on ``.result``.
    """

    def __init__(self, result: "Rejected"):
        self.result = result
        failed = ", ".join(result.errors.keys())
        super().__init__(f"Validation failed for parameter(s): {failed}")

    @property
    def errors(self):
        return self.result.errors


class Interrupt(Exception):
    """Control-flow signal raised by `parakontra.interrupt()`."""

    def __init__(self, payload: Any = None):
        self.payload = payload
        super().__init__(payload)


class SettingsError(ParakontraError):
    """The project configuration file or environment is invalid."""
