# src/parakontra/api/results.py
"""
Result types for contract validation and operations.

Contract validation yields `Accepted` or `Rejected`; running an operation
adds `Completed` (business logic returned) and `Interrupted` (business
logic called `interrupt()`).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class OutcomeStatus(str, Enum):
    """Outcome discriminator, stable for JSON output."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    INTERRUPTED = "interrupted"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParameterResult:
    """
    Result of validating one parameter.

    Properties:
        name: Parameter name
        present: False when an optional, default-less parameter was absent
        value: Normalized value (after default substitution), None if absent
        failures: Ordered failure messages; a nested error map for `inner`
    """

    name: str
    present: bool
    value: Any = None
    failures: List[Any] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def skipped(self) -> bool:
        return self.passed and not self.present

    def error_entry(self) -> Any:
        """
        Error-map entry for this parameter.

        A lone nested error map (only `inner` failed) is returned as the map
        itself; otherwise the ordered list.
        """
        if len(self.failures) == 1 and isinstance(self.failures[0], dict):
            return self.failures[0]
        return list(self.failures)

    def __repr__(self) -> str:
        if self.passed:
            status = "SKIP" if not self.present else "PASS"
            return f"ParameterResult({self.name}) {status}"
        return f"ParameterResult({self.name}) FAIL - {self.failures!r}"


class Outcome(ABC):
    """Common surface of all outcomes."""

    status: OutcomeStatus

    @property
    def passed(self) -> bool:
        return self.status in (OutcomeStatus.ACCEPTED, OutcomeStatus.COMPLETED)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form, keyed by ``status``."""
        ...

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON; values that are not JSON-native fall back to repr()."""
        return json.dumps(self.to_dict(), indent=indent, default=repr)


@dataclass(frozen=True)
class Accepted(Outcome):
    """Every parameter passed. ``params`` holds the normalized values."""

    params: Dict[str, Any] = field(default_factory=dict)
    status: OutcomeStatus = field(default=OutcomeStatus.ACCEPTED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": str(self.status), "params": dict(self.params)}

    def __repr__(self) -> str:
        return f"Accepted({self.params!r})"


@dataclass(frozen=True)
class Rejected(Outcome):
    """
    At least one parameter failed.

    ``errors`` maps parameter name to its ordered failure list, or to a
    nested error map of the same shape for `inner` failures.
    """

    errors: Dict[str, Any] = field(default_factory=dict)
    status: OutcomeStatus = field(default=OutcomeStatus.REJECTED, init=False)

    @property
    def failed_parameters(self) -> List[str]:
        return list(self.errors)

    def messages(self) -> List[str]:
        """Flatten the error map into ``"path message"`` strings."""
        out: List[str] = []

        def walk(prefix: str, entry: Any) -> None:
            if isinstance(entry, dict):
                for k, v in entry.items():
                    walk(f"{prefix}.{k}" if prefix else str(k), v)
            else:
                for item in entry:
                    if isinstance(item, dict):
                        walk(prefix, item)
                    else:
                        out.append(f"{prefix} {item}")

        walk("", self.errors)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {"status": str(self.status), "errors": dict(self.errors)}

    def __repr__(self) -> str:
        return f"Rejected({self.errors!r})"


@dataclass(frozen=True)
class Interrupted(Outcome):
    """Business logic stopped on purpose via `interrupt(payload)`."""

    payload: Any = None
    status: OutcomeStatus = field(default=OutcomeStatus.INTERRUPTED, init=False)

    @property
    def passed(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"status": str(self.status), "payload": self.payload}

    def __repr__(self) -> str:
        return f"Interrupted({self.payload!r})"


@dataclass(frozen=True)
class Completed(Outcome):
    """Validation accepted and the business logic returned ``value``."""

    value: Any = None
    params: Dict[str, Any] = field(default_factory=dict)
    status: OutcomeStatus = field(default=OutcomeStatus.COMPLETED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": str(self.status), "value": self.value, "params": dict(self.params)}

    def __repr__(self) -> str:
        return f"Completed({self.value!r})"
