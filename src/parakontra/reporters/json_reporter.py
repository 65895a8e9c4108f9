# src/parakontra/reporters/json_reporter.py
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from parakontra.api.results import Outcome
from parakontra.version import VERSION


def build_payload(outcome: Outcome, contract_name: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"parakontra_version": VERSION, "contract": contract_name}
    payload.update(outcome.to_dict())
    return payload


def render_json(outcome: Outcome, contract_name: Optional[str] = None) -> str:
    """Stable JSON document for machine consumers (sorted keys, repr fallback)."""
    return json.dumps(build_payload(outcome, contract_name), indent=2, sort_keys=True, default=repr)
