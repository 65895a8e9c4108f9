from pathlib import Path

import pytest
import yaml

import parakontra


@pytest.fixture
def scenario_contract():
    """a: optional integer defaulting to 1; b: required positive integer."""
    return parakontra.define_contract(
        {
            "a": {"type": "integer", "default": 1},
            "b": {"type": "integer", "required": True, "numericality": {"greater_than": 0}},
        },
        name="scenario",
    )


@pytest.fixture
def write_contract(tmp_path):
    """Write a contract YAML file and return its path."""

    def _write(parameters, name="test_contract", filename="contract.yml", **extra) -> Path:
        doc = {"name": name, "parameters": parameters}
        doc.update(extra)
        path = tmp_path / filename
        path.write_text(yaml.safe_dump(doc, sort_keys=False))
        return path

    return _write


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run from an empty directory with no PARAKONTRA_* environment."""
    for key in ("PARAKONTRA_LOG_LEVEL", "PARAKONTRA_ON_FAIL", "PARAKONTRA_OUTPUT_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
