from __future__ import annotations

"""
Parakontra CLI - declarative parameter contracts

Thin layer: parse args -> load contract -> validate -> print via reporters.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml

from parakontra.config.loader import ContractLoader
from parakontra.config.settings import load_config
from parakontra.engine.engine import ValidationEngine
from parakontra.errors import ContractConfigError, ContractLoadError, ParakontraError, SettingsError
from parakontra.logging import configure_logging
from parakontra.reporters.json_reporter import render_json
from parakontra.reporters.rich_reporter import render_contract, render_outcome, report_failure, report_success
from parakontra.version import VERSION

app = typer.Typer(help="Parakontra CLI - declarative parameter contracts")

# Exit codes (stable for CI/CD)
EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


@app.callback(invoke_without_command=True)
def _version(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None, "--version", help="Show the Parakontra version and exit.", is_eager=True
    ),
) -> None:
    if version:
        typer.echo(f"parakontra {VERSION}")
        raise typer.Exit(code=EXIT_SUCCESS)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=EXIT_SUCCESS)


def _read_values(values_path: Optional[Path], inline: Optional[str]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if values_path is not None:
        loaded = yaml.safe_load(values_path.read_text(encoding="utf-8"))
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"{values_path}: values must be a mapping")
        data.update(loaded or {})
    if inline is not None:
        loaded = json.loads(inline)
        if not isinstance(loaded, dict):
            raise ValueError("--json: values must be a JSON object")
        data.update(loaded)
    return data


@app.command("validate")
def validate(
    contract: Path = typer.Argument(..., help="Path to the contract YAML file."),
    values: Optional[Path] = typer.Option(
        None, "--values", help="JSON or YAML file holding the parameter values."
    ),
    inline_json: Optional[str] = typer.Option(
        None, "--json", help='Inline JSON object of values, e.g. \'{"b": 5}\'. Overrides --values keys.'
    ),
    output_format: Optional[str] = typer.Option(
        None, "--output-format", "-o", help="Output format: rich | json (default from config)."
    ),
) -> None:
    """Validate a set of values against a contract."""
    try:
        cfg = load_config()
        configure_logging(cfg.log_level)
        fmt = output_format or cfg.output_format
        if fmt not in ("rich", "json"):
            raise typer.BadParameter(f"unknown output format '{fmt}'", param_hint="--output-format")

        contract_obj = ContractLoader.from_path(contract)
        supplied = _read_values(values, inline_json)
        outcome = ValidationEngine.for_contract(contract_obj).run(supplied)
    except typer.BadParameter:
        raise
    except (ContractConfigError, ContractLoadError, SettingsError) as e:
        report_failure(f"Contract error: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    except (ParakontraError, ValueError, OSError, yaml.YAMLError) as e:
        report_failure(f"Error: {e}")
        raise typer.Exit(code=EXIT_RUNTIME_ERROR)

    if fmt == "json":
        typer.echo(render_json(outcome, contract_obj.name))
    else:
        render_outcome(outcome, label=contract_obj.name or str(contract))

    raise typer.Exit(code=EXIT_SUCCESS if outcome.passed else EXIT_VALIDATION_FAILED)


@app.command("check")
def check(
    contract: Path = typer.Argument(..., help="Path to the contract YAML file."),
) -> None:
    """Load and compile a contract without validating any values."""
    try:
        configure_logging(load_config().log_level)
        contract_obj = ContractLoader.from_path(contract)
    except (ContractConfigError, ContractLoadError, SettingsError) as e:
        report_failure(f"Contract error: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    except (ParakontraError, OSError) as e:
        report_failure(f"Error: {e}")
        raise typer.Exit(code=EXIT_RUNTIME_ERROR)

    render_contract(contract_obj)
    report_success(f"Contract OK: {len(contract_obj)} parameter(s)")
    raise typer.Exit(code=EXIT_SUCCESS)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
