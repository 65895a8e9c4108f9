# src/parakontra/reporters/rich_reporter.py
from __future__ import annotations

from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from parakontra.api.results import Accepted, Outcome, Rejected
from parakontra.config.models import Contract

console = Console()


def report_success(msg: str, out: Optional[Console] = None) -> None:
    (out or console).print(f"[bold green]✅ {escape(msg)}[/bold green]")


def report_failure(msg: str, out: Optional[Console] = None) -> None:
    (out or console).print(f"[bold red]❌ {escape(msg)}[/bold red]")


def _add_errors(node: Tree, entry: Any) -> None:
    if isinstance(entry, dict):
        for key, sub in entry.items():
            _add_errors(node.add(f"[bold]{escape(str(key))}[/bold]"), sub)
        return
    for item in entry:
        if isinstance(item, dict):
            _add_errors(node, item)
        else:
            node.add(f"[red]{escape(str(item))}[/red]")


def render_outcome(outcome: Outcome, label: str = "contract", out: Optional[Console] = None) -> None:
    """Print an outcome: a value table when accepted, an error tree when rejected."""
    out = out or console
    if isinstance(outcome, Accepted):
        report_success(f"{label}: accepted ({len(outcome.params)} parameter(s))", out)
        if outcome.params:
            table = Table(show_header=True, header_style="bold")
            table.add_column("parameter")
            table.add_column("value")
            for name, value in outcome.params.items():
                table.add_row(escape(name), escape(repr(value)))
            out.print(table)
        return

    if isinstance(outcome, Rejected):
        report_failure(f"{label}: rejected ({len(outcome.errors)} parameter(s) failed)", out)
        tree = Tree(f"[bold]{label}[/bold]")
        _add_errors(tree, outcome.errors)
        out.print(tree)
        return

    out.print(repr(outcome))


def render_contract(contract: Contract, out: Optional[Console] = None) -> None:
    """Print the parameters of a contract and their constraints."""
    out = out or console
    table = Table(title=contract.name or "contract", show_header=True, header_style="bold")
    table.add_column("parameter")
    table.add_column("constraints")
    for spec in contract.parameters:
        parts = []
        for kind, cfg in spec.constraints.items():
            if isinstance(cfg, Contract):
                parts.append(f"{kind}=<{len(cfg)} field(s): {', '.join(cfg.names)}>")
            elif callable(cfg) and not isinstance(cfg, type):
                parts.append(f"{kind}={getattr(cfg, '__name__', 'callable')}")
            else:
                parts.append(f"{kind}={cfg!r}")
        table.add_row(escape(spec.name), escape(", ".join(parts)) or "-")
    out.print(table)
