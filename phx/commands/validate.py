"""Komenda: phx validate — diagnostyka treści grafu (etapy A–E)."""

from __future__ import annotations

import argparse
import json
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from phx import _config
from phx._content import add_data_argument, data_path, read_raw
from validator import GraphValidator, load_schema

console = Console()


def _issue_table(issues, style: str) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Kod",      style=style, no_wrap=True)
    table.add_column("Ścieżka", style="cyan", no_wrap=True)
    table.add_column("Komunikat")
    table.add_column("Poprawka", style="dim")
    for i in issues:
        table.add_row(str(i.code), i.path, i.message, i.expected_fix)
    return table


def run(args: argparse.Namespace) -> None:
    raw = read_raw(args)

    schema_file = args.schema or _config.schema_path()
    try:
        schema = load_schema(schema_file)
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[red]Nie można wczytać schematu:[/red] {exc}")
        raise SystemExit(1)

    report = GraphValidator(schema).validate(raw)
    failed = not report.is_valid or (args.strict and bool(report.warnings))

    if args.json:
        sys.stdout.write(json.dumps(report.to_dict(detail=True), ensure_ascii=False, indent=2) + "\n")
        if failed:
            raise SystemExit(1)
        return

    where = data_path(args)
    if report.is_valid:
        console.print(f"[green]OK[/green]  Treść [bold]{where}[/bold] jest poprawna.")
    else:
        console.print(
            f"[red]BŁĄD[/red]  Treść [bold]{where}[/bold] — {len(report.errors)} błąd(ów)."
        )
        console.print(_issue_table(report.errors, "red"))

    if report.warnings:
        console.print(f"[yellow]Ostrzeżenia ({len(report.warnings)}):[/yellow]")
        console.print(_issue_table(report.warnings, "yellow"))

    if report.orphaned_arguments:
        console.print(
            f"[yellow]Osierocone argumenty:[/yellow] {', '.join(report.orphaned_arguments)}"
        )
    if report.circular_dependencies:
        console.print("[red]Cykle wymagań:[/red]")
        for cycle in report.circular_dependencies:
            console.print(f"  [red]·[/red] {cycle}")

    if failed:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje treść grafu (schemat, odwołania, cykle, osierocone argumenty).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje treść grafu (etapy A–E):

  A  JSON Schema + wczytanie   (graph_schema.json, wymaga jsonschema>=4.0)
  B  Tożsamość                 (duplikaty id, kolizje aksjomat/argument)
  C  Odwołania                 (warunki aktywacji, krawędzie, kategorie, kwestionariusz)
  D  Cykle                     (łańcuchy required_arguments)
  E  Osierocone argumenty      (nieaktywowalne przy żadnym wyborze aksjomatów)

Kod wyjścia 1 przy błędach (z --strict także przy ostrzeżeniach).

Przykłady:
  phx validate
  phx validate --data treść/ --strict
  phx validate --json > raport.json
        """,
    )
    add_data_argument(p)
    p.add_argument(
        "--schema", "-s",
        default=None,
        metavar="PLIK",
        help="Schemat JSON treści (domyślnie: $PHX_SCHEMA lub dołączony graph_schema.json).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Traktuj ostrzeżenia jak błędy (kod wyjścia 1).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz raport jako JSON na stdout.",
    )
    p.set_defaults(func=run)
