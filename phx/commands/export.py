"""Komenda: phx export — jednoplikowy eksport graph-data.json z raportem walidacji."""

from __future__ import annotations

import argparse
import json
import pathlib
import sys

from rich.console import Console

from phx import _config
from phx._content import add_data_argument, data_path, load_state, read_raw
from solver import payload_to_dict
from validator import GraphValidator, load_schema

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    raw   = read_raw(args)
    state = load_state(args, raw)

    try:
        schema = load_schema(_config.schema_path())
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[red]Nie można wczytać schematu:[/red] {exc}")
        raise SystemExit(1)

    report = GraphValidator(schema).validate(raw)
    if not report.is_valid:
        console.print(
            f"[yellow]Treść zawiera {len(report.errors)} błąd(ów) — "
            f"eksport zawiera raport w polu 'validation'.[/yellow]"
        )
        if args.fail_on_error:
            raise SystemExit(1)

    out = payload_to_dict(state.graph.payload)
    out["validation"] = report.to_dict()
    text = json.dumps(out, ensure_ascii=False, indent=2) + "\n"

    if args.output == "-":
        sys.stdout.write(text)
        return

    target = pathlib.Path(args.output)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    console.print(
        f"[green]Wyeksportowano[/green] {data_path(args)} → [bold]{target}[/bold]  "
        f"[dim]({len(out['axioms'])} aksjomatów, {len(out['arguments'])} argumentów, "
        f"{len(out['edges'])} krawędzi)[/dim]"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "export",
        help="Eksportuje treść do jednego pliku JSON (wariant kanoniczny + walidacja).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje treść (YAML lub JSON, dowolny wariant), normalizuje ją do wariantu
kanonicznego i zapisuje jako jeden plik JSON z polem "validation".

Przykłady:
  phx export --output public/graph-data.json
  phx export --data stara-treść.json --output - | jq .validation
        """,
    )
    add_data_argument(p)
    p.add_argument(
        "--output", "-o",
        required=True,
        metavar="PLIK",
        help="Plik wyjściowy ('-' = stdout).",
    )
    p.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Nie eksportuj, jeśli walidacja zgłosi błędy (kod wyjścia 1).",
    )
    p.set_defaults(func=run)
