"""Komenda: phx questionnaire — lista pytań kwestionariusza."""

from __future__ import annotations

import argparse
import json
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from phx._content import add_data_argument, load_state
from solver.export import questionnaire_to_dict

console = Console(width=200)


def run(args: argparse.Namespace) -> None:
    state = load_state(args)
    graph = state.graph
    items = list(graph.questionnaire)
    if args.category:
        items = [q for q in items if q.category in set(args.category)]

    if args.json:
        out = [questionnaire_to_dict(q) for q in items]
        sys.stdout.write(json.dumps(out, ensure_ascii=False, indent=2) + "\n")
        return

    if not items:
        console.print("[yellow]Brak pytań kwestionariusza.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("#",         justify="right", no_wrap=True)
    table.add_column("AKSJOMAT",  style="bold cyan", no_wrap=True)
    table.add_column("KATEGORIA", no_wrap=True)
    table.add_column("PYTANIE",   no_wrap=False, max_width=90)

    for i, q in enumerate(items, start=1):
        axiom_id = q.axiom_id if graph.axiom(q.axiom_id) else f"[red]{q.axiom_id}?[/red]"
        table.add_row(str(i), axiom_id, q.category, q.question)

    console.print(table)
    console.print(f"  [dim]{len(items)} pytań[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "questionnaire",
        help="Listuje pytania kwestionariusza (jedno pytanie na aksjomat).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla pytania kwestionariusza. Odpowiedzi zapisane jako
{"<axiomId>": true|false} można przekazać do: phx solve --answers PLIK.

Przykłady:
  phx questionnaire
  phx questionnaire --category ethics metaphysics
  phx questionnaire --json
        """,
    )
    add_data_argument(p)
    p.add_argument(
        "--category", "-c",
        nargs="+",
        metavar="KATEGORIA",
        help="Filtruj po kategorii.",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz pytania jako JSON na stdout.",
    )
    p.set_defaults(func=run)
