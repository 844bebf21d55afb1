"""Komenda: phx summary — liczności i kategorie wczytanej treści."""

from __future__ import annotations

import argparse
from collections import Counter

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from phx._content import add_data_argument, data_path, load_state

console = Console(width=200)


def run(args: argparse.Namespace) -> None:
    state = load_state(args)
    graph = state.graph

    console.print(
        f"\n[bold]{data_path(args)}[/bold]  [dim](wariant: {graph.payload.schema_variant})[/dim]"
    )
    console.print(
        f"  Aksjomaty: [bold]{len(graph.axioms)}[/bold]  "
        f"Argumenty: [bold]{len(graph.arguments)}[/bold]  "
        f"Krawędzie: [bold]{len(graph.edges)}[/bold]  "
        f"Pytania: [bold]{len(graph.questionnaire)}[/bold]  "
        f"Źródła: [bold]{len(graph.sources)}[/bold]"
    )

    axioms_per    = Counter(a.category for a in graph.axioms)
    arguments_per = Counter(a.category for a in graph.arguments)

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("KATEGORIA", no_wrap=True)
    table.add_column("NAZWA",     no_wrap=False, max_width=40)
    table.add_column("AKSJOMATY", justify="right", no_wrap=True)
    table.add_column("ARGUMENTY", justify="right", no_wrap=True)

    known = {c.id for c in graph.categories}
    for c in graph.categories:
        table.add_row(
            Text(c.id, style=f"bold {c.color}"),
            c.name,
            str(axioms_per.get(c.id, 0)),
            str(arguments_per.get(c.id, 0)),
        )
    for cat_id in sorted((axioms_per.keys() | arguments_per.keys()) - known):
        table.add_row(
            Text(cat_id or "—", style="dim"),
            "[dim](niezdefiniowana)[/dim]",
            str(axioms_per.get(cat_id, 0)),
            str(arguments_per.get(cat_id, 0)),
        )

    console.print(table)

    levels = Counter(a.level for a in graph.arguments)
    if levels:
        parts = "  ".join(f"{lvl}: {levels[lvl]}" for lvl in sorted(levels))
        console.print(f"  [dim]Poziomy argumentów — {parts}[/dim]")

    referenced = frozenset().union(*(
        a.activation_conditions.referenced_ids()
        for a in graph.arguments
        if a.activation_conditions is not None
    ))
    unused = sorted(a.id for a in graph.axioms if a.id not in referenced)
    if unused:
        console.print(f"  [yellow]Aksjomaty nieużyte w warunkach aktywacji:[/yellow] {', '.join(unused)}")

    if graph.payload.notes:
        console.print(f"  [yellow]Uwagi wczytywania: {len(graph.payload.notes)}[/yellow]")
    console.print()


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "summary",
        help="Podsumowanie treści: liczności węzłów i kategorie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje treść i wypisuje liczbę aksjomatów, argumentów i krawędzi
oraz rozkład węzłów na kategorie.

Przykłady:
  phx summary
  phx summary --data graph-data.json
        """,
    )
    add_data_argument(p)
    p.set_defaults(func=run)
