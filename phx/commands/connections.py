"""Komenda: phx connections — bezpośrednie sąsiedztwo węzła."""

from __future__ import annotations

import argparse
import json
import sys

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from data_model import Direction, RelationType
from phx._content import add_data_argument, load_state

console = Console(width=200)

RELATION_STYLE: dict[str, str] = {
    "implies":     "cyan",
    "contradicts": "red",
    "supports":    "green",
    "requires":    "yellow",
    "assumes":     "magenta",
}


def run(args: argparse.Namespace) -> None:
    state = load_state(args)
    connections = state.connectivity.get_connections(args.node)

    if args.type:
        wanted = {RelationType(t) for t in args.type}
        connections = [c for c in connections if c.relation_type in wanted]

    if args.json:
        out = [c.to_dict() for c in connections]
        sys.stdout.write(json.dumps(out, ensure_ascii=False, indent=2) + "\n")
        return

    node = state.graph.node(args.node)
    if node is None:
        console.print(f"[yellow]Węzeł '{args.node}' nie istnieje w grafie.[/yellow]")
        return

    console.print(f"\n[bold]{node.title}[/bold]  [dim]({node.kind}: {node.id})[/dim]")
    if not connections:
        console.print("[yellow]Brak połączeń.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("KIERUNEK", no_wrap=True)
    table.add_column("RELACJA",  no_wrap=True)
    table.add_column("SIŁA",     justify="right", no_wrap=True)
    table.add_column("WĘZEŁ",    style="bold", no_wrap=True)
    table.add_column("RODZAJ",   no_wrap=True)
    table.add_column("WYJAŚNIENIE", no_wrap=False, max_width=80)

    for c in connections:
        arrow = "→" if c.direction is Direction.OUTGOING else "←"
        rel   = str(c.relation_type)
        table.add_row(
            f"{arrow} {c.direction}",
            Text(rel, style=RELATION_STYLE.get(rel, "")),
            f"{c.edge.relation.strength:.2f}",
            c.node.id,
            str(c.node_type),
            c.edge.explanation or "—",
        )

    console.print(table)
    console.print(f"  [dim]{len(connections)} połączeń[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "connections",
        help="Listuje relacje wchodzące i wychodzące węzła.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla wszystkie relacje, w których węzeł jest źródłem (outgoing)
lub celem (incoming). Nieznany węzeł daje pustą listę.

Przykłady:
  phx connections free-will
  phx connections free-will --type supports contradicts
  phx connections arg-compatibilism --json
        """,
    )
    add_data_argument(p)
    p.add_argument("node", metavar="NODE_ID", help="Identyfikator aksjomatu lub argumentu.")
    p.add_argument(
        "--type", "-t",
        nargs="+",
        metavar="TYP",
        choices=[str(t) for t in RelationType],
        help="Filtruj po typie relacji (można podać kilka).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz wynik jako JSON na stdout.",
    )
    p.set_defaults(func=run)
