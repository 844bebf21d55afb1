"""Komenda: phx snapshot — zapisuje migawkę stanowiska (aksjomaty → argumenty)."""

from __future__ import annotations

import argparse
import json
import pathlib
import sys

from rich.console import Console

from phx import _config
from phx._content import add_data_argument, load_state
from sessions import SessionStore, build_snapshot
from solver import parse_axiom_list

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    state    = load_state(args)
    accepted = parse_axiom_list(args.accept)

    unknown = sorted(a for a in accepted if state.graph.axiom(a) is None)
    if unknown:
        console.print(f"[yellow]Nieznane aksjomaty (pominięte):[/yellow] {', '.join(unknown)}")

    with SessionStore(ttl=_config.session_ttl()) as store:
        session  = store.create(accepted=accepted)
        snapshot = build_snapshot(
            state.engine,
            state.connectivity,
            session,
            title=args.title,
            description=args.description,
            is_public=args.public,
            tags=args.tag or (),
        )

    text = json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2) + "\n"
    if args.output:
        out = pathlib.Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        console.print(
            f"[green]Zapisano migawkę[/green] [bold]{snapshot.id}[/bold] → {out}  "
            f"[dim]({len(snapshot.axioms)} aksjomatów, {len(snapshot.arguments)} argumentów, "
            f"{len(snapshot.edges)} krawędzi)[/dim]"
        )
    else:
        sys.stdout.write(text)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "snapshot",
        help="Zapisuje migawkę: przyjęte aksjomaty, ważne argumenty i ich krawędzie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Oblicza ważne argumenty dla przyjętych aksjomatów i zapisuje migawkę
(JSON) z krawędziami łączącymi te węzły. Bez --output wypisuje na stdout.

Przykłady:
  phx snapshot --accept free-will moral-realism --title "Moje stanowisko"
  phx snapshot -a free-will -T "Kompatybilizm" --public --tag etyka -o migawka.json
        """,
    )
    add_data_argument(p)
    p.add_argument(
        "--accept", "-a",
        metavar="ID",
        nargs="+",
        default=[],
        help="Przyjęte aksjomaty (spacje lub przecinki).",
    )
    p.add_argument(
        "--title", "-T",
        required=True,
        help="Tytuł migawki.",
    )
    p.add_argument(
        "--description", "-d",
        default=None,
        help="Opis migawki.",
    )
    p.add_argument(
        "--public",
        action="store_true",
        help="Oznacz migawkę jako publiczną.",
    )
    p.add_argument(
        "--tag",
        action="append",
        metavar="TAG",
        help="Etykieta migawki (można podać wielokrotnie).",
    )
    p.add_argument(
        "--output", "-o",
        default=None,
        metavar="PLIK",
        help="Plik wyjściowy JSON.",
    )
    p.set_defaults(func=run)
