"""Komenda: phx solve — oblicza ważne argumenty dla przyjętych aksjomatów."""

from __future__ import annotations

import argparse
import json
import sys

from rich.console import Console
from rich.table   import Table
from rich         import box

from phx._content import add_data_argument, load_state
from solver import ContentLoadError, load_answers, parse_axiom_list

console = Console(width=200)


# ---------------------------------------------------------------------------
# Wyświetlanie wyników
# ---------------------------------------------------------------------------

def _show_valid(state, trace) -> None:
    graph = state.graph
    if not trace.valid:
        console.print("\n[yellow]Brak ważnych argumentów dla tego wyboru aksjomatów.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("PRZEBIEG", justify="right", no_wrap=True)
    table.add_column("ID",       style="bold cyan", no_wrap=True)
    table.add_column("POZIOM",   justify="right", no_wrap=True)
    table.add_column("KATEGORIA", no_wrap=True)
    table.add_column("TYTUŁ",    no_wrap=False, max_width=80)

    for n, arg_ids in trace.by_pass().items():
        for arg_id in arg_ids:
            arg = graph.argument(arg_id)
            table.add_row(str(n), arg_id, str(arg.level), arg.category, arg.title)

    console.print("\n[bold]Ważne argumenty:[/bold]")
    console.print(table)
    console.print(
        f"  [dim]{len(trace.valid)} z {len(graph.arguments)} argumentów, "
        f"{trace.rounds} przebiegów[/dim]"
    )


def _write_json(accepted: frozenset[str], trace, show_trace: bool) -> None:
    out: dict = {
        "acceptedAxioms": sorted(accepted),
        "validArguments": sorted(trace.valid),
    }
    if show_trace:
        out["passes"] = {k: trace.passes[k] for k in sorted(trace.passes)}
        out["rounds"] = trace.rounds
    sys.stdout.write(json.dumps(out, ensure_ascii=False, indent=2) + "\n")


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    accepted = parse_axiom_list(args.accept)
    rejected = parse_axiom_list(args.reject)

    if args.answers:
        try:
            from_answers, rejected_answers = load_answers(args.answers)
        except (ContentLoadError, OSError) as e:
            console.print(f"[red]Błąd wczytywania odpowiedzi:[/red] {e}")
            raise SystemExit(1)
        accepted |= from_answers
        rejected |= rejected_answers

    overlap = accepted & rejected
    if overlap:
        console.print(
            f"[red]Aksjomaty jednocześnie przyjęte i odrzucone:[/red] {', '.join(sorted(overlap))}"
        )
        raise SystemExit(1)

    state = load_state(args)
    graph = state.graph

    unknown = sorted(a for a in accepted if graph.axiom(a) is None)
    if unknown and not args.json:
        console.print(f"[yellow]Nieznane aksjomaty (pominięte w wyniku):[/yellow] {', '.join(unknown)}")

    trace = state.engine.trace(accepted)

    if args.json:
        _write_json(accepted, trace, args.trace)
        return

    console.print(
        f"Przyjęte aksjomaty: [bold]{len(accepted)}[/bold]  "
        f"odrzucone: [bold]{len(rejected)}[/bold]  "
        f"graf: {len(graph.axioms)} aksjomatów, {len(graph.arguments)} argumentów"
    )
    _show_valid(state, trace)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "solve",
        help="Oblicza argumenty odblokowane przez przyjęte aksjomaty.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje treść grafu i oblicza domknięcie: zbiór argumentów, których
warunki aktywacji są spełnione przez przyjęte aksjomaty.

Format pliku odpowiedzi (--answers):
  {"free-will": true, "determinism": false}
  albo
  {"accepted": ["free-will"], "rejected": ["determinism"]}

Przykłady:
  phx solve --accept free-will moral-realism
  phx solve --accept "free-will, moral-realism" --json
  phx solve --answers odpowiedzi.json --trace
  phx solve --data graph-data.json --accept free-will
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
        "--reject", "-r",
        metavar="ID",
        nargs="+",
        default=[],
        help="Odrzucone aksjomaty (nie wpływają na wynik, tylko kontrola sprzeczności wyboru).",
    )
    p.add_argument(
        "--answers", "--from-questionnaire",
        dest="answers",
        metavar="PLIK",
        help="Plik JSON z odpowiedziami kwestionariusza.",
    )
    p.add_argument(
        "--trace",
        action="store_true",
        help="Dołącz numer przebiegu, w którym argument stał się ważny (dla --json).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz wynik jako JSON na stdout.",
    )
    p.set_defaults(func=run)
