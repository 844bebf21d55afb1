"""
phx — narzędzie CLI dla philsaxioms.

Użycie:
  phx [--data ŚCIEŻKA] [-v] <komenda> [opcje]

Komendy:
  summary        Liczności węzłów i kategorie wczytanej treści.
  validate       Diagnostyka treści (schemat, odwołania, cykle, osierocone argumenty).
  solve          Argumenty odblokowane przez przyjęte aksjomaty.
  connections    Relacje wchodzące i wychodzące węzła.
  questionnaire  Pytania kwestionariusza.
  snapshot       Migawka stanowiska (aksjomaty, argumenty, krawędzie) jako JSON.
  export         Jednoplikowy eksport graph-data.json z raportem walidacji.
"""

from __future__ import annotations

import argparse
import logging
import sys

from phx import _config
from phx._content import add_data_argument
from phx.commands import connections as cmd_connections
from phx.commands import export as cmd_export
from phx.commands import questionnaire as cmd_questionnaire
from phx.commands import snapshot as cmd_snapshot
from phx.commands import solve as cmd_solve
from phx.commands import summary as cmd_summary
from phx.commands import validate as cmd_validate

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phx",
        description="philsaxioms — graf aksjomatów i argumentów filozoficznych.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"phx {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Więcej logów (-v: INFO, -vv: DEBUG); domyślnie $PHX_LOG_LEVEL.",
    )
    add_data_argument(parser, top_level=True)

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_summary.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_solve.add_parser(subparsers)
    cmd_connections.add_parser(subparsers)
    cmd_questionnaire.add_parser(subparsers)
    cmd_snapshot.add_parser(subparsers)
    cmd_export.add_parser(subparsers)

    return parser


def _force_utf8() -> None:
    # Windows: terminal może używać cp1252, wymuszamy UTF-8, żeby polskie znaki
    # w tekstach pomocy argparse były wypisywane poprawnie.
    for stream in (sys.stdout, sys.stderr):
        if (getattr(stream, "encoding", "") or "").lower() != "utf-8" and hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> None:
    _force_utf8()
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=_config.log_level(args.verbose),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    args.func(args)


if __name__ == "__main__":
    main()
