"""Wspólne wczytywanie treści dla komend CLI."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from phx import _config
from solver import ContentLoadError, GraphState, load_payload, read_content

console = Console(stderr=True)


def add_data_argument(p: argparse.ArgumentParser, top_level: bool = False) -> None:
    # Na podkomendzie SUPPRESS: brak --data nie nadpisuje wartości globalnej.
    p.add_argument(
        "--data",
        metavar="ŚCIEŻKA",
        default=None if top_level else argparse.SUPPRESS,
        help="Katalog treści YAML lub plik graph-data.json (domyślnie: $PHX_DATA_DIR lub ./data).",
    )


def data_path(args: argparse.Namespace) -> pathlib.Path:
    return pathlib.Path(args.data) if getattr(args, "data", None) else _config.data_dir()


def read_raw(args: argparse.Namespace) -> dict:
    """Surowe dane treści; przy błędzie wypisuje komunikat i kończy z kodem 1."""
    path = data_path(args)
    try:
        return read_content(path)
    except (ContentLoadError, OSError) as e:
        console.print(f"[red]Błąd wczytywania treści:[/red] {e}")
        raise SystemExit(1)


def load_state(args: argparse.Namespace, raw: dict | None = None) -> GraphState:
    """Graf + silnik + indeks połączeń dla treści wskazanej w args (lub już wczytanej)."""
    if raw is None:
        raw = read_raw(args)
    try:
        payload = load_payload(raw, source=str(data_path(args)))
    except ContentLoadError as e:
        console.print(f"[red]Błąd wczytywania treści:[/red] {e}")
        raise SystemExit(1)
    return GraphState.build(payload, version=1)
