"""Konfiguracja narzędzia — zmienne środowiskowe z wartościami domyślnymi."""

from __future__ import annotations

import logging
import os
import pathlib


def data_dir() -> pathlib.Path:
    return pathlib.Path(os.getenv("PHX_DATA_DIR", "data"))


def schema_path() -> pathlib.Path | None:
    value = os.getenv("PHX_SCHEMA")
    return pathlib.Path(value) if value else None


def session_ttl() -> float:
    return float(os.getenv("PHX_SESSION_TTL", "86400"))


def log_level(verbose: int = 0) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    name = os.getenv("PHX_LOG_LEVEL", "WARNING").upper()
    return logging.getLevelNamesMapping().get(name, logging.WARNING)
