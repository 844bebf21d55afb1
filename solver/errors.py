"""
solver/errors.py — wyjątki warstwy wczytywania treści.

Silnik (engine, connectivity) nie podnosi wyjątków z powodu jakości danych —
niespełnialne warunki degradują do "nieaktywny". Wyjątki dotyczą wyłącznie
wczytywania plików i naruszeń kontraktu wywołania.
"""

from __future__ import annotations


class ContentLoadError(ValueError):
    """
    Nie udało się wczytać lub sparsować treści.

    - source: plik lub opis źródła (np. "arguments/ethics.yaml")
    - path:   JSON Pointer do miejsca problemu, np. "/arguments/3/id"
    """

    def __init__(self, message: str, source: str | None = None, path: str | None = None) -> None:
        self.source = source
        self.path   = path
        where = " ".join(p for p in (source, path) if p)
        super().__init__(f"{where}: {message}" if where else message)


class SchemaVariantError(ContentLoadError):
    """Dane nie pasują do żadnego z obsługiwanych wariantów schematu."""
