"""
validator — diagnostyka treści grafu (dla autorów treści).

Interfejs publiczny:
    GraphValidator        — główny walidator (etapy A–E)
    GraphValidationReport, ValidationIssue, ErrorCode — typy raportu
    load_schema           — wczytanie schematu JSON treści
    normalize_payload     — ujednolicenie surowych danych przed schematem

Typowe użycie:
    from solver import read_content
    from validator import GraphValidator, load_schema

    validator = GraphValidator(load_schema())
    report    = validator.validate(read_content("data"))
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .types import ErrorCode, ValidationIssue, GraphValidationReport
from .normalizer import normalize_payload
from .graph_validator import (
    DEFAULT_SCHEMA_PATH,
    GraphValidator,
    find_requirement_cycles,
    format_cycle,
    load_schema,
)

__all__ = [
    "ErrorCode",
    "ValidationIssue",
    "GraphValidationReport",
    "normalize_payload",
    "DEFAULT_SCHEMA_PATH",
    "GraphValidator",
    "find_requirement_cycles",
    "format_cycle",
    "load_schema",
]
