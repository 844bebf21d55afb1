"""
validator/types.py — kody problemów i struktury raportu diagnostyki grafu.

ValidationIssue       — pojedynczy problem z kodem, ścieżką JSON Pointer,
    komunikatem i mechaniczną instrukcją naprawy.
GraphValidationReport — wynik diagnostyki: is_valid, errors, warnings,
    orphaned_arguments, circular_dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody problemów (etapy A–E)."""

    # A: JSON Schema / wczytanie
    SCHEMA_VIOLATION          = "E_SCHEMA_VIOLATION"
    LOAD_FAILED               = "E_LOAD_FAILED"
    LEGACY_SCHEMA             = "W_LEGACY_SCHEMA"

    # B: tożsamość
    DUPLICATE_ID              = "E_DUPLICATE_ID"
    ID_COLLISION              = "E_ID_COLLISION"

    # C: odwołania
    REF_UNKNOWN               = "E_REF_UNKNOWN"
    REF_WRONG_KIND            = "E_REF_WRONG_KIND"
    EDGE_ENDPOINT_UNKNOWN     = "E_EDGE_ENDPOINT_UNKNOWN"
    EDGE_TYPE_MISMATCH        = "E_EDGE_TYPE_MISMATCH"
    STRENGTH_OUT_OF_RANGE     = "E_STRENGTH_OUT_OF_RANGE"
    CATEGORY_UNKNOWN          = "W_CATEGORY_UNKNOWN"
    DEPENDENCY_UNKNOWN        = "W_DEPENDENCY_UNKNOWN"
    QUESTIONNAIRE_UNKNOWN     = "W_QUESTIONNAIRE_UNKNOWN"
    SCORE_OUT_OF_RANGE        = "W_SCORE_OUT_OF_RANGE"

    # D: cykle
    CIRCULAR_REQUIREMENT      = "E_CIRCULAR_REQUIREMENT"

    # E: osierocone argumenty
    NO_CONDITIONS             = "W_NO_CONDITIONS"
    CONTRADICTORY_CONDITIONS  = "W_CONTRADICTORY_CONDITIONS"
    UNREACHABLE               = "W_UNREACHABLE"


@dataclass(slots=True)
class ValidationIssue:
    """
    Pojedynczy problem diagnostyki.

    - code:         stały identyfikator klasy problemu (ErrorCode)
    - path:         JSON Pointer do miejsca problemu, np. "/arguments/2/activation_conditions"
    - message:      czytelny opis problemu
    - expected_fix: krótka mechaniczna instrukcja naprawy (dla autora treści)
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    path: str
    message: str
    expected_fix: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.path}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "code":        str(self.code),
            "path":        self.path,
            "message":     self.message,
            "expectedFix": self.expected_fix,
        }
        if self.details:
            out["details"] = self.details
        return out


@dataclass(slots=True)
class GraphValidationReport:
    """
    Wynik diagnostyki grafu.

    - is_valid:              True gdy brak błędów (ostrzeżenia nie wpływają)
    - errors:                błędy (ValidationIssue)
    - warnings:              ostrzeżenia (ValidationIssue)
    - orphaned_arguments:    argumenty, których nie da się aktywować przy żadnym wyborze
    - circular_dependencies: cykle required_arguments w postaci "a -> b -> a"
    """

    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    orphaned_arguments: list[str] = field(default_factory=list)
    circular_dependencies: list[str] = field(default_factory=list)

    def to_dict(self, detail: bool = False) -> dict[str, Any]:
        """
        Struktura zgodna z polem `validation` eksportu graph-data.json.
        detail=True dokłada pełne wpisy z kodami w kluczu "issues".
        """
        out: dict[str, Any] = {
            "isValid":              self.is_valid,
            "errors":               [str(e) for e in self.errors],
            "warnings":             [str(w) for w in self.warnings],
            "orphanedArguments":    list(self.orphaned_arguments),
            "circularDependencies": list(self.circular_dependencies),
        }
        if detail:
            out["issues"] = [i.to_dict() for i in (*self.errors, *self.warnings)]
        return out
