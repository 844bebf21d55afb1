"""
validator/graph_validator.py — diagnostyka treści grafu dla autorów.

GraphValidator.validate(content) -> GraphValidationReport

Etapy:
  A — JSON Schema + wczytanie  (surowy dict; wariant "nodes" tylko wczytanie)
  B — tożsamość                (duplikaty id, kolizje aksjomat/argument)
  C — odwołania                (warunki aktywacji, krawędzie, kategorie, kwestionariusz)
  D — cykle                    (łańcuchy required_arguments)
  E — osierocone argumenty     (nieaktywowalne przy żadnym wyborze aksjomatów)

Diagnostyka nigdy nie podnosi wyjątków z powodu jakości danych — opisuje
problemy w raporcie. Silnik aktywacji działa niezależnie od jej wyniku.
"""

from __future__ import annotations

import dataclasses
import json
import pathlib
from collections import Counter
from typing import Any, Mapping

import jsonschema

from data_model import Argument, NodeId, NodeKind
from solver.engine import compute_valid_arguments
from solver.errors import ContentLoadError
from solver.graph import GraphModel
from solver.loader import VARIANT_COLLECTIONS, detect_variant, load_payload
from solver.types import GraphPayload

from .normalizer import normalize_payload
from .types import ErrorCode, GraphValidationReport, ValidationIssue

DEFAULT_SCHEMA_PATH = pathlib.Path(__file__).resolve().parent / "graph_schema.json"

_AXIOM_KEYS    = ("required_axioms", "forbidden_axioms")
_ARGUMENT_KEYS = ("required_arguments", "forbidden_arguments")


def load_schema(path: str | pathlib.Path | None = None) -> dict[str, Any]:
    """Wczytuje schemat JSON treści (domyślnie dołączony do pakietu)."""
    schema_path = pathlib.Path(path) if path else DEFAULT_SCHEMA_PATH
    return json.loads(schema_path.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Cykle required_arguments
# ---------------------------------------------------------------------------

def find_requirement_cycles(arguments: Mapping[NodeId, Argument]) -> list[tuple[NodeId, ...]]:
    """
    Wylicza cykle elementarne w grafie required_arguments.

    Cykl szukany jest od swojego najmniejszego id: ścieżki ze startu s
    przechodzą tylko przez węzły większe od s, więc każdy cykl pojawia się
    dokładnie raz, już obrócony do najmniejszego id. Odwołania do
    nieistniejących argumentów są pomijane.
    """
    def requirements(arg_id: NodeId) -> list[NodeId]:
        conds = arguments[arg_id].activation_conditions
        if conds is None:
            return []
        return sorted(r for r in conds.required_arguments if r in arguments)

    found: list[tuple[NodeId, ...]] = []

    for start in sorted(arguments):
        path    = [start]
        on_path = {start}
        stack   = [iter(requirements(start))]

        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if nxt == start:
                found.append(tuple(path))
            elif nxt > start and nxt not in on_path:
                path.append(nxt)
                on_path.add(nxt)
                stack.append(iter(requirements(nxt)))

    return found


def format_cycle(cycle: tuple[NodeId, ...]) -> str:
    return " -> ".join((*cycle, cycle[0]))


# ---------------------------------------------------------------------------
# GraphValidator
# ---------------------------------------------------------------------------

class GraphValidator:
    """
    Walidator treści grafu.

    Użycie:
        validator = GraphValidator(load_schema())
        report    = validator.validate(read_content("data"))
        if not report.is_valid:
            for e in report.errors:
                print(e.code, e.path, e.message)
    """

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self._schema = schema

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, content: Mapping[str, Any] | GraphPayload | GraphModel) -> GraphValidationReport:
        """
        Waliduje treść i zwraca GraphValidationReport.

        Args:
            content: surowy dict (po json/yaml), GraphPayload lub GraphModel
        """
        if content is None:
            raise TypeError("GraphValidator.validate wymaga treści, otrzymano None.")

        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        if isinstance(content, GraphModel):
            graph = content
        elif isinstance(content, GraphPayload):
            graph = GraphModel(content)
        else:
            # A: schemat + wczytanie (fail-fast)
            payload = self._stage_load(dict(content), errors)
            if payload is None:
                return GraphValidationReport(is_valid=False, errors=errors, warnings=warnings)
            graph = GraphModel(payload)

        payload = graph.payload
        for note in payload.notes:
            warnings.append(ValidationIssue(
                code=ErrorCode.LEGACY_SCHEMA,
                path="/nodes",
                message=note,
                expected_fix="Przenieś treść do wariantu collections (axioms/arguments/edges).",
            ))

        # B: tożsamość
        self._stage_identity(payload, graph, errors)

        # C: odwołania
        self._stage_references(payload, graph, errors, warnings)

        # D: cykle
        cycles = [format_cycle(c) for c in find_requirement_cycles(graph.arguments_by_id)]
        for cycle in cycles:
            errors.append(ValidationIssue(
                code=ErrorCode.CIRCULAR_REQUIREMENT,
                path="/arguments",
                message=f"Cykl required_arguments: {cycle}",
                expected_fix="Usuń jedno z wymagań w cyklu — argument nie może wymagać sam siebie.",
                details={"cycle": cycle},
            ))

        # E: osierocone argumenty
        orphaned = self._stage_orphans(payload, graph, warnings)

        return GraphValidationReport(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            orphaned_arguments=orphaned,
            circular_dependencies=cycles,
        )

    # ------------------------------------------------------------------
    # Stage A: JSON Schema + wczytanie
    # ------------------------------------------------------------------

    def _stage_load(self, raw: dict[str, Any], errors: list[ValidationIssue]) -> GraphPayload | None:
        data = normalize_payload(raw)

        try:
            variant = detect_variant(data)
        except ContentLoadError as e:
            errors.append(self._load_issue(e))
            return None

        if self._schema is not None and variant == VARIANT_COLLECTIONS:
            validator = jsonschema.Draft202012Validator(self._schema)
            for e in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
                path = (
                    "/" + "/".join(str(p) for p in e.absolute_path)
                    if e.absolute_path
                    else "/"
                )
                errors.append(ValidationIssue(
                    code=ErrorCode.SCHEMA_VIOLATION,
                    path=path,
                    message=e.message,
                    expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
                ))
            if errors:
                return None

        try:
            return load_payload(data)
        except ContentLoadError as e:
            errors.append(self._load_issue(e))
            return None

    @staticmethod
    def _load_issue(e: ContentLoadError) -> ValidationIssue:
        return ValidationIssue(
            code=ErrorCode.LOAD_FAILED,
            path=e.path or "/",
            message=str(e),
            expected_fix="Popraw strukturę treści tak, by dało się ją wczytać.",
        )

    # ------------------------------------------------------------------
    # Stage B: tożsamość
    # ------------------------------------------------------------------

    def _stage_identity(
        self,
        payload: GraphPayload,
        graph:   GraphModel,
        errors:  list[ValidationIssue],
    ) -> None:
        collections = {
            "axioms":     payload.axioms,
            "arguments":  payload.arguments,
            "edges":      payload.edges,
            "categories": payload.categories,
        }
        for key, items in collections.items():
            seen: Counter[str] = Counter()
            for i, item in enumerate(items):
                seen[item.id] += 1
                if seen[item.id] == 2:
                    errors.append(ValidationIssue(
                        code=ErrorCode.DUPLICATE_ID,
                        path=f"/{key}/{i}/id",
                        message=f"Identyfikator '{item.id}' występuje w '{key}' więcej niż raz.",
                        expected_fix="Nadaj unikalny id; używane jest tylko pierwsze wystąpienie.",
                        details={"id": item.id},
                    ))

        for node_id in sorted(graph.id_collisions):
            errors.append(ValidationIssue(
                code=ErrorCode.ID_COLLISION,
                path="/arguments",
                message=f"Identyfikator '{node_id}' jest jednocześnie aksjomatem i argumentem.",
                expected_fix="Zmień id argumentu — id musi wskazywać dokładnie jeden węzeł.",
                details={"id": node_id},
            ))

    # ------------------------------------------------------------------
    # Stage C: odwołania
    # ------------------------------------------------------------------

    def _check_condition_ref(
        self,
        graph:  GraphModel,
        ref:    NodeId,
        key:    str,
        path:   str,
        owner:  NodeId,
        errors: list[ValidationIssue],
    ) -> None:
        expected = NodeKind.AXIOM if key in _AXIOM_KEYS else NodeKind.ARGUMENT
        actual   = graph.kind_of(ref)
        if actual is None:
            errors.append(ValidationIssue(
                code=ErrorCode.REF_UNKNOWN,
                path=path,
                message=f"Argument '{owner}': {key} wskazuje nieistniejący węzeł '{ref}'.",
                expected_fix=f"Usuń '{ref}' z {key} lub dodaj brakujący węzeł.",
                details={"argument": owner, "ref": ref},
            ))
        elif actual != expected:
            errors.append(ValidationIssue(
                code=ErrorCode.REF_WRONG_KIND,
                path=path,
                message=(
                    f"Argument '{owner}': {key} wskazuje '{ref}', który jest {actual}, "
                    f"a oczekiwano {expected}."
                ),
                expected_fix=f"Przenieś '{ref}' do listy właściwej dla rodzaju {actual}.",
                details={"argument": owner, "ref": ref},
            ))

    def _stage_references(
        self,
        payload:  GraphPayload,
        graph:    GraphModel,
        errors:   list[ValidationIssue],
        warnings: list[ValidationIssue],
    ) -> None:
        known_categories = {c.id for c in graph.categories}

        def check_category(category: str, path: str, owner: str) -> None:
            if known_categories and category not in known_categories:
                warnings.append(ValidationIssue(
                    code=ErrorCode.CATEGORY_UNKNOWN,
                    path=path,
                    message=f"'{owner}': nieznana kategoria '{category}'.",
                    expected_fix="Dodaj kategorię do categories.yaml lub popraw id.",
                ))

        def check_score(value: float | None, path: str, owner: str) -> None:
            if value is not None and not 0.0 <= value <= 1.0:
                warnings.append(ValidationIssue(
                    code=ErrorCode.SCORE_OUT_OF_RANGE,
                    path=path,
                    message=f"'{owner}': wartość {value} poza zakresem 0..1.",
                    expected_fix="Użyj wartości z przedziału [0, 1].",
                ))

        for i, axiom in enumerate(payload.axioms):
            check_category(axiom.category, f"/axioms/{i}/category", axiom.id)
            check_score(axiom.metadata.acceptability, f"/axioms/{i}/metadata/acceptability", axiom.id)

        for i, arg in enumerate(payload.arguments):
            base = f"/arguments/{i}"
            check_category(arg.category, f"{base}/category", arg.id)
            check_score(arg.metadata.strength, f"{base}/metadata/strength", arg.id)
            check_score(arg.metadata.controversy, f"{base}/metadata/controversy", arg.id)

            for dep in arg.dependencies:
                if dep not in graph:
                    warnings.append(ValidationIssue(
                        code=ErrorCode.DEPENDENCY_UNKNOWN,
                        path=f"{base}/dependencies",
                        message=f"Argument '{arg.id}': zależność '{dep}' nie istnieje.",
                        expected_fix=f"Usuń '{dep}' z dependencies lub dodaj brakujący węzeł.",
                    ))

            conds = arg.activation_conditions
            if conds is None:
                continue
            for key in (*_AXIOM_KEYS, *_ARGUMENT_KEYS):
                for ref in sorted(getattr(conds, key)):
                    self._check_condition_ref(
                        graph, ref, key, f"{base}/activation_conditions/{key}", arg.id, errors
                    )

        for i, edge in enumerate(payload.edges):
            base = f"/edges/{i}"
            for end, node_id, declared in (
                ("fromNode", edge.from_node, edge.from_type),
                ("toNode", edge.to_node, edge.to_type),
            ):
                actual = graph.kind_of(node_id)
                if actual is None:
                    errors.append(ValidationIssue(
                        code=ErrorCode.EDGE_ENDPOINT_UNKNOWN,
                        path=f"{base}/{end}",
                        message=f"Krawędź '{edge.id}': węzeł '{node_id}' nie istnieje.",
                        expected_fix="Popraw id końca krawędzi lub usuń krawędź.",
                        details={"edge": edge.id, "node": node_id},
                    ))
                elif declared is not None and declared != actual:
                    errors.append(ValidationIssue(
                        code=ErrorCode.EDGE_TYPE_MISMATCH,
                        path=f"{base}/{end}",
                        message=(
                            f"Krawędź '{edge.id}': '{node_id}' zadeklarowany jako {declared}, "
                            f"a jest {actual}."
                        ),
                        expected_fix=f"Ustaw typ końca krawędzi na '{actual}'.",
                        details={"edge": edge.id, "node": node_id},
                    ))

            strength = edge.relation.strength
            if not 0.0 <= strength <= 1.0:
                errors.append(ValidationIssue(
                    code=ErrorCode.STRENGTH_OUT_OF_RANGE,
                    path=f"{base}/relation/strength",
                    message=f"Krawędź '{edge.id}': siła relacji {strength} poza zakresem 0..1.",
                    expected_fix="Użyj wartości strength z przedziału [0, 1].",
                ))

        for i, item in enumerate(payload.questionnaire):
            if graph.axiom(item.axiom_id) is None:
                warnings.append(ValidationIssue(
                    code=ErrorCode.QUESTIONNAIRE_UNKNOWN,
                    path=f"/questionnaire/{i}/axiomId",
                    message=f"Pytanie kwestionariusza wskazuje nieistniejący aksjomat '{item.axiom_id}'.",
                    expected_fix="Popraw axiomId lub usuń pytanie.",
                ))

    # ------------------------------------------------------------------
    # Stage E: osierocone argumenty
    # ------------------------------------------------------------------

    def _stage_orphans(
        self,
        payload:  GraphPayload,
        graph:    GraphModel,
        warnings: list[ValidationIssue],
    ) -> list[NodeId]:
        """
        Argument jest osierocony, gdy:
          - nie ma warunków aktywacji i żadna krawędź do niego nie prowadzi,
          - jego warunki są wewnętrznie sprzeczne (to samo id wymagane i zakazane),
          - nie staje się ważny nawet po przyjęciu wszystkich aksjomatów
            i pominięciu warunków negatywnych (relaksacja — górne ograniczenie
            zbioru osiągalnego przy dowolnym wyborze).
        """
        orphaned: list[NodeId] = []
        index = {a.id: i for i, a in reversed(list(enumerate(payload.arguments)))}

        relaxed: list[Argument] = []
        candidates: list[Argument] = []

        for arg in graph.arguments:
            path  = f"/arguments/{index[arg.id]}"
            conds = arg.activation_conditions

            if conds is None:
                if graph.incoming(arg.id):
                    warnings.append(ValidationIssue(
                        code=ErrorCode.NO_CONDITIONS,
                        path=path,
                        message=(
                            f"Argument '{arg.id}' nie ma activation_conditions — "
                            f"nigdy nie będzie aktywny (krawędzie prowadzą do niego tylko dokumentacyjnie)."
                        ),
                        expected_fix="Dodaj activation_conditions, jeśli argument ma być osiągalny.",
                    ))
                else:
                    orphaned.append(arg.id)
                    warnings.append(ValidationIssue(
                        code=ErrorCode.NO_CONDITIONS,
                        path=path,
                        message=f"Argument '{arg.id}' jest osierocony: brak activation_conditions i krawędzi.",
                        expected_fix="Dodaj activation_conditions lub usuń argument.",
                    ))
                continue

            contradictions = conds.contradictions()
            if contradictions:
                orphaned.append(arg.id)
                warnings.append(ValidationIssue(
                    code=ErrorCode.CONTRADICTORY_CONDITIONS,
                    path=f"{path}/activation_conditions",
                    message=(
                        f"Argument '{arg.id}' wymaga i jednocześnie zakazuje: "
                        f"{', '.join(sorted(contradictions))}."
                    ),
                    expected_fix="Usuń sprzeczny identyfikator z jednej z list.",
                ))
                relaxed.append(dataclasses.replace(arg, activation_conditions=None))
                continue

            relaxed.append(dataclasses.replace(arg, activation_conditions=conds.without_forbidden()))
            candidates.append(arg)

        reachable = compute_valid_arguments(relaxed, graph.axiom_ids)
        for arg in candidates:
            if arg.id in reachable:
                continue
            orphaned.append(arg.id)
            warnings.append(ValidationIssue(
                code=ErrorCode.UNREACHABLE,
                path=f"/arguments/{index[arg.id]}/activation_conditions",
                message=(
                    f"Argument '{arg.id}' nie jest osiągalny przy żadnym wyborze aksjomatów "
                    f"(brakujące odwołania lub cykl wymagań)."
                ),
                expected_fix="Sprawdź required_axioms i required_arguments tego argumentu.",
            ))

        return sorted(orphaned)
