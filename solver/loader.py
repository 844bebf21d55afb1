"""
solver/loader.py — wczytywanie treści grafu z YAML/JSON i normalizacja schematu.

Publiczne API:
  read_content(path)            -> dict          (surowe dane, wariant bez zmian)
  load_content(path)            -> GraphPayload
  load_payload(data)            -> GraphPayload  (wykrywa wariant schematu)
  load_yaml_directory(path)     -> GraphPayload
  load_json_file(path)          -> GraphPayload
  detect_variant(data)          -> "collections" | "nodes"
  parse_axiom_list(raw)         -> frozenset[str]
  load_answers(path)            -> (accepted, rejected)

Warianty schematu:
  collections (kanoniczny) — axioms / arguments / edges jako osobne listy,
                             activation_conditions tylko na argumentach
  nodes (starszy)          — jedna lista węzłów, każdy z własną listą krawędzi
                             wychodzących; warunki aktywacji mogą nie istnieć
"""

from __future__ import annotations

import json
import logging
import pathlib
import re
from typing import Any, Iterable, Mapping

import yaml

from data_model import (
    ActivationConditions,
    Argument,
    ArgumentMetadata,
    Axiom,
    AxiomMetadata,
    Category,
    Difficulty,
    Edge,
    LogicalRelation,
    NodeId,
    NodeKind,
    QuestionnaireItem,
    RelationType,
    Source,
)

from .errors import ContentLoadError, SchemaVariantError
from .types import GraphPayload

log = logging.getLogger(__name__)

VARIANT_COLLECTIONS = "collections"
VARIANT_NODES       = "nodes"

_YAML_SUFFIXES = (".yaml", ".yml")

# Relacje wychodzące węzła (wariant nodes), z których odtwarzamy warunki aktywacji
_REQUIRING_RELATIONS  = frozenset({RelationType.REQUIRES, RelationType.ASSUMES})
_FORBIDDING_RELATIONS = frozenset({RelationType.CONTRADICTS})


# ---------------------------------------------------------------------------
# Pola pomocnicze
# ---------------------------------------------------------------------------

def _expect_dict(value: Any, source: str | None, path: str) -> dict:
    if not isinstance(value, dict):
        raise ContentLoadError(
            f"oczekiwano obiektu, otrzymano {type(value).__name__}", source, path
        )
    return value


def _expect_list(data: Mapping[str, Any], key: str, source: str | None) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ContentLoadError(f"'{key}' musi być listą", source, f"/{key}")
    return value


def _require_id(d: dict, source: str | None, path: str) -> str:
    value = d.get("id")
    if value is None or str(value).strip() == "":
        raise ContentLoadError("brak pola 'id'", source, f"{path}/id")
    return str(value).strip()


def _text(d: dict, key: str, default: str = "") -> str:
    value = d.get(key)
    return default if value is None else str(value)


def _opt_text(d: dict, key: str) -> str | None:
    value = d.get(key)
    return None if value is None else str(value)


def _strs(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, int)):
        return (str(value),)
    return tuple(str(v) for v in value)


def _ids(value: Any, source: str | None, path: str) -> frozenset[NodeId]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value})
    if not isinstance(value, list):
        raise ContentLoadError("lista identyfikatorów musi być listą", source, path)
    return frozenset(str(v) for v in value)


def _number(d: dict, key: str, source: str | None, path: str) -> float | None:
    value = d.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ContentLoadError(f"'{key}' musi być liczbą", source, f"{path}/{key}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ContentLoadError(f"'{key}' musi być liczbą", source, f"{path}/{key}") from None


def _enum[E](enum_cls: type[E], value: Any, source: str | None, path: str) -> E | None:
    if value is None:
        return None
    try:
        return enum_cls(value)  # type: ignore[call-arg]
    except ValueError:
        allowed = ", ".join(str(m) for m in enum_cls)  # type: ignore[attr-defined]
        raise ContentLoadError(
            f"nieprawidłowa wartość '{value}' (dozwolone: {allowed})", source, path
        ) from None


# ---------------------------------------------------------------------------
# Elementy treści
# ---------------------------------------------------------------------------

def _conditions_from_dict(value: Any, source: str | None, path: str) -> ActivationConditions | None:
    if value is None:
        return None
    d = _expect_dict(value, source, path)
    return ActivationConditions(
        required_axioms=_ids(d.get("required_axioms"), source, f"{path}/required_axioms"),
        forbidden_axioms=_ids(d.get("forbidden_axioms"), source, f"{path}/forbidden_axioms"),
        required_arguments=_ids(d.get("required_arguments"), source, f"{path}/required_arguments"),
        forbidden_arguments=_ids(d.get("forbidden_arguments"), source, f"{path}/forbidden_arguments"),
    )


def _axiom_from_dict(d: dict, source: str | None, path: str) -> Axiom:
    node_id = _require_id(d, source, path)
    meta    = _expect_dict(d.get("metadata") or {}, source, f"{path}/metadata")
    return Axiom(
        id=node_id,
        title=_text(d, "title", node_id),
        description=_text(d, "description"),
        category=_text(d, "category"),
        metadata=AxiomMetadata(
            difficulty=_enum(Difficulty, meta.get("difficulty"), source, f"{path}/metadata/difficulty"),
            source=_opt_text(meta, "source"),
            attribution=_strs(meta.get("attribution")),
            tags=_strs(meta.get("tags")),
            acceptability=_number(meta, "acceptability", source, f"{path}/metadata"),
        ),
    )


def _argument_from_dict(
    d:          dict,
    source:     str | None,
    path:       str,
    conditions: ActivationConditions | None = None,
) -> Argument:
    node_id = _require_id(d, source, path)
    meta    = _expect_dict(d.get("metadata") or {}, source, f"{path}/metadata")

    level = d.get("level", 1)
    if isinstance(level, bool) or not isinstance(level, int):
        raise ContentLoadError("'level' musi być liczbą całkowitą", source, f"{path}/level")

    if conditions is None:
        conditions = _conditions_from_dict(
            d.get("activation_conditions"), source, f"{path}/activation_conditions"
        )

    return Argument(
        id=node_id,
        title=_text(d, "title", node_id),
        description=_text(d, "description"),
        conclusion=_text(d, "conclusion"),
        category=_text(d, "category"),
        level=level,
        dependencies=_strs(d.get("dependencies")),
        activation_conditions=conditions,
        metadata=ArgumentMetadata(
            difficulty=_enum(Difficulty, meta.get("difficulty"), source, f"{path}/metadata/difficulty"),
            source=_opt_text(meta, "source"),
            attribution=_strs(meta.get("attribution")),
            tags=_strs(meta.get("tags")),
            strength=_number(meta, "strength", source, f"{path}/metadata"),
            controversy=_number(meta, "controversy", source, f"{path}/metadata"),
        ),
    )


def _relation_from_dict(d: dict, source: str | None, path: str) -> LogicalRelation:
    """
    Relacja z pola `relation` (obiekt lub sama nazwa typu) albo z płaskich
    pól type/strength/bidirectional krawędzi.
    """
    raw = d.get("relation")
    if isinstance(raw, str):
        raw = {"type": raw, "strength": d.get("strength"), "bidirectional": d.get("bidirectional")}
    elif raw is None:
        raw = d
    else:
        raw  = _expect_dict(raw, source, f"{path}/relation")
        path = f"{path}/relation"

    rel_type = _enum(RelationType, raw.get("type"), source, f"{path}/type")
    if rel_type is None:
        raise ContentLoadError("brak typu relacji", source, f"{path}/type")

    strength = _number(raw, "strength", source, path)
    return LogicalRelation(
        type=rel_type,
        strength=1.0 if strength is None else strength,
        bidirectional=bool(raw.get("bidirectional") or False),
    )


def _first(d: dict, *keys: str) -> Any:
    for key in keys:
        if d.get(key) is not None:
            return d[key]
    return None


def _edge_from_dict(
    d:      dict,
    source: str | None,
    path:   str,
    kinds:  Mapping[NodeId, NodeKind],
    from_node: NodeId | None = None,
) -> Edge:
    if from_node is None:
        from_node = _first(d, "fromNode", "from_node", "from")
    to_node = _first(d, "toNode", "to_node", "to")
    if from_node is None:
        raise ContentLoadError("brak pola 'fromNode'", source, f"{path}/fromNode")
    if to_node is None:
        raise ContentLoadError("brak pola 'toNode'", source, f"{path}/toNode")
    from_node, to_node = str(from_node), str(to_node)

    relation = _relation_from_dict(d, source, path)

    from_type = _enum(NodeKind, _first(d, "fromType", "from_type"), source, f"{path}/fromType")
    to_type   = _enum(NodeKind, _first(d, "toType", "to_type"), source, f"{path}/toType")
    if from_type is None:
        from_type = kinds.get(from_node)
    if to_type is None:
        to_type = kinds.get(to_node)

    meta = _expect_dict(d.get("metadata") or {}, source, f"{path}/metadata")
    return Edge(
        id=str(d.get("id") or f"{from_node}->{to_node}:{relation.type}"),
        from_node=from_node,
        to_node=to_node,
        from_type=from_type,
        to_type=to_type,
        relation=relation,
        explanation=_text(d, "explanation"),
        difficulty=_enum(Difficulty, meta.get("difficulty"), source, f"{path}/metadata/difficulty"),
        source=_opt_text(meta, "source"),
    )


def _category_from_dict(d: dict, source: str | None, path: str) -> Category:
    cat_id = _require_id(d, source, path)
    return Category(
        id=cat_id,
        name=_text(d, "name", cat_id),
        color=_text(d, "color", "#9CA3AF"),
        description=_opt_text(d, "description"),
    )


def _source_from_dict(d: dict, source: str | None, path: str) -> Source:
    src_id = _require_id(d, source, path)
    return Source(
        id=src_id,
        name=_text(d, "name", src_id),
        period=_opt_text(d, "period"),
        tradition=_opt_text(d, "tradition"),
        key_works=_strs(d.get("key_works")),
        perspective=_opt_text(d, "perspective"),
        description=_opt_text(d, "description"),
        key_figures=_strs(d.get("key_figures")),
    )


def _questionnaire_from_dict(d: dict, source: str | None, path: str) -> QuestionnaireItem:
    axiom_id = _first(d, "axiomId", "axiom_id")
    if axiom_id is None:
        raise ContentLoadError("brak pola 'axiomId'", source, f"{path}/axiomId")
    return QuestionnaireItem(
        axiom_id=str(axiom_id),
        question=_text(d, "question"),
        category=_text(d, "category"),
        explanation=_opt_text(d, "explanation"),
    )


def _items[T](data: Mapping[str, Any], key: str, source: str | None, parse) -> list[T]:
    return [
        parse(_expect_dict(item, source, f"/{key}/{i}"), source, f"/{key}/{i}")
        for i, item in enumerate(_expect_list(data, key, source))
    ]


# ---------------------------------------------------------------------------
# Warianty schematu
# ---------------------------------------------------------------------------

def detect_variant(data: Mapping[str, Any]) -> str:
    """
    Rozpoznaje wariant schematu treści.

    Raises:
        SchemaVariantError gdy dane mieszają oba warianty lub nie są obiektem.
    """
    if not isinstance(data, Mapping):
        raise SchemaVariantError(f"treść musi być obiektem, otrzymano {type(data).__name__}")

    has_nodes       = "nodes" in data
    has_collections = any(k in data for k in ("axioms", "arguments", "edges"))

    if has_nodes and has_collections:
        raise SchemaVariantError(
            "treść zawiera jednocześnie 'nodes' oraz 'axioms'/'arguments'/'edges'"
        )
    return VARIANT_NODES if has_nodes else VARIANT_COLLECTIONS


def _load_common(data: Mapping[str, Any], source: str | None) -> dict[str, tuple]:
    return {
        "categories":    tuple(_items(data, "categories", source, _category_from_dict)),
        "sources":       tuple(_items(data, "sources", source, _source_from_dict)),
        "questionnaire": tuple(_items(data, "questionnaire", source, _questionnaire_from_dict)),
    }


def _load_collections(data: Mapping[str, Any], source: str | None) -> GraphPayload:
    axioms:    list[Axiom]    = _items(data, "axioms", source, _axiom_from_dict)
    arguments: list[Argument] = _items(data, "arguments", source, _argument_from_dict)

    kinds: dict[NodeId, NodeKind] = {}
    for a in axioms:
        kinds.setdefault(a.id, NodeKind.AXIOM)
    for g in arguments:
        kinds.setdefault(g.id, NodeKind.ARGUMENT)

    edges = [
        _edge_from_dict(_expect_dict(e, source, f"/edges/{i}"), source, f"/edges/{i}", kinds)
        for i, e in enumerate(_expect_list(data, "edges", source))
    ]

    return GraphPayload(
        axioms=tuple(axioms),
        arguments=tuple(arguments),
        edges=tuple(edges),
        schema_variant=VARIANT_COLLECTIONS,
        **_load_common(data, source),
    )


def _conditions_from_relations(
    edges_raw: list[dict],
    kinds:     Mapping[NodeId, NodeKind],
    source:    str | None,
    path:      str,
) -> ActivationConditions | None:
    """
    Odtwarza warunki aktywacji z krawędzi wychodzących węzła (wariant nodes):
      requires / assumes → required_*
      contradicts        → forbidden_*
    Cel nieznanego rodzaju trafia do required_arguments (warunek niespełnialny).
    """
    required: dict[NodeKind, set[NodeId]]  = {NodeKind.AXIOM: set(), NodeKind.ARGUMENT: set()}
    forbidden: dict[NodeKind, set[NodeId]] = {NodeKind.AXIOM: set(), NodeKind.ARGUMENT: set()}

    for j, e in enumerate(edges_raw):
        if not isinstance(e, dict):
            continue  # zgłosi to parsowanie krawędzi
        target = _first(e, "to", "toNode", "to_node")
        if target is None:
            continue
        relation = _relation_from_dict(e, source, f"{path}/edges/{j}")
        kind = kinds.get(str(target), NodeKind.ARGUMENT)
        if relation.type in _REQUIRING_RELATIONS:
            required[kind].add(str(target))
        elif relation.type in _FORBIDDING_RELATIONS:
            forbidden[kind].add(str(target))

    if not any(required.values()) and not any(forbidden.values()):
        return None

    return ActivationConditions(
        required_axioms=frozenset(required[NodeKind.AXIOM]),
        forbidden_axioms=frozenset(forbidden[NodeKind.AXIOM]),
        required_arguments=frozenset(required[NodeKind.ARGUMENT]),
        forbidden_arguments=frozenset(forbidden[NodeKind.ARGUMENT]),
    )


def _load_nodes(data: Mapping[str, Any], source: str | None) -> GraphPayload:
    """
    Adapter wariantu "nodes" do wariantu kanonicznego.

    Rodzaj węzła pochodzi z pola kind (lub nodeType). Tylko gdy go brak,
    stosujemy starą regułę "brak krawędzi wychodzących → aksjomat" i odnotowujemy
    to w notes.
    """
    raw_nodes = _expect_list(data, "nodes", source)
    notes: list[str] = []
    kinds: dict[NodeId, NodeKind] = {}
    parsed: list[tuple[dict, str, NodeId, NodeKind, list]] = []

    for i, raw in enumerate(raw_nodes):
        path    = f"/nodes/{i}"
        node    = _expect_dict(raw, source, path)
        node_id = _require_id(node, source, path)

        edges_raw = node.get("edges") or []
        if not isinstance(edges_raw, list):
            raise ContentLoadError("'edges' musi być listą", source, f"{path}/edges")

        kind = _enum(NodeKind, _first(node, "kind", "nodeType"), source, f"{path}/kind")
        if kind is None:
            kind = NodeKind.ARGUMENT if edges_raw else NodeKind.AXIOM
            notes.append(
                f"{node_id}: rodzaj węzła ({kind}) wywnioskowany z listy krawędzi — "
                f"dodaj pole 'kind'"
            )
        kinds.setdefault(node_id, kind)
        parsed.append((node, path, node_id, kind, edges_raw))

    axioms:    list[Axiom]    = []
    arguments: list[Argument] = []
    edges:     list[Edge]     = []

    for node, path, node_id, kind, edges_raw in parsed:
        if kind is NodeKind.AXIOM:
            axioms.append(_axiom_from_dict(node, source, path))
        else:
            conditions = None
            if node.get("activation_conditions") is None:
                conditions = _conditions_from_relations(edges_raw, kinds, source, path)
                if conditions is not None:
                    notes.append(f"{node_id}: warunki aktywacji odtworzone z relacji wychodzących")
            arguments.append(_argument_from_dict(node, source, path, conditions))

        for j, e in enumerate(edges_raw):
            edges.append(_edge_from_dict(
                _expect_dict(e, source, f"{path}/edges/{j}"),
                source,
                f"{path}/edges/{j}",
                kinds,
                from_node=node_id,
            ))

    for note in notes:
        log.warning("schemat 'nodes': %s", note)

    return GraphPayload(
        axioms=tuple(axioms),
        arguments=tuple(arguments),
        edges=tuple(edges),
        schema_variant=VARIANT_NODES,
        notes=tuple(notes),
        **_load_common(data, source),
    )


def load_payload(data: Mapping[str, Any], source: str | None = None) -> GraphPayload:
    """
    Normalizuje surowe dane (dowolny wariant) do GraphPayload.

    Raises:
        ContentLoadError przy brakujących id, złych typach pól lub wartościach enum.
    """
    if data is None:
        raise TypeError("load_payload wymaga słownika treści, otrzymano None.")

    variant = detect_variant(data)
    if variant == VARIANT_NODES:
        payload = _load_nodes(data, source)
    else:
        payload = _load_collections(data, source)

    log.info(
        "Wczytano %d aksjomatów, %d argumentów, %d krawędzi, %d kategorii (wariant=%s)",
        len(payload.axioms), len(payload.arguments), len(payload.edges),
        len(payload.categories), variant,
    )
    return payload


# ---------------------------------------------------------------------------
# Pliki
# ---------------------------------------------------------------------------

def _read_yaml(path: pathlib.Path, root: pathlib.Path) -> Any:
    rel = path.relative_to(root).as_posix()
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ContentLoadError(f"błąd składni YAML: {e}", rel) from e
    except UnicodeDecodeError as e:
        raise ContentLoadError(f"plik nie jest poprawnym UTF-8: {e}", rel) from e


def _yaml_files(directory: pathlib.Path) -> list[pathlib.Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix in _YAML_SUFFIXES)


def read_yaml_directory(path: str | pathlib.Path) -> dict[str, Any]:
    """
    Składa surowe dane z katalogu treści.

    Oczekiwany układ::

        categories.yaml          categories: [...]
        axioms/*.yaml            axioms: [...]
        arguments/*.yaml         arguments: [...]
        edges/*.yaml             edges: [...]
        sources.yaml             sources: [...]        (opcjonalnie)
        questionnaire.yaml       questionnaire: [...]  (opcjonalnie)

    Brakujące pliki i katalogi są pomijane; plik z błędem składni podnosi
    ContentLoadError z nazwą pliku.
    """
    root = pathlib.Path(path)
    if not root.is_dir():
        raise ContentLoadError(f"katalog treści nie istnieje: {root}")

    data: dict[str, Any] = {}

    for key in ("categories", "sources", "questionnaire"):
        for name in (f"{key}.yaml", f"{key}.yml"):
            file = root / name
            if file.is_file():
                raw = _read_yaml(file, root) or {}
                data[key] = _expect_list(_expect_dict(raw, name, "/"), key, name)
                break

    for key in ("axioms", "arguments", "edges"):
        merged: list = []
        for file in _yaml_files(root / key):
            raw = _read_yaml(file, root)
            if raw is None:
                continue
            rel = file.relative_to(root).as_posix()
            merged.extend(_expect_list(_expect_dict(raw, rel, "/"), key, rel))
        data[key] = merged

    return data


def load_yaml_directory(path: str | pathlib.Path) -> GraphPayload:
    return load_payload(read_yaml_directory(path), source=str(path))


def load_json_file(path: str | pathlib.Path) -> GraphPayload:
    """Wczytuje eksport jednoplikowy (graph-data.json) w dowolnym wariancie."""
    file = pathlib.Path(path)
    return load_payload(_read_json(file), source=file.name)


def _read_json(file: pathlib.Path) -> Any:
    try:
        return json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ContentLoadError(f"błąd składni JSON: {e}", file.name) from e
    except UnicodeDecodeError as e:
        raise ContentLoadError(f"plik nie jest poprawnym UTF-8: {e}", file.name) from e


def read_content(path: str | pathlib.Path) -> dict[str, Any]:
    """
    Surowe dane z katalogu YAML, pliku .json lub pojedynczego pliku .yaml.
    """
    p = pathlib.Path(path)
    if p.is_dir():
        return read_yaml_directory(p)
    if not p.is_file():
        raise ContentLoadError(f"ścieżka treści nie istnieje: {p}")
    if p.suffix == ".json":
        raw = _read_json(p)
    elif p.suffix in _YAML_SUFFIXES:
        raw = _read_yaml(p, p.parent)
    else:
        raise ContentLoadError(f"nieobsługiwany format pliku: {p.suffix}", p.name)
    return _expect_dict(raw if raw is not None else {}, p.name, "/")


def load_content(path: str | pathlib.Path) -> GraphPayload:
    return load_payload(read_content(path), source=str(path))


# ---------------------------------------------------------------------------
# Listy aksjomatów (wejście użytkownika)
# ---------------------------------------------------------------------------

_SPLIT_RE = re.compile(r"[\s,;]+")


def parse_axiom_list(raw: str | Iterable[str] | None) -> frozenset[NodeId]:
    """
    Parsuje listę identyfikatorów.

    Przykłady::

        "a1, a2 a3"        → {"a1", "a2", "a3"}
        ["a1", "a2,a3"]    → {"a1", "a2", "a3"}
        None / ""          → set()
    """
    if raw is None:
        return frozenset()
    chunks = [raw] if isinstance(raw, str) else list(raw)
    ids: set[NodeId] = set()
    for chunk in chunks:
        ids.update(part for part in _SPLIT_RE.split(str(chunk).strip()) if part)
    return frozenset(ids)


def load_answers(path: str | pathlib.Path) -> tuple[frozenset[NodeId], frozenset[NodeId]]:
    """
    Wczytuje odpowiedzi kwestionariusza z JSON.

    Obsługiwane formaty::

        {"free-will": true, "determinism": false}
        {"accepted": ["free-will"], "rejected": ["determinism"]}

    Returns:
        (przyjęte, odrzucone)
    """
    file = pathlib.Path(path)
    raw  = _expect_dict(_read_json(file), file.name, "/")

    if "accepted" in raw or "rejected" in raw:
        accepted = parse_axiom_list(_strs(raw.get("accepted")))
        rejected = parse_axiom_list(_strs(raw.get("rejected")))
    else:
        for key, value in raw.items():
            if not isinstance(value, bool):
                raise ContentLoadError("odpowiedź musi być true/false", file.name, f"/{key}")
        accepted = frozenset(k for k, v in raw.items() if v)
        rejected = frozenset(k for k, v in raw.items() if not v)

    overlap = accepted & rejected
    if overlap:
        raise ContentLoadError(
            f"aksjomaty jednocześnie przyjęte i odrzucone: {', '.join(sorted(overlap))}",
            file.name,
        )
    return accepted, rejected
