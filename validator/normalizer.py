"""
validator/normalizer.py — normalizacja surowej treści przed walidacją schematu.

normalize_payload():
  - Zwraca głęboką kopię danych z ujednoliconymi nazwami pól krawędzi.
  - Nie zmienia treści merytorycznej (identyfikatory są tylko trimowane).
  - from_node/to_node/from_type/to_type → fromNode/toNode/fromType/toType.
  - relation podane jako napis → {"type": napis}; płaskie strength i
    bidirectional krawędzi trafiają do tego obiektu.
  - Ustawia relation.bidirectional=False i dependencies=[] jeśli brak.
"""

from __future__ import annotations

import copy
from typing import Any

_EDGE_ALIASES = {
    "from_node": "fromNode",
    "to_node":   "toNode",
    "from_type": "fromType",
    "to_type":   "toType",
}


def normalize_payload(data: dict[str, Any]) -> dict[str, Any]:
    """
    Zwraca głęboką kopię treści z wypełnionymi wartościami domyślnymi.

    Wariant "nodes" jest zwracany jako kopia bez zmian — jego normalizację
    przeprowadza adapter w solver.loader.
    """
    data = copy.deepcopy(data)
    if not isinstance(data, dict) or "nodes" in data:
        return data

    for key in ("axioms", "arguments", "categories", "sources"):
        items = data.get(key)
        if isinstance(items, list):
            data[key] = [_strip_id(i) if isinstance(i, dict) else i for i in items]

    arguments = data.get("arguments")
    if isinstance(arguments, list):
        for arg in arguments:
            if isinstance(arg, dict):
                arg.setdefault("dependencies", [])

    edges = data.get("edges")
    if isinstance(edges, list):
        data["edges"] = [_normalize_edge(e) if isinstance(e, dict) else e for e in edges]

    return data


def _strip_id(item: dict[str, Any]) -> dict[str, Any]:
    if isinstance(item.get("id"), str):
        item["id"] = item["id"].strip()
    return item


def _normalize_edge(edge: dict[str, Any]) -> dict[str, Any]:
    edge = dict(edge)
    for alias, canonical in _EDGE_ALIASES.items():
        if alias in edge and canonical not in edge:
            edge[canonical] = edge.pop(alias)

    relation = edge.get("relation")
    if isinstance(relation, str):
        relation = {"type": relation}
        for key in ("strength", "bidirectional"):
            value = edge.pop(key, None)
            if value is not None:
                relation[key] = value
    if isinstance(relation, dict):
        relation = dict(relation)
        relation.setdefault("bidirectional", False)
        edge["relation"] = relation
    return edge
