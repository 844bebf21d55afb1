"""
solver/export.py — serializacja GraphPayload do kanonicznego słownika.

Wynik ma układ eksportu jednoplikowego (graph-data.json, wariant collections)
i wczytuje się z powrotem przez load_payload(). Pola puste/None są pomijane.
"""

from __future__ import annotations

from typing import Any

from data_model import (
    Argument,
    ArgumentMetadata,
    Axiom,
    AxiomMetadata,
    Category,
    Edge,
    QuestionnaireItem,
    Source,
)

from .types import GraphPayload


def _compact(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v not in (None, (), [], {})}


def _metadata(meta: AxiomMetadata | ArgumentMetadata) -> dict[str, Any]:
    out: dict[str, Any] = {
        "difficulty":  str(meta.difficulty) if meta.difficulty else None,
        "source":      meta.source,
        "attribution": list(meta.attribution),
        "tags":        list(meta.tags),
    }
    if isinstance(meta, AxiomMetadata):
        out["acceptability"] = meta.acceptability
    else:
        out["strength"]    = meta.strength
        out["controversy"] = meta.controversy
    return _compact(out)


def axiom_to_dict(axiom: Axiom) -> dict[str, Any]:
    return _compact({
        "id":          axiom.id,
        "title":       axiom.title,
        "description": axiom.description,
        "category":    axiom.category,
        "metadata":    _metadata(axiom.metadata),
    })


def argument_to_dict(argument: Argument) -> dict[str, Any]:
    out = {
        "id":           argument.id,
        "title":        argument.title,
        "description":  argument.description,
        "conclusion":   argument.conclusion,
        "category":     argument.category,
        "level":        argument.level,
        "dependencies": list(argument.dependencies),
        "metadata":     _metadata(argument.metadata),
    }
    if argument.activation_conditions is not None:
        # pusty obiekt jest znaczący (warunki istnieją, ale niczego nie wymagają)
        out["activation_conditions"] = argument.activation_conditions.to_dict()
    return {k: v for k, v in out.items() if k == "activation_conditions" or v not in ([], {})}


def edge_to_dict(edge: Edge) -> dict[str, Any]:
    return _compact({
        "id":       edge.id,
        "fromNode": edge.from_node,
        "toNode":   edge.to_node,
        "fromType": str(edge.from_type) if edge.from_type else None,
        "toType":   str(edge.to_type) if edge.to_type else None,
        "relation": {
            "type":          str(edge.relation.type),
            "strength":      edge.relation.strength,
            "bidirectional": edge.relation.bidirectional,
        },
        "explanation": edge.explanation,
        "metadata": _compact({
            "difficulty": str(edge.difficulty) if edge.difficulty else None,
            "source":     edge.source,
        }),
    })


def category_to_dict(category: Category) -> dict[str, Any]:
    return _compact({
        "id":          category.id,
        "name":        category.name,
        "color":       category.color,
        "description": category.description,
    })


def source_to_dict(source: Source) -> dict[str, Any]:
    return _compact({
        "id":          source.id,
        "name":        source.name,
        "period":      source.period,
        "tradition":   source.tradition,
        "key_works":   list(source.key_works),
        "perspective": source.perspective,
        "description": source.description,
        "key_figures": list(source.key_figures),
    })


def questionnaire_to_dict(item: QuestionnaireItem) -> dict[str, Any]:
    return _compact({
        "axiomId":     item.axiom_id,
        "question":    item.question,
        "explanation": item.explanation,
        "category":    item.category,
    })


def payload_to_dict(payload: GraphPayload) -> dict[str, Any]:
    """Kanoniczny słownik treści (bez pola validation — dokłada je wywołujący)."""
    out: dict[str, Any] = {
        "categories": [category_to_dict(c) for c in payload.categories],
        "axioms":     [axiom_to_dict(a) for a in payload.axioms],
        "arguments":  [argument_to_dict(a) for a in payload.arguments],
        "edges":      [edge_to_dict(e) for e in payload.edges],
    }
    if payload.sources:
        out["sources"] = [source_to_dict(s) for s in payload.sources]
    if payload.questionnaire:
        out["questionnaire"] = [questionnaire_to_dict(q) for q in payload.questionnaire]
    return out
