"""
solver — silnik aktywacji argumentów dla philsaxioms.

Publiczne API:
  GraphModel(payload)                        niezmienny, zindeksowany graf
  Engine(graph)                              domknięcie dla konkretnego grafu
  ActivationEvaluator(arguments_by_id)       predykat can_activate
  compute_valid_arguments(args, accepted)    → frozenset[str]
  ConnectivityIndex(graph)                   get_connections(node_id)
  GraphHolder(loader)                        atomowa podmiana grafu przy przeładowaniu
  payload_to_dict(payload)                   → kanoniczny dict (eksport graph-data.json)
  load_content(path) / load_payload(data)    → GraphPayload
  read_content(path)                         → surowy dict
  parse_axiom_list(raw)                      → frozenset[str]
  ContentLoadError, SchemaVariantError       wyjątki wczytywania
"""

from .types        import GraphPayload, Connection, ClosureTrace
from .errors       import ContentLoadError, SchemaVariantError
from .graph        import GraphModel
from .engine       import ActivationEvaluator, Engine, compute_valid_arguments
from .connectivity import ConnectivityIndex
from .holder       import GraphHolder, GraphState
from .export       import payload_to_dict
from .loader       import (
    detect_variant,
    load_answers,
    load_content,
    load_json_file,
    load_payload,
    load_yaml_directory,
    parse_axiom_list,
    read_content,
    read_yaml_directory,
)

__all__ = [
    "GraphPayload",
    "Connection",
    "ClosureTrace",
    "ContentLoadError",
    "SchemaVariantError",
    "GraphModel",
    "ActivationEvaluator",
    "Engine",
    "compute_valid_arguments",
    "ConnectivityIndex",
    "GraphHolder",
    "GraphState",
    "payload_to_dict",
    "detect_variant",
    "load_answers",
    "load_content",
    "load_json_file",
    "load_payload",
    "load_yaml_directory",
    "parse_axiom_list",
    "read_content",
    "read_yaml_directory",
]
