"""
Graph File Input (JSON)
Loads edge lists into a GraphStore.

Accepted layouts:
    [["A", "B", "knows"], ["B", "C", "likes"]]
    {"nodes": ["D"], "fixed": ["A"], "edges": [["A", "B", "knows"], {"source": "B", "target": "C", "label": "likes"}]}
"""
import json
import logging
from typing import Any, Union

from forcegraph3d.model.graph import GraphStore

logger = logging.getLogger(__name__)


class GraphFileError(ValueError):
    """The file is not a graph this loader understands."""


def _edge_triple(entry: Any, position: int) -> tuple[str, str, str]:
    if isinstance(entry, dict):
        try:
            return str(entry["source"]), str(entry["target"]), str(entry.get("label", ""))
        except KeyError as e:
            raise GraphFileError(f"Edge #{position} is missing the {e} key.") from e

    if isinstance(entry, (list, tuple)) and len(entry) in (2, 3):
        source, target = entry[0], entry[1]
        label = entry[2] if len(entry) == 3 else ""
        return str(source), str(target), str(label)

    raise GraphFileError(f"Edge #{position} must be [source, target, label] or an object, got {entry!r}.")


def load_graph_data(data: Union[list, dict], store: GraphStore) -> GraphStore:
    """Fill `store` from already-parsed JSON data. Fixed nodes are created first."""
    if isinstance(data, list):
        data = {"edges": data}
    if not isinstance(data, dict):
        raise GraphFileError(f"Expected a list or an object at top level, got {type(data).__name__}.")

    for label in data.get("fixed", []):
        store.add_node(str(label), fixed=True)
    for label in data.get("nodes", []):
        store.add_node(str(label))
    for i, entry in enumerate(data.get("edges", [])):
        store.add_edge(*_edge_triple(entry, i))

    return store


def load_graph_file(filepath: str, store: GraphStore) -> GraphStore:
    logger.info(f"Loading graph from: {filepath}")
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise GraphFileError(f"'{filepath}' is not valid JSON: {e}") from e

    load_graph_data(data, store)
    logger.info(f"Loaded {len(store)} nodes and {len(store.edges)} edges.")
    return store
