"""
Highlight & Search
==================
Marks nodes as highlighted, either manually or as search results.

Search highlights and manual highlights are separate flags; the renderer
gives search highlights precedence (see controller.frame).
"""
from __future__ import annotations

import logging
from typing import Optional

from forcegraph3d.controller.events import CANVAS_CLICKED, NODE_SELECTED, EventRegistry
from forcegraph3d.model.graph import GraphNode, GraphStore

logger = logging.getLogger(__name__)

EMPTY_CLICK = {"x": 0, "y": 0}


class HighlightIndex:
    def __init__(self, store: GraphStore, events: EventRegistry) -> None:
        self.store = store
        self.events = events
        self._results: list[GraphNode] = []

    @property
    def results(self) -> list[GraphNode]:
        """Nodes currently search-highlighted, in the order they were found."""
        return list(self._results)

    def highlight_by_exact_label(self, label: str) -> Optional[GraphNode]:
        self.clear_search_highlights()

        node = self.store.get(label)
        if node is not None:
            node.search_highlighted = True
            self._results.append(node)
            self.events.emit(NODE_SELECTED, node)
        return node

    def search_by_substring(self, query: str) -> list[GraphNode]:
        """
        Case-insensitive substring search over all labels.

        Emits `nodeSelected` for the first match in insertion order, or a
        `canvasClicked` at (0, 0) when nothing matches. An empty query only
        clears the highlights.
        """
        self.clear_search_highlights()
        if not query:
            self.events.emit(CANVAS_CLICKED, dict(EMPTY_CLICK))
            return []

        needle = query.lower()
        for node in self.store:
            if needle in node.label.lower():
                node.search_highlighted = True
                self._results.append(node)

        logger.debug(f"Search '{query}' matched {len(self._results)} node(s).")
        if self._results:
            self.events.emit(NODE_SELECTED, self._results[0])
        else:
            self.events.emit(CANVAS_CLICKED, dict(EMPTY_CLICK))
        return self.results

    def search_and_highlight(self, query: str) -> list[GraphNode]:
        return self.search_by_substring(query)

    def highlight_node(self, label: str, highlighted: bool = True) -> Optional[GraphNode]:
        """Set the manual highlight of a node and of the edges touching it."""
        node = self.store.get(label)
        if node is None:
            return None
        node.highlighted = highlighted
        for edge in self.store.edges_of(label):
            edge.highlighted = highlighted
        return node

    def clear_search_highlights(self) -> None:
        for node in self.store:
            node.search_highlighted = False
        self._results = []

    def clear_all_highlights(self) -> None:
        for node in self.store:
            node.highlighted = False
            node.search_highlighted = False
        for edge in self.store.edges:
            edge.highlighted = False
        self._results = []
