"""
Parser module for canvas outline generator.

Handles loading of canvas documents (JSON with ``nodes`` and ``edges``) into
elements and connections. Unknown fields are ignored.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from .models import CanvasDocument, Connection, Element

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a canvas document cannot be loaded."""

    pass


class CanvasParser:
    """Parses canvas JSON into a CanvasDocument."""

    GEOMETRY_FIELDS = ("x", "y", "width", "height")
    PAYLOAD_FIELDS = ("label", "text", "file")

    def parse(self, input_text: str) -> CanvasDocument:
        """
        Parse canvas JSON text.

        Args:
            input_text: JSON document with a ``nodes`` list and an optional
                        ``edges`` list.

        Returns:
            CanvasDocument with nodes and edges in document order

        Raises:
            ParseError: If the document is malformed, a node is missing a
                        required field, ids repeat, or an edge references an
                        unknown node
        """
        try:
            data = json.loads(input_text)
        except json.JSONDecodeError as exc:
            raise ParseError(
                f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"
            ) from exc

        if not isinstance(data, dict):
            raise ParseError("Canvas document must be a JSON object")

        raw_nodes = data.get("nodes")
        if raw_nodes is None:
            raw_nodes = []
        if not isinstance(raw_nodes, list):
            raise ParseError("'nodes' must be a list")

        raw_edges = data.get("edges")
        if raw_edges is None:
            raw_edges = []
        if not isinstance(raw_edges, list):
            raise ParseError("'edges' must be a list")

        nodes: List[Element] = []
        seen_ids: Set[str] = set()
        for index, raw in enumerate(raw_nodes):
            element = self._parse_node(index, raw)
            if element.id in seen_ids:
                raise ParseError(f"Node {index}: Duplicate node id '{element.id}'")
            seen_ids.add(element.id)
            nodes.append(element)

        document = CanvasDocument(nodes=nodes)
        document.edges = [
            self._parse_edge(index, raw, document) for index, raw in enumerate(raw_edges)
        ]

        logger.debug(
            "Parsed canvas with %d nodes and %d edges", len(nodes), len(document.edges)
        )
        return document

    def parse_file(self, filename: Union[str, Path]) -> CanvasDocument:
        """
        Read and parse a canvas file.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        path = Path(filename)
        try:
            input_text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"Cannot read canvas file '{path}': {exc}") from exc
        logger.debug("Loaded canvas file %s", path)
        return self.parse(input_text)

    def _parse_node(self, index: int, raw: Any) -> Element:
        if not isinstance(raw, dict):
            raise ParseError(f"Node {index}: Expected an object")

        node_id = raw.get("id")
        if not isinstance(node_id, str) or not node_id:
            raise ParseError(f"Node {index}: Missing or invalid 'id'")

        node_type = raw.get("type")
        if not isinstance(node_type, str):
            raise ParseError(f"Node {index} ('{node_id}'): Missing or invalid 'type'")

        geometry = {
            name: self._parse_coordinate(index, node_id, raw, name)
            for name in self.GEOMETRY_FIELDS
        }
        payload = {
            name: self._parse_optional_string(index, node_id, raw, name)
            for name in self.PAYLOAD_FIELDS
        }
        return Element(id=node_id, type=node_type, **geometry, **payload)

    def _parse_coordinate(
        self, index: int, node_id: str, raw: Dict[str, Any], name: str
    ) -> int:
        value = raw.get(name)
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParseError(
                f"Node {index} ('{node_id}'): Missing or invalid '{name}'"
            )
        # json accepts NaN and Infinity, and overflows large exponents to inf
        if isinstance(value, float) and not math.isfinite(value):
            raise ParseError(
                f"Node {index} ('{node_id}'): '{name}' must be a finite number"
            )
        if isinstance(value, float) and not value.is_integer():
            logger.debug(
                "Node %s: truncating %s=%r to an integer", node_id, name, value
            )
        return int(value)

    def _parse_optional_string(
        self, index: int, node_id: str, raw: Dict[str, Any], name: str
    ) -> Optional[str]:
        value = raw.get(name)
        if value is not None and not isinstance(value, str):
            raise ParseError(f"Node {index} ('{node_id}'): '{name}' must be a string")
        return value

    def _parse_edge(
        self, index: int, raw: Any, document: CanvasDocument
    ) -> Connection:
        if not isinstance(raw, dict):
            raise ParseError(f"Edge {index}: Expected an object")

        source = raw.get("fromNode")
        target = raw.get("toNode")
        if not isinstance(source, str) or not source:
            raise ParseError(f"Edge {index}: Missing or invalid 'fromNode'")
        if not isinstance(target, str) or not target:
            raise ParseError(f"Edge {index}: Missing or invalid 'toNode'")

        if document.get_element(source) is None:
            raise ParseError(f"Edge {index}: Unknown source node '{source}'")
        if document.get_element(target) is None:
            raise ParseError(f"Edge {index}: Unknown target node '{target}'")

        return Connection(from_node=source, to_node=target)


def parse_canvas(input_text: str) -> CanvasDocument:
    """
    Convenience function to parse canvas JSON.

    Args:
        input_text: Canvas JSON text

    Returns:
        CanvasDocument
    """
    parser = CanvasParser()
    return parser.parse(input_text)


def load_canvas(filename: Union[str, Path]) -> CanvasDocument:
    """Convenience function to read and parse a canvas file."""
    parser = CanvasParser()
    return parser.parse_file(filename)
