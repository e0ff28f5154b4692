"""
Main outline generator module.

Combines parsing, containment resolution and rendering to turn a canvas
document into a nested heading/bullet outline.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from .export import OutlineExporter
from .models import CanvasDocument, Element
from .parser import CanvasParser
from .renderer import (
    DEFAULT_GROUP_LABEL,
    MAX_HEADING_LEVEL,
    UNGROUPED_LABEL,
    OutlineRenderer,
)
from .resolver import ContainmentResolver
from .tracer import RenderTrace

logger = logging.getLogger(__name__)


class OutlineGenerator:
    """
    Generate outlines from canvas documents.

    Example:
        >>> generator = OutlineGenerator()
        >>> outline = generator.generate('''
        ...     {"nodes": [
        ...         {"id": "g", "type": "group", "label": "Plan",
        ...          "x": 0, "y": 0, "width": 100, "height": 100},
        ...         {"id": "t", "type": "text", "text": "Run",
        ...          "x": 10, "y": 10, "width": 20, "height": 20}
        ...     ]}
        ... ''')
        >>> print(outline)
    """

    def __init__(
        self,
        default_group_label: str = DEFAULT_GROUP_LABEL,
        ungrouped_label: str = UNGROUPED_LABEL,
        indent: str = "  ",
        max_heading_level: int = MAX_HEADING_LEVEL,
        font: Optional[str] = None,
    ):
        """
        Initialize the outline generator.

        Args:
            default_group_label: Heading used for groups without a label
            ungrouped_label: Heading of the section listing ungrouped elements
            indent: Indentation added per nesting level for bullets
            max_heading_level: Deepest heading level emitted
            font: Font name for PNG output
        """
        self.parser = CanvasParser()
        self.resolver = ContainmentResolver()
        self.renderer = OutlineRenderer(
            indent=indent,
            default_group_label=default_group_label,
            ungrouped_label=ungrouped_label,
            max_heading_level=max_heading_level,
        )
        self.exporter = OutlineExporter(default_font=font)
        self._trace: Optional[RenderTrace] = None

    def generate(self, input_text: str, debug: bool = False) -> str:
        """
        Generate an outline from canvas JSON text.

        Args:
            input_text: Canvas JSON with ``nodes`` and ``edges``
            debug: Record a RenderTrace, available through get_trace()

        Returns:
            The outline as a string

        Raises:
            ParseError: If the canvas cannot be parsed
        """
        trace = RenderTrace(input_text=input_text) if debug else None
        document = self.parser.parse(input_text)
        return self._run(document, trace)

    def generate_from_file(
        self, filename: Union[str, Path], debug: bool = False
    ) -> str:
        """Read a canvas file and generate its outline."""
        document = self.parser.parse_file(filename)
        trace = RenderTrace(source=str(filename)) if debug else None
        return self._run(document, trace)

    def generate_from_document(
        self, document: CanvasDocument, debug: bool = False
    ) -> str:
        """Generate an outline from an already loaded document."""
        trace = RenderTrace() if debug else None
        return self._run(document, trace)

    def generate_from_elements(
        self, elements: Sequence[Element], debug: bool = False
    ) -> str:
        """Generate an outline from elements in document order."""
        return self.generate_from_document(
            CanvasDocument(nodes=list(elements)), debug=debug
        )

    def get_trace(self) -> Optional[RenderTrace]:
        """Trace of the last run made with debug=True, else None."""
        return self._trace

    def save_txt(self, outline: str, filename: Union[str, Path]) -> None:
        self.exporter.save_txt(outline, filename)

    def save_png(self, outline: str, filename: Union[str, Path], **kwargs) -> None:
        """Save an outline as PNG. Keyword arguments go to OutlineExporter.save_png."""
        self.exporter.save_png(outline, filename, **kwargs)

    def _run(self, document: CanvasDocument, trace: Optional[RenderTrace]) -> str:
        self._trace = trace

        if trace is not None:
            trace.add_stage(
                "parse",
                {
                    "elements": len(document.nodes),
                    "groups": len(document.groups()),
                    "connections": len(document.edges),
                },
            )

        result = self.resolver.resolve(document.nodes)

        if trace is not None:
            trace.add_stage(
                "resolve",
                {
                    "roots": list(result.roots),
                    "nesting": [(tree.id, depth) for tree, depth in result.walk()],
                    "parents": dict(result.parents),
                    "leaves": {
                        tree.id: [leaf.id for leaf in tree.leaves()]
                        for tree in result.trees.values()
                    },
                    "ungrouped": [element.id for element in result.ungrouped],
                },
            )

        outline = self.renderer.render(result)
        logger.debug("Rendered outline of %d characters", len(outline))

        if trace is not None:
            trace.add_stage("render", {"characters": len(outline)}, output=outline)

        return outline


def generate_outline(input_text: str) -> str:
    """
    Convenience function to generate an outline from canvas JSON.

    Args:
        input_text: Canvas JSON text

    Returns:
        The outline as a string
    """
    return OutlineGenerator().generate(input_text)
