"""
canvasoutline - Canvas documents as nested outlines

Turns the positioned groups, notes and file cards of a canvas document into a
heading/bullet outline, treating geometric containment as nesting.

Example:
    >>> from canvasoutline import OutlineGenerator
    >>> generator = OutlineGenerator()
    >>> outline = generator.generate_from_file("board.canvas")
    >>> print(outline)

Debug Mode Example:
    >>> outline = generator.generate_from_file("board.canvas", debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
"""

__version__ = "0.1.0"

from .export import ExportError, OutlineExporter
from .generator import OutlineGenerator, generate_outline
from .models import (
    CanvasDocument,
    Child,
    Connection,
    Element,
    ElementKind,
    GroupChild,
    GroupTree,
    LeafChild,
)
from .parser import CanvasParser, ParseError, load_canvas, parse_canvas
from .renderer import OutlineRenderer, describe, heading_level, render_outline
from .resolver import (
    ContainmentResolver,
    ContainmentResult,
    find_deepest_group,
    is_inside,
    resolve_containment,
)
from .tracer import PipelineStage, RenderTrace

__all__ = [
    # Main API
    "OutlineGenerator",
    "generate_outline",
    # Models
    "Element",
    "ElementKind",
    "Connection",
    "CanvasDocument",
    "GroupTree",
    "GroupChild",
    "LeafChild",
    "Child",
    # Parser
    "CanvasParser",
    "ParseError",
    "parse_canvas",
    "load_canvas",
    # Resolver
    "ContainmentResolver",
    "ContainmentResult",
    "is_inside",
    "find_deepest_group",
    "resolve_containment",
    # Renderer
    "OutlineRenderer",
    "describe",
    "heading_level",
    "render_outline",
    # Export
    "OutlineExporter",
    "ExportError",
    # Debug/Tracing
    "RenderTrace",
    "PipelineStage",
]
