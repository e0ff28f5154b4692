"""
Data models for canvas outline generation.

This module contains dataclasses that represent the elements of a canvas
document and the group trees built from them. The models carry no behavior
beyond simple derived properties; containment is resolved elsewhere.

Classes:
    ElementKind: Recognized element kinds (group, text, file, other).
    Element: A single positioned rectangle on the canvas.
    Connection: A directed edge between two elements.
    CanvasDocument: Ordered nodes and edges of a loaded canvas.
    GroupChild: Reference to a nested group tree, by group id.
    LeafChild: Reference to a non-group element.
    GroupTree: A group element together with its ordered children.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class ElementKind(Enum):
    """Kinds of canvas elements."""

    GROUP = "group"
    TEXT = "text"
    FILE = "file"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str) -> "ElementKind":
        """Map a raw ``type`` tag to a kind. Unknown tags become OTHER."""
        for kind in (cls.GROUP, cls.TEXT, cls.FILE):
            if kind.value == tag:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class Element:
    """
    A positioned rectangle on the canvas.

    The rectangle spans ``[x, x + width] x [y, y + height]``. The raw type tag
    is always retained so unknown kinds can still be described.

    Attributes:
        id: Unique identifier within a document.
        type: Raw type tag as found in the source document.
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
        label: Group label (groups only).
        text: Note text, may contain line breaks (text only).
        file: Referenced path (file only).
    """

    id: str
    type: str
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    label: Optional[str] = None
    text: Optional[str] = None
    file: Optional[str] = None

    @property
    def kind(self) -> ElementKind:
        return ElementKind.from_tag(self.type)

    @property
    def is_group(self) -> bool:
        return self.kind is ElementKind.GROUP

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def first_line(self) -> str:
        """Text up to the first line break, or "" when there is no text."""
        if self.text is None:
            return ""
        return self.text.split("\n", 1)[0]

    def __str__(self) -> str:
        kind = self.kind
        if kind is ElementKind.GROUP:
            return f"Group[id={self.id}, '{self.label}']"
        if kind is ElementKind.TEXT:
            return f"Text[id={self.id}, firstLine={self.first_line}]"
        if kind is ElementKind.FILE:
            return f"File[id={self.id}, path={self.file}]"
        return f"{self.type}[id={self.id}]"


@dataclass(frozen=True)
class Connection:
    """A directed edge between two elements, referenced by id."""

    from_node: str
    to_node: str


@dataclass
class CanvasDocument:
    """
    A loaded canvas: elements and connections in document order.

    Attributes:
        nodes: Elements in the order they appear in the source.
        edges: Connections in the order they appear in the source.
    """

    nodes: List[Element] = field(default_factory=list)
    edges: List[Connection] = field(default_factory=list)

    def __post_init__(self):
        self._by_id: Dict[str, Element] = {node.id: node for node in self.nodes}

    def get_element(self, element_id: str) -> Optional[Element]:
        """Look up an element by id."""
        return self._by_id.get(element_id)

    def groups(self) -> List[Element]:
        return [node for node in self.nodes if node.is_group]


@dataclass(frozen=True)
class GroupChild:
    """A nested group, referenced by the id of its group element."""

    group_id: str


@dataclass(frozen=True)
class LeafChild:
    """A non-group element placed inside a group."""

    element: Element


Child = Union[GroupChild, LeafChild]


@dataclass
class GroupTree:
    """
    A group element and its children in document order.

    Nested groups are referenced by id (see ``GroupChild``) and live in the
    arena owned by the containment result, so every tree is owned exactly once.
    """

    group: Element
    children: List[Child] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.group.id

    def leaves(self) -> List[Element]:
        """Leaf elements directly inside this group."""
        return [c.element for c in self.children if isinstance(c, LeafChild)]

    def child_group_ids(self) -> List[str]:
        """Ids of groups nested directly inside this group."""
        return [c.group_id for c in self.children if isinstance(c, GroupChild)]
