"""
Outline renderer module.

Walks a resolved group forest and produces a heading/bullet outline:

    ## Root group

    - leaf in root
    ### Nested group

      - leaf in nested group


    # Without group

    - element outside every group

Rendering is a pure function of the containment result; fragments are
yielded in order and joined by the caller.
"""

from typing import Iterator

from .models import Element, ElementKind, GroupChild, GroupTree
from .resolver import ContainmentResult

MAX_HEADING_LEVEL = 6
DEFAULT_GROUP_LABEL = "Group"
UNGROUPED_LABEL = "Without group"


def describe(element: Element) -> str:
    """Describe an element as a single bullet line."""
    kind = element.kind
    if kind is ElementKind.TEXT:
        return element.first_line
    if kind is ElementKind.FILE:
        return "File: " + (element.file or "")
    if kind is ElementKind.GROUP:
        return "Group: " + (element.label or "")
    return element.type


def heading_level(depth: int, max_level: int = MAX_HEADING_LEVEL) -> int:
    """Heading level for a group at the given depth (roots are level 2)."""
    return min(depth + 2, max_level)


class OutlineRenderer:
    """
    Renders a containment result as an outline.
    """

    def __init__(
        self,
        heading_char: str = "#",
        indent: str = "  ",
        default_group_label: str = DEFAULT_GROUP_LABEL,
        ungrouped_label: str = UNGROUPED_LABEL,
        max_heading_level: int = MAX_HEADING_LEVEL,
    ):
        if not heading_char:
            raise ValueError("heading_char must not be empty")
        if max_heading_level < 2:
            raise ValueError("max_heading_level must be at least 2")
        self.heading_char = heading_char
        self.indent = indent
        self.default_group_label = default_group_label
        self.ungrouped_label = ungrouped_label
        self.max_heading_level = max_heading_level

    def render(self, result: ContainmentResult) -> str:
        """Render the full outline to a string."""
        return "".join(self.iter_fragments(result))

    def iter_fragments(self, result: ContainmentResult) -> Iterator[str]:
        """Yield outline fragments in output order."""
        for root_id in result.roots:
            yield from self.iter_group(result, root_id, 0)

        if result.ungrouped:
            yield self.heading(1, self.ungrouped_label)
            for element in result.ungrouped:
                yield self.bullet(0, describe(element))
            yield "\n"

    def iter_group(
        self, result: ContainmentResult, group_id: str, depth: int
    ) -> Iterator[str]:
        """
        Yield the fragments for one group and its subtree.

        Walks the subtree with an explicit stack of (depth, remaining children).
        """
        yield self.group_heading(result.get_tree(group_id), depth)
        stack = [(depth, iter(result.get_tree(group_id).children))]

        while stack:
            current_depth, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                yield "\n"
            elif isinstance(child, GroupChild):
                tree = result.get_tree(child.group_id)
                yield self.group_heading(tree, current_depth + 1)
                stack.append((current_depth + 1, iter(tree.children)))
            else:
                yield self.bullet(current_depth, describe(child.element))

    def group_heading(self, tree: GroupTree, depth: int) -> str:
        label = tree.group.label
        return self.heading(
            heading_level(depth, self.max_heading_level),
            label if label is not None else self.default_group_label,
        )

    def heading(self, level: int, label: str) -> str:
        return f"{self.heading_char * level} {label}\n\n"

    def bullet(self, depth: int, description: str) -> str:
        return f"{self.indent * depth}- {description}\n"


def render_outline(result: ContainmentResult) -> str:
    """Render a containment result with default settings."""
    return OutlineRenderer().render(result)
