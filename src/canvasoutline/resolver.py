"""
Containment resolution using networkx for the group forest.

Turns a flat, ordered list of elements into:
- a forest of nested groups (each group has at most one direct parent)
- an assignment of every non-group element to its deepest enclosing group
- the list of non-group elements that no group contains

Containment only tests an element's origin point against a group rectangle,
boundary inclusive.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from .models import Child, Element, GroupChild, GroupTree, LeafChild

logger = logging.getLogger(__name__)


def is_inside(element: Element, group: Element) -> bool:
    """Check whether the element's origin lies within the group rectangle."""
    return (
        group.x <= element.x <= group.x + group.width
        and group.y <= element.y <= group.y + group.height
    )


def find_deepest_group(
    element: Element, groups: Sequence[Element]
) -> Optional[Element]:
    """
    Find the smallest-area group containing the element.

    Equal areas resolve to the group that comes first in ``groups``.

    Returns:
        The containing group, or None if no group contains the element
    """
    deepest = None
    for group in groups:
        if group.id == element.id or not is_inside(element, group):
            continue
        if deepest is None or group.area < deepest.area:
            deepest = group
    return deepest


@dataclass
class ContainmentResult:
    """
    Result of containment resolution.

    Attributes:
        trees: Arena of group trees keyed by group id, in input order.
        roots: Ids of groups without a parent, in input order.
        ungrouped: Non-group elements outside every group, in input order.
        parents: Direct parent id of each group (None for roots).
        graph: Group forest as a directed graph (parent -> child).
    """

    trees: Dict[str, GroupTree] = field(default_factory=dict)
    roots: List[str] = field(default_factory=list)
    ungrouped: List[Element] = field(default_factory=list)
    parents: Dict[str, Optional[str]] = field(default_factory=dict)
    graph: nx.DiGraph = field(default_factory=nx.DiGraph)

    def get_tree(self, group_id: str) -> GroupTree:
        return self.trees[group_id]

    def is_forest(self) -> bool:
        """True if every group has at most one parent and there are no cycles."""
        # networkx treats the null graph as a pointless concept
        if self.graph.number_of_nodes() == 0:
            return True
        return nx.is_branching(self.graph)

    def walk(self) -> Iterator[Tuple[GroupTree, int]]:
        """Yield (tree, depth) for every group in pre-order."""
        depths: Dict[str, int] = {}
        for root_id in self.roots:
            # successors are visited in edge insertion order, i.e. input order
            for group_id in nx.dfs_preorder_nodes(self.graph, source=root_id):
                parent = self.parents[group_id]
                depths[group_id] = 0 if parent is None else depths[parent] + 1
                yield self.trees[group_id], depths[group_id]


class ContainmentResolver:
    """
    Resolves geometric containment into a group forest.

    Groups with the same origin contain each other under the origin test. Such
    pairs are oriented so that the larger group (then the earlier one in input
    order) is the container; with that rule the containment relation between
    groups can never form a cycle.
    """

    def __init__(self):
        self.graph: nx.DiGraph = None
        self._order: Dict[str, int] = {}

    def resolve(self, elements: Sequence[Element]) -> ContainmentResult:
        """
        Resolve containment for the given elements.

        Args:
            elements: Elements in document order, with unique ids

        Returns:
            ContainmentResult with the group forest and ungrouped elements
        """
        self._order = {element.id: index for index, element in enumerate(elements)}
        groups = [element for element in elements if element.is_group]
        others = [element for element in elements if not element.is_group]

        # Build networkx graph
        self.graph = nx.DiGraph()
        self.graph.add_nodes_from(group.id for group in groups)

        parents: Dict[str, Optional[str]] = {}
        for group in groups:
            parent = self._find_direct_parent(group, groups)
            parents[group.id] = parent.id if parent is not None else None
            if parent is not None:
                self.graph.add_edge(parent.id, group.id)
                logger.debug("Group %s nested in %s", group.id, parent.id)

        children: Dict[str, List[Child]] = {
            group.id: [GroupChild(child_id) for child_id in self.graph.successors(group.id)]
            for group in groups
        }

        ungrouped: List[Element] = []
        for element in others:
            container = find_deepest_group(element, groups)
            if container is None:
                ungrouped.append(element)
                continue
            children[container.id].append(LeafChild(element))
            logger.debug("Element %s assigned to group %s", element.id, container.id)

        result = ContainmentResult(graph=self.graph, parents=parents)
        for group in groups:
            ordered = sorted(children[group.id], key=self._child_order)
            result.trees[group.id] = GroupTree(group=group, children=ordered)
        # graph nodes keep insertion order, so roots come out in input order
        result.roots = [
            group_id
            for group_id in self.graph.nodes
            if self.graph.in_degree(group_id) == 0
        ]
        result.ungrouped = ungrouped

        if not result.is_forest():
            raise RuntimeError("Group containment did not resolve to a forest")

        logger.debug(
            "Resolved %d groups into %d roots; %d ungrouped elements",
            len(groups),
            len(result.roots),
            len(ungrouped),
        )
        return result

    def encloses(self, group: Element, candidate: Element) -> bool:
        """
        Check whether ``group`` can be a container of ``candidate``.

        Both must be groups. Mutual containment (shared origin) is decided
        by area, then by input order.
        """
        if group.id == candidate.id or not is_inside(candidate, group):
            return False
        if not is_inside(group, candidate):
            return True
        if group.area != candidate.area:
            return group.area > candidate.area
        return self._order[group.id] < self._order[candidate.id]

    def _find_direct_parent(
        self, group: Element, groups: Sequence[Element]
    ) -> Optional[Element]:
        """
        Pick the direct parent of a group.

        A container is direct when no third group sits between it and the
        group. Among direct containers the smallest area wins, then the
        earliest in input order.
        """
        # an intermediate group must itself enclose the group
        containers = [c for c in groups if self.encloses(c, group)]
        direct = [
            container
            for container in containers
            if not any(
                self.encloses(container, middle)
                for middle in containers
                if middle.id != container.id
            )
        ]

        if not direct:
            return None
        return min(direct, key=lambda g: (g.area, self._order[g.id]))

    def _child_order(self, child: Child) -> int:
        if isinstance(child, GroupChild):
            return self._order[child.group_id]
        return self._order[child.element.id]


def resolve_containment(elements: Sequence[Element]) -> ContainmentResult:
    """
    Convenience function to resolve containment.

    Args:
        elements: Elements in document order

    Returns:
        ContainmentResult
    """
    resolver = ContainmentResolver()
    return resolver.resolve(elements)
