"""Quad-partition tree over plants for occupancy queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterator

if TYPE_CHECKING:
    from .entity import Entity


def quadrant(key: Entity, child: Entity) -> int:
    """
    Slot a child falls into relative to a key.

    Both axes use strict ``<``, so a tie on an axis lands in the "not
    greater" half for that axis.
    """
    right = key.x < child.x
    below = key.z < child.z
    if right:
        return 0 if below else 1
    return 2 if below else 3


class PlantNode:
    """A plant plus up to four child subtrees, one per quadrant."""

    __slots__ = ("key", "children")

    def __init__(self, key: Entity):
        self.key = key
        self.children: list[PlantNode | None] = [None, None, None, None]

    def insert(self, entity: Entity) -> None:
        node = self
        while True:
            slot = quadrant(node.key, entity)
            child = node.children[slot]
            if child is None:
                node.children[slot] = PlantNode(entity)
                return
            node = child

    def collides_at(self, x: float, z: float) -> bool:
        # Exact matches can sit in any quadrant after ties, so scan it all
        return any(node.key.x == x and node.key.z == z for node in self.walk())

    def walk(self) -> Iterator[PlantNode]:
        """Yield nodes in pre-order: self, then children by slot."""
        stack: list[PlantNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            for child in reversed(node.children):
                if child is not None:
                    stack.append(child)

    def depth(self) -> int:
        deepest = 0
        stack: list[tuple[PlantNode, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children if child is not None)
        return deepest


class PlantIndex:
    """
    Unbalanced quad tree holding every plant on the island.

    Plants never move, so the tree is built once during placement and
    only queried afterwards. There is no rebalancing: the shape depends on
    insertion order, and the same sequence always yields the same tree.
    """

    def __init__(self) -> None:
        self.root: PlantNode | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Entity]:
        if self.root is None:
            return
        for node in self.root.walk():
            yield node.key

    def insert(self, entity: Entity) -> None:
        """Add a plant as a new leaf."""
        if self.root is None:
            self.root = PlantNode(entity)
        else:
            self.root.insert(entity)
        self._size += 1

    def collides_at(self, x: float, z: float) -> bool:
        """Check if any plant stands at exactly (x, z)."""
        if self.root is None:
            return False
        return self.root.collides_at(x, z)

    def for_each(self, visitor: Callable[[Entity], None]) -> None:
        """Call ``visitor`` on every plant in pre-order."""
        for entity in self:
            visitor(entity)

    def depth(self) -> int:
        return 0 if self.root is None else self.root.depth()

    def clear(self) -> None:
        self.root = None
        self._size = 0
