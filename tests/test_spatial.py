"""Tests for the plant quad tree."""

import itertools

import pytest

from island_sim.simulation.entity import Entity, EntityType
from island_sim.simulation.spatial import PlantIndex, PlantNode, quadrant


def _plant(x: float, z: float, y: float = 0.0) -> Entity:
    return Entity(x=x, y=y, z=z, type=EntityType.PLANT_1)


def _shape(node: PlantNode | None):
    """Nested (x, z, children) tuples describing the tree layout."""
    if node is None:
        return None
    return (node.key.x, node.key.z, tuple(_shape(child) for child in node.children))


def _index(points) -> PlantIndex:
    index = PlantIndex()
    for x, z in points:
        index.insert(_plant(x, z))
    return index


class TestQuadrant:
    @pytest.mark.parametrize(
        "child,slot",
        [
            ((2, 2), 0),
            ((2, 0), 1),
            ((0, 2), 2),
            ((0, 0), 3),
            # Ties go to the "not greater" side of that axis
            ((1, 1), 3),
            ((1, 2), 2),
            ((2, 1), 1),
        ],
    )
    def test_slot_from_strict_comparisons(self, child, slot):
        assert quadrant(_plant(1, 1), _plant(*child)) == slot


class TestInsert:
    def test_first_plant_becomes_root(self):
        index = PlantIndex()
        plant = _plant(3, 3)
        index.insert(plant)
        assert index.root.key is plant
        assert index.root.children == [None, None, None, None]
        assert len(index) == 1

    def test_children_fill_their_quadrants(self):
        index = _index([(5, 5), (7, 7), (7, 3), (3, 7), (3, 3)])
        keys = [(c.key.x, c.key.z) for c in index.root.children]
        assert keys == [(7, 7), (7, 3), (3, 7), (3, 3)]

    def test_descends_into_occupied_slot(self):
        index = _index([(5, 5), (7, 7), (8, 8), (6, 6)])
        first = index.root.children[0]
        assert (first.key.x, first.key.z) == (7, 7)
        assert (first.children[0].key.x, first.children[0].key.z) == (8, 8)
        assert (first.children[3].key.x, first.children[3].key.z) == (6, 6)

    def test_same_sequence_same_shape(self):
        points = [(4, 4), (1, 6), (6, 1), (5, 5), (2, 2), (4, 7), (4, 4)]
        assert _shape(_index(points).root) == _shape(_index(points).root)

    def test_sorted_insertion_degenerates_to_chain(self):
        index = _index([(i, i) for i in range(6)])
        assert index.depth() == 6

    def test_len_counts_duplicates(self):
        index = _index([(1, 1), (1, 1), (2, 2)])
        assert len(index) == 3


class TestCollidesAt:
    def test_empty_index_never_collides(self):
        index = PlantIndex()
        assert not index.collides_at(0, 0)
        assert index.depth() == 0
        assert list(index) == []

    def test_ignores_elevation(self):
        index = PlantIndex()
        index.insert(_plant(2, 3, y=9.5))
        assert index.collides_at(2, 3)
        assert not index.collides_at(3, 2)

    def test_exact_match_only(self):
        index = _index([(2, 3)])
        assert not index.collides_at(2.5, 3)
        assert index.collides_at(2.0, 3.0)

    def test_independent_of_insertion_order(self):
        points = [(2, 2), (0, 4), (4, 0), (2, 4), (3, 3)]
        occupied = set(points)
        for order in itertools.permutations(points):
            index = _index(order)
            for x in range(6):
                for z in range(6):
                    assert index.collides_at(x, z) == ((x, z) in occupied)

    def test_finds_tied_keys_in_any_branch(self):
        # (5, 2) ties the root on x and lands in a "not greater" slot
        index = _index([(5, 5), (3, 3), (5, 2), (5, 9)])
        assert index.collides_at(5, 2)
        assert index.collides_at(5, 9)


class TestTraversal:
    def test_pre_order(self):
        index = _index([(5, 5), (7, 7), (7, 3), (3, 7), (3, 3), (8, 8)])
        order = [(p.x, p.z) for p in index]
        assert order == [(5, 5), (7, 7), (8, 8), (7, 3), (3, 7), (3, 3)]

    def test_for_each_visits_every_plant_once(self):
        points = [(4, 4), (1, 6), (6, 1), (5, 5), (2, 2)]
        index = _index(points)
        visited = []
        index.for_each(visited.append)
        assert len(visited) == len(points)
        assert len({p.id for p in visited}) == len(points)

    def test_clear(self):
        index = _index([(1, 1), (2, 2)])
        index.clear()
        assert len(index) == 0
        assert not index.collides_at(1, 1)
