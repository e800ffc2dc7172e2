"""Simulation module - pure logic, no rendering."""

from .entity import Entity, EntityMode, EntityType, ModeKind
from .heightfield import LAKE, LAND, SEA, Band, HeightField
from .spatial import PlantIndex, PlantNode
from .world import StatsHistory, World, WorldStats

__all__ = [
    "Band",
    "Entity",
    "EntityMode",
    "EntityType",
    "HeightField",
    "LAKE",
    "LAND",
    "ModeKind",
    "PlantIndex",
    "PlantNode",
    "SEA",
    "StatsHistory",
    "World",
    "WorldStats",
]
