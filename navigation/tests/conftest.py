"""
conftest.py - Shared pytest fixtures for the rover navigation suite
"""

import pytest

from navigation.entities.rover import Rover
from navigation.topology.cube import CubeTopology
from navigation.utils.enums import Face, Heading
from navigation.utils.types import RoverState


class CellSetChecker:
    """Obstacle checker backed by a plain set of (face, x, y) triples."""

    def __init__(self, cells=()):
        self.cells = {(Face(f), x, y) for f, x, y in cells}
        self.queries = []

    def has_obstacle(self, face, x, y):
        self.queries.append((face, x, y))
        return (Face(face), x, y) in self.cells


@pytest.fixture(scope="session")
def topology():
    return CubeTopology()


@pytest.fixture
def make_rover(topology):
    """Factory: make_rover(face, x, y, heading, blocked=[(face, x, y), ...])"""
    def _make(face=Face.FRONT, x=5, y=5, heading=Heading.N, blocked=()):
        return Rover(RoverState(face, x, y, heading), topology, CellSetChecker(blocked))
    return _make


@pytest.fixture
def checker_factory():
    return CellSetChecker
