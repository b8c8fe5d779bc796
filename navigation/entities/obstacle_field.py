# navigation/entities/obstacle_field.py
#
# Random obstacles scattered over all faces of the cube planet.
#
# The field is generated once, at construction, and is read-only afterwards,
# so one field can be shared by any number of readers.
#
# Generation:
#   target = floor(total_faces * grid_size^2 * density)   (60 on the reference cube)
#
#   Low densities use rejection sampling: draw a random (face, x, y), skip it if
#   it is the start cell or already taken, stop at the target or after
#   ATTEMPT_BUDGET_FACTOR * target draws. Running out of draws leaves the field
#   short of the target; that is accepted and logged, never retried.
#
#   Above EXACT_SAMPLING_DENSITY rejection sampling wastes most draws, so the
#   field samples cell indices without replacement instead and always hits
#   the target exactly (capped by the number of free cells).

import logging
import math
from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from navigation.entities.obstacle import Obstacle
from navigation.utils.consts import (
    ATTEMPT_BUDGET_FACTOR,
    EXACT_SAMPLING_DENSITY,
    GRID_SIZE,
    OBSTACLE_DENSITY,
    TOTAL_FACES,
)
from navigation.utils.enums import Face

logger = logging.getLogger(__name__)

CellKey = Tuple[Face, int, int]


class ObstacleField:
    """
    Fixed-density set of blocked cells, guaranteed to leave the start cell clear.
    """

    def __init__(
        self,
        start_face: Face,
        start_x: int,
        start_y: int,
        total_faces: int = TOTAL_FACES,
        grid_size: int = GRID_SIZE,
        density: float = OBSTACLE_DENSITY,
        seed: Optional[int] = None,
    ):
        if not isinstance(grid_size, int) or grid_size <= 0:
            raise ValueError(f"grid_size must be a positive integer, got {grid_size!r}")
        if not 1 <= total_faces <= len(Face):
            raise ValueError(f"total_faces must be between 1 and {len(Face)}, got {total_faces}")
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be between 0 and 1, got {density}")
        if not (0 <= start_x < grid_size and 0 <= start_y < grid_size):
            raise ValueError(f"Start cell ({start_x}, {start_y}) is outside a {grid_size}x{grid_size} face")

        self.grid_size = grid_size
        self.total_faces = total_faces
        self.density = density
        self.start: CellKey = (Face(start_face), start_x, start_y)
        self.target_count = int(math.floor(total_faces * grid_size * grid_size * density))

        rng = np.random.default_rng(seed)
        if density > EXACT_SAMPLING_DENSITY:
            cells = self._sample_exact(rng)
        else:
            cells = self._sample_rejection(rng)

        self._cells: FrozenSet[CellKey] = frozenset(cells)
        self._by_face: Dict[Face, List[Obstacle]] = {}
        for face, x, y in self._cells:
            self._by_face.setdefault(face, []).append(Obstacle(face, x, y))

        logger.debug("Generated %d/%d obstacles (density %.2f, start %s)",
                     len(self._cells), self.target_count, density, self.start)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _sample_rejection(self, rng: np.random.Generator) -> set:
        generated = set()
        max_attempts = self.target_count * ATTEMPT_BUDGET_FACTOR

        faces = rng.integers(0, self.total_faces, size=max_attempts)
        xs = rng.integers(0, self.grid_size, size=max_attempts)
        ys = rng.integers(0, self.grid_size, size=max_attempts)

        for face, x, y in zip(faces, xs, ys):
            if len(generated) >= self.target_count:
                break
            key = (Face(int(face)), int(x), int(y))
            if key == self.start or key in generated:
                continue
            generated.add(key)

        if len(generated) < self.target_count:
            logger.warning(
                "Attempt budget of %d exhausted: placed %d of %d obstacles",
                max_attempts, len(generated), self.target_count,
            )
        return generated

    def _sample_exact(self, rng: np.random.Generator) -> set:
        face_cells = self.grid_size * self.grid_size
        start_face, start_x, start_y = self.start
        start_index = int(start_face) * face_cells + start_y * self.grid_size + start_x

        free = np.arange(self.total_faces * face_cells)
        free = free[free != start_index]
        count = min(self.target_count, len(free))

        generated = set()
        for index in rng.choice(free, size=count, replace=False):
            face, rem = divmod(int(index), face_cells)
            y, x = divmod(rem, self.grid_size)
            generated.add((Face(face), x, y))
        return generated

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_obstacle(self, face, x, y) -> bool:
        """
        True if (face, x, y) is blocked.
        Anything that is not a valid face or cell is simply not an obstacle.
        """
        # bool is an int subclass, Face(True) would be RIGHT
        if any(isinstance(v, bool) for v in (face, x, y)):
            return False
        try:
            return (Face(face), x, y) in self._cells
        except (ValueError, TypeError):
            return False

    def get_all_obstacles(self) -> List[Obstacle]:
        return [obstacle for obstacles in self._by_face.values() for obstacle in obstacles]

    def get_obstacles_for_face(self, face) -> List[Obstacle]:
        if isinstance(face, bool):
            return []
        try:
            return list(self._by_face.get(Face(face), []))
        except ValueError:
            return []

    def get_obstacle_count(self) -> int:
        return len(self._cells)

    def __contains__(self, obstacle: Obstacle) -> bool:
        return obstacle.key() in self._cells

    def __len__(self) -> int:
        return len(self._cells)
