# navigation/topology/cube.py
#
# Cube topology: what happens when the rover drives off the edge of a face.
#
# The six 10x10 faces are glued together along a fixed net of the cube:
#
#              +-------+
#              |  TOP  |
#      +-------+-------+-------+-------+
#      | LEFT  | FRONT | RIGHT | BACK  |
#      +-------+-------+-------+-------+
#              |BOTTOM |
#              +-------+
#
# Every face keeps its own local frame: (0, 0) is its top-left corner, x grows
# east, y grows south. Crossing an edge therefore needs three things: the face
# on the other side, where the rover lands on it, and how far the heading has
# to be turned so it stays consistent with the new face's frame.

import logging
from typing import Callable, Dict, Optional, Tuple

from navigation.utils.consts import GRID_SIZE
from navigation.utils.enums import Face, Heading
from navigation.utils.types import Cell, RoverState

logger = logging.getLogger(__name__)

# (x, y, max_index) -> landing cell. x, y are the unwrapped, off-grid coordinates.
Remap = Callable[[int, int, int], Cell]


class TopologyError(ValueError):
    """Raised when a transition table cannot describe a closed cube surface."""


class TransitionRule:
    """
    One (face, exit edge) entry of the topology table.

    Args:
        to_face:    Face the rover lands on
        entry_edge: Edge of `to_face` the rover comes in through
        remap:      Landing cell as a function of the off-grid coordinate
        rotation:   Quarter-turns (clockwise) added to the heading
    """

    __slots__ = ("to_face", "entry_edge", "remap", "rotation")

    def __init__(self, to_face: Face, entry_edge: Heading, remap: Remap, rotation: int):
        self.to_face = to_face
        self.entry_edge = entry_edge
        self.remap = remap
        self.rotation = rotation

    def __repr__(self) -> str:
        return (f"TransitionRule(to={self.to_face.name}, "
                f"entry={self.entry_edge.name}, rot={self.rotation:+d})")


N, E, S, W = Heading.N, Heading.E, Heading.S, Heading.W

# All 24 edge crossings. `m` is the max index (GRID_SIZE - 1).
TRANSITION_RULES: Dict[Tuple[Face, Heading], TransitionRule] = {
    # --- FRONT: the middle of the net, all neighbours share its frame ---
    (Face.FRONT, N):  TransitionRule(Face.TOP,    S, lambda x, y, m: (x, m),         0),
    (Face.FRONT, S):  TransitionRule(Face.BOTTOM, N, lambda x, y, m: (x, 0),         0),
    (Face.FRONT, W):  TransitionRule(Face.LEFT,   E, lambda x, y, m: (m, y),         0),
    (Face.FRONT, E):  TransitionRule(Face.RIGHT,  W, lambda x, y, m: (0, y),         0),

    # --- RIGHT ---
    (Face.RIGHT, N):  TransitionRule(Face.TOP,    E, lambda x, y, m: (m, m - x),     1),
    (Face.RIGHT, S):  TransitionRule(Face.BOTTOM, E, lambda x, y, m: (m, x),        -1),
    (Face.RIGHT, W):  TransitionRule(Face.FRONT,  E, lambda x, y, m: (m, y),         0),
    (Face.RIGHT, E):  TransitionRule(Face.BACK,   W, lambda x, y, m: (0, y),         0),

    # --- BACK: upside down relative to TOP and BOTTOM ---
    (Face.BACK, N):   TransitionRule(Face.TOP,    N, lambda x, y, m: (m - x, 0),     2),
    (Face.BACK, S):   TransitionRule(Face.BOTTOM, S, lambda x, y, m: (m - x, m),     2),
    (Face.BACK, W):   TransitionRule(Face.RIGHT,  E, lambda x, y, m: (m, y),         0),
    (Face.BACK, E):   TransitionRule(Face.LEFT,   W, lambda x, y, m: (0, y),         0),

    # --- LEFT ---
    (Face.LEFT, N):   TransitionRule(Face.TOP,    W, lambda x, y, m: (0, x),        -1),
    (Face.LEFT, S):   TransitionRule(Face.BOTTOM, W, lambda x, y, m: (0, m - x),     1),
    (Face.LEFT, W):   TransitionRule(Face.BACK,   E, lambda x, y, m: (m, y),         0),
    (Face.LEFT, E):   TransitionRule(Face.FRONT,  W, lambda x, y, m: (0, y),         0),

    # --- TOP ---
    (Face.TOP, N):    TransitionRule(Face.BACK,   N, lambda x, y, m: (m - x, 0),     2),
    (Face.TOP, S):    TransitionRule(Face.FRONT,  N, lambda x, y, m: (x, 0),         0),
    (Face.TOP, W):    TransitionRule(Face.LEFT,   N, lambda x, y, m: (y, 0),         1),
    (Face.TOP, E):    TransitionRule(Face.RIGHT,  N, lambda x, y, m: (m - y, 0),    -1),

    # --- BOTTOM ---
    (Face.BOTTOM, N): TransitionRule(Face.FRONT,  S, lambda x, y, m: (x, m),         0),
    (Face.BOTTOM, S): TransitionRule(Face.BACK,   S, lambda x, y, m: (m - x, m),     2),
    (Face.BOTTOM, W): TransitionRule(Face.LEFT,   S, lambda x, y, m: (m - y, m),    -1),
    (Face.BOTTOM, E): TransitionRule(Face.RIGHT,  S, lambda x, y, m: (y, m),         1),
}


def edge_cell(edge: Heading, k: int, max_index: int) -> Cell:
    """The k-th cell along `edge` of a face, counted along the free axis."""
    return {
        Heading.N: (k, 0),
        Heading.S: (k, max_index),
        Heading.W: (0, k),
        Heading.E: (max_index, k),
    }[edge]


def is_on_edge(edge: Heading, x: int, y: int, max_index: int) -> bool:
    return {
        Heading.N: y == 0,
        Heading.S: y == max_index,
        Heading.W: x == 0,
        Heading.E: x == max_index,
    }[edge]


class CubeTopology:
    """
    Validated edge-crossing table for a cube of `grid_size` x `grid_size` faces.

    The table is checked once, here, so a missing or inconsistent rule is a
    construction error instead of a wrong move at runtime.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        rules: Optional[Dict[Tuple[Face, Heading], TransitionRule]] = None,
    ):
        if not isinstance(grid_size, int) or grid_size <= 0:
            raise ValueError(f"grid_size must be a positive integer, got {grid_size!r}")

        self.grid_size = grid_size
        self.max_index = grid_size - 1
        self.rules = dict(TRANSITION_RULES if rules is None else rules)
        self._validate()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate(self) -> None:
        # 1. Totality: every (face, edge) pair resolves to a real face
        for face in Face:
            for edge in Heading:
                rule = self.rules.get((face, edge))
                if rule is None:
                    raise TopologyError(f"No transition rule for {face.name} edge {edge.name}")
                if not isinstance(rule.to_face, Face) or not isinstance(rule.entry_edge, Heading):
                    raise TopologyError(f"Rule for {face.name} edge {edge.name} is malformed: {rule!r}")

        # 2. Every face can be entered from somewhere
        unreachable = set(Face) - {rule.to_face for rule in self.rules.values()}
        if unreachable:
            names = ", ".join(sorted(f.name for f in unreachable))
            raise TopologyError(f"Faces never entered by any rule: {names}")

        # 3. Reciprocity: crossing back over the entry edge undoes the crossing
        m = self.max_index
        for (face, edge), rule in self.rules.items():
            back_rule = self.rules[(rule.to_face, rule.entry_edge)]
            if back_rule.to_face != face or back_rule.entry_edge != edge:
                raise TopologyError(
                    f"{face.name}/{edge.name} enters {rule.to_face.name}/{rule.entry_edge.name}, "
                    f"but that edge leads to {back_rule.to_face.name}/{back_rule.entry_edge.name}"
                )
            if (rule.rotation + back_rule.rotation) % 4 != 0:
                raise TopologyError(
                    f"Heading rotations across {face.name}/{edge.name} do not cancel"
                )

            for k in range(self.grid_size):
                origin = edge_cell(edge, k, m)
                landing = self._apply(rule, *self._step_off(origin, edge))
                if not self.is_within_bounds(*landing) or not is_on_edge(rule.entry_edge, *landing, m):
                    raise TopologyError(
                        f"{face.name}/{edge.name} lands at {landing}, "
                        f"not on edge {rule.entry_edge.name} of {rule.to_face.name}"
                    )
                returned = self._apply(back_rule, *self._step_off(landing, rule.entry_edge))
                if returned != origin:
                    raise TopologyError(
                        f"Crossing {face.name}/{edge.name} at {origin} and back returns {returned}"
                    )

    @staticmethod
    def _step_off(cell: Cell, edge: Heading) -> Cell:
        dx, dy = edge.delta()
        return cell[0] + dx, cell[1] + dy

    def _apply(self, rule: TransitionRule, x: int, y: int) -> Cell:
        return rule.remap(x, y, self.max_index)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_within_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def exit_edge(self, x: int, y: int) -> Optional[Heading]:
        """
        Which edge an unwrapped coordinate has crossed, or None if it is on the face.
        A single step only ever leaves through one edge.
        """
        out_x = x < 0 or x >= self.grid_size
        out_y = y < 0 or y >= self.grid_size
        if out_x and out_y:
            raise ValueError(f"({x}, {y}) is off the face on both axes")
        if y < 0:
            return Heading.N
        if y >= self.grid_size:
            return Heading.S
        if x < 0:
            return Heading.W
        if x >= self.grid_size:
            return Heading.E
        return None

    def get_rule(self, face: Face, edge: Heading) -> TransitionRule:
        return self.rules[(Face(face), Heading(edge))]

    def cross_edge(self, face: Face, x: int, y: int, heading: Heading) -> RoverState:
        """
        Resolve an off-grid coordinate on `face` into the state on the
        neighbouring face. `heading` is the heading before the crossing.
        """
        edge = self.exit_edge(x, y)
        if edge is None:
            raise ValueError(f"({x}, {y}) is still on face {Face(face).name}")

        rule = self.get_rule(face, edge)
        new_x, new_y = self._apply(rule, x, y)
        new_heading = Heading(heading).rotate(rule.rotation)
        logger.debug("Crossing %s/%s -> %s at (%d, %d), heading %s -> %s",
                     Face(face).name, edge.name, rule.to_face.name,
                     new_x, new_y, Heading(heading).name, new_heading.name)
        return RoverState(rule.to_face, new_x, new_y, new_heading)

    def next_state(self, state: RoverState, steps: int) -> RoverState:
        """
        Candidate state after moving one cell along the heading axis.
        steps = +1 drives forward, -1 reverses. Obstacles are not considered.
        """
        dx, dy = state.heading.delta()
        new_x = state.x + dx * steps
        new_y = state.y + dy * steps

        if self.is_within_bounds(new_x, new_y):
            return RoverState(state.face, new_x, new_y, state.heading)
        return self.cross_edge(state.face, new_x, new_y, state.heading)
