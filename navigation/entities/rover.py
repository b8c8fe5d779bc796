# IN THIS FILE: THE ROVER'S STATE MACHINE (POSITION, FACE, HEADING)

import logging
from typing import Optional, Protocol

from navigation.topology.cube import CubeTopology
from navigation.utils.enums import Face, Movement
from navigation.utils.types import MoveResult, RoverState

logger = logging.getLogger(__name__)


class ObstacleChecker(Protocol):
    """Anything that can tell whether a cell is blocked, e.g. an ObstacleField."""

    def has_obstacle(self, face: Face, x: int, y: int) -> bool:
        ...


class Rover:
    """
    Owns the rover's current state and applies turn/move commands to it.

    A command either commits a complete new state or leaves the old one in
    place; face, cell and heading never change separately. The rover is meant
    to be driven by a single controller, callers sharing it across threads
    must serialise access themselves.
    """

    def __init__(
        self,
        initial_state: RoverState,
        topology: Optional[CubeTopology] = None,
        obstacle_checker: Optional[ObstacleChecker] = None,
    ):
        self.topology = topology if topology is not None else CubeTopology()
        if not self.topology.is_within_bounds(initial_state.x, initial_state.y):
            raise ValueError(
                f"Initial state {initial_state!r} is outside a "
                f"{self.topology.grid_size}x{self.topology.grid_size} face"
            )

        self.state = initial_state.copy()
        self.obstacle_checker = obstacle_checker
        # Set by the presentation layer while a move is being animated.
        # The rover stores it but never looks at it.
        self._is_animating = False

    def set_obstacle_checker(self, checker: Optional[ObstacleChecker]) -> None:
        self.obstacle_checker = checker

    def get_state(self) -> RoverState:
        """Copy of the current state."""
        return self.state.copy()

    @property
    def is_animating(self) -> bool:
        return self._is_animating

    @is_animating.setter
    def is_animating(self, value: bool) -> None:
        self._is_animating = bool(value)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def turn_left(self) -> MoveResult:
        """Turn 90 degrees counter-clockwise on the spot. Never blocked."""
        return self._turn(-1)

    def turn_right(self) -> MoveResult:
        """Turn 90 degrees clockwise on the spot. Never blocked."""
        return self._turn(1)

    def move_forward(self) -> MoveResult:
        return self._move(1)

    def move_backward(self) -> MoveResult:
        return self._move(-1)

    def execute(self, movement: Movement) -> MoveResult:
        """Dispatch a single Movement to the matching command."""
        return {
            Movement.FORWARD: self.move_forward,
            Movement.BACKWARD: self.move_backward,
            Movement.TURN_LEFT: self.turn_left,
            Movement.TURN_RIGHT: self.turn_right,
        }[Movement(movement)]()

    def _turn(self, steps: int) -> MoveResult:
        self.state = self.state.turned(steps)
        return MoveResult(success=True, blocked=False, new_state=self.get_state())

    def _move(self, steps: int) -> MoveResult:
        candidate = self.topology.next_state(self.state, steps)

        if self.is_blocked(candidate):
            logger.debug("Move from %r blocked by obstacle at %r", self.state, candidate)
            return MoveResult(success=False, blocked=True, new_state=self.get_state())

        self.state = candidate
        return MoveResult(success=True, blocked=False, new_state=self.get_state())

    def is_blocked(self, state: RoverState) -> bool:
        if self.obstacle_checker is None:
            return False
        return bool(self.obstacle_checker.has_obstacle(state.face, state.x, state.y))
