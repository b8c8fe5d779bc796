# IN THIS FILE: ROVER STATE, MOVE RESULT

from typing import Tuple

from navigation.utils.enums import Face, Heading

Cell = Tuple[int, int]


class RoverState:
    """
    Where the rover is and which way it is facing.

    States are immutable values: the rover replaces its state on every
    successful command, and states are used as dict keys by the planner.
    """

    __slots__ = ("face", "x", "y", "heading")

    def __init__(self, face: Face, x: int, y: int, heading: Heading):
        object.__setattr__(self, "face", Face(face))          # Current cube face
        object.__setattr__(self, "x", x)                      # 0 .. GRID_SIZE-1, grows to the right
        object.__setattr__(self, "y", y)                      # 0 .. GRID_SIZE-1, grows downwards
        object.__setattr__(self, "heading", Heading(heading))  # N/E/S/W relative to the face

    def __setattr__(self, name, value):
        raise AttributeError(f"RoverState is immutable, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"RoverState is immutable, cannot delete {name!r}")

    @property
    def cell(self) -> Cell:
        return self.x, self.y

    def copy(self) -> 'RoverState':
        return RoverState(self.face, self.x, self.y, self.heading)

    def turned(self, steps: int) -> 'RoverState':
        """Same cell, heading rotated by `steps` quarter-turns clockwise."""
        return RoverState(self.face, self.x, self.y, self.heading.rotate(steps))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoverState):
            return False
        return (self.face == other.face and
                self.x == other.x and
                self.y == other.y and
                self.heading == other.heading)

    def __hash__(self) -> int:
        """Allow RoverState to be used as dictionary key or in sets"""
        return hash((self.face, self.x, self.y, self.heading))

    def __repr__(self) -> str:
        return (f"RoverState(face={self.face.name}, x={self.x}, y={self.y}, "
                f"h={self.heading.name})")

    def get_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "face": self.face.name,
            "x": self.x,
            "y": self.y,
            "heading": self.heading.name,
        }


class MoveResult:
    """Outcome of a single rover command."""

    __slots__ = ("success", "blocked", "new_state")

    def __init__(self, success: bool, blocked: bool, new_state: RoverState):
        self.success = success
        self.blocked = blocked
        self.new_state = new_state

    def __repr__(self) -> str:
        return (f"MoveResult(success={self.success}, blocked={self.blocked}, "
                f"new_state={self.new_state!r})")

    def get_dict(self) -> dict:
        return {
            "success": self.success,
            "blocked": self.blocked,
            "new_state": self.new_state.get_dict(),
        }
