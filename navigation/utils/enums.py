# IN THIS FILE: CUBE FACES, HEADINGS, MOVEMENT TYPES
from enum import Enum


class Face(int, Enum):
    """
    The six faces of the cube planet.
    Values match the numeric face ids used by the renderer.
    """
    FRONT = 0
    RIGHT = 1
    BACK = 2
    LEFT = 3
    TOP = 4
    BOTTOM = 5

    def __int__(self):
        return self.value


class Heading(int, Enum):
    """
    Cardinal heading relative to the current face.
    Values follow the clockwise cycle N -> E -> S -> W -> N, so rotating
    by k quarter-turns is just (value + k) mod 4.

    The same four values name the edges of a face (the N edge is y = 0).
    """
    N = 0
    E = 1
    S = 2
    W = 3

    def __int__(self):
        return self.value

    def rotate(self, steps: int) -> 'Heading':
        """
        Rotate by a number of 90-degree steps clockwise.
        Negative steps rotate counter-clockwise.

        Examples:
            N.rotate(1)  -> E
            N.rotate(-1) -> W
            E.rotate(2)  -> W
        """
        return Heading((self.value + steps) % 4)

    def turned_left(self) -> 'Heading':
        return self.rotate(-1)

    def turned_right(self) -> 'Heading':
        return self.rotate(1)

    def delta(self) -> tuple:
        """(dx, dy) of one forward step. y grows downwards, (0, 0) is top-left."""
        return {
            Heading.N: (0, -1),
            Heading.E: (1, 0),
            Heading.S: (0, 1),
            Heading.W: (-1, 0),
        }[self]


class Movement(Enum):
    """
    Rover command types.
    Value is the command prefix used in command strings.
    """
    FORWARD = "FW"
    BACKWARD = "BW"
    TURN_LEFT = "TL"
    TURN_RIGHT = "TR"
