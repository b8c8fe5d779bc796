# navigation/commands/generator.py
#
# Command strings for the rover:
#   FW = forward one cell, BW = backward one cell,
#   TL = turn left 90 deg,  TR = turn right 90 deg.
# A token may carry a repeat count: "FW3" == "FW FW FW".
# Tokens can be separated by spaces/commas or simply concatenated ("FW2TRFW").

import re
from typing import List

from navigation.entities.rover import Rover
from navigation.topology.cube import CubeTopology
from navigation.utils.consts import MAX_REPEAT
from navigation.utils.enums import Movement
from navigation.utils.types import MoveResult, RoverState

TOKEN_PATTERN = re.compile(r"(FW|BW|TL|TR)(\d*)")
SEPARATORS = re.compile(r"[\s,;]+")


def parse_commands(text: str) -> List[Movement]:
    """
    Expand a command string into single movements.

    Raises:
        ValueError: on an unknown token or a repeat count outside 1..MAX_REPEAT
    """
    compact = SEPARATORS.sub("", text.upper())
    movements = []
    pos = 0
    while pos < len(compact):
        match = TOKEN_PATTERN.match(compact, pos)
        if not match:
            raise ValueError(f"Unknown command {compact[pos:pos + 2]!r} at position {pos}")
        count = int(match.group(2)) if match.group(2) else 1
        if count == 0:
            raise ValueError(f"Repeat count must be positive in {match.group(0)!r}")
        if count > MAX_REPEAT:
            raise ValueError(f"Repeat count in {match.group(0)!r} exceeds {MAX_REPEAT}")
        movements.extend([Movement(match.group(1))] * count)
        pos = match.end()
    return movements


def execute_commands(rover: Rover, movements: List[Movement]) -> List[MoveResult]:
    """
    Apply movements in order, stopping at the first blocked move.
    The blocked result, if any, is the last element.
    """
    results = []
    for movement in movements:
        result = rover.execute(movement)
        results.append(result)
        if result.blocked:
            break
    return results


class CommandGenerator:
    def __init__(self, topology: CubeTopology):
        self.topology = topology

    def movement_between(self, prev: RoverState, curr: RoverState) -> Movement:
        if prev.face == curr.face and prev.cell == curr.cell:
            if curr.heading == prev.heading.turned_left():
                return Movement.TURN_LEFT
            if curr.heading == prev.heading.turned_right():
                return Movement.TURN_RIGHT
        elif self.topology.next_state(prev, 1) == curr:
            return Movement.FORWARD
        elif self.topology.next_state(prev, -1) == curr:
            return Movement.BACKWARD
        raise ValueError(f"No single command leads from {prev!r} to {curr!r}")

    def generate_movements(self, path: List[RoverState]) -> List[Movement]:
        return [self.movement_between(path[i - 1], path[i]) for i in range(1, len(path))]

    def generate_commands(self, path: List[RoverState]) -> List[str]:
        return self.compress_commands(self.generate_movements(path))

    def compress_commands(self, movements: List[Movement]) -> List[str]:
        """Merge runs of the same movement: [FW, FW, FW, TL] -> ["FW3", "TL"]"""
        compressed = []
        if not movements: return []

        curr_cmd = movements[0]
        curr_val = 0
        for movement in movements:
            if movement == curr_cmd:
                curr_val += 1
                continue
            compressed.append(self._format(curr_cmd, curr_val))
            curr_cmd = movement
            curr_val = 1

        # Flush last
        compressed.append(self._format(curr_cmd, curr_val))
        return compressed

    @staticmethod
    def _format(movement: Movement, count: int) -> str:
        return movement.value if count == 1 else f"{movement.value}{count}"
