import heapq
from typing import Dict, List, Optional, Tuple

from navigation.entities.rover import ObstacleChecker
from navigation.topology.cube import CubeTopology
from navigation.utils.consts import MOVE_COST, TURN_COST
from navigation.utils.enums import Face, Heading, Movement
from navigation.utils.types import RoverState


class AStarNode:
    def __init__(self, state: RoverState, g_cost: float, h_cost: float, parent: Optional['AStarNode'] = None):
        self.state = state
        self.g_cost = g_cost
        self.h_cost = h_cost
        self.f_cost = g_cost + h_cost
        self.parent = parent

    def __lt__(self, other):
        return self.f_cost < other.f_cost


class AStar:
    """
    Shortest command sequence between two cells on the cube surface.

    Uses exactly the rover's own successor relation (turns, forward and
    backward moves through the topology) so every planned step is one the
    rover can execute.
    """

    def __init__(self, topology: CubeTopology, obstacle_checker: Optional[ObstacleChecker] = None):
        self.topology = topology
        self.obstacle_checker = obstacle_checker
        self.cost_cache: Dict[Tuple[RoverState, Tuple], float] = {}

    def is_blocked(self, face: Face, x: int, y: int) -> bool:
        if self.obstacle_checker is None:
            return False
        return bool(self.obstacle_checker.has_obstacle(face, x, y))

    def heuristic(self, current: RoverState, goal_face: Face, goal_x: int, goal_y: int) -> float:
        # Manhattan distance is only meaningful inside one face's frame
        if current.face != goal_face:
            return 0
        return (abs(current.x - goal_x) + abs(current.y - goal_y)) * MOVE_COST

    def get_neighbors(self, state: RoverState) -> List[Tuple[RoverState, Movement, float]]:
        neighbors = [
            (state.turned(-1), Movement.TURN_LEFT, TURN_COST),
            (state.turned(1), Movement.TURN_RIGHT, TURN_COST),
        ]
        for steps, movement in ((1, Movement.FORWARD), (-1, Movement.BACKWARD)):
            nxt = self.topology.next_state(state, steps)
            if not self.is_blocked(nxt.face, nxt.x, nxt.y):
                neighbors.append((nxt, movement, MOVE_COST))
        return neighbors

    def search(
        self,
        start: RoverState,
        goal_face: Face,
        goal_x: int,
        goal_y: int,
        goal_heading: Optional[Heading] = None,
    ) -> List[RoverState]:
        """
        Plan from `start` to the goal cell. A goal without a heading accepts
        any heading on arrival.

        Returns:
            States from start to goal inclusive, or [] if the goal is
            off the grid, blocked, or unreachable
        """
        goal_face = Face(goal_face)
        if goal_heading is not None:
            goal_heading = Heading(goal_heading)
        if not self.topology.is_within_bounds(goal_x, goal_y) or self.is_blocked(goal_face, goal_x, goal_y):
            return []

        goal_key = (goal_face, goal_x, goal_y, goal_heading)
        open_set = []
        heapq.heappush(open_set, AStarNode(start, 0, self.heuristic(start, goal_face, goal_x, goal_y)))
        closed_set = set()
        g_scores = {start: 0}

        while open_set:
            current_node = heapq.heappop(open_set)
            curr = current_node.state

            if (curr.face == goal_face and curr.x == goal_x and curr.y == goal_y
                    and (goal_heading is None or curr.heading == goal_heading)):
                self.cost_cache[(start, goal_key)] = current_node.g_cost
                return self._reconstruct_path(current_node)

            if curr in closed_set: continue
            closed_set.add(curr)

            for next_s, _movement, cost in self.get_neighbors(curr):
                if next_s in closed_set: continue
                tentative_g = g_scores[curr] + cost
                if next_s not in g_scores or tentative_g < g_scores[next_s]:
                    g_scores[next_s] = tentative_g
                    h = self.heuristic(next_s, goal_face, goal_x, goal_y)
                    heapq.heappush(open_set, AStarNode(next_s, tentative_g, h, current_node))

        return []

    def _reconstruct_path(self, node):
        path = []
        while node:
            path.append(node.state)
            node = node.parent
        return path[::-1]
