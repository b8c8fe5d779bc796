# main.py
import logging
import threading
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from navigation.commands.generator import CommandGenerator, execute_commands, parse_commands
from navigation.entities.obstacle_field import ObstacleField
from navigation.entities.rover import Rover
from navigation.pathfinding.astar import AStar
from navigation.topology.cube import CubeTopology
from navigation.utils.consts import OBSTACLE_DENSITY, SERVER_HOST, SERVER_PORT
from navigation.utils.enums import Face, Heading, Movement
from navigation.utils.types import RoverState

logger = logging.getLogger(__name__)

app = FastAPI(title="Cube Planet Rover Server")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class SessionInput(BaseModel):
    face: str = "FRONT"
    x: int = 0
    y: int = 0
    heading: str = "N"
    seed: Optional[int] = None
    density: Optional[float] = None

class StateOutput(BaseModel):
    face: str
    x: int
    y: int
    heading: str

class SessionOutput(BaseModel):
    state: StateOutput
    obstacle_count: int
    target_count: int

class StateResponse(BaseModel):
    state: StateOutput
    is_animating: bool

class ObstacleOutput(BaseModel):
    face: str
    x: int
    y: int

class CommandInput(BaseModel):
    # One of FW / BW / TL / TR
    command: str

class CommandsInput(BaseModel):
    # e.g. "FW3 TR FW2"
    commands: str

class MoveOutput(BaseModel):
    success: bool
    blocked: bool
    new_state: StateOutput

class CommandsOutput(BaseModel):
    results: List[MoveOutput]
    final_state: StateOutput
    blocked: bool

class AnimatingInput(BaseModel):
    value: bool

class PlanInput(BaseModel):
    face: str
    x: int
    y: int
    heading: Optional[str] = None

class PlanOutput(BaseModel):
    reachable: bool
    path: List[StateOutput]
    commands: List[str]
    cost: float


# =============================================================================
# SESSION (one rover + one obstacle field, in memory only)
# =============================================================================

class Session:
    def __init__(self, start: RoverState, density: float, seed: Optional[int]):
        self.topology = CubeTopology()
        self.obstacles = ObstacleField(
            start.face, start.x, start.y,
            grid_size=self.topology.grid_size,
            density=density,
            seed=seed,
        )
        self.rover = Rover(start, self.topology, self.obstacles)
        # The rover must only be mutated by one request at a time
        self.lock = threading.Lock()


_session: Optional[Session] = None


def parse_face(value: str) -> Face:
    try:
        return Face[value.upper()]
    except KeyError:
        raise ValueError(f"Unknown face {value!r}, expected one of {[f.name for f in Face]}")


def parse_heading(value: str) -> Heading:
    try:
        return Heading[value.upper()]
    except KeyError:
        raise ValueError(f"Unknown heading {value!r}, expected one of N, E, S, W")


def get_session() -> Session:
    if _session is None:
        raise HTTPException(status_code=404, detail="No session; POST /session first")
    return _session


def ensure_idle(session: Session) -> None:
    if session.rover.is_animating:
        raise HTTPException(status_code=409, detail="Rover is still animating the previous move")


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/status")
def health_check():
    return {"status": "ok", "message": "Rover server is running"}


@app.post("/session", response_model=SessionOutput)
def create_session(input_data: SessionInput):
    global _session
    try:
        start = RoverState(parse_face(input_data.face), input_data.x, input_data.y,
                           parse_heading(input_data.heading))
        density = OBSTACLE_DENSITY if input_data.density is None else input_data.density
        _session = Session(start, density, input_data.seed)
        logger.info("New session at %r with %d obstacles",
                    start, _session.obstacles.get_obstacle_count())
        return {
            "state": _session.rover.get_state().get_dict(),
            "obstacle_count": _session.obstacles.get_obstacle_count(),
            "target_count": _session.obstacles.target_count,
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("/session error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/state", response_model=StateResponse)
def get_state():
    session = get_session()
    with session.lock:
        return {
            "state": session.rover.get_state().get_dict(),
            "is_animating": session.rover.is_animating,
        }


@app.get("/obstacles", response_model=List[ObstacleOutput])
def get_obstacles(face: Optional[str] = None):
    session = get_session()
    try:
        if face is None:
            obstacles = session.obstacles.get_all_obstacles()
        else:
            obstacles = session.obstacles.get_obstacles_for_face(parse_face(face))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [o.get_dict() for o in obstacles]


@app.post("/command", response_model=MoveOutput)
def run_command(input_data: CommandInput):
    session = get_session()
    with session.lock:
        ensure_idle(session)
        try:
            movement = Movement(input_data.command.upper())
            return session.rover.execute(movement).get_dict()
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown command {input_data.command!r}")
        except Exception as e:
            logger.exception("/command error: %s", e)
            raise HTTPException(status_code=500, detail=str(e))


@app.post("/commands", response_model=CommandsOutput)
def run_commands(input_data: CommandsInput):
    session = get_session()
    with session.lock:
        ensure_idle(session)
        try:
            movements = parse_commands(input_data.commands)
            results = execute_commands(session.rover, movements)
            return {
                "results": [r.get_dict() for r in results],
                "final_state": session.rover.get_state().get_dict(),
                "blocked": bool(results) and results[-1].blocked,
            }
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            logger.exception("/commands error: %s", e)
            raise HTTPException(status_code=500, detail=str(e))


@app.put("/animating", response_model=StateResponse)
def set_animating(input_data: AnimatingInput):
    session = get_session()
    with session.lock:
        session.rover.is_animating = input_data.value
        return {
            "state": session.rover.get_state().get_dict(),
            "is_animating": session.rover.is_animating,
        }


@app.post("/plan", response_model=PlanOutput)
def plan_route(input_data: PlanInput):
    """
    Plan a route from the rover's current state to a goal cell.
    The rover is not moved; replay `commands` through /commands to drive it.
    """
    session = get_session()
    try:
        goal_face = parse_face(input_data.face)
        goal_heading = None if input_data.heading is None else parse_heading(input_data.heading)
        with session.lock:
            start = session.rover.get_state()

        astar = AStar(session.topology, session.obstacles)
        path = astar.search(start, goal_face, input_data.x, input_data.y, goal_heading)
        if not path:
            return {"reachable": False, "path": [], "commands": [], "cost": 0.0}

        commands = CommandGenerator(session.topology).generate_commands(path)
        cost = astar.cost_cache[(start, (goal_face, input_data.x, input_data.y, goal_heading))]
        return {
            "reachable": True,
            "path": [s.get_dict() for s in path],
            "commands": commands,
            "cost": cost,
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("/plan error: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
