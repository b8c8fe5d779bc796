# IN THIS FILE: ALL CONSTANTS (REFERENCE CUBE PLANET CONFIGURATION)

# -----------------------------------------------------------------------------
# 1. CUBE & GRID DIMENSIONS
# -----------------------------------------------------------------------------
GRID_SIZE = 10          # 10x10 cells per face
TOTAL_FACES = 6
MAX_INDEX = GRID_SIZE - 1

# -----------------------------------------------------------------------------
# 2. OBSTACLES
# -----------------------------------------------------------------------------
OBSTACLE_DENSITY = 0.10     # 10% of all cells -> 60 obstacles on the reference cube

# Rejection sampling gives up after this many attempts per wanted obstacle.
ATTEMPT_BUDGET_FACTOR = 10

# Above this density rejection sampling wastes most of its attempts on
# occupied cells, so the field switches to sampling without replacement.
EXACT_SAMPLING_DENSITY = 0.5

# -----------------------------------------------------------------------------
# 3. ROUTE PLANNING COSTS
# -----------------------------------------------------------------------------
MOVE_COST = 1           # One cell forward or backward
TURN_COST = 1           # One 90-degree turn on the spot

# -----------------------------------------------------------------------------
# 4. SERVER
# -----------------------------------------------------------------------------
SERVER_HOST = "0.0.0.0"
SERVER_PORT = 5000

# Largest repeat count a single command token may carry ("FW100")
MAX_REPEAT = 100
