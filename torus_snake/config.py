GRID_SIZE = 10

FOOD_LIFETIME = 25
FOOD_SPAWN_EVERY = 5

# Tick delay in milliseconds: BASE_INTERVAL_MS - difficulty * DIFFICULTY_SCALE_MS
BASE_INTERVAL_MS = 400
DIFFICULTY_SCALE_MS = 3
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 100
DEFAULT_DIFFICULTY = 50
DIFFICULTY_STEP = 5

SPAWN_RETRY_LIMIT = 1000

CELL_SIZE = 30
FPS = 60

SNAKE_COLOR = (255, 0, 0)
FOOD_COLOR = (0, 128, 0)
EMPTY_COLOR = (64, 128, 255)
TEXT_COLOR = (255, 255, 255)
BACKGROUND_COLOR = (20, 20, 20)
