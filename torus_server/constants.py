"""Gameplay constants shared across the server modules."""

GRID_SIZE: int = 25
MOVE_INTERVAL: float = 0.1
TICK_INTERVAL: float = MOVE_INTERVAL / 3
WALL_PENALTY: int = 5
FOOD_VALUE: int = 10
INITIAL_SNAKE_LENGTH: int = 3
MAX_PLAYERS: int = 4
ROOM_CODE_LENGTH: int = 6
ROOM_CODE_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
SPAWN_POINTS: tuple[tuple[int, int], ...] = ((2, 2), (12, 12), (2, 22), (22, 22))
SNAKE_COLORS: tuple[str, ...] = ("#FF0000", "#00FF00", "#0000FF", "#FFFF00")
DIRECTIONS: tuple[str, ...] = ("up", "down", "left", "right")
OPPOSITES: dict[str, str] = {"up": "down", "down": "up", "left": "right", "right": "left"}
