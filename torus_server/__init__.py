"""Server package for the Torus Snake project."""

__all__ = [
    "constants",
    "collision",
    "food",
    "main",
    "protocol",
    "registry",
    "room",
    "scheduler",
    "snake",
    "utils",
]
