from .workouts import router as workouts_router
from .map import router as map_router

__all__ = [
    "workouts_router",
    "map_router",
]
