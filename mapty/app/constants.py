"""Defaults used when the matching environment variable is not set."""

DEFAULT_STORAGE_KEY = "workouts"
DEFAULT_MAP_ZOOM_LEVEL = 13
# How long the frontend keeps the validation error banner visible.
DEFAULT_ERROR_BANNER_SECONDS = 3.0
DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
)
