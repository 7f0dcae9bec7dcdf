"""HTTP API for trip planner."""
from .routes import router

__all__ = ["router"]
