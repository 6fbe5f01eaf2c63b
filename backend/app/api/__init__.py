"""API routers."""

from app.api import tasks

__all__ = [
    "tasks",
]
