"""API route modules."""

from . import health, tasks

__all__ = ["health", "tasks"]
