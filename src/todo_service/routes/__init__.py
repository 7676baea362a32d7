"""API route modules."""

from . import ai, health, tasks

__all__ = ["health", "ai", "tasks"]
