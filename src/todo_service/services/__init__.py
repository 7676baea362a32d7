"""Business logic services."""

from .generation import BedrockGenerationClient, GenerationClient, get_generation_client
from .task_analyzer import analyze_tasks
from .task_parser import parse_task
from .task_store import InMemoryTaskStore, TaskStore, get_task_store

__all__ = [
    "parse_task",
    "analyze_tasks",
    "BedrockGenerationClient",
    "GenerationClient",
    "get_generation_client",
    "InMemoryTaskStore",
    "TaskStore",
    "get_task_store",
]
