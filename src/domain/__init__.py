"""Domain models and DTOs."""

from src.domain.record import CompletionEntry, Completions, DailyRecord
from src.domain.task import TaskCatalog, TaskDefinition


__all__ = [
    "CompletionEntry",
    "Completions",
    "DailyRecord",
    "TaskCatalog",
    "TaskDefinition",
]
