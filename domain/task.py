"""
Domain: Tasks owned by a customer.

A Task belongs to exactly one Customer. Tasks are either user-created
(`automated=False`) or inserted by the lead workflow (`automated=True`).
Automated tasks record the temperature that triggered them.

Task collections are plain ordered lists (insertion order = creation order);
`remove_tasks_where` is the single removal primitive used for replacing
automated tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, MutableSequence, Optional
from uuid import uuid4

from .temperature import LeadTemperature
from .time import require_utc_timestamp


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True)
class Task:
    """Mutable follow-up item attached to a customer."""

    task_id: str
    title: str
    due_at: datetime
    priority: TaskPriority = TaskPriority.MEDIUM
    completed: bool = False
    automated: bool = False
    trigger: Optional[LeadTemperature] = None  # set only for automated tasks

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("title must be non-empty")
        require_utc_timestamp("due_at", self.due_at)
        self.priority = TaskPriority(self.priority)
        if self.trigger is not None and not self.automated:
            raise ValueError("only automated tasks carry a trigger")

    @staticmethod
    def new(
        title: str,
        due_at: datetime,
        priority: TaskPriority = TaskPriority.MEDIUM,
        *,
        automated: bool = False,
        trigger: Optional[LeadTemperature] = None,
    ) -> "Task":
        return Task(
            task_id=str(uuid4()),
            title=title,
            due_at=due_at,
            priority=priority,
            automated=automated,
            trigger=trigger,
        )


TaskPredicate = Callable[[Task], bool]


def is_automated(task: Task) -> bool:
    return task.automated


def remove_tasks_where(tasks: MutableSequence[Task], predicate: TaskPredicate) -> List[Task]:
    """
    Remove every task matching `predicate` in place, keeping the order of the rest.

    Returns the removed tasks in their original order.
    """

    removed = [task for task in tasks if predicate(task)]
    tasks[:] = [task for task in tasks if not predicate(task)]
    return removed
