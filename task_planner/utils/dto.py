from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class Task:
    description: str
    duration: str = ""
    dependencies: str = ""
    id: Optional[str] = None


@dataclass
class Plan:
    """A goal plus the ordered tasks it was decomposed into.

    Tasks carry no reference back to their plan; the plan that owns a task
    is always the one holding it in ``tasks``.
    """

    goal: str
    created_at: datetime
    tasks: List[Task] = field(default_factory=list)
    id: Optional[str] = None
