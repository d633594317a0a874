from datetime import datetime, timezone
from typing import Iterable

from task_planner.utils.dto import Plan, Task


def assemble(goal: str, tasks: Iterable[Task]) -> Plan:
    """Wrap ``tasks`` in a new, not yet persisted Plan created now (UTC)."""
    now = datetime.now(timezone.utc)
    # BSON dates keep milliseconds only
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    return Plan(goal=goal, created_at=now, tasks=list(tasks))
