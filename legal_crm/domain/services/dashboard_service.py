"""
Dashboard and calendar read models.
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from legal_crm.domain.models.case import Case, Task
from legal_crm.domain.services.urgency_service import DEFAULT_LOOKAHEAD_DAYS, get_urgent_tasks


RECENT_ACTIVITY_LIMIT = 10


@dataclass(frozen=True)
class DashboardSummary:
    """Headline counters for the office dashboard."""

    total_clients: int
    active_cases: int
    urgent_tasks: int
    closed_cases: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "totalClients": self.total_clients,
            "activeCases": self.active_cases,
            "urgentTasks": self.urgent_tasks,
            "closedCases": self.closed_cases
        }


def active_cases(cases: Iterable[Case]) -> List[Case]:
    return [case for case in cases if case.is_active]


def closed_case_count(cases: Iterable[Case]) -> int:
    return sum(1 for case in cases if not case.is_active)


def recent_activity(cases: Iterable[Case], limit: int = RECENT_ACTIVITY_LIMIT) -> List[Case]:
    """Get the most recently updated cases, newest first."""
    return sorted(cases, key=lambda case: case.last_update, reverse=True)[:limit]


def split_recent_activity(
    cases: Iterable[Case],
    limit: int = RECENT_ACTIVITY_LIMIT
) -> Tuple[List[Case], List[Case]]:
    """
    Split recent activity into (administrative, judicial) cases.
    The limit applies before the split.
    """
    recent = recent_activity(cases, limit)
    administrative = [case for case in recent if not case.is_judicial]
    judicial = [case for case in recent if case.is_judicial]
    return administrative, judicial


def tasks_by_due_date(cases: Iterable[Case], include_completed: bool = True) -> Dict[date, List[Task]]:
    """Group tasks by due date for the calendar, in ascending date order."""
    grouped: Dict[date, List[Task]] = {}
    for case in cases:
        for task in case.tasks:
            if task.completed and not include_completed:
                continue
            grouped.setdefault(task.due_date, []).append(task)
    return OrderedDict(sorted(grouped.items()))


def tasks_for_month(cases: Iterable[Case], year: int, month: int) -> Dict[date, List[Task]]:
    """Calendar view for a single month."""
    return OrderedDict(
        (day, tasks)
        for day, tasks in tasks_by_due_date(cases).items()
        if day.year == year and day.month == month
    )


def dashboard_summary(
    clients: Iterable,
    cases: Iterable[Case],
    today: Optional[date] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
) -> DashboardSummary:
    """Build the dashboard counters."""
    cases = list(cases)
    active = active_cases(cases)
    return DashboardSummary(
        total_clients=len(list(clients)),
        active_cases=len(active),
        urgent_tasks=len(get_urgent_tasks(cases, today, lookahead_days)),
        closed_cases=len(cases) - len(active)
    )
