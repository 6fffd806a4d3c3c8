"""
Urgent-task query and the once-per-day deadline alert gate.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from legal_crm.domain.models.case import Case, Task
from legal_crm.domain.repositories.snapshot_store import SnapshotStore


logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD_DAYS = 7
ALERT_DISMISSED_KEY = "deadlineAlertDismissed"


def get_urgent_tasks(
    cases: Iterable[Case],
    today: Optional[date] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
) -> List[Task]:
    """
    Collect open tasks due within the lookahead window.
    Overdue tasks are always included. Sorted by due date; ties keep scan order.
    """
    today = today or date.today()
    horizon = today + timedelta(days=lookahead_days)

    urgent = [
        task
        for case in cases
        for task in case.tasks
        if not task.completed and task.due_date <= horizon
    ]
    return sorted(urgent, key=lambda task: task.due_date)


class DeadlineAlertGate:
    """
    Decides whether the urgent-deadline alert should be shown.
    A dismissal suppresses the alert until the calendar date changes.
    """

    def __init__(self, snapshot_store: SnapshotStore, key: str = ALERT_DISMISSED_KEY):
        self.snapshot_store = snapshot_store
        self.key = key

    def last_dismissed(self) -> Optional[str]:
        """Get the stored dismissal date string."""
        value = self.snapshot_store.load(self.key)
        return str(value) if value else None

    def should_show(self, urgent_tasks: List[Task], today: Optional[date] = None) -> bool:
        """Check if the alert is due for display."""
        if not urgent_tasks:
            return False
        today = today or date.today()
        return self.last_dismissed() != today.isoformat()

    def dismiss(self, today: Optional[date] = None) -> None:
        """Record that the alert was dismissed today."""
        today = today or date.today()
        try:
            self.snapshot_store.save(self.key, today.isoformat())
        except OSError as e:
            logger.error(f"Failed to record alert dismissal: {str(e)}")
