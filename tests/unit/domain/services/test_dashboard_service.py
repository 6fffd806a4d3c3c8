"""
Unit tests for dashboard and calendar read models.
"""

from datetime import date, datetime, timedelta

from legal_crm.domain.models.case import Case, CaseStatus, Task
from legal_crm.domain.models.client import Client
from legal_crm.domain.services.dashboard_service import (
    active_cases,
    closed_case_count,
    dashboard_summary,
    recent_activity,
    split_recent_activity,
    tasks_by_due_date,
    tasks_for_month,
)


def case(status, last_update, tasks=None, case_id=None):
    return Case(
        id=case_id,
        client_id="client-1",
        status=status,
        last_update=last_update,
        tasks=tasks or []
    )


class TestDashboardService:
    """Test cases for dashboard queries."""

    def setup_method(self):
        """Set up test fixtures."""
        base = datetime(2024, 6, 1, 12, 0, 0)
        self.cases = [
            case(CaseStatus.ANALISE_INICIAL, base, case_id="a"),
            case(CaseStatus.JUDICIAL, base + timedelta(hours=2), case_id="b"),
            case(CaseStatus.FINALIZADO, base + timedelta(hours=1), case_id="c"),
            case(CaseStatus.CONCEDIDO, base - timedelta(days=1), case_id="d"),
        ]

    def test_active_and_closed(self):
        assert [c.id for c in active_cases(self.cases)] == ["a", "b"]
        assert closed_case_count(self.cases) == 2

    def test_recent_activity_newest_first(self):
        assert [c.id for c in recent_activity(self.cases)] == ["b", "c", "a", "d"]

    def test_recent_activity_limit(self):
        many = [case(CaseStatus.ANALISE_INICIAL, datetime(2024, 1, day)) for day in range(1, 16)]

        recent = recent_activity(many)

        assert len(recent) == 10
        assert recent[0].last_update == datetime(2024, 1, 15)

    def test_split_recent_activity(self):
        administrative, judicial = split_recent_activity(self.cases)

        assert [c.id for c in administrative] == ["c", "a", "d"]
        assert [c.id for c in judicial] == ["b"]

    def test_tasks_by_due_date(self):
        first = Task(description="A", due_date=date(2024, 6, 12))
        second = Task(description="B", due_date=date(2024, 6, 10))
        third = Task(description="C", due_date=date(2024, 6, 12), completed=True)
        cases = [case(CaseStatus.ANALISE_INICIAL, datetime.now(), tasks=[first, second, third])]

        grouped = tasks_by_due_date(cases)

        assert list(grouped) == [date(2024, 6, 10), date(2024, 6, 12)]
        assert grouped[date(2024, 6, 12)] == [first, third]
        assert tasks_by_due_date(cases, include_completed=False)[date(2024, 6, 12)] == [first]

    def test_tasks_for_month(self):
        june = Task(description="Junho", due_date=date(2024, 6, 30))
        july = Task(description="Julho", due_date=date(2024, 7, 1))
        cases = [case(CaseStatus.ANALISE_INICIAL, datetime.now(), tasks=[june, july])]

        assert tasks_for_month(cases, 2024, 7) == {date(2024, 7, 1): [july]}

    def test_dashboard_summary(self):
        today = date(2024, 6, 10)
        self.cases[0].tasks = [Task(description="Prazo", due_date=today)]
        clients = [Client(name="Maria"), Client(name="João")]

        summary = dashboard_summary(clients, self.cases, today, lookahead_days=7)

        assert summary.total_clients == 2
        assert summary.active_cases == 2
        assert summary.closed_cases == 2
        assert summary.urgent_tasks == 1
        assert summary.to_dict() == {
            "totalClients": 2,
            "activeCases": 2,
            "urgentTasks": 1,
            "closedCases": 2
        }
