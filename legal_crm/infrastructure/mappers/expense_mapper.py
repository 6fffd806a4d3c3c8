"""
Expense mapper for converting between domain entities and snapshot records.
"""

from typing import Any, Dict

from legal_crm.domain.models.expense import Expense
from .serialization import format_date, format_datetime, parse_date, parse_datetime


class ExpenseMapper:
    """Maps between Expense domain entity and its camelCase snapshot record."""

    def domain_to_dict(self, expense: Expense) -> Dict[str, Any]:
        """Convert Expense domain entity to a snapshot record."""
        return {
            "id": expense.id,
            "caseId": expense.case_id,
            "description": expense.description,
            "amount": expense.amount,
            "date": format_date(expense.expense_date),
            "createdAt": format_datetime(expense.created_at),
        }

    def dict_to_domain(self, data: Dict[str, Any]) -> Expense:
        """Convert a snapshot record to Expense domain entity."""
        expense = Expense(
            case_id=data.get("caseId") or "",
            description=data.get("description") or "",
            amount=float(data.get("amount") or 0)
        )

        expense_date = parse_date(data.get("date"))
        if expense_date:
            expense.expense_date = expense_date

        expense.id = data.get("id")
        expense.created_at = parse_datetime(data.get("createdAt")) or expense.created_at

        return expense
