"""
Expense domain model.
An out-of-pocket cost charged to a case. Expenses are settled on creation.
"""

from dataclasses import dataclass, field
from datetime import date

from legal_crm.domain.models.base import BaseEntity, ValidationError


@dataclass(eq=False)
class Expense(BaseEntity):
    """Expense entity."""

    case_id: str = ""
    description: str = ""
    amount: float = 0.0
    expense_date: date = field(default_factory=date.today)

    def validate(self) -> None:
        """Validate expense state."""
        if not self.case_id:
            raise ValidationError("Case ID is required", "case_id")

        if not self.description or not self.description.strip():
            raise ValidationError("Expense description is required", "description")

        if self.amount <= 0:
            raise ValidationError("Expense amount must be positive", "amount")
