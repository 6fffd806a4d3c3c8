"""Financial service for case balances and installment plans.
Pure calculations over fee and expense snapshots; nothing here mutates stored state.
"""

import calendar
from dataclasses import dataclass
from typing import Iterable, List, Tuple
from decimal import Decimal, ROUND_HALF_UP
from datetime import date

from legal_crm.domain.models.base import ValidationError
from legal_crm.domain.models.fee import Fee, FeeStatus, Installment


@dataclass(frozen=True)
class FinancialSummary:
    """Money received, money spent and the difference."""

    total_fees: float
    total_expenses: float
    balance: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "totalFees": self.total_fees,
            "totalExpenses": self.total_expenses,
            "balance": self.balance
        }


class FinancialService:
    """
    Domain service for financial aggregates.
    Only fees whose effective status is Pago count as received; every
    expense counts.
    """

    def get_financials_by_case_id(
        self,
        case_id: str,
        fees: Iterable[Fee],
        expenses: Iterable
    ) -> FinancialSummary:
        """
        Calculate received fees, expenses and balance for one case.
        """
        case_fees = [fee for fee in fees if fee.case_id == case_id]
        case_expenses = [expense for expense in expenses if expense.case_id == case_id]
        return self._summarize(case_fees, case_expenses)

    def get_global_financials(self, fees: Iterable[Fee], expenses: Iterable) -> FinancialSummary:
        """
        Calculate the same aggregates across every case.
        """
        return self._summarize(list(fees), list(expenses))

    def installment_progress(self, fee: Fee) -> Tuple[int, int]:
        """
        Get (paid, total) installment counts for display.
        """
        return fee.paid_installments, len(fee.installments)

    def outstanding_amount(self, fee: Fee) -> float:
        """
        Get the amount still to be received for a fee.
        """
        if fee.status == FeeStatus.PAGO:
            return 0.0
        if fee.has_installments:
            unpaid = sum(i.amount for i in fee.installments if not i.is_paid)
            return self._round_currency(unpaid)
        return self._round_currency(fee.amount)

    def build_installment_plan(
        self,
        total: float,
        count: int,
        first_due_date: date
    ) -> List[Installment]:
        """
        Split a total into equal monthly installments.
        The rounding remainder is added to the last installment.
        """
        if count < 1:
            raise ValidationError("Installment count must be at least 1", "count")

        if total <= 0:
            raise ValidationError("Installment plan total must be positive", "total")

        total_cents = int(Decimal(str(total)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP) * 100)
        base_cents, remainder = divmod(total_cents, count)

        installments = []
        for index in range(count):
            cents = base_cents + (remainder if index == count - 1 else 0)
            installments.append(Installment(
                amount=cents / 100,
                due_date=add_months(first_due_date, index)
            ))

        return installments

    def _summarize(self, fees: List[Fee], expenses: List) -> FinancialSummary:
        total_fees = sum(fee.amount for fee in fees if fee.status == FeeStatus.PAGO)
        total_expenses = sum(expense.amount for expense in expenses)

        return FinancialSummary(
            total_fees=self._round_currency(total_fees),
            total_expenses=self._round_currency(total_expenses),
            balance=self._round_currency(total_fees - total_expenses)
        )

    def _round_currency(self, amount: float) -> float:
        """
        Round amount to 2 decimal places for currency.
        """
        return float(Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))
