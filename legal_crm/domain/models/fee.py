"""
Fee domain model.
Represents a billable charge for a case, optionally split into installments.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, List
from enum import Enum

from legal_crm.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
)


class FeeStatus(str, Enum):
    """Payment status of a fee."""
    PENDENTE = "Pendente"
    PAGO = "Pago"
    ATRASADO = "Atrasado"
    PARCIALMENTE_PAGO = "Parcialmente Pago"


class FeeType(str, Enum):
    """Kind of fee. Only PARCELADO carries installments."""
    EXITO = "Êxito"
    INICIAL = "Inicial"
    PARCELADO = "Parcelado"
    CONSULTA = "Consulta"
    RPV = "RPV"


class InstallmentStatus(str, Enum):
    """Binary status of an installment."""
    PENDENTE = "Pendente"
    PAGO = "Pago"


@dataclass
class Installment:
    """One scheduled payment of an installment-bearing fee."""

    amount: float
    due_date: date
    status: InstallmentStatus = InstallmentStatus.PENDENTE
    id: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        """Check if installment is paid."""
        return self.status == InstallmentStatus.PAGO

    def validate(self) -> None:
        """Validate installment."""
        if self.amount <= 0:
            raise ValidationError("Installment amount must be positive", "installments.amount")


@dataclass(eq=False)
class Fee(BaseEntity):
    """
    Fee entity.

    ``recorded_status`` is the stored value. ``status`` is what callers read:
    for installment-bearing fees it is computed from the installments every
    time, so it can never contradict them.
    """

    case_id: str = ""
    fee_type: FeeType = FeeType.INICIAL
    description: str = ""
    amount: float = 0.0
    due_date: Optional[date] = None
    recorded_status: FeeStatus = FeeStatus.PENDENTE
    installments: List[Installment] = field(default_factory=list)

    def validate(self) -> None:
        """Validate fee state."""
        if not self.case_id:
            raise ValidationError("Case ID is required", "case_id")

        if not self.description or not self.description.strip():
            raise ValidationError("Fee description is required", "description")

        if self.amount <= 0:
            raise ValidationError("Fee amount must be positive", "amount")

        if self.installments and self.fee_type != FeeType.PARCELADO:
            raise ValidationError(
                f"Only {FeeType.PARCELADO.value} fees can have installments",
                "installments"
            )

        for installment in self.installments:
            installment.validate()

    @property
    def has_installments(self) -> bool:
        """Check if the fee status is driven by an installment plan."""
        return self.fee_type == FeeType.PARCELADO and len(self.installments) > 0

    @property
    def paid_installments(self) -> int:
        """Count installments already paid."""
        return sum(1 for installment in self.installments if installment.is_paid)

    @property
    def status(self) -> FeeStatus:
        """Get the effective fee status."""
        if not self.has_installments:
            return self.recorded_status

        paid = self.paid_installments
        if paid == len(self.installments):
            return FeeStatus.PAGO
        if paid > 0:
            return FeeStatus.PARCIALMENTE_PAGO
        # Nothing paid: Pendente/Atrasado come from outside
        if self.recorded_status in (FeeStatus.PAGO, FeeStatus.PARCIALMENTE_PAGO):
            return FeeStatus.PENDENTE
        return self.recorded_status

    @status.setter
    def status(self, value: FeeStatus) -> None:
        self.recorded_status = FeeStatus(value)

    @property
    def is_paid(self) -> bool:
        """Check if fee counts as received."""
        return self.status == FeeStatus.PAGO

    def find_installment(self, installment_id: str) -> Optional[Installment]:
        """Find an installment by id."""
        return next((i for i in self.installments if i.id == installment_id), None)

    def set_installment_status(self, installment_id: str, status: InstallmentStatus) -> Installment:
        """Flip one installment and roll the result up into the recorded status."""
        if not self.has_installments:
            raise BusinessRuleViolation("Fee has no installment plan")

        installment = self.find_installment(installment_id)
        if installment is None:
            raise ValidationError(f"Installment {installment_id} not found", "installment_id")

        installment.status = InstallmentStatus(status)
        self.sync_recorded_status()
        return installment

    def sync_recorded_status(self) -> None:
        """Persist the computed status so stored data matches what callers read."""
        if self.has_installments:
            self.recorded_status = self.status

    def mark_overdue(self, today: date) -> bool:
        """Flag an unpaid fee past its due date. Returns True if it changed."""
        if self.status != FeeStatus.PENDENTE or not self.due_date:
            return False
        if self.due_date >= today:
            return False
        self.recorded_status = FeeStatus.ATRASADO
        return True
