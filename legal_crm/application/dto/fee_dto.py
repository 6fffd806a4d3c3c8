"""
Fee and expense DTOs for the application layer.
"""

from typing import List, Optional
from datetime import date

from pydantic import Field, field_validator, model_validator

from legal_crm.domain.models.fee import FeeStatus, FeeType, InstallmentStatus
from .base_dto import RequestDTO, CreateRequestDTO, blank_to_none


class InstallmentRequestDTO(RequestDTO):
    """DTO for one installment of a fee."""

    amount: float = Field(gt=0)
    due_date: date
    status: InstallmentStatus = InstallmentStatus.PENDENTE


class CreateFeeRequestDTO(CreateRequestDTO):
    """
    DTO for fee creation requests.
    Installment-bearing fees either list their installments or give
    ``installment_count`` to have an equal monthly plan built from the
    amount and due date.
    """

    case_id: str = Field(min_length=1)
    fee_type: FeeType = Field(alias="type")
    description: str = Field(min_length=1, max_length=255)
    amount: float = Field(gt=0)
    due_date: Optional[date] = None
    status: FeeStatus = FeeStatus.PENDENTE
    installments: List[InstallmentRequestDTO] = Field(default_factory=list)
    installment_count: Optional[int] = Field(default=None, ge=1, le=120)

    @field_validator('due_date', mode='before')
    @classmethod
    def validate_due_date(cls, v):
        return blank_to_none(v)

    @model_validator(mode='after')
    def validate_installments(self):
        has_plan = bool(self.installments) or self.installment_count is not None
        if has_plan and self.fee_type != FeeType.PARCELADO.value:
            raise ValueError(f"only {FeeType.PARCELADO.value} fees can have installments")
        if self.installment_count is not None and self.installments:
            raise ValueError("give either installments or installment_count, not both")
        return self


class CreateExpenseRequestDTO(CreateRequestDTO):
    """DTO for expense creation requests."""

    case_id: str = Field(min_length=1)
    description: str = Field(min_length=1, max_length=255)
    amount: float = Field(gt=0)
    expense_date: date = Field(default_factory=date.today, alias="date")
