"""
Unit tests for Fee domain model.
"""

import pytest
from datetime import date

from legal_crm.domain.models.base import BusinessRuleViolation, ValidationError
from legal_crm.domain.models.fee import (
    Fee,
    FeeStatus,
    FeeType,
    Installment,
    InstallmentStatus,
)


def make_installment_fee(*statuses, recorded=FeeStatus.PENDENTE):
    installments = [
        Installment(
            id=f"inst-{index}",
            amount=500.0,
            due_date=date(2024, index + 1, 10),
            status=status
        )
        for index, status in enumerate(statuses)
    ]
    return Fee(
        case_id="case-1",
        fee_type=FeeType.PARCELADO,
        description="Honorários parcelados",
        amount=500.0 * len(statuses),
        recorded_status=recorded,
        installments=installments
    )


class TestFeeStatusRollup:
    """Test cases for the installment-derived fee status."""

    def test_no_installment_paid(self):
        fee = make_installment_fee(InstallmentStatus.PENDENTE, InstallmentStatus.PENDENTE)

        assert fee.status == FeeStatus.PENDENTE
        assert fee.paid_installments == 0

    def test_some_installments_paid(self):
        fee = make_installment_fee(InstallmentStatus.PAGO, InstallmentStatus.PENDENTE)

        assert fee.status == FeeStatus.PARCIALMENTE_PAGO
        assert fee.is_paid is False

    def test_all_installments_paid(self):
        fee = make_installment_fee(InstallmentStatus.PAGO, InstallmentStatus.PAGO)

        assert fee.status == FeeStatus.PAGO
        assert fee.is_paid is True

    def test_recorded_paid_cannot_contradict_installments(self):
        """Test a stale Pago record with nothing paid reads as Pendente."""
        fee = make_installment_fee(InstallmentStatus.PENDENTE, recorded=FeeStatus.PAGO)

        assert fee.status == FeeStatus.PENDENTE

    def test_overdue_survives_when_nothing_paid(self):
        fee = make_installment_fee(InstallmentStatus.PENDENTE, recorded=FeeStatus.ATRASADO)

        assert fee.status == FeeStatus.ATRASADO

    def test_installments_override_recorded_status(self):
        fee = make_installment_fee(InstallmentStatus.PAGO, recorded=FeeStatus.ATRASADO)

        assert fee.status == FeeStatus.PAGO

    def test_non_installment_fee_uses_recorded_status(self):
        fee = Fee(case_id="c", fee_type=FeeType.EXITO, description="Êxito", amount=3000.0)
        fee.status = FeeStatus.PAGO

        assert fee.recorded_status == FeeStatus.PAGO
        assert fee.status == FeeStatus.PAGO

    def test_parcelado_without_installments_uses_recorded_status(self):
        fee = Fee(
            case_id="c",
            fee_type=FeeType.PARCELADO,
            description="Sem plano",
            amount=100.0,
            recorded_status=FeeStatus.PAGO
        )

        assert fee.has_installments is False
        assert fee.status == FeeStatus.PAGO


class TestFeeInstallments:
    """Test cases for installment updates."""

    def test_set_installment_status_syncs_recorded(self):
        fee = make_installment_fee(InstallmentStatus.PENDENTE, InstallmentStatus.PENDENTE)

        fee.set_installment_status("inst-0", InstallmentStatus.PAGO)
        assert fee.recorded_status == FeeStatus.PARCIALMENTE_PAGO

        fee.set_installment_status("inst-1", "Pago")
        assert fee.recorded_status == FeeStatus.PAGO

        fee.set_installment_status("inst-0", InstallmentStatus.PENDENTE)
        assert fee.status == FeeStatus.PARCIALMENTE_PAGO

    def test_set_installment_status_unknown_installment(self):
        fee = make_installment_fee(InstallmentStatus.PENDENTE)

        with pytest.raises(ValidationError, match="Installment missing not found"):
            fee.set_installment_status("missing", InstallmentStatus.PAGO)

    def test_set_installment_status_without_plan(self):
        fee = Fee(case_id="c", fee_type=FeeType.INICIAL, description="Inicial", amount=100.0)

        with pytest.raises(BusinessRuleViolation, match="no installment plan"):
            fee.set_installment_status("x", InstallmentStatus.PAGO)


class TestFeeValidation:
    """Test cases for fee validation."""

    def test_installments_only_on_parcelado(self):
        fee = Fee(
            case_id="c",
            fee_type=FeeType.CONSULTA,
            description="Consulta",
            amount=200.0,
            installments=[Installment(amount=200.0, due_date=date(2024, 1, 1))]
        )

        with pytest.raises(ValidationError, match="Only Parcelado fees can have installments"):
            fee.validate()

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError, match="Fee amount must be positive"):
            Fee(case_id="c", description="Zero", amount=0).validate()

    def test_installment_amount_must_be_positive(self):
        fee = make_installment_fee(InstallmentStatus.PENDENTE)
        fee.installments[0].amount = -1

        with pytest.raises(ValidationError, match="Installment amount must be positive"):
            fee.validate()


class TestFeeOverdue:
    """Test cases for overdue marking."""

    def test_mark_overdue_past_due(self):
        fee = Fee(case_id="c", description="Inicial", amount=100.0, due_date=date(2024, 1, 10))

        assert fee.mark_overdue(date(2024, 1, 11)) is True
        assert fee.status == FeeStatus.ATRASADO

    def test_mark_overdue_due_today(self):
        fee = Fee(case_id="c", description="Inicial", amount=100.0, due_date=date(2024, 1, 10))

        assert fee.mark_overdue(date(2024, 1, 10)) is False
        assert fee.status == FeeStatus.PENDENTE

    def test_mark_overdue_ignores_paid_and_undated(self):
        paid = Fee(
            case_id="c",
            description="Pago",
            amount=100.0,
            due_date=date(2024, 1, 10),
            recorded_status=FeeStatus.PAGO
        )
        undated = Fee(case_id="c", description="Sem data", amount=100.0)

        assert paid.mark_overdue(date(2024, 2, 1)) is False
        assert undated.mark_overdue(date(2024, 2, 1)) is False

    def test_mark_overdue_partially_paid_plan(self):
        fee = make_installment_fee(InstallmentStatus.PAGO, InstallmentStatus.PENDENTE)
        fee.due_date = date(2024, 1, 1)

        assert fee.mark_overdue(date(2024, 6, 1)) is False
        assert fee.status == FeeStatus.PARCIALMENTE_PAGO
