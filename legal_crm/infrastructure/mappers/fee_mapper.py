"""
Fee mapper for converting between domain entities and snapshot records.
"""

from typing import Any, Dict

from legal_crm.domain.models.fee import Fee, FeeStatus, FeeType, Installment, InstallmentStatus
from .serialization import format_date, format_datetime, parse_date, parse_datetime, parse_enum


class FeeMapper:
    """Maps between Fee domain entity and its camelCase snapshot record."""

    def domain_to_dict(self, fee: Fee) -> Dict[str, Any]:
        """
        Convert Fee domain entity to a snapshot record.
        The effective status is written so readers of the raw record never
        see a value that contradicts the installments.
        """
        data = {
            "id": fee.id,
            "caseId": fee.case_id,
            "type": fee.fee_type.value,
            "description": fee.description,
            "amount": fee.amount,
            "dueDate": format_date(fee.due_date),
            "status": fee.status.value,
            "createdAt": format_datetime(fee.created_at),
        }
        if fee.installments:
            data["installments"] = [
                self.installment_to_dict(installment) for installment in fee.installments
            ]
        return data

    def dict_to_domain(self, data: Dict[str, Any]) -> Fee:
        """Convert a snapshot record to Fee domain entity."""
        fee = Fee(
            case_id=data.get("caseId") or "",
            fee_type=parse_enum(FeeType, data.get("type"), FeeType.INICIAL),
            description=data.get("description") or "",
            amount=float(data.get("amount") or 0),
            due_date=parse_date(data.get("dueDate")),
            recorded_status=parse_enum(FeeStatus, data.get("status"), FeeStatus.PENDENTE),
            installments=[self.dict_to_installment(item) for item in data.get("installments") or []]
        )

        # Set entity metadata
        fee.id = data.get("id")
        fee.created_at = parse_datetime(data.get("createdAt")) or fee.created_at

        return fee

    def installment_to_dict(self, installment: Installment) -> Dict[str, Any]:
        return {
            "id": installment.id,
            "amount": installment.amount,
            "dueDate": format_date(installment.due_date),
            "status": installment.status.value,
        }

    def dict_to_installment(self, data: Dict[str, Any]) -> Installment:
        return Installment(
            id=data.get("id"),
            amount=float(data.get("amount") or 0),
            due_date=parse_date(data.get("dueDate")),
            status=parse_enum(InstallmentStatus, data.get("status"), InstallmentStatus.PENDENTE)
        )
