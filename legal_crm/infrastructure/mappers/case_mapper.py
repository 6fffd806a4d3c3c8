"""
Case mapper for converting between domain entities and snapshot records.
Tasks, documents and legal-document records are embedded in the case record.
"""

from typing import Any, Dict

from legal_crm.domain.models.case import (
    BenefitType,
    Case,
    CaseStatus,
    Document,
    LegalDocument,
    LegalDocumentStatus,
    Task,
)
from .serialization import (
    format_date,
    format_datetime,
    parse_date,
    parse_datetime,
    parse_enum,
)


class CaseMapper:
    """Maps between Case domain entity and its camelCase snapshot record."""

    def domain_to_dict(self, case: Case) -> Dict[str, Any]:
        """Convert Case domain entity to a snapshot record."""
        data = {
            "id": case.id,
            "caseNumber": case.case_number,
            "clientId": case.client_id,
            "benefitType": case.benefit_type.value,
            "status": case.status.value,
            "startDate": format_date(case.start_date),
            "notes": case.notes,
            "documents": [self.document_to_dict(doc) for doc in case.documents],
            "tasks": [self.task_to_dict(task) for task in case.tasks],
            "legalDocuments": [self.legal_document_to_dict(doc) for doc in case.legal_documents],
            "lastUpdate": format_datetime(case.last_update),
            "createdAt": format_datetime(case.created_at),
        }
        if case.ai_summary is not None:
            data["aiSummary"] = case.ai_summary
        return data

    def dict_to_domain(self, data: Dict[str, Any]) -> Case:
        """Convert a snapshot record to Case domain entity."""
        case = Case(
            case_number=data.get("caseNumber") or "",
            client_id=data.get("clientId") or "",
            benefit_type=parse_enum(BenefitType, data.get("benefitType"), BenefitType.APOSENTADORIA_IDADE),
            status=parse_enum(CaseStatus, data.get("status"), CaseStatus.ANALISE_INICIAL),
            notes=data.get("notes") or "",
            documents=[self.dict_to_document(doc) for doc in data.get("documents") or []],
            tasks=[self.dict_to_task(task) for task in data.get("tasks") or []],
            legal_documents=[
                self.dict_to_legal_document(doc) for doc in data.get("legalDocuments") or []
            ],
            ai_summary=data.get("aiSummary")
        )

        start_date = parse_date(data.get("startDate"))
        if start_date:
            case.start_date = start_date

        # Set entity metadata
        case.id = data.get("id")
        case.last_update = parse_datetime(data.get("lastUpdate")) or case.last_update
        case.created_at = parse_datetime(data.get("createdAt")) or case.created_at

        return case

    def task_to_dict(self, task: Task) -> Dict[str, Any]:
        return {
            "id": task.id,
            "description": task.description,
            "dueDate": format_date(task.due_date),
            "completed": task.completed,
            "caseId": task.case_id,
        }

    def dict_to_task(self, data: Dict[str, Any]) -> Task:
        return Task(
            id=data.get("id"),
            description=data.get("description") or "",
            due_date=parse_date(data.get("dueDate")),
            completed=bool(data.get("completed", False)),
            case_id=data.get("caseId")
        )

    def document_to_dict(self, document: Document) -> Dict[str, Any]:
        data = {
            "id": document.id,
            "name": document.name,
            "uploadedAt": format_datetime(document.uploaded_at),
        }
        # Optional keys are omitted rather than written as null
        for key, value in (
            ("url", document.url),
            ("textContent", document.text_content),
            ("aiAnalysis", document.ai_analysis),
        ):
            if value is not None:
                data[key] = value
        return data

    def dict_to_document(self, data: Dict[str, Any]) -> Document:
        document = Document(
            id=data.get("id"),
            name=data.get("name") or "",
            url=data.get("url"),
            text_content=data.get("textContent"),
            ai_analysis=data.get("aiAnalysis")
        )
        document.uploaded_at = parse_datetime(data.get("uploadedAt")) or document.uploaded_at
        return document

    def legal_document_to_dict(self, legal_document: LegalDocument) -> Dict[str, Any]:
        return {
            "templateId": legal_document.template_id,
            "title": legal_document.title,
            "status": legal_document.status.value,
        }

    def dict_to_legal_document(self, data: Dict[str, Any]) -> LegalDocument:
        return LegalDocument(
            template_id=data.get("templateId") or "",
            title=data.get("title") or "",
            status=parse_enum(LegalDocumentStatus, data.get("status"), LegalDocumentStatus.PENDENTE)
        )
