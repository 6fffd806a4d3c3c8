"""
Domain store for the legal practice CRM.
Owns every entity collection, enforces the ownership rules between them and
writes a full snapshot through the SnapshotStore after each mutation.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, TypeVar, Union

from legal_crm.config import Settings, get_settings
from legal_crm.domain.models import (
    BaseEntity,
    Case,
    CaseStatus,
    Client,
    Document,
    DocumentTemplate,
    EntityNotFoundError,
    Expense,
    Fee,
    FeeStatus,
    FeeType,
    Installment,
    InstallmentStatus,
    LegalDocument,
    LegalDocumentStatus,
    LegalRepresentative,
    PostalAddress,
    BenefitType,
    Task,
    ValidationError,
)
from legal_crm.domain.models.base import new_id
from legal_crm.domain.repositories.snapshot_store import SnapshotStore
from legal_crm.domain.services.dashboard_service import DashboardSummary, dashboard_summary
from legal_crm.domain.services.document_checklist import ChecklistItem, build_checklist
from legal_crm.domain.services.financial_service import FinancialService, FinancialSummary
from legal_crm.domain.services.placeholder_resolver import resolve_placeholders
from legal_crm.domain.services.urgency_service import get_urgent_tasks
from legal_crm.infrastructure.mappers import (
    CaseMapper,
    ClientMapper,
    ExpenseMapper,
    FeeMapper,
    TemplateMapper,
)
from legal_crm.application.dto import (
    AppendNoteRequestDTO,
    CreateCaseRequestDTO,
    CreateClientRequestDTO,
    CreateDocumentRequestDTO,
    CreateExpenseRequestDTO,
    CreateFeeRequestDTO,
    CreateTaskRequestDTO,
    CreateTemplateRequestDTO,
    parse_request,
)
from legal_crm.application.dto.client_dto import PersonRequestDTO


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseEntity)
RequestData = Union[Dict[str, Any], Any]

CLIENTS = "clients"
CASES = "cases"
FEES = "fees"
EXPENSES = "expenses"
TEMPLATES = "templates"


class CrmStore:
    """
    Single source of truth for clients, cases, fees, expenses and templates.

    Reads hand out the stored entities themselves. Changes made to them are
    only persisted through the matching ``update_*`` call, which replaces the
    stored entity as a whole.
    """

    def __init__(
        self,
        snapshot_store: SnapshotStore,
        settings: Optional[Settings] = None,
        financial_service: Optional[FinancialService] = None
    ):
        self.snapshot_store = snapshot_store
        self.settings = settings or get_settings()
        self.financial_service = financial_service or FinancialService()

        self._mappers = {
            CLIENTS: ClientMapper(),
            CASES: CaseMapper(),
            FEES: FeeMapper(),
            EXPENSES: ExpenseMapper(),
            TEMPLATES: TemplateMapper(),
        }

        self._clients: List[Client] = self._load(CLIENTS)
        self._cases: List[Case] = self._load(CASES)
        self._fees: List[Fee] = self._load(FEES)
        self._expenses: List[Expense] = self._load(EXPENSES)
        self._templates: List[DocumentTemplate] = self._load(TEMPLATES)

        logger.info(
            f"Store loaded: {len(self._clients)} clients, {len(self._cases)} cases, "
            f"{len(self._fees)} fees, {len(self._expenses)} expenses, "
            f"{len(self._templates)} templates"
        )

    # Collections

    @property
    def clients(self) -> List[Client]:
        return list(self._clients)

    @property
    def cases(self) -> List[Case]:
        return list(self._cases)

    @property
    def fees(self) -> List[Fee]:
        return list(self._fees)

    @property
    def expenses(self) -> List[Expense]:
        return list(self._expenses)

    @property
    def document_templates(self) -> List[DocumentTemplate]:
        return list(self._templates)

    # Clients

    def add_client(self, data: RequestData) -> Client:
        """
        Create a client from a request DTO or a plain dict.
        """
        request = parse_request(CreateClientRequestDTO, data)

        client = Client(
            **self._person_fields(request),
            legal_representative=(
                LegalRepresentative(**self._person_fields(request.legal_representative))
                if request.legal_representative else None
            ),
            email=request.email,
            phone=request.phone,
            address=PostalAddress(
                cep=request.cep,
                street=request.street,
                number=request.number,
                complement=request.complement,
                neighborhood=request.neighborhood,
                city=request.city,
                state=request.state
            )
        )
        client.validate()
        client.assign_identity()

        self._clients.append(client)
        self._persist()

        logger.info(f"Client {client.id} created")
        return client

    def update_client(self, client: Client) -> Client:
        """Replace a stored client."""
        client.validate()
        self._replace(self._clients, client, "Client")
        self._persist()

        logger.info(f"Client {client.id} updated")
        return client

    def delete_client(self, client_id: str) -> bool:
        """
        Delete a client together with their cases and the fees and expenses
        of those cases. Returns False if the client does not exist.
        """
        client = self.get_client_by_id(client_id)
        if client is None:
            return False

        case_ids = {case.id for case in self._cases if case.client_id == client_id}
        removed = self._remove_case_records(case_ids)
        self._clients = [c for c in self._clients if c.id != client_id]
        self._persist()

        logger.info(
            f"Client {client_id} deleted with {len(case_ids)} cases, "
            f"{removed[FEES]} fees and {removed[EXPENSES]} expenses"
        )
        return True

    def get_client_by_id(self, client_id: str) -> Optional[Client]:
        return self._find(self._clients, client_id)

    # Cases

    def add_case(self, data: RequestData) -> Case:
        """
        Create a case for an existing client.
        One pending legal-document record is seeded per existing template.
        """
        request = parse_request(CreateCaseRequestDTO, data)
        self._require(self._clients, request.client_id, "Client")

        case = Case(
            case_number=request.case_number,
            client_id=request.client_id,
            benefit_type=BenefitType(request.benefit_type),
            status=CaseStatus(request.status),
            start_date=request.start_date,
            notes=request.notes,
            ai_summary=request.ai_summary,
            legal_documents=[
                LegalDocument(template_id=template.id, title=template.title)
                for template in self._templates
            ]
        )
        case.validate()
        case.assign_identity()
        case.touch(case.created_at)

        self._cases.append(case)
        self._persist()

        logger.info(f"Case {case.id} created for client {case.client_id}")
        return case

    def update_case(self, case: Case) -> Case:
        """
        Replace a stored case, including its embedded tasks, documents and
        legal-document records.
        """
        case.validate()
        self._require(self._clients, case.client_id, "Client")
        for task in case.tasks:
            task.id = task.id or new_id()
            task.case_id = case.id
        for document in case.documents:
            document.id = document.id or new_id()

        case.touch()
        self._replace(self._cases, case, "Case")
        self._persist()

        logger.info(f"Case {case.id} updated")
        return case

    def delete_case(self, case_id: str) -> bool:
        """Delete a case and its fees and expenses."""
        if self.get_case_by_id(case_id) is None:
            return False

        removed = self._remove_case_records({case_id})
        self._persist()

        logger.info(
            f"Case {case_id} deleted with {removed[FEES]} fees and {removed[EXPENSES]} expenses"
        )
        return True

    def get_case_by_id(self, case_id: str) -> Optional[Case]:
        return self._find(self._cases, case_id)

    def get_cases_by_client_id(self, client_id: str) -> List[Case]:
        return [case for case in self._cases if case.client_id == client_id]

    def add_task_to_case(self, case_id: str, task_data: RequestData) -> Task:
        """Append a new task to a case."""
        case = self._require(self._cases, case_id, "Case")
        request = parse_request(CreateTaskRequestDTO, task_data)

        task = Task(
            id=new_id(),
            description=request.description,
            due_date=request.due_date,
            completed=request.completed,
            case_id=case.id
        )
        case.tasks.append(task)
        case.touch()
        self._persist()

        logger.info(f"Task {task.id} added to case {case.id}")
        return task

    def update_task(self, task: Task) -> Task:
        """Replace a task inside its owning case."""
        task.validate()

        case = self.get_case_by_id(task.case_id) if task.case_id else None
        if case is None or case.find_task(task.id) is None:
            case = next((c for c in self._cases if c.find_task(task.id) is not None), None)
        if case is None:
            raise EntityNotFoundError("Task", task.id)

        task.case_id = case.id
        case.tasks = [task if existing.id == task.id else existing for existing in case.tasks]
        case.touch()
        self._persist()

        logger.debug(f"Task {task.id} updated in case {case.id}")
        return task

    def add_document_to_case(self, case_id: str, document_data: RequestData) -> Document:
        """Attach a document record to a case."""
        case = self._require(self._cases, case_id, "Case")
        request = parse_request(CreateDocumentRequestDTO, document_data)

        document = Document(
            id=new_id(),
            name=request.name,
            url=request.url,
            text_content=request.text_content,
            ai_analysis=request.ai_analysis
        )
        case.documents.append(document)
        case.touch()
        self._persist()

        logger.info(f"Document {document.id} added to case {case.id}")
        return document

    def update_case_legal_document_status(
        self,
        case_id: str,
        template_id: str,
        status: LegalDocumentStatus = LegalDocumentStatus.PENDENTE
    ) -> LegalDocument:
        """
        Set the status of a case's legal document.
        A record is created from the template when the case has none yet.
        """
        case = self._require(self._cases, case_id, "Case")
        status = LegalDocumentStatus(status)

        legal_document = case.find_legal_document(template_id)
        if legal_document is None:
            template = self._require(self._templates, template_id, "DocumentTemplate")
            legal_document = LegalDocument(template_id=template.id, title=template.title, status=status)
            case.legal_documents.append(legal_document)
        else:
            legal_document.status = status

        case.touch()
        self._persist()

        logger.info(f"Legal document {template_id} of case {case_id} set to {status.value}")
        return legal_document

    def append_case_note(self, case_id: str, text: str, at: Optional[datetime] = None) -> Case:
        """Append a timestamped note to a case's log."""
        case = self._require(self._cases, case_id, "Case")
        request = parse_request(AppendNoteRequestDTO, {"text": text})
        case.append_note(request.text, at)
        self._persist()

        logger.debug(f"Note appended to case {case_id}")
        return case

    def set_case_ai_summary(self, case_id: str, summary: str) -> Case:
        case = self._require(self._cases, case_id, "Case")
        case.ai_summary = summary
        case.touch()
        self._persist()

        logger.info(f"AI summary stored for case {case_id}")
        return case

    def change_case_status(self, case_id: str, status: CaseStatus) -> Case:
        case = self._require(self._cases, case_id, "Case")
        previous = case.status
        case.change_status(status)
        self._persist()

        logger.info(f"Case {case_id} moved from {previous.value} to {case.status.value}")
        return case

    # Fees

    def add_fee(self, data: RequestData) -> Fee:
        """
        Create a fee for an existing case.
        An installment plan is built when ``installment_count`` is given.
        """
        request = parse_request(CreateFeeRequestDTO, data)
        self._require(self._cases, request.case_id, "Case")

        if request.installment_count is not None:
            installments = self.financial_service.build_installment_plan(
                request.amount,
                request.installment_count,
                request.due_date or date.today()
            )
        else:
            installments = [
                Installment(
                    amount=item.amount,
                    due_date=item.due_date,
                    status=InstallmentStatus(item.status)
                )
                for item in request.installments
            ]
        for installment in installments:
            installment.id = new_id()

        fee = Fee(
            case_id=request.case_id,
            fee_type=FeeType(request.fee_type),
            description=request.description,
            amount=request.amount,
            due_date=request.due_date,
            recorded_status=FeeStatus(request.status),
            installments=installments
        )
        fee.validate()
        fee.sync_recorded_status()
        fee.assign_identity()

        self._fees.append(fee)
        self._persist()

        logger.info(f"Fee {fee.id} created for case {fee.case_id}")
        return fee

    def update_fee(self, fee: Fee) -> Fee:
        """Replace a stored fee. Installment-driven status is recomputed."""
        fee.validate()
        self._require(self._cases, fee.case_id, "Case")
        for installment in fee.installments:
            installment.id = installment.id or new_id()
        fee.sync_recorded_status()

        self._replace(self._fees, fee, "Fee")
        self._persist()

        logger.info(f"Fee {fee.id} updated")
        return fee

    def delete_fee(self, fee_id: str) -> bool:
        if self.get_fee_by_id(fee_id) is None:
            return False

        self._fees = [fee for fee in self._fees if fee.id != fee_id]
        self._persist()

        logger.info(f"Fee {fee_id} deleted")
        return True

    def get_fee_by_id(self, fee_id: str) -> Optional[Fee]:
        return self._find(self._fees, fee_id)

    def get_fees_by_case_id(self, case_id: str) -> List[Fee]:
        return [fee for fee in self._fees if fee.case_id == case_id]

    def set_installment_status(
        self,
        fee_id: str,
        installment_id: str,
        status: InstallmentStatus
    ) -> Fee:
        """Mark one installment paid or pending; the fee status follows."""
        fee = self._require(self._fees, fee_id, "Fee")
        fee.set_installment_status(installment_id, status)
        self._persist()

        logger.info(f"Installment {installment_id} of fee {fee_id} set to {InstallmentStatus(status).value}")
        return fee

    def mark_overdue_fees(self, today: Optional[date] = None) -> List[Fee]:
        """Flag pending fees whose due date has passed. Returns the changed fees."""
        today = today or date.today()
        changed = [fee for fee in self._fees if fee.mark_overdue(today)]

        if changed:
            self._persist()
            logger.info(f"{len(changed)} fees marked overdue")

        return changed

    # Expenses

    def add_expense(self, data: RequestData) -> Expense:
        request = parse_request(CreateExpenseRequestDTO, data)
        self._require(self._cases, request.case_id, "Case")

        expense = Expense(
            case_id=request.case_id,
            description=request.description,
            amount=request.amount,
            expense_date=request.expense_date
        )
        expense.validate()
        expense.assign_identity()

        self._expenses.append(expense)
        self._persist()

        logger.info(f"Expense {expense.id} created for case {expense.case_id}")
        return expense

    def update_expense(self, expense: Expense) -> Expense:
        expense.validate()
        self._require(self._cases, expense.case_id, "Case")
        self._replace(self._expenses, expense, "Expense")
        self._persist()

        logger.info(f"Expense {expense.id} updated")
        return expense

    def delete_expense(self, expense_id: str) -> bool:
        if self.get_expense_by_id(expense_id) is None:
            return False

        self._expenses = [expense for expense in self._expenses if expense.id != expense_id]
        self._persist()

        logger.info(f"Expense {expense_id} deleted")
        return True

    def get_expense_by_id(self, expense_id: str) -> Optional[Expense]:
        return self._find(self._expenses, expense_id)

    def get_expenses_by_case_id(self, case_id: str) -> List[Expense]:
        return [expense for expense in self._expenses if expense.case_id == case_id]

    # Document templates

    def add_document_template(self, data: RequestData) -> DocumentTemplate:
        request = parse_request(CreateTemplateRequestDTO, data)

        template = DocumentTemplate(title=request.title, content=request.content)
        template.validate()
        template.assign_identity()

        self._templates.append(template)
        self._persist()

        logger.info(f"Template {template.id} created")
        return template

    def update_document_template(self, template: DocumentTemplate) -> DocumentTemplate:
        """Replace a template. Titles already copied into cases are left as they are."""
        template.validate()
        self._replace(self._templates, template, "DocumentTemplate")
        self._persist()

        logger.info(f"Template {template.id} updated")
        return template

    def delete_document_template(self, template_id: str) -> bool:
        """Delete a template. Case legal-document records keep their copy."""
        if self.get_document_template_by_id(template_id) is None:
            return False

        self._templates = [t for t in self._templates if t.id != template_id]
        self._persist()

        logger.info(f"Template {template_id} deleted")
        return True

    def get_document_template_by_id(self, template_id: str) -> Optional[DocumentTemplate]:
        return self._find(self._templates, template_id)

    def generate_document(
        self,
        template_id: str,
        client_id: str,
        case_id: Optional[str] = None
    ) -> str:
        """
        Fill a template for a client and, optionally, one of their cases.
        With a case, its legal-document record is marked as generated.
        """
        template = self._require(self._templates, template_id, "DocumentTemplate")
        client = self._require(self._clients, client_id, "Client")
        case = self._require(self._cases, case_id, "Case") if case_id else None

        if case is not None and case.client_id != client.id:
            raise ValidationError(f"Case {case.id} does not belong to client {client.id}", "case_id")

        content = resolve_placeholders(template.content, client, case)

        if case is not None:
            self.update_case_legal_document_status(case.id, template.id, LegalDocumentStatus.GERADO)

        return content

    # Derived reads

    def get_financials_by_case_id(self, case_id: str) -> FinancialSummary:
        return self.financial_service.get_financials_by_case_id(case_id, self._fees, self._expenses)

    def get_global_financials(self) -> FinancialSummary:
        return self.financial_service.get_global_financials(self._fees, self._expenses)

    def get_outstanding_fees_total(self) -> float:
        """Amount still to be received across fees that are not fully paid."""
        return round(sum(self.financial_service.outstanding_amount(fee) for fee in self._fees), 2)

    def get_urgent_tasks(self, today: Optional[date] = None) -> List[Task]:
        return get_urgent_tasks(self._cases, today, self.settings.urgent_task_lookahead_days)

    def get_case_checklist(self, case_id: str) -> List[ChecklistItem]:
        return build_checklist(self._require(self._cases, case_id, "Case"))

    def dashboard_summary(self, today: Optional[date] = None) -> DashboardSummary:
        return dashboard_summary(
            self._clients,
            self._cases,
            today,
            self.settings.urgent_task_lookahead_days
        )

    # Internals

    def _person_fields(self, request: PersonRequestDTO) -> Dict[str, Any]:
        return {
            "name": request.name,
            "mother_name": request.mother_name,
            "father_name": request.father_name,
            "cpf": request.cpf,
            "rg": request.rg,
            "rg_issuer": request.rg_issuer,
            "rg_issuer_uf": request.rg_issuer_uf,
            "issue_date": request.issue_date,
            "date_of_birth": request.date_of_birth,
            "nationality": request.nationality,
            "birthplace": request.birthplace,
            "civil_status": request.civil_status,
            "profession": request.profession,
        }

    def _remove_case_records(self, case_ids: set) -> Dict[str, int]:
        fees_before = len(self._fees)
        expenses_before = len(self._expenses)

        self._cases = [case for case in self._cases if case.id not in case_ids]
        self._fees = [fee for fee in self._fees if fee.case_id not in case_ids]
        self._expenses = [expense for expense in self._expenses if expense.case_id not in case_ids]

        return {
            FEES: fees_before - len(self._fees),
            EXPENSES: expenses_before - len(self._expenses),
        }

    @staticmethod
    def _find(collection: List[E], entity_id: Optional[str]) -> Optional[E]:
        if not entity_id:
            return None
        return next((entity for entity in collection if entity.id == entity_id), None)

    def _require(self, collection: List[E], entity_id: Optional[str], entity_type: str) -> E:
        entity = self._find(collection, entity_id)
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity

    @staticmethod
    def _replace(collection: List[E], entity: E, entity_type: str) -> None:
        for index, existing in enumerate(collection):
            if entity.id is not None and existing.id == entity.id:
                collection[index] = entity
                return
        raise EntityNotFoundError(entity_type, entity.id)

    def _collection(self, name: str) -> List[Any]:
        return {
            CLIENTS: self._clients,
            CASES: self._cases,
            FEES: self._fees,
            EXPENSES: self._expenses,
            TEMPLATES: self._templates,
        }[name]

    def _load(self, name: str) -> List[Any]:
        key = self.settings.collection_key(name)
        mapper = self._mappers[name]

        try:
            blob = self.snapshot_store.load(key)
            if blob is None:
                return []
            if not isinstance(blob, list):
                raise ValueError(f"expected a list, got {type(blob).__name__}")
            return [mapper.dict_to_domain(record) for record in blob]
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.error(f"Could not load {key}, starting empty: {str(e)}")
            return []

    def _persist(self) -> None:
        """Write every collection. Failures are logged; memory stays authoritative."""
        for name, mapper in self._mappers.items():
            key = self.settings.collection_key(name)
            try:
                self.snapshot_store.save(
                    key,
                    [mapper.domain_to_dict(entity) for entity in self._collection(name)]
                )
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to persist {key}: {str(e)}")
