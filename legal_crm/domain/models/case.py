"""
Case domain model.
Represents a social-security claim with its embedded tasks, uploaded
documents and legal-document lifecycle records.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional, List
from enum import Enum
import re

from legal_crm.domain.models.base import BaseEntity, ValidationError


NOTE_TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"
_NOTE_SEPARATOR = re.compile(r"^--- (.+?) ---$", re.MULTILINE)


class CaseStatus(str, Enum):
    """Workflow stage of a case."""
    ANALISE_INICIAL = "Análise Inicial"
    AGUARDANDO_DOCUMENTOS = "Aguardando Documentos"
    PROTOCOLO_INSS = "Protocolado no INSS"
    EM_ANALISE_INSS = "Em Análise (INSS)"
    EXIGENCIA = "Em Exigência"
    CONCEDIDO = "Concedido"
    NEGADO = "Negado"
    RECURSO = "Fase Recursal"
    JUDICIAL = "Fase Judicial"
    FINALIZADO = "Finalizado"


class BenefitType(str, Enum):
    """Category of social-security benefit pursued by a case."""
    APOSENTADORIA_IDADE = "Aposentadoria por Idade"
    APOSENTADORIA_CONTRIBUICAO = "Aposentadoria por Tempo de Contribuição"
    APOSENTADORIA_ESPECIAL = "Aposentadoria Especial"
    APOSENTADORIA_INVALIDEZ = "Aposentadoria por Invalidez"
    AUXILIO_DOENCA = "Auxílio-Doença"
    AUXILIO_ACIDENTE = "Auxílio-Acidente"
    BPC_LOAS = "BPC/LOAS"
    PENSAO_MORTE = "Pensão por Morte"
    SALARIO_MATERNIDADE = "Salário Maternidade"


class LegalDocumentStatus(str, Enum):
    """Generation/signature lifecycle of a legal document."""
    PENDENTE = "Pendente"
    GERADO = "Gerado"
    ASSINADO = "Assinado"


CLOSED_STATUSES = (CaseStatus.FINALIZADO, CaseStatus.CONCEDIDO)


@dataclass
class Task:
    """Deadline or to-do item owned by a case."""

    description: str
    due_date: date
    completed: bool = False
    case_id: Optional[str] = None
    id: Optional[str] = None

    def validate(self) -> None:
        """Validate task state."""
        if not self.description or not self.description.strip():
            raise ValidationError("Task description is required", "description")

        if not isinstance(self.due_date, date):
            raise ValidationError("Task due date is required", "due_date")

    def is_overdue(self, today: date) -> bool:
        """Check if the task is past due and still open."""
        return not self.completed and self.due_date < today


@dataclass
class Document:
    """File uploaded to a case."""

    name: str
    url: Optional[str] = None
    uploaded_at: datetime = field(default_factory=datetime.now)
    text_content: Optional[str] = None
    ai_analysis: Optional[str] = None
    id: Optional[str] = None


@dataclass
class LegalDocument:
    """Status of a template-based document for one case. The title is a copy."""

    template_id: str
    title: str
    status: LegalDocumentStatus = LegalDocumentStatus.PENDENTE


@dataclass(frozen=True)
class NoteEntry:
    """One block of the case notes log."""

    timestamp: Optional[datetime]
    text: str


@dataclass(eq=False)
class Case(BaseEntity):
    """
    Case entity.
    Owns its tasks, documents and legal-document records. Every mutation
    stamps last_update.
    """

    case_number: str = ""
    client_id: str = ""
    benefit_type: BenefitType = BenefitType.APOSENTADORIA_IDADE
    status: CaseStatus = CaseStatus.ANALISE_INICIAL
    start_date: date = field(default_factory=date.today)
    notes: str = ""
    documents: List[Document] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    legal_documents: List[LegalDocument] = field(default_factory=list)
    last_update: datetime = field(default_factory=datetime.now)
    ai_summary: Optional[str] = None

    def validate(self) -> None:
        """Validate case state."""
        if not self.client_id:
            raise ValidationError("Client ID is required", "client_id")

        if len(self.case_number) > 100:
            raise ValidationError("Case number too long (max 100 characters)", "case_number")

        for task in self.tasks:
            task.validate()

    @property
    def is_active(self) -> bool:
        """Check if the case is still being worked on."""
        return self.status not in CLOSED_STATUSES

    @property
    def is_judicial(self) -> bool:
        """Check if the case is in the judicial phase."""
        return self.status == CaseStatus.JUDICIAL

    def touch(self, at: Optional[datetime] = None) -> None:
        """Stamp the last update timestamp."""
        self.last_update = at or datetime.now()

    def change_status(self, new_status: CaseStatus) -> None:
        """Move the case to another workflow stage."""
        self.status = CaseStatus(new_status)
        self.touch()

    def append_note(self, text: str, at: Optional[datetime] = None) -> None:
        """Append a timestamped block to the notes log."""
        if not text or not text.strip():
            raise ValidationError("Note text is required", "notes")

        at = at or datetime.now()
        stamp = at.strftime(NOTE_TIMESTAMP_FORMAT)
        self.notes = f"{self.notes}\n\n--- {stamp} ---\n{text}".strip()
        self.touch(at)

    def note_entries(self) -> List[NoteEntry]:
        """Parse the notes log into ordered entries."""
        entries: List[NoteEntry] = []
        if not self.notes:
            return entries

        matches = list(_NOTE_SEPARATOR.finditer(self.notes))
        head = self.notes[:matches[0].start()] if matches else self.notes
        if head.strip():
            entries.append(NoteEntry(timestamp=None, text=head.strip()))

        for index, match in enumerate(matches):
            end = matches[index + 1].start() if index + 1 < len(matches) else len(self.notes)
            body = self.notes[match.end():end].strip()
            entries.append(NoteEntry(timestamp=_parse_note_timestamp(match.group(1)), text=body))

        return entries

    def find_task(self, task_id: str) -> Optional[Task]:
        """Find an embedded task by id."""
        return next((task for task in self.tasks if task.id == task_id), None)

    def find_legal_document(self, template_id: str) -> Optional[LegalDocument]:
        """Find the legal-document record for a template."""
        return next(
            (doc for doc in self.legal_documents if doc.template_id == template_id),
            None
        )

    @property
    def pending_tasks(self) -> List[Task]:
        """Get tasks not yet completed."""
        return [task for task in self.tasks if not task.completed]


def _parse_note_timestamp(label: str) -> Optional[datetime]:
    for fmt in (NOTE_TIMESTAMP_FORMAT, "%d/%m/%Y %H:%M:%S"):
        try:
            return datetime.strptime(label.strip(), fmt)
        except ValueError:
            continue
    return None
