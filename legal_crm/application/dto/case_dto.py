"""
Case DTOs for the application layer.
Covers cases and the records embedded in them.
"""

from typing import Optional
from datetime import date

from pydantic import Field, field_validator

from legal_crm.domain.models.case import BenefitType, CaseStatus
from .base_dto import RequestDTO, CreateRequestDTO


class CreateCaseRequestDTO(CreateRequestDTO):
    """DTO for case creation requests."""

    case_number: str = Field(default="", max_length=100, description="Court or INSS protocol number")
    client_id: str = Field(min_length=1, description="Owning client")
    benefit_type: BenefitType = Field(description="Benefit being claimed")
    status: CaseStatus = Field(default=CaseStatus.ANALISE_INICIAL)
    start_date: date = Field(default_factory=date.today)
    notes: str = Field(default="")
    ai_summary: Optional[str] = None


class CreateTaskRequestDTO(CreateRequestDTO):
    """DTO for adding a task to a case."""

    description: str = Field(min_length=1, max_length=500)
    due_date: date
    completed: bool = False


class CreateDocumentRequestDTO(CreateRequestDTO):
    """DTO for attaching a document to a case."""

    name: str = Field(min_length=1, max_length=255)
    url: Optional[str] = None
    text_content: Optional[str] = None
    ai_analysis: Optional[str] = None

    @field_validator('url', mode='before')
    @classmethod
    def validate_url(cls, v):
        # A bare "#" marks a placeholder upload with no stored file
        return None if v in ("", "#") else v


class AppendNoteRequestDTO(RequestDTO):
    """DTO for a note appended to the case log."""

    text: str = Field(min_length=1)
