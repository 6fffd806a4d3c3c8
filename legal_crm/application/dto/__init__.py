"""
Application DTOs.
"""

from .base_dto import BaseDTO, RequestDTO, CreateRequestDTO, parse_request
from .client_dto import CreateClientRequestDTO, LegalRepresentativeRequestDTO
from .case_dto import (
    CreateCaseRequestDTO,
    CreateTaskRequestDTO,
    CreateDocumentRequestDTO,
    AppendNoteRequestDTO,
)
from .fee_dto import CreateFeeRequestDTO, InstallmentRequestDTO, CreateExpenseRequestDTO
from .template_dto import CreateTemplateRequestDTO
from .assistant_dto import (
    SuggestedTask,
    ExtractedClientInfo,
    parse_suggested_tasks,
    parse_extracted_client_info,
)

__all__ = [
    "BaseDTO",
    "RequestDTO",
    "CreateRequestDTO",
    "parse_request",
    "CreateClientRequestDTO",
    "LegalRepresentativeRequestDTO",
    "CreateCaseRequestDTO",
    "CreateTaskRequestDTO",
    "CreateDocumentRequestDTO",
    "AppendNoteRequestDTO",
    "CreateFeeRequestDTO",
    "InstallmentRequestDTO",
    "CreateExpenseRequestDTO",
    "CreateTemplateRequestDTO",
    "SuggestedTask",
    "ExtractedClientInfo",
    "parse_suggested_tasks",
    "parse_extracted_client_info",
]
