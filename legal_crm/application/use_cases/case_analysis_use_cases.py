"""
Case analysis use cases.
Each one asks an external collaborator for a result and returns it without
writing to the store; the caller decides whether the result is still wanted.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from legal_crm.domain.models.base import EntityNotFoundError, ValidationError
from legal_crm.domain.models.client import PostalAddress
from legal_crm.domain.services.address_lookup_service import AddressLookupService
from legal_crm.domain.services.case_analysis_service import CaseAnalysisService
from legal_crm.application.dto.assistant_dto import (
    ExtractedClientInfo,
    SuggestedTask,
    parse_extracted_client_info,
    parse_suggested_tasks,
)
from .base_use_case import BaseUseCase


@dataclass
class CaseRequest:
    """Request naming the case an operation works on."""

    case_id: str

    def validate(self) -> None:
        if not self.case_id:
            raise ValidationError("Case ID is required", "case_id")


@dataclass
class ExtractClientInfoRequest:
    """Either raw document bytes with their MIME type, or already extracted text."""

    data: Optional[bytes] = None
    mime_type: Optional[str] = None
    text: Optional[str] = None

    def validate(self) -> None:
        if self.text and self.text.strip():
            return
        if not self.data:
            raise ValidationError("Document content is required", "data")
        if not self.mime_type:
            raise ValidationError("MIME type is required for binary documents", "mime_type")


@dataclass
class AddressLookupRequest:
    cep: str

    def validate(self) -> None:
        if not self.cep or not self.cep.strip():
            raise ValidationError("CEP is required", "cep")


class GenerateCaseSummaryUseCase(BaseUseCase[CaseRequest, str]):
    """Use case for asking the analysis service to summarize a case."""

    operation = "generate_case_summary"

    def __init__(self, store, analysis_service: CaseAnalysisService):
        super().__init__()
        self.store = store
        self.analysis_service = analysis_service

    async def _execute_business_logic(self, request: CaseRequest) -> str:
        case = self.store.get_case_by_id(request.case_id)
        if case is None:
            raise EntityNotFoundError("Case", request.case_id)

        client = self.store.get_client_by_id(case.client_id)
        client_name = client.name if client else ""

        return await self.analysis_service.generate_case_summary(case, client_name)


class SuggestTasksUseCase(BaseUseCase[CaseRequest, List[SuggestedTask]]):
    """Use case for proposing follow-up tasks from a case's notes."""

    operation = "suggest_tasks"

    def __init__(self, store, analysis_service: CaseAnalysisService):
        super().__init__()
        self.store = store
        self.analysis_service = analysis_service

    async def _execute_business_logic(self, request: CaseRequest) -> List[SuggestedTask]:
        case = self.store.get_case_by_id(request.case_id)
        if case is None:
            raise EntityNotFoundError("Case", request.case_id)

        if not case.notes.strip():
            raise ValidationError("Case has no notes to analyze", "notes")

        raw = await self.analysis_service.suggest_tasks(case.notes)
        return parse_suggested_tasks(raw)


class ExtractClientInfoUseCase(BaseUseCase[ExtractClientInfoRequest, ExtractedClientInfo]):
    """Use case for reading client identification data from a document."""

    operation = "extract_client_info"

    def __init__(self, analysis_service: CaseAnalysisService):
        super().__init__()
        self.analysis_service = analysis_service

    async def _execute_business_logic(self, request: ExtractClientInfoRequest) -> ExtractedClientInfo:
        if request.text and request.text.strip():
            raw = await self.analysis_service.extract_client_info_from_text(request.text)
        else:
            raw = await self.analysis_service.extract_client_info(request.data, request.mime_type)
        return parse_extracted_client_info(raw)


class LookupAddressUseCase(BaseUseCase[AddressLookupRequest, PostalAddress]):
    """Use case for filling an address from its CEP."""

    operation = "lookup_address"

    def __init__(self, address_lookup: AddressLookupService):
        super().__init__()
        self.address_lookup = address_lookup

    async def _execute_business_logic(self, request: AddressLookupRequest) -> PostalAddress:
        # The lookup client is blocking
        return await asyncio.to_thread(self.address_lookup.lookup, request.cep)
