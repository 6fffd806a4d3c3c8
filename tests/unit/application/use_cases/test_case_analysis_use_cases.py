"""
Unit tests for the case analysis use cases.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from legal_crm.application.use_cases.case_analysis_use_cases import (
    AddressLookupRequest,
    CaseRequest,
    ExtractClientInfoRequest,
    ExtractClientInfoUseCase,
    GenerateCaseSummaryUseCase,
    LookupAddressUseCase,
    SuggestTasksUseCase,
)
from legal_crm.domain.models.base import AddressNotFoundError
from legal_crm.domain.models.client import PostalAddress


class TestGenerateCaseSummaryUseCase:
    """Test cases for case summaries."""

    def setup_method(self):
        self.analysis_service = Mock()
        self.analysis_service.generate_case_summary = AsyncMock(return_value="Resumo.")

    @pytest.mark.asyncio
    async def test_passes_case_and_client_name(self, store, maria, maria_case):
        use_case = GenerateCaseSummaryUseCase(store, self.analysis_service)

        result = await use_case.execute(CaseRequest(maria_case.id))

        assert result.success is True
        assert result.data == "Resumo."
        self.analysis_service.generate_case_summary.assert_awaited_once_with(maria_case, "Maria Silva")
        # Nothing is written by the use case itself
        assert maria_case.ai_summary is None

    @pytest.mark.asyncio
    async def test_missing_case(self, store):
        use_case = GenerateCaseSummaryUseCase(store, self.analysis_service)

        result = await use_case.execute(CaseRequest("ghost"))

        assert result.success is False
        assert result.error_code == "ENTITY_NOT_FOUND"
        self.analysis_service.generate_case_summary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_case_id(self, store):
        result = await GenerateCaseSummaryUseCase(store, self.analysis_service).execute(CaseRequest(""))

        assert result.error_code == "VALIDATION_ERROR"


class TestSuggestTasksUseCase:
    """Test cases for task suggestions."""

    def setup_method(self):
        self.analysis_service = Mock()
        self.analysis_service.suggest_tasks = AsyncMock(
            return_value='[{"description": "Solicitar PPP", "dueDate": "2024-07-01"}]'
        )

    @pytest.mark.asyncio
    async def test_parses_suggestions(self, store, maria_case):
        store.append_case_note(maria_case.id, "Cliente trabalhou exposto a ruído.")

        result = await SuggestTasksUseCase(store, self.analysis_service).execute(CaseRequest(maria_case.id))

        assert result.success is True
        assert [task.description for task in result.data] == ["Solicitar PPP"]
        self.analysis_service.suggest_tasks.assert_awaited_once_with(maria_case.notes)

    @pytest.mark.asyncio
    async def test_requires_notes(self, store, maria_case):
        result = await SuggestTasksUseCase(store, self.analysis_service).execute(CaseRequest(maria_case.id))

        assert result.success is False
        assert result.error == "Case has no notes to analyze"
        self.analysis_service.suggest_tasks.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_garbage_output(self, store, maria_case):
        store.append_case_note(maria_case.id, "Nota.")
        self.analysis_service.suggest_tasks.return_value = "não sei"

        result = await SuggestTasksUseCase(store, self.analysis_service).execute(CaseRequest(maria_case.id))

        assert result.success is False
        assert result.error_code == "EXTERNAL_SERVICE_ERROR"


class TestExtractClientInfoUseCase:
    """Test cases for client data extraction."""

    def setup_method(self):
        self.analysis_service = Mock()
        self.analysis_service.extract_client_info = AsyncMock(return_value='{"name": "Maria Silva"}')
        self.analysis_service.extract_client_info_from_text = AsyncMock(return_value='{"cpf": "111.111.111-11"}')

    @pytest.mark.asyncio
    async def test_binary_document(self):
        use_case = ExtractClientInfoUseCase(self.analysis_service)

        result = await use_case.execute(ExtractClientInfoRequest(data=b"\x89PNG", mime_type="image/png"))

        assert result.data.name == "Maria Silva"
        self.analysis_service.extract_client_info.assert_awaited_once_with(b"\x89PNG", "image/png")

    @pytest.mark.asyncio
    async def test_text_takes_precedence(self):
        use_case = ExtractClientInfoUseCase(self.analysis_service)

        result = await use_case.execute(ExtractClientInfoRequest(data=b"...", mime_type="image/png", text="CPF 111"))

        assert result.data.cpf == "111.111.111-11"
        self.analysis_service.extract_client_info.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_binary_requires_mime_type(self):
        result = await ExtractClientInfoUseCase(self.analysis_service).execute(ExtractClientInfoRequest(data=b"..."))

        assert result.success is False
        assert result.error == "MIME type is required for binary documents"


class TestLookupAddressUseCase:
    """Test cases for CEP lookup."""

    @pytest.mark.asyncio
    async def test_lookup(self):
        address_lookup = Mock()
        address_lookup.lookup.return_value = PostalAddress(cep="01001-000", city="São Paulo", state="SP")

        result = await LookupAddressUseCase(address_lookup).execute(AddressLookupRequest("01001000"))

        assert result.data.city == "São Paulo"
        address_lookup.lookup.assert_called_once_with("01001000")

    @pytest.mark.asyncio
    async def test_not_found(self):
        address_lookup = Mock()
        address_lookup.lookup.side_effect = AddressNotFoundError("99999999")

        result = await LookupAddressUseCase(address_lookup).execute(AddressLookupRequest("99999999"))

        assert result.success is False
        assert result.error_code == "ADDRESS_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_blank_cep(self):
        result = await LookupAddressUseCase(Mock()).execute(AddressLookupRequest("  "))

        assert result.error_code == "VALIDATION_ERROR"
