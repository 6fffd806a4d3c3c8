"""
Unit tests for the CaseAssistant coordinator.
"""

import asyncio
import pytest
from datetime import date
from unittest.mock import AsyncMock, Mock

from legal_crm.application.case_assistant import (
    CaseAssistant,
    RESULT_DISCARDED,
    SUMMARY,
)
from legal_crm.application.dto.assistant_dto import SuggestedTask
from legal_crm.domain.models.client import PostalAddress


@pytest.fixture
def analysis_service():
    service = Mock()
    service.generate_case_summary = AsyncMock(return_value="Segurada com 62 anos e 180 contribuições.")
    service.suggest_tasks = AsyncMock(return_value='[{"description": "Solicitar CNIS"}]')
    service.extract_client_info = AsyncMock(return_value='{"name": "Maria Silva"}')
    service.extract_client_info_from_text = AsyncMock(return_value='{"name": "Maria Silva"}')
    return service


@pytest.fixture
def assistant(store, analysis_service, settings):
    return CaseAssistant(store, analysis_service, settings)


class TestSummarizeCase:
    """Test cases for case summaries."""

    @pytest.mark.asyncio
    async def test_summary_stored_on_case(self, assistant, store, maria_case):
        result = await assistant.summarize_case(maria_case.id)

        assert result.success is True
        assert store.get_case_by_id(maria_case.id).ai_summary == "Segurada com 62 anos e 180 contribuições."

    @pytest.mark.asyncio
    async def test_concurrent_request_rejected(self, assistant, analysis_service, maria_case):
        release = asyncio.Event()

        async def slow_summary(case, client_name):
            await release.wait()
            return "Resumo."

        analysis_service.generate_case_summary.side_effect = slow_summary

        first = asyncio.create_task(assistant.summarize_case(maria_case.id))
        await asyncio.sleep(0)

        assert assistant.is_in_progress(SUMMARY, maria_case.id) is True
        second = await assistant.summarize_case(maria_case.id)

        release.set()
        first_result = await first

        assert second.success is False
        assert second.error_code == "OPERATION_IN_PROGRESS"
        assert first_result.success is True
        assert analysis_service.generate_case_summary.await_count == 1
        assert assistant.is_in_progress(SUMMARY, maria_case.id) is False

    @pytest.mark.asyncio
    async def test_closed_scope_discards_result(self, assistant, analysis_service, store, maria_case):
        scope = assistant.open_scope("case-detail")

        def close_while_waiting(case, client_name):
            scope.close()
            return "Resumo."

        analysis_service.generate_case_summary.side_effect = close_while_waiting

        result = await assistant.summarize_case(maria_case.id, scope)

        assert result.success is False
        assert result.error_code == RESULT_DISCARDED
        assert result.metadata == {"discarded": True}
        assert result.is_discarded is True
        assert store.get_case_by_id(maria_case.id).ai_summary is None

    @pytest.mark.asyncio
    async def test_deleted_case_discards_result(self, assistant, analysis_service, store, maria_case):
        def delete_while_waiting(case, client_name):
            store.delete_case(case.id)
            return "Resumo."

        analysis_service.generate_case_summary.side_effect = delete_while_waiting

        result = await assistant.summarize_case(maria_case.id)

        assert result.error_code == RESULT_DISCARDED
        assert store.get_case_by_id(maria_case.id) is None

    @pytest.mark.asyncio
    async def test_service_failure_leaves_case_untouched(self, assistant, analysis_service, store, maria_case):
        analysis_service.generate_case_summary.side_effect = RuntimeError("timeout")

        result = await assistant.summarize_case(maria_case.id)

        assert result.success is False
        assert result.error_code == "UNKNOWN_ERROR"
        assert store.get_case_by_id(maria_case.id).ai_summary is None
        assert assistant.is_in_progress(SUMMARY, maria_case.id) is False


class TestSuggestedTasks:
    """Test cases for task suggestions."""

    @pytest.mark.asyncio
    async def test_suggestions_not_stored(self, assistant, store, maria_case):
        store.append_case_note(maria_case.id, "Falta o extrato do CNIS.")

        result = await assistant.suggest_tasks(maria_case.id)

        assert result.success is True
        assert result.data[0].description == "Solicitar CNIS"
        assert store.get_case_by_id(maria_case.id).tasks == []

    def test_add_suggested_task_default_due_date(self, assistant, maria_case):
        task = assistant.add_suggested_task(
            maria_case.id,
            SuggestedTask(description="Solicitar CNIS"),
            today=date(2024, 6, 10)
        )

        assert task.due_date == date(2024, 6, 17)
        assert task.case_id == maria_case.id
        assert maria_case.tasks == [task]

    def test_add_suggested_task_keeps_date(self, assistant, maria_case):
        task = assistant.add_suggested_task(
            maria_case.id,
            SuggestedTask(description="Agendar perícia", due_date=date(2024, 8, 1))
        )

        assert task.due_date == date(2024, 8, 1)


class TestClientFormHelpers:
    """Test cases for extraction and address lookup."""

    @pytest.mark.asyncio
    async def test_extract_from_text(self, assistant, analysis_service):
        result = await assistant.extract_client_info(text="Nome: Maria Silva")

        assert result.data.to_form_fields() == {"name": "Maria Silva"}
        analysis_service.extract_client_info_from_text.assert_awaited_once_with("Nome: Maria Silva")

    @pytest.mark.asyncio
    async def test_extract_discarded_when_form_closed(self, assistant):
        with assistant.open_scope("client-form") as scope:
            pass

        result = await assistant.extract_client_info(data=b"...", mime_type="image/jpeg", scope=scope)

        assert result.error_code == RESULT_DISCARDED

    @pytest.mark.asyncio
    async def test_lookup_not_configured(self, assistant):
        result = await assistant.lookup_address("01001-000")

        assert result.success is False
        assert result.error_code == "BUSINESS_RULE_VIOLATION"

    @pytest.mark.asyncio
    async def test_lookup_address(self, store, analysis_service, settings):
        address_lookup = Mock()
        address_lookup.lookup.return_value = PostalAddress(cep="01001-000", street="Praça da Sé", city="São Paulo")
        assistant = CaseAssistant(store, analysis_service, settings, address_lookup=address_lookup)

        result = await assistant.lookup_address("01001-000")

        assert result.success is True
        assert result.data.street == "Praça da Sé"
