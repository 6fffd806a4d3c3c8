"""
Unit tests for parsing analysis service output.
"""

import pytest
from datetime import date

from legal_crm.application.dto.assistant_dto import (
    ExtractedClientInfo,
    parse_extracted_client_info,
    parse_suggested_tasks,
)
from legal_crm.domain.models.base import ExternalServiceError


class TestParseSuggestedTasks:
    """Test cases for task suggestion parsing."""

    def test_plain_array(self):
        raw = '[{"description": "Solicitar CNIS", "dueDate": "2024-07-01", "reasoning": "Falta extrato"}]'

        tasks = parse_suggested_tasks(raw)

        assert len(tasks) == 1
        assert tasks[0].description == "Solicitar CNIS"
        assert tasks[0].due_date == date(2024, 7, 1)
        assert tasks[0].reasoning == "Falta extrato"

    def test_code_fenced_and_wrapped(self):
        raw = '```json\n{"tarefas": [{"description": "Agendar perícia", "dueDate": "em breve"}]}\n```'

        tasks = parse_suggested_tasks(raw)

        assert tasks[0].description == "Agendar perícia"
        assert tasks[0].due_date is None

    def test_not_json(self):
        with pytest.raises(ExternalServiceError) as exc_info:
            parse_suggested_tasks("Claro! Aqui estão as tarefas.")

        assert exc_info.value.code == "EXTERNAL_SERVICE_ERROR"
        assert "not valid JSON" in exc_info.value.message

    def test_not_a_list(self):
        with pytest.raises(ExternalServiceError, match="Expected a JSON array"):
            parse_suggested_tasks('"nada"')

    def test_missing_description(self):
        with pytest.raises(ExternalServiceError, match="Malformed task suggestion"):
            parse_suggested_tasks('[{"dueDate": "2024-07-01"}]')


class TestParseExtractedClientInfo:
    """Test cases for client data extraction parsing."""

    def test_form_fields_use_record_keys(self):
        raw = (
            '{"name": "Maria Silva", "cpf": "111.111.111-11", "dataEmissao": "2010-05-20", '
            '"estadoCivil": "casada", "rgIssuerUF": "SP", "confidence": 0.9}'
        )

        info = parse_extracted_client_info(raw)

        assert info.to_form_fields() == {
            "name": "Maria Silva",
            "cpf": "111.111.111-11",
            "rgIssuerUF": "SP",
            "dataEmissao": "2010-05-20",
            "estadoCivil": "casada",
        }

    def test_unreadable_dates_dropped(self):
        info = parse_extracted_client_info('{"name": "Maria", "dateOfBirth": "15 de março"}')

        assert info.date_of_birth is None
        assert "dateOfBirth" not in info.to_form_fields()

    def test_empty_result(self):
        assert ExtractedClientInfo().is_empty is True
        assert parse_extracted_client_info("{}").is_empty is True

    def test_array_rejected(self):
        with pytest.raises(ExternalServiceError, match="Expected a JSON object"):
            parse_extracted_client_info("[]")
