"""
Shared fixtures for the test suite.
"""

from datetime import date

import pytest

from legal_crm.config import Settings
from legal_crm.application.store import CrmStore
from legal_crm.infrastructure.persistence.memory_store import InMemorySnapshotStore


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        data_dir=tmp_path / "data",
        openai_api_key="test-key",
    )


@pytest.fixture
def snapshot_store():
    return InMemorySnapshotStore()


@pytest.fixture
def store(snapshot_store, settings):
    return CrmStore(snapshot_store, settings)


@pytest.fixture
def maria_data():
    """Client record as the client form submits it."""
    return {
        "name": "Maria Silva",
        "cpf": "111.111.111-11",
        "rg": "12.345.678-9",
        "rgIssuer": "SSP",
        "rgIssuerUF": "SP",
        "dataEmissao": "2010-05-20",
        "motherName": "Ana Silva",
        "fatherName": "José Silva",
        "dateOfBirth": "1960-03-15",
        "nacionalidade": "brasileira",
        "naturalidade": "São Paulo/SP",
        "estadoCivil": "casada",
        "profissao": "costureira",
        "email": "maria@example.com",
        "phone": "(11) 99999-0000",
        "cep": "01001-000",
        "street": "Praça da Sé",
        "number": "100",
        "complement": "",
        "neighborhood": "Sé",
        "city": "São Paulo",
        "state": "SP",
    }


@pytest.fixture
def maria(store, maria_data):
    return store.add_client(maria_data)


@pytest.fixture
def maria_case(store, maria):
    return store.add_case({
        "caseNumber": "0001/2024",
        "clientId": maria.id,
        "benefitType": "Aposentadoria por Idade",
        "status": "Análise Inicial",
        "startDate": date(2024, 1, 10).isoformat(),
    })
