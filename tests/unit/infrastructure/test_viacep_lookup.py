"""
Unit tests for the ViaCEP address lookup.
"""

from unittest.mock import Mock

import pytest
import requests

from legal_crm.domain.models.base import AddressNotFoundError, ExternalServiceError, ValidationError
from legal_crm.infrastructure.postal.viacep_lookup import ViaCepAddressLookup, normalize_cep


VIACEP_SE = {
    "cep": "01001-000",
    "logradouro": "Praça da Sé",
    "complemento": "lado ímpar",
    "bairro": "Sé",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
}


class TestNormalizeCep:
    """Test cases for CEP normalization."""

    def test_strips_formatting(self):
        assert normalize_cep("01001-000") == "01001000"
        assert normalize_cep(" 01.001-000 ") == "01001000"

    @pytest.mark.parametrize("cep", ["", "0100100", "010010000", None])
    def test_rejects_wrong_length(self, cep):
        with pytest.raises(ValidationError, match="CEP must have 8 digits"):
            normalize_cep(cep)


class TestViaCepAddressLookup:
    """Test cases for ViaCepAddressLookup."""

    def setup_method(self):
        self.session = Mock()
        self.response = Mock()
        self.response.json.return_value = dict(VIACEP_SE)
        self.session.get.return_value = self.response

    def make_lookup(self, settings):
        return ViaCepAddressLookup(settings, session=self.session)

    def test_lookup(self, settings):
        address = self.make_lookup(settings).lookup("01001-000")

        self.session.get.assert_called_once_with(
            "https://viacep.com.br/ws/01001000/json/",
            timeout=settings.http_timeout_seconds
        )
        assert address.cep == "01001-000"
        assert address.street == "Praça da Sé"
        assert address.complement == "lado ímpar"
        assert address.neighborhood == "Sé"
        assert address.city == "São Paulo"
        assert address.state == "SP"
        assert address.number == ""

    def test_unknown_cep(self, settings):
        self.response.json.return_value = {"erro": True}

        with pytest.raises(AddressNotFoundError) as exc_info:
            self.make_lookup(settings).lookup("99999-999")

        assert exc_info.value.cep == "99999999"

    def test_invalid_cep_skips_request(self, settings):
        with pytest.raises(ValidationError):
            self.make_lookup(settings).lookup("123")

        self.session.get.assert_not_called()

    def test_http_error(self, settings):
        self.response.raise_for_status.side_effect = requests.HTTPError("400 Client Error")

        with pytest.raises(ExternalServiceError) as exc_info:
            self.make_lookup(settings).lookup("01001-000")

        assert exc_info.value.service == "viacep"

    def test_connection_error(self, settings):
        self.session.get.side_effect = requests.ConnectionError("offline")

        with pytest.raises(ExternalServiceError, match="offline"):
            self.make_lookup(settings).lookup("01001-000")

    def test_invalid_body(self, settings):
        self.response.json.side_effect = ValueError("Expecting value")

        with pytest.raises(ExternalServiceError, match="Invalid response body"):
            self.make_lookup(settings).lookup("01001-000")
