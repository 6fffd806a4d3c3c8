"""
ViaCEP postal code lookup.
"""

import logging
import re
from typing import Optional

import requests

from legal_crm.config import Settings
from legal_crm.domain.models.base import AddressNotFoundError, ExternalServiceError, ValidationError
from legal_crm.domain.models.client import PostalAddress
from legal_crm.domain.services.address_lookup_service import AddressLookupService


logger = logging.getLogger(__name__)

SERVICE_NAME = "viacep"


def normalize_cep(cep: str) -> str:
    """Strip formatting from a CEP and check it has 8 digits."""
    digits = re.sub(r"\D", "", cep or "")
    if len(digits) != 8:
        raise ValidationError("CEP must have 8 digits", "cep")
    return digits


class ViaCepAddressLookup(AddressLookupService):
    """Address lookup against the public ViaCEP web service."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.base_url = settings.viacep_base_url.rstrip("/")
        self.timeout = settings.http_timeout_seconds
        self.session = session or requests.Session()

    def lookup(self, cep: str) -> PostalAddress:
        digits = normalize_cep(cep)
        url = f"{self.base_url}/{digits}/json/"

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"ViaCEP lookup failed for {digits}: {str(e)}")
            raise ExternalServiceError(SERVICE_NAME, str(e))
        except ValueError as e:
            logger.error(f"ViaCEP returned invalid JSON for {digits}: {str(e)}")
            raise ExternalServiceError(SERVICE_NAME, "Invalid response body")

        if payload.get("erro"):
            logger.info(f"CEP {digits} not found")
            raise AddressNotFoundError(digits)

        # ViaCEP formats the CEP as 00000-000; number is never returned
        return PostalAddress(
            cep=payload.get("cep") or digits,
            street=payload.get("logradouro") or "",
            complement=payload.get("complemento") or "",
            neighborhood=payload.get("bairro") or "",
            city=payload.get("localidade") or "",
            state=payload.get("uf") or ""
        )
