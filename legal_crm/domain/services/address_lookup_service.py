"""
Postal address lookup interface.
"""

from abc import ABC, abstractmethod

from legal_crm.domain.models.client import PostalAddress


class AddressLookupService(ABC):
    """Resolves a Brazilian CEP into a structured address."""

    @abstractmethod
    def lookup(self, cep: str) -> PostalAddress:
        """
        Find the address registered for a CEP.
        Raises ValidationError for malformed input, AddressNotFoundError when
        the CEP is unknown and ExternalServiceError when the lookup fails.
        """
        pass
