"""
Case analysis service for AI-assisted case work.
Defines the operations the assistant relies on; adapters live in infrastructure.
"""

from abc import ABC, abstractmethod

from legal_crm.domain.models.case import Case


class CaseAnalysisService(ABC):
    """
    Case analysis service interface.
    Every method returns raw model text. Failures surface as ExternalServiceError.
    """

    @abstractmethod
    async def generate_case_summary(self, case: Case, client_name: str) -> str:
        """
        Summarize the current state of a case in a few paragraphs.
        """
        pass

    @abstractmethod
    async def suggest_tasks(self, notes: str) -> str:
        """
        Suggest follow-up tasks from the case notes.
        Returns a JSON array of {description, dueDate?, reasoning} objects.
        """
        pass

    @abstractmethod
    async def extract_client_info(self, data: bytes, mime_type: str) -> str:
        """
        Read identification fields from a scanned document image.
        Returns a JSON object keyed by client field names.
        """
        pass

    @abstractmethod
    async def extract_client_info_from_text(self, text: str) -> str:
        """
        Read identification fields from already extracted document text.
        """
        pass
