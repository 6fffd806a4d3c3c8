"""
Case assistant.
Coordinates the asynchronous calls to external collaborators: only one call
per operation and target may be running, and results that arrive for a
closed request scope or a deleted case are dropped instead of written.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional, Set, Tuple

from legal_crm.config import Settings, get_settings
from legal_crm.domain.models.base import BusinessRuleViolation, OperationInProgressError
from legal_crm.domain.models.case import Task
from legal_crm.domain.models.client import PostalAddress
from legal_crm.domain.services.address_lookup_service import AddressLookupService
from legal_crm.domain.services.case_analysis_service import CaseAnalysisService
from legal_crm.application.dto.assistant_dto import ExtractedClientInfo, SuggestedTask
from legal_crm.application.store import CrmStore
from legal_crm.application.use_cases.base_use_case import BaseUseCase, UseCaseResult
from legal_crm.application.use_cases.case_analysis_use_cases import (
    AddressLookupRequest,
    CaseRequest,
    ExtractClientInfoRequest,
    ExtractClientInfoUseCase,
    GenerateCaseSummaryUseCase,
    LookupAddressUseCase,
    SuggestTasksUseCase,
)


logger = logging.getLogger(__name__)

SUMMARY = "generate_case_summary"
SUGGEST_TASKS = "suggest_tasks"
EXTRACT_CLIENT_INFO = "extract_client_info"
LOOKUP_ADDRESS = "lookup_address"

CLIENT_FORM_TARGET = "client-form"

RESULT_DISCARDED = "RESULT_DISCARDED"


class RequestScope:
    """
    Lifetime of whoever asked for a result, such as an open case view.
    Closing the scope means any result still in flight is no longer wanted.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._closed = False

    @property
    def is_active(self) -> bool:
        return not self._closed

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> "RequestScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CaseAssistant:
    """
    Entry point for AI-assisted and lookup operations.
    Every method returns a UseCaseResult; failures are reported, never raised.
    """

    def __init__(
        self,
        store: CrmStore,
        analysis_service: CaseAnalysisService,
        settings: Optional[Settings] = None,
        address_lookup: Optional[AddressLookupService] = None
    ):
        self.store = store
        self.analysis_service = analysis_service
        self.settings = settings or get_settings()
        self.address_lookup = address_lookup
        self._in_flight: Set[Tuple[str, str]] = set()

    def open_scope(self, name: str = "") -> RequestScope:
        return RequestScope(name)

    def is_in_progress(self, operation: str, target_id: str) -> bool:
        """Check if an operation is currently running for a target."""
        return (operation, target_id) in self._in_flight

    async def summarize_case(
        self,
        case_id: str,
        scope: Optional[RequestScope] = None
    ) -> UseCaseResult[str]:
        """
        Generate a case summary and store it on the case.
        """
        use_case = GenerateCaseSummaryUseCase(self.store, self.analysis_service)
        result = await self._run(SUMMARY, case_id, use_case, CaseRequest(case_id))
        if not result.success:
            return result

        if self._is_stale(scope, case_id):
            return self._discarded(SUMMARY, case_id)

        self.store.set_case_ai_summary(case_id, result.data)
        return result

    async def suggest_tasks(
        self,
        case_id: str,
        scope: Optional[RequestScope] = None
    ) -> UseCaseResult[List[SuggestedTask]]:
        """
        Propose follow-up tasks from the case notes. Nothing is stored until
        a suggestion is accepted with add_suggested_task.
        """
        use_case = SuggestTasksUseCase(self.store, self.analysis_service)
        result = await self._run(SUGGEST_TASKS, case_id, use_case, CaseRequest(case_id))
        if not result.success:
            return result

        if self._is_stale(scope, case_id):
            return self._discarded(SUGGEST_TASKS, case_id)

        logger.info(f"{len(result.data)} tasks suggested for case {case_id}")
        return result

    def add_suggested_task(
        self,
        case_id: str,
        suggestion: SuggestedTask,
        today: Optional[date] = None
    ) -> Task:
        """
        Accept a suggestion as a real task. Suggestions without a date are
        due a configurable number of days from today.
        """
        due_date = suggestion.due_date
        if due_date is None:
            today = today or date.today()
            due_date = today + timedelta(days=self.settings.suggested_task_default_days)

        return self.store.add_task_to_case(case_id, {
            "description": suggestion.description,
            "due_date": due_date,
        })

    async def extract_client_info(
        self,
        data: Optional[bytes] = None,
        mime_type: Optional[str] = None,
        text: Optional[str] = None,
        scope: Optional[RequestScope] = None,
        target_id: str = CLIENT_FORM_TARGET
    ) -> UseCaseResult[ExtractedClientInfo]:
        """
        Read client identification fields from a document image or its text.
        """
        use_case = ExtractClientInfoUseCase(self.analysis_service)
        request = ExtractClientInfoRequest(data=data, mime_type=mime_type, text=text)
        result = await self._run(EXTRACT_CLIENT_INFO, target_id, use_case, request)
        if result.success and self._is_stale(scope):
            return self._discarded(EXTRACT_CLIENT_INFO, target_id)
        return result

    async def lookup_address(
        self,
        cep: str,
        scope: Optional[RequestScope] = None,
        target_id: str = CLIENT_FORM_TARGET
    ) -> UseCaseResult[PostalAddress]:
        """Fill an address from its CEP."""
        if self.address_lookup is None:
            return UseCaseResult.from_exception(
                BusinessRuleViolation("Address lookup is not configured")
            )

        use_case = LookupAddressUseCase(self.address_lookup)
        result = await self._run(LOOKUP_ADDRESS, target_id, use_case, AddressLookupRequest(cep))
        if result.success and self._is_stale(scope):
            return self._discarded(LOOKUP_ADDRESS, target_id)
        return result

    async def _run(
        self,
        operation: str,
        target_id: str,
        use_case: BaseUseCase,
        request
    ) -> UseCaseResult:
        key = (operation, target_id)
        if key in self._in_flight:
            logger.warning(f"Rejected {operation} for {target_id}: already in progress")
            return UseCaseResult.from_exception(OperationInProgressError(operation, target_id))

        self._in_flight.add(key)
        try:
            result = await use_case.execute(request)
        finally:
            self._in_flight.discard(key)

        if not result.success:
            logger.warning(f"{operation} for {target_id} failed: {result.error}")
        return result

    def _is_stale(self, scope: Optional[RequestScope], case_id: Optional[str] = None) -> bool:
        if scope is not None and not scope.is_active:
            return True
        return case_id is not None and self.store.get_case_by_id(case_id) is None

    def _discarded(self, operation: str, target_id: str) -> UseCaseResult:
        logger.info(f"Discarded {operation} result for {target_id}: request no longer active")
        return UseCaseResult.error_result(
            "Result arrived after the request was abandoned",
            RESULT_DISCARDED,
            metadata={"discarded": True}
        )
