"""
Base use case classes for the application layer.
Use cases wrap calls to external collaborators so that callers always get a
UseCaseResult back instead of an exception.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic
from dataclasses import dataclass

from pydantic import BaseModel

from legal_crm.domain.models.base import DomainException, ValidationError


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(success=False, error=error, error_code=error_code, metadata=metadata)

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """
        Create error result from exception.
        Domain exceptions keep their own code, so subclasses such as
        OperationInProgressError stay distinguishable from a plain rule violation.
        """
        if isinstance(exc, ValidationError):
            return cls.error_result(exc.message, "VALIDATION_ERROR")
        if isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code or "BUSINESS_RULE_VIOLATION")
        return cls.error_result(str(exc), "UNKNOWN_ERROR")

    @property
    def is_discarded(self) -> bool:
        """Check if a result was dropped because nobody wanted it anymore."""
        return bool(self.metadata and self.metadata.get("discarded"))

    def with_metadata(self, **values: Any) -> "UseCaseResult[T]":
        self.metadata = {**(self.metadata or {}), **values}
        return self


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.

    Subclasses implement ``_execute_business_logic``. Domain exceptions are
    expected outcomes and become error results quietly; anything else is
    logged with its traceback before being turned into an UNKNOWN_ERROR.
    """

    operation: Optional[str] = None

    @property
    def name(self) -> str:
        return self.operation or type(self).__name__

    async def execute(self, request: T) -> UseCaseResult[R]:
        started = time.perf_counter()

        try:
            self._validate_request(request)
            data = await self._execute_business_logic(request)
            result = UseCaseResult.success_result(data)
        except DomainException as exc:
            logger.debug(f"{self.name} rejected: {exc.message}")
            result = UseCaseResult.from_exception(exc).with_metadata(exception_type=type(exc).__name__)
        except Exception as exc:
            logger.exception(f"Unexpected error in {self.name}")
            result = UseCaseResult.from_exception(exc).with_metadata(exception_type=type(exc).__name__)

        return result.with_metadata(
            operation=self.name,
            duration_seconds=round(time.perf_counter() - started, 6)
        )

    def _validate_request(self, request: T) -> None:
        """Validate the request. Override in subclasses if needed."""
        if isinstance(request, BaseModel):
            # Already validated on construction
            return
        if hasattr(request, 'validate'):
            request.validate()

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
