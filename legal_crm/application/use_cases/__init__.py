"""
Application use cases.
"""

from .base_use_case import UseCaseResult, BaseUseCase
from .case_analysis_use_cases import (
    CaseRequest,
    ExtractClientInfoRequest,
    AddressLookupRequest,
    GenerateCaseSummaryUseCase,
    SuggestTasksUseCase,
    ExtractClientInfoUseCase,
    LookupAddressUseCase,
)

__all__ = [
    "UseCaseResult",
    "BaseUseCase",
    "CaseRequest",
    "ExtractClientInfoRequest",
    "AddressLookupRequest",
    "GenerateCaseSummaryUseCase",
    "SuggestTasksUseCase",
    "ExtractClientInfoUseCase",
    "LookupAddressUseCase",
]
