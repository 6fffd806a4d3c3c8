"""
Domain models for the legal practice CRM.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ExternalServiceError,
    AddressNotFoundError,
    OperationInProgressError,
    new_id
)

# Domain entities
from .client import (
    Client,
    LegalRepresentative,
    PostalAddress,
    age_on
)

from .case import (
    Case,
    CaseStatus,
    BenefitType,
    Task,
    Document,
    LegalDocument,
    LegalDocumentStatus,
    NoteEntry,
    CLOSED_STATUSES
)

from .fee import (
    Fee,
    FeeStatus,
    FeeType,
    Installment,
    InstallmentStatus
)

from .expense import Expense

from .template import DocumentTemplate

__all__ = [
    # Base classes
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "ExternalServiceError",
    "AddressNotFoundError",
    "OperationInProgressError",
    "new_id",

    # Client
    "Client",
    "LegalRepresentative",
    "PostalAddress",
    "age_on",

    # Case
    "Case",
    "CaseStatus",
    "BenefitType",
    "Task",
    "Document",
    "LegalDocument",
    "LegalDocumentStatus",
    "NoteEntry",
    "CLOSED_STATUSES",

    # Fee
    "Fee",
    "FeeStatus",
    "FeeType",
    "Installment",
    "InstallmentStatus",

    # Expense
    "Expense",

    # Template
    "DocumentTemplate",
]
