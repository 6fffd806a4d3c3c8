"""
Base entity and domain exceptions.
Every stored record derives from BaseEntity; every expected failure raised by
the domain or the store derives from DomainException.
"""

from datetime import datetime
from typing import Optional, Any
from abc import ABC
from dataclasses import dataclass, field
import uuid


def new_id() -> str:
    """Generate a fresh entity identity."""
    return uuid.uuid4().hex


@dataclass
class BaseEntity(ABC):
    """
    Base class for stored records.
    Identity is assigned by the store on add, never by callers.
    """

    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = datetime.now()

    def __eq__(self, other: Any) -> bool:
        """Entities of the same type are equal when their ids match."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not yet stored)."""
        return self.id is None

    def assign_identity(self) -> None:
        """Give the entity a fresh identity and creation timestamp."""
        self.id = new_id()
        self.created_at = datetime.now()

    def validate(self) -> None:
        """Raise ValidationError if the entity is in an invalid state."""


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ExternalServiceError(DomainException):
    """Exception raised when an external collaborator fails or returns garbage."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}", "EXTERNAL_SERVICE_ERROR")
        self.service = service


class AddressNotFoundError(DomainException):
    """Exception raised when a postal code has no registered address."""

    def __init__(self, cep: str):
        super().__init__(f"No address found for CEP {cep}", "ADDRESS_NOT_FOUND")
        self.cep = cep


class OperationInProgressError(BusinessRuleViolation):
    """Exception raised when the same operation is already running for a target."""

    def __init__(self, operation: str, target_id: str):
        super().__init__(f"{operation} already in progress for {target_id}")
        self.code = "OPERATION_IN_PROGRESS"
        self.operation = operation
        self.target_id = target_id
