"""
Client domain model.
Represents a client of the office and, for minors, their legal representative.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional
import re

from legal_crm.domain.models.base import BaseEntity, ValidationError


ADULT_AGE = 18


def age_on(date_of_birth: date, day: date) -> int:
    """Get full years between a birth date and a given day."""
    age = day.year - date_of_birth.year
    if (day.month, day.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def _validate_cpf(cpf: Optional[str], field_name: str) -> None:
    if cpf and len(re.sub(r"\D", "", cpf)) != 11:
        raise ValidationError("CPF must have 11 digits", field_name)


@dataclass
class PostalAddress:
    """Structured Brazilian postal address."""

    cep: str = ""
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""

    def validate(self) -> None:
        """Validate address components."""
        if self.cep and len(re.sub(r"\D", "", self.cep)) != 8:
            raise ValidationError("CEP must have 8 digits", "cep")

        if self.state and len(self.state) != 2:
            raise ValidationError("State must be a 2-letter code", "state")

    def format_single_line(self) -> str:
        """Format address as single line."""
        street = ", ".join(part for part in (self.street, self.number, self.complement) if part)
        parts = [street, self.neighborhood]
        city_state = " - ".join(part for part in (self.city, self.state) if part)
        parts.append(city_state)
        if self.cep:
            parts.append(f"CEP {self.cep}")
        return ", ".join(part for part in parts if part)


@dataclass
class LegalRepresentative:
    """Person legally acting for a client who is a minor."""

    name: str = ""
    mother_name: str = ""
    father_name: str = ""
    cpf: str = ""
    rg: str = ""
    rg_issuer: str = ""
    rg_issuer_uf: str = ""
    issue_date: Optional[date] = None
    date_of_birth: Optional[date] = None
    nationality: str = ""
    birthplace: str = ""
    civil_status: str = ""
    profession: str = ""

    def validate(self) -> None:
        """Validate representative data."""
        if not self.name:
            raise ValidationError("Representative name is required", "legal_representative.name")
        _validate_cpf(self.cpf, "legal_representative.cpf")


@dataclass(eq=False)
class Client(BaseEntity):
    """
    Client entity.
    Holds identification, civil and contact data used to fill legal documents.
    """

    name: str = ""
    cpf: str = ""
    rg: str = ""
    rg_issuer: str = ""
    rg_issuer_uf: str = ""
    issue_date: Optional[date] = None
    mother_name: str = ""
    father_name: str = ""
    date_of_birth: Optional[date] = None
    nationality: str = ""
    birthplace: str = ""
    civil_status: str = ""
    profession: str = ""
    legal_representative: Optional[LegalRepresentative] = None

    # Contact information
    email: str = ""
    phone: str = ""
    address: PostalAddress = field(default_factory=PostalAddress)

    def validate(self) -> None:
        """Validate client state."""
        if not self.name or not self.name.strip():
            raise ValidationError("Client name is required", "name")

        if len(self.name) > 255:
            raise ValidationError("Client name too long (max 255 characters)", "name")

        _validate_cpf(self.cpf, "cpf")

        if self.email and "@" not in self.email:
            raise ValidationError(f"Invalid email format: {self.email}", "email")

        if self.address:
            self.address.validate()

        if self.legal_representative:
            self.legal_representative.validate()

    def age_on(self, day: date) -> Optional[int]:
        """Get the client's age on a given day, if the birth date is known."""
        if not self.date_of_birth:
            return None
        return age_on(self.date_of_birth, day)

    def is_minor_on(self, day: date) -> bool:
        """Check if the client is under age on a given day."""
        age = self.age_on(day)
        return age is not None and age < ADULT_AGE

    @property
    def has_legal_representative(self) -> bool:
        """Check if a representative is on file."""
        return self.legal_representative is not None
