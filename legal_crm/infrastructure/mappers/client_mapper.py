"""
Client mapper for converting between domain entities and snapshot records.
"""

from typing import Any, Dict, Optional

from legal_crm.domain.models.client import Client, LegalRepresentative, PostalAddress
from .serialization import format_date, format_datetime, parse_date, parse_datetime


class ClientMapper:
    """Maps between Client domain entity and its camelCase snapshot record."""

    def domain_to_dict(self, client: Client) -> Dict[str, Any]:
        """Convert Client domain entity to a snapshot record."""
        data = {
            "id": client.id,
            **self._person_to_dict(client),
            "email": client.email,
            "phone": client.phone,
            # Address is stored flat on the client record
            "cep": client.address.cep,
            "street": client.address.street,
            "number": client.address.number,
            "complement": client.address.complement,
            "neighborhood": client.address.neighborhood,
            "city": client.address.city,
            "state": client.address.state,
            "createdAt": format_datetime(client.created_at),
        }
        if client.legal_representative:
            data["legalRepresentative"] = self._person_to_dict(client.legal_representative)
        return data

    def dict_to_domain(self, data: Dict[str, Any]) -> Client:
        """Convert a snapshot record to Client domain entity."""
        client = Client(
            **self._person_from_dict(data),
            legal_representative=self._representative_from_dict(data.get("legalRepresentative")),
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            address=PostalAddress(
                cep=data.get("cep") or "",
                street=data.get("street") or "",
                number=data.get("number") or "",
                complement=data.get("complement") or "",
                neighborhood=data.get("neighborhood") or "",
                city=data.get("city") or "",
                state=data.get("state") or ""
            )
        )

        # Set entity metadata
        client.id = data.get("id")
        client.created_at = parse_datetime(data.get("createdAt")) or client.created_at

        return client

    def _representative_from_dict(self, data: Optional[Dict[str, Any]]) -> Optional[LegalRepresentative]:
        if not data:
            return None
        return LegalRepresentative(**self._person_from_dict(data))

    def _person_to_dict(self, person) -> Dict[str, Any]:
        return {
            "name": person.name,
            "motherName": person.mother_name,
            "fatherName": person.father_name,
            "cpf": person.cpf,
            "rg": person.rg,
            "rgIssuer": person.rg_issuer,
            "rgIssuerUF": person.rg_issuer_uf,
            "dataEmissao": format_date(person.issue_date),
            "dateOfBirth": format_date(person.date_of_birth),
            "nacionalidade": person.nationality,
            "naturalidade": person.birthplace,
            "estadoCivil": person.civil_status,
            "profissao": person.profession,
        }

    def _person_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": data.get("name") or "",
            "mother_name": data.get("motherName") or "",
            "father_name": data.get("fatherName") or "",
            "cpf": data.get("cpf") or "",
            "rg": data.get("rg") or "",
            "rg_issuer": data.get("rgIssuer") or "",
            "rg_issuer_uf": data.get("rgIssuerUF") or "",
            "issue_date": parse_date(data.get("dataEmissao")),
            "date_of_birth": parse_date(data.get("dateOfBirth")),
            "nationality": data.get("nacionalidade") or "",
            "birthplace": data.get("naturalidade") or "",
            "civil_status": data.get("estadoCivil") or "",
            "profession": data.get("profissao") or "",
        }
