"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and snapshot records.
"""

from .client_mapper import ClientMapper
from .case_mapper import CaseMapper
from .fee_mapper import FeeMapper
from .expense_mapper import ExpenseMapper
from .template_mapper import TemplateMapper

__all__ = [
    "ClientMapper",
    "CaseMapper",
    "FeeMapper",
    "ExpenseMapper",
    "TemplateMapper"
]
