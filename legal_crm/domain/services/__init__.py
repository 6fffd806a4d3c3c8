"""
Domain services for the legal practice CRM.
This module exports the pure calculations and collaborator interfaces.
"""

from .financial_service import FinancialService, FinancialSummary
from .urgency_service import get_urgent_tasks, DeadlineAlertGate
from .placeholder_resolver import resolve_placeholders
from .document_checklist import build_checklist, checklist_completion, ChecklistItem
from .dashboard_service import dashboard_summary, DashboardSummary
from .case_analysis_service import CaseAnalysisService
from .address_lookup_service import AddressLookupService

__all__ = [
    "FinancialService",
    "FinancialSummary",
    "get_urgent_tasks",
    "DeadlineAlertGate",
    "resolve_placeholders",
    "build_checklist",
    "checklist_completion",
    "ChecklistItem",
    "dashboard_summary",
    "DashboardSummary",
    "CaseAnalysisService",
    "AddressLookupService",
]
