"""
Application bootstrap and data management commands.
Wires settings, logging, persistence and collaborators into a store.
"""

import logging
import sys
from datetime import date
from typing import Optional

from legal_crm.config import Settings, get_settings
from legal_crm.application.case_assistant import CaseAssistant
from legal_crm.application.store import CLIENTS, CASES, FEES, EXPENSES, TEMPLATES, CrmStore
from legal_crm.domain.services.urgency_service import DeadlineAlertGate
from legal_crm.infrastructure.ai.openai_case_analysis import OpenAICaseAnalysisService
from legal_crm.infrastructure.persistence.json_file_store import JsonFileSnapshotStore
from legal_crm.infrastructure.postal.viacep_lookup import ViaCepAddressLookup


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_store(settings: Optional[Settings] = None) -> CrmStore:
    """
    Build a store persisted as JSON files under settings.data_dir.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    logger.info(f"Starting {settings.app_title} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}, data directory: {settings.data_dir}")

    return CrmStore(JsonFileSnapshotStore(settings.data_dir), settings)


def create_case_assistant(store: CrmStore, settings: Optional[Settings] = None) -> CaseAssistant:
    """Build the assistant with the OpenAI and ViaCEP adapters."""
    settings = settings or store.settings
    return CaseAssistant(
        store,
        OpenAICaseAnalysisService(settings),
        settings,
        address_lookup=ViaCepAddressLookup(settings)
    )


def create_alert_gate(store: CrmStore) -> DeadlineAlertGate:
    """Build the deadline alert gate on the store's persistence."""
    return DeadlineAlertGate(store.snapshot_store)


def show_summary(store: CrmStore) -> None:
    """Print the dashboard counters and global balance."""
    summary = store.dashboard_summary()
    financials = store.get_global_financials()

    print(f"Clients:       {summary.total_clients}")
    print(f"Active cases:  {summary.active_cases}")
    print(f"Closed cases:  {summary.closed_cases}")
    print(f"Urgent tasks:  {summary.urgent_tasks}")
    print(f"Fees received: {financials.total_fees:.2f}")
    print(f"Receivable:    {store.get_outstanding_fees_total():.2f}")
    print(f"Expenses:      {financials.total_expenses:.2f}")
    print(f"Balance:       {financials.balance:.2f}")


def show_urgent_tasks(store: CrmStore) -> None:
    """Print open tasks due within the lookahead window."""
    today = date.today()
    tasks = store.get_urgent_tasks(today)
    if not tasks:
        print("No urgent deadlines.")
        return

    for task in tasks:
        case = store.get_case_by_id(task.case_id)
        label = case.case_number if case and case.case_number else task.case_id
        marker = "OVERDUE" if task.is_overdue(today) else "due"
        print(f"{task.due_date.isoformat()}  {marker:<7}  [{label}] {task.description}")


def mark_overdue(store: CrmStore) -> None:
    """Flag pending fees past their due date."""
    changed = store.mark_overdue_fees()
    print(f"{len(changed)} fee(s) marked overdue.")


def reset_data(store: CrmStore) -> None:
    """Delete every snapshot - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() != 'yes':
        print("Reset cancelled.")
        return

    for name in (CLIENTS, CASES, FEES, EXPENSES, TEMPLATES):
        store.snapshot_store.delete(store.settings.collection_key(name))
    print("All data removed.")


def main() -> None:
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: legal-crm [command]")
        print("Commands:")
        print("  summary        - Show dashboard counters and balance")
        print("  urgent         - List urgent deadlines")
        print("  overdue        - Mark pending fees past due as overdue")
        print("  reset          - Remove all stored data (WARNING: drops all data)")
        return

    command_name = sys.argv[1]
    store = create_store()

    if command_name == "summary":
        show_summary(store)
    elif command_name == "urgent":
        show_urgent_tasks(store)
    elif command_name == "overdue":
        mark_overdue(store)
    elif command_name == "reset":
        reset_data(store)
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
