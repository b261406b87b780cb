"""
Unit Test Fixtures

Use cases built directly over the in-memory adapters, no DI container.
"""

import pytest

from src.platform.event.in_memory_change_notifier import InMemoryChangeNotifierImpl
from src.service.queue_board.app.command.add_ticket_use_case import AddTicketUseCase
from src.service.queue_board.app.command.remove_ticket_use_case import RemoveTicketUseCase
from src.service.queue_board.app.command.restore_ticket_use_case import RestoreTicketUseCase
from src.service.queue_board.app.command.update_ticket_status_use_case import (
    UpdateTicketStatusUseCase,
)
from src.service.queue_board.app.query.list_tickets_use_case import ListTicketsUseCase
from src.service.queue_board.domain.enum.ticket_status import TWO_STAGE_SCHEMA
from src.service.queue_board.driven_adapter.repo.in_memory_ticket_repo_impl import (
    InMemoryTicketRepoImpl,
)


class ChangeRecorder:
    """Listener that counts reload signals"""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def ticket_repo():
    return InMemoryTicketRepoImpl()


@pytest.fixture
def change_notifier():
    return InMemoryChangeNotifierImpl()


@pytest.fixture
def status_schema():
    return TWO_STAGE_SCHEMA


@pytest.fixture
def recorder(change_notifier):
    listener = ChangeRecorder()
    change_notifier.subscribe(listener)
    return listener


@pytest.fixture
def add_ticket(ticket_repo, change_notifier, status_schema):
    return AddTicketUseCase(
        ticket_repo=ticket_repo, change_notifier=change_notifier, status_schema=status_schema
    )


@pytest.fixture
def update_status(ticket_repo, change_notifier, status_schema):
    return UpdateTicketStatusUseCase(
        ticket_repo=ticket_repo, change_notifier=change_notifier, status_schema=status_schema
    )


@pytest.fixture
def remove_ticket(ticket_repo, change_notifier):
    return RemoveTicketUseCase(ticket_repo=ticket_repo, change_notifier=change_notifier)


@pytest.fixture
def restore_ticket(ticket_repo, change_notifier, status_schema):
    return RestoreTicketUseCase(
        ticket_repo=ticket_repo, change_notifier=change_notifier, status_schema=status_schema
    )


@pytest.fixture
def list_tickets(ticket_repo, status_schema):
    return ListTicketsUseCase(ticket_repo=ticket_repo, status_schema=status_schema)
