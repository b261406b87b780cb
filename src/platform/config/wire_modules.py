"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.queue_board.app.command import (
    add_ticket_use_case,
    remove_ticket_use_case,
    restore_ticket_use_case,
    update_ticket_status_use_case,
)
from src.service.queue_board.app.query import list_tickets_use_case
from src.service.queue_board.driving_adapter.http_controller import queue_ticket_controller


WIRE_MODULES: list[ModuleType] = [
    add_ticket_use_case,
    update_ticket_status_use_case,
    remove_ticket_use_case,
    restore_ticket_use_case,
    list_tickets_use_case,
    queue_ticket_controller,
]
