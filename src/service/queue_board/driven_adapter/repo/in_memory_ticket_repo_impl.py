from typing import Dict, List

from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatus


class InMemoryTicketRepoImpl(ITicketRepo):
    """
    Process-local ticket storage

    Owned by the DI container singleton, so one instance per process.
    Returns copies so callers can never mutate stored state by accident.
    """

    def __init__(self) -> None:
        self._tickets: Dict[str, QueueTicket] = {}

    @Logger.io
    async def list_all(self) -> List[QueueTicket]:
        return [ticket.copy() for ticket in self._tickets.values()]

    @Logger.io
    async def get_by_id(self, *, ticket_id: str) -> QueueTicket | None:
        ticket = self._tickets.get(ticket_id)
        return ticket.copy() if ticket else None

    @Logger.io
    async def find_by_number(self, *, number: str) -> QueueTicket | None:
        for ticket in self._tickets.values():
            if ticket.matches_number(number):
                return ticket.copy()
        return None

    @Logger.io
    async def insert(self, *, ticket: QueueTicket) -> QueueTicket:
        self._tickets[ticket.id] = ticket.copy()
        return ticket

    @Logger.io
    async def update_status(self, *, ticket_id: str, status: TicketStatus) -> QueueTicket | None:
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return None
        ticket.status = status
        return ticket.copy()

    @Logger.io
    async def delete(self, *, ticket_id: str) -> QueueTicket | None:
        return self._tickets.pop(ticket_id, None)

    @Logger.io
    async def insert_if_absent(self, *, ticket: QueueTicket) -> bool:
        if ticket.id in self._tickets:
            return False
        self._tickets[ticket.id] = ticket.copy()
        return True
