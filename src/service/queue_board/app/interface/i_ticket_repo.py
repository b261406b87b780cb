"""
Ticket Repository Interface

Storage contract shared by every backend (process memory, Kvrocks hash,
SQL table). Lifecycle rules live in the use cases, the repo only stores.

Every method raises BackendUnavailableError when the storage cannot be
reached; none of them may turn a failure into an empty result.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatus


class ITicketRepo(ABC):
    @abstractmethod
    async def list_all(self) -> List[QueueTicket]:
        """All live tickets, in no particular order"""
        pass

    @abstractmethod
    async def get_by_id(self, *, ticket_id: str) -> QueueTicket | None:
        pass

    @abstractmethod
    async def find_by_number(self, *, number: str) -> QueueTicket | None:
        """
        Case-insensitive lookup on number

        Args:
            number: Trimmed ticket number
        """
        pass

    @abstractmethod
    async def insert(self, *, ticket: QueueTicket) -> QueueTicket:
        pass

    @abstractmethod
    async def update_status(self, *, ticket_id: str, status: TicketStatus) -> QueueTicket | None:
        """
        Replace status in place

        Returns:
            Updated ticket, or None if no live ticket has this id
        """
        pass

    @abstractmethod
    async def delete(self, *, ticket_id: str) -> QueueTicket | None:
        """
        Delete ticket

        Returns:
            Full copy of the removed record, or None if it was absent
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, *, ticket: QueueTicket) -> bool:
        """
        Insert unless a live ticket already has the same id

        Returns:
            True if inserted, False on id collision
        """
        pass
