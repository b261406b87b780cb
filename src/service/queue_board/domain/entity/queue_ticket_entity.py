from datetime import datetime, timezone
from typing import Any, Self

import attrs
import uuid_utils

from src.platform.exception.exceptions import InvalidInputError
from src.service.queue_board.domain.enum.ticket_status import TicketStatus


@attrs.define
class QueueTicket:
    id: str
    number: str
    status: TicketStatus
    created_at: datetime

    @classmethod
    def create(cls, *, number: str, status: TicketStatus) -> Self:
        return cls(
            id=str(uuid_utils.uuid7()),
            number=cls.normalize_number(number),
            status=status,
            created_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def normalize_number(number: str | None) -> str:
        trimmed = (number or '').strip()
        if not trimmed:
            raise InvalidInputError('number is required')
        return trimmed

    @staticmethod
    def number_key(number: str) -> str:
        """Case-insensitive de-duplication key"""
        return number.strip().lower()

    def matches_number(self, number: str) -> bool:
        return self.number_key(self.number) == self.number_key(number)

    def copy(self) -> 'QueueTicket':
        return attrs.evolve(self)

    def sort_key(self) -> tuple[datetime, str]:
        # UUIDv7 ids are time ordered, so id breaks created_at ties by insertion order
        return (self.created_at, self.id)

    def to_record(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'number': self.number,
            'status': self.status.value,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        created_at = record['created_at']
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=str(record['id']),
            number=record['number'],
            status=TicketStatus(record['status']),
            created_at=created_at,
        )


def newest_first(tickets: list[QueueTicket]) -> list[QueueTicket]:
    return sorted(tickets, key=QueueTicket.sort_key, reverse=True)
