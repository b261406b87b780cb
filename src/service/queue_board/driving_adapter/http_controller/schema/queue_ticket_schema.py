from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel

from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatus


class TicketCreateRequest(BaseModel):
    number: str

    class Config:
        json_schema_extra = {'example': {'number': 'A12'}}


class TicketStatusUpdateRequest(BaseModel):
    status: str

    class Config:
        json_schema_extra = {'example': {'status': 'called'}}


class TicketResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'number': 'A12',
                'status': 'waiting',
                'created_at': '2025-01-10T10:30:00+00:00',
            }
        },
    }

    id: str
    number: str
    status: TicketStatus
    created_at: datetime

    @classmethod
    def from_entity(cls, ticket: QueueTicket) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            number=ticket.number,
            status=ticket.status,
            created_at=ticket.created_at,
        )


class TicketRestoreRequest(TicketResponse):
    """The `deleted` record from DELETE, sent back unchanged"""

    status: str  # type: ignore[assignment]

    def to_entity(self) -> QueueTicket:
        created_at = self.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        # status stays raw here, RestoreTicketUseCase validates it against the active schema
        return QueueTicket(
            id=self.id,
            number=self.number,
            status=self.status,  # type: ignore[arg-type]
            created_at=created_at,
        )


class AddTicketResponse(BaseModel):
    ticket: TicketResponse
    is_existing: bool


class DeleteTicketResponse(BaseModel):
    success: bool = True
    deleted: TicketResponse


class RestoreTicketResponse(BaseModel):
    restored: bool


class StatusSchemaResponse(BaseModel):
    version: str
    statuses: List[TicketStatus]
    initial: TicketStatus


class DisplayGroupResponse(BaseModel):
    status: TicketStatus
    tickets: List[TicketResponse]


class DisplayBoardResponse(BaseModel):
    schema_version: str
    statuses: List[TicketStatus]
    groups: List[DisplayGroupResponse]
    poll_interval_ms: int
