"""Queue Board Domain Enums"""

from src.service.queue_board.domain.enum.sse_event_type import SseEventType
from src.service.queue_board.domain.enum.ticket_status import (
    STATUS_SCHEMAS,
    THREE_STAGE_SCHEMA,
    TWO_STAGE_SCHEMA,
    TicketStatus,
    TicketStatusSchema,
    get_status_schema,
)

__all__ = [
    'STATUS_SCHEMAS',
    'THREE_STAGE_SCHEMA',
    'TWO_STAGE_SCHEMA',
    'SseEventType',
    'TicketStatus',
    'TicketStatusSchema',
    'get_status_schema',
]
