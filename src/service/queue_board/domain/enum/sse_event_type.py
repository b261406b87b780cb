"""
SSE Event Type Enum - Domain Value Object

Change events carry no payload; clients re-fetch the list on every event.
"""

from enum import Enum


class SseEventType(Enum):
    CONNECTED = 'connected'
    TICKETS_UPDATED = 'tickets_updated'
