"""
Ticket Status - Domain Value Objects

Two generations of the counter workflow exist:
- v1: waiting → calling → serving
- v2: waiting → called

A running service picks exactly one schema at startup. Values from another
generation are rejected, never coerced.
"""

from enum import StrEnum

import attrs

from src.platform.exception.exceptions import InvalidStatusError


class TicketStatus(StrEnum):
    WAITING = 'waiting'
    CALLING = 'calling'
    SERVING = 'serving'
    CALLED = 'called'


@attrs.frozen
class TicketStatusSchema:
    version: str
    statuses: tuple[TicketStatus, ...]
    superseded: tuple[TicketStatus, ...] = ()

    @property
    def initial(self) -> TicketStatus:
        return self.statuses[0]

    def __contains__(self, value: object) -> bool:
        return value in self.statuses

    def validate(self, value: str | None) -> TicketStatus:
        if value in self.superseded:
            allowed = ' or '.join(f'"{s}"' for s in self.statuses)
            raise InvalidStatusError(
                f'Invalid status "{value}". The status "{value}" is no longer supported. '
                f'Use {allowed} only.'
            )
        if not value or value not in self.statuses:
            raise InvalidStatusError(
                f'Invalid status. Must be one of: {", ".join(self.statuses)}. Received: "{value}"'
            )
        return TicketStatus(value)


THREE_STAGE_SCHEMA = TicketStatusSchema(
    version='v1',
    statuses=(TicketStatus.WAITING, TicketStatus.CALLING, TicketStatus.SERVING),
)

TWO_STAGE_SCHEMA = TicketStatusSchema(
    version='v2',
    statuses=(TicketStatus.WAITING, TicketStatus.CALLED),
    superseded=(TicketStatus.CALLING, TicketStatus.SERVING),
)

STATUS_SCHEMAS: dict[str, TicketStatusSchema] = {
    schema.version: schema for schema in (THREE_STAGE_SCHEMA, TWO_STAGE_SCHEMA)
}


def get_status_schema(version: str) -> TicketStatusSchema:
    try:
        return STATUS_SCHEMAS[version]
    except KeyError:
        raise ValueError(
            f'Unknown ticket status schema: {version}. Must be one of: {", ".join(STATUS_SCHEMAS)}'
        ) from None
