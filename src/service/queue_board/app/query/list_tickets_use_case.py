from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import (
    QueueTicket,
    newest_first,
)
from src.service.queue_board.domain.enum.ticket_status import (
    TicketStatus,
    TicketStatusSchema,
)


class ListTicketsUseCase:
    def __init__(self, *, ticket_repo: ITicketRepo, status_schema: TicketStatusSchema) -> None:
        self.ticket_repo = ticket_repo
        self.status_schema = status_schema

    @classmethod
    @inject
    def depends(
        cls,
        ticket_repo: ITicketRepo = Depends(Provide[Container.ticket_repo]),
        status_schema: TicketStatusSchema = Depends(Provide[Container.status_schema]),
    ) -> Self:
        return cls(ticket_repo=ticket_repo, status_schema=status_schema)

    @Logger.io(truncate_content=True)
    async def list_all(self) -> List[QueueTicket]:
        """All live tickets, newest first"""
        return newest_first(await self.ticket_repo.list_all())

    @Logger.io(truncate_content=True)
    async def display_board(self) -> list[tuple[TicketStatus, List[QueueTicket]]]:
        """Live tickets grouped by status in schema order, for the public display"""
        tickets = await self.list_all()
        board = [
            (status, [ticket for ticket in tickets if ticket.status == status])
            for status in self.status_schema.statuses
        ]

        stray = [t for t in tickets if t.status not in self.status_schema]
        if stray:
            Logger.base.warning(
                f'⚠️ [DISPLAY] {len(stray)} ticket(s) outside schema '
                f'{self.status_schema.version}: {sorted({t.status.value for t in stray})}'
            )
        return board
