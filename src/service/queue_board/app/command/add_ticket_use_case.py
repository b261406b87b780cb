from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_change_notifier import IChangeNotifier
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatusSchema


class AddTicketUseCase:
    """
    Add a number to the queue, or put it back to waiting.

    Flow:
    1. Trim number, reject empty
    2. Case-insensitive lookup among live tickets
       - found: reset status to the schema's initial status (reactivation)
       - not found: create a new ticket in the initial status
    3. Persist, then notify listeners

    Two concurrent adds of one number may both miss the lookup and both
    insert; accepted for a counter where one person types numbers.
    """

    def __init__(
        self,
        *,
        ticket_repo: ITicketRepo,
        change_notifier: IChangeNotifier,
        status_schema: TicketStatusSchema,
    ) -> None:
        self.ticket_repo = ticket_repo
        self.change_notifier = change_notifier
        self.status_schema = status_schema

    @classmethod
    @inject
    def depends(
        cls,
        ticket_repo: ITicketRepo = Depends(Provide[Container.ticket_repo]),
        change_notifier: IChangeNotifier = Depends(Provide[Container.change_notifier]),
        status_schema: TicketStatusSchema = Depends(Provide[Container.status_schema]),
    ) -> Self:
        return cls(
            ticket_repo=ticket_repo,
            change_notifier=change_notifier,
            status_schema=status_schema,
        )

    @Logger.io
    async def execute(self, *, number: str) -> tuple[QueueTicket, bool]:
        trimmed = QueueTicket.normalize_number(number)

        existing = await self.ticket_repo.find_by_number(number=trimmed)
        if existing:
            ticket = await self.ticket_repo.update_status(
                ticket_id=existing.id, status=self.status_schema.initial
            )
            # Deleted between lookup and update: fall through and create a fresh one
            if ticket is not None:
                await self.change_notifier.publish()
                Logger.base.info(f'🔁 [ADD] Reactivated ticket {ticket.number} ({ticket.id})')
                return ticket, True

        ticket = QueueTicket.create(number=trimmed, status=self.status_schema.initial)
        await self.ticket_repo.insert(ticket=ticket)
        await self.change_notifier.publish()

        Logger.base.info(f'🎫 [ADD] Created ticket {ticket.number} ({ticket.id})')
        return ticket, False
