from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_change_notifier import IChangeNotifier
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatusSchema


class RestoreTicketUseCase:
    """
    Undo a delete by re-inserting the record returned from remove.

    - No-op when a live ticket already has the same id (double undo)
    - No-op when the number was re-added under a new id in the meantime
    - The ticket keeps its original created_at, so it returns to its old place in the list
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
    async def execute(self, *, ticket: QueueTicket) -> bool:
        ticket = QueueTicket(
            id=ticket.id,
            number=QueueTicket.normalize_number(ticket.number),
            status=self.status_schema.validate(ticket.status),
            created_at=ticket.created_at,
        )

        # Number was re-added while the ticket was deleted; keep one live ticket per number
        holder = await self.ticket_repo.find_by_number(number=ticket.number)
        if holder is not None and holder.id != ticket.id:
            Logger.base.info(
                f'↩️ [RESTORE] Number {ticket.number} is held by {holder.id}, skipping {ticket.id}'
            )
            return False

        if not await self.ticket_repo.insert_if_absent(ticket=ticket):
            Logger.base.info(f'↩️ [RESTORE] Ticket {ticket.id} already live, skipping')
            return False

        await self.change_notifier.publish()
        Logger.base.info(f'↩️ [RESTORE] Ticket {ticket.number} ({ticket.id})')
        return True
