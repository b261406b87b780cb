from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_change_notifier import IChangeNotifier
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatusSchema


class UpdateTicketStatusUseCase:
    """
    Replace a ticket's status.

    Any status of the active schema may follow any other; the counter staff
    decide the order. Status is validated before the ticket is looked up.
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
    async def execute(self, *, ticket_id: str, status: str) -> QueueTicket:
        new_status = self.status_schema.validate(status)

        ticket = await self.ticket_repo.update_status(ticket_id=ticket_id, status=new_status)
        if ticket is None:
            raise NotFoundError(f'Ticket not found with id: {ticket_id}')

        await self.change_notifier.publish()
        Logger.base.info(f'📣 [STATUS] Ticket {ticket.number} → {new_status}')
        return ticket
