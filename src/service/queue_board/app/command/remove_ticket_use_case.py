from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_change_notifier import IChangeNotifier
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket


class RemoveTicketUseCase:
    """
    Delete a ticket and hand back its last state for undo.

    A second remove of the same id raises NotFoundError.
    """

    def __init__(self, *, ticket_repo: ITicketRepo, change_notifier: IChangeNotifier) -> None:
        self.ticket_repo = ticket_repo
        self.change_notifier = change_notifier

    @classmethod
    @inject
    def depends(
        cls,
        ticket_repo: ITicketRepo = Depends(Provide[Container.ticket_repo]),
        change_notifier: IChangeNotifier = Depends(Provide[Container.change_notifier]),
    ) -> Self:
        return cls(ticket_repo=ticket_repo, change_notifier=change_notifier)

    @Logger.io
    async def execute(self, *, ticket_id: str) -> QueueTicket:
        deleted = await self.ticket_repo.delete(ticket_id=ticket_id)
        if deleted is None:
            raise NotFoundError(f'Ticket not found with id: {ticket_id}')

        await self.change_notifier.publish()
        Logger.base.info(f'🗑️ [REMOVE] Ticket {deleted.number} ({deleted.id})')
        return deleted
