from contextlib import asynccontextmanager
from datetime import timezone
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import BackendUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatus
from src.service.queue_board.driven_adapter.model.queue_ticket_model import QueueTicketModel


class SqlTicketRepoImpl(ITicketRepo):
    """Relational ticket table, one row per live ticket"""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.session_factory() as session:
                yield session
        except IntegrityError:
            raise
        except (SQLAlchemyError, OSError) as e:
            raise BackendUnavailableError(f'Ticket storage is unavailable: {e}') from e

    @Logger.io
    async def list_all(self) -> List[QueueTicket]:
        async with self._session() as session:
            result = await session.execute(
                select(QueueTicketModel).order_by(
                    QueueTicketModel.created_at.desc(), QueueTicketModel.id.desc()
                )
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, ticket_id: str) -> QueueTicket | None:
        async with self._session() as session:
            model = await session.get(QueueTicketModel, ticket_id)
            return self._model_to_entity(model) if model else None

    @Logger.io
    async def find_by_number(self, *, number: str) -> QueueTicket | None:
        async with self._session() as session:
            result = await session.execute(
                select(QueueTicketModel)
                .where(QueueTicketModel.number_key == QueueTicket.number_key(number))
                .order_by(QueueTicketModel.created_at.desc())
                .limit(1)
            )
            model = result.scalar_one_or_none()
            return self._model_to_entity(model) if model else None

    @Logger.io
    async def insert(self, *, ticket: QueueTicket) -> QueueTicket:
        async with self._session() as session:
            session.add(self._entity_to_model(ticket))
            await session.commit()
        return ticket

    @Logger.io
    async def update_status(self, *, ticket_id: str, status: TicketStatus) -> QueueTicket | None:
        async with self._session() as session:
            model = await session.get(QueueTicketModel, ticket_id)
            if model is None:
                return None
            model.status = status.value
            await session.commit()
            return self._model_to_entity(model)

    @Logger.io
    async def delete(self, *, ticket_id: str) -> QueueTicket | None:
        async with self._session() as session:
            model = await session.get(QueueTicketModel, ticket_id)
            if model is None:
                return None
            deleted = self._model_to_entity(model)
            result = await session.execute(
                delete(QueueTicketModel).where(QueueTicketModel.id == ticket_id)
            )
            await session.commit()
            # Another writer deleted it between SELECT and DELETE
            return deleted if result.rowcount else None

    @Logger.io
    async def insert_if_absent(self, *, ticket: QueueTicket) -> bool:
        try:
            async with self._session() as session:
                if await session.get(QueueTicketModel, ticket.id) is not None:
                    return False
                session.add(self._entity_to_model(ticket))
                await session.commit()
                return True
        except IntegrityError:
            return False

    @staticmethod
    def _entity_to_model(ticket: QueueTicket) -> QueueTicketModel:
        return QueueTicketModel(
            id=ticket.id,
            number=ticket.number,
            number_key=QueueTicket.number_key(ticket.number),
            status=ticket.status.value,
            created_at=ticket.created_at,
        )

    @staticmethod
    def _model_to_entity(model: QueueTicketModel) -> QueueTicket:
        created_at = model.created_at
        if created_at.tzinfo is None:  # sqlite drops the offset
            created_at = created_at.replace(tzinfo=timezone.utc)
        try:
            status = TicketStatus(model.status)
        except ValueError as e:
            raise BackendUnavailableError(
                f'Corrupt ticket record {model.id}: unknown status "{model.status}"'
            ) from e
        return QueueTicket(
            id=model.id,
            number=model.number,
            status=status,
            created_at=created_at,
        )
