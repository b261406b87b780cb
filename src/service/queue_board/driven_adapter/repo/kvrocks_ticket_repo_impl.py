"""
Kvrocks Ticket Repository

All live tickets sit in one hash shared by every process pointing at the
same Kvrocks:

    {prefix}queue_tickets  →  {ticket_id: orjson(record)}

Read/modify/write steps are not wrapped in MULTI; concurrent writers on one
ticket resolve last-writer-wins, which is enough for a single counter.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List

import orjson
from redis.exceptions import RedisError

from src.platform.exception.exceptions import BackendUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import KvrocksClient, kvrocks_client
from src.service.queue_board.app.interface.i_ticket_repo import ITicketRepo
from src.service.queue_board.domain.entity.queue_ticket_entity import QueueTicket
from src.service.queue_board.domain.enum.ticket_status import TicketStatus


class KvrocksTicketRepoImpl(ITicketRepo):
    def __init__(self, *, key: str, client: KvrocksClient = kvrocks_client) -> None:
        self._client = client
        self.key = client.key(key)

    @asynccontextmanager
    async def _redis(self) -> AsyncIterator[Any]:
        try:
            yield self._client.get_client()
        except RuntimeError as e:
            raise BackendUnavailableError(f'Ticket storage is not configured: {e}') from e
        except RedisError as e:
            raise BackendUnavailableError(f'Ticket storage is unavailable: {e}') from e

    @staticmethod
    def _decode(raw: str | bytes) -> QueueTicket:
        # JSONDecodeError and an unknown status are both ValueError
        try:
            return QueueTicket.from_record(orjson.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise BackendUnavailableError(f'Corrupt ticket record in storage: {e}') from e

    @staticmethod
    def _encode(ticket: QueueTicket) -> bytes:
        return orjson.dumps(ticket.to_record())

    @Logger.io
    async def list_all(self) -> List[QueueTicket]:
        async with self._redis() as redis:
            raw_tickets = await redis.hgetall(self.key)
        return [self._decode(raw) for raw in raw_tickets.values()]

    @Logger.io
    async def get_by_id(self, *, ticket_id: str) -> QueueTicket | None:
        async with self._redis() as redis:
            raw = await redis.hget(self.key, ticket_id)
        return self._decode(raw) if raw else None

    @Logger.io
    async def find_by_number(self, *, number: str) -> QueueTicket | None:
        for ticket in await self.list_all():
            if ticket.matches_number(number):
                return ticket
        return None

    @Logger.io
    async def insert(self, *, ticket: QueueTicket) -> QueueTicket:
        async with self._redis() as redis:
            await redis.hset(self.key, ticket.id, self._encode(ticket))
        return ticket

    @Logger.io
    async def update_status(self, *, ticket_id: str, status: TicketStatus) -> QueueTicket | None:
        ticket = await self.get_by_id(ticket_id=ticket_id)
        if ticket is None:
            return None
        ticket.status = status
        async with self._redis() as redis:
            await redis.hset(self.key, ticket.id, self._encode(ticket))
        return ticket

    @Logger.io
    async def delete(self, *, ticket_id: str) -> QueueTicket | None:
        ticket = await self.get_by_id(ticket_id=ticket_id)
        if ticket is None:
            return None
        async with self._redis() as redis:
            removed = await redis.hdel(self.key, ticket_id)
        # Another process deleted it between HGET and HDEL
        return ticket if removed else None

    @Logger.io
    async def insert_if_absent(self, *, ticket: QueueTicket) -> bool:
        async with self._redis() as redis:
            inserted = await redis.hsetnx(self.key, ticket.id, self._encode(ticket))
        return bool(inserted)
