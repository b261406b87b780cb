"""
Ticket repo fixtures, one per store backend

- memory: InMemoryTicketRepoImpl
- kvrocks: KvrocksTicketRepoImpl over a dict-backed hash client
- sql: SqlTicketRepoImpl over a throwaway sqlite file (aiosqlite)
"""

from typing import Any, Dict

import pytest

from src.platform.database.orm_db_setting import Database
from src.service.queue_board.driven_adapter.repo.in_memory_ticket_repo_impl import (
    InMemoryTicketRepoImpl,
)
from src.service.queue_board.driven_adapter.repo.kvrocks_ticket_repo_impl import (
    KvrocksTicketRepoImpl,
)
from src.service.queue_board.driven_adapter.repo.sql_ticket_repo_impl import SqlTicketRepoImpl


class HashOnlyRedis:
    """The hash commands KvrocksTicketRepoImpl uses, with decode_responses=True semantics"""

    def __init__(self) -> None:
        self.hashes: Dict[str, Dict[str, str]] = {}

    @staticmethod
    def _decode(value: Any) -> str:
        return value.decode() if isinstance(value, bytes) else str(value)

    async def hgetall(self, key: str) -> Dict[str, str]:
        return dict(self.hashes.get(key, {}))

    async def hget(self, key: str, field: str) -> str | None:
        return self.hashes.get(key, {}).get(field)

    async def hset(self, key: str, field: str, value: Any) -> int:
        bucket = self.hashes.setdefault(key, {})
        is_new = field not in bucket
        bucket[field] = self._decode(value)
        return int(is_new)

    async def hsetnx(self, key: str, field: str, value: Any) -> int:
        bucket = self.hashes.setdefault(key, {})
        if field in bucket:
            return 0
        bucket[field] = self._decode(value)
        return 1

    async def hdel(self, key: str, *fields: str) -> int:
        bucket = self.hashes.get(key, {})
        return sum(1 for field in fields if bucket.pop(field, None) is not None)


class HashOnlyKvrocksClient:
    def __init__(self, redis: HashOnlyRedis | None = None) -> None:
        self.redis = redis

    def get_client(self) -> HashOnlyRedis:
        if self.redis is None:
            raise RuntimeError('Kvrocks client not initialized.')
        return self.redis

    def key(self, name: str) -> str:
        return f'test_{name}'


@pytest.fixture
def hash_redis():
    return HashOnlyRedis()


@pytest.fixture(params=['memory', 'kvrocks', 'sql'])
async def ticket_repo(request, hash_redis, tmp_path):
    if request.param == 'memory':
        yield InMemoryTicketRepoImpl()
    elif request.param == 'kvrocks':
        yield KvrocksTicketRepoImpl(key='queue_tickets', client=HashOnlyKvrocksClient(hash_redis))
    else:
        database = Database(url=f'sqlite+aiosqlite:///{tmp_path / "queue_board.db"}')
        await database.create_tables()
        yield SqlTicketRepoImpl(session_factory=database.session)
        await database.dispose()
