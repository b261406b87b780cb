"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html

Composition root: the backends are chosen once from Settings when the
container first resolves them. One store and one notifier per process.
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.event.in_memory_change_notifier import InMemoryChangeNotifierImpl
from src.platform.event.kvrocks_change_notifier import KvrocksChangeNotifierImpl
from src.service.queue_board.domain.enum.ticket_status import get_status_schema
from src.service.queue_board.driven_adapter.repo.in_memory_ticket_repo_impl import (
    InMemoryTicketRepoImpl,
)
from src.service.queue_board.driven_adapter.repo.kvrocks_ticket_repo_impl import (
    KvrocksTicketRepoImpl,
)
from src.service.queue_board.driven_adapter.repo.sql_ticket_repo_impl import SqlTicketRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (only touched when TICKET_STORE_BACKEND=sql)
    database = providers.Singleton(Database)

    # Status schema generation (v1: waiting/calling/serving, v2: waiting/called)
    status_schema = providers.Singleton(
        get_status_schema, version=config_service.provided.TICKET_STATUS_SCHEMA
    )

    # Ticket store backend
    ticket_repo = providers.Selector(
        config_service.provided.TICKET_STORE_BACKEND,
        memory=providers.Singleton(InMemoryTicketRepoImpl),
        kvrocks=providers.Singleton(
            KvrocksTicketRepoImpl, key=config_service.provided.QUEUE_TICKET_KEY
        ),
        sql=providers.Singleton(SqlTicketRepoImpl, session_factory=database.provided.session),
    )

    # Change notifier (memory: single process, kvrocks: pub/sub across processes)
    change_notifier = providers.Selector(
        config_service.provided.CHANGE_NOTIFIER_BACKEND,
        memory=providers.Singleton(InMemoryChangeNotifierImpl),
        kvrocks=providers.Singleton(
            KvrocksChangeNotifierImpl, channel=config_service.provided.QUEUE_TICKET_CHANNEL
        ),
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
