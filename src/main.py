"""
Production FastAPI Application

Run with: granian src.main:app --interface asgi --host 0.0.0.0 --port 8100
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.event.kvrocks_change_notifier import KvrocksChangeNotifierImpl
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info(
        f'🚀 [Queue Board] Starting up (store={settings.TICKET_STORE_BACKEND}, '
        f'notifier={settings.CHANGE_NOTIFIER_BACKEND}, schema={settings.TICKET_STATUS_SCHEMA})'
    )

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Queue Board] Dependency injection wired')

    if settings.uses_kvrocks:
        await kvrocks_client.initialize()
        Logger.base.info('📡 [Queue Board] Kvrocks initialized')

    if settings.TICKET_STORE_BACKEND == 'sql' and settings.DB_CREATE_TABLES:
        await container.database().create_tables()
        Logger.base.info('🗄️  [Queue Board] Database tables ready')

    async with anyio.create_task_group() as tg:
        change_notifier = container.change_notifier()
        if isinstance(change_notifier, KvrocksChangeNotifierImpl):
            await change_notifier.start(task_group=tg)

        Logger.base.info('✅ [Queue Board] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Queue Board] Shutting down...')
        tg.cancel_scope.cancel()

    if settings.TICKET_STORE_BACKEND == 'sql':
        await container.database().dispose()
        Logger.base.info('🗄️  [Queue Board] Database engine disposed')

    if settings.uses_kvrocks:
        await kvrocks_client.disconnect()
        Logger.base.info('📡 [Queue Board] Kvrocks disconnected')

    container.unwire()

    Logger.base.info('👋 [Queue Board] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
