"""
Kvrocks Pub/Sub Change Notifier

Cross-process change notification. Every process fans out to its own
listeners immediately and publishes a reload signal on the shared channel;
a background subscriber re-fans-out signals that came from other processes.

Channel payload: {"origin": <notifier instance id>}
"""

import contextlib

import anyio
from anyio.abc import TaskGroup
import orjson
from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError
import uuid_utils

from src.platform.event.in_memory_change_notifier import InMemoryChangeNotifierImpl
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import KvrocksClient, kvrocks_client
from src.service.queue_board.app.interface.i_change_notifier import (
    ChangeListener,
    Unsubscribe,
)


class KvrocksChangeNotifierImpl:
    def __init__(
        self,
        *,
        channel: str,
        client: KvrocksClient = kvrocks_client,
        local: InMemoryChangeNotifierImpl | None = None,
        reconnect_delay: float = 5.0,
    ) -> None:
        self.channel = client.key(channel)
        self.origin = str(uuid_utils.uuid7())
        self._client = client
        self._local = local or InMemoryChangeNotifierImpl()
        self._reconnect_delay = reconnect_delay
        self._pubsub_client: AsyncRedis | None = None

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        return self._local.subscribe(listener)

    async def publish(self) -> None:
        self._local.fan_out()
        try:
            await self._client.get_client().publish(
                self.channel, orjson.dumps({'origin': self.origin})
            )
        except (RedisError, RuntimeError) as e:
            # Mutation is already committed; remote displays catch up by polling
            Logger.base.warning(f'⚠️ [NOTIFIER] Publish to {self.channel} failed: {e}')

    async def start(self, *, task_group: TaskGroup) -> None:
        """Start the cross-process subscriber in the app lifespan task group"""
        task_group.start_soon(self._subscribe_loop)
        Logger.base.info(f'🔔 [NOTIFIER] Listening on {self.channel}')

    async def _subscribe_loop(self) -> None:
        """Main subscription loop with automatic reconnection"""
        while True:
            try:
                if self._pubsub_client is None:
                    self._pubsub_client = await self._client.create_pubsub_client()

                pubsub = self._pubsub_client.pubsub()
                try:
                    await pubsub.subscribe(self.channel)
                    Logger.base.info(f'📡 [NOTIFIER] Subscribed to {self.channel}')

                    async for message in pubsub.listen():
                        if message['type'] == 'message':
                            self.handle_message(message['data'])
                finally:
                    await pubsub.unsubscribe(self.channel)
                    await pubsub.aclose()

            except (RedisError, OSError) as e:
                Logger.base.error(f'❌ [NOTIFIER] Subscriber error: {e}')

                if self._pubsub_client:
                    with contextlib.suppress(RedisError, OSError):
                        await self._pubsub_client.aclose()
                    self._pubsub_client = None

                Logger.base.info(f'🔄 [NOTIFIER] Reconnecting in {self._reconnect_delay}s...')
                await anyio.sleep(self._reconnect_delay)

    def handle_message(self, data: bytes | str) -> bool:
        """Fan out a signal from another process; own signals were delivered on publish"""
        try:
            origin = orjson.loads(data).get('origin')
        except (orjson.JSONDecodeError, AttributeError) as e:
            Logger.base.warning(f'⚠️ [NOTIFIER] Ignoring malformed message: {e}')
            return False

        if origin == self.origin:
            return False
        self._local.fan_out()
        return True
