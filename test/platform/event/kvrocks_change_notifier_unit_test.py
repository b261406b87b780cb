"""
Unit tests for KvrocksChangeNotifierImpl

The Kvrocks client is mocked; only the publish path and the handling of
messages read from the channel are exercised.
"""

from unittest.mock import AsyncMock, Mock

import orjson
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.platform.event.kvrocks_change_notifier import KvrocksChangeNotifierImpl


@pytest.fixture
def mock_redis():
    redis = Mock()
    redis.publish = AsyncMock(return_value=1)
    return redis


@pytest.fixture
def mock_kvrocks_client(mock_redis):
    client = Mock()
    client.key = Mock(side_effect=lambda name: f'test_{name}')
    client.get_client = Mock(return_value=mock_redis)
    return client


@pytest.fixture
def notifier(mock_kvrocks_client):
    return KvrocksChangeNotifierImpl(channel='queue_tickets:changed', client=mock_kvrocks_client)


@pytest.mark.unit
class TestKvrocksChangeNotifierPublish:
    @pytest.mark.asyncio
    async def test_publish_notifies_local_listeners_and_channel(self, notifier, mock_redis):
        calls: list[int] = []
        notifier.subscribe(lambda: calls.append(1))

        await notifier.publish()

        assert calls == [1]
        mock_redis.publish.assert_awaited_once()
        channel, payload = mock_redis.publish.await_args.args
        assert channel == 'test_queue_tickets:changed'
        assert orjson.loads(payload) == {'origin': notifier.origin}

    @pytest.mark.asyncio
    async def test_channel_failure_still_notifies_local_listeners(self, notifier, mock_redis):
        # Given: Kvrocks is down
        mock_redis.publish.side_effect = RedisConnectionError('connection refused')
        calls: list[int] = []
        notifier.subscribe(lambda: calls.append(1))

        # When: publish does not raise
        await notifier.publish()

        # Then
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_uninitialized_client_does_not_raise(self, notifier, mock_kvrocks_client):
        mock_kvrocks_client.get_client.side_effect = RuntimeError('not initialized')

        await notifier.publish()


@pytest.mark.unit
class TestKvrocksChangeNotifierHandleMessage:
    def test_signal_from_other_process_fans_out(self, notifier):
        calls: list[int] = []
        notifier.subscribe(lambda: calls.append(1))

        handled = notifier.handle_message(orjson.dumps({'origin': 'other-process'}))

        assert handled is True
        assert calls == [1]

    def test_own_signal_is_ignored(self, notifier):
        calls: list[int] = []
        notifier.subscribe(lambda: calls.append(1))

        handled = notifier.handle_message(orjson.dumps({'origin': notifier.origin}).decode())

        assert handled is False
        assert calls == []

    @pytest.mark.parametrize('data', ['not json', '[1, 2]'])
    def test_malformed_message_is_ignored(self, notifier, data):
        calls: list[int] = []
        notifier.subscribe(lambda: calls.append(1))

        assert notifier.handle_message(data) is False
        assert calls == []

    def test_unsubscribe_via_notifier(self, notifier):
        calls: list[int] = []
        unsubscribe = notifier.subscribe(lambda: calls.append(1))

        unsubscribe()
        unsubscribe()
        notifier.handle_message(orjson.dumps({'origin': 'other-process'}))

        assert calls == []
