"""
Unit tests for InMemoryChangeNotifierImpl

Process-local reload signals: every subscriber is called once per publish,
unsubscribe handles are idempotent and a failing listener does not block
the others.
"""

import pytest

from src.platform.event.in_memory_change_notifier import InMemoryChangeNotifierImpl


@pytest.mark.unit
class TestInMemoryChangeNotifier:
    @pytest.fixture
    def notifier(self):
        return InMemoryChangeNotifierImpl()

    @pytest.mark.asyncio
    async def test_publish_calls_every_listener_once(self, notifier):
        calls: list[str] = []
        notifier.subscribe(lambda: calls.append('a'))
        notifier.subscribe(lambda: calls.append('b'))

        await notifier.publish()

        assert sorted(calls) == ['a', 'b']

    @pytest.mark.asyncio
    async def test_publish_without_listeners(self, notifier):
        await notifier.publish()

        assert notifier.fan_out() == 0

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_delivery(self, notifier):
        calls: list[int] = []
        unsubscribe = notifier.subscribe(lambda: calls.append(1))

        unsubscribe()
        await notifier.publish()

        assert calls == []
        assert notifier.listener_count == 0

    @pytest.mark.asyncio
    async def test_unsubscribe_is_idempotent(self, notifier):
        calls: list[str] = []
        unsubscribe_a = notifier.subscribe(lambda: calls.append('a'))
        notifier.subscribe(lambda: calls.append('b'))

        # When: the same handle is called twice
        unsubscribe_a()
        unsubscribe_a()
        await notifier.publish()

        # Then: the other subscription is untouched
        assert calls == ['b']

    @pytest.mark.asyncio
    async def test_same_callable_subscribed_twice_is_independent(self, notifier):
        calls: list[int] = []

        def listener() -> None:
            calls.append(1)

        unsubscribe_first = notifier.subscribe(listener)
        notifier.subscribe(listener)

        await notifier.publish()
        unsubscribe_first()
        await notifier.publish()

        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_block_others(self, notifier):
        calls: list[str] = []

        def broken() -> None:
            raise RuntimeError('display tab closed')

        notifier.subscribe(broken)
        notifier.subscribe(lambda: calls.append('ok'))

        await notifier.publish()

        assert calls == ['ok']
        assert notifier.fan_out() == 1

    @pytest.mark.asyncio
    async def test_listener_may_unsubscribe_itself(self, notifier):
        calls: list[int] = []
        handles = {}

        def once() -> None:
            calls.append(1)
            handles['self']()

        handles['self'] = notifier.subscribe(once)

        await notifier.publish()
        await notifier.publish()

        assert calls == [1]
