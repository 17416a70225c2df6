# tests/infra/test_event_bus.py
"""
Тесты внутрипроцессной шины событий.
"""

from __future__ import annotations

import asyncio

import pytest

from mesa_places.infra.event_bus import DomainEvent, EventBus, get_event_bus


class TestEventBusSingleton:

    def test_get_event_bus_returns_same_instance(self, fresh_event_bus: EventBus) -> None:
        assert get_event_bus() is fresh_event_bus
        assert EventBus() is fresh_event_bus


class TestPublishSubscribe:
    """Доставка событий подписчикам."""

    @pytest.mark.asyncio
    async def test_subscriber_receives_event(self, fresh_event_bus: EventBus) -> None:
        stream = fresh_event_bus.subscribe("avaliationAdded")

        published = await fresh_event_bus.publish("avaliationAdded", {"place_id": "p1"})
        received = await asyncio.wait_for(stream.__anext__(), timeout=1)

        assert isinstance(received, DomainEvent)
        assert received is published
        assert received.event_type == "avaliationAdded"
        assert received.payload == {"place_id": "p1"}
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_all_subscribers_receive_event(self, fresh_event_bus: EventBus) -> None:
        first = fresh_event_bus.subscribe("topic")
        second = fresh_event_bus.subscribe("topic")

        await fresh_event_bus.publish("topic", 1)

        assert (await asyncio.wait_for(first.__anext__(), timeout=1)).payload == 1
        assert (await asyncio.wait_for(second.__anext__(), timeout=1)).payload == 1

    @pytest.mark.asyncio
    async def test_late_subscriber_gets_nothing(self, fresh_event_bus: EventBus) -> None:
        """Событие, опубликованное до подписки, не буферизуется."""
        await fresh_event_bus.publish("topic", "early")
        stream = fresh_event_bus.subscribe("topic")

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.__anext__(), timeout=0.05)

    @pytest.mark.asyncio
    async def test_topics_are_isolated(self, fresh_event_bus: EventBus) -> None:
        stream = fresh_event_bus.subscribe("a")

        await fresh_event_bus.publish("b", "other")

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.__anext__(), timeout=0.05)

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self, fresh_event_bus: EventBus) -> None:
        event = await fresh_event_bus.publish("nobody", {"x": 1})
        assert event.payload == {"x": 1}
        assert fresh_event_bus.subscriber_count("nobody") == 0


class TestEventStream:
    """Жизненный цикл потока подписчика."""

    @pytest.mark.asyncio
    async def test_aclose_detaches(self, fresh_event_bus: EventBus) -> None:
        stream = fresh_event_bus.subscribe("topic")
        assert fresh_event_bus.subscriber_count("topic") == 1

        await stream.aclose()

        assert fresh_event_bus.subscriber_count("topic") == 0
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()

    @pytest.mark.asyncio
    async def test_context_manager_detaches(self, fresh_event_bus: EventBus) -> None:
        async with fresh_event_bus.subscribe("topic"):
            assert fresh_event_bus.subscriber_count("topic") == 1

        assert fresh_event_bus.subscriber_count("topic") == 0

    @pytest.mark.asyncio
    async def test_async_for(self, fresh_event_bus: EventBus) -> None:
        stream = fresh_event_bus.subscribe("topic")
        for i in range(3):
            await fresh_event_bus.publish("topic", i)

        received = []
        async for event in stream:
            received.append(event.payload)
            if len(received) == 3:
                await stream.aclose()

        assert received == [0, 1, 2]
