# mesa_places/infra/event_bus.py
"""
Внутрипроцессная шина событий.
Реализует паттерн Pub/Sub для live-подписок GraphQL.

Доставка at-most-once: событие получают только подписчики, подключённые
в момент публикации. Буферизации для поздних подписчиков и доставки между
процессами нет.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from mesa_places.common.constants import TypeMsg
from mesa_places.common.logger import log_info


@dataclass
class DomainEvent:
    """Событие, передаваемое подписчикам."""
    event_type: str = ""
    payload: Any = None
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )


class EventStream:
    """
    Поток событий одного подписчика.

    Очередь регистрируется в шине при создании потока и снимается при aclose().
    Поддерживает `async for` и `async with`.
    """

    def __init__(self, bus: EventBus, topic: str) -> None:
        self._bus = bus
        self.topic = topic
        self._queue: asyncio.Queue[DomainEvent] = asyncio.Queue()
        self._closed = False
        bus._attach(topic, self._queue)

    def __aiter__(self) -> EventStream:
        return self

    async def __anext__(self) -> DomainEvent:
        if self._closed:
            raise StopAsyncIteration
        return await self._queue.get()

    async def __aenter__(self) -> EventStream:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Отписывается от топика."""
        if not self._closed:
            self._closed = True
            self._bus._detach(self.topic, self._queue)


class EventBus:
    """
    Шина событий в памяти процесса.
    Один экземпляр на процесс (Singleton).
    """

    _instance: EventBus | None = None

    def __new__(cls) -> EventBus:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Инициализация (вызывается только один раз благодаря Singleton)."""
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._subscribers: dict[str, list[asyncio.Queue[DomainEvent]]] = {}

    def subscriber_count(self, topic: str) -> int:
        """Количество активных подписчиков топика."""
        return len(self._subscribers.get(topic, []))

    def subscribe(self, topic: str) -> EventStream:
        """
        Подписывается на топик.

        Args:
            topic: Имя топика

        Returns:
            Поток событий (async iterator)
        """
        return EventStream(self, topic)

    async def publish(self, topic: str, payload: Any) -> DomainEvent:
        """
        Публикует событие всем текущим подписчикам топика.

        Args:
            topic: Имя топика
            payload: Полезная нагрузка

        Returns:
            Опубликованное событие
        """
        event = DomainEvent(event_type=topic, payload=payload)
        queues = list(self._subscribers.get(topic, []))
        for queue in queues:
            queue.put_nowait(event)

        await log_info(
            f"Событие опубликовано: {topic}",
            type_msg=TypeMsg.DEBUG,
            extra={"subscribers": len(queues)},
        )
        return event

    def _attach(self, topic: str, queue: asyncio.Queue[DomainEvent]) -> None:
        self._subscribers.setdefault(topic, []).append(queue)

    def _detach(self, topic: str, queue: asyncio.Queue[DomainEvent]) -> None:
        queues = self._subscribers.get(topic, [])
        if queue in queues:
            queues.remove(queue)
        if not queues:
            self._subscribers.pop(topic, None)


# Глобальный экземпляр
_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Возвращает глобальный экземпляр EventBus."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus
