# mesa_places/infra/google_places.py
"""
Клиент Google Places API (nearby search).
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import aiohttp

from mesa_places.common.errors import PlacesLookupError
from mesa_places.common.logger import log_debug, log_warning
from mesa_places.infra.http_session import get_http_session

NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

_ACCEPTED_STATUSES = {"OK", "ZERO_RESULTS"}


class GooglePlacesClient:
    """Запросы к Places API с фиксированным ключом и языком ответа."""

    def __init__(
        self,
        api_key: str,
        language: str = "pt-BR",
        session_getter: Callable[[], Awaitable[aiohttp.ClientSession]] = get_http_session,
    ) -> None:
        self._api_key = api_key
        self._language = language
        self._session_getter = session_getter

    def build_params(self, name: str, lat: float, lng: float, radius_km: float) -> dict[str, str]:
        """
        Формирует query-параметры nearby search.

        Args:
            name: Название места
            lat: Широта центра поиска
            lng: Долгота центра поиска
            radius_km: Радиус поиска в километрах

        Returns:
            Параметры запроса (радиус в метрах)
        """
        return {
            "location": f"{lat},{lng}",
            "key": self._api_key,
            "radius": str(int(radius_km * 1000)),
            "name": name,
            "language": self._language,
        }

    async def nearby_search(self, name: str, lat: float, lng: float, radius_km: float) -> list[dict[str, Any]]:
        """
        Ищет места рядом с точкой.

        Returns:
            Сырые элементы `results` из ответа API

        Raises:
            PlacesLookupError: HTTP-ошибка или неожиданный статус API
        """
        params = self.build_params(name, lat, lng, radius_km)
        await log_debug("Запрос nearby search", extra={"name": name, "location": params["location"]})

        try:
            session = await self._session_getter()
            async with session.get(NEARBY_SEARCH_URL, params=params) as response:
                response.raise_for_status()
                payload = await response.json()
        except aiohttp.ClientError as error:
            await log_warning(f"Запрос к Places API завершился ошибкой: {error}")
            raise PlacesLookupError(str(error)) from error

        status = payload.get("status")
        if status not in _ACCEPTED_STATUSES:
            await log_warning(
                "Получен неожиданный статус Places API",
                extra={"status": status, "error_message": payload.get("error_message")},
            )
            raise PlacesLookupError(f"Places API status: {status}")

        return payload.get("results") or []
