# mesa_places/core/places/service.py
"""
Сервис поиска мест.
"""

from __future__ import annotations

from typing import Any

from mesa_places.core.places.models import ExternalPlace
from mesa_places.infra.google_places import GooglePlacesClient


def to_place(result: dict[str, Any]) -> ExternalPlace:
    """Приводит элемент `results` Places API к ExternalPlace."""
    location = (result.get("geometry") or {}).get("location") or {}
    opening_hours = result.get("opening_hours") or {}
    return ExternalPlace(
        id=result.get("place_id"),
        icon=result.get("icon"),
        name=result.get("name"),
        address=result.get("formatted_address"),
        phone=result.get("formatted_phone_number"),
        rating=result.get("rating"),
        website=result.get("website"),
        is_open=opening_hours.get("open_now"),
        lat=location.get("lat"),
        lng=location.get("lng"),
    )


class PlaceService:
    """Поиск мест рядом с точкой."""

    def __init__(self, client: GooglePlacesClient) -> None:
        self.client = client

    async def search(self, place: str, lat: float, lng: float, radius: float) -> list[ExternalPlace]:
        """
        Ищет места по названию.

        Args:
            place: Название места
            lat: Широта
            lng: Долгота
            radius: Радиус в километрах

        Raises:
            PlacesLookupError: Ошибка Places API
        """
        results = await self.client.nearby_search(place, lat, lng, radius)
        return [to_place(result) for result in results]
