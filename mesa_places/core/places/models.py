# mesa_places/core/places/models.py
"""
Модель места, возвращаемого клиенту.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ExternalPlace(BaseModel):
    """Место из Google Places, приведённое к форме API."""

    id: Optional[str] = None
    icon: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    rating: Optional[float] = None
    website: Optional[str] = None
    is_open: Optional[bool] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
