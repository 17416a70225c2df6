# mesa_places/core/reviews/models.py
"""
Модели отзывов.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Avaliation(BaseModel):
    """Отзыв пользователя о месте (одна пара пользователь/место)."""

    id: Optional[int] = None
    user_email: str = Field(..., description="Email автора (FK users.email)")
    place_id: str = Field(..., description="ID места в Google Places")
    rating: float = Field(..., description="Оценка")
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class Review(BaseModel):
    """Отзыв вместе с данными автора."""

    name: Optional[str] = None
    email: str
    profile_img: Optional[str] = None
    place_id: str
    rating: float
    comment: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def _numeric_to_float(cls, value):
        # NUMERIC из asyncpg приходит как Decimal
        if isinstance(value, Decimal):
            return float(value)
        return value
