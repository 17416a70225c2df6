# mesa_places/core/users/models.py
"""
Модели данных пользователей.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """Модель пользователя."""

    id: int = Field(..., description="ID пользователя")
    email: str = Field(..., description="Email (уникальный)")
    name: Optional[str] = Field(None, description="Отображаемое имя")
    password: str = Field(..., description="bcrypt-хэш пароля или маркер OAuth")
    profile_img: Optional[str] = Field(None, description="URL аватара (gravatar)")
    created_at: Optional[datetime] = Field(None, description="Дата регистрации")
    updated_at: Optional[datetime] = Field(None, description="Дата обновления")

    model_config = {"from_attributes": True}


class Favorite(BaseModel):
    """Избранное место пользователя."""

    user_id: int = Field(..., description="ID пользователя (FK)")
    place_id: str = Field(..., description="ID места в Google Places")
    place_name: Optional[str] = Field(None, description="Название места")
    place_icon: Optional[str] = Field(None, description="URL иконки места")

    model_config = {"from_attributes": True}


class UserCreateDTO(BaseModel):
    """DTO для создания пользователя."""

    email: str
    name: Optional[str] = None
    password: str
    profile_img: Optional[str] = None


class AuthPayload(BaseModel):
    """Профиль пользователя со свежим токеном."""

    email: str
    name: Optional[str] = None
    profile_img: Optional[str] = None
    token: str
    favorites: list[Favorite] = Field(default_factory=list)
