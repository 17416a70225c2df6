# mesa_places/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины — config/config.json.
Секретные данные переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Загружает config.json и возвращает словарь."""
    config_path = get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "mesa_places"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    @property
    def is_dev(self) -> bool:
        """Режим разработки (аналог NODE_ENV=dev)."""
        return self.ENVIRONMENT == "dev"


class ServerSettings(BaseModel):
    """Настройки HTTP/GraphQL шлюза."""
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ORIGIN: str = "http://localhost:3000"
    GRAPHQL_PATH: str = "/graphql"
    SUBSCRIPTIONS_PATH: str = "/subscriptions"


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "DEBUG"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10485760


class GoogleMapsSettings(BaseModel):
    """Настройки Google Places API."""
    GOOGLE_MAPS_API_KEY: str = ""
    PLACES_LANGUAGE: str = "pt-BR"

    @field_validator("GOOGLE_MAPS_API_KEY", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает API ключ из переменных окружения."""
        if not v:
            return os.getenv("GOOGLE_MAPS_API_KEY", "")
        return v


class FacebookSettings(BaseModel):
    """Настройки Facebook Graph API."""
    FACEBOOK_GRAPH_URL: str = "https://graph.facebook.com"


class MailSettings(BaseModel):
    """Настройки почтового релея."""
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_USER: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_SENDER_NAME: str = "Mesa places"
    CLIENT_URL: str = "https://mesa-places-client.herokuapp.com"
    LOGO_URL: str = "https://mesa-places-client.herokuapp.com/img/logo.0750b83f.png"

    @field_validator("MAIL_USER", "MAIL_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str, info) -> str:
        """Получает учётные данные почты из переменных окружения."""
        if not v:
            return os.getenv(info.field_name, "")
        return v


class AuthenticationSettings(BaseModel):
    """Настройки подписи токенов."""
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION: int = 604800
    PASSWORD_RESET_EXPIRATION: int = 300

    @field_validator("JWT_SECRET", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает секрет из переменных окружения."""
        if not v:
            return os.getenv("JWT_SECRET", "")
        return v


class DatabaseSettings(BaseModel):
    """Настройки PostgreSQL."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "mesa_places"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 2
    DB_MAX_POOL_SIZE: int = 10
    DB_COMMAND_TIMEOUT: int = 60
    DB_SYNC_FORCE: bool = True

    @field_validator("DB_PASSWORD", mode="before")
    @classmethod
    def get_from_env(cls, v: str) -> str:
        """Получает пароль из переменных окружения."""
        if not v:
            return os.getenv("DB_PASSWORD", "")
        return v

    @property
    def dsn(self) -> str:
        """Возвращает DSN для подключения к PostgreSQL."""
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    system: SystemSettings = Field(default_factory=SystemSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    google_maps: GoogleMapsSettings = Field(default_factory=GoogleMapsSettings)
    facebook: FacebookSettings = Field(default_factory=FacebookSettings)
    mail: MailSettings = Field(default_factory=MailSettings)
    authentication: AuthenticationSettings = Field(default_factory=AuthenticationSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @classmethod
    def from_config_json(cls) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Секреты переопределяются из переменных окружения.
        """
        config_data = load_config_json()

        # Фильтруем комментарии (ключи, начинающиеся с _comment_)
        data = {k: v for k, v in config_data.items() if not k.startswith("_comment_")}

        return cls(
            system=SystemSettings(
                PROJECT_NAME=data.get("PROJECT_NAME", "mesa_places"),
                VERSION=data.get("VERSION", "1.0.0"),
                DEBUG=data.get("DEBUG", True),
                ENVIRONMENT=os.getenv("ENVIRONMENT", data.get("ENVIRONMENT", "development")),
            ),
            server=ServerSettings(
                HOST=os.getenv("HOST", data.get("HOST", "0.0.0.0")),
                PORT=int(os.getenv("PORT", data.get("PORT", 3001))),
                CORS_ORIGIN=os.getenv("CORS_ORIGIN", data.get("CORS_ORIGIN", "http://localhost:3000")),
                GRAPHQL_PATH=data.get("GRAPHQL_PATH", "/graphql"),
                SUBSCRIPTIONS_PATH=data.get("SUBSCRIPTIONS_PATH", "/subscriptions"),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=data.get("LOG_LEVEL", "DEBUG"),
                LOG_TO_FILE=data.get("LOG_TO_FILE", False),
                LOG_FILE_PATH=data.get("LOG_FILE_PATH", "logs/app.log"),
                LOG_FORMAT=data.get("LOG_FORMAT", "colored"),
                LOG_MAX_BYTES=data.get("LOG_MAX_BYTES", 10485760),
            ),
            google_maps=GoogleMapsSettings(
                GOOGLE_MAPS_API_KEY=os.getenv("GOOGLE_MAPS_API_KEY", data.get("GOOGLE_MAPS_API_KEY", "")),
                PLACES_LANGUAGE=data.get("PLACES_LANGUAGE", "pt-BR"),
            ),
            facebook=FacebookSettings(
                FACEBOOK_GRAPH_URL=data.get("FACEBOOK_GRAPH_URL", "https://graph.facebook.com"),
            ),
            mail=MailSettings(
                MAIL_HOST=data.get("MAIL_HOST", "smtp.gmail.com"),
                MAIL_PORT=data.get("MAIL_PORT", 587),
                MAIL_USER=os.getenv("MAIL_USER", data.get("MAIL_USER", "")),
                MAIL_PASSWORD=os.getenv("MAIL_PASSWORD", data.get("MAIL_PASSWORD", "")),
                MAIL_SENDER_NAME=data.get("MAIL_SENDER_NAME", "Mesa places"),
                CLIENT_URL=data.get("CLIENT_URL", "https://mesa-places-client.herokuapp.com"),
                LOGO_URL=data.get("LOGO_URL", "https://mesa-places-client.herokuapp.com/img/logo.0750b83f.png"),
            ),
            authentication=AuthenticationSettings(
                JWT_SECRET=os.getenv("JWT_SECRET", data.get("JWT_SECRET", "")),
                JWT_ALGORITHM=data.get("JWT_ALGORITHM", "HS256"),
                JWT_EXPIRATION=int(os.getenv("JWT_EXPIRATION", data.get("JWT_EXPIRATION", 604800))),
                PASSWORD_RESET_EXPIRATION=data.get("PASSWORD_RESET_EXPIRATION", 300),
            ),
            database=DatabaseSettings(
                DB_HOST=os.getenv("DB_HOST", data.get("DB_HOST", "localhost")),
                DB_PORT=int(os.getenv("DB_PORT", data.get("DB_PORT", 5432))),
                DB_NAME=os.getenv("DB_NAME", data.get("DB_NAME", "mesa_places")),
                DB_USER=os.getenv("DB_USER", data.get("DB_USER", "postgres")),
                DB_PASSWORD=os.getenv("DB_PASSWORD", data.get("DB_PASSWORD", "")),
                DB_MIN_POOL_SIZE=data.get("DB_MIN_POOL_SIZE", 2),
                DB_MAX_POOL_SIZE=data.get("DB_MAX_POOL_SIZE", 10),
                DB_COMMAND_TIMEOUT=data.get("DB_COMMAND_TIMEOUT", 60),
                DB_SYNC_FORCE=data.get("DB_SYNC_FORCE", True),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    # Загружаем .env файл
    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
