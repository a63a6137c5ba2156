"""Centralized configuration loader.

Read environment variables (and a local `.env`) and expose an AppConfig object.
The contact handler receives this object explicitly, so tests can build their
own instead of mutating the environment.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

DEFAULT_TABLE_NAME = "cotizaciones"

@dataclass(frozen=True)
class StorageConfig:
    connection_string: str | None = None
    table_name: str = DEFAULT_TABLE_NAME
    # Local development row store; ignored when connection_string is set
    sqlite_path: str | None = None

    @property
    def backend(self) -> str | None:
        if self.connection_string:
            return "azure_table"
        if self.sqlite_path:
            return "sqlite"
        return None

    @property
    def configured(self) -> bool:
        return self.backend is not None

@dataclass(frozen=True)
class EmailConfig:
    connection_string: str | None = None
    sender_address: str | None = None
    notification_email: str | None = None
    send_timeout_s: float = 30.0

    @property
    def configured(self) -> bool:
        return bool(self.connection_string and self.sender_address and self.notification_email)

@dataclass(frozen=True)
class CorsConfig:
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    allow_credentials: bool = True

@dataclass(frozen=True)
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    cors: CorsConfig = field(default_factory=CorsConfig)
    log_level: str = "INFO"


def _bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val not in ("0", "false", "False")

def _origins(raw: str | None) -> list[str]:
    raw = raw or "*"
    if raw.strip() == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]

def load_config() -> AppConfig:
    storage = StorageConfig(
        connection_string=os.getenv("STORAGE_CONNECTION_STRING") or None,
        table_name=(os.getenv("STORAGE_TABLE_NAME") or DEFAULT_TABLE_NAME).strip(),
        sqlite_path=os.getenv("STORAGE_SQLITE_PATH") or None,
    )
    email = EmailConfig(
        connection_string=os.getenv("EMAIL_CONNECTION_STRING") or None,
        sender_address=os.getenv("EMAIL_SENDER_ADDRESS") or None,
        notification_email=os.getenv("NOTIFICATION_EMAIL") or None,
        send_timeout_s=float(os.getenv("EMAIL_SEND_TIMEOUT_S", "30") or 30),
    )
    cors = CorsConfig(
        allowed_origins=_origins(os.getenv("CORS_ALLOWED_ORIGINS")),
        allow_credentials=_bool(os.getenv("CORS_ALLOW_CREDENTIALS", "1"), True),
    )
    return AppConfig(
        storage=storage,
        email=email,
        cors=cors,
        log_level=(os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"),
    )

CONFIG = load_config()

__all__ = ["AppConfig", "StorageConfig", "EmailConfig", "CorsConfig", "DEFAULT_TABLE_NAME", "load_config", "CONFIG"]
