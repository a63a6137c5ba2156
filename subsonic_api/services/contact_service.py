"""Contact / quote request handling.

ContactRequestHandler validates a submitted form, then runs the two optional
side effects (row store write, notification email) concurrently. Each side
effect has its own failure boundary: errors are logged and never turn a valid
submission into a 500.
"""
from __future__ import annotations
import asyncio
import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError

from subsonic_api.config import AppConfig
from subsonic_api.models.requests import ContactForm, REQUIRED_FIELDS
from subsonic_api.services.event_types_service import event_type_label
from subsonic_api.services.notification_service import build_notifier
from subsonic_api.storage.quote_store import build_quote_record, build_quote_store

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

REQUIRED_FIELDS_MSG = "Todos los campos son requeridos"
INVALID_EMAIL_MSG = "Email inválido"
SUCCESS_MSG = "¡Mensaje enviado con éxito!"
INTERNAL_ERROR_MSG = "Error interno del servidor"


class ContactValidationError(ValueError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class ContactOutcome:
    status_code: int
    body: dict
    # None: side effect not configured / not attempted
    stored: Optional[bool] = None
    notified: Optional[bool] = None


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def format_event_date(fecha: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY. Display only; the date itself is not checked."""
    parts = fecha.split("-")
    if len(parts) < 3:
        return fecha
    y, m, d = parts[:3]
    return f"{d}/{m}/{y}"


def parse_form(raw: Any) -> ContactForm:
    if not isinstance(raw, dict):
        raise ContactValidationError(REQUIRED_FIELDS_MSG)
    try:
        return ContactForm.model_validate(raw)
    except ValidationError:
        # Wrong types (numbers, lists...) are reported like missing fields
        raise ContactValidationError(REQUIRED_FIELDS_MSG) from None


def validate_form(form: ContactForm) -> None:
    for name in REQUIRED_FIELDS:
        value = getattr(form, name)
        if not value or not value.strip():
            raise ContactValidationError(REQUIRED_FIELDS_MSG)
    if not is_valid_email(form.email):
        raise ContactValidationError(INVALID_EMAIL_MSG)


class ContactRequestHandler:
    def __init__(self, config: AppConfig, *, quote_store=None, notifier=None):
        self.config = config
        self.quote_store = quote_store if quote_store is not None else build_quote_store(config.storage)
        self.notifier = notifier if notifier is not None else build_notifier(config.email)

    async def handle(self, body: bytes | str | dict) -> ContactOutcome:
        try:
            raw = json.loads(body) if isinstance(body, (bytes, str)) else body
            form = parse_form(raw)
            validate_form(form)
            return await self._process(form)
        except ContactValidationError as e:
            return ContactOutcome(400, {"error": e.message})
        except Exception:
            logger.exception("Error procesando formulario")
            return ContactOutcome(500, {"error": INTERNAL_ERROR_MSG})

    async def _process(self, form: ContactForm) -> ContactOutcome:
        label = event_type_label(form.tipoEvento)
        event_date = format_event_date(form.fecha)
        now = datetime.now(timezone.utc)

        stored, notified = await asyncio.gather(
            self._store(form, label, now),
            self._notify(form, label, event_date),
        )

        # Always logged: the only record when neither side effect is configured
        logger.info("=== NUEVA COTIZACIÓN ===")
        logger.info("Nombre: %s | Email: %s", form.nombre, form.email)
        logger.info("Tipo: %s | Fecha: %s", label, form.fecha)
        logger.info("Mensaje: %s", form.mensaje)

        return ContactOutcome(200, {"message": SUCCESS_MSG}, stored=stored, notified=notified)

    async def _store(self, form: ContactForm, label: str, now: datetime) -> Optional[bool]:
        if self.quote_store is None:
            return None
        try:
            record = build_quote_record(form, label, now)
            await asyncio.to_thread(self.quote_store.save, record)
            return True
        except Exception as e:
            logger.error("Failed to store quote request from %s: %s", form.email, e, exc_info=True)
            return False

    async def _notify(self, form: ContactForm, label: str, event_date: str) -> Optional[bool]:
        if self.notifier is None:
            return None
        try:
            await asyncio.to_thread(self.notifier.send, form, label, event_date)
            return True
        except Exception as e:
            logger.error("Failed to send notification email for %s: %s", form.email, e, exc_info=True)
            return False

__all__ = [
    "ContactRequestHandler","ContactOutcome","ContactValidationError","is_valid_email",
    "format_event_date","parse_form","validate_form","REQUIRED_FIELDS_MSG","INVALID_EMAIL_MSG",
    "SUCCESS_MSG","INTERNAL_ERROR_MSG",
]
