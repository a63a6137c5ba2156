"""Pydantic request models for API endpoints."""
from pydantic import BaseModel
from typing import Optional

class ContactForm(BaseModel):
    # Field names match the site's JSON payload
    nombre: Optional[str] = None
    email: Optional[str] = None
    tipoEvento: Optional[str] = None  # event type code, see EVENT_TYPES
    fecha: Optional[str] = None  # event date, YYYY-MM-DD
    mensaje: Optional[str] = None

REQUIRED_FIELDS = ("nombre", "email", "tipoEvento", "fecha", "mensaje")

__all__ = ["ContactForm", "REQUIRED_FIELDS"]
