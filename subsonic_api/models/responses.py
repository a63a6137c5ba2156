"""Pydantic response models for API endpoints."""
from pydantic import BaseModel
from typing import List

class ContactResult(BaseModel):
    message: str = "¡Mensaje enviado con éxito!"

class ErrorResult(BaseModel):
    error: str

class EventTypeOption(BaseModel):
    code: str
    label: str

class EventTypesResponse(BaseModel):
    event_types: List[EventTypeOption]

class StorageHealth(BaseModel):
    configured: bool
    backend: str | None = None
    table: str | None = None

class EmailHealth(BaseModel):
    configured: bool
    send_timeout_s: float | None = None

class ContactHealthResponse(BaseModel):
    storage: StorageHealth
    email: EmailHealth

__all__ = [
    "ContactResult","ErrorResult","EventTypeOption","EventTypesResponse",
    "StorageHealth","EmailHealth","ContactHealthResponse",
]
