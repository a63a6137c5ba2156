import asyncio
import json

import pytest

from conftest import FakeNotifier, FakeQuoteStore
from subsonic_api.config import AppConfig, EmailConfig, StorageConfig
from subsonic_api.services.contact_service import (
    ContactRequestHandler,
    ContactValidationError,
    format_event_date,
    is_valid_email,
    parse_form,
    validate_form,
)
from subsonic_api.services.event_types_service import EVENT_TYPES, event_type_label
from subsonic_api.storage.quote_store import new_row_key


@pytest.mark.parametrize("fecha,expected", [
    ("2024-03-05", "05/03/2024"),
    ("2024-13-40", "40/13/2024"),
    ("1999-1-2", "2/1/1999"),
    ("20240305", "20240305"),
])
def test_format_event_date(fecha, expected):
    assert format_event_date(fecha) == expected


@pytest.mark.parametrize("email,ok", [
    ("dj@subsonic.cl", True),
    ("a.b+c@mail.example.com", True),
    ("sin-arroba.cl", False),
    ("sin@punto", False),
    ("con espacio@mail.cl", False),
    ("a@b.c\n", False),
])
def test_is_valid_email(email, ok):
    assert is_valid_email(email) is ok


def test_event_type_labels():
    for code, label in EVENT_TYPES.items():
        assert event_type_label(code) == label
    assert event_type_label("karaoke") == "karaoke"


def test_validate_form_reports_required_before_email(valid_payload):
    valid_payload["email"] = "invalido"
    valid_payload["fecha"] = ""
    with pytest.raises(ContactValidationError) as exc:
        validate_form(parse_form(valid_payload))
    assert exc.value.message == "Todos los campos son requeridos"


def test_row_keys_do_not_collide_within_one_millisecond():
    keys = {new_row_key(now_ms=1709640000000) for _ in range(10_000)}
    assert len(keys) == 10_000


def test_handler_builds_side_effects_from_config(tmp_path):
    config = AppConfig(
        storage=StorageConfig(sqlite_path=str(tmp_path / "quotes.db")),
        email=EmailConfig(connection_string="endpoint=https://x.communication.azure.com/;accesskey=abc", sender_address="noreply@subsonic.cl"),
    )
    handler = ContactRequestHandler(config)
    assert handler.quote_store.backend == "sqlite"
    # Recipient missing: notification stays disabled
    assert handler.notifier is None


def test_handle_reports_side_effect_outcomes(valid_payload):
    handler = ContactRequestHandler(AppConfig(), quote_store=FakeQuoteStore(fail=True), notifier=FakeNotifier())
    outcome = asyncio.run(handler.handle(json.dumps(valid_payload).encode("utf-8")))
    assert outcome.status_code == 200
    assert outcome.stored is False
    assert outcome.notified is True


def test_handle_without_side_effects(valid_payload):
    outcome = asyncio.run(ContactRequestHandler(AppConfig()).handle(valid_payload))
    assert outcome.status_code == 200
    assert outcome.stored is None
    assert outcome.notified is None


def test_handle_empty_body_is_internal_error():
    outcome = asyncio.run(ContactRequestHandler(AppConfig()).handle(b""))
    assert outcome.status_code == 500
    assert outcome.body == {"error": "Error interno del servidor"}
