from fastapi.testclient import TestClient

from conftest import FakeNotifier, FakeQuoteStore
from subsonic_api.config import AppConfig, EmailConfig, StorageConfig
from subsonic_api.main import create_app
from subsonic_api.services.contact_service import ContactRequestHandler


def test_event_types_router():
    client = TestClient(create_app(AppConfig()))
    resp = client.get("/api/event_types")
    assert resp.status_code == 200
    data = resp.json()
    codes = [o["code"] for o in data["event_types"]]
    assert codes == ["cumpleanos", "corporativo", "matrimonio", "graduacion", "festival", "privado", "otro"]
    assert data["event_types"][0]["label"] == "Fiesta de cumpleaños"


def test_contact_health_unconfigured():
    client = TestClient(create_app(AppConfig()))
    data = client.get("/api/contact/health").json()
    assert data["storage"] == {"configured": False, "backend": None, "table": None}
    assert data["email"] == {"configured": False, "send_timeout_s": None}


def test_contact_health_configured_hides_secrets():
    config = AppConfig(
        storage=StorageConfig(connection_string="AccountKey=secret"),
        email=EmailConfig(connection_string="accesskey=secret", sender_address="s@x.cl", notification_email="r@x.cl", send_timeout_s=15),
    )
    client = TestClient(create_app(config))
    resp = client.get("/api/contact/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["storage"] == {"configured": True, "backend": "azure_table", "table": "cotizaciones"}
    assert data["email"] == {"configured": True, "send_timeout_s": 15.0}
    assert "secret" not in resp.text


def test_contact_health_reports_injected_backends():
    config = AppConfig()
    handler = ContactRequestHandler(config, quote_store=FakeQuoteStore(), notifier=FakeNotifier())
    data = TestClient(create_app(config, contact_handler=handler)).get("/api/contact/health").json()
    assert data["storage"]["backend"] == "fake"
    assert data["email"]["configured"] is True


def test_healthz():
    resp = TestClient(create_app(AppConfig())).get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True
