"""Notification email service (Azure Communication Services).

Builds the owner-facing HTML summary of a quote request and sends it, waiting
for the send operation to finish within a bounded timeout.
"""
from __future__ import annotations
import html
import logging
from datetime import datetime
from typing import Optional

from azure.communication.email import EmailClient

from subsonic_api.config import EmailConfig

logger = logging.getLogger(__name__)

SITE_NAME = "SUBSONIC PRODUCCIONES"
SITE_DOMAIN = "subsonicproducciones.cl"

_LABEL_CELL = (
    "padding:14px 12px;font-size:12px;font-weight:600;color:rgba(255,255,255,0.4);"
    "text-transform:uppercase;letter-spacing:0.06em;border-bottom:1px solid rgba(255,255,255,0.06);width:140px;"
)
_VALUE_CELL = "padding:14px 12px;font-size:15px;border-bottom:1px solid rgba(255,255,255,0.06);"


class EmailDeliveryError(RuntimeError):
    pass


def build_subject(event_label: str) -> str:
    return f"⚡ Nueva Cotización — {event_label}"


def _row(label: str, value_html: str, value_style: str = "color:#fff;", label_extra: str = "") -> str:
    return (
        "<tr>"
        f'<td style="{_LABEL_CELL}{label_extra}">{label}</td>'
        f'<td style="{_VALUE_CELL}{value_style}">{value_html}</td>'
        "</tr>"
    )


def build_html(form, event_label: str, event_date: str, received_on: Optional[datetime] = None) -> str:
    """Render the notification body. Submitted values are HTML-escaped."""
    received_on = received_on or datetime.now()
    received = received_on.strftime("%d-%m-%Y")
    name = html.escape(form.nombre)
    email = html.escape(form.email)
    message = html.escape(form.mensaje)
    label = html.escape(event_label)
    rows = "".join([
        _row("Nombre", name),
        _row("Email", f'<a href="mailto:{email}" style="color:#4a7aff;text-decoration:none;">{email}</a>', value_style=""),
        _row("Fecha del Evento", f"📅 {html.escape(event_date)}"),
        _row("Mensaje", message, value_style="color:rgba(255,255,255,0.8);line-height:1.6;", label_extra="vertical-align:top;"),
    ])
    return f"""
<div style="font-family:'Segoe UI',Arial,sans-serif;max-width:600px;margin:0 auto;background:#050a15;border-radius:16px;overflow:hidden;border:1px solid rgba(74,122,255,0.15);">
  <div style="background:linear-gradient(135deg,rgba(74,122,255,0.15),rgba(168,85,247,0.1));padding:32px 32px 24px;text-align:center;border-bottom:1px solid rgba(255,255,255,0.06);">
    <div style="font-size:28px;margin-bottom:8px;">⚡</div>
    <h1 style="margin:0;font-size:22px;font-weight:800;color:#fff;letter-spacing:-0.02em;">{SITE_NAME}</h1>
    <p style="margin:8px 0 0;font-size:13px;color:rgba(255,255,255,0.4);letter-spacing:0.05em;">NUEVA COTIZACIÓN</p>
  </div>
  <div style="padding:24px 32px 0;text-align:center;">
    <span style="display:inline-block;background:linear-gradient(135deg,#4a7aff,#a855f7);color:#fff;font-size:13px;font-weight:700;padding:6px 20px;border-radius:20px;letter-spacing:0.03em;">{label}</span>
  </div>
  <div style="padding:24px 32px;">
    <table style="width:100%;border-collapse:collapse;">{rows}</table>
  </div>
  <div style="padding:16px 32px 24px;text-align:center;border-top:1px solid rgba(255,255,255,0.06);">
    <p style="margin:0 0 4px;font-size:11px;color:rgba(255,255,255,0.25);">Solicitud recibida el {received} · {SITE_DOMAIN}</p>
  </div>
</div>
"""


class AzureEmailNotifier:
    def __init__(
        self,
        connection_string: str,
        sender_address: str,
        recipient: str,
        *,
        timeout_s: float = 30.0,
        client: EmailClient | None = None,
    ):
        self.connection_string = connection_string
        self.sender_address = sender_address
        self.recipient = recipient
        self.timeout_s = timeout_s
        self._client = client

    def _email_client(self) -> EmailClient:
        if self._client is None:
            self._client = EmailClient.from_connection_string(self.connection_string)
        return self._client

    def build_message(self, form, event_label: str, event_date: str) -> dict:
        return {
            "senderAddress": self.sender_address,
            "recipients": {"to": [{"address": self.recipient}]},
            "content": {
                "subject": build_subject(event_label),
                "html": build_html(form, event_label, event_date),
            },
        }

    def send(self, form, event_label: str, event_date: str) -> dict:
        message = self.build_message(form, event_label, event_date)
        poller = self._email_client().begin_send(message)
        result = poller.result(timeout=self.timeout_s)
        # result() returns after the timeout even if the operation is still running
        if not poller.done():
            raise EmailDeliveryError(f"Email send not completed after {self.timeout_s}s")
        status = (result or {}).get("status")
        if status and status != "Succeeded":
            raise EmailDeliveryError(f"Email send finished with status {status}: {(result or {}).get('error')}")
        logger.info("Notification email sent to %s (id=%s).", self.recipient, (result or {}).get("id"))
        return result or {}


def build_notifier(email: EmailConfig):
    """Return a notifier when connection, sender and recipient are all set, else None."""
    if not email.configured:
        return None
    return AzureEmailNotifier(
        email.connection_string,
        email.sender_address,
        email.notification_email,
        timeout_s=email.send_timeout_s,
    )

__all__ = ["EmailDeliveryError","build_subject","build_html","AzureEmailNotifier","build_notifier"]
