"""Event type catalogue and contact configuration health."""
from fastapi import APIRouter, Request

from subsonic_api.models.responses import ContactHealthResponse, EventTypesResponse
from subsonic_api.services.event_types_service import event_type_options

router = APIRouter(prefix="/api", tags=["catalog"])

@router.get("/event_types", response_model=EventTypesResponse)
def event_types():
    return {"event_types": event_type_options()}

@router.get("/contact/health", response_model=ContactHealthResponse)
def contact_health(request: Request):
    """Report which optional side effects are configured. Never returns secrets."""
    handler = request.app.state.contact_handler
    store = handler.quote_store
    notifier = handler.notifier
    return {
        "storage": {
            "configured": store is not None,
            "backend": getattr(store, "backend", None) if store is not None else None,
            "table": handler.config.storage.table_name if store is not None else None,
        },
        "email": {
            "configured": notifier is not None,
            "send_timeout_s": handler.config.email.send_timeout_s if notifier is not None else None,
        },
    }
