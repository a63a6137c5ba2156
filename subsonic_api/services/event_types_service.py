"""Event types service (label table shared by the contact handler and the site)."""

EVENT_TYPES = {
    "cumpleanos": "Fiesta de cumpleaños",
    "corporativo": "Evento corporativo",
    "matrimonio": "Matrimonio",
    "graduacion": "Graduación",
    "festival": "Festival / Fiesta masiva",
    "privado": "Evento privado",
    "otro": "Otro",
}


def event_type_label(code: str) -> str:
    # Unknown codes are accepted and shown as-is
    return EVENT_TYPES.get(code, code)


def event_type_options() -> list[dict]:
    return [{"code": code, "label": label} for code, label in EVENT_TYPES.items()]

__all__ = ["EVENT_TYPES", "event_type_label", "event_type_options"]
