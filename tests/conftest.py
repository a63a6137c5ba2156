# Ensure tests can import the application package regardless of CWD
import os
import sys

import pytest

# Repo root is one directory up from the tests folder
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


class FakeQuoteStore:
    backend = "fake"

    def __init__(self, fail=False):
        self.fail = fail
        self.saved = []

    def save(self, record):
        if self.fail:
            raise RuntimeError("table service unavailable")
        self.saved.append(record)


class FakeNotifier:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send(self, form, event_label, event_date):
        if self.fail:
            raise RuntimeError("email service unavailable")
        self.sent.append({"form": form, "label": event_label, "date": event_date})
        return {"id": "op-1", "status": "Succeeded"}


@pytest.fixture
def valid_payload():
    return {
        "nombre": "Camila Rojas",
        "email": "camila@example.cl",
        "tipoEvento": "matrimonio",
        "fecha": "2024-03-05",
        "mensaje": "Necesitamos DJ y sonido para 120 personas.",
    }
