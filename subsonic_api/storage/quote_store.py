"""Row store for quote requests (Azure Table Storage, or SQLite for local dev).

Both stores expose the same two calls: `ensure_table()` (idempotent) and
`save(record)`. Records are plain dicts built by `build_quote_record`.
"""
from __future__ import annotations
import logging
import secrets
import sqlite3
import string
import time
from datetime import datetime, timezone
from typing import Optional

from azure.core.exceptions import ResourceExistsError
from azure.data.tables import TableClient

from subsonic_api.config import StorageConfig

logger = logging.getLogger(__name__)

PARTITION_KEY = "cotizacion"
ROW_KEY_SUFFIX_LEN = 8
_BASE36 = string.digits + string.ascii_lowercase

HEADERS = [
    "PartitionKey","RowKey","nombre","email","tipoEvento","fechaEvento","mensaje","fechaCreacion"
]


def new_row_key(now_ms: Optional[int] = None) -> str:
    """Return `{epoch-millis}-{random base36 suffix}`.

    Unique with overwhelming probability, not guaranteed: two submissions in
    the same millisecond only differ by the random suffix.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ROW_KEY_SUFFIX_LEN))
    return f"{now_ms}-{suffix}"


def iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_quote_record(form, event_label: str, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    return {
        "PartitionKey": PARTITION_KEY,
        "RowKey": new_row_key(int(now.timestamp() * 1000)),
        "nombre": form.nombre,
        "email": form.email,
        "tipoEvento": event_label,
        "fechaEvento": form.fecha,
        "mensaje": form.mensaje,
        "fechaCreacion": iso_utc(now),
    }


class AzureTableQuoteStore:
    backend = "azure_table"

    def __init__(self, connection_string: str, table_name: str, client: TableClient | None = None):
        self.connection_string = connection_string
        self.table_name = table_name
        self._client = client

    def _table_client(self) -> TableClient:
        # Built lazily so a bad connection string fails inside the request's storage step
        if self._client is None:
            self._client = TableClient.from_connection_string(self.connection_string, table_name=self.table_name)
        return self._client

    def ensure_table(self):
        try:
            self._table_client().create_table()
            logger.info("Created table '%s'.", self.table_name)
        except ResourceExistsError:
            pass

    def save(self, record: dict):
        self.ensure_table()
        self._table_client().create_entity(entity=record)
        logger.info("Quote %s stored in table '%s'.", record.get("RowKey"), self.table_name)


class SqliteQuoteStore:
    backend = "sqlite"

    def __init__(self, path: str, table_name: str):
        self.path = path
        # Table names cannot be bound as parameters
        if not table_name.isidentifier():
            raise ValueError(f"Invalid table name: {table_name!r}")
        self.table_name = table_name

    def ensure_table(self):
        conn = sqlite3.connect(self.path)
        try:
            conn.execute(f'''CREATE TABLE IF NOT EXISTS {self.table_name} (
                PartitionKey TEXT NOT NULL,
                RowKey TEXT NOT NULL,
                nombre TEXT,
                email TEXT,
                tipoEvento TEXT,
                fechaEvento TEXT,
                mensaje TEXT,
                fechaCreacion TEXT,
                PRIMARY KEY (PartitionKey, RowKey)
            )''')
            conn.commit()
        finally:
            conn.close()

    def save(self, record: dict):
        self.ensure_table()
        conn = sqlite3.connect(self.path)
        try:
            conn.execute(
                f"INSERT INTO {self.table_name} ({', '.join(HEADERS)}) VALUES ({', '.join('?' for _ in HEADERS)})",
                [record.get(h) for h in HEADERS],
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Quote %s stored in %s.", record.get("RowKey"), self.path)

    def fetch_all(self) -> list[dict]:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            rows = conn.execute(f"SELECT * FROM {self.table_name} ORDER BY RowKey").fetchall()
        finally:
            conn.close()
        return [dict(r) for r in rows]


def build_quote_store(storage: StorageConfig):
    """Return the configured store, or None when persistence is disabled."""
    if storage.connection_string:
        return AzureTableQuoteStore(storage.connection_string, storage.table_name)
    if storage.sqlite_path:
        return SqliteQuoteStore(storage.sqlite_path, storage.table_name)
    return None

__all__ = [
    "PARTITION_KEY","ROW_KEY_SUFFIX_LEN","HEADERS","new_row_key","iso_utc","build_quote_record",
    "AzureTableQuoteStore","SqliteQuoteStore","build_quote_store",
]
