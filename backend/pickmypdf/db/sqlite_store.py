# backend/pickmypdf/db/sqlite_store.py

import sqlite3
import json
import threading
import time
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from uuid import uuid4

from pickmypdf.core.logger import logger


# Retry configuration
MAX_RETRIES = 5
RETRY_DELAY = 0.1  # 100ms

META_COLUMNS = "id, title, created_at, updated_at, last_exported_at"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ItineraryStore:
    """
    Itinerary rows scoped by owner.

    Every query filters on user_id, so a row owned by somebody else behaves
    exactly like a missing row.
    """

    def __init__(self, db_path: str):
        path = Path(db_path)
        if str(db_path) != ":memory:":
            path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(
            str(path),
            check_same_thread=False,
            timeout=30.0
        )
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=NORMAL")
        self.conn.execute("PRAGMA busy_timeout=30000")
        self._init_tables()

    def _execute_with_retry(self, operation, *args, **kwargs):
        """Run a write, backing off while the database file is locked."""
        for attempt in range(MAX_RETRIES):
            try:
                with self._lock:
                    return operation(*args, **kwargs)
            except sqlite3.OperationalError as e:
                if "locked" in str(e).lower() and attempt < MAX_RETRIES - 1:
                    time.sleep(RETRY_DELAY * (attempt + 1))
                    continue
                raise

    # ----------------------------------------------------------------------
    # CREATE TABLES
    # ----------------------------------------------------------------------
    def _init_tables(self):
        cur = self.conn.cursor()

        cur.execute("""
        CREATE TABLE IF NOT EXISTS itineraries (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            form_data_json TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            last_exported_at TEXT
        );
        """)

        cur.execute("CREATE INDEX IF NOT EXISTS idx_itin_user ON itineraries(user_id, updated_at);")

        self.conn.commit()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> Dict[str, Any]:
        item = dict(row)
        item["form_data"] = json.loads(item.pop("form_data_json"))
        return item

    # ----------------------------------------------------------------------
    # READ
    # ----------------------------------------------------------------------
    def list_itineraries(self, user_id: str) -> List[Dict[str, Any]]:
        with self._lock:
            cur = self.conn.cursor()
            cur.execute(f"""
            SELECT {META_COLUMNS} FROM itineraries
            WHERE user_id = ?
            ORDER BY updated_at DESC
            """, (user_id,))
            rows = cur.fetchall()
        return [dict(r) for r in rows]

    def get_itinerary(self, user_id: str, itinerary_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            cur = self.conn.cursor()
            cur.execute(
                "SELECT * FROM itineraries WHERE id = ? AND user_id = ?",
                (itinerary_id, user_id),
            )
            row = cur.fetchone()
        return self._row_to_record(row) if row else None

    # ----------------------------------------------------------------------
    # WRITE
    # ----------------------------------------------------------------------
    def create_itinerary(self, user_id: str, title: str, form_data: dict) -> Dict[str, Any]:
        itinerary_id = str(uuid4())
        now = _now()

        def _create():
            cur = self.conn.cursor()
            cur.execute("""
            INSERT INTO itineraries (id, user_id, title, form_data_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """, (itinerary_id, user_id, title, json.dumps(form_data), now, now))
            self.conn.commit()

        self._execute_with_retry(_create)
        logger.info(f"Created itinerary {itinerary_id} for user {user_id}")
        return self.get_itinerary(user_id, itinerary_id)

    def update_itinerary(
        self, user_id: str, itinerary_id: str,
        title: Optional[str] = None, form_data: Optional[dict] = None
    ) -> Optional[Dict[str, Any]]:
        fields = ["updated_at = ?"]
        values: List[Any] = [_now()]
        if title:
            fields.append("title = ?")
            values.append(title)
        if form_data is not None:
            fields.append("form_data_json = ?")
            values.append(json.dumps(form_data))

        def _update():
            cur = self.conn.cursor()
            cur.execute(
                f"UPDATE itineraries SET {', '.join(fields)} WHERE id = ? AND user_id = ?",
                (*values, itinerary_id, user_id),
            )
            self.conn.commit()
            return cur.rowcount

        if not self._execute_with_retry(_update):
            return None
        return self.get_itinerary(user_id, itinerary_id)

    def delete_itinerary(self, user_id: str, itinerary_id: str) -> bool:
        def _delete():
            cur = self.conn.cursor()
            cur.execute(
                "DELETE FROM itineraries WHERE id = ? AND user_id = ?",
                (itinerary_id, user_id),
            )
            self.conn.commit()
            return cur.rowcount

        return bool(self._execute_with_retry(_delete))

    def mark_exported(self, user_id: str, itinerary_id: str) -> bool:
        now = _now()

        def _touch():
            cur = self.conn.cursor()
            cur.execute("""
            UPDATE itineraries SET last_exported_at = ?, updated_at = ?
            WHERE id = ? AND user_id = ?
            """, (now, now, itinerary_id, user_id))
            self.conn.commit()
            return cur.rowcount

        return bool(self._execute_with_retry(_touch))

    def close(self):
        self.conn.close()
