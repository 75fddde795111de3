from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol


class DocumentStore(Protocol):
    def load(self, key: str) -> Optional[dict]: ...
    def save(self, key: str, document: dict) -> None: ...


class SqliteDocumentStore:
    """Durable key -> JSON document store on a single SQLite table."""

    def __init__(self, db_path: Path | str):
        self.db_path = str(db_path)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def init_db(self) -> None:
        self.run_migrations()

    def run_migrations(self) -> None:
        conn = self._conn()
        try:
            cur = conn.cursor()
            cur.execute("BEGIN")
            cur.execute("CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY, applied_at TEXT NOT NULL)")
            cur.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
            current_version = int(cur.fetchone()[0])

            migrations = [
                (1, self._migration_v1_documents),
            ]

            for version, migration in migrations:
                if version <= current_version:
                    continue
                migration(cur)
                cur.execute(
                    "INSERT INTO schema_migrations (version, applied_at) VALUES (?, datetime('now'))",
                    (version,),
                )
            conn.commit()
        except Exception as exc:
            conn.rollback()
            raise RuntimeError("Document store migration failed.") from exc
        finally:
            conn.close()

    def _migration_v1_documents(self, cur: sqlite3.Cursor) -> None:
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                key TEXT PRIMARY KEY,
                body TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )

    def load(self, key: str) -> Optional[dict]:
        conn = self._conn()
        cur = conn.cursor()
        cur.execute("SELECT body FROM documents WHERE key = ?", (key,))
        row = cur.fetchone()
        conn.close()
        if not row:
            return None
        return json.loads(row[0])

    def save(self, key: str, document: dict) -> None:
        body = json.dumps(document, ensure_ascii=False)
        updated_at = datetime.now().replace(microsecond=0).isoformat(sep=" ")
        conn = self._conn()
        try:
            conn.execute(
                """
                INSERT INTO documents (key, body, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET body=excluded.body, updated_at=excluded.updated_at
                """,
                (key, body, updated_at),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def integrity_check(self) -> str:
        conn = self._conn()
        cur = conn.cursor()
        cur.execute("PRAGMA integrity_check")
        row = cur.fetchone()
        conn.close()
        return str(row[0]) if row else "unknown"
