"""SQLite-backed conversation memory, keyed by session id."""

import json
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

DB_PATH = Path(os.getenv("SESSION_DB", Path(__file__).parent / "data" / "sessions.db"))
MAX_HISTORY = 20


def _get_connection() -> sqlite3.Connection:
    """Get database connection, creating table if needed."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("""
        CREATE TABLE IF NOT EXISTS turns (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            session_id TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            user_input TEXT NOT NULL,
            final_response TEXT NOT NULL,
            tool_calls TEXT
        )
    """)
    conn.execute("CREATE INDEX IF NOT EXISTS idx_turns_session ON turns (session_id, id)")
    conn.commit()
    return conn


def append_turn(
    session_id: str,
    user_input: str,
    final_response: str,
    tool_calls: list[dict[str, Any]] | None = None,
) -> None:
    """Save a turn and prune the session to MAX_HISTORY turns."""
    conn = _get_connection()
    try:
        conn.execute(
            """
            INSERT INTO turns (session_id, timestamp, user_input, final_response, tool_calls)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                session_id,
                datetime.now().isoformat(),
                user_input,
                final_response,
                json.dumps(tool_calls) if tool_calls else None,
            ),
        )
        # Prune old turns of this session only
        conn.execute(
            """
            DELETE FROM turns WHERE session_id = ? AND id NOT IN (
                SELECT id FROM turns WHERE session_id = ? ORDER BY id DESC LIMIT ?
            )
            """,
            (session_id, session_id, MAX_HISTORY),
        )
        conn.commit()
    finally:
        conn.close()


def get_session(session_id: str, limit: int = MAX_HISTORY) -> list[dict[str, Any]]:
    """Get the most recent turns of a session, oldest first."""
    conn = _get_connection()
    try:
        rows = conn.execute(
            """
            SELECT timestamp, user_input, final_response, tool_calls
            FROM turns WHERE session_id = ? ORDER BY id DESC LIMIT ?
            """,
            (session_id, limit),
        ).fetchall()
        return [
            {
                "timestamp": row["timestamp"],
                "user_input": row["user_input"],
                "final_response": row["final_response"],
                "tool_calls": json.loads(row["tool_calls"]) if row["tool_calls"] else [],
            }
            for row in reversed(rows)
        ]
    finally:
        conn.close()


def clear_session(session_id: str) -> None:
    """Forget every turn of a session."""
    conn = _get_connection()
    try:
        conn.execute("DELETE FROM turns WHERE session_id = ?", (session_id,))
        conn.commit()
    finally:
        conn.close()
