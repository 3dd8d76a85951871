"""SQLite membership store adapter.

Implements the core MembershipPort over a pre-populated SQLite database. The
file is opened read-only; rows are provisioned by a separate process.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List

from core.errors import StoreUnavailable, UnknownChat
from core.models import ChatSummary

REQUIRED_TABLES = ("chats", "members")


class SQLiteMembershipStore:
    """Thin SQLite wrapper that satisfies the MembershipPort contract.

    Tables:
    - chats: telegram_id (platform chat id) -> id (internal chat id)
    - members: id (internal chat id) -> member (display handle), one row per member
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        # mode=ro refuses to create a missing file and rejects writes.
        uri = f"{Path(self._db_path).resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Cannot open database {self._db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        return conn

    def check(self) -> None:
        """Confirm the database opens and carries both relations."""

        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                ).fetchall()
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Cannot query database {self._db_path}: {exc}") from exc

        present = {row["name"] for row in rows}
        missing = [table for table in REQUIRED_TABLES if table not in present]
        if missing:
            raise StoreUnavailable(
                f"Database {self._db_path} is missing table(s): {', '.join(missing)}"
            )

    def resolve_internal_id(self, platform_chat_id: int) -> int:
        """Return the internal id for a platform chat id or raise UnknownChat."""

        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT id FROM chats WHERE telegram_id = ?",
                    (platform_chat_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Chat lookup failed: {exc}") from exc
        if row is None:
            raise UnknownChat(platform_chat_id)
        return int(row["id"])

    def list_members(self, internal_id: int) -> List[str]:
        """Return member handles in insertion order; empty when none are recorded."""

        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT member FROM members WHERE id = ? ORDER BY rowid",
                    (internal_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Member lookup failed: {exc}") from exc
        return [str(row["member"]) for row in rows]

    def list_chats(self) -> List[ChatSummary]:
        """Return every registered chat with its member count."""

        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    """
                    SELECT chats.telegram_id AS telegram_id,
                           chats.id AS internal_id,
                           COUNT(members.member) AS member_count
                    FROM chats
                    LEFT JOIN members ON members.id = chats.id
                    GROUP BY chats.telegram_id, chats.id
                    ORDER BY chats.id
                    """
                ).fetchall()
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"Chat listing failed: {exc}") from exc
        return [
            ChatSummary(
                platform_id=int(row["telegram_id"]),
                internal_id=int(row["internal_id"]),
                member_count=int(row["member_count"]),
            )
            for row in rows
        ]
