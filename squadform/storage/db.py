from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from squadform.core.config import settings
from squadform.formation.models import Participant


class SquadValidationError(ValueError):
    status_code = 400


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _get_db_path() -> Path:
    return Path(settings.squads_db_path)


def _connect() -> sqlite3.Connection:
    conn = sqlite3.connect(_get_db_path())
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db() -> None:
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with _connect() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS candidates (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT UNIQUE,
                skills TEXT,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS attendance (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                candidate_id INTEGER NOT NULL REFERENCES candidates (id),
                check_in_time TEXT,
                status TEXT NOT NULL DEFAULT 'present'
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS squads (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS squad_members (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                squad_id INTEGER NOT NULL REFERENCES squads (id) ON DELETE CASCADE,
                candidate_id INTEGER NOT NULL REFERENCES candidates (id),
                role TEXT NOT NULL DEFAULT 'member'
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_squad_members_candidate
            ON squad_members (candidate_id)
            """
        )
        conn.commit()


def _row_to_dict(cursor: sqlite3.Cursor, row: tuple) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def get_eligible_participants() -> list[Participant]:
    """Present candidates that are not in any squad yet, ordered by name."""
    with _connect() as conn:
        cur = conn.execute(
            """
            SELECT DISTINCT c.id, c.skills, c.name
            FROM candidates c
            INNER JOIN attendance a ON c.id = a.candidate_id
            WHERE a.status = 'present'
              AND c.id NOT IN (SELECT candidate_id FROM squad_members)
            ORDER BY c.name, c.id
            """
        )
        rows = cur.fetchall()
    return [Participant(id=row[0], skills_raw=row[1]) for row in rows]


def get_available_candidates() -> list[dict[str, Any]]:
    with _connect() as conn:
        cur = conn.execute(
            """
            SELECT DISTINCT c.id, c.name, c.email, c.skills
            FROM candidates c
            INNER JOIN attendance a ON c.id = a.candidate_id
            WHERE a.status = 'present'
              AND c.id NOT IN (SELECT candidate_id FROM squad_members)
            ORDER BY c.name, c.id
            """
        )
        rows = cur.fetchall()
        return [_row_to_dict(cur, row) for row in rows]


def _insert_members(conn: sqlite3.Connection, squad_id: int, member_ids: Sequence[int]) -> None:
    conn.executemany(
        "INSERT INTO squad_members (squad_id, candidate_id) VALUES (?, ?)",
        [(squad_id, candidate_id) for candidate_id in member_ids],
    )


def save_squads(squads: Sequence[Sequence[int]]) -> list[dict[str, Any]]:
    """Persist a partition as ``Squad 1``, ``Squad 2``, ... in output order."""
    created: list[dict[str, Any]] = []
    now = _utc_now()
    with _connect() as conn:
        for index, member_ids in enumerate(squads):
            name = f"Squad {index + 1}"
            cur = conn.execute("INSERT INTO squads (name, created_at) VALUES (?, ?)", (name, now))
            squad_id = int(cur.lastrowid)
            _insert_members(conn, squad_id, member_ids)
            created.append({"id": squad_id, "name": name, "members": list(member_ids)})
        conn.commit()
    return created


def _check_members_present(conn: sqlite3.Connection, member_ids: Sequence[int]) -> None:
    if not member_ids:
        return
    if len(set(member_ids)) != len(member_ids):
        raise SquadValidationError("Member ids must not repeat.")
    placeholders = ",".join("?" for _ in member_ids)
    cur = conn.execute(
        f"""
        SELECT c.id, c.name,
               MAX(CASE WHEN a.status = 'present' THEN 1 ELSE 0 END) AS is_present
        FROM candidates c
        LEFT JOIN attendance a ON c.id = a.candidate_id
        WHERE c.id IN ({placeholders})
        GROUP BY c.id, c.name
        """,
        tuple(member_ids),
    )
    rows = cur.fetchall()
    found = {row[0] for row in rows}
    missing = [str(candidate_id) for candidate_id in member_ids if candidate_id not in found]
    if missing:
        raise SquadValidationError(f"Unknown candidate ids: {', '.join(missing)}")
    absent = [row[1] for row in rows if not row[2]]
    if absent:
        raise SquadValidationError(f"Cannot add candidates without present status: {', '.join(absent)}")


def create_squad(name: str, member_ids: Sequence[int]) -> dict[str, Any]:
    with _connect() as conn:
        _check_members_present(conn, member_ids)
        cur = conn.execute("INSERT INTO squads (name, created_at) VALUES (?, ?)", (name, _utc_now()))
        squad_id = int(cur.lastrowid)
        _insert_members(conn, squad_id, member_ids)
        conn.commit()
    return {"id": squad_id, "name": name, "member_ids": list(member_ids)}


def list_squads() -> list[dict[str, Any]]:
    with _connect() as conn:
        cur = conn.execute(
            """
            SELECT s.id, s.name, s.created_at, sm.candidate_id, c.name
            FROM squads s
            LEFT JOIN squad_members sm ON s.id = sm.squad_id
            LEFT JOIN candidates c ON sm.candidate_id = c.id
            ORDER BY s.created_at DESC, s.id DESC, sm.id
            """
        )
        rows = cur.fetchall()

    squads: dict[int, dict[str, Any]] = {}
    for squad_id, name, created_at, candidate_id, candidate_name in rows:
        squad = squads.setdefault(
            squad_id,
            {"id": squad_id, "name": name, "created_at": created_at, "member_ids": [], "member_names": []},
        )
        if candidate_id is not None:
            squad["member_ids"].append(candidate_id)
            squad["member_names"].append(candidate_name)
    for squad in squads.values():
        squad["member_count"] = len(squad["member_ids"])
    return list(squads.values())


def get_squad(squad_id: int) -> dict[str, Any] | None:
    with _connect() as conn:
        cur = conn.execute("SELECT id, name, created_at FROM squads WHERE id = ?", (squad_id,))
        row = cur.fetchone()
        if not row:
            return None
        squad = _row_to_dict(cur, row)
        cur = conn.execute(
            """
            SELECT c.id, c.name, c.email, c.skills, sm.role
            FROM squad_members sm
            JOIN candidates c ON sm.candidate_id = c.id
            WHERE sm.squad_id = ?
            ORDER BY c.name, c.id
            """,
            (squad_id,),
        )
        squad["members"] = [_row_to_dict(cur, member) for member in cur.fetchall()]
    return squad


def update_squad(squad_id: int, name: str, member_ids: Sequence[int] | None = None) -> bool:
    with _connect() as conn:
        cur = conn.execute("UPDATE squads SET name = ? WHERE id = ?", (name, squad_id))
        if cur.rowcount == 0:
            return False
        if member_ids is not None:
            _check_members_present(conn, member_ids)
            conn.execute("DELETE FROM squad_members WHERE squad_id = ?", (squad_id,))
            _insert_members(conn, squad_id, member_ids)
        conn.commit()
    return True


def delete_squad(squad_id: int) -> bool:
    with _connect() as conn:
        conn.execute("DELETE FROM squad_members WHERE squad_id = ?", (squad_id,))
        cur = conn.execute("DELETE FROM squads WHERE id = ?", (squad_id,))
        deleted = int(cur.rowcount or 0)
        conn.commit()
    return deleted > 0


def clear_squads() -> int:
    with _connect() as conn:
        conn.execute("DELETE FROM squad_members")
        cur = conn.execute("DELETE FROM squads")
        deleted = int(cur.rowcount or 0)
        conn.commit()
    return deleted
