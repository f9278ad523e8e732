import json
import secrets
import string
from datetime import UTC, datetime
from typing import Any

from psycopg import errors as pg_errors

from meetgrid.db.core import _get_connection


def _generate_event_id(length: int = 10) -> str:
    chars = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(chars) for _ in range(length))


def _event_row_to_dict(row) -> dict[str, Any]:
    return {
        "id": row[0],
        "name": row[1],
        "mode": row[2],
        "columns": row[3],
        "time_range": {"start": row[4], "end": row[5]},
        "created_at": row[6].astimezone(UTC).isoformat(),
    }


async def w2m_create_event(
    name: str,
    mode: str,
    columns: list[str],
    time_start: str,
    time_end: str,
    id_length: int = 10,
) -> dict[str, Any]:
    now = datetime.now(UTC)
    async with _get_connection() as conn:
        for _ in range(10):
            event_id = _generate_event_id(id_length)
            try:
                await conn.execute(
                    """INSERT INTO w2m_events (id, name, mode, columns, time_start, time_end, created_at)
                       VALUES (%s, %s, %s, %s, %s, %s, %s)""",
                    (event_id, name, mode, json.dumps(columns), time_start, time_end, now),
                )
                return {
                    "id": event_id,
                    "name": name,
                    "mode": mode,
                    "columns": columns,
                    "time_range": {"start": time_start, "end": time_end},
                    "created_at": now.isoformat(),
                }
            except pg_errors.UniqueViolation:
                continue
        raise RuntimeError("Failed to generate unique event ID")


async def w2m_get_event(event_id: str) -> dict[str, Any] | None:
    async with _get_connection() as conn:
        cur = await conn.execute(
            "SELECT id, name, mode, columns, time_start, time_end, created_at FROM w2m_events WHERE id = %s",
            (event_id,),
        )
        row = await cur.fetchone()
        if not row:
            return None
        return _event_row_to_dict(row)


async def w2m_get_responses(event_id: str) -> dict[str, dict[str, bool]]:
    """Every respondent's availability map, in first-submission order."""
    async with _get_connection() as conn:
        cur = await conn.execute(
            """SELECT participant_name, availability FROM w2m_responses
               WHERE event_id = %s ORDER BY created_at, id""",
            (event_id,),
        )
        responses: dict[str, dict[str, bool]] = {}
        async for row in cur:
            responses[row[0]] = row[1] or {}
        return responses


async def w2m_upsert_response(
    event_id: str,
    participant_name: str,
    availability: dict[str, bool],
) -> dict[str, Any]:
    """Insert or fully replace a respondent's map; the last write wins."""
    now = datetime.now(UTC)
    async with _get_connection() as conn:
        await conn.execute(
            """INSERT INTO w2m_responses (event_id, participant_name, availability, created_at, updated_at)
               VALUES (%s, %s, %s, %s, %s)
               ON CONFLICT (event_id, participant_name)
               DO UPDATE SET availability = EXCLUDED.availability, updated_at = EXCLUDED.updated_at""",
            (event_id, participant_name, json.dumps(availability), now, now),
        )
    return {
        "event_id": event_id,
        "participant_name": participant_name,
        "availability": availability,
        "updated_at": now.isoformat(),
    }
