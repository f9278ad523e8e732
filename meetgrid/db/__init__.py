"""Event store backed by PostgreSQL."""

from meetgrid.db.core import close_pool, get_pool_stats, init_pool
from meetgrid.db.events import (
    w2m_create_event,
    w2m_get_event,
    w2m_get_responses,
    w2m_upsert_response,
)

__all__ = [
    "close_pool",
    "get_pool_stats",
    "init_pool",
    "w2m_create_event",
    "w2m_get_event",
    "w2m_get_responses",
    "w2m_upsert_response",
]
