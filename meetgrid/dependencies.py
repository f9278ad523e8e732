"""Dependency injection for FastAPI endpoints.

Usage in controllers:
    from meetgrid.dependencies import OptionalBus

    @router.post("/example")
    async def example(bus: OptionalBus):
        ...
"""

from typing import Annotated

from fastapi import Depends

from meetgrid import state
from meetgrid.bus import EventBus
from meetgrid.errors import ServiceUnavailableError


def get_optional_event_bus() -> EventBus | None:
    """Get the EventBus if available, or None."""
    return state.event_bus


def require_database() -> None:
    """Raises:
        ServiceUnavailableError: If the event store is not initialized.
    """
    if not state.db_enabled:
        raise ServiceUnavailableError(detail="Event store not available")


OptionalBus = Annotated[EventBus | None, Depends(get_optional_event_bus)]
