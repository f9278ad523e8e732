from typing import Optional

import redis.asyncio as redis

from meetgrid.bus import EventBus

# Global runtime state initialized in lifespan.setup_resources
redis_client: Optional[redis.Redis] = None
event_bus: Optional[EventBus] = None
db_enabled: bool = False
