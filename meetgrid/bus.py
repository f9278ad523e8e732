"""
Event bus for the scheduling API, backed by Redis pub/sub.
"""
import json
from typing import Final, Literal, TypedDict

import redis.asyncio as redis

CHANNEL_EVENT_PREFIX: Final[str] = "w2m:event:"


class AvailabilitySubmittedEvent(TypedDict):
    type: Literal["availability_submitted"]
    event_id: str
    participant_name: str
    slots: int
    timestamp: str


class EventBus:
    def __init__(self, redis_client: redis.Redis):
        self.redis_client = redis_client

    @staticmethod
    def event_channel(event_id: str) -> str:
        return f"{CHANNEL_EVENT_PREFIX}{event_id}"

    async def publish_submission(self, event: AvailabilitySubmittedEvent) -> int:
        """Notify subscribers that an event's responses changed; returns receiver count."""
        return await self.redis_client.publish(self.event_channel(event["event_id"]), json.dumps(event))
