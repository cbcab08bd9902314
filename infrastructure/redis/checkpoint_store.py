import json
from typing import Any, Optional

import redis
import structlog

log = structlog.get_logger(__name__)


class RedisCheckpointStore:
    """
    Key-value checkpoint storage (cursors, completion date, seen markers).

    Values are JSON-encoded. Keys live forever unless ``ex_seconds`` is given.
    """

    def __init__(self, connection_string: str, client: Optional[redis.Redis] = None):
        self.client = client or redis.Redis.from_url(
            connection_string,
            decode_responses=True,
            socket_timeout=3,
            socket_connect_timeout=3,
            retry_on_timeout=True,
        )

    # --- Métodos principais ---
    def get(self, key: str) -> Optional[Any]:
        value = self.client.get(key)
        if value is None:
            log.debug("Checkpoint miss", key=key)
            return None
        log.debug("Checkpoint hit", key=key)
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            log.warning("Failed to decode checkpoint value", key=key)
            return value

    def set(self, key: str, value: Any, ex_seconds: Optional[int] = None) -> None:
        if value is None:
            self.delete(key)
            return
        if not isinstance(value, (dict, list, str, int, float, bool)):
            raise TypeError(f"Cannot store checkpoint of type {type(value)}")

        serialized = json.dumps(value)
        if ex_seconds:
            self.client.set(key, serialized, ex=ex_seconds)
        else:
            self.client.set(key, serialized)
        log.debug("Checkpoint set", key=key, ttl=ex_seconds)

    def delete(self, key: str) -> None:
        self.client.delete(key)
        log.debug("Checkpoint delete", key=key)

