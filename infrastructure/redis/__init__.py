from .checkpoint_store import RedisCheckpointStore

__all__ = ["RedisCheckpointStore"]
