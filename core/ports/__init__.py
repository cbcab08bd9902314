from .checkpoint_store_port import CheckpointStorePort

__all__ = ["CheckpointStorePort"]
