from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class CheckpointStorePort(Protocol):
    """
    Minimal key-value contract the sync relies on.
    No transactions: every call stands on its own.
    """

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any, ex_seconds: Optional[int] = None) -> None: ...

    def delete(self, key: str) -> None: ...
