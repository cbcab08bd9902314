from .clear_storage_flow import hubspot_clear_storage_flow
from .handle_event_flow import hubspot_event_flow
from .sync_interval_flow import hubspot_interval_sync_flow

__all__ = [
    "hubspot_clear_storage_flow",
    "hubspot_event_flow",
    "hubspot_interval_sync_flow",
]
