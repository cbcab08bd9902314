from .config_schema import SyncConfig
from .event_schema import InboundEvent
from .hubspot_schema import HubspotObject, LoadedContact, next_page_link
from .sync_result_schema import IntervalReport, PageResult, UpsertResult

__all__ = [
    "SyncConfig",
    "InboundEvent",
    "HubspotObject",
    "LoadedContact",
    "next_page_link",
    "IntervalReport",
    "PageResult",
    "UpsertResult",
]
