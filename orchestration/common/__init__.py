from .sync_service import SyncService
from .sync_state import SyncState
from .synchronizer import ENTITY_SPECS, EntitySpec, HubspotEntitySynchronizer

__all__ = ["SyncService", "SyncState", "ENTITY_SPECS", "EntitySpec", "HubspotEntitySynchronizer"]
