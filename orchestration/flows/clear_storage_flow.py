"""Prefect 2 – job manual: limpa cursores + data de conclusão"""
from prefect import flow, get_run_logger

from orchestration.common import utils
from orchestration.common.sync_state import SyncState


@flow(name="HubSpot Clear Storage")
def hubspot_clear_storage_flow() -> None:
    log = get_run_logger()
    SyncState(utils.build_store()).clear()
    log.info("checkpoints cleared – next interval run starts a fresh full pass")
