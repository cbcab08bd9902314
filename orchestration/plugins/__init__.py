from . import clear_storage, handle_event, sync_interval  # noqa: F401

print("Módulos de plugin em orchestration.plugins importados; deployments devem ter sido registrados.")
