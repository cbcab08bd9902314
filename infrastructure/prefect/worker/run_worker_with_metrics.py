import signal
import subprocess
import sys
import time

import structlog
from prometheus_client import start_http_server

from infrastructure.config.settings import settings
from infrastructure.observability import configure_logging

configure_logging()
log = structlog.get_logger(__name__)

worker_process_instance = None


def handle_signal(signum, frame):
    name = signal.Signals(signum).name if isinstance(signum, int) else signum
    log.warning("Signal received, shutting down", signal=name)
    if worker_process_instance and worker_process_instance.poll() is None:
        worker_process_instance.terminate()
        try:
            worker_process_instance.wait(timeout=10)
        except subprocess.TimeoutExpired:
            log.warning("Prefect worker did not stop in time, killing it")
            worker_process_instance.kill()
    sys.exit(0)


if __name__ == "__main__":
    if not settings.PREFECT_API_URL or not settings.PREFECT_WORK_POOL_NAME:
        log.error("PREFECT_API_URL and PREFECT_WORK_POOL_NAME must be set.")
        sys.exit(1)

    start_http_server(settings.HOST_METRICS_PORT)
    log.info("Prometheus metrics server started", port=settings.HOST_METRICS_PORT)

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    worker_command = ["prefect", "worker", "start", "--pool", settings.PREFECT_WORK_POOL_NAME]
    log.info("Starting Prefect worker", command=" ".join(worker_command))
    worker_process_instance = subprocess.Popen(worker_command)

    try:
        while worker_process_instance.poll() is None:
            time.sleep(10)
        log.error("Prefect worker exited unexpectedly", returncode=worker_process_instance.returncode)
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received.")
    finally:
        handle_signal(signal.SIGTERM, None)
