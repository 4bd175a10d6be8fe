from __future__ import annotations

import logging
import os

import uvicorn

from .env import get_settings


def _setup_prometheus_multiproc_dir() -> None:
    """Prepare the Prometheus multiprocess directory before Uvicorn forks workers.

    This ensures each process writes to a clean directory so metrics can be
    correctly aggregated by the multiprocess collector.
    """
    prom_dir = os.environ.get("PROMETHEUS_MULTIPROC_DIR")
    if not prom_dir:
        return

    os.makedirs(prom_dir, exist_ok=True)
    for filename in os.listdir(prom_dir):
        file_path = os.path.join(prom_dir, filename)
        if os.path.isfile(file_path):
            os.remove(file_path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Adjust logging levels for third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main() -> None:
    """Main entry point for the payments API."""

    settings = get_settings()
    _configure_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("LND REST gateway: %s", settings.lnd_rest_url)
    if settings.broadcast_redis_url:
        logger.info("Broadcasting payments on %s", settings.broadcast_channel)
    logger.info(
        "API will be available at: http://%s:%s", settings.api_host, settings.api_port
    )

    # Uvicorn doesn't support multi-worker with reload
    reload = settings.api_debug
    workers = 1 if reload else settings.api_workers

    _setup_prometheus_multiproc_dir()

    uvicorn.run(
        "lndpay.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        workers=workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
