import signal
from typing import Any

from router_sync.backends.mc_router import McRouterRegistry
from router_sync.config import load_settings
from router_sync.core.docker_discovery import DockerDiscovery
from router_sync.core.sync_engine import SyncEngine
from router_sync.logger import logger, setup_logger


def main() -> None:
    settings = load_settings()
    setup_logger(settings.log_level)
    logger.info("Starting mc-router synchronization service...")

    registry = McRouterRegistry(settings.mc_router_api_url, timeout=settings.http_timeout)
    discovery = DockerDiscovery(settings.docker_socket_path)
    engine = SyncEngine(registry, discovery, settings=settings)

    def shutdown_handler(signum: int, frame: Any) -> None:
        logger.info("Shutting down...")
        engine.stop()

    # Register signal handlers
    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    try:
        engine.run()
    except Exception as e:
        logger.exception(f"An unhandled error occurred in the main execution: {e}")
    finally:
        registry.close()
        discovery.close()


if __name__ == "__main__":
    main()
