import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

logger = logging.getLogger("mc_router_sync")


def setup_logger(log_level: str = "INFO") -> logging.Logger:
    """Configure process-wide logging from the loaded settings."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # docker-py and requests log every request at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("docker").setLevel(logging.WARNING)

    return logger
