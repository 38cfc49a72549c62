"""Logging helpers for applications using the GCS REST client."""

import logging

ROOT_LOGGER_NAME = "gcs_rest"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.INFO, verbose: bool = False) -> None:
    """Configure root logging for command line output.

    Args:
        level: Logging level name or number.
        verbose: Force debug logging regardless of ``level``.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format=DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs every request at INFO
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``gcs_rest`` namespace.

    Args:
        name: Child name, e.g. ``"cli"``. Names already in the namespace
            are used unchanged.

    Returns:
        The logger.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
