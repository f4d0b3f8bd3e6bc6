"""Logging configuration for SlideGrab."""
import logging
import sys

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("aiohttp.access", "PIL", "uvicorn.access")


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure application logging.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
