"""
Logging setup for the composition roots.
Every other module only calls logging.getLogger(__name__).
"""

import logging

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Reduce noise from HTTP / AWS client libraries
_NOISY_LOGGERS = ("httpx", "httpcore", "botocore", "urllib3", "faiss")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_FORMAT,
        datefmt="%H:%M:%S",
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
