# squid_sdk/logger.py
import logging
import sys

_FMT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d - %(message)s"

ROOT_LOGGER_NAME = "squid_sdk"


def init_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the SDK logger (once) and set its level."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(_FMT))
        root.addHandler(h)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Libs verbosity
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
