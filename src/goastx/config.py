import logging
import os

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_log_level() -> int:
    name = os.getenv("GOASTX_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unsupported log level '{name}' in GOASTX_LOG_LEVEL")
    return level


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else get_log_level()
    logging.basicConfig(level=level, format=_LOG_FORMAT)
