import functools
import logging

from tanelorn.config import DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL


def configure_logging(level: str = DEFAULT_LOG_LEVEL, fmt: str = DEFAULT_LOG_FORMAT) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=fmt)


def log_call(fn):
    logger = logging.getLogger(fn.__module__)

    @functools.wraps(fn)
    def __wrapped(*args, **kwargs):
        logger.debug(f"Calling {fn.__qualname__} {args[1:]} {kwargs}")
        return fn(*args, **kwargs)
    return __wrapped
