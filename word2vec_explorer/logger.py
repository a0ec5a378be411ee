import logging
import os
from typing import Mapping, Optional

_ENABLED_VALUES = {"1", "true", "yes", "on"}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _debug_enabled(env=None) -> bool:
    source = os.environ if env is None else env
    value = str(source.get("WORD2VEC_DEBUG_LOGS", "")).strip().lower()
    return value in _ENABLED_VALUES


def _level(env=None) -> int:
    source = os.environ if env is None else env
    # An explicit level name beats the debug switch.
    name = str(source.get("WORD2VEC_LOG_LEVEL", "")).strip().upper()
    if name in _LEVELS:
        return getattr(logging, name)
    return logging.INFO if _debug_enabled(source) else logging.WARNING


def get_logger(
    name: str = "word2vec-explorer",
    env: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(_level(env))
    return logger
