"""
Configuration defaults and environment overrides.

Engine constants live here as read-only module values. The CLI and the HTTP
API read the ``TOPICTREE_*`` environment variables when a caller does not pass
explicit values.
"""
import logging
import os
from typing import Optional

DEFAULT_MAX_VOCAB = 250
DEFAULT_MAX_TERMS_PER_LABEL = 4

# k-means bounds
MIN_CLUSTERS = 2
MAX_CLUSTERS = 10
MAX_AUTO_CLUSTERS = 8
MAX_ITERATIONS = 30

LABEL_SEPARATOR = " · "
PREVIEW_LENGTH = 120

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        logging.getLogger(__name__).warning(
            "Ignoring invalid %s=%r, using %d", name, raw, default
        )
        return default
    return value


def get_max_vocab() -> int:
    """Vocabulary cap, overridable with TOPICTREE_MAX_VOCAB."""
    return _env_int("TOPICTREE_MAX_VOCAB", DEFAULT_MAX_VOCAB)


def get_max_terms_per_label() -> int:
    """Label term cap, overridable with TOPICTREE_MAX_TERMS."""
    return _env_int("TOPICTREE_MAX_TERMS", DEFAULT_MAX_TERMS_PER_LABEL)


def get_cors_origins() -> list:
    origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


def configure_logging(verbose: bool = False, level: Optional[str] = None) -> None:
    """
    Set up root logging for the CLI and the API server.

    Parameters
    ----
    verbose : bool
        Force DEBUG level
    level : str, optional
        Explicit level name; falls back to TOPICTREE_LOG_LEVEL, then INFO
    """
    if verbose:
        resolved = logging.DEBUG
    else:
        name = (level or os.getenv("TOPICTREE_LOG_LEVEL") or "INFO").upper()
        resolved = getattr(logging, name, logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)
