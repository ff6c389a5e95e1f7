# settings.py
# Environment-driven configuration shared by the API and the CLI driver.

from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

@dataclass(frozen=True)
class Settings:
    default_height: int = 4
    default_width: int = 4
    settle_delay: float = 0.05  # seconds
    rate_limit: str = "100/minute"
    log_level: str = "INFO"

def _read(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a valid {cast.__name__}, got {raw!r}.") from None

def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Reads the TILEBOARD_* environment variables.
    Args:
        env (Optional[Mapping[str, str]]): Variables to read instead of os.environ.
    Returns:
        Settings: The resolved configuration.
    Raises:
        ValueError: If a numeric variable cannot be parsed or is out of range.
    """
    env = os.environ if env is None else env
    defaults = Settings()
    settings = Settings(
        default_height=_read(env, "TILEBOARD_DEFAULT_HEIGHT", int, defaults.default_height),
        default_width=_read(env, "TILEBOARD_DEFAULT_WIDTH", int, defaults.default_width),
        settle_delay=_read(env, "TILEBOARD_SETTLE_DELAY", float, defaults.settle_delay),
        rate_limit=env.get("TILEBOARD_RATE_LIMIT", defaults.rate_limit),
        log_level=env.get("TILEBOARD_LOG_LEVEL", defaults.log_level).upper(),
    )
    if settings.default_height <= 0 or settings.default_width <= 0:
        raise ValueError("TILEBOARD_DEFAULT_HEIGHT and TILEBOARD_DEFAULT_WIDTH must be positive.")
    if settings.settle_delay < 0:
        raise ValueError("TILEBOARD_SETTLE_DELAY must not be negative.")
    return settings

def configure_logging(level: str = "INFO") -> None:
    """Sends log records to stderr with a timestamped format."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
