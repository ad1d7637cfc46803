"""Client configuration loaded from the environment."""
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_API_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Config:
    api_url: str = DEFAULT_API_URL
    timeout: float | None = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def parse_timeout(value: str) -> float | None:
    """Parse a timeout in seconds. ``0`` disables the timeout."""
    seconds = float(value)
    if seconds < 0:
        raise ValueError(f"Timeout must not be negative: {value}")
    return seconds or None


def load_config() -> Config:
    load_dotenv(find_dotenv(usecwd=True))
    return Config(
        api_url=os.getenv("QUIZDECK_API_URL", DEFAULT_API_URL).rstrip("/"),
        timeout=parse_timeout(os.getenv("QUIZDECK_TIMEOUT", str(DEFAULT_TIMEOUT))),
        log_level=os.getenv("QUIZDECK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
