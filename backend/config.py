import logging
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment (and .env)."""
    backend_url: str = "http://localhost:3000"
    timeout: float = 10.0
    retries: int = 2
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            backend_url=os.environ.get("GOLF_BACKEND_URL", cls.backend_url).rstrip("/"),
            timeout=float(os.environ.get("GOLF_BACKEND_TIMEOUT", cls.timeout)),
            retries=int(os.environ.get("GOLF_BACKEND_RETRIES", cls.retries)),
            cors_origins=_split_csv(
                os.environ.get("GOLF_CORS_ORIGINS", "http://localhost:5173")
            ),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Set the root log format once at process start."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
