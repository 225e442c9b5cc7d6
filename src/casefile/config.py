"""Configuration for Case Files."""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Client configuration."""

    username: str = "u/RookieCop"
    width: int = 800
    height: int = 600
    tick_rate: int = 60
    speed: float = 160.0
    catalog_path: Path | None = None
    headless: bool = False
    # seconds before the demo "case shared with you" notice; 0 disables it
    incoming_share_delay: float = 10.0
    notification_ttl: float = 3.0
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_recipients: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        catalog_path = os.getenv("CASEFILE_CATALOG_PATH")
        log_file = os.getenv("CASEFILE_LOG_FILE")

        return cls(
            username=os.getenv("CASEFILE_USERNAME", cls.username),
            width=int(os.getenv("CASEFILE_WIDTH", str(cls.width))),
            height=int(os.getenv("CASEFILE_HEIGHT", str(cls.height))),
            tick_rate=int(os.getenv("CASEFILE_TICK_RATE", str(cls.tick_rate))),
            speed=float(os.getenv("CASEFILE_SPEED", str(cls.speed))),
            catalog_path=Path(catalog_path) if catalog_path else None,
            headless=_env_flag("CASEFILE_HEADLESS", cls.headless),
            incoming_share_delay=float(
                os.getenv("CASEFILE_INCOMING_SHARE_DELAY", str(cls.incoming_share_delay))
            ),
            notification_ttl=float(
                os.getenv("CASEFILE_NOTIFICATION_TTL", str(cls.notification_ttl))
            ),
            log_level=os.getenv("CASEFILE_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_env_flag("CASEFILE_JSON_LOGS", cls.json_logs),
            hash_recipients=_env_flag("CASEFILE_HASH_RECIPIENTS", cls.hash_recipients),
        )
