"""Case Files: a small detective city with quest puzzles."""

from .app import create_app, create_game
from .config import Config
from .logging import configure_logging, get_logger

__all__ = ["main", "create_app", "create_game", "Config"]


def main() -> None:
    """Entry point for the Case Files client."""
    config = Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
        hash_recipients=config.hash_recipients,
    )

    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        username=config.username,
        tick_rate=config.tick_rate,
        log_level=config.log_level,
    )

    app = create_app(config)
    app.run()
