"""Application factory for Case Files."""

from importlib import resources
from pathlib import Path

from .client import GameClient
from .config import Config
from .engine.loader import load_catalog
from .game import Game
from .logging import get_logger

logger = get_logger(__name__)


def _get_data_path() -> Path:
    """Locate quests.json via importlib.resources (works when installed in a venv)."""
    return resources.files("casefile.data").joinpath("quests.json")


def create_game(config: Config | None = None) -> Game:
    """Load the catalog and build the simulation without a window."""
    config = config or Config.from_env()
    catalog = load_catalog(config.catalog_path or _get_data_path())
    logger.info("catalog_loaded", quests=len(catalog))
    return Game(config, catalog)


def create_app(config: Config | None = None) -> GameClient:
    """Create the pygame client around a fresh game."""
    config = config or Config.from_env()
    game = create_game(config)
    client = GameClient(game, config)
    logger.info("startup_complete", width=config.width, height=config.height)
    return client
