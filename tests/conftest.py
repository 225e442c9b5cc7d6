"""Shared test fixtures for Case Files."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


import pytest  # noqa: E402

from casefile.app import _get_data_path  # noqa: E402
from casefile.config import Config  # noqa: E402
from casefile.engine.catalog import Catalog  # noqa: E402
from casefile.engine.channel import OpenQuestChannel  # noqa: E402
from casefile.engine.ledger import RewardLedger  # noqa: E402
from casefile.engine.loader import load_catalog  # noqa: E402
from casefile.engine.movement import InputController  # noqa: E402
from casefile.engine.notifications import NotificationQueue  # noqa: E402
from casefile.engine.scene import Scene  # noqa: E402
from casefile.game import Game  # noqa: E402
from casefile.session import CaseSession  # noqa: E402


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingDispatcher:
    def __init__(self):
        self.shares: list[tuple[str, str]] = []

    def dispatch(self, quest_id: str, recipient: str) -> None:
        self.shares.append((quest_id, recipient))


@pytest.fixture
def catalog() -> Catalog:
    return load_catalog(_get_data_path())


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(100.0)


@pytest.fixture
def notifications(clock: FakeClock) -> NotificationQueue:
    return NotificationQueue(clock, ttl=3.0)


@pytest.fixture
def ledger(notifications: NotificationQueue) -> RewardLedger:
    return RewardLedger("u/TestDetective", notifications)


@pytest.fixture
def channel() -> OpenQuestChannel:
    return OpenQuestChannel()


@pytest.fixture
def controller() -> InputController:
    return InputController()


@pytest.fixture
def scene(catalog: Catalog, channel: OpenQuestChannel) -> Scene:
    return Scene(catalog, channel)


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def session(catalog, ledger, notifications, dispatcher, channel, clock):
    case_session = CaseSession(
        catalog,
        ledger,
        notifications,
        dispatcher,
        channel.subscribe(),
        clock=clock,
    )
    yield case_session
    case_session.shutdown()


@pytest.fixture
def test_config() -> Config:
    return Config(
        username="u/TestDetective",
        headless=True,
        incoming_share_delay=0.0,
    )


@pytest.fixture
def game(test_config: Config, catalog: Catalog, dispatcher: RecordingDispatcher):
    instance = Game(test_config, catalog, dispatcher=dispatcher)
    yield instance
    instance.shutdown()


@pytest.fixture
def client(game: Game, test_config: Config):
    import pygame

    from casefile.client import GameClient

    instance = GameClient(game, test_config)
    yield instance
    pygame.quit()
