"""Wires the simulation core to the dialog layer for one play session."""

from .config import Config
from .engine.catalog import Catalog
from .engine.channel import OpenQuestChannel
from .engine.ledger import RewardLedger
from .engine.movement import InputController
from .engine.notifications import NotificationQueue
from .engine.scene import Scene
from .logging import get_logger
from .session import CaseSession
from .sharing import LoggingShareDispatcher, ShareDispatcher

logger = get_logger(__name__)

# Longest step one frame may simulate
MAX_FRAME_DT = 0.05


class Game:
    """Scene, input, ledger, notifications and session on a shared clock.

    Time is simulation time: the sum of every ``dt`` passed to frame(), each
    capped at MAX_FRAME_DT.
    """

    def __init__(
        self,
        config: Config,
        catalog: Catalog,
        dispatcher: ShareDispatcher | None = None,
    ):
        self.config = config
        self.catalog = catalog
        self.elapsed = 0.0
        self.channel = OpenQuestChannel()
        self.controller = InputController()
        self.notifications = NotificationQueue(self.clock, ttl=config.notification_ttl)
        self.ledger = RewardLedger(config.username, self.notifications)
        self.scene = Scene(
            catalog,
            self.channel,
            speed=config.speed,
            width=config.width,
            height=config.height,
        )
        self.session = CaseSession(
            catalog,
            self.ledger,
            self.notifications,
            dispatcher or LoggingShareDispatcher(),
            self.channel.subscribe(),
            clock=self.clock,
            incoming_share_delay=config.incoming_share_delay,
        )

    def clock(self) -> float:
        return self.elapsed

    def frame(self, dt: float) -> None:
        dt = min(dt, MAX_FRAME_DT)
        self.elapsed += dt
        self.scene.movement_locked = self.session.is_open
        self.scene.tick(dt, self.controller)
        self.session.pump()

    def shutdown(self) -> None:
        self.session.shutdown()
        logger.debug("game_shutdown", ticks=self.scene.ticks)
