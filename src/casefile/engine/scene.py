"""The simulated city: avatar, markers, obstacles and the tick order."""

from .catalog import Catalog
from .channel import OpenQuestChannel
from .movement import SPEED, InputController, MovementReconciler
from .physics import Body, Box, step
from .proximity import Marker, ProximityDetector
from .trigger import InteractionTrigger

WORLD_WIDTH = 800
WORLD_HEIGHT = 600
TILE_SIZE = 32
AVATAR_SIZE = 24.0
AVATAR_START = (400.0, 300.0)

BUILDINGS = (
    Box(100, 100, 100, 100),
    Box(600, 300, 150, 200),
)


class Scene:
    """Runs one simulation tick at a time.

    Within a tick: input is reconciled into velocity, the body is stepped,
    overlaps are tested, then the interaction trigger is evaluated.
    """

    def __init__(
        self,
        catalog: Catalog,
        channel: OpenQuestChannel,
        *,
        speed: float = SPEED,
        width: float = WORLD_WIDTH,
        height: float = WORLD_HEIGHT,
        obstacles: tuple[Box, ...] = BUILDINGS,
        start: tuple[float, float] = AVATAR_START,
    ):
        self.bounds = Box(width / 2, height / 2, width, height)
        self.obstacles = obstacles
        self.avatar = Body(Box(start[0], start[1], AVATAR_SIZE, AVATAR_SIZE))
        self.markers = tuple(Marker.for_quest(quest) for quest in catalog)
        self.reconciler = MovementReconciler(speed)
        self.detector = ProximityDetector(self.markers)
        self.trigger = InteractionTrigger(channel)
        self.movement_locked = False
        self.ticks = 0

    @property
    def nearby_quest_id(self) -> str | None:
        return self.detector.nearby_quest_id

    def tick(self, dt: float, controller: InputController) -> str | None:
        """Advance one frame; returns the quest id signalled this tick, if any."""
        state = controller.snapshot()

        if self.movement_locked:
            self.avatar.stop()
        else:
            self.reconciler.apply(state, self.avatar)

        step(self.avatar, dt, self.bounds, self.obstacles)
        self.detector.update(self.avatar.box, state.pointer_mode)
        self.ticks += 1

        return self.trigger.evaluate(
            state, self.detector.nearby_quest_id, self.avatar, controller.stick
        )
