"""Proximity detection between the avatar and quest markers."""

from collections.abc import Iterable
from dataclasses import dataclass

from ..logging import get_logger
from .catalog import Quest
from .physics import Box

logger = get_logger(__name__)

MARKER_SIZE = 32.0
PROMPT_OFFSET_X = -30.0
PROMPT_OFFSET_Y = -50.0
TOUCH_PROMPT = "Tap to Interact"
KEY_PROMPT = "Interact (E)"


@dataclass(frozen=True)
class Marker:
    """Static overlap volume for one quest."""

    quest_id: str
    box: Box

    @classmethod
    def for_quest(cls, quest: Quest) -> "Marker":
        box = Box(quest.location.x, quest.location.y, MARKER_SIZE, MARKER_SIZE)
        return cls(quest_id=quest.id, box=box)


@dataclass
class Prompt:
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    text: str = KEY_PROMPT


class ProximityDetector:
    """Tracks the single quest currently in interaction range.

    When several markers overlap the avatar in the same tick, the last one
    in marker order wins.
    """

    def __init__(self, markers: Iterable[Marker]):
        self.markers = tuple(markers)
        self.nearby_quest_id: str | None = None
        self.prompt = Prompt()

    def update(self, avatar: Box, pointer_mode: bool = False) -> str | None:
        overlapping = [marker for marker in self.markers if marker.box.overlaps(avatar)]

        for marker in overlapping:
            self._track(marker, pointer_mode)

        if self.nearby_quest_id is not None and not any(
            marker.quest_id == self.nearby_quest_id for marker in overlapping
        ):
            self.clear()

        return self.nearby_quest_id

    def _track(self, marker: Marker, pointer_mode: bool) -> None:
        if marker.quest_id != self.nearby_quest_id:
            logger.debug("quest_in_range", quest_id=marker.quest_id)
        self.nearby_quest_id = marker.quest_id
        self.prompt.x = marker.box.cx + PROMPT_OFFSET_X
        self.prompt.y = marker.box.cy + PROMPT_OFFSET_Y
        self.prompt.text = TOUCH_PROMPT if pointer_mode else KEY_PROMPT
        self.prompt.visible = True

    def clear(self) -> None:
        if self.nearby_quest_id is not None:
            logger.debug("quest_out_of_range", quest_id=self.nearby_quest_id)
        self.nearby_quest_id = None
        self.prompt.visible = False
