"""Edge-triggered interaction: turns "quest nearby + intent" into a signal."""

from ..logging import get_logger
from .channel import OpenQuestChannel
from .movement import AnalogStick, InputState
from .physics import Body

logger = get_logger(__name__)


class InteractionTrigger:
    def __init__(self, channel: OpenQuestChannel):
        self.channel = channel

    def evaluate(
        self,
        state: InputState,
        nearby_quest_id: str | None,
        body: Body,
        stick: AnalogStick,
    ) -> str | None:
        """Fire on an interact key press or a prompt tap.

        Presses are latched by the controller, so a press and release that
        both land between two ticks still count.

        Returns the quest id that was signalled, if any.
        """
        if not (state.interact_pressed or state.prompt_tapped) or nearby_quest_id is None:
            return None

        self.channel.publish(nearby_quest_id)
        body.stop()
        stick.release()
        logger.info("interaction_triggered", quest_id=nearby_quest_id)
        return nearby_quest_id
