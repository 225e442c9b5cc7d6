"""Player progress and the idempotent reward grant."""

from dataclasses import dataclass, field

from ..logging import get_logger
from .catalog import Quest
from .notifications import NotificationQueue, Severity

logger = get_logger(__name__)


@dataclass
class PlayerState:
    """All mutable per-player progress. Only RewardLedger writes to it."""

    username: str
    xp: int = 0
    currency: int = 0
    completed_quest_ids: set[str] = field(default_factory=set)
    active_quest_id: str | None = None


@dataclass(frozen=True)
class PlayerSnapshot:
    username: str
    xp: int
    currency: int
    completed_quest_ids: frozenset[str]
    active_quest_id: str | None


class RewardLedger:
    """Single source of truth for PlayerState."""

    def __init__(self, username: str, notifications: NotificationQueue):
        self._state = PlayerState(username=username)
        self.notifications = notifications

    @property
    def xp(self) -> int:
        return self._state.xp

    @property
    def currency(self) -> int:
        return self._state.currency

    @property
    def active_quest_id(self) -> str | None:
        return self._state.active_quest_id

    def is_completed(self, quest_id: str) -> bool:
        return quest_id in self._state.completed_quest_ids

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            username=self._state.username,
            xp=self._state.xp,
            currency=self._state.currency,
            completed_quest_ids=frozenset(self._state.completed_quest_ids),
            active_quest_id=self._state.active_quest_id,
        )

    def set_active(self, quest_id: str) -> None:
        self._state.active_quest_id = quest_id
        logger.debug("active_quest_set", quest_id=quest_id)

    def grant(self, quest: Quest) -> bool:
        """Apply the quest's rewards once. Returns False if already granted."""
        if self.is_completed(quest.id):
            logger.debug("reward_already_granted", quest_id=quest.id)
            return False

        self._state.xp += quest.rewards.xp
        self._state.currency += quest.rewards.currency
        self._state.completed_quest_ids.add(quest.id)
        self._state.active_quest_id = None
        self.notifications.push(f"Case Solved! +{quest.rewards.xp} XP", Severity.SUCCESS)
        logger.info(
            "reward_granted",
            quest_id=quest.id,
            xp=quest.rewards.xp,
            currency=quest.rewards.currency,
            total_xp=self._state.xp,
        )
        return True
