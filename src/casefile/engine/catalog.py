"""Immutable quest definitions.

These are loaded once at startup and shared by the scene, the dialog layer
and the ledger. A quest is either a ChoiceQuest (fixed set of options) or a
FreeTextQuest (typed answer); both compare answers case-insensitively.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum


class QuestCategory(str, Enum):
    PUZZLE = "PUZZLE"
    FETCH = "FETCH"
    MATH = "MATH"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Rewards:
    xp: int
    currency: int


@dataclass(frozen=True)
class _QuestBase:
    id: str
    title: str
    description: str
    puzzle_prompt: str
    correct_answer: str
    rewards: Rewards
    location: Position
    category: QuestCategory

    def accepts(self, answer: str | None) -> bool:
        """Exact match ignoring case only; no trimming."""
        if answer is None:
            return False
        return answer.lower() == self.correct_answer.lower()


@dataclass(frozen=True)
class FreeTextQuest(_QuestBase):
    """A case solved by typing the answer."""


@dataclass(frozen=True)
class ChoiceQuest(_QuestBase):
    """A case solved by picking one of a fixed set of options."""

    options: tuple[str, ...]


Quest = ChoiceQuest | FreeTextQuest


@dataclass(frozen=True)
class Catalog:
    """All quests keyed by id, in definition order."""

    quests: Mapping[str, Quest]

    def get(self, quest_id: str) -> Quest | None:
        return self.quests.get(quest_id)

    def __contains__(self, quest_id: object) -> bool:
        return quest_id in self.quests

    def __iter__(self) -> Iterator[Quest]:
        return iter(self.quests.values())

    def __len__(self) -> int:
        return len(self.quests)
