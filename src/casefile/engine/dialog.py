"""The per-quest dialog state machine.

    intro --accept--> puzzle --submit--> result --start_share--> share
      |                  ^                 |                       |
   decline               +-----retry-------+                  send_share
      v                                    v                       v
    closed <-------------close------------ * --------------------> closed

A dialog opened for an already-completed quest starts in ``result``.
The machine itself never touches player data; CaseSession applies the
side effects of accept, a correct submit and send_share.
"""

from dataclasses import dataclass
from enum import Enum

from .catalog import ChoiceQuest, FreeTextQuest, Quest
from .errors import InvalidTransition

ALREADY_SOLVED = "You have already solved this case."
CORRECT = "Correct! You cracked the case."
INCORRECT = "Incorrect. Try again, detective."


class Phase(str, Enum):
    INTRO = "intro"
    PUZZLE = "puzzle"
    RESULT = "result"
    SHARE = "share"
    CLOSED = "closed"


@dataclass
class QuestDialog:
    quest: Quest
    phase: Phase = Phase.INTRO
    selected_choice: str | None = None
    typed_answer: str = ""
    result_message: str = ""
    share_target: str = ""
    solved: bool = False
    already_completed: bool = False

    @classmethod
    def open(cls, quest: Quest, *, completed: bool) -> "QuestDialog":
        if completed:
            return cls(
                quest=quest,
                phase=Phase.RESULT,
                result_message=ALREADY_SOLVED,
                already_completed=True,
            )
        return cls(quest=quest)

    @property
    def is_open(self) -> bool:
        return self.phase is not Phase.CLOSED

    @property
    def can_share(self) -> bool:
        return self.phase is Phase.RESULT and (self.solved or self.already_completed)

    @property
    def answer(self) -> str | None:
        match self.quest:
            case ChoiceQuest():
                return self.selected_choice
            case FreeTextQuest():
                return self.typed_answer or None

    def _require(self, action: str, *phases: Phase) -> None:
        if self.phase not in phases:
            raise InvalidTransition(self.phase.value, action)

    def accept(self) -> None:
        self._require("accept", Phase.INTRO)
        self.phase = Phase.PUZZLE

    def decline(self) -> None:
        self._require("decline", Phase.INTRO)
        self.phase = Phase.CLOSED

    def select(self, choice: str) -> None:
        self._require("select", Phase.PUZZLE)
        if not isinstance(self.quest, ChoiceQuest):
            raise InvalidTransition(self.phase.value, "select a choice for a free-text quest")
        if choice not in self.quest.options:
            raise ValueError(f"{choice!r} is not an option of quest {self.quest.id!r}")
        self.selected_choice = choice

    def type_answer(self, text: str) -> None:
        self._require("type", Phase.PUZZLE)
        if not isinstance(self.quest, FreeTextQuest):
            raise InvalidTransition(self.phase.value, "type an answer for a choice quest")
        self.typed_answer = text

    def submit(self) -> bool:
        """Validate the current answer and move to ``result``."""
        self._require("submit", Phase.PUZZLE)
        answer = self.answer
        if answer is None:
            raise InvalidTransition(self.phase.value, "submit without an answer")
        self.solved = self.quest.accepts(answer)
        self.result_message = CORRECT if self.solved else INCORRECT
        self.phase = Phase.RESULT
        return self.solved

    def retry(self) -> None:
        self._require("retry", Phase.RESULT)
        if self.solved or self.already_completed:
            raise InvalidTransition(self.phase.value, "retry a solved case")
        self.phase = Phase.PUZZLE

    def start_share(self) -> None:
        if not self.can_share:
            raise InvalidTransition(self.phase.value, "share")
        self.phase = Phase.SHARE

    def set_share_target(self, text: str) -> None:
        self._require("edit recipient", Phase.SHARE)
        self.share_target = text

    def back(self) -> None:
        self._require("go back", Phase.SHARE)
        self.phase = Phase.RESULT

    def send_share(self) -> str | None:
        """Close the dialog and return the recipient; None if none was given."""
        self._require("send", Phase.SHARE)
        if not self.share_target.strip():
            return None
        recipient = self.share_target
        self.share_target = ""
        self.phase = Phase.CLOSED
        return recipient

    def close(self) -> None:
        self.phase = Phase.CLOSED
