"""Dialog layer bridging the open-quest channel, the dialog and the ledger."""

from collections.abc import Callable

from .engine.catalog import Catalog, Quest
from .engine.channel import Subscription
from .engine.dialog import Phase, QuestDialog
from .engine.ledger import RewardLedger
from .engine.notifications import NotificationQueue, Severity
from .logging import get_logger
from .sharing import ShareDispatcher

logger = get_logger(__name__)

INCOMING_SHARE_MESSAGE = "u/ChiefDetectiv shared a case with you!"


class CaseSession:
    """Owns at most one open QuestDialog and routes its side effects."""

    def __init__(
        self,
        catalog: Catalog,
        ledger: RewardLedger,
        notifications: NotificationQueue,
        dispatcher: ShareDispatcher,
        subscription: Subscription,
        *,
        clock: Callable[[], float],
        incoming_share_delay: float = 0.0,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self.notifications = notifications
        self.dispatcher = dispatcher
        self.subscription = subscription
        self.clock = clock
        self.dialog: QuestDialog | None = None
        self._incoming_share_at: float | None = (
            clock() + incoming_share_delay if incoming_share_delay > 0 else None
        )

    @property
    def is_open(self) -> bool:
        return self.dialog is not None and self.dialog.is_open

    @property
    def quest(self) -> Quest | None:
        return self.dialog.quest if self.dialog else None

    def _require_dialog(self) -> QuestDialog:
        if self.dialog is None or not self.dialog.is_open:
            raise RuntimeError("no quest dialog is open")
        return self.dialog

    def pump(self) -> None:
        """Run once per frame: open requested dialogs and fire timers."""
        if not self.subscription.closed:
            for quest_id in self.subscription.drain():
                self.open(quest_id)

        if self._incoming_share_at is not None and self.clock() >= self._incoming_share_at:
            self._incoming_share_at = None
            self.notifications.push(INCOMING_SHARE_MESSAGE, Severity.INFO)
            logger.info("incoming_share_received")

        self.notifications.expire()

    def open(self, quest_id: str) -> bool:
        """Open a dialog; ignored while another one is open."""
        if self.is_open:
            logger.debug("quest_open_ignored", quest_id=quest_id)
            return False
        quest = self.catalog.get(quest_id)
        if quest is None:
            logger.warning("unknown_quest_requested", quest_id=quest_id)
            return False
        self.dialog = QuestDialog.open(quest, completed=self.ledger.is_completed(quest_id))
        logger.info("quest_opened", quest_id=quest_id, phase=self.dialog.phase.value)
        return True

    def accept(self) -> None:
        dialog = self._require_dialog()
        dialog.accept()
        self.ledger.set_active(dialog.quest.id)
        self.notifications.push(f"Case accepted: {dialog.quest.title}", Severity.INFO)
        logger.info("quest_accepted", quest_id=dialog.quest.id)

    def decline(self) -> None:
        dialog = self._require_dialog()
        dialog.decline()
        logger.info("quest_declined", quest_id=dialog.quest.id)

    def select(self, choice: str) -> None:
        self._require_dialog().select(choice)

    def type_answer(self, text: str) -> None:
        self._require_dialog().type_answer(text)

    def submit(self) -> bool:
        dialog = self._require_dialog()
        if not dialog.submit():
            logger.info("answer_rejected", quest_id=dialog.quest.id)
            return False
        self.ledger.grant(dialog.quest)
        return True

    def retry(self) -> None:
        self._require_dialog().retry()

    def start_share(self) -> None:
        self._require_dialog().start_share()

    def set_share_target(self, text: str) -> None:
        self._require_dialog().set_share_target(text)

    def back(self) -> None:
        self._require_dialog().back()

    def send_share(self) -> bool:
        dialog = self._require_dialog()
        recipient = dialog.send_share()
        if recipient is None:
            return False
        self.notifications.push(f"Case sent to u/{recipient}", Severity.SUCCESS)
        self.dispatcher.dispatch(dialog.quest.id, recipient)
        return True

    def close(self) -> None:
        dialog = self._require_dialog()
        dialog.close()
        logger.debug("quest_closed", quest_id=dialog.quest.id)

    @property
    def phase(self) -> Phase:
        return self.dialog.phase if self.dialog else Phase.CLOSED

    def shutdown(self) -> None:
        """Release the channel subscription and cancel pending timers."""
        self._incoming_share_at = None
        self.subscription.close()
