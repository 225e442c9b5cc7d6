"""Boundary to the external service that delivers shared cases."""

from typing import Protocol

from .logging import get_logger

logger = get_logger(__name__)


class ShareDispatcher(Protocol):
    def dispatch(self, quest_id: str, recipient: str) -> None: ...


class LoggingShareDispatcher:
    """Stand-in for the real share transport: records the share in the log."""

    def dispatch(self, quest_id: str, recipient: str) -> None:
        logger.info("quest_shared", quest_id=quest_id, recipient=recipient)
