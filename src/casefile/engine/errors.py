"""Exceptions raised by the game engine."""


class CatalogError(Exception):
    """Base exception for quest catalog problems."""


class CatalogLoadError(CatalogError):
    """Raised when the catalog file is missing or not valid JSON."""


class CatalogValidationError(CatalogError):
    """Raised when a quest record is malformed."""


class InvalidTransition(Exception):
    """Raised when a dialog action is not allowed in the current phase."""

    def __init__(self, phase: str, action: str):
        super().__init__(f"cannot {action} while dialog is in phase {phase!r}")
        self.phase = phase
        self.action = action


class SubscriptionError(Exception):
    """Raised on misuse of an open-quest channel subscription."""
