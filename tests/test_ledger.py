"""Tests for the reward ledger."""

from casefile.engine.catalog import Catalog
from casefile.engine.ledger import RewardLedger
from casefile.engine.notifications import NotificationQueue, Severity


def test_fresh_player(ledger: RewardLedger):
    snapshot = ledger.snapshot()
    assert snapshot.username == "u/TestDetective"
    assert snapshot.xp == 0
    assert snapshot.currency == 0
    assert snapshot.completed_quest_ids == frozenset()
    assert snapshot.active_quest_id is None


def test_grant_applies_rewards(ledger: RewardLedger, catalog: Catalog):
    dock = catalog.get("q_dock_delivery")
    ledger.set_active(dock.id)
    assert ledger.grant(dock)
    assert ledger.xp == 50
    assert ledger.currency == 100
    assert ledger.is_completed(dock.id)
    assert ledger.active_quest_id is None


def test_grant_is_idempotent(
    ledger: RewardLedger, catalog: Catalog, notifications: NotificationQueue
):
    """Replaying a completion never double-grants or re-notifies."""
    heist = catalog.get("q_rooftop_heist")
    assert ledger.grant(heist)
    assert not ledger.grant(heist)
    assert ledger.xp == 100
    assert ledger.currency == 50
    assert len(ledger.snapshot().completed_quest_ids) == 1
    assert [n.message for n in notifications.visible()] == ["Case Solved! +100 XP"]


def test_grant_notification_is_success(
    ledger: RewardLedger, catalog: Catalog, notifications: NotificationQueue
):
    ledger.grant(catalog.get("q_neon_sign"))
    (note,) = notifications.visible()
    assert note.severity is Severity.SUCCESS


def test_rewards_accumulate(ledger: RewardLedger, catalog: Catalog):
    for quest in catalog:
        ledger.grant(quest)
    assert ledger.xp == 225
    assert ledger.currency == 180


def test_snapshot_is_detached(ledger: RewardLedger, catalog: Catalog):
    before = ledger.snapshot()
    ledger.grant(catalog.get("q_neon_sign"))
    assert before.completed_quest_ids == frozenset()
