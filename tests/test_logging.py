"""Tests for log processors."""

from casefile.logging import _level_to_int, hash_recipient_processor


def test_recipient_is_hashed():
    event = hash_recipient_processor(None, "info", {"event": "quest_shared", "recipient": "spez"})
    assert "recipient" not in event
    assert len(event["recipient_hash"]) == 12


def test_events_without_recipient_untouched():
    event = {"event": "quest_opened", "quest_id": "q_neon_sign"}
    assert hash_recipient_processor(None, "info", dict(event)) == event


def test_level_names_map_to_numbers():
    assert _level_to_int("debug") == 10
    assert _level_to_int("WARNING") == 30
    assert _level_to_int("verbose") == 20
