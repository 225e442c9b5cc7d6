"""Tests for marker proximity tracking."""

from casefile.engine.catalog import Catalog
from casefile.engine.physics import Box
from casefile.engine.proximity import (
    KEY_PROMPT,
    MARKER_SIZE,
    TOUCH_PROMPT,
    Marker,
    ProximityDetector,
)


def _avatar_at(x: float, y: float) -> Box:
    return Box(x, y, 24, 24)


def _detector(catalog: Catalog) -> ProximityDetector:
    return ProximityDetector(Marker.for_quest(quest) for quest in catalog)


def test_markers_sit_on_quest_locations(catalog: Catalog):
    marker = Marker.for_quest(catalog.get("q_dock_delivery"))
    assert marker.box == Box(100, 500, MARKER_SIZE, MARKER_SIZE)


def test_nothing_tracked_when_far(catalog: Catalog):
    detector = _detector(catalog)
    assert detector.update(_avatar_at(400, 300)) is None
    assert not detector.prompt.visible


def test_overlap_tracks_quest_and_shows_prompt(catalog: Catalog):
    detector = _detector(catalog)
    assert detector.update(_avatar_at(110, 490)) == "q_dock_delivery"
    assert detector.prompt.visible
    assert (detector.prompt.x, detector.prompt.y) == (70, 450)
    assert detector.prompt.text == KEY_PROMPT


def test_touch_hint_after_pointer_input(catalog: Catalog):
    detector = _detector(catalog)
    detector.update(_avatar_at(100, 500), pointer_mode=True)
    assert detector.prompt.text == TOUCH_PROMPT


def test_leaving_clears_tracking(catalog: Catalog):
    detector = _detector(catalog)
    detector.update(_avatar_at(100, 500))
    assert detector.update(_avatar_at(300, 500)) is None
    assert detector.nearby_quest_id is None
    assert not detector.prompt.visible


def test_moving_between_markers_switches_target():
    detector = ProximityDetector([
        Marker("a", Box(100, 100, 32, 32)),
        Marker("b", Box(300, 100, 32, 32)),
    ])
    detector.update(_avatar_at(100, 100))
    assert detector.update(_avatar_at(300, 100)) == "b"


def test_simultaneous_overlap_last_marker_wins():
    """Two overlapping markers: the later one in marker order is tracked."""
    detector = ProximityDetector([
        Marker("a", Box(100, 100, 32, 32)),
        Marker("b", Box(120, 100, 32, 32)),
    ])
    assert detector.update(_avatar_at(110, 100)) == "b"
    assert detector.prompt.x == 120 - 30
