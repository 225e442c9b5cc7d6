"""Tests for pygame event translation and the headless frame loop."""

import pygame

from casefile.client import MOUSE_POINTER_ID, GameClient
from casefile.engine.dialog import Phase
from casefile.engine.physics import Box


def _key(kind: int, key: int) -> pygame.event.Event:
    return pygame.event.Event(kind, key=key, mod=0, unicode="", scancode=0)


def _mouse(kind: int, pos: tuple[int, int], **extra) -> pygame.event.Event:
    return pygame.event.Event(kind, pos=pos, button=1, touch=False, **extra)


def _open_dock_dialog(client: GameClient) -> None:
    client.game.scene.avatar.box = Box(100, 500, 24, 24)
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_e))
    client.game.frame(1 / 60)
    assert client.game.session.is_open


def test_arrow_and_wasd_keys(client: GameClient):
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_LEFT))
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_w))
    state = client.game.controller.snapshot()
    assert state.keys.left and state.keys.up
    client.handle_event(_key(pygame.KEYUP, pygame.K_LEFT))
    assert not client.game.controller.snapshot().keys.left


def test_mouse_drag_drives_joystick(client: GameClient):
    client.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, (300, 300)))
    client.handle_event(_mouse(pygame.MOUSEMOTION, (300, 250), rel=(0, -50), buttons=(1, 0, 0)))
    state = client.game.controller.snapshot()
    assert state.is_joystick_active
    assert state.joystick_pointer_id == MOUSE_POINTER_ID
    assert state.analog.y < 0
    client.handle_event(_mouse(pygame.MOUSEBUTTONUP, (300, 250)))
    assert not client.game.controller.snapshot().is_joystick_active


def test_second_finger_does_not_hijack(client: GameClient):
    down = pygame.event.Event(pygame.FINGERDOWN, touch_id=0, finger_id=1, x=0.5, y=0.5, dx=0, dy=0)
    other = pygame.event.Event(pygame.FINGERDOWN, touch_id=0, finger_id=2, x=0.1, y=0.1, dx=0, dy=0)
    other_up = pygame.event.Event(pygame.FINGERUP, touch_id=0, finger_id=2, x=0.1, y=0.1, dx=0, dy=0)
    client.handle_event(down)
    client.handle_event(other)
    client.handle_event(other_up)
    stick = client.game.controller.stick
    assert stick.active
    assert stick.pointer_id == 1
    assert (stick.origin.x, stick.origin.y) == (400, 300)


def test_leaving_window_releases_joystick(client: GameClient):
    client.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, (300, 300)))
    client.handle_event(pygame.event.Event(pygame.WINDOWLEAVE))
    assert not client.game.controller.stick.active


def test_tapping_prompt_interacts(client: GameClient):
    client.game.scene.avatar.box = Box(100, 500, 24, 24)
    client.game.frame(1 / 60)
    prompt = client.game.scene.detector.prompt
    assert prompt.visible
    client.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, (int(prompt.x) + 5, int(prompt.y) + 5)))
    assert not client.game.controller.stick.active
    client.game.frame(1 / 60)
    assert client.game.session.is_open


def test_dialog_keys_drive_free_text_case(client: GameClient):
    _open_dock_dialog(client)
    session = client.game.session
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert session.phase is Phase.PUZZLE
    client.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="1"))
    client.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="3"))
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_BACKSPACE))
    client.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="2"))
    assert session.dialog.typed_answer == "12"
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert session.phase is Phase.RESULT
    assert client.game.ledger.xp == 50

    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert session.phase is Phase.SHARE
    for char in "spez":
        client.handle_event(pygame.event.Event(pygame.TEXTINPUT, text=char))
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert not session.is_open


def test_dialog_keys_drive_choice_case(client: GameClient):
    client.game.scene.avatar.box = Box(200, 176, 24, 24)
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_e))
    client.game.frame(1 / 60)
    session = client.game.session
    assert session.quest.id == "q_rooftop_heist"
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_1))
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert session.phase is Phase.RESULT
    assert not session.dialog.solved
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert session.phase is Phase.PUZZLE
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_2))
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RETURN))
    assert session.dialog.solved
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert not session.is_open


def test_movement_keys_ignored_while_dialog_open(client: GameClient):
    _open_dock_dialog(client)
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_RIGHT))
    client.game.frame(1 / 60)
    assert not client.game.controller.snapshot().keys.right
    assert client.game.scene.avatar.velocity.x == 0


def test_escape_declines_intro(client: GameClient):
    _open_dock_dialog(client)
    client.handle_event(_key(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert not client.game.session.is_open
    assert client.game.ledger.active_quest_id is None


def test_quit_event_stops_client(client: GameClient):
    client.running = True
    client.handle_event(pygame.event.Event(pygame.QUIT))
    assert not client.running


def test_headless_run_draws_frames(client: GameClient):
    client.game.session.open("q_neon_sign")
    client.game.notifications.push("hello")
    client.run(max_frames=3)
    assert client.frames == 3
    assert client.game.session.subscription.closed
