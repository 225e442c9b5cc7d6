"""Input state and the per-tick movement reconciler.

Two input modalities drive the avatar: discrete direction keys and an analog
virtual joystick captured by a pointer drag. The joystick, when active,
fully overrides the keys for that tick.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from ..logging import get_logger
from .physics import ZERO, Body, Vector

logger = get_logger(__name__)

SPEED = 160.0
DEADZONE = 5.0
MAX_RADIUS = 50.0


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# Arrow keys and WASD both steer
KEY_BINDINGS: dict[str, Direction] = {
    "left": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
}
INTERACT_KEYS = frozenset({"e"})


@dataclass(frozen=True)
class KeyState:
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False


def discrete_vector(keys: KeyState) -> Vector:
    """Left beats right, up beats down; the result has unit length or is zero."""
    x = 0.0
    y = 0.0
    if keys.left:
        x = -1.0
    elif keys.right:
        x = 1.0
    if keys.up:
        y = -1.0
    elif keys.down:
        y = 1.0
    return Vector(x, y).normalized()


def analog_vector(dx: float, dy: float) -> Vector:
    """Map a drag offset from the joystick origin to a vector of length <= 1."""
    distance = math.hypot(dx, dy)
    if distance <= DEADZONE:
        return ZERO
    scale = min(distance, MAX_RADIUS) / MAX_RADIUS
    angle = math.atan2(dy, dx)
    return Vector(math.cos(angle) * scale, math.sin(angle) * scale)


@dataclass
class AnalogStick:
    """Virtual joystick owned by at most one pointer at a time."""

    active: bool = False
    pointer_id: int | None = None
    origin: Vector = field(default=ZERO)
    thumb: Vector = field(default=ZERO)
    vector: Vector = field(default=ZERO)

    def press(self, pointer_id: int, x: float, y: float) -> bool:
        """Capture the stick for this pointer unless another already owns it."""
        if self.active:
            return False
        self.active = True
        self.pointer_id = pointer_id
        self.origin = Vector(x, y)
        self.thumb = self.origin
        self.vector = ZERO
        logger.debug("joystick_captured", pointer_id=pointer_id, x=x, y=y)
        return True

    def move(self, pointer_id: int, x: float, y: float) -> None:
        if not self.active or pointer_id != self.pointer_id:
            return
        dx = x - self.origin.x
        dy = y - self.origin.y
        distance = math.hypot(dx, dy)
        if distance > MAX_RADIUS:
            dx = dx / distance * MAX_RADIUS
            dy = dy / distance * MAX_RADIUS
        self.thumb = Vector(self.origin.x + dx, self.origin.y + dy)
        self.vector = analog_vector(x - self.origin.x, y - self.origin.y)

    def release(self, pointer_id: int | None = None) -> bool:
        """Reset the stick.

        With a pointer id, only the owning pointer releases it. Without one
        the release is forced.
        """
        if pointer_id is not None and self.pointer_id is not None and pointer_id != self.pointer_id:
            return False
        was_active = self.active
        self.active = False
        self.pointer_id = None
        self.origin = ZERO
        self.thumb = ZERO
        self.vector = ZERO
        if was_active:
            logger.debug("joystick_released", pointer_id=pointer_id)
        return was_active


@dataclass(frozen=True)
class InputState:
    """Snapshot of everything the simulation reads from input in one tick."""

    keys: KeyState = field(default_factory=KeyState)
    analog: Vector = field(default=ZERO)
    is_joystick_active: bool = False
    joystick_pointer_id: int | None = None
    interact_held: bool = False
    interact_pressed: bool = False
    prompt_tapped: bool = False
    pointer_mode: bool = False


class InputController:
    """Collects raw key and pointer events between ticks."""

    def __init__(self) -> None:
        self.stick = AnalogStick()
        self._held_keys: set[str] = set()
        self._prompt_tapped = False
        self._interact_pressed = False
        self.pointer_mode = False

    def key_down(self, key: str) -> None:
        """Press a key; an interact press is latched until the next snapshot."""
        if key in INTERACT_KEYS and key not in self._held_keys:
            self._interact_pressed = True
        self._held_keys.add(key)
        self.pointer_mode = False

    def key_up(self, key: str) -> None:
        self._held_keys.discard(key)

    def pointer_down(self, pointer_id: int, x: float, y: float) -> None:
        self.pointer_mode = True
        self.stick.press(pointer_id, x, y)

    def pointer_move(self, pointer_id: int, x: float, y: float) -> None:
        self.stick.move(pointer_id, x, y)

    def pointer_up(self, pointer_id: int | None = None) -> None:
        self.stick.release(pointer_id)

    def tap_prompt(self) -> None:
        """A press on the interaction prompt; never starts the joystick."""
        self.pointer_mode = True
        self._prompt_tapped = True

    def release_all(self) -> None:
        self._held_keys.clear()
        self.stick.release()

    def _direction_held(self, direction: Direction) -> bool:
        return any(KEY_BINDINGS.get(key) is direction for key in self._held_keys)

    def snapshot(self) -> InputState:
        """Freeze the current input for one tick and consume one-shot presses."""
        state = InputState(
            keys=KeyState(
                left=self._direction_held(Direction.LEFT),
                right=self._direction_held(Direction.RIGHT),
                up=self._direction_held(Direction.UP),
                down=self._direction_held(Direction.DOWN),
            ),
            analog=self.stick.vector,
            is_joystick_active=self.stick.active,
            joystick_pointer_id=self.stick.pointer_id,
            interact_held=bool(self._held_keys & INTERACT_KEYS),
            interact_pressed=self._interact_pressed,
            prompt_tapped=self._prompt_tapped,
            pointer_mode=self.pointer_mode,
        )
        self._prompt_tapped = False
        self._interact_pressed = False
        return state


def reconcile(state: InputState) -> Vector:
    """Pick the movement vector for this tick; analog overrides discrete."""
    if state.is_joystick_active:
        return state.analog
    return discrete_vector(state.keys)


class MovementReconciler:
    def __init__(self, speed: float = SPEED):
        self.speed = speed

    def apply(self, state: InputState, body: Body) -> Vector:
        velocity = reconcile(state).scaled(self.speed)
        body.set_velocity(velocity)
        return velocity
