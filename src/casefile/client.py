"""pygame front end: event translation, the frame loop and primitive drawing."""

import os
import textwrap

import pygame

from .config import Config
from .engine.catalog import ChoiceQuest, FreeTextQuest
from .engine.dialog import Phase
from .engine.movement import MAX_RADIUS
from .engine.notifications import Severity
from .engine.physics import Box
from .engine.scene import TILE_SIZE
from .game import Game
from .logging import get_logger

logger = get_logger(__name__)

TITLE = "Case Files"
MOUSE_POINTER_ID = -1
PROMPT_PADDING = (6, 4)
THUMB_RADIUS = 25

# pygame key code -> name used by InputController
KEY_NAMES: dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_a: "a",
    pygame.K_d: "d",
    pygame.K_w: "w",
    pygame.K_s: "s",
    pygame.K_e: "e",
}
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
CHOICE_KEYS: dict[int, int] = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_5: 4,
    pygame.K_6: 5,
    pygame.K_7: 6,
    pygame.K_8: 7,
    pygame.K_9: 8,
}

COLOR_BG = (45, 45, 45)
COLOR_GRID = (68, 68, 68)
COLOR_BUILDING = (85, 85, 85)
COLOR_MARKER = (255, 255, 0)
COLOR_MARKER_DONE = (120, 120, 40)
COLOR_AVATAR = (0, 255, 255)
COLOR_TEXT = (241, 245, 249)
COLOR_MUTED = (148, 163, 184)
COLOR_PANEL = (15, 23, 42)
COLOR_ACCENT = (6, 182, 212)
COLOR_JOYSTICK_BASE = (136, 136, 136)
COLOR_JOYSTICK_THUMB = (204, 204, 204)
SEVERITY_COLORS = {
    Severity.SUCCESS: (34, 197, 94),
    Severity.INFO: (59, 130, 246),
    Severity.WARNING: (234, 179, 8),
}


class GameClient:
    """Owns the pygame window and drives a Game at a fixed frame rate."""

    def __init__(self, game: Game, config: Config):
        self.game = game
        self.config = config
        if config.headless:
            os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pygame.init()
        self.screen = pygame.display.set_mode((config.width, config.height))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.small_font = pygame.font.Font(None, 18)
        self.running = False
        self.frames = 0

    # --- Event translation ---

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
            return

        controller = self.game.controller

        # Releases always reach the controller so nothing stays held
        if event.type == pygame.KEYUP:
            if event.key in KEY_NAMES:
                controller.key_up(KEY_NAMES[event.key])
            return
        if event.type == pygame.MOUSEBUTTONUP and not getattr(event, "touch", False):
            if event.button == 1:
                controller.pointer_up(MOUSE_POINTER_ID)
            return
        if event.type == pygame.FINGERUP:
            controller.pointer_up(event.finger_id)
            return
        if event.type == pygame.WINDOWLEAVE:
            controller.pointer_up(MOUSE_POINTER_ID)
            return

        if self.game.session.is_open:
            self._handle_dialog_event(event)
        else:
            self._handle_world_event(event)

    def _handle_world_event(self, event: pygame.event.Event) -> None:
        controller = self.game.controller
        if event.type == pygame.KEYDOWN:
            if event.key in KEY_NAMES:
                controller.key_down(KEY_NAMES[event.key])
            elif event.key == pygame.K_ESCAPE:
                self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and not getattr(event, "touch", False):
            if event.button == 1:
                self._pointer_down(MOUSE_POINTER_ID, *event.pos)
        elif event.type == pygame.MOUSEMOTION and not getattr(event, "touch", False):
            controller.pointer_move(MOUSE_POINTER_ID, *event.pos)
        elif event.type == pygame.FINGERDOWN:
            self._pointer_down(event.finger_id, *self._finger_pos(event))
        elif event.type == pygame.FINGERMOTION:
            controller.pointer_move(event.finger_id, *self._finger_pos(event))

    def _pointer_down(self, pointer_id: int, x: float, y: float) -> None:
        prompt = self._prompt_rect()
        if prompt is not None and prompt.collidepoint(x, y):
            self.game.controller.tap_prompt()
        else:
            self.game.controller.pointer_down(pointer_id, x, y)

    def _finger_pos(self, event: pygame.event.Event) -> tuple[float, float]:
        """Touch coordinates arrive normalized to [0, 1]."""
        return event.x * self.config.width, event.y * self.config.height

    def _prompt_rect(self) -> pygame.Rect | None:
        prompt = self.game.scene.detector.prompt
        if not prompt.visible:
            return None
        width, height = self.small_font.size(prompt.text)
        pad_x, pad_y = PROMPT_PADDING
        return pygame.Rect(
            int(prompt.x), int(prompt.y), width + 2 * pad_x, height + 2 * pad_y
        )

    def _handle_dialog_event(self, event: pygame.event.Event) -> None:
        session = self.game.session
        dialog = session.dialog

        if event.type == pygame.TEXTINPUT:
            if dialog.phase is Phase.PUZZLE and isinstance(dialog.quest, FreeTextQuest):
                session.type_answer(dialog.typed_answer + event.text)
            elif dialog.phase is Phase.SHARE:
                session.set_share_target(dialog.share_target + event.text)
            return

        if event.type != pygame.KEYDOWN:
            return

        key = event.key
        match dialog.phase:
            case Phase.INTRO:
                if key in CONFIRM_KEYS:
                    session.accept()
                elif key == pygame.K_ESCAPE:
                    session.decline()
            case Phase.PUZZLE:
                if key in CONFIRM_KEYS and dialog.answer is not None:
                    session.submit()
                elif key == pygame.K_ESCAPE:
                    session.close()
                elif key == pygame.K_BACKSPACE and isinstance(dialog.quest, FreeTextQuest):
                    session.type_answer(dialog.typed_answer[:-1])
                elif key in CHOICE_KEYS and isinstance(dialog.quest, ChoiceQuest):
                    index = CHOICE_KEYS[key]
                    if index < len(dialog.quest.options):
                        session.select(dialog.quest.options[index])
            case Phase.RESULT:
                if key in CONFIRM_KEYS:
                    if dialog.can_share:
                        session.start_share()
                    else:
                        session.retry()
                elif key == pygame.K_ESCAPE:
                    session.close()
            case Phase.SHARE:
                if key in CONFIRM_KEYS:
                    session.send_share()
                elif key == pygame.K_ESCAPE:
                    session.back()
                elif key == pygame.K_BACKSPACE:
                    session.set_share_target(dialog.share_target[:-1])

    # --- Frame loop ---

    def run(self, max_frames: int | None = None) -> None:
        """Run until the window closes, or for ``max_frames`` frames."""
        self.running = True
        logger.info("client_running", tick_rate=self.config.tick_rate)
        try:
            while self.running:
                dt = self.clock.tick(self.config.tick_rate) / 1000.0
                for event in pygame.event.get():
                    self.handle_event(event)
                self.game.frame(dt)
                self.draw()
                pygame.display.flip()
                self.frames += 1
                if max_frames is not None and self.frames >= max_frames:
                    break
        finally:
            self.game.shutdown()
            pygame.quit()
            logger.info("client_stopped", frames=self.frames)

    # --- Drawing ---

    def draw(self) -> None:
        self.screen.fill(COLOR_BG)
        self._draw_world()
        self._draw_prompt()
        self._draw_joystick()
        self._draw_hud()
        self._draw_notifications()
        if self.game.session.is_open:
            self._draw_dialog()

    def _rect(self, box: Box) -> pygame.Rect:
        return pygame.Rect(int(box.left), int(box.top), int(box.width), int(box.height))

    def _draw_world(self) -> None:
        width, height = self.config.width, self.config.height
        for x in range(0, width + 1, TILE_SIZE):
            pygame.draw.line(self.screen, COLOR_GRID, (x, 0), (x, height))
        for y in range(0, height + 1, TILE_SIZE):
            pygame.draw.line(self.screen, COLOR_GRID, (0, y), (width, y))

        scene = self.game.scene
        for building in scene.obstacles:
            pygame.draw.rect(self.screen, COLOR_BUILDING, self._rect(building))
        for marker in scene.markers:
            done = self.game.ledger.is_completed(marker.quest_id)
            color = COLOR_MARKER_DONE if done else COLOR_MARKER
            pygame.draw.rect(self.screen, color, self._rect(marker.box))
        pygame.draw.rect(self.screen, COLOR_AVATAR, self._rect(scene.avatar.box))

    def _draw_prompt(self) -> None:
        rect = self._prompt_rect()
        if rect is None:
            return
        pygame.draw.rect(self.screen, (0, 0, 0), rect)
        text = self.small_font.render(self.game.scene.detector.prompt.text, True, COLOR_TEXT)
        self.screen.blit(text, (rect.x + PROMPT_PADDING[0], rect.y + PROMPT_PADDING[1]))

    def _draw_joystick(self) -> None:
        stick = self.game.controller.stick
        if not stick.active:
            return
        origin = (int(stick.origin.x), int(stick.origin.y))
        thumb = (int(stick.thumb.x), int(stick.thumb.y))
        pygame.draw.circle(self.screen, COLOR_JOYSTICK_BASE, origin, int(MAX_RADIUS), 2)
        pygame.draw.circle(self.screen, COLOR_JOYSTICK_THUMB, thumb, THUMB_RADIUS)

    def _draw_hud(self) -> None:
        player = self.game.ledger.snapshot()
        line = (
            f"{player.username}   XP {player.xp}   CREDITS {player.currency}   "
            f"CASES {len(player.completed_quest_ids)}/{len(self.game.catalog)}"
        )
        pygame.draw.rect(self.screen, COLOR_PANEL, pygame.Rect(0, 0, self.config.width, 28))
        self.screen.blit(self.font.render(line, True, COLOR_TEXT), (10, 6))

    def _draw_notifications(self) -> None:
        y = self.config.height - 12
        for note in reversed(self.game.notifications.visible()):
            text = self.small_font.render(note.message, True, COLOR_TEXT)
            rect = pygame.Rect(0, 0, max(250, text.get_width() + 20), text.get_height() + 16)
            rect.bottomright = (self.config.width - 12, y)
            pygame.draw.rect(self.screen, COLOR_PANEL, rect)
            stripe = pygame.Rect(rect.x, rect.y, 4, rect.height)
            pygame.draw.rect(self.screen, SEVERITY_COLORS[note.severity], stripe)
            self.screen.blit(text, (rect.x + 12, rect.y + 8))
            y = rect.top - 8

    def _dialog_lines(self) -> list[str]:
        dialog = self.game.session.dialog
        quest = dialog.quest
        lines: list[str] = []
        match dialog.phase:
            case Phase.INTRO:
                lines += textwrap.wrap(quest.description, 48)
                lines += ["", f"Rewards: XP +{quest.rewards.xp}   CREDITS {quest.rewards.currency}"]
                lines += ["", "[Enter] Accept Case   [Esc] Decline"]
            case Phase.PUZZLE:
                lines += textwrap.wrap(f'"{quest.puzzle_prompt}"', 48) + [""]
                if isinstance(quest, ChoiceQuest):
                    for number, option in enumerate(quest.options, start=1):
                        mark = ">" if option == dialog.selected_choice else " "
                        lines.append(f"{mark} [{number}] {option}")
                else:
                    lines.append(f"> {dialog.typed_answer}_")
                lines += ["", "[Enter] Submit Evidence   [Esc] Close"]
            case Phase.RESULT:
                lines += [dialog.result_message, ""]
                if dialog.can_share:
                    lines.append("[Enter] Share with Partner")
                else:
                    lines.append("[Enter] Try Again")
                lines.append("[Esc] Close Case File")
            case Phase.SHARE:
                lines += ["Need backup? Share this case with another detective.", ""]
                lines += [f"u/{dialog.share_target}_", ""]
                lines.append("[Enter] Send Case File   [Esc] Back")
        return lines

    def _draw_dialog(self) -> None:
        overlay = pygame.Surface((self.config.width, self.config.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        panel = pygame.Rect(0, 0, 460, 320)
        panel.center = (self.config.width // 2, self.config.height // 2)
        pygame.draw.rect(self.screen, COLOR_PANEL, panel)
        pygame.draw.rect(self.screen, COLOR_ACCENT, panel, 2)

        title = self.font.render(self.game.session.dialog.quest.title.upper(), True, COLOR_ACCENT)
        self.screen.blit(title, (panel.x + 16, panel.y + 14))

        y = panel.y + 50
        for line in self._dialog_lines():
            self.screen.blit(self.small_font.render(line, True, COLOR_TEXT), (panel.x + 16, y))
            y += 20
