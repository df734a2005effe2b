"""
Mood Booster - Renderer.

Paints an immutable GameState onto a logical stage surface and scales it to
the window. The renderer never mutates the game; it only reads snapshots
and notices.
"""
import math
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

import pygame

from moodbooster import config as theme
from moodbooster.config import GameConfig
from moodbooster.logging import get_logger
from moodbooster.models import MOOD_MAX, FallingItem, GameState, HeroPose, Phase
from moodbooster.notifications import Notice

log = get_logger('renderer')

# Overlay (title, subtitle) per phase
OVERLAY_TEXT: Dict[Phase, Tuple[str, str]] = {
    Phase.ATTRACT: ("MOOD BOOSTER", "Tap to Start!"),
    Phase.VICTORY: ("VICTORY!", "Mood Charged!"),
    Phase.DEFEAT: ("TRY AGAIN", "Need More Coffee!"),
}

TITLE_COLORS: Dict[Phase, Tuple[int, int, int]] = {
    Phase.ATTRACT: theme.COFFEE_LIGHT,
    Phase.VICTORY: theme.TEAL,
    Phase.DEFEAT: (255, 120, 100),
}

# Hero poses
DRINK_POSE_SECONDS = 0.5  # drinking pose right after a drink
SLOUCH_BELOW_MOOD = 30
HAPPY_BOUNCE = 3  # pixels


def hero_pose(state: GameState, config: GameConfig) -> HeroPose:
    """Pick the hero pose for a snapshot.

    Drinking wins over mood: the pose holds for DRINK_POSE_SECONDS after a
    drink while PLAYING. Otherwise a full meter bounces and a mood below
    SLOUCH_BELOW_MOOD slouches.
    """
    if state.phase == Phase.PLAYING and state.action_cooldown > 0:
        since_drink = config.consume_cooldown - state.action_cooldown
        if since_drink < DRINK_POSE_SECONDS:
            return HeroPose.DRINKING
    if state.is_meter_full:
        return HeroPose.HAPPY
    if state.mood < SLOUCH_BELOW_MOOD:
        return HeroPose.SLOUCHED
    return HeroPose.IDLE


class Renderer:
    """Draws the game.

    Fonts and the optional background image are loaded lazily on the first
    frame. A missing or unreadable asset logs a warning and falls back to
    procedural drawing (background) or no text (fonts).
    """

    def __init__(self, config: GameConfig, background: Optional[Union[str, Path]] = None):
        """
        Args:
            config: Stage size and layout
            background: Optional image file drawn behind the stage
        """
        self._config = config
        self._background_path = background if background is not None else theme.BACKGROUND_IMAGE
        self._background: Optional[pygame.Surface] = None
        self._fonts: Dict[str, Optional[pygame.font.Font]] = {}
        self._stage: Optional[pygame.Surface] = None
        self._initialized = False

    def _ensure_initialized(self) -> None:
        """Lazy creation of the stage surface and asset loading."""
        if self._initialized:
            return

        cfg = self._config
        self._stage = pygame.Surface((cfg.stage_width, cfg.stage_height))
        self._fonts = {
            'title': self._load_font(120),
            'large': self._load_font(72),
            'medium': self._load_font(56),
            'small': self._load_font(40),
        }
        if self._background_path:
            self._background = self._load_background(Path(self._background_path))
        self._initialized = True

    def _load_font(self, size: int) -> Optional[pygame.font.Font]:
        try:
            if not pygame.font.get_init():
                pygame.font.init()
            return pygame.font.Font(None, size)
        except (pygame.error, OSError) as e:
            log.warning("Font unavailable (%s), drawing without text", e)
            return None

    def _load_background(self, path: Path) -> Optional[pygame.Surface]:
        try:
            image = pygame.image.load(str(path))
        except (pygame.error, OSError) as e:
            log.warning("Background image %s unavailable (%s), using drawn scenery", path, e)
            return None
        size = (self._config.stage_width, self._config.stage_height)
        return pygame.transform.scale(image, size)

    @property
    def has_background_image(self) -> bool:
        self._ensure_initialized()
        return self._background is not None

    # =========================================================================
    # Frame
    # =========================================================================

    def render(
        self,
        screen: pygame.Surface,
        state: GameState,
        notices: Sequence[Notice] = (),
    ) -> None:
        """
        Render one frame.

        Args:
            screen: Window surface (any size)
            state: Snapshot to draw
            notices: Active notices, oldest first
        """
        stage = self.render_stage(state, notices)
        if screen.get_size() == stage.get_size():
            screen.blit(stage, (0, 0))
        else:
            screen.blit(pygame.transform.scale(stage, screen.get_size()), (0, 0))

    def render_stage(self, state: GameState, notices: Sequence[Notice] = ()) -> pygame.Surface:
        """Render the snapshot at stage resolution and return the stage surface."""
        self._ensure_initialized()
        stage = self._stage

        self._render_background(stage)
        self._render_kiosk(stage)
        for item in state.items:
            self._render_item(stage, item)
        self._render_hero(stage, state)
        self._render_hud(stage, state)

        if state.phase == Phase.PLAYING:
            self._render_button(stage, state.action_cooldown)
        else:
            self._render_overlay(stage, state)

        self._render_notices(stage, notices)
        return stage

    # =========================================================================
    # Scenery
    # =========================================================================

    def _street_top(self) -> int:
        cfg = self._config
        return min(cfg.stage_height, int(cfg.player_y + cfg.player_half_size))

    def _render_background(self, stage: pygame.Surface) -> None:
        if self._background is not None:
            stage.blit(self._background, (0, 0))
            return

        street_top = self._street_top()
        stage.fill(theme.SKY)
        pygame.draw.rect(stage, theme.STREET,
                         (0, street_top, self._config.stage_width, self._config.stage_height - street_top))

        # Lane markings
        dash_y = street_top + (self._config.stage_height - street_top) // 2
        for x in range(0, self._config.stage_width, 120):
            pygame.draw.rect(stage, theme.WHITE, (x + 20, dash_y, 60, 8))

    def _render_kiosk(self, stage: pygame.Surface) -> None:
        """Coffee kiosk with the spout above source_x."""
        cfg = self._config
        street_top = self._street_top()
        x = int(cfg.source_x)

        # Kiosk booth
        booth = pygame.Rect(0, 0, 260, 420)
        booth.midbottom = (x, street_top)
        pygame.draw.rect(stage, theme.COFFEE_DARK, booth)
        pygame.draw.rect(stage, theme.CREAM, booth.inflate(-30, -30), 6)

        # Machine and spout
        machine = pygame.Rect(0, 0, 140, 160)
        machine.midtop = (x, booth.top + 30)
        pygame.draw.rect(stage, theme.COFFEE_MID, machine)
        spout = pygame.Rect(0, 0, 24, 40)
        spout.midtop = machine.midbottom
        pygame.draw.rect(stage, theme.COFFEE_LIGHT, spout)

        # Spout zone on the ground
        zone = pygame.Rect(0, 0, int(cfg.source_tolerance * 2), 10)
        zone.midtop = (x, street_top)
        pygame.draw.rect(stage, theme.TEAL, zone)

    def _render_item(self, stage: pygame.Surface, item: FallingItem) -> None:
        half = self._config.item_half_size
        center = (int(item.x), int(item.y))

        if item.collected:
            for i in range(8):
                angle = i * math.pi / 4
                end = (int(item.x + math.cos(angle) * half * 1.4),
                       int(item.y + math.sin(angle) * half * 1.4))
                pygame.draw.line(stage, theme.SPARKLE_COLOR, center, end, 4)
            return

        bounds = item.get_bounds(half)
        bean = pygame.Rect(*bounds.as_tuple()).inflate(0, -int(half * 0.6))
        pygame.draw.ellipse(stage, theme.BEAN_COLOR, bean)
        pygame.draw.line(stage, theme.BEAN_HIGHLIGHT,
                         (bean.centerx, bean.top + 4), (bean.centerx, bean.bottom - 4), 4)

    def _render_hero(self, stage: pygame.Surface, state: GameState) -> None:
        cfg = self._config
        pose = hero_pose(state, cfg)
        half = int(cfg.player_half_size)

        # Posture shifts the whole figure
        offset = 0
        if pose == HeroPose.HAPPY:
            offset = int(math.sin(pygame.time.get_ticks() * 0.01) * HAPPY_BOUNCE)
        elif pose == HeroPose.SLOUCHED:
            offset = max(1, half // 6)

        body = pygame.Rect(0, 0, half * 2, half * 2)
        body.center = (int(state.player_x), int(cfg.player_y) + offset)
        pygame.draw.rect(stage, theme.COFFEE_MID, body, border_radius=half // 3)
        head = (body.centerx, body.top)
        pygame.draw.circle(stage, theme.CREAM, head, half // 2)

        cup = pygame.Rect(0, 0, half, half // 2)
        if pose == HeroPose.DRINKING:
            # Cup tipped at the mouth
            cup.midleft = (head[0], head[1] - half // 4)
            pygame.draw.rect(stage, theme.WHITE, cup)
            for dx, dy in ((-0.3, -1.2), (0.4, -1.05), (-0.45, -0.9)):
                spark = pygame.Rect(0, 0, max(3, half // 10), max(3, half // 10))
                spark.center = (int(head[0] + dx * half), int(head[1] + dy * half))
                pygame.draw.rect(stage, theme.TEAL, spark)
        else:
            # Cup held overhead
            cup.midbottom = (body.centerx, body.top - half // 2)
            pygame.draw.rect(stage, theme.WHITE, cup)

    # =========================================================================
    # HUD
    # =========================================================================

    def _render_hud(self, stage: pygame.Surface, state: GameState) -> None:
        width = self._config.stage_width

        # Mood meter
        bar = pygame.Rect(60, 60, width - 120, 50)
        pygame.draw.rect(stage, theme.COFFEE_DARK, bar)
        fill = bar.copy()
        fill.width = int(bar.width * state.mood / MOOD_MAX)
        if fill.width > 0:
            pygame.draw.rect(stage, theme.TEAL, fill)
        pygame.draw.rect(stage, theme.WHITE, bar, 4)
        self._draw_text(stage, f"MOOD {state.mood}%", 'small', theme.WHITE, center=bar.center)

        seconds = int(math.ceil(state.time_left))
        self._draw_text(stage, f"TIME {seconds}", 'medium', theme.WHITE, topleft=(60, 130))
        self._draw_text(stage, f"SCORE {state.score}", 'medium', theme.WHITE, topright=(width - 60, 130))

    def _render_button(self, stage: pygame.Surface, cooldown: float) -> None:
        """DRINK button, tinted from the top while the cooldown runs."""
        cfg = self._config
        rect = pygame.Rect(*cfg.consume_button.as_tuple())
        pygame.draw.ellipse(stage, theme.TEAL, rect)

        if cooldown > 0 and cfg.consume_cooldown > 0:
            fraction = min(1.0, cooldown / cfg.consume_cooldown)
            tint = pygame.Surface(rect.size, pygame.SRCALPHA)
            pygame.draw.ellipse(tint, (*theme.COFFEE_DARK, 170), tint.get_rect())
            visible = pygame.Rect(0, 0, rect.width, int(rect.height * fraction))
            stage.blit(tint, rect.topleft, visible)

        pygame.draw.ellipse(stage, theme.WHITE, rect, 5)
        self._draw_text(stage, "DRINK", 'small', theme.WHITE, center=rect.center)

    def _render_overlay(self, stage: pygame.Surface, state: GameState) -> None:
        title, subtitle = OVERLAY_TEXT[state.phase]
        overlay = pygame.Surface(stage.get_size(), pygame.SRCALPHA)
        overlay.fill(theme.OVERLAY_COLOR)
        stage.blit(overlay, (0, 0))

        cx = self._config.stage_width // 2
        cy = self._config.stage_height // 2
        self._draw_text(stage, title, 'title', TITLE_COLORS[state.phase], center=(cx, cy - 100))
        self._draw_text(stage, subtitle, 'large', theme.WHITE, center=(cx, cy + 20))
        if state.phase.is_terminal:
            self._draw_text(stage, f"Score: {state.score}", 'medium', theme.CREAM, center=(cx, cy + 120))

    def _render_notices(self, stage: pygame.Surface, notices: Sequence[Notice]) -> None:
        cx = self._config.stage_width // 2
        y = 260
        for notice in notices:
            alpha = int(255 * notice.fade)
            self._draw_text(stage, notice.message, 'medium', theme.CREAM,
                            center=(cx, y), alpha=alpha)
            y += 70

    def _draw_text(
        self,
        surface: pygame.Surface,
        text: str,
        font_name: str,
        color: Tuple[int, int, int],
        alpha: int = 255,
        **anchor,
    ) -> None:
        """Blit text positioned by a Rect anchor (center=, topleft=, ...)."""
        font = self._fonts.get(font_name)
        if font is None:
            return
        rendered = font.render(text, True, color)
        if alpha < 255:
            rendered.set_alpha(alpha)
        surface.blit(rendered, rendered.get_rect(**anchor))
