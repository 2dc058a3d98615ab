"""
Renderer - All drawing/rendering logic for the Marquee UI.
"""
import math
import logging
from typing import Optional, List, Dict, Tuple

import pygame

from .helpers import draw_aa_circle, draw_aa_rounded_rect, fit_text, wrap_text
from .image_cache import ImageCache
from .context import RenderContext
from ..models import CatalogItem, HOME, BROWSE, DETAILS, PLAYER
from ..screens import ROWS
from ..config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, COLORS, MARGIN,
    TAB_BAR_HEIGHT, HERO_HEIGHT, CARD_IMAGE_HEIGHT, CARD_TEXT_HEIGHT, CARD_SPACING,
    POSTER_WIDTH, POSTER_HEIGHT, POSTER_SPACING, ROW_HEIGHT,
    BACKDROP_HEIGHT, DETAIL_POSTER_WIDTH, DETAIL_POSTER_HEIGHT,
    SIMILAR_WIDTH, SIMILAR_HEIGHT, PLAY_BTN_HEIGHT, BACK_BTN_SIZE,
)

logger = logging.getLogger(__name__)

Action = Tuple


class Renderer:
    """Handles all drawing for Marquee screens and records tap targets."""

    def __init__(self, screen: pygame.Surface, image_cache: ImageCache, client):
        self.screen = screen
        self.image_cache = image_cache
        self.client = client

        self.fonts = {
            'title': pygame.font.Font(None, 40),
            'large': pygame.font.Font(None, 32),
            'medium': pygame.font.Font(None, 26),
            'small': pygame.font.Font(None, 21),
        }

        self._text_cache: Dict[tuple, pygame.Surface] = {}
        self._spinner_frames: List[pygame.Surface] = []
        self._spinner_frame_idx = 0

        # Tap targets and horizontally scrollable rows (updated during draw)
        self.hit_rects: List[Tuple[pygame.Rect, Action]] = []
        self.row_rects: List[Tuple[pygame.Rect, str]] = []
        self.viewport = pygame.Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT)

    # ============================================
    # HIT TESTING
    # ============================================

    def hit_test(self, pos) -> Optional[Action]:
        """Return the action under pos. Later (topmost) targets win."""
        for rect, action in reversed(self.hit_rects):
            if rect.collidepoint(pos):
                return action
        return None

    def row_at(self, pos) -> Optional[str]:
        for rect, key in self.row_rects:
            if rect.collidepoint(pos):
                return key
        return None

    def _add_hit(self, rect, action: Action):
        visible = pygame.Rect(rect).clip(self.viewport)
        if visible.width > 0 and visible.height > 0:
            self.hit_rects.append((visible, action))

    # ============================================
    # MAIN DRAW
    # ============================================

    def draw(self, ctx: RenderContext) -> float:
        """Draw one frame. Returns the content height of the scrollable page."""
        self.hit_rects = []
        self.row_rects = []

        bottom = SCREEN_HEIGHT - (TAB_BAR_HEIGHT if ctx.tab_bar_visible else 0)
        self.viewport = pygame.Rect(0, 0, SCREEN_WIDTH, bottom)

        screen_name = ctx.state.screen
        if screen_name == PLAYER:
            self._draw_player(ctx)
            return SCREEN_HEIGHT

        self.screen.fill(COLORS['bg_primary'])
        self.screen.set_clip(self.viewport)
        content_height = float(self.viewport.height)

        if ctx.screen.loading:
            self._draw_loading_spinner(self.viewport.center)
        elif screen_name == HOME:
            content_height = self._draw_home(ctx)
        elif screen_name == BROWSE:
            content_height = self._draw_browse(ctx)
        elif screen_name == DETAILS:
            content_height = self._draw_details(ctx)

        if screen_name == DETAILS:
            self._draw_back_button()

        self.screen.set_clip(None)

        if ctx.tab_bar_visible:
            self._draw_tab_bar(screen_name)

        return content_height

    # ============================================
    # TEXT
    # ============================================

    def _text(self, text: str, font: str, color: tuple) -> pygame.Surface:
        key = (text, font, color)
        surface = self._text_cache.get(key)
        if surface is None:
            if len(self._text_cache) > 600:
                self._text_cache.clear()
            surface = self.fonts[font].render(text, True, color)
            self._text_cache[key] = surface
        return surface

    def _blit_lines(self, lines: List[str], font: str, color: tuple, x: int, y: int,
                    line_height: int) -> int:
        """Draw lines top-down from (x, y). Returns the y below the last line."""
        for line in lines:
            self.screen.blit(self._text(line, font, color), (x, y))
            y += line_height
        return y

    def _draw_rating(self, item: CatalogItem, x: int, y: int, suffix: str = '', font: str = 'small'):
        """Rating dot followed by the score."""
        height = self.fonts[font].get_height()
        draw_aa_circle(self.screen, COLORS['rating'], (x + 5, y + height // 2 - 1), 5)
        self.screen.blit(self._text(f'{item.rating_text}{suffix}', font, COLORS['text_secondary']),
                         (x + 14, y))

    # ============================================
    # HOME
    # ============================================

    def _draw_home(self, ctx: RenderContext) -> float:
        home = ctx.screen
        offset = int(ctx.scroll.page.offset)
        width = SCREEN_WIDTH - 2 * MARGIN
        y = MARGIN - offset

        self.screen.blit(self._text('Featured Today', 'title', COLORS['text_primary']), (MARGIN, y))
        y += 44

        if not home.featured:
            self._draw_empty('No movies to show', y + 40)

        for index, movie in enumerate(home.featured):
            image_h = HERO_HEIGHT if index == 0 else CARD_IMAGE_HEIGHT
            card = pygame.Rect(MARGIN, y, width, image_h + CARD_TEXT_HEIGHT)

            if card.bottom >= 0 and card.top <= self.viewport.bottom:
                draw_aa_rounded_rect(self.screen, COLORS['bg_card'], card, 12)
                image = self.image_cache.get(home.image_url(index, movie), (width, image_h), 12)
                self.screen.blit(image, (card.x, card.y))
                self._draw_rating_badge(movie, card.right - 12, card.y + 12)
                self._draw_card_text(movie, card.x + 12, card.y + image_h + 10, width - 24)
                self._add_hit(card, ('item', movie))

            y += card.height + CARD_SPACING

        return y + offset + MARGIN

    def _draw_rating_badge(self, movie: CatalogItem, right: int, top: int):
        label = self._text(movie.rating_text, 'small', COLORS['text_inverse'])
        badge = pygame.Rect(0, top, label.get_width() + 28, label.get_height() + 10)
        badge.right = right
        badge_surface = pygame.Surface(badge.size, pygame.SRCALPHA)
        draw_aa_rounded_rect(badge_surface, COLORS['overlay'], (0, 0, badge.width, badge.height),
                             badge.height // 2)
        self.screen.blit(badge_surface, badge.topleft)
        draw_aa_circle(self.screen, COLORS['rating'], (badge.x + 11, badge.centery), 5)
        self.screen.blit(label, (badge.x + 20, badge.y + 5))

    def _draw_card_text(self, movie: CatalogItem, x: int, y: int, width: int):
        title_lines = wrap_text(self.fonts['large'], movie.title, width, max_lines=2)
        y = self._blit_lines(title_lines, 'large', COLORS['text_primary'], x, y, 26)
        overview_lines = wrap_text(self.fonts['small'], movie.overview, width, max_lines=3)
        self._blit_lines(overview_lines, 'small', COLORS['text_secondary'], x, y + 4, 18)

        footer_y = y + 4 + 3 * 18 + 6
        year = movie.release_year or 'N/A'
        self.screen.blit(self._text(year, 'small', COLORS['text_muted']), (x, footer_y))
        button = self._text('View Details', 'small', COLORS['accent'])
        self.screen.blit(button, (x + width - button.get_width(), footer_y))

    # ============================================
    # BROWSE
    # ============================================

    def _draw_browse(self, ctx: RenderContext) -> float:
        browse = ctx.screen
        offset = int(ctx.scroll.page.offset)
        y = MARGIN - offset

        for category, title in ROWS:
            self.screen.blit(self._text(title, 'large', COLORS['text_primary']), (MARGIN, y))
            row_top = y + 36
            self._draw_poster_row(ctx, category, browse.row(category), row_top,
                                  (POSTER_WIDTH, POSTER_HEIGHT), ('item',))
            y += ROW_HEIGHT + 16

        return y + offset + MARGIN

    def _draw_poster_row(self, ctx: RenderContext, key: str, items: List[CatalogItem], top: int,
                         size: Tuple[int, int], action: Action, show_rating: bool = True):
        """Horizontal row of posters with titles underneath."""
        poster_w, poster_h = size
        row_rect = pygame.Rect(0, top, SCREEN_WIDTH, poster_h + 60)

        scroller = ctx.scroll.row(key)
        content_w = 2 * MARGIN + len(items) * (poster_w + POSTER_SPACING) - POSTER_SPACING
        scroller.set_extent(content_w, SCREEN_WIDTH)

        if row_rect.bottom < 0 or row_rect.top > self.viewport.bottom:
            return
        self.row_rects.append((row_rect.clip(self.viewport), key))

        if not items:
            self._draw_empty('Nothing to show', top + poster_h // 3)
            return

        x = MARGIN - int(scroller.offset)
        for item in items:
            if x + poster_w >= 0 and x <= SCREEN_WIDTH:
                poster = self.image_cache.get(self.client.poster_url(item.poster_path), size, 8)
                self.screen.blit(poster, (x, top))
                lines = wrap_text(self.fonts['small'], item.title, poster_w, max_lines=2)
                text_y = self._blit_lines(lines, 'small', COLORS['text_primary'], x, top + poster_h + 6, 17)
                if show_rating:
                    self._draw_rating(item, x, text_y + 2)
                self._add_hit((x, top, poster_w, poster_h + 40), action + (item,))
            x += poster_w + POSTER_SPACING

    def _draw_empty(self, message: str, y: int):
        text = self._text(message, 'medium', COLORS['text_muted'])
        self.screen.blit(text, text.get_rect(midtop=(SCREEN_WIDTH // 2, y)))

    # ============================================
    # DETAILS
    # ============================================

    def _draw_details(self, ctx: RenderContext) -> float:
        details = ctx.screen
        if details.movie is None:
            text = self._text('Movie not found', 'large', COLORS['text_secondary'])
            self.screen.blit(text, text.get_rect(center=self.viewport.center))
            return float(self.viewport.height)

        movie = details.movie
        offset = int(ctx.scroll.page.offset)
        width = SCREEN_WIDTH - 2 * MARGIN

        # Backdrop with dark overlay
        backdrop = self.image_cache.get(self.client.backdrop_url(movie.backdrop_path),
                                        (SCREEN_WIDTH, BACKDROP_HEIGHT), 0)
        self.screen.blit(backdrop, (0, -offset))
        overlay = pygame.Surface((SCREEN_WIDTH, BACKDROP_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 60))
        self.screen.blit(overlay, (0, -offset))

        # Header: poster overlapping the backdrop, info to the right
        header_top = BACKDROP_HEIGHT - 60 - offset
        poster = self.image_cache.get(self.client.poster_url(movie.poster_path),
                                      (DETAIL_POSTER_WIDTH, DETAIL_POSTER_HEIGHT), 8)
        self.screen.blit(poster, (MARGIN, header_top))

        info_x = MARGIN * 2 + DETAIL_POSTER_WIDTH
        info_w = SCREEN_WIDTH - info_x - MARGIN
        y = header_top + 68
        y = self._blit_lines(wrap_text(self.fonts['large'], movie.title, info_w, max_lines=2),
                             'large', COLORS['text_primary'], info_x, y, 28)
        self._draw_rating(movie, info_x, y + 2, suffix='/10', font='medium')
        y += 28
        if details.metadata_text:
            self.screen.blit(self._text(details.metadata_text, 'small', COLORS['text_secondary']), (info_x, y))
            y += 20
        if movie.genre_text:
            self._blit_lines(wrap_text(self.fonts['small'], movie.genre_text, info_w, max_lines=2),
                             'small', COLORS['text_muted'], info_x, y, 18)

        y = header_top + DETAIL_POSTER_HEIGHT + MARGIN

        if details.can_play:
            button = pygame.Rect(MARGIN, y, width, PLAY_BTN_HEIGHT)
            color = COLORS['accent']
            if ctx.pressed_action[:1] == ('play',):
                color = tuple(min(255, c + 40) for c in color)
            draw_aa_rounded_rect(self.screen, color, button, 10)
            label = self._text('Play Trailer', 'large', COLORS['text_inverse'])
            self.screen.blit(label, label.get_rect(center=button.center))
            self._add_hit(button, ('play',))
            y += PLAY_BTN_HEIGHT + MARGIN

        self.screen.blit(self._text('Movie Details', 'large', COLORS['text_primary']), (MARGIN, y))
        y += 34
        overview = wrap_text(self.fonts['medium'], movie.overview or 'No overview available.', width)
        y = self._blit_lines(overview, 'medium', COLORS['text_secondary'], MARGIN, y, 22) + MARGIN

        if details.similar:
            self.screen.blit(self._text('More Like This', 'large', COLORS['text_primary']), (MARGIN, y))
            y += 36
            self._draw_poster_row(ctx, 'similar', details.similar, y,
                                  (SIMILAR_WIDTH, SIMILAR_HEIGHT), ('similar',), show_rating=False)
            y += SIMILAR_HEIGHT + 60

        return y + offset + MARGIN

    def _draw_back_button(self, color: tuple = (0, 0, 0, 170)):
        size = BACK_BTN_SIZE
        rect = pygame.Rect(MARGIN, MARGIN, size, size)
        surface = pygame.Surface((size, size), pygame.SRCALPHA)
        draw_aa_circle(surface, color, (size // 2, size // 2), size // 2 - 1)
        self.screen.blit(surface, rect.topleft)
        label = self._text('<', 'large', COLORS['text_inverse'])
        self.screen.blit(label, label.get_rect(center=rect.center))
        self._add_hit(rect, ('back',))

    # ============================================
    # PLAYER
    # ============================================

    def _draw_player(self, ctx: RenderContext):
        player = ctx.screen
        self.screen.fill(COLORS['bg_dark'])
        center_x = SCREEN_WIDTH // 2
        width = SCREEN_WIDTH - 2 * MARGIN

        y = SCREEN_HEIGHT // 2 - 90
        title_lines = wrap_text(self.fonts['title'], player.title or 'Trailer', width, max_lines=2)
        for line in title_lines:
            text = self._text(line, 'title', COLORS['text_inverse'])
            self.screen.blit(text, text.get_rect(midtop=(center_x, y)))
            y += 38

        status = self._text('Playing in your browser', 'medium', COLORS['text_muted'])
        self.screen.blit(status, status.get_rect(midtop=(center_x, y + 8)))

        button = pygame.Rect(0, 0, 200, PLAY_BTN_HEIGHT)
        button.midtop = (center_x, y + 48)
        draw_aa_rounded_rect(self.screen, COLORS['accent'], button, 10)
        label = self._text('Open Again', 'large', COLORS['text_inverse'])
        self.screen.blit(label, label.get_rect(center=button.center))
        self._add_hit(button, ('reopen',))

        url = fit_text(self.fonts['small'], player.watch_url, width)
        url_text = self._text(url, 'small', COLORS['text_muted'])
        self.screen.blit(url_text, url_text.get_rect(midtop=(center_x, button.bottom + 16)))

        self._draw_back_button((255, 255, 255, 60))

    # ============================================
    # TAB BAR
    # ============================================

    def _draw_tab_bar(self, current: str):
        top = SCREEN_HEIGHT - TAB_BAR_HEIGHT
        pygame.draw.rect(self.screen, COLORS['tab_bar'], (0, top, SCREEN_WIDTH, TAB_BAR_HEIGHT))
        pygame.draw.line(self.screen, COLORS['divider'], (0, top), (SCREEN_WIDTH, top))

        tab_w = SCREEN_WIDTH // 2
        for index, (screen_name, label) in enumerate(((HOME, 'Home'), (BROWSE, 'Browse'))):
            rect = pygame.Rect(index * tab_w, top, tab_w, TAB_BAR_HEIGHT)
            active = screen_name == current
            color = COLORS['accent'] if active else COLORS['text_secondary']
            text = self._text(label, 'medium', color)
            self.screen.blit(text, text.get_rect(center=rect.center))
            if active:
                pygame.draw.rect(self.screen, COLORS['accent'], (rect.centerx - 20, rect.bottom - 8, 40, 3))
            self.hit_rects.append((rect, ('tab', screen_name)))

    # ============================================
    # LOADING SPINNER
    # ============================================

    def _generate_spinner_frames(self, size: int = 64, num_frames: int = 30) -> List[pygame.Surface]:
        """Pre-render spinner frames: four dots rotating with ease-in-out."""
        frames = []
        dot_radius = max(3, size // 12)
        dot_distance = size * 0.32

        def ease_in_out(t: float) -> float:
            if t < 0.5:
                return 4.0 * t * t * t
            return 1.0 - pow(-2.0 * t + 2.0, 3) / 2.0

        half_frames = num_frames / 2.0
        for frame_idx in range(num_frames):
            frame = pygame.Surface((size, size), pygame.SRCALPHA)
            # Two 180 degree halves, each eased
            if frame_idx < half_frames:
                rotation = math.radians(ease_in_out(frame_idx / half_frames) * 180)
            else:
                rotation = math.radians(180 + ease_in_out((frame_idx - half_frames) / half_frames) * 180)

            for i in range(4):
                angle = rotation + i * math.pi / 2
                dot_x = int(size / 2 + math.cos(angle) * dot_distance)
                dot_y = int(size / 2 + math.sin(angle) * dot_distance)
                pygame.draw.circle(frame, COLORS['accent'], (dot_x, dot_y), dot_radius)
            frames.append(frame)
        return frames

    def _draw_loading_spinner(self, center: tuple):
        if not self._spinner_frames:
            self._spinner_frames = self._generate_spinner_frames()
        frame = self._spinner_frames[self._spinner_frame_idx % len(self._spinner_frames)]
        self._spinner_frame_idx += 1
        self.screen.blit(frame, frame.get_rect(center=center))
