"""
Marquee Application - Main application class.
"""
import signal
import logging
from typing import Optional

import numpy as np
import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    TMDB_API_KEY, MOCK_MODE,
    SCROLL_DECAY_RATE, TARGET_FPS, IDLE_FPS,
)
from .models import NavigationState, HOME, BROWSE, DETAILS, PLAYER
from .api import CatalogClient, NullCatalogClient
from .controllers import NavigationController
from .handlers import TouchHandler
from .managers import ScrollGroup
from .screens import HomeScreen, BrowseScreen, DetailsScreen, PlayerScreen
from .ui import ImageCache, Renderer, RenderContext
from .utils import run_async

logger = logging.getLogger(__name__)

WHEEL_STEP = 80  # Pixels per mouse wheel notch


class Marquee:
    """Main Marquee application."""

    def __init__(self, fullscreen: bool = False, client: Optional[CatalogClient] = None):
        pygame.init()
        pygame.display.set_caption('Marquee')

        self._init_display(fullscreen)
        self._init_components(client)

    def _init_display(self, fullscreen: bool):
        """Initialize the display."""
        flags = pygame.DOUBLEBUF
        if fullscreen:
            flags |= pygame.FULLSCREEN

        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        self.clock = pygame.time.Clock()
        pygame.mouse.set_visible(not fullscreen)

        info = pygame.display.Info()
        logger.info(f'Display: {pygame.display.get_driver()} {info.current_w}x{info.current_h}')

    def _init_components(self, client: Optional[CatalogClient]):
        """Initialize all application components."""
        self.mock_mode = MOCK_MODE

        # Catalog client (offline sample data in mock mode)
        if client is not None:
            self.client = client
        elif self.mock_mode:
            self.client = NullCatalogClient()
        else:
            if not TMDB_API_KEY:
                logger.warning('TMDB_API_KEY is not set; catalog requests will fail (try --mock)')
            self.client = CatalogClient(TMDB_API_KEY)

        # Navigation
        self.navigation = NavigationController()
        self.navigation.subscribe(self._on_navigate)
        self.active_screen = None

        # UI
        self.image_cache = ImageCache()
        self.renderer = Renderer(self.screen, self.image_cache, self.client)
        self.scroll = ScrollGroup(SCROLL_DECAY_RATE)

        # Input
        self.touch = TouchHandler()
        self._drag_row: Optional[str] = None
        self._pressed_action: tuple = ()

        self._click_sound = self._create_click_sound()
        self.running = True

        # Register signal handlers for graceful shutdown
        signal.signal(signal.SIGTERM, self._handle_signal)
        signal.signal(signal.SIGINT, self._handle_signal)

    def _create_click_sound(self):
        """Create a short click sound for tap feedback."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=22050, size=-16, channels=2)

            # 15ms, 600Hz sine wave with quick fade
            duration = 0.015
            sample_rate = 22050
            t = np.linspace(0, duration, int(sample_rate * duration), False)
            wave = np.sin(600 * 2 * np.pi * t) * 0.25
            fade = np.linspace(1, 0, len(wave))
            wave = (wave * fade * 32767).astype(np.int16)

            stereo_wave = np.column_stack([wave, wave])
            return pygame.sndarray.make_sound(stereo_wave)
        except (pygame.error, ValueError) as e:
            logger.debug(f'Could not create click sound: {e}')
            return None

    def _play_click(self):
        if self._click_sound:
            self._click_sound.play()

    def _handle_signal(self, signum, frame):
        """Handle SIGTERM/SIGINT for graceful shutdown."""
        sig_name = 'SIGTERM' if signum == signal.SIGTERM else 'SIGINT'
        logger.info(f'Received {sig_name}, shutting down...')
        self.running = False

    # ============================================
    # SCREENS
    # ============================================

    def _build_screen(self, state: NavigationState):
        """Create the screen object for a navigation state."""
        if state.screen == HOME:
            return HomeScreen(self.client)
        if state.screen == BROWSE:
            return BrowseScreen(self.client)
        if state.screen == DETAILS:
            return DetailsScreen(self.client, state.item_id)
        if state.screen == PLAYER:
            return PlayerScreen(state.media_key, state.title or '')
        raise ValueError(f'Unknown screen: {state.screen!r}')

    def _on_navigate(self, state: NavigationState):
        """Swap the visible screen. Every visit fetches from scratch."""
        if self.active_screen is not None:
            self.active_screen.unmount()
        self.scroll.reset()
        self.active_screen = self._build_screen(state)
        self.active_screen.mount()

    # ============================================
    # MAIN LOOP
    # ============================================

    def start(self):
        """Start the application."""
        logger.info('Starting Marquee...')
        if self.mock_mode:
            logger.info('Running in MOCK MODE')

        self._on_navigate(self.navigation.state)

        logger.info('Entering main loop...')
        dt = 1.0 / TARGET_FPS
        while self.running:
            self._handle_events()
            self.scroll.update(dt)
            self._draw()
            pygame.display.flip()

            busy = (
                self.touch.pressed or
                not self.scroll.settled or
                getattr(self.active_screen, 'loading', False) or
                bool(self.image_cache.loading)
            )
            dt = self.clock.tick(TARGET_FPS if busy else IDLE_FPS) / 1000.0

        logger.info('Shutting down...')
        if self.active_screen is not None:
            self.active_screen.unmount()
        pygame.quit()
        logger.info('Marquee stopped')

    def _draw(self):
        ctx = RenderContext(
            state=self.navigation.state,
            screen=self.active_screen,
            scroll=self.scroll,
            tab_bar_visible=self.navigation.tab_bar_visible,
            pressed_action=self._pressed_action,
        )
        content_height = self.renderer.draw(ctx)
        self.scroll.page.set_extent(content_height, self.renderer.viewport.height)

    # ============================================
    # INPUT
    # ============================================

    def _handle_events(self):
        """Handle pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

            elif event.type == pygame.MOUSEWHEEL:
                self.scroll.page.scroll_by(-event.y * WHEEL_STEP)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.touch.on_down(event.pos)
                self._drag_row = self.renderer.row_at(event.pos)
                self._pressed_action = self.renderer.hit_test(event.pos) or ()

            elif event.type == pygame.MOUSEMOTION:
                if self.touch.pressed:
                    self._handle_drag(event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                gesture = self.touch.on_up(event.pos)
                self._pressed_action = ()
                if gesture == 'tap':
                    action = self.renderer.hit_test(event.pos)
                    if action:
                        self._play_click()
                        self.dispatch(action)
                self._drag_row = None

    def _handle_drag(self, pos):
        dx, dy = self.touch.on_move(pos)
        if not self.touch.dragging:
            return
        self._pressed_action = ()
        if self.touch.axis == 'x':
            if self._drag_row:
                self.scroll.row(self._drag_row).drag(dx)
        else:
            self.scroll.page.drag(dy)

    def _handle_key(self, key):
        """Handle keyboard input."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_BACKSPACE:
            self.navigation.back()
        elif key == pygame.K_UP:
            self.scroll.page.scroll_by(-WHEEL_STEP)
        elif key == pygame.K_DOWN:
            self.scroll.page.scroll_by(WHEEL_STEP)
        elif key == pygame.K_1 and self.navigation.tab_bar_visible:
            self.navigation.select_tab(HOME)
        elif key == pygame.K_2 and self.navigation.tab_bar_visible:
            self.navigation.select_tab(BROWSE)

    def dispatch(self, action: tuple):
        """Route a tapped action to the active screen or the navigation controller."""
        kind = action[0]
        screen = self.active_screen
        logger.info(f'Tap: {kind} on {self.navigation.current_screen}')

        if kind == 'item':
            screen.select(self.navigation, action[1])
        elif kind == 'similar':
            screen.select_similar(self.navigation, action[1])
        elif kind == 'play':
            screen.play(self.navigation)
        elif kind == 'back':
            self.navigation.back()
        elif kind == 'tab':
            self.navigation.select_tab(action[1])
        elif kind == 'reopen':
            run_async(screen.open)
        else:
            logger.warning(f'Unknown action: {kind}')
