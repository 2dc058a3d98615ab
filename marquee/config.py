"""
Marquee Configuration - All constants and settings.
"""
import os
import sys
import tempfile
from pathlib import Path

# ============================================
# SCREEN & DISPLAY (Portrait phone-style window)
# ============================================

SCREEN_WIDTH = 480
SCREEN_HEIGHT = 854

# ============================================
# CATALOG SERVICE (TMDB v3)
# ============================================

TMDB_API_KEY = os.environ.get('TMDB_API_KEY', '')
TMDB_API_URL = os.environ.get('MARQUEE_API_URL', 'https://api.themoviedb.org/3')
IMAGE_BASE_URL = os.environ.get('MARQUEE_IMAGE_URL', 'https://image.tmdb.org/t/p')

# Named size tiers offered by the image origin
IMAGE_SIZES = {
    'poster': 'w500',
    'backdrop': 'w780',
}

REQUEST_TIMEOUT = 10  # seconds per request

LIST_CATEGORIES = ('popular', 'now_playing', 'upcoming', 'top_rated')

# ============================================
# EMBEDDED PLAYER
# ============================================

VIDEO_EMBED_URL = 'https://www.youtube.com/embed/{key}?autoplay=1&playsinline=1&controls=1&modestbranding=1'
VIDEO_WATCH_URL = 'https://www.youtube.com/watch?v={key}'
TRAILER_TYPE = 'Trailer'
TRAILER_SITE = 'YouTube'
PLAYER_DIR = Path(tempfile.gettempdir()) / 'marquee'

# ============================================
# PATHS
# ============================================

LOG_DIR = Path.home() / '.marquee' / 'logs'
LOG_FILE = LOG_DIR / 'marquee.log'
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per file
LOG_BACKUP_COUNT = 10

# ============================================
# COMMAND LINE FLAGS
# ============================================

MOCK_MODE = '--mock' in sys.argv or '-m' in sys.argv
FULLSCREEN = '--fullscreen' in sys.argv or '-f' in sys.argv

# ============================================
# COLORS
# ============================================

COLORS = {
    'bg_primary': (245, 245, 245),
    'bg_card': (255, 255, 255),
    'bg_dark': (0, 0, 0),
    'placeholder': (224, 224, 224),
    'accent': (0, 122, 255),  # #007AFF
    'text_primary': (26, 26, 26),
    'text_secondary': (102, 102, 102),
    'text_muted': (153, 153, 153),
    'text_inverse': (255, 255, 255),
    'rating': (255, 179, 0),
    'tab_bar': (255, 255, 255),
    'divider': (221, 221, 221),
    'overlay': (0, 0, 0, 110),
}

# ============================================
# LAYOUT & SIZES
# ============================================

MARGIN = 16
TAB_BAR_HEIGHT = 64
HEADER_HEIGHT = 56

# Home featured cards
HERO_HEIGHT = 240
CARD_IMAGE_HEIGHT = 180
CARD_TEXT_HEIGHT = 130
CARD_SPACING = 16

# Browse rows
POSTER_WIDTH = 120
POSTER_HEIGHT = 180
POSTER_SPACING = 12
ROW_HEIGHT = POSTER_HEIGHT + 90

# Details
BACKDROP_HEIGHT = 250
DETAIL_POSTER_WIDTH = 120
DETAIL_POSTER_HEIGHT = 180
SIMILAR_WIDTH = 100
SIMILAR_HEIGHT = 150
PLAY_BTN_HEIGHT = 52

BACK_BTN_SIZE = 44

# ============================================
# CONTENT LIMITS
# ============================================

FEATURED_COUNT = 5   # Featured cards on Home
SIMILAR_LIMIT = 10   # Similar titles on Details

# ============================================
# TOUCH & GESTURES
# ============================================

DRAG_THRESHOLD = 12       # Pixels before a press becomes a drag
SCROLL_DECAY_RATE = 12.0  # Scroll easing speed

# ============================================
# PERFORMANCE
# ============================================

TARGET_FPS = 60
IDLE_FPS = 15
IMAGE_CACHE_MAX_SIZE = 120  # Maximum cached images
