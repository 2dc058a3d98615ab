#!/usr/bin/env python3
"""
Marquee - Movie browser for TMDB

Usage:
    python -m marquee.main              # Windowed
    python -m marquee.main --fullscreen # Fullscreen (kiosk)
    python -m marquee.main --mock       # Mock mode (offline sample data)

Set TMDB_API_KEY to a TMDB v3 API key for live data.
"""
import os
import sys
import logging
import platform
from logging.handlers import RotatingFileHandler

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    TMDB_API_URL, IMAGE_BASE_URL, MOCK_MODE, FULLSCREEN,
    LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
)
from .app import Marquee


def setup_logging():
    """Configure logging with console and rotating file handler."""
    level_name = os.environ.get('MARQUEE_LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)

    console_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    file_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(console_formatter)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        root.addHandler(file_handler)
        root.info(f'Logging to: {LOG_FILE}')
    except OSError as e:
        root.warning(f'Could not create log file: {e}')

    # Quiet down noisy libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)


def log_system_info(logger: logging.Logger):
    """Log system information at startup."""
    logger.info('=' * 50)
    logger.info('MARQUEE STARTUP')
    logger.info('=' * 50)
    logger.info(f'Python: {sys.version.split()[0]}')
    logger.info(f'Platform: {platform.system()} {platform.release()}')
    logger.info('=' * 50)


def main():
    """Entry point for Marquee application."""
    setup_logging()

    logger = logging.getLogger(__name__)
    log_system_info(logger)

    if MOCK_MODE:
        logger.info('Mode: MOCK (offline sample data)')
    else:
        logger.info(f'Catalog: {TMDB_API_URL}')
        logger.info(f'Images: {IMAGE_BASE_URL}')
    logger.info(f'Screen: {SCREEN_WIDTH}x{SCREEN_HEIGHT}')
    logger.info(f'Fullscreen: {FULLSCREEN}')

    print()
    print('Controls:')
    print('   Click      Open movie / play trailer')
    print('   Drag/Wheel Scroll')
    print('   1 / 2      Home / Browse tab')
    print('   Backspace  Back')
    print('   Esc        Quit')
    print()

    app = Marquee(fullscreen=FULLSCREEN)
    app.start()


if __name__ == '__main__':
    main()
