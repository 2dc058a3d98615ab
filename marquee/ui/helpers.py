"""
UI Helpers - Drawing and text utilities for pygame.
"""
from typing import List

import pygame
import pygame.gfxdraw


def draw_aa_circle(surface: pygame.Surface, color: tuple, center: tuple, radius: int):
    """Draw an anti-aliased filled circle."""
    cx, cy = int(center[0]), int(center[1])
    r = int(radius)
    pygame.gfxdraw.aacircle(surface, cx, cy, r, color)
    pygame.gfxdraw.filled_circle(surface, cx, cy, r, color)


def draw_aa_rounded_rect(surface: pygame.Surface, color: tuple, rect: tuple, radius: int):
    """Draw an anti-aliased rounded rectangle using circles for corners."""
    x, y, w, h = rect
    r = min(radius, w // 2, h // 2)

    if r <= 0:
        pygame.draw.rect(surface, color, (x, y, w, h))
        return

    # Center cross
    pygame.draw.rect(surface, color, (x + r, y, w - 2 * r, h))
    pygame.draw.rect(surface, color, (x, y + r, w, h - 2 * r))

    corners = [
        (x + r, y + r),
        (x + w - r - 1, y + r),
        (x + r, y + h - r - 1),
        (x + w - r - 1, y + h - r - 1),
    ]
    for cx, cy in corners:
        pygame.gfxdraw.aacircle(surface, int(cx), int(cy), r, color)
        pygame.gfxdraw.filled_circle(surface, int(cx), int(cy), r, color)


def fit_text(font: pygame.font.Font, text: str, max_width: int) -> str:
    """Cut text with an ellipsis so it renders within max_width."""
    if font.size(text)[0] <= max_width:
        return text
    while text and font.size(text + '...')[0] > max_width:
        text = text[:-1]
    return text.rstrip() + '...'


def wrap_text(font: pygame.font.Font, text: str, max_width: int, max_lines: int = 0) -> List[str]:
    """Word-wrap text to max_width. max_lines > 0 limits output, ellipsizing the last line."""
    lines: List[str] = []
    current = ''
    for word in (text or '').split():
        candidate = f'{current} {word}' if current else word
        if font.size(candidate)[0] <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = word if font.size(word)[0] <= max_width else fit_text(font, word, max_width)
    if current:
        lines.append(current)

    if max_lines and len(lines) > max_lines:
        last = ' '.join(lines[max_lines - 1:])
        lines = lines[:max_lines - 1] + [fit_text(font, last, max_width)]
    return lines
