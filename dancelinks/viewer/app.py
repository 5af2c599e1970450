# app.py
# Pygame window stepping through a recorded search

from __future__ import annotations

from typing import Tuple

import pygame

from .trace import SearchTrace

WINDOW_WIDTH = 1100
WINDOW_HEIGHT = 760
TOP_BAR_HEIGHT = 120
NARRATIVE_HEIGHT = 120
MARGIN = 16
MAX_CELL = 28
MIN_CELL = 4

# Colors – dark mode
BG = (15, 15, 17)
CARD_BG = (30, 30, 34)
GRID = (90, 90, 95)
TEXT_MAIN = (245, 245, 250)
TEXT_SECONDARY = (170, 170, 180)
MATRIX_BG = (10, 10, 12)
CELL_ON = (110, 120, 255)
CELL_SELECTED = (60, 200, 80)
CELL_DIMMED = (45, 45, 49)
ROW_SELECTED = (40, 60, 40)
COLUMN_FOCUS = (255, 190, 60)
SECONDARY_TINT = (25, 25, 35)
HEADLINE_COLORS = {
    "SOLVED": (60, 200, 80),
    "DEAD END": (250, 80, 80),
    "BACKTRACKING": (250, 80, 80),
    "STOPPED": (250, 80, 80),
}


def cell_size(trace: SearchTrace, area: pygame.Rect) -> int:
    """Largest square cell that fits the whole matrix into ``area``."""
    rows = max(1, len(trace.rows))
    cols = max(1, trace.num_columns)
    size = min(area.width // cols, area.height // rows, MAX_CELL)
    return max(size, MIN_CELL)


def draw_top_bar(screen: pygame.Surface, title_font: pygame.font.Font, body_font: pygame.font.Font, trace: SearchTrace):
    width = screen.get_width()
    card_rect = pygame.Rect(MARGIN, MARGIN, width - 2 * MARGIN, TOP_BAR_HEIGHT - 2 * MARGIN)
    pygame.draw.rect(screen, CARD_BG, card_rect, border_radius=16)

    title_surf = title_font.render("Dancing Links", True, TEXT_MAIN)
    screen.blit(title_surf, (card_rect.x + 20, card_rect.y + 12))

    step_text = f"Event {trace.current_step + 1} of {trace.total_steps}"
    if trace.truncated:
        step_text += " (truncated)"
    step_surf = body_font.render(step_text, True, TEXT_SECONDARY)
    screen.blit(step_surf, (card_rect.right - step_surf.get_width() - 20, card_rect.y + 16))

    hint = "Space play/pause   ←/→ step   Esc quit"
    if trace.playing:
        hint = "Playing...   " + hint
    hint_surf = body_font.render(hint, True, TEXT_SECONDARY)
    screen.blit(hint_surf, (card_rect.x + 20, card_rect.bottom - hint_surf.get_height() - 10))


def draw_narrative(screen: pygame.Surface, body_font: pygame.font.Font, trace: SearchTrace, rect: pygame.Rect):
    pygame.draw.rect(screen, CARD_BG, rect, border_radius=12)
    lines = trace.narrative()
    y = rect.y + 12
    for i, line in enumerate(lines):
        color = HEADLINE_COLORS.get(line, TEXT_MAIN) if i == 0 else TEXT_SECONDARY
        surf = body_font.render(line, True, color)
        screen.blit(surf, (rect.x + 20, y))
        y += surf.get_height() + 6


def draw_matrix(screen: pygame.Surface, trace: SearchTrace, rect: pygame.Rect) -> Tuple[int, int]:
    """Draws the matrix; returns the (width, height) actually used."""
    pygame.draw.rect(screen, MATRIX_BG, rect)
    size = cell_size(trace, rect)
    selected = set(trace.selected_rows)
    removed = trace.removed_rows
    covered = trace.covered_columns
    focus = trace.chosen_column
    inset = 1 if size > 6 else 0

    cols_visible = min(trace.num_columns, rect.width // size)
    rows_visible = min(len(trace.rows), rect.height // size)

    # Secondary columns get a faint background.
    for c in range(trace.num_primary_columns, cols_visible):
        pygame.draw.rect(screen, SECONDARY_TINT, (rect.x + c * size, rect.y, size, rows_visible * size))

    for r in range(rows_visible):
        y = rect.y + r * size
        if r in selected:
            pygame.draw.rect(screen, ROW_SELECTED, (rect.x, y, cols_visible * size, size))
        for c in trace.row_columns[r]:
            if c >= cols_visible:
                continue
            if r in selected:
                color = CELL_SELECTED
            elif r in removed or c in covered:
                color = CELL_DIMMED
            else:
                color = CELL_ON
            cell = pygame.Rect(rect.x + c * size + inset, y + inset, size - 2 * inset, size - 2 * inset)
            pygame.draw.rect(screen, color, cell)

    if focus is not None and focus < cols_visible:
        outline = pygame.Rect(rect.x + focus * size, rect.y, size, rows_visible * size)
        pygame.draw.rect(screen, COLUMN_FOCUS, outline, width=2)

    if size >= 8:
        for c in range(cols_visible + 1):
            x = rect.x + c * size
            pygame.draw.line(screen, GRID, (x, rect.y), (x, rect.y + rows_visible * size))
        for r in range(rows_visible + 1):
            y = rect.y + r * size
            pygame.draw.line(screen, GRID, (rect.x, y), (rect.x + cols_visible * size, y))

    return cols_visible * size, rows_visible * size


def draw(screen: pygame.Surface, title_font: pygame.font.Font, body_font: pygame.font.Font, trace: SearchTrace):
    screen.fill(BG)
    width, height = screen.get_size()
    draw_top_bar(screen, title_font, body_font, trace)

    narrative_rect = pygame.Rect(MARGIN, TOP_BAR_HEIGHT, width - 2 * MARGIN, NARRATIVE_HEIGHT - MARGIN)
    draw_narrative(screen, body_font, trace, narrative_rect)

    top = TOP_BAR_HEIGHT + NARRATIVE_HEIGHT
    matrix_rect = pygame.Rect(MARGIN, top, width - 2 * MARGIN, max(0, height - top - MARGIN))
    draw_matrix(screen, trace, matrix_rect)


def handle_input(event: pygame.event.Event, trace: SearchTrace) -> str | None:
    """Apply one pygame event to the trace; returns "quit" when the window should close."""
    if event.type == pygame.QUIT:
        return "quit"
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return "quit"
        if event.key == pygame.K_SPACE:
            trace.toggle_play()
        elif event.key == pygame.K_RIGHT:
            trace.step_forward()
        elif event.key == pygame.K_LEFT:
            trace.step_backward()
        elif event.key == pygame.K_HOME:
            trace.set_step(0)
        elif event.key == pygame.K_END:
            trace.set_step(trace.total_steps - 1)
    elif event.type == pygame.MOUSEWHEEL:
        if event.y > 0:
            trace.step_backward()
        elif event.y < 0:
            trace.step_forward()
    return None


def run(trace: SearchTrace, caption: str = "Dancing Links") -> None:
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(caption)
        title_font = pygame.font.SysFont("SF Pro Display", 32, bold=True)
        body_font = pygame.font.SysFont("SF Pro Text", 18)
        clock = pygame.time.Clock()

        running = True
        while running:
            dt = clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                if handle_input(event, trace) == "quit":
                    running = False

            trace.update(dt)
            draw(screen, title_font, body_font, trace)
            pygame.display.flip()
    finally:
        pygame.quit()
