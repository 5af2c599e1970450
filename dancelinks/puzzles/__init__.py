"""Puzzles expressed as exact cover problems."""

from .calendar_board import (
    Placement,
    Tiling,
    build_calendar,
    build_tiling,
    render,
    solve_tiling,
)

__all__ = ["Placement", "Tiling", "build_calendar", "build_tiling", "render", "solve_tiling"]
