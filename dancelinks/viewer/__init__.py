"""Step-by-step pygame visualization of a dancing links search."""

from .app import draw, handle_input, run
from .trace import SearchTrace, TraceStep

__all__ = ["SearchTrace", "TraceStep", "draw", "handle_input", "run"]
