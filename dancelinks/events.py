# events.py
# Notifications emitted while enumerating solutions, and their dispatcher

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Type, TypeVar


@dataclass(frozen=True)
class SearchEvent:
    """Base class of every notification."""


@dataclass(frozen=True)
class Started(SearchEvent):
    pass


@dataclass(frozen=True)
class Finished(SearchEvent):
    pass


@dataclass(frozen=True)
class Cancelled(SearchEvent):
    pass


@dataclass(frozen=True)
class SearchStep(SearchEvent):
    iteration: int


@dataclass(frozen=True)
class SolutionFound(SearchEvent):
    solution_index: int
    row_indexes: tuple[int, ...]


# Trace events. Only emitted when somebody listens (see Observers.wants).


@dataclass(frozen=True)
class ColumnChosen(SearchEvent):
    iteration: int
    column_index: int
    size: int


@dataclass(frozen=True)
class RowSelected(SearchEvent):
    row_index: int
    depth: int


@dataclass(frozen=True)
class RowReleased(SearchEvent):
    row_index: int
    depth: int


E = TypeVar("E", bound=SearchEvent)


class Observers:
    """Handlers registered per event type, called synchronously in order."""

    def __init__(self):
        self._handlers: Dict[Type[SearchEvent], List[Callable]] = {}

    def subscribe(self, event_type: Type[E], handler: Callable[[E], object]) -> Callable[[E], object]:
        # Handlers are keyed by the concrete event type; the base class never fires.
        if (
            not (isinstance(event_type, type) and issubclass(event_type, SearchEvent))
            or event_type is SearchEvent
        ):
            raise TypeError(f"not a search event type: {event_type!r}")
        self._handlers.setdefault(event_type, []).append(handler)
        return handler

    def unsubscribe(self, event_type: Type[E], handler: Callable[[E], object]) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def wants(self, event_type: Type[SearchEvent]) -> bool:
        return bool(self._handlers.get(event_type))

    def emit(self, event: SearchEvent) -> None:
        # Copy so a handler may unsubscribe itself.
        for handler in list(self._handlers.get(type(event), ())):
            handler(event)
