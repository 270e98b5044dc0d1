"""
state.py
--------
One immutable application state, advanced only by named events through
`reduce`. `LaunchBoard` owns the current state for a session and runs the
single startup load.
"""
from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from launchboard.errors import FetchError
from launchboard.fetch import Aggregator, LoadOutcome, LoadStatus
from launchboard.filtering import filter_launches, normalize_query
from launchboard.models import LaunchRecord, LaunchSet
from launchboard.selection import SelectionStore
from launchboard.viewmodel import ViewFields, format_for_display


@dataclass(frozen=True)
class AppState:
    launches: LaunchSet = ()
    loading: bool = False
    error: Optional[str] = None
    warning: Optional[str] = None
    cancelled: bool = False
    query: str = ""
    selection: SelectionStore = field(default_factory=SelectionStore)


# --- events ------------------------------------------------------------------

@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class Loaded:
    launches: LaunchSet
    warning: Optional[str] = None


@dataclass(frozen=True)
class LoadFailed:
    error: str


@dataclass(frozen=True)
class LoadCancelled:
    pass


@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class Selected:
    flight_number: int


Event = Union[LoadStarted, Loaded, LoadFailed, LoadCancelled, QueryChanged, Selected]


def reduce(state: AppState, event: Event) -> AppState:
    if isinstance(event, LoadStarted):
        return replace(state, loading=True, error=None, warning=None, cancelled=False)
    if isinstance(event, Loaded):
        # The set is replaced wholesale; query and selection survive.
        return replace(state, launches=tuple(event.launches), loading=False, error=None, warning=event.warning)
    if isinstance(event, LoadFailed):
        return replace(state, launches=(), loading=False, error=event.error)
    if isinstance(event, LoadCancelled):
        return replace(state, loading=False, cancelled=True)
    if isinstance(event, QueryChanged):
        return replace(state, query=normalize_query(event.query))
    if isinstance(event, Selected):
        return replace(state, selection=state.selection.select(event.flight_number))
    raise TypeError(f"unknown event: {event!r}")


def event_for(outcome: LoadOutcome) -> Event:
    if outcome.status is LoadStatus.CANCELLED:
        return LoadCancelled()
    if outcome.error is not None:
        return LoadFailed(str(outcome.error))
    warning = str(outcome.warning) if outcome.warning is not None else None
    return Loaded(outcome.launches, warning=warning)


# --- selectors ---------------------------------------------------------------

def visible_launches(state: AppState) -> LaunchSet:
    if state.loading or state.error:
        return ()
    return filter_launches(state.launches, state.query)


def selected_launch(state: AppState) -> Optional[LaunchRecord]:
    return state.selection.resolve(state.launches)


def detail_fields(state: AppState) -> Optional[ViewFields]:
    record = selected_launch(state)
    return format_for_display(record) if record is not None else None


class LaunchBoard:
    """Single owner of the session state; all writes go through dispatch."""

    def __init__(self, aggregator: Optional[Aggregator] = None):
        self.aggregator = aggregator or Aggregator()
        self._state = AppState()
        self._lock = threading.Lock()

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, event: Event) -> AppState:
        with self._lock:
            self._state = reduce(self._state, event)
            return self._state

    async def start(self, cancel: Optional[asyncio.Event] = None) -> LoadOutcome:
        self.dispatch(LoadStarted())
        try:
            outcome = await self.aggregator.load(cancel)
        except asyncio.CancelledError:
            self.dispatch(LoadCancelled())
            raise
        except Exception as e:
            self.dispatch(LoadFailed(f"Unexpected error while loading launches: {e}"))
            raise
        self.dispatch(event_for(outcome))
        return outcome

    def set_query(self, text: Optional[str]) -> AppState:
        return self.dispatch(QueryChanged(text or ""))

    def select(self, flight_number: int) -> AppState:
        return self.dispatch(Selected(flight_number))

    def visible(self) -> LaunchSet:
        return visible_launches(self._state)

    def selected(self) -> Optional[LaunchRecord]:
        return selected_launch(self._state)

    def details(self) -> Optional[ViewFields]:
        return detail_fields(self._state)

    @property
    def last_error(self) -> Optional[FetchError]:
        return self.aggregator.error
