"""
fetch.py
--------
Downloads the past and upcoming SpaceX launch lists concurrently and
merges them into one launch set (past first, then upcoming).

Per-source outcomes are kept as values so the merge rule can see
exactly which source failed and how.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional, Tuple

import requests
from pydantic import ValidationError

from launchboard.config import Settings, load_settings
from launchboard.errors import (
    FetchError,
    LoadCancelledError,
    NetworkError,
    ParseError,
    PartialFailureWarning,
)
from launchboard.models import LaunchSet, parse_records
from launchboard.validate import check_integrity

log = logging.getLogger(__name__)

PAST = "past"
UPCOMING = "upcoming"


class LoadStatus(str, enum.Enum):
    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SourceResult:
    source: str
    url: str
    launches: LaunchSet = ()
    transport_error: Optional[str] = None
    parse_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.transport_error is None and self.parse_error is None


@dataclass(frozen=True)
class LoadOutcome:
    status: LoadStatus
    launches: LaunchSet = ()
    error: Optional[FetchError] = None
    warning: Optional[PartialFailureWarning] = None

    @property
    def ok(self) -> bool:
        return self.status in (LoadStatus.OK, LoadStatus.PARTIAL)

    def unwrap(self) -> LaunchSet:
        if self.error is not None:
            raise self.error
        if self.status is LoadStatus.CANCELLED:
            raise LoadCancelledError("launch load was cancelled")
        return self.launches


def fetch_source(session, source: str, url: str, timeout: float) -> SourceResult:
    """GET one launch list; never raises."""
    log.info("Fetching %s launches from %s", source, url)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        log.warning("Fetching %s launches failed: %s", source, e)
        return SourceResult(source, url, transport_error=str(e))

    if not resp.ok:
        msg = f"HTTP {resp.status_code}"
        log.warning("Fetching %s launches failed: %s", source, msg)
        return SourceResult(source, url, transport_error=msg)

    try:
        launches = parse_records(resp.json())
    except (ValueError, ValidationError) as e:
        # requests' JSONDecodeError is a ValueError
        log.error("Could not decode %s launches: %s", source, e)
        return SourceResult(source, url, parse_error=str(e))

    log.info("Fetched %d %s launches", len(launches), source)
    return SourceResult(source, url, launches=launches)


def merge_sources(past: SourceResult, upcoming: SourceResult) -> LoadOutcome:
    """Combine two per-source results into one outcome."""
    for res in (past, upcoming):
        if res.parse_error is not None:
            err = ParseError(f"Could not read {res.source} launches: {res.parse_error}", source=res.source)
            return LoadOutcome(LoadStatus.FAILED, error=err)

    if past.transport_error is not None and upcoming.transport_error is not None:
        err = NetworkError(
            "Something went wrong with fetching the launch list "
            f"(past: {past.transport_error}; upcoming: {upcoming.transport_error})"
        )
        return LoadOutcome(LoadStatus.FAILED, error=err)

    warning = None
    for res in (past, upcoming):
        if res.transport_error is not None:
            warning = PartialFailureWarning(res.source, res.transport_error)

    try:
        launches = check_integrity(past.launches + upcoming.launches)
    except FetchError as err:
        return LoadOutcome(LoadStatus.FAILED, error=err)

    status = LoadStatus.PARTIAL if warning is not None else LoadStatus.OK
    return LoadOutcome(status, launches=launches, warning=warning)


class Aggregator:
    """Owns the loading flag and last error for one session's load."""

    def __init__(self, settings: Optional[Settings] = None, session=None):
        self.settings = settings or load_settings()
        self.session = session or requests.Session()
        self.loading = False
        self.error: Optional[FetchError] = None

    @contextmanager
    def _loading(self):
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    async def _fetch_both(self) -> Tuple[SourceResult, SourceResult]:
        s = self.settings
        return await asyncio.gather(
            asyncio.to_thread(fetch_source, self.session, PAST, s.past_url, s.timeout),
            asyncio.to_thread(fetch_source, self.session, UPCOMING, s.upcoming_url, s.timeout),
        )

    async def load(self, cancel: Optional[asyncio.Event] = None) -> LoadOutcome:
        with self._loading():
            self.error = None
            if cancel is not None and cancel.is_set():
                log.info("Launch load cancelled before start")
                return LoadOutcome(LoadStatus.CANCELLED)

            fetches = asyncio.ensure_future(self._fetch_both())
            if cancel is None:
                past, upcoming = await fetches
            else:
                waiter = asyncio.ensure_future(cancel.wait())
                try:
                    done, _ = await asyncio.wait(
                        {fetches, waiter}, return_when=asyncio.FIRST_COMPLETED
                    )
                finally:
                    waiter.cancel()
                if fetches not in done:
                    fetches.cancel()
                    log.info("Launch load cancelled while fetching")
                    return LoadOutcome(LoadStatus.CANCELLED)
                past, upcoming = fetches.result()

            outcome = merge_sources(past, upcoming)
            if outcome.error is not None:
                self.error = outcome.error
                log.error("Launch load failed (%s): %s", outcome.error.kind, outcome.error)
            elif outcome.warning is not None:
                log.warning("Partial launch load: %s", outcome.warning)
            else:
                log.info("Loaded %d launches", len(outcome.launches))
            return outcome

    def load_sync(self) -> LoadOutcome:
        return asyncio.run(self.load())
