"""Text search over a launch set."""
from __future__ import annotations

from typing import Iterable, Optional

from launchboard.models import LaunchRecord, LaunchSet


def normalize_query(text: Optional[str]) -> str:
    """Lower-case raw search input; None means no filtering."""
    return (text or "").lower()


def matches(record: LaunchRecord, query: str) -> bool:
    return query in record.mission_name.lower() or query in record.rocket.rocket_name.lower()


def filter_launches(launches: Iterable[LaunchRecord], query: str) -> LaunchSet:
    """Keep records whose mission or rocket name contains `query`, in order.

    `query` is expected already lower-cased (see normalize_query).
    """
    launches = tuple(launches)
    if not query:
        return launches
    return tuple(r for r in launches if matches(r, query))
