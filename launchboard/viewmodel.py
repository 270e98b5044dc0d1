"""
viewmodel.py
------------
Display-ready fields derived from one launch record.
Every function here is total: a missing nested field degrades to a
sentinel, never an exception.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

import pandas as pd

from launchboard.models import LaunchRecord

PENDING_DATE = "Upcoming"
UNKNOWN_DATE = "Unknown date"
UNKNOWN = "unknown"
NO_DETAILS = "No details available."

# pandas also reads words like "now" and "today"; only calendar timestamps count
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")

# --- small helpers -----------------------------------------------------------

def safe_get(obj: Any, *path: Union[str, int], default: Any = None) -> Any:
    """Walk attributes, mapping keys or sequence indexes; `default` on any gap."""
    cur = obj
    for step in path:
        if cur is None:
            return default
        if isinstance(step, int):
            if not isinstance(cur, (list, tuple)) or not -len(cur) <= step < len(cur):
                return default
            cur = cur[step]
        elif isinstance(cur, dict):
            cur = cur.get(step)
        else:
            cur = getattr(cur, step, None)
    return default if cur is None else cur


def date_only(record: LaunchRecord) -> str:
    """YYYY-MM-DD of launch_date_local, in UTC like the original list view."""
    if safe_get(record, "upcoming") is True:
        return PENDING_DATE
    raw = safe_get(record, "launch_date_local")
    if not isinstance(raw, str) or not _ISO_DATE.match(raw):
        return UNKNOWN_DATE
    ts = pd.to_datetime(raw, format="ISO8601", errors="coerce", utc=True)
    if pd.isna(ts):
        return UNKNOWN_DATE
    return ts.strftime("%Y-%m-%d")


def success_label(record: LaunchRecord) -> str:
    # Absent launch_success reads the same as a failure; there is no third label.
    return "Yes" if safe_get(record, "launch_success") is True else "No"


def payload_mass_kg(record: LaunchRecord) -> Union[float, str]:
    mass = safe_get(record, "rocket", "second_stage", "payloads", 0, "payload_mass_kg")
    return UNKNOWN if mass is None else mass


def links(record: LaunchRecord) -> Tuple[Optional[str], Optional[str]]:
    return (
        safe_get(record, "links", "video_link"),
        safe_get(record, "links", "wikipedia"),
    )


@dataclass(frozen=True)
class ViewFields:
    flight_number: int
    mission_name: str
    rocket_name: str
    site_name: str
    date_only: str
    success_label: str
    payload_mass_kg: Union[float, str]
    video_link: Optional[str]
    wikipedia: Optional[str]
    details: str

    @property
    def payload_text(self) -> str:
        if self.payload_mass_kg == UNKNOWN:
            return UNKNOWN
        mass = float(self.payload_mass_kg)
        return f"{int(mass) if mass.is_integer() else mass} kg"


def format_for_display(record: LaunchRecord) -> ViewFields:
    video, wiki = links(record)
    return ViewFields(
        flight_number=record.flight_number,
        mission_name=safe_get(record, "mission_name", default=UNKNOWN),
        rocket_name=safe_get(record, "rocket", "rocket_name", default=UNKNOWN),
        site_name=safe_get(record, "launch_site", "site_name_long", default=UNKNOWN),
        date_only=date_only(record),
        success_label=success_label(record),
        payload_mass_kg=payload_mass_kg(record),
        video_link=video,
        wikipedia=wiki,
        details=safe_get(record, "details") or NO_DETAILS,
    )
