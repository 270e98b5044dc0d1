"""
models.py
---------
Shape of one launch record as served by the v3 launches endpoints.
Only the fields the client reads are declared; everything else the API
sends is ignored.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Payload(_Record):
    payload_id: Optional[str] = None
    payload_mass_kg: Optional[float] = None


class SecondStage(_Record):
    payloads: List[Payload] = Field(default_factory=list)


class Rocket(_Record):
    rocket_name: str
    second_stage: Optional[SecondStage] = None


class LaunchSite(_Record):
    site_name_long: Optional[str] = None


class Links(_Record):
    video_link: Optional[str] = None
    wikipedia: Optional[str] = None


class LaunchRecord(_Record):
    flight_number: int
    mission_name: str
    rocket: Rocket
    launch_site: Optional[LaunchSite] = None
    launch_date_local: Optional[str] = None
    upcoming: Optional[bool] = False
    launch_success: Optional[bool] = None
    details: Optional[str] = None
    links: Optional[Links] = None


# Ordered, never mutated in place: past records first, then upcoming.
LaunchSet = Tuple[LaunchRecord, ...]

_RECORDS = TypeAdapter(List[LaunchRecord])


def parse_records(data) -> LaunchSet:
    """Validate a decoded JSON body; raises pydantic.ValidationError."""
    return tuple(_RECORDS.validate_python(data))
