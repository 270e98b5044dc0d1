"""
validate.py
-----------
Integrity checks on a merged launch set using pandas + pandera.
flight_number is the identifier for selection, so it must be unique
across past and upcoming records.
"""
from __future__ import annotations

import logging
import warnings

import pandas as pd
import pandera as pa
from pandera import Column

from launchboard.errors import IntegrityError
from launchboard.models import LaunchSet

warnings.filterwarnings("ignore", category=FutureWarning, module="pandera")

log = logging.getLogger(__name__)


def build_schema() -> pa.DataFrameSchema:
    return pa.DataFrameSchema(
        columns={
            "flight_number": Column(pa.Int, nullable=False, unique=True),
            "mission_name": Column(pa.String, nullable=False),
            "rocket_name": Column(pa.String, nullable=False),
        },
        coerce=True,
        strict=False,
    )


def launches_frame(launches: LaunchSet) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "flight_number": [r.flight_number for r in launches],
            "mission_name": [r.mission_name for r in launches],
            "rocket_name": [r.rocket.rocket_name for r in launches],
        }
    )


def check_integrity(launches: LaunchSet) -> LaunchSet:
    """Return the set unchanged, or raise IntegrityError."""
    if not launches:
        return launches
    frame = launches_frame(launches)
    try:
        build_schema().validate(frame, lazy=True)
    except pa.errors.SchemaErrors as err:
        log.error("Launch set integrity check failed:\n%s", err.failure_cases)
        numbers = frame["flight_number"]
        dupes = sorted(int(n) for n in numbers[numbers.duplicated()].unique())
        detail = f" (flight numbers: {dupes})" if dupes else ""
        raise IntegrityError(f"Launch data failed integrity checks{detail}") from err
    return launches
