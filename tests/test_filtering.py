from __future__ import annotations

from conftest import make_launch
from launchboard.filtering import filter_launches, normalize_query
from launchboard.models import parse_records

LAUNCHES = parse_records(
    [
        make_launch(1, "FalconSat", "Falcon 1"),
        make_launch(2, "DemoSat", "Falcon 1"),
        make_launch(3, "CRS-1", "Falcon 9"),
        make_launch(4, "Falcon Heavy Test Flight", "Falcon Heavy"),
        make_launch(5, "Starlink-12", "Falcon 9", upcoming=True),
    ]
)


def _numbers(launches):
    return [r.flight_number for r in launches]


def test_empty_query_returns_everything_in_order() -> None:
    assert filter_launches(LAUNCHES, "") == LAUNCHES


def test_matches_mission_name_case_insensitively() -> None:
    assert _numbers(filter_launches(LAUNCHES, normalize_query("FALCONSAT"))) == [1]
    assert _numbers(filter_launches(LAUNCHES, "falconsat")) == [1]


def test_matches_rocket_name() -> None:
    assert _numbers(filter_launches(LAUNCHES, "falcon 9")) == [3, 5]


def test_matches_either_field_and_keeps_relative_order() -> None:
    assert _numbers(filter_launches(LAUNCHES, "sat")) == [1, 2]
    assert _numbers(filter_launches(LAUNCHES, "heavy")) == [4]


def test_no_match_gives_empty_tuple() -> None:
    assert filter_launches(LAUNCHES, "zzz") == ()


def test_filter_is_idempotent() -> None:
    for q in ["", "falcon", "sat", "zzz", "-1"]:
        once = filter_launches(LAUNCHES, q)
        assert filter_launches(once, q) == once


def test_normalize_query_lowercases_and_handles_none() -> None:
    assert normalize_query("Falcon HEAVY") == "falcon heavy"
    assert normalize_query(None) == ""
