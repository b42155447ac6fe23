from __future__ import annotations

import pytest

from calastro.easter import easter_day
from calastro.julian import CalendarError, calendar_date, julian_date
from calastro.lunar import (
    first_lunation_index,
    full_moon,
    full_moon_gmt,
    new_moon,
    new_moon_before,
    new_moon_by_index,
    new_moon_gmt,
)
from calastro.models import Event
from calastro.position import GeodeticPosition
from calastro.seasons import Season, solstice_gmt, solstice_local

UTC = GeodeticPosition(0.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "season, expected",
    [
        (Season.SPRING, julian_date(2024, 3, 20, 3, 6)),
        (Season.SUMMER, julian_date(2024, 6, 20, 20, 51)),
        (Season.FALL, julian_date(2024, 9, 22, 12, 44)),
        (Season.WINTER, julian_date(2024, 12, 21, 9, 21)),
    ],
)
def test_seasons_2024(season, expected):
    assert solstice_gmt(season, 2024) == pytest.approx(expected, abs=0.01)


def test_meeus_example_1962_summer_solstice():
    # Meeus example 27.a: JDE 2437837.39245.
    assert solstice_gmt(Season.SUMMER, 1962) == pytest.approx(2437837.39245, abs=0.002)


def test_early_years_use_first_table():
    jd = solstice_gmt(Season.SPRING, 500)
    fields = calendar_date(jd)
    assert (fields.year, fields.month) == (500, 3)
    assert 17 <= fields.day <= 19


def test_season_accepts_events_and_strings():
    assert solstice_gmt(Event.WINTER_SOLSTICE, 2024) == solstice_gmt("winter", 2024)
    with pytest.raises(CalendarError):
        solstice_gmt(Event.EASTER, 2024)
    with pytest.raises(CalendarError):
        solstice_gmt("monsoon", 2024)


def test_season_localised_by_offset():
    mountain = GeodeticPosition(114.0, 46.9, -6.0)
    assert solstice_local(Season.SPRING, 2024, mountain) == pytest.approx(
        solstice_gmt(Season.SPRING, 2024) - 0.25
    )


def test_new_moons_2024():
    first = calendar_date(new_moon_gmt(2024, 1))
    assert (first.year, first.month, first.day) == (2024, 1, 11)
    assert new_moon_gmt(2024, 1) == pytest.approx(julian_date(2024, 1, 11, 11, 57), abs=0.03)
    before = calendar_date(new_moon_gmt(2024, 0))
    assert (before.year, before.month, before.day) == (2023, 12, 12)
    last = calendar_date(new_moon_gmt(2024, 13))
    assert (last.year, last.month, last.day) == (2024, 12, 30)


def test_lunation_zero_is_strictly_before_the_year():
    start = julian_date(2024, 1, 1)
    assert new_moon_gmt(2024, 0) < start <= new_moon_gmt(2024, 1)
    assert new_moon_before(2024, UTC) == new_moon(2024, 0, UTC)


def test_lunations_are_consecutive():
    index = first_lunation_index(2024)
    spans = [new_moon_by_index(index + k + 1) - new_moon_by_index(index + k) for k in range(13)]
    assert all(29.2 < span < 29.9 for span in spans)


def test_new_moon_is_localised():
    # The 2022 January new moon fell at 18:33 UT on January 2.
    assert calendar_date(new_moon_gmt(2022, 1)).day == 2
    tokyo = GeodeticPosition(-139.7, 35.7, 9.0)
    local = calendar_date(new_moon(2022, 1, tokyo))
    assert (local.month, local.day) == (1, 3)


def test_offset_can_move_the_first_lunation():
    # New moon at 11:14 UT on 2014 January 1 is still 2013 at UTC-12.
    assert calendar_date(new_moon_gmt(2014, 1)).day == 1
    shifted = calendar_date(new_moon_gmt(2014, 1, -12.0))
    assert (shifted.month, shifted.day) == (1, 30)


def test_full_moon_2024():
    # Midpoint of the 2024-01-11 and 2024-02-09 new moons.
    fields = calendar_date(full_moon_gmt(2024, 1))
    assert (fields.year, fields.month, fields.day) == (2024, 1, 26)
    assert full_moon_gmt(2024, 1) == pytest.approx(0.5 * (new_moon_gmt(2024, 1) + new_moon_gmt(2024, 2)))
    assert full_moon(2024, 1, UTC) == pytest.approx(full_moon_gmt(2024, 1))


@pytest.mark.parametrize(
    "year, expected",
    [(2024, (3, 31)), (2025, (4, 20)), (2000, (4, 23)), (1583, (4, 10)), (2019, (4, 21)), (1818, (3, 22))],
)
def test_easter_dates(year, expected):
    assert easter_day(year) == expected


def test_easter_rejects_julian_years():
    with pytest.raises(CalendarError):
        easter_day(1582)
