from __future__ import annotations

import math

import pytest

from calastro.astro import _cos_hour_angle, _polar_flag, compute_sun_times, solve_rise_set
from calastro.calendar_time import DateTime
from calastro.config import SolverSettings
from calastro.julian import CalendarError, julian_date
from calastro.models import Event, ResultFlag
from calastro.position import GeodeticPosition


def _hms(hours: int, minutes: int, seconds: int) -> float:
    return hours + minutes / 60.0 + seconds / 3600.0


@pytest.mark.parametrize(
    "event, expected, tolerance",
    [
        (Event.SUNRISE, _hms(6, 33, 12), 0.05),
        (Event.SUNSET, _hms(20, 35, 47), 0.05),
        (Event.MOONRISE, _hms(16, 17, 57), 0.1),
        (Event.MOONSET, _hms(5, 23, 34), 0.1),
        (Event.CIVIL_DAWN, 6.011626, 0.05),
        (Event.CIVIL_DUSK, 21.150151, 0.05),
        (Event.NAUTICAL_DAWN, 5.341886, 0.05),
        (Event.NAUTICAL_DUSK, 21.829089, 0.05),
        (Event.ASTRONOMICAL_DAWN, 4.588416, 0.05),
        (Event.ASTRONOMICAL_DUSK, 22.575165, 0.05),
    ],
)
def test_missoula_events(missoula, event, expected, tolerance):
    result = solve_rise_set(event, julian_date(2021, 4, 23), missoula)
    assert result.flag is ResultFlag.OCCURS
    assert result.hours == pytest.approx(expected, abs=tolerance)
    assert result.julian_date == pytest.approx(julian_date(2021, 4, 23) + result.hours / 24.0)


def test_missoula_standard_time(missoula):
    mountain_standard = GeodeticPosition(missoula.longitude, missoula.latitude, -7.0)
    rise = solve_rise_set(Event.SUNRISE, julian_date(2021, 4, 26, 15), mountain_standard)
    fall = solve_rise_set(Event.SUNSET, julian_date(2021, 4, 26, 15), mountain_standard)
    assert rise.hours == pytest.approx(_hms(5, 28, 20), abs=0.05)
    assert fall.hours == pytest.approx(_hms(19, 40, 4), abs=0.05)


def test_time_of_day_does_not_change_the_answer(missoula):
    morning = solve_rise_set(Event.SUNSET, julian_date(2021, 4, 23, 0, 0, 1), missoula)
    evening = solve_rise_set(Event.SUNSET, julian_date(2021, 4, 23, 23, 59), missoula)
    assert morning.hours == pytest.approx(evening.hours, abs=1e-6)


def test_twilight_ordering(missoula):
    jd = julian_date(2021, 4, 23)
    dawn = [solve_rise_set(event, jd, missoula).hours for event in (
        Event.ASTRONOMICAL_DAWN, Event.NAUTICAL_DAWN, Event.CIVIL_DAWN, Event.SUNRISE
    )]
    dusk = [solve_rise_set(event, jd, missoula).hours for event in (
        Event.SUNSET, Event.CIVIL_DUSK, Event.NAUTICAL_DUSK, Event.ASTRONOMICAL_DUSK
    )]
    assert dawn == sorted(dawn)
    assert dusk == sorted(dusk)


def test_polar_day(svalbard):
    moment = DateTime(2025, 6, 21, 12)
    before = moment.julian_date
    assert not moment.sunrise(svalbard)
    assert moment.flag is ResultFlag.ALWAYS_LIGHT
    assert moment.event is Event.SUNRISE
    assert moment.julian_date == before
    assert not moment.sunset(svalbard)
    assert moment.flag is ResultFlag.ALWAYS_LIGHT


def test_polar_night(svalbard):
    moment = DateTime(2025, 12, 21)
    assert not moment.sunrise(svalbard)
    assert moment.flag is ResultFlag.ALWAYS_DARK
    assert not moment.civil_dusk(svalbard)
    assert moment.flag is ResultFlag.ALWAYS_DARK


def test_far_north_at_eighty_degrees():
    north = GeodeticPosition(0.0, 80.0, 0.0)
    assert solve_rise_set(Event.SUNRISE, julian_date(2024, 6, 21), north).flag is ResultFlag.ALWAYS_LIGHT
    assert solve_rise_set(Event.SUNSET, julian_date(2024, 12, 21), north).flag is ResultFlag.ALWAYS_DARK


def test_far_south_seasons_are_reversed():
    south = GeodeticPosition(0.0, -80.0, 0.0)
    assert solve_rise_set(Event.SUNRISE, julian_date(2024, 6, 21), south).flag is ResultFlag.ALWAYS_DARK
    assert solve_rise_set(Event.SUNSET, julian_date(2024, 6, 21), south).flag is ResultFlag.ALWAYS_DARK
    assert solve_rise_set(Event.SUNRISE, julian_date(2024, 12, 21), south).flag is ResultFlag.ALWAYS_LIGHT
    assert solve_rise_set(Event.CIVIL_DUSK, julian_date(2024, 12, 21), south).flag is ResultFlag.ALWAYS_LIGHT


@pytest.mark.parametrize(
    "latitude, month, expected",
    [
        (90.0, 6, ResultFlag.ALWAYS_LIGHT),
        (90.0, 12, ResultFlag.ALWAYS_DARK),
        (-90.0, 6, ResultFlag.ALWAYS_DARK),
        (-90.0, 12, ResultFlag.ALWAYS_LIGHT),
    ],
)
def test_sun_at_the_poles(latitude, month, expected):
    pole = GeodeticPosition(0.0, latitude, 0.0)
    for event in (Event.SUNRISE, Event.SUNSET):
        result = solve_rise_set(event, julian_date(2024, month, 21), pole)
        assert result.flag is expected
        assert result.hours is None
        assert result.julian_date is None


def test_moon_circumpolar_and_hidden_days():
    north = GeodeticPosition(0.0, 85.0, 0.0)
    flags = {Event.MOONRISE: set(), Event.MOONSET: set()}
    for day in range(1, 32):
        for event in flags:
            result = solve_rise_set(event, julian_date(2024, 1, day), north)
            flags[event].add(result.flag)
            if result.flag is not ResultFlag.OCCURS:
                assert result.hours is None
                assert result.julian_date is None
    assert {ResultFlag.ALWAYS_LIGHT, ResultFlag.NEVER_RISES} <= flags[Event.MOONRISE]
    assert {ResultFlag.ALWAYS_LIGHT, ResultFlag.NEVER_SETS} <= flags[Event.MOONSET]
    assert ResultFlag.ALWAYS_DARK not in flags[Event.MOONRISE] | flags[Event.MOONSET]


def test_datetime_moonrise_keeps_date_when_moon_stays_up():
    north = GeodeticPosition(0.0, 85.0, 0.0)
    seen = set()
    for day in range(1, 32):
        moment = DateTime(2024, 1, day, 12)
        before = moment.julian_date
        if not moment.moonrise(north):
            assert moment.event is Event.MOONRISE
            assert moment.julian_date == before
            assert (moment.month, moment.day, moment.hour) == (1, day, 12)
            seen.add(moment.flag)
    assert ResultFlag.ALWAYS_LIGHT in seen


@pytest.mark.parametrize(
    "event, cos_h, expected",
    [
        (Event.SUNRISE, 2.0, ResultFlag.ALWAYS_DARK),
        (Event.ASTRONOMICAL_DUSK, 2.0, ResultFlag.ALWAYS_DARK),
        (Event.MOONRISE, 2.0, ResultFlag.NEVER_RISES),
        (Event.MOONSET, 2.0, ResultFlag.NEVER_SETS),
        (Event.SUNSET, -2.0, ResultFlag.ALWAYS_LIGHT),
        (Event.MOONRISE, -2.0, ResultFlag.ALWAYS_LIGHT),
        (Event.MOONSET, -math.inf, ResultFlag.ALWAYS_LIGHT),
    ],
)
def test_polar_flag_mapping(event, cos_h, expected):
    assert _polar_flag(event, cos_h) is expected


def test_cos_hour_angle_at_the_pole():
    assert _cos_hour_angle(90.0, 90.0, 10.0) == -math.inf
    assert _cos_hour_angle(90.0, 90.0, -10.0) == math.inf


def test_compute_sun_times_statuses(missoula, svalbard):
    ok = compute_sun_times(julian_date(2021, 4, 23), missoula)
    assert ok["status"] == "ok"
    assert ok["sunrise"] < ok["sunset"]

    day = compute_sun_times(julian_date(2025, 6, 21), svalbard, twilight="civil")
    assert day == {"sunrise": None, "sunset": None, "status": "polar_day"}

    night = compute_sun_times(julian_date(2025, 12, 21), svalbard, twilight="civil")
    assert night == {"sunrise": None, "sunset": None, "status": "polar_night"}


def test_unsupported_selectors(missoula):
    with pytest.raises(CalendarError):
        compute_sun_times(julian_date(2021, 4, 23), missoula, twilight="golden")
    with pytest.raises(ValueError):
        solve_rise_set(Event.EASTER, julian_date(2021, 4, 23), missoula)


def test_datetime_sunrise_updates_fields(missoula):
    moment = DateTime(2021, 4, 23)
    assert moment.sunrise(missoula)
    assert moment.flag is ResultFlag.OCCURS
    assert moment.event is Event.SUNRISE
    assert (moment.year, moment.month, moment.day, moment.hour) == (2021, 4, 23, 6)
    assert moment.minute in range(30, 37)


def test_moon_misses_some_days(missoula):
    flags = set()
    moment = DateTime(2021, 4, 1, 12)
    for _ in range(30):
        moment.add_days(1)
        result = solve_rise_set(Event.MOONRISE, moment.julian_date, missoula)
        flags.add(result.flag)
        if result.flag is ResultFlag.OCCURS:
            assert 0.0 <= result.hours < 24.0
    assert ResultFlag.OCCURS in flags
    assert ResultFlag.NEVER_RISES in flags


def test_tight_settings_still_converge(missoula):
    settings = SolverSettings(max_iterations=40, tolerance_hours=1e-8)
    result = solve_rise_set(Event.SUNRISE, julian_date(2021, 4, 23), missoula, settings)
    assert result.hours == pytest.approx(_hms(6, 33, 12), abs=0.05)
