"""
Unit tests for the DateGenerator component.

Tests date computation for every interpretation type against a fixed
reference instant, including calendar edge cases.
"""

import random
from datetime import datetime, timedelta

import pytest

from natdate.core.config_manager import GeneratorConfig
from natdate.processors.core.date_generator import DateGenerator, apply_unit, set_time_of_day
from natdate.processors.core.parsed_date import (
    DateType,
    ParsedDate,
    RandomAmount,
    SpecificDate,
    SpecificTime,
    TimeOfDay,
    UnitOffsets,
)


def offsets(date_type=DateType.NUMERIC, at_time=None, **units):
    return ParsedDate(type=date_type, value=UnitOffsets(units=units, at_time=at_time))


class TestDateGenerator:
    """Test suite for DateGenerator component"""

    @pytest.mark.unit
    def test_specific_time_today(self, date_generator, now):
        """A time today keeps the date and zeroes seconds"""
        parsed = ParsedDate(type=DateType.SPECIFIC_TIME, value=SpecificTime(days=0, hours=9, minutes=15))

        assert date_generator.generate_date(parsed, now) == datetime(2025, 6, 10, 9, 15)

    @pytest.mark.unit
    def test_specific_time_tomorrow(self, date_generator, now):
        parsed = ParsedDate(type=DateType.SPECIFIC_TIME, value=SpecificTime(days=1, hours=23, minutes=59))

        assert date_generator.generate_date(parsed, now) == datetime(2025, 6, 11, 23, 59)

    @pytest.mark.unit
    def test_specific_time_hours_roll_over(self, date_generator, now):
        """Hours past 23 roll into the next day"""
        parsed = ParsedDate(type=DateType.SPECIFIC_TIME, value=SpecificTime(days=0, hours=25, minutes=0))

        assert date_generator.generate_date(parsed, now) == datetime(2025, 6, 11, 1, 0)

    @pytest.mark.unit
    def test_specific_date_ignores_now(self, date_generator, now):
        parsed = ParsedDate(type=DateType.SPECIFIC_DATE, value=SpecificDate(day=25, month=11, year=2025))

        assert date_generator.generate_date(parsed, now) == datetime(2025, 12, 25)

    @pytest.mark.unit
    @pytest.mark.parametrize("day,month,year,expected", [
        (1, 12, 2025, datetime(2026, 1, 1)),
        (31, 1, 2025, datetime(2025, 3, 3)),
        (0, 0, 2025, datetime(2024, 12, 31)),
    ])
    def test_specific_date_overflow_rolls_forward(self, date_generator, now, day, month, year, expected):
        """Out-of-range months and days roll into neighbouring months"""
        parsed = ParsedDate(type=DateType.SPECIFIC_DATE, value=SpecificDate(day=day, month=month, year=year))

        assert date_generator.generate_date(parsed, now) == expected

    @pytest.mark.unit
    def test_numeric_days_keep_time_of_day(self, date_generator, now):
        """Two days ahead lands at the same time of day"""
        result = date_generator.generate_date(offsets(days=2), now)

        assert result == datetime(2025, 6, 12, 14, 45, 30, 500000)
        assert result.time() == now.time()

    @pytest.mark.unit
    @pytest.mark.parametrize("units,expected", [
        ({"minutes": 90}, datetime(2025, 6, 10, 16, 15, 30, 500000)),
        ({"hours": 10}, datetime(2025, 6, 11, 0, 45, 30, 500000)),
        ({"weeks": 1}, datetime(2025, 6, 17, 14, 45, 30, 500000)),
        ({"months": 2}, datetime(2025, 8, 10, 14, 45, 30, 500000)),
        ({"years": 1}, datetime(2026, 6, 10, 14, 45, 30, 500000)),
        ({"days": 1, "hours": 2}, datetime(2025, 6, 11, 16, 45, 30, 500000)),
    ])
    def test_numeric_units(self, date_generator, now, units, expected):
        assert date_generator.generate_date(offsets(**units), now) == expected

    @pytest.mark.unit
    def test_relative_offsets(self, date_generator, now):
        parsed = offsets(date_type=DateType.RELATIVE, days=1)

        assert date_generator.generate_date(parsed, now) == now + timedelta(days=1)

    @pytest.mark.unit
    def test_at_time_overrides_time_of_day(self, date_generator, now):
        """The at-time is applied after the offsets"""
        parsed = offsets(days=2, at_time=TimeOfDay(hours=9, minutes=0))

        assert date_generator.generate_date(parsed, now) == datetime(2025, 6, 12, 9, 0)

    @pytest.mark.unit
    @pytest.mark.parametrize("start,expected", [
        (datetime(2025, 1, 31, 10, 0), datetime(2025, 3, 3, 10, 0)),
        (datetime(2024, 1, 31, 10, 0), datetime(2024, 3, 2, 10, 0)),
        (datetime(2025, 3, 31, 10, 0), datetime(2025, 5, 1, 10, 0)),
        (datetime(2025, 1, 28, 10, 0), datetime(2025, 2, 28, 10, 0)),
    ])
    def test_month_addition_rolls_past_month_end(self, date_generator, start, expected):
        """A day missing from the target month rolls into the month after, like the date path"""
        assert date_generator.generate_date(offsets(months=1), start) == expected

    @pytest.mark.unit
    def test_year_addition_from_leap_day(self, date_generator):
        result = date_generator.generate_date(offsets(years=1), datetime(2024, 2, 29, 8, 0))

        assert result == datetime(2025, 3, 1, 8, 0)

    @pytest.mark.unit
    def test_random_amount_adds_days(self, app_config, now):
        """Random amounts are drawn from the seeded source and added as days"""
        generator = DateGenerator(app_config.generator, rng=random.Random(7))
        expected_days = random.Random(7).randint(1, 100)
        parsed = ParsedDate(type=DateType.RANDOM, value=RandomAmount(unit="weeks"))

        assert generator.generate_date(parsed, now) == now + timedelta(days=expected_days)

    @pytest.mark.unit
    def test_random_amount_stays_in_range(self, now):
        generator = DateGenerator(GeneratorConfig(random_max_amount=3), rng=random.Random(1))
        parsed = ParsedDate(type=DateType.RANDOM, value=RandomAmount(unit="days"))

        for _ in range(50):
            delta = generator.generate_date(parsed, now) - now
            assert delta in (timedelta(days=1), timedelta(days=2), timedelta(days=3))

    @pytest.mark.unit
    def test_partial_returns_now(self, date_generator, now):
        parsed = ParsedDate(type=DateType.PARTIAL, value="next friday", confidence=0.5)

        assert date_generator.generate_date(parsed, now) == now

    @pytest.mark.unit
    @pytest.mark.parametrize("parsed", [
        ParsedDate(type=DateType.SPECIFIC_DATE, value=SpecificDate(day=1, month=12, year=9999)),
        ParsedDate(type=DateType.NUMERIC, value=UnitOffsets(units={"years": 10000})),
        ParsedDate(type=DateType.SPECIFIC_TIME, value="noon"),
    ])
    def test_uncomputable_dates_return_now(self, date_generator, now, parsed):
        """Dates outside the representable range degrade to now"""
        assert date_generator.generate_date(parsed, now) == now

    @pytest.mark.unit
    def test_now_defaults_to_clock(self, date_generator):
        before = datetime.now()
        result = date_generator.generate_date(offsets(days=1))
        after = datetime.now()

        assert before + timedelta(days=1) <= result <= after + timedelta(days=1)


class TestCalendarHelpers:
    """Test suite for time-of-day and unit arithmetic helpers"""

    @pytest.mark.unit
    def test_set_time_of_day_zeroes_seconds(self, now):
        assert set_time_of_day(now, 7, 5) == datetime(2025, 6, 10, 7, 5)

    @pytest.mark.unit
    def test_set_time_of_day_minutes_roll_over(self, now):
        assert set_time_of_day(now, 7, 75) == datetime(2025, 6, 10, 8, 15)

    @pytest.mark.unit
    def test_unknown_unit_is_ignored(self, now):
        assert apply_unit(now, "fortnights", 3) == now
