"""Date Generator

Turns a parsed interpretation into a concrete datetime relative to a
reference instant.
"""

import random
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from .parsed_date import DateType, ParsedDate, TimeOfDay
from ...core.config_manager import GeneratorConfig
from ...core.logging_manager import LoggingManager


def set_time_of_day(moment: datetime, hours: int, minutes: int) -> datetime:
    """Move a datetime to a wall clock time on the same day.

    Seconds are zeroed. Hours past 23 or minutes past 59 roll over into the
    following days and hours.
    """
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(hours=hours, minutes=minutes)


def apply_unit(moment: datetime, unit: str, amount: int) -> datetime:
    """Add an amount of a plural time unit using calendar arithmetic.

    Months and years keep the day of month; a day past the end of the
    target month rolls into the following month.
    Unknown units leave the datetime unchanged.
    """
    if unit in ("minutes", "hours", "days", "weeks"):
        return moment + timedelta(**{unit: amount})
    if unit in ("months", "years"):
        first_of_month = moment.replace(day=1) + relativedelta(**{unit: amount})
        return first_of_month + timedelta(days=moment.day - 1)
    return moment


class DateGenerator:
    """Computes the datetime a parsed date refers to."""

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None):
        """Initialize the generator.

        Args:
            config: Generator settings
            rng: Random source for random amounts
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random()

    def generate_date(self, parsed_date: ParsedDate, now: Optional[datetime] = None) -> datetime:
        """Compute the datetime for a parsed date.

        Args:
            parsed_date: Interpretation to evaluate
            now: Reference instant; read from the clock when omitted

        Returns:
            The computed datetime, or ``now`` for types without a date
        """
        now = now or datetime.now()

        try:
            return self._generate(parsed_date, now)
        except (AttributeError, TypeError, ValueError, OverflowError) as e:
            self.logger.warning(
                f"Could not compute date for {parsed_date.type.value} {parsed_date.value!r}: {e}"
            )
            return now

    def _generate(self, parsed_date: ParsedDate, now: datetime) -> datetime:
        value = parsed_date.value

        if parsed_date.type is DateType.SPECIFIC_TIME:
            result = set_time_of_day(now, value.hours, value.minutes)
            if value.days:
                result += timedelta(days=value.days)
            return result

        if parsed_date.type is DateType.SPECIFIC_DATE:
            # Month and day overflow roll forward into later months
            return datetime(value.year, 1, 1) + relativedelta(months=value.month) + timedelta(days=value.day - 1)

        if parsed_date.type in (DateType.NUMERIC, DateType.RELATIVE):
            result = now
            for unit, amount in value.units.items():
                result = apply_unit(result, unit, amount)
            if isinstance(value.at_time, TimeOfDay):
                result = set_time_of_day(result, value.at_time.hours, value.at_time.minutes)
            return result

        if parsed_date.type is DateType.RANDOM:
            # The unit is not consulted; random amounts are always days
            amount = self.rng.randint(1, self.config.random_max_amount)
            return now + timedelta(days=amount)

        return now
