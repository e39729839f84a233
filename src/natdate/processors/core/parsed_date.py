"""Parsed Date Interpretations

Typed results produced by the date parser. Each ``ParsedDate`` carries a
``DateType`` tag and the payload class belonging to that tag.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Union


class DateType(Enum):
    """Kinds of date interpretations."""
    SPECIFIC_TIME = "specific_time"    # today/tomorrow at 15:30
    SPECIFIC_DATE = "specific_date"    # 25.12.2025
    NUMERIC = "numeric"                # in 3 days
    RELATIVE = "relative"              # tomorrow
    RANDOM = "random"                  # random amount of weeks
    PARTIAL = "partial"                # anything not yet recognizable


@dataclass
class TimeOfDay:
    """Wall clock time on a 24-hour dial."""
    hours: int
    minutes: int = 0


@dataclass
class SpecificTime:
    """A time today (days=0) or tomorrow (days=1)."""
    days: int
    hours: int
    minutes: int = 0
    timezone: Optional[int] = None  # offset label in hours, display only


@dataclass
class SpecificDate:
    """A calendar date; month is zero-based."""
    day: int
    month: int
    year: int


@dataclass
class UnitOffsets:
    """Offsets from now keyed by plural unit name, in application order."""
    units: Dict[str, int] = field(default_factory=dict)
    at_time: Optional[TimeOfDay] = None


@dataclass
class RandomAmount:
    """A random offset; ``unit`` is a plural unit name."""
    unit: str


Payload = Union[SpecificTime, SpecificDate, UnitOffsets, RandomAmount, str]


@dataclass
class ParsedDate:
    """One interpretation of the input text."""
    type: DateType
    value: Payload
    confidence: float = 0.0

    def is_well_formed(self) -> bool:
        """Whether the payload class matches the type tag."""
        expected = PAYLOAD_TYPES.get(self.type)
        return expected is not None and isinstance(self.value, expected)


PAYLOAD_TYPES = {
    DateType.SPECIFIC_TIME: SpecificTime,
    DateType.SPECIFIC_DATE: SpecificDate,
    DateType.NUMERIC: UnitOffsets,
    DateType.RELATIVE: UnitOffsets,
    DateType.RANDOM: RandomAmount,
    DateType.PARTIAL: str,
}


@dataclass
class DateSuggestion:
    """A ranked suggestion shown to the user."""
    text: str
    date: datetime
    probability: float


PhraseHandler = Callable[[str], Optional[ParsedDate]]
