"""Core Date Processors

Parsing, date generation and suggestion ranking for natural language
date input.
"""

from .parsed_date import (
    DateSuggestion,
    DateType,
    ParsedDate,
    RandomAmount,
    SpecificDate,
    SpecificTime,
    TimeOfDay,
    UnitOffsets,
)
from .date_parser import DateParser
from .date_generator import DateGenerator
from .suggestion_engine import SuggestionEngine, reverse_similarity

__all__ = [
    "DateParser",
    "DateGenerator",
    "SuggestionEngine",
    "reverse_similarity",
    "DateSuggestion",
    "DateType",
    "ParsedDate",
    "RandomAmount",
    "SpecificDate",
    "SpecificTime",
    "TimeOfDay",
    "UnitOffsets",
]
