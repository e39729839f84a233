"""Data Processing Module

Natural language date processors: parser, date generator and suggestion
engine.
"""

from .core import (
    DateGenerator,
    DateParser,
    DateSuggestion,
    DateType,
    ParsedDate,
    SuggestionEngine,
)

__all__ = [
    "DateParser",
    "DateGenerator",
    "SuggestionEngine",
    "DateSuggestion",
    "DateType",
    "ParsedDate",
]
