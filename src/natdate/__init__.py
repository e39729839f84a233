"""NatDate - Natural Language Date Suggestions

Parses free-text date fragments such as "in 2 days" or "at 9" and ranks
completions for a date input field.
"""

__version__ = "0.1.0"
__author__ = "NatDate Team"
__description__ = "Natural Language Date Suggestions"

from .core.application import NaturalLanguageDateTimePicker
from .processors.core import (
    DateGenerator,
    DateParser,
    DateSuggestion,
    DateType,
    ParsedDate,
    SuggestionEngine,
    reverse_similarity,
)

__all__ = [
    "NaturalLanguageDateTimePicker",
    "DateParser",
    "DateGenerator",
    "SuggestionEngine",
    "DateSuggestion",
    "DateType",
    "ParsedDate",
    "reverse_similarity",
]
