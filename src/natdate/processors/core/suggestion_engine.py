"""Suggestion Engine for Natural Language Date Input

Combines the date parser and generator into a ranked list of suggestions
for the text typed so far. Recognized input is rendered back as display
text; input that is still too fragmentary to parse gets completions for
"in ..." and "at ..." phrases or a fixed set of defaults.

Suggestions are ranked by reverse similarity between the typed input and
the display text rather than by parser confidence.
"""

import re
from datetime import datetime, timedelta
from typing import List, Optional

from .date_generator import DateGenerator, set_time_of_day
from .date_parser import DateParser
from .parsed_date import (
    DateSuggestion,
    DateType,
    ParsedDate,
    SpecificTime,
    UnitOffsets,
)
from ...core.config_manager import SuggestionConfig
from ...core.logging_manager import LoggingManager


def split_words(text: str) -> List[str]:
    """Lowercase text and split it on runs of whitespace."""
    return re.split(r"\s+", text.lower())


def reverse_similarity(input_text: str, suggestion: str) -> float:
    """Score how much of a suggestion is covered by the typed input.

    The base score is the share of suggestion words that also appear in
    the input. Each input word longer than one character that starts a
    suggestion word adds half the fraction of that word it covers. The
    result is capped at 1. The measure is not symmetric.

    Args:
        input_text: Text typed by the user
        suggestion: Candidate display text

    Returns:
        Score between 0 and 1
    """
    input_words = split_words(input_text)
    suggestion_words = split_words(suggestion)

    matched_words = sum(1 for word in input_words if word in suggestion_words)
    similarity = matched_words / len(suggestion_words)

    for input_word in input_words:
        if len(input_word) <= 1:
            continue
        for suggestion_word in suggestion_words:
            if suggestion_word.startswith(input_word):
                similarity += 0.5 * (len(input_word) / len(suggestion_word))

    return min(similarity, 1.0)


def leading_int(word: str) -> Optional[int]:
    """Read the integer a word starts with ("2d" -> 2), or None."""
    match = re.match(r"\s*([+-]?\d+)", word)
    return int(match.group(1)) if match else None


def unit_label(unit: str, amount: int) -> str:
    """Singular unit name for an amount of 1, plural otherwise."""
    singular = unit[:-1] if unit.endswith("s") else unit
    return singular if amount == 1 else singular + "s"


class SuggestionEngine:
    """Produces ranked date suggestions for partially typed input."""

    def __init__(
        self,
        date_parser: DateParser,
        date_generator: Optional[DateGenerator] = None,
        config: Optional[SuggestionConfig] = None
    ):
        """Initialize the suggestion engine.

        Args:
            date_parser: Parser shared with the caller so custom phrases apply
            date_generator: Generator for computing suggestion dates
            config: Completion vocabularies and ranking settings
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.date_parser = date_parser
        self.date_generator = date_generator or DateGenerator()
        self.config = config or SuggestionConfig()

    def generate_suggestions(self, text: str, now: Optional[datetime] = None) -> List[DateSuggestion]:
        """Build suggestions for the current input, best first.

        Args:
            text: Text typed so far
            now: Reference instant; read from the clock when omitted

        Returns:
            Suggestions sorted by descending probability, ties in
            generation order
        """
        now = now or datetime.now()
        parsed_results = self.date_parser.parse(text, now=now)

        if not parsed_results or parsed_results[0].type is DateType.PARTIAL:
            suggestions = self._generate_partial_suggestions(text, now)
        else:
            suggestions = []
            for parsed_date in parsed_results:
                suggestions.extend(self._suggestions_for(parsed_date, text, now))

        ranked = sorted(suggestions, key=lambda suggestion: suggestion.probability, reverse=True)
        self.logger.debug(f"Generated {len(ranked)} suggestions for '{text}'")
        return ranked

    def _suggestions_for(self, parsed_date: ParsedDate, text: str, now: datetime) -> List[DateSuggestion]:
        """Render one parsed date as display suggestions."""
        value = parsed_date.value

        if parsed_date.type is DateType.SPECIFIC_TIME:
            time_text = self.format_time(value)
            if value.timezone is not None:
                time_text += f" {self.format_timezone(value.timezone)}"

            day_text = "Tomorrow" if value.days == 1 else "Today"
            suggestions = [self._suggest(f"{day_text} at {time_text}", parsed_date, text, now)]

            # A bare time may mean today or tomorrow
            if value.days == 0 and "today" not in text.lower():
                tomorrow = ParsedDate(
                    type=parsed_date.type,
                    value=SpecificTime(days=1, hours=value.hours, minutes=value.minutes,
                                       timezone=value.timezone),
                    confidence=parsed_date.confidence,
                )
                suggestions.append(self._suggest(f"Tomorrow at {time_text}", tomorrow, text, now))
            return suggestions

        if parsed_date.type is DateType.SPECIFIC_DATE:
            date = self.date_generator.generate_date(parsed_date, now)
            return [self._scored(self.format_date(date), date, text)]

        if parsed_date.type is DateType.NUMERIC:
            numeric_text = f"In {self.format_time_units(value)}"
            if value.at_time:
                numeric_text += f" at {self.format_time(value.at_time)}"
            return [self._suggest(numeric_text, parsed_date, text, now)]

        if parsed_date.type is DateType.RELATIVE:
            return [self._suggest(self.format_time_units(value), parsed_date, text, now)]

        if parsed_date.type is DateType.RANDOM:
            return [self._suggest(f"Random amount of {value.unit}", parsed_date, text, now)]

        return []

    def _suggest(self, suggestion_text: str, parsed_date: ParsedDate, text: str, now: datetime) -> DateSuggestion:
        date = self.date_generator.generate_date(parsed_date, now)
        return self._scored(suggestion_text, date, text)

    def _scored(self, suggestion_text: str, date: datetime, text: str) -> DateSuggestion:
        return DateSuggestion(
            text=suggestion_text,
            date=date,
            probability=reverse_similarity(text, suggestion_text),
        )

    def _generate_partial_suggestions(self, text: str, now: datetime) -> List[DateSuggestion]:
        """Complete "in ..." and "at ..." fragments, else fall back to defaults."""
        suggestions: List[DateSuggestion] = []
        words = split_words(text)

        if words[0] == "in":
            if len(words) == 1:
                suggestions.extend(self._generate_time_unit_suggestions(1, now))
            else:
                amount = leading_int(words[1])
                if amount is not None:
                    if len(words) == 2:
                        suggestions.extend(self._generate_time_unit_suggestions(amount, now))
                    else:
                        partial_unit = " ".join(words[2:])
                        suggestions.extend(
                            self._generate_partial_unit_suggestions(amount, partial_unit, now)
                        )
        elif words[0] == "at":
            partial_time = " ".join(words[1:])
            suggestions.extend(self._generate_at_time_suggestions(now, partial_time))

        if not suggestions:
            suggestions = self._generate_default_suggestions(text, now)

        return suggestions

    def _unit_suggestion(self, unit: str, amount: int, probability: float, now: datetime) -> DateSuggestion:
        parsed_date = ParsedDate(type=DateType.NUMERIC, value=UnitOffsets(units={unit + "s": amount}))
        return DateSuggestion(
            text=f"In {amount} {unit_label(unit, amount)}",
            date=self.date_generator.generate_date(parsed_date, now),
            probability=probability,
        )

    def _generate_time_unit_suggestions(self, amount: int, now: datetime) -> List[DateSuggestion]:
        return [
            self._unit_suggestion(unit, amount, 1.0, now)
            for unit in self.config.time_units
        ]

    def _generate_partial_unit_suggestions(
        self,
        amount: int,
        partial_unit: str,
        now: datetime
    ) -> List[DateSuggestion]:
        return [
            self._unit_suggestion(unit, amount, reverse_similarity(partial_unit, unit), now)
            for unit in self.config.time_units
            if unit.startswith(partial_unit)
        ]

    def _generate_at_time_suggestions(self, now: datetime, partial_time: str = "") -> List[DateSuggestion]:
        """Offer the common times matching a typed prefix, today and tomorrow."""
        suggestions = []
        scale = self.config.tomorrow_scale

        for time_text in self.config.common_times:
            if not time_text.startswith(partial_time):
                continue

            hours, minutes = (int(part) for part in time_text.split(":"))
            today = set_time_of_day(now, hours, minutes)
            probability = reverse_similarity(partial_time, time_text) if partial_time else 1.0

            suggestions.append(DateSuggestion(
                text=f"Today at {time_text}",
                date=today,
                probability=probability,
            ))
            suggestions.append(DateSuggestion(
                text=f"Tomorrow at {time_text}",
                date=today + timedelta(days=1),
                probability=probability * scale,
            ))

        return suggestions

    def _generate_default_suggestions(self, text: str, now: datetime) -> List[DateSuggestion]:
        return [
            DateSuggestion(
                text=default_text,
                date=self._default_date(default_text, now),
                probability=reverse_similarity(text, default_text),
            )
            for default_text in self.config.default_suggestions
        ]

    def _default_date(self, default_text: str, now: datetime) -> datetime:
        """Date of the interpretation whose rendering best matches a default."""
        parsed_results = self.date_parser.parse(default_text, now=now)

        candidates = []
        for parsed_date in parsed_results:
            candidates.extend(self._suggestions_for(parsed_date, default_text, now))

        if not candidates:
            return now

        return max(candidates, key=lambda suggestion: suggestion.probability).date

    @staticmethod
    def format_time(value) -> str:
        """Render hours and minutes as HH:MM."""
        return f"{value.hours:02d}:{value.minutes:02d}"

    def format_date(self, date: datetime) -> str:
        """Render a date with the configured locale-style format."""
        return self.config.date_format.format(day=date.day, month=date.month, year=date.year)

    @staticmethod
    def format_time_units(value: UnitOffsets) -> str:
        """Join non-zero unit offsets, e.g. "2 days and 3 hours"."""
        return " and ".join(
            f"{amount} {unit_label(unit, amount)}"
            for unit, amount in value.units.items()
            if amount != 0
        )

    @staticmethod
    def format_timezone(offset: int) -> str:
        sign = "+" if offset >= 0 else "-"
        return f"GMT{sign}{abs(offset)}"
