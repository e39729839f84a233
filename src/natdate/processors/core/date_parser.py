"""Date Parser for Natural Language Date Input

Turns free text typed into a date field into zero or more typed,
confidence-scored interpretations. Every recognizer is tried against the
input independently; when none of them matches, the input is reported as a
partial expression so the suggestion engine can offer completions.
"""

import re
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Pattern

from .parsed_date import (
    DateType,
    ParsedDate,
    PhraseHandler,
    RandomAmount,
    SpecificDate,
    SpecificTime,
    TimeOfDay,
    UnitOffsets,
)
from ...core.config_manager import ParserConfig
from ...core.error_handler import PhraseRegistrationError
from ...core.logging_manager import LoggingManager


UNIT_PATTERN = r"(minute|hour|day|week|month|year)"


def to_24_hour(hour: int, meridiem: Optional[str]) -> int:
    """Convert a 12-hour clock reading to the 24-hour dial.

    Args:
        hour: Hour as typed
        meridiem: "am", "pm" or None when no suffix was given

    Returns:
        Hour on the 24-hour dial
    """
    if meridiem == "pm" and hour != 12:
        return hour + 12
    if meridiem == "am" and hour == 12:
        return 0
    return hour


class Recognizer:
    """Base class for one pattern-driven interpretation of the input."""

    date_type: DateType = DateType.PARTIAL
    pattern: Optional[Pattern] = None
    confidence: float = 0.0

    def recognize(self, text: str, now: datetime) -> Optional[ParsedDate]:
        """Match normalized text and build a parsed date.

        Args:
            text: Lowercased, trimmed input
            now: Reference instant

        Returns:
            Parsed date or None when the pattern does not apply
        """
        match = self.pattern.search(text)
        if not match:
            return None

        value = self.extract(match, text, now)
        if value is None:
            return None

        return ParsedDate(type=self.date_type, value=value, confidence=self.confidence)

    def extract(self, match: re.Match, text: str, now: datetime):
        raise NotImplementedError


class SpecificTimeRecognizer(Recognizer):
    """Clock times such as "15:30", "at 3pm", "tomorrow at 9 cet"."""

    date_type = DateType.SPECIFIC_TIME
    pattern = re.compile(
        r"(?:(?:today|tomorrow)\s+)?(?:at\s+)?(\d{1,2})(?::(\d{2}))?(?:\s*(am|pm))?(?:\s+([\w+\-]+))?"
    )
    confidence = 0.9

    def __init__(self, timezone_offsets: Dict[str, int]):
        self.timezone_offsets = timezone_offsets

    def extract(self, match: re.Match, text: str, now: datetime) -> SpecificTime:
        hours, minutes, meridiem, zone = match.groups()
        return SpecificTime(
            days=1 if "tomorrow" in text else 0,
            hours=to_24_hour(int(hours), meridiem),
            minutes=int(minutes or 0),
            timezone=self._resolve_timezone(zone),
        )

    def _resolve_timezone(self, token: Optional[str]) -> Optional[int]:
        """Map a trailing token to a fixed hour offset, if it names one."""
        if not token:
            return None

        if token in self.timezone_offsets:
            return self.timezone_offsets[token]

        offset_match = re.fullmatch(r"(?:utc|gmt)([+-]\d{1,2})", token)
        if offset_match:
            offset = int(offset_match.group(1))
            if -12 <= offset <= 14:
                return offset

        return None


class SpecificDateRecognizer(Recognizer):
    """Day-first dates such as "25.12.2025", "1/3/26" or "24.12"."""

    date_type = DateType.SPECIFIC_DATE
    pattern = re.compile(r"(\d{1,2})[./](\d{1,2})(?:[./](\d{2,4}))?")
    confidence = 0.9

    def extract(self, match: re.Match, text: str, now: datetime) -> SpecificDate:
        day, month, year = match.groups()
        year_value = int(year) if year else now.year
        if year_value < 100:
            year_value += 2000

        return SpecificDate(day=int(day), month=int(month) - 1, year=year_value)


class NumericOffsetRecognizer(Recognizer):
    """Offsets such as "in 3 days" or "in 2 weeks at 9am"."""

    date_type = DateType.NUMERIC
    pattern = re.compile(
        rf"in (\d+) {UNIT_PATTERN}s?(?:\s+at\s+(\d{{1,2}})(?::(\d{{2}}))?(?:\s*(am|pm))?)?"
    )
    confidence = 0.8

    def extract(self, match: re.Match, text: str, now: datetime) -> UnitOffsets:
        amount, unit, at_hours, at_minutes, meridiem = match.groups()
        offsets = UnitOffsets(units={unit + "s": int(amount)})

        if at_hours:
            offsets.at_time = TimeOfDay(
                hours=to_24_hour(int(at_hours), meridiem),
                minutes=int(at_minutes) if at_minutes else 0,
            )

        return offsets


class TomorrowRecognizer(Recognizer):
    """The bare word "tomorrow"."""

    date_type = DateType.RELATIVE
    confidence = 1.0

    def recognize(self, text: str, now: datetime) -> Optional[ParsedDate]:
        if text != "tomorrow":
            return None
        return ParsedDate(type=self.date_type, value=UnitOffsets(units={"days": 1}),
                          confidence=self.confidence)


class RandomAmountRecognizer(Recognizer):
    """Phrases such as "random amount of weeks"."""

    date_type = DateType.RANDOM
    pattern = re.compile(rf"random amount of {UNIT_PATTERN}s")
    confidence = 0.7

    def recognize(self, text: str, now: datetime) -> Optional[ParsedDate]:
        if "random" not in text:
            return None
        return super().recognize(text, now)

    def extract(self, match: re.Match, text: str, now: datetime) -> RandomAmount:
        return RandomAmount(unit=match.group(1) + "s")


class DateParser:
    """Parses natural language date fragments into interpretations.

    The custom phrase registry is not synchronized: register phrases before
    sharing a parser between threads.
    """

    PARTIAL_CONFIDENCE = 0.5

    def __init__(self, config: Optional[ParserConfig] = None):
        """Initialize the parser and its recognizers.

        Args:
            config: Parser settings such as timezone labels
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.config = config or ParserConfig()
        self.custom_phrases: Dict[str, PhraseHandler] = {}
        self.recognizers: List[Recognizer] = [
            SpecificTimeRecognizer(self.config.timezone_offsets),
            SpecificDateRecognizer(),
            NumericOffsetRecognizer(),
            TomorrowRecognizer(),
            RandomAmountRecognizer(),
        ]

    def parse(self, text: str, now: Optional[datetime] = None) -> List[ParsedDate]:
        """Interpret text as zero or more parsed dates.

        Args:
            text: Raw input text
            now: Reference instant for defaults such as the current year

        Returns:
            Interpretations in recognizer order; empty for blank input
        """
        if not text or not text.strip():
            return []

        now = now or datetime.now()
        normalized = text.lower().strip()

        results = self._match_custom_phrases(normalized)

        for recognizer in self.recognizers:
            parsed = recognizer.recognize(normalized, now)
            if parsed is not None:
                results.append(parsed)

        if not results:
            results.append(ParsedDate(
                type=DateType.PARTIAL,
                value=normalized,
                confidence=self.PARTIAL_CONFIDENCE,
            ))

        self.logger.debug(
            f"Parsed '{normalized}' as {[result.type.value for result in results]}"
        )
        return results

    def _match_custom_phrases(self, text: str) -> List[ParsedDate]:
        """Run every registered handler whose phrase occurs in the text."""
        results = []

        for phrase, handler in self.custom_phrases.items():
            if phrase not in text:
                continue

            try:
                result = handler(text)
            except Exception as e:
                self.logger.warning(f"Custom phrase handler for '{phrase}' failed: {e}")
                continue

            if not result:
                continue
            if not isinstance(result, ParsedDate) or not result.is_well_formed():
                self.logger.warning(
                    f"Custom phrase handler for '{phrase}' returned {result!r}, "
                    f"expected a well-formed ParsedDate"
                )
                continue

            results.append(replace(result, confidence=1.0))

        return results

    def add_custom_phrase(self, phrase: str, handler: PhraseHandler):
        """Register a handler for inputs containing a phrase.

        Args:
            phrase: Phrase to look for; stored lowercased
            handler: Callable taking the normalized input and returning a
                ParsedDate or None

        Raises:
            PhraseRegistrationError: If the phrase is empty or the handler
                is not callable
        """
        if not phrase:
            raise PhraseRegistrationError("Custom phrase must not be empty")
        if not callable(handler):
            raise PhraseRegistrationError(f"Handler for '{phrase}' is not callable")

        self.custom_phrases[phrase.lower()] = handler
        self.logger.debug(f"Registered custom phrase '{phrase.lower()}'")
