"""NatDate Picker Core

Wires the parser, generator and suggestion engine together for a date
input field and forwards the user's choice to the host application.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from .config_manager import AppConfig, ConfigManager
from .error_handler import ErrorHandler
from .logging_manager import LoggingManager
from ..processors.core.date_generator import DateGenerator
from ..processors.core.date_parser import DateParser
from ..processors.core.parsed_date import DateSuggestion, PhraseHandler
from ..processors.core.suggestion_engine import SuggestionEngine


class NaturalLanguageDateTimePicker:
    """Natural language date picker backed by the suggestion engine."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        set_date: Optional[Callable[[datetime], None]] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """Initialize the picker.

        Args:
            config: Application configuration; defaults when omitted
            set_date: Host callback receiving the chosen datetime
            error_handler: Handler for failures in host callbacks
        """
        self.config = config or AppConfig()
        self.set_date = set_date
        self.error_handler = error_handler or ErrorHandler()
        self.logger = LoggingManager.get_logger(__name__)

        self.date_parser = DateParser(self.config.parser)
        self.date_generator = DateGenerator(self.config.generator)
        self.suggestion_engine = SuggestionEngine(
            self.date_parser,
            self.date_generator,
            self.config.suggestions
        )

    @classmethod
    def from_config_path(
        cls,
        config_path: Optional[Path] = None,
        set_date: Optional[Callable[[datetime], None]] = None
    ) -> 'NaturalLanguageDateTimePicker':
        """Create a picker from configuration files on disk.

        Args:
            config_path: Directory holding the YAML configuration
            set_date: Host callback receiving the chosen datetime

        Returns:
            Configured picker
        """
        config = ConfigManager(config_path).load_config()

        logging_config = config.logging
        if config.debug_mode:
            logging_config = logging_config.model_copy(update={"level": "DEBUG"})
        LoggingManager.configure(logging_config)

        picker = cls(config=config, set_date=set_date)
        picker.logger.info(
            f"Starting {config.app_name} v{config.version} ({config.environment})"
        )
        return picker

    def generate_suggestions(self, text: str, now: Optional[datetime] = None) -> List[DateSuggestion]:
        return self.suggestion_engine.generate_suggestions(text, now=now)

    def add_custom_phrase(self, phrase: str, handler: PhraseHandler):
        self.date_parser.add_custom_phrase(phrase, handler)

    def select(self, suggestion: DateSuggestion) -> bool:
        """Pass a chosen suggestion's date to the host application.

        Args:
            suggestion: Suggestion picked by the user

        Returns:
            True if the host accepted the date, False if no callback is set
            or the callback failed
        """
        if self.set_date is None:
            self.logger.warning(f"No set_date callback for selection '{suggestion.text}'")
            return False

        try:
            self.set_date(suggestion.date)
        except Exception as e:
            self.error_handler.handle_error(e, context=f"Selecting '{suggestion.text}'")
            return False

        self.logger.info(f"Selected '{suggestion.text}' -> {suggestion.date.isoformat()}")
        return True
