"""Console front end: type a date phrase per line and see ranked suggestions."""

import sys
from pathlib import Path
from typing import Optional, TextIO

from .core.application import NaturalLanguageDateTimePicker
from .core.error_handler import ConfigurationError


def render(picker: NaturalLanguageDateTimePicker, text: str, out: TextIO):
    for suggestion in picker.generate_suggestions(text):
        out.write(
            f"  {suggestion.probability:4.2f}  {suggestion.text:<28} "
            f"{suggestion.date:%Y-%m-%d %H:%M}\n"
        )


def main(config_path: Optional[Path] = None, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    """Main entry point for the NatDate console."""
    try:
        picker = NaturalLanguageDateTimePicker.from_config_path(config_path)
    except ConfigurationError as e:
        stdout.write(f"❌ Invalid configuration: {e.message}\n")
        return 1

    stdout.write("Type a date phrase such as 'in 2 days' or 'at 9' (Ctrl+D to quit).\n")
    for line in stdin:
        render(picker, line.rstrip("\n"), stdout)

    return 0


def run():
    sys.exit(main())
