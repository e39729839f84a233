"""
Pytest configuration and shared fixtures for NatDate testing.

Provides a fixed reference instant, configured engine components and
temporary configuration directories.
"""

import random
from pathlib import Path

import pytest
import yaml

from natdate.core.config_manager import AppConfig, LoggingConfig
from natdate.core.logging_manager import LoggingManager
from natdate.processors.core.date_generator import DateGenerator
from natdate.processors.core.date_parser import DateParser
from natdate.processors.core.suggestion_engine import SuggestionEngine

from .fixtures.sample_data import REFERENCE_NOW


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep engine logs off the console during tests"""
    LoggingManager.configure(LoggingConfig(log_to_console=False))
    yield


@pytest.fixture
def now():
    """Fixed reference instant"""
    return REFERENCE_NOW


@pytest.fixture
def app_config():
    """Default application configuration"""
    return AppConfig()


@pytest.fixture
def date_parser(app_config):
    """Parser with default timezone labels"""
    return DateParser(app_config.parser)


@pytest.fixture
def date_generator(app_config):
    """Generator with a seeded random source"""
    return DateGenerator(app_config.generator, rng=random.Random(7))


@pytest.fixture
def suggestion_engine(date_parser, date_generator, app_config):
    """Suggestion engine sharing the parser and generator fixtures"""
    return SuggestionEngine(date_parser, date_generator, app_config.suggestions)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Temporary directory holding a default configuration file"""
    config_dir = Path(tmp_path) / "config"
    config_dir.mkdir()

    default_config = {
        "app_name": "NatDate-Test",
        "environment": "testing",
        "generator": {"random_max_amount": 30},
        "suggestions": {"common_times": ["8:00", "13:00"]},
        "logging": {"level": "DEBUG", "log_to_console": False},
    }

    with open(config_dir / "default_config.yaml", "w") as f:
        yaml.dump(default_config, f)

    return config_dir
