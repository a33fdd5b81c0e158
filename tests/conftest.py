# tests/conftest.py
"""
Pytest configuration for the five grid suite.

- Turns off file logging before any project module reads the config.
- Registers Hypothesis profiles for local dev and CI.
- Provides entry builders shared by the engine tests.
"""

import os

os.environ["LOG_TO_FILE"] = "0"

import pytest
from hypothesis import settings, HealthCheck

from util.entries import Character, Placeholder, OtherEntry


settings.register_profile(
    "dev",
    settings(deadline=None, max_examples=60, suppress_health_check=[HealthCheck.too_slow]),
)
settings.register_profile(
    "ci",
    settings(deadline=None, max_examples=200, suppress_health_check=[HealthCheck.too_slow]),
)

_profile = "ci" if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS")) else os.getenv("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(_profile)


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


def make_name(*pairs):
    """make_name(("陳", 16), ("大", 3)) -> [Character, Character]"""
    return [Character(value=value, strokes=strokes) for value, strokes in pairs]


@pytest.fixture
def chen_da_wen():
    return make_name(("陳", 16), ("大", 3), ("文", 4))


@pytest.fixture
def sima_guang():
    return make_name(("司", 5), ("馬", 10), ("光", 6))


@pytest.fixture
def other_entry():
    return OtherEntry(type="separator", value=" ")


@pytest.fixture
def placeholder():
    return Placeholder(strokes=5, metadata={"slot": "given"})
