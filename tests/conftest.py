"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.stepwise import (
    Exercise,
    InMemoryResultsRepository,
    InMemorySessionCatalog,
    ItemKind,
    ManualTicker,
    Question,
    SessionController,
    SessionDefinition,
    SessionKind,
    SessionService,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class FakeClock:
    """Callable returning a settable datetime."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 8, 28, 9, 30))


@pytest.fixture
def single_choice_question():
    return Question(
        id="q-hydration",
        prompt="What is the recommended daily water intake for athletes during intense training?",
        kind=ItemKind.SINGLE_CHOICE,
        options=("2-3 liters", "3-4 liters", "4-6 liters", "6-8 liters"),
        correct=2,
        explanation="4-6 liters keeps athletes hydrated during intense training.",
    )


@pytest.fixture
def multi_select_question():
    return Question(
        id="q-toughness",
        prompt="Which of the following are key components of mental toughness?",
        kind=ItemKind.MULTI_SELECT,
        options=(
            "Confidence",
            "Focus under pressure",
            "Resilience",
            "Physical strength",
            "Emotional control",
        ),
        correct=frozenset({0, 1, 2, 4}),
    )


@pytest.fixture
def true_false_question():
    return Question(
        id="q-overload",
        prompt="Progressive overload is essential for continuous improvement in training.",
        kind=ItemKind.TRUE_FALSE,
        correct=True,
    )


@pytest.fixture
def quiz(single_choice_question, multi_select_question, true_false_question):
    """Three-question quiz with a pass mark of 80."""
    return SessionDefinition(
        id="nutrition-quiz",
        title="Sports Nutrition Fundamentals",
        kind=SessionKind.ASSESSMENT,
        items=(single_choice_question, multi_select_question, true_false_question),
        pass_threshold=80,
        time_limit_seconds=20 * 60,
    )


@pytest.fixture
def workout():
    """Four exercises, 95 seconds and 34 points in total."""
    return SessionDefinition(
        id="morning-boost",
        title="Morning Energy Boost",
        kind=SessionKind.WORKOUT,
        items=(
            Exercise(id="jumping-jacks", name="Jumping Jacks", duration_seconds=30, points=10),
            Exercise(id="arm-circles", name="Arm Circles", duration_seconds=20, points=8),
            Exercise(id="march", name="March in Place", duration_seconds=30, points=10),
            Exercise(id="stretch", name="Stretch Reach", duration_seconds=15, points=6),
        ),
        calories=45,
    )


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def controller(ticker, clock):
    return SessionController(ticker=ticker, now=clock)


@pytest.fixture
def catalog(quiz, workout):
    return InMemorySessionCatalog([quiz, workout])


@pytest.fixture
def repository():
    return InMemoryResultsRepository()


@pytest.fixture
def service(catalog, repository, ticker, clock):
    return SessionService(catalog, repository, ticker=ticker, now=clock)
