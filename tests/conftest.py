"""Shared fixtures for the Kiacha test suite."""

import pytest

from kiacha.cognition import (
    CognitionEngine,
    DomainClassifier,
    DomainExpertRegistry,
    FusionEngine,
)
from kiacha.heartcore import AffectState, EmotionEngine, PersonalityCatalog


@pytest.fixture
def make_emotion():
    """EmotionEngine factory starting from an explicit state."""

    def _make(history_size: int = 1000, **values) -> EmotionEngine:
        return EmotionEngine(baseline=AffectState(**values), history_size=history_size)

    return _make


@pytest.fixture
def catalog():
    return PersonalityCatalog()


@pytest.fixture
def make_cognition(catalog):
    """CognitionEngine factory wired around an explicit starting state."""

    def _make(history_size: int = 500, **values) -> CognitionEngine:
        emotion = EmotionEngine(baseline=AffectState(**values))
        return CognitionEngine(
            emotion=emotion,
            personalities=catalog,
            classifier=DomainClassifier(),
            experts=DomainExpertRegistry(),
            fusion=FusionEngine(emotion, catalog),
            history_size=history_size,
        )

    return _make
