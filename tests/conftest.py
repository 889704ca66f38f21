"""Shared fixtures for Santa Rush tests."""

import random

import pytest

from santa_rush.config.settings import Settings
from santa_rush.core.events import EventBus
from santa_rush.core.physics import Physics
from santa_rush.game.session import Session
from santa_rush.scores.store import LocalScoreStore


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def physics() -> Physics:
    return Physics()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def session(settings, event_bus, rng) -> Session:
    return Session(settings, event_bus=event_bus, rng=rng)


@pytest.fixture
def local_store(tmp_path) -> LocalScoreStore:
    return LocalScoreStore(tmp_path / "scores.json", keep=50)
