"""Shared fixtures for browser replay tests."""

from __future__ import annotations

import pytest


class FakeClock:
    """Stands in for the ``time`` module that Selenium's waits read."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock(start=100.0)
    monkeypatch.setattr("selenium.webdriver.support.wait.time", fake)
    return fake
