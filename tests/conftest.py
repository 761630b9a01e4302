"""Root conftest — shared test configuration and the fake wall clock."""

import os
from datetime import datetime, timedelta

import pytest

# Keep a developer's local .env / environment from leaking into Settings()
for _key in list(os.environ):
    if _key.startswith("LIFETRACKER_"):
        del os.environ[_key]


class FakeClock:
    """Manually advanced clock injected into Timer / AppCore."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
