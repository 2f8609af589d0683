from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Callable

import pytest

# Last day of a month so "tomorrow" crosses a boundary
REFERENCE_NOW = datetime(2024, 1, 31, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"
