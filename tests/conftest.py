from __future__ import annotations
from typing import List, Sequence, Tuple

import pytest
from loguru import logger


class ScriptedSource:
    """Random source that replays fixed values, cycling when it runs out."""

    def __init__(self, values: Sequence[int]):
        self.values = list(values)
        self.calls: List[Tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        value = self.values[len(self.calls) % len(self.values)]
        self.calls.append((a, b))
        return value


@pytest.fixture
def scripted():
    return ScriptedSource


@pytest.fixture(autouse=True)
def _reset_logging():
    # the CLI binds a sink to whatever sys.stderr is during the test
    yield
    logger.remove()
    logger.disable("quickpick")
