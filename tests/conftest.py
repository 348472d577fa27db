"""Shared fixtures for the test suite."""

import logging

import pytest

from sudoku_shuffle.data import RawBoard

SCENARIO_CELLS = list("1234" "3412" "2143" "4321")
SCENARIO_MASK = [
    True, True, False, False,
    False, False, True, True,
    True, False, False, True,
    False, True, True, False,
]


class FakeClock:
    """Manually advanced clock for timer tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def scenario_instance():
    """The base-2 reference instance in its serialized (decoded) form."""
    return {"board": {"n": 2, "board": list(SCENARIO_CELLS), "mask": list(SCENARIO_MASK)}}


@pytest.fixture
def scenario_corpus(scenario_instance):
    """A corpus holding only the base-2 reference instance."""
    return {2: [scenario_instance]}


@pytest.fixture
def scenario_raw():
    return RawBoard.from_flat(2, SCENARIO_CELLS, SCENARIO_MASK)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers attached by get_logger so each test starts clean."""
    yield
    logger = logging.getLogger("sudoku_shuffle")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
