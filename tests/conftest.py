"""Pytest fixtures for combination lock tests."""

import random

import pytest

from combination_lock.config import CombinationLockParams, Behaviour, PreviousState
from combination_lock.controller import AttemptController
from combination_lock.lock import Lock
from combination_lock.timers import PollingScheduler


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> PollingScheduler:
    return PollingScheduler(clock=clock)


@pytest.fixture
def elapse(clock, scheduler):
    """Advance the fake clock and fire due timers."""
    def _elapse(seconds: float) -> int:
        clock.advance(seconds)
        return scheduler.tick()
    return _elapse


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def alphabet() -> list:
    return list('ABCDE')


@pytest.fixture
def make_lock(scheduler, rng, alphabet):
    """Build a Lock for solution 'CAB' (default) at given positions."""
    def _make(positions=None, solution='CAB', on_changed=None):
        return Lock(alphabet, list(solution), scheduler=scheduler, positions=positions,
                    rng=rng, on_changed=on_changed)
    return _make


@pytest.fixture
def make_controller(scheduler, rng):
    """Build an AttemptController for solution 'CAB' over 'ABCDE'.

    Segments start at 'AAA' (wrong) unless positions are given.
    """
    def _make(auto_check=False, max_attempts=None, enable_retry=True,
              enable_solutions_button=True, positions=(0, 0, 0), state=None):
        params = CombinationLockParams(
            solution=list('CAB'),
            alphabet=list('ABCDE'),
            behaviour=Behaviour(
                auto_check=auto_check,
                enable_retry=enable_retry,
                enable_solutions_button=enable_solutions_button,
                max_attempts=max_attempts,
            ),
        )
        if state is None:
            state = PreviousState(positions=list(positions) if positions is not None else None)
        announcements = []
        focus = []
        controller = AttemptController(
            params,
            scheduler=scheduler,
            previous_state=state,
            rng=rng,
            on_announce=announcements.append,
            on_focus=focus.append,
        )
        controller.announcements = announcements
        controller.focus_requests = focus
        return controller
    return _make


