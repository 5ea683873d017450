"""
Host adapter

CombinationLock is the object a host environment talks to. It sanitizes
the raw host parameters, restores a saved state and exposes the question
interface (score, state, answer given) on top of AttemptController,
without the controller knowing anything about the host.
"""

import logging
import random
from typing import Callable, Optional

from .actions import action_for_key
from .config import CombinationLockParams, PreviousState
from .controller import AttemptController, Announcement
from .dictionary import Dictionary
from .timers import PollingScheduler

logger = logging.getLogger(__name__)


class CombinationLock:
    """Combination lock task as seen by a host."""

    def __init__(
        self,
        params=None,
        previous_state=None,
        *,
        scheduler=None,
        rng: Optional[random.Random] = None,
        on_read: Optional[Callable[[str], None]] = None,
    ):
        if not isinstance(params, CombinationLockParams):
            params = CombinationLockParams.from_dict(params)
        if not isinstance(previous_state, PreviousState):
            previous_state = PreviousState.from_dict(previous_state)

        self.params = params
        self.scheduler = scheduler if scheduler is not None else PollingScheduler()
        self.dictionary = Dictionary(params.l10n, params.a11y)
        self.on_read = on_read
        self.announcements: list[Announcement] = []

        self.controller = AttemptController(
            params,
            scheduler=self.scheduler,
            previous_state=previous_state,
            dictionary=self.dictionary,
            rng=rng,
            on_announce=self._handle_announce,
        )
        logger.debug("Created %r", params)

    @property
    def lock(self):
        return self.controller.lock

    def _handle_announce(self, announcement: Announcement):
        self.announcements.append(announcement)
        if self.on_read and announcement.spoken:
            self.on_read(announcement.spoken)

    # Question interface

    def get_title(self) -> str:
        return self.params.title

    def get_description(self) -> str:
        return self.dictionary.get('a11y.combinationLock')

    def get_score(self) -> int:
        return self.controller.get_score()

    def get_max_score(self) -> int:
        return self.controller.get_max_score()

    def get_answer_given(self) -> bool:
        return self.controller.get_answer_given()

    def get_response(self) -> str:
        return self.controller.get_response()

    def is_correct(self) -> bool:
        return self.controller.is_correct()

    def get_current_state(self) -> dict:
        return self.controller.get_current_state()

    def check_answer(self):
        self.controller.check_answer()

    def show_solutions(self):
        self.controller.show_solutions(show_retry=True)

    def reset_task(self):
        self.controller.reset_task()

    # Input

    def press_key(self, name: str) -> bool:
        """Dispatch a named key to the lock. Returns True if the key is bound."""
        action = action_for_key(name)
        if action is None:
            return False
        self.scheduler_tick()
        self.lock.dispatch(action)
        return True

    def press_button(self, button_id: str) -> bool:
        self.scheduler_tick()
        return self.controller.press_button(button_id)

    def scheduler_tick(self):
        """Fire due timers when running on a PollingScheduler."""
        if isinstance(self.scheduler, PollingScheduler):
            self.scheduler.tick()
