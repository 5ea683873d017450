"""
Attempt controller

Drives the lock through the check / retry / show-solution lifecycle and
keeps the score. Views: TASK -> RESULTS (lock opened or attempts used up),
TASK or RESULTS -> SOLUTIONS (user asked for the solution), back to TASK
only through reset_task().

Host-visible controls are tracked by id in `buttons`:
    check-answer, show-solution, try-again
"""

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from .config import CombinationLockParams, PreviousState
from .dictionary import Dictionary
from .lock import Lock

logger = logging.getLogger(__name__)

BUTTON_CHECK = 'check-answer'
BUTTON_SHOW_SOLUTION = 'show-solution'
BUTTON_RETRY = 'try-again'
BUTTONS = (BUTTON_CHECK, BUTTON_SHOW_SOLUTION, BUTTON_RETRY)

FOCUS_LOCK = 'lock'


class ViewState(IntEnum):
    TASK = 0
    RESULTS = 1
    SOLUTIONS = 2


@dataclass
class Announcement:
    """Message for the lock's text slot and for assistive technology."""
    text: str
    aria: Optional[str] = None

    @property
    def spoken(self) -> str:
        return self.text if self.aria is None else self.aria


class AttemptController:
    """Check/retry/solution state machine around a Lock."""

    def __init__(
        self,
        params: CombinationLockParams,
        *,
        scheduler,
        previous_state: Optional[PreviousState] = None,
        dictionary: Optional[Dictionary] = None,
        rng: Optional[random.Random] = None,
        on_announce: Optional[Callable[[Announcement], None]] = None,
        on_buttons_changed: Optional[Callable[[dict], None]] = None,
        on_focus: Optional[Callable[[str], None]] = None,
    ):
        self.params = params
        self.behaviour = params.behaviour
        self.dictionary = dictionary or Dictionary(params.l10n, params.a11y)
        previous_state = previous_state or PreviousState()

        self.on_announce = on_announce
        self.on_buttons_changed = on_buttons_changed
        self.on_focus = on_focus

        self.max_attempts: Optional[int] = self.behaviour.effective_max_attempts
        self.attempts_left = self._restored_attempts(previous_state.attempts_left)
        self.score = 0
        self.was_answer_given = previous_state.was_answer_given
        self.view_state = ViewState.TASK
        self.last_announcement: Optional[Announcement] = None

        self.buttons = {
            BUTTON_CHECK: not self.behaviour.auto_check,
            BUTTON_SHOW_SOLUTION: self.behaviour.auto_check and self.behaviour.enable_solutions_button,
            BUTTON_RETRY: False,
        }

        self.lock = Lock(
            params.alphabet,
            params.solution,
            scheduler=scheduler,
            positions=previous_state.positions,
            dictionary=self.dictionary,
            rng=rng,
            on_changed=self.handle_lock_changed,
        )

        restored = ViewState(previous_state.view_state)
        if restored is ViewState.RESULTS:
            self._restore_results()
        elif restored is ViewState.SOLUTIONS:
            self.show_solutions(show_retry=True, restoring=True)
        else:
            self._announce_initial_message()

    def _restored_attempts(self, attempts_left) -> Optional[int]:
        if self.max_attempts is None:
            return None
        if attempts_left is None:
            return self.max_attempts
        return max(0, min(attempts_left, self.max_attempts))

    @property
    def is_bounded(self) -> bool:
        return self.max_attempts is not None

    # Scoring

    def get_score(self) -> int:
        return self.score

    def get_max_score(self) -> int:
        return self.max_attempts if self.is_bounded else 1

    def get_answer_given(self) -> bool:
        return self.was_answer_given

    def get_response(self) -> str:
        return self.lock.get_response()

    def is_correct(self) -> bool:
        return self.get_response() == self.params.solution_text

    def get_current_state(self) -> dict:
        return PreviousState(
            attempts_left=self.attempts_left,
            was_answer_given=self.was_answer_given,
            view_state=int(self.view_state),
            message=self.lock.get_message(),
            positions=self.lock.get_positions(),
        ).to_dict()

    # Transitions

    def check_answer(self):
        """Compare the lock's combination to the solution."""
        if self.view_state is not ViewState.TASK:
            logger.debug("Ignoring check in %s view", self.view_state.name)
            return

        self.was_answer_given = True

        if self.is_correct():
            self._open_lock(restoring=False)
            return

        if not self.behaviour.auto_check:
            self.lock.show_animation_wrong_combination()

        if not self.is_bounded:
            if not self.behaviour.auto_check:
                self.announce(Announcement(self.dictionary.get('l10n.wrongCombination')))
            return

        self.attempts_left = max(0, self.attempts_left - 1)
        logger.debug("Wrong combination, %d attempts left", self.attempts_left)

        if self.attempts_left == 0:
            self._exhaust(restoring=False)
        else:
            self._announce_attempts_left()

    def handle_lock_changed(self):
        """Called whenever a segment changed position."""
        self.was_answer_given = True
        if self.behaviour.auto_check:
            self.check_answer()

    def show_solutions(self, show_retry: bool = True, restoring: bool = False):
        """Turn every segment to its target symbol and end the task."""
        if self.view_state is ViewState.SOLUTIONS:
            return

        combination = ', '.join(self.params.solution)
        self.lock.disable()
        self.announce(Announcement(
            self.dictionary.get('l10n.correctCombination'),
            self.dictionary.get('a11y.correctCombination', combination=combination),
        ))
        self.lock.show_solutions()

        self._set_view_state(ViewState.SOLUTIONS)
        self._set_buttons({BUTTON_CHECK: False, BUTTON_SHOW_SOLUTION: False, BUTTON_RETRY: False})
        if show_retry:
            if self.behaviour.enable_retry:
                self._set_buttons({BUTTON_RETRY: True})
            elif not restoring:
                self._request_focus(FOCUS_LOCK)

    def reset_task(self, positions: Optional[list] = None):
        """Start over with fresh positions and a full attempt budget."""
        self._set_view_state(ViewState.TASK)
        self.attempts_left = self.max_attempts
        self.score = 0
        self.was_answer_given = False

        self._announce_initial_message()
        self._set_buttons({
            BUTTON_CHECK: not self.behaviour.auto_check,
            BUTTON_SHOW_SOLUTION: self.behaviour.auto_check and self.behaviour.enable_solutions_button,
            BUTTON_RETRY: False,
        })
        self.lock.reset(positions)

    def press_button(self, button_id: str) -> bool:
        """Handle a control button press from a front end. Hidden buttons do nothing."""
        if not self.buttons.get(button_id):
            return False
        if button_id == BUTTON_CHECK:
            self.check_answer()
        elif button_id == BUTTON_SHOW_SOLUTION:
            self.show_solutions(show_retry=True)
        elif button_id == BUTTON_RETRY:
            self.reset_task()
            self._request_focus(FOCUS_LOCK)
        return True

    def _open_lock(self, restoring: bool):
        self.lock.disable()
        self._set_view_state(ViewState.RESULTS)
        self.score = self.attempts_left if self.is_bounded else 1
        self.announce(Announcement(self.dictionary.get('l10n.lockOpen')))

        self._set_buttons({BUTTON_CHECK: False})
        if self.behaviour.auto_check:
            self._set_buttons({BUTTON_SHOW_SOLUTION: False})

        if self.behaviour.enable_retry:
            self._set_buttons({BUTTON_RETRY: True})
            if not restoring:
                self._request_focus(BUTTON_RETRY)
        elif not restoring:
            self._request_focus(FOCUS_LOCK)

    def _exhaust(self, restoring: bool):
        self._set_view_state(ViewState.RESULTS)
        self.lock.disable()
        self.score = 0
        self.announce(Announcement(self.dictionary.get('l10n.lockDisabled')))

        self._set_buttons({BUTTON_CHECK: False})
        if self.behaviour.enable_solutions_button:
            self._set_buttons({BUTTON_SHOW_SOLUTION: True})
        if self.behaviour.enable_retry:
            self._set_buttons({BUTTON_RETRY: True})

        if not (self.behaviour.enable_solutions_button or self.behaviour.enable_retry) and not restoring:
            self._request_focus(FOCUS_LOCK)

    def _restore_results(self):
        # Re-derive the outcome without spending another attempt
        if self.is_correct():
            self._open_lock(restoring=True)
        else:
            if self.is_bounded:
                self.attempts_left = 0
            self._exhaust(restoring=True)

    def _set_view_state(self, state: ViewState):
        if state is self.view_state:
            return
        logger.debug("View state %s -> %s", self.view_state.name, state.name)
        self.view_state = state

    # Announcements

    def announce(self, announcement: Announcement):
        if not announcement.text:
            return
        self.last_announcement = announcement
        self.lock.set_message(announcement.text)
        if self.on_announce:
            self.on_announce(announcement)

    def _announce_initial_message(self):
        if not self.behaviour.auto_check and self.is_bounded:
            self._announce_attempts_left()
        else:
            self.announce(Announcement(self.dictionary.get('l10n.noMessage'), ''))

    def _announce_attempts_left(self):
        text = self.dictionary.get('l10n.attemptsLeft', number=self.attempts_left)
        wrong = self.dictionary.get('a11y.wrongCombination')
        self.announce(Announcement(text, '. '.join([wrong, text])))

    # Controls

    def _set_buttons(self, visibility: dict):
        changed = False
        for button_id, visible in visibility.items():
            if self.buttons.get(button_id) != visible:
                self.buttons[button_id] = visible
                changed = True
        if changed and self.on_buttons_changed:
            self.on_buttons_changed(dict(self.buttons))

    def _request_focus(self, target: str):
        if self.on_focus:
            self.on_focus(target)
        elif target == FOCUS_LOCK:
            self.lock.focus()
