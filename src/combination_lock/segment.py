"""
Lock segment

One rotating symbol cell. Owns a Wheel, the current position and the
enabled / active / cooling-down flags:

- enabled or disabled: disabled segments ignore directional input
- active or inactive: the active segment is the keyboard tab stop
- idle or cooling down: after every accepted change further directional
  input is ignored for COOLDOWN_TIMEOUT seconds

Disabling forces idle. Cooling down never blocks activation changes.
"""

import logging
import random
from typing import Callable, Optional

from .actions import Action, NAVIGATION_ACTIONS
from .dictionary import Dictionary
from .wheel import Wheel

logger = logging.getLogger(__name__)


def is_valid_position(position, size: int) -> bool:
    """Check that a (restored) position indexes into an alphabet of given size."""
    if isinstance(position, bool) or not isinstance(position, int):
        return False
    return 0 <= position < size


class Segment:
    """A single symbol wheel of the lock."""

    COOLDOWN_TIMEOUT = 0.275  # seconds

    def __init__(
        self,
        index: int,
        alphabet: list,
        solution: str,
        *,
        scheduler,
        position: Optional[int] = None,
        total: int = 1,
        segment_id: Optional[str] = None,
        dictionary: Optional[Dictionary] = None,
        rng: Optional[random.Random] = None,
        on_changed: Optional[Callable[["Segment"], None]] = None,
        on_navigate: Optional[Callable[["Segment", Action], None]] = None,
    ):
        self.index = index
        self.alphabet = list(alphabet)
        self.solution = solution
        self.total = total
        self.segment_id = segment_id or f'segment-{index + 1}'
        self.dictionary = dictionary or Dictionary()

        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._on_changed = on_changed
        self._on_navigate = on_navigate
        self._cooldown_event = None

        self.is_disabled = False
        self.is_cooling_down = False
        self.is_active = False

        # Views refresh labels and highlight through this hook
        self.on_update: Optional[Callable[["Segment"], None]] = None

        self.position = self._sanitize_position(position)
        self.wheel = Wheel(self.alphabet, self.position, scheduler=scheduler)

    def _sanitize_position(self, position) -> int:
        if position is None:
            return self._random_position()
        if not is_valid_position(position, len(self.alphabet)):
            logger.warning(
                "Segment %d: position %r invalid for %d symbols, randomizing",
                self.index, position, len(self.alphabet)
            )
            return self._random_position()
        return position

    def _random_position(self) -> int:
        return self._rng.randrange(len(self.alphabet))

    def get_response(self) -> str:
        return self.alphabet[self.position]

    def get_position(self) -> int:
        return self.position

    @property
    def solution_position(self) -> int:
        return self.alphabet.index(self.solution)

    @property
    def accepts_input(self) -> bool:
        return not self.is_disabled and not self.is_cooling_down

    # Labels

    def get_label(self) -> str:
        """Accessible name of the segment, e.g. 'Segment 1 of 3'."""
        label = self.dictionary.get('a11y.segment', number=self.index + 1, total=self.total)
        if self.is_disabled:
            label = f"{label}, {self.dictionary.get('a11y.disabled')}"
        return label

    def get_symbol_label(self) -> str:
        return self.dictionary.get('a11y.currentSymbol', symbol=self.get_response())

    # Position changes

    def change_to_next(self) -> bool:
        return self._change_position((self.position + 1) % len(self.alphabet))

    def change_to_previous(self) -> bool:
        return self._change_position((self.position - 1) % len(self.alphabet))

    def _change_position(self, position: int) -> bool:
        """Apply a user-requested change. Returns False if input is blocked."""
        if not self.accepts_input:
            return False

        self.set_position(position)
        self.cooldown()
        if self._on_changed:
            self._on_changed(self)
        return True

    def set_position(self, position: int):
        self.position = position
        self.wheel.set_position(position)
        self._notify()

    def cooldown(self):
        if self.is_cooling_down:
            return
        self.is_cooling_down = True
        self._cancel_cooldown()
        self._cooldown_event = self._scheduler.schedule_once(self._end_cooldown, self.COOLDOWN_TIMEOUT)
        self._notify()

    def _end_cooldown(self, dt):
        self._cooldown_event = None
        self.is_cooling_down = False
        self._notify()

    def _cancel_cooldown(self):
        if self._cooldown_event is not None:
            self._cooldown_event.cancel()
            self._cooldown_event = None

    # State

    def enable(self):
        self.is_disabled = False
        self._notify()

    def disable(self):
        self.is_disabled = True
        self._cancel_cooldown()
        self.is_cooling_down = False
        self._notify()

    def activate(self):
        self.is_active = True
        self._notify()

    def deactivate(self):
        self.is_active = False
        self._notify()

    def show_solution(self):
        """Turn to the target symbol regardless of cooldown or enablement."""
        self.set_position(self.solution_position)

    def reset(self, position: Optional[int] = None):
        """Re-enable and turn to a new random (or the given) position."""
        self._cancel_cooldown()
        self.is_cooling_down = False
        self.enable()
        self.set_position(self._sanitize_position(position))

    def handle_visible(self):
        """Called by the view once the wheel can be measured."""
        self.wheel.refresh()
        self.wheel.uncloak()

    def handle_action(self, action: Action) -> bool:
        """Handle a keyboard intent. Returns True if the position changed.

        Navigation intents are passed on to the lock and never change
        the position.
        """
        if action in NAVIGATION_ACTIONS:
            if self._on_navigate:
                self._on_navigate(self, action)
            return False
        if action is Action.NEXT:
            return self.change_to_next()
        if action is Action.PREVIOUS:
            return self.change_to_previous()
        return False

    def _notify(self):
        if self.on_update:
            self.on_update(self)

    def __repr__(self):
        flags = []
        if self.is_disabled:
            flags.append('disabled')
        if self.is_active:
            flags.append('active')
        if self.is_cooling_down:
            flags.append('cooling')
        return f"Segment({self.index}, {self.get_response()!r} @ {self.position}, {' '.join(flags) or 'idle'})"
