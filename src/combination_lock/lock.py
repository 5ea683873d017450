"""
Lock

Ordered row of segments. Builds the response string, keeps roving
keyboard focus on exactly one segment, fans enable/disable/reset/solution
out to all segments and holds the advisory message shown under the lock.
"""

import itertools
import logging
import random
from typing import Callable, Optional

from .actions import Action
from .dictionary import Dictionary
from .segment import Segment

logger = logging.getLogger(__name__)


def counter_ids(prefix: str = 'segment') -> Callable[[], str]:
    """Return a factory producing prefix-1, prefix-2, ... for one lock."""
    counter = itertools.count(1)
    return lambda: f'{prefix}-{next(counter)}'


class Lock:
    """Combination lock made of one segment per solution symbol."""

    WRONG_ANIMATION_DURATION = 0.5  # seconds

    def __init__(
        self,
        alphabet: list,
        solution: list,
        *,
        scheduler,
        positions: Optional[list] = None,
        dictionary: Optional[Dictionary] = None,
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None,
        on_changed: Optional[Callable[[], None]] = None,
    ):
        self.alphabet = list(alphabet)
        self.solution = list(solution)
        self.dictionary = dictionary or Dictionary()

        self._scheduler = scheduler
        self._on_changed = on_changed
        self._animation_event = None
        id_factory = id_factory or counter_ids()

        if positions is not None and len(positions) != len(self.solution):
            logger.warning(
                "Saved state has %d positions for %d segments, missing ones are randomized",
                len(positions), len(self.solution)
            )

        self.segments = [
            Segment(
                index,
                self.alphabet,
                symbol,
                scheduler=scheduler,
                position=self._saved_position(positions, index),
                total=len(self.solution),
                segment_id=id_factory(),
                dictionary=self.dictionary,
                rng=rng,
                on_changed=self._handle_segment_changed,
                on_navigate=self._handle_navigation,
            )
            for index, symbol in enumerate(self.solution)
        ]

        self.current_focus_index = 0
        self.segments[0].activate()

        self.message = ''
        self.wrong_animation_active = False

        # View hooks
        self.on_message: Optional[Callable[[str], None]] = None
        self.on_focus: Optional[Callable[[int], None]] = None
        self.on_animation: Optional[Callable[[bool], None]] = None

    @staticmethod
    def _saved_position(positions, index):
        if positions is None or index >= len(positions):
            return None
        return positions[index]

    # Response and state

    def get_response(self) -> str:
        return ''.join(segment.get_response() for segment in self.segments)

    def get_positions(self) -> list[int]:
        return [segment.get_position() for segment in self.segments]

    def get_current_state(self) -> dict:
        return {'positions': self.get_positions()}

    def get_description(self) -> str:
        """Accessible description of the current combination."""
        symbols = ', '.join(segment.get_response() for segment in self.segments)
        return self.dictionary.get('a11y.currentSymbols', symbols=symbols)

    @property
    def active_segment(self) -> Segment:
        return self.segments[self.current_focus_index]

    # Fan-out

    def enable(self):
        for segment in self.segments:
            segment.enable()

    def disable(self):
        for segment in self.segments:
            segment.disable()

    def reset(self, positions: Optional[list] = None):
        """Re-enable all segments and turn them to new positions."""
        self.handle_animation_end()
        self.enable()
        for index, segment in enumerate(self.segments):
            segment.reset(self._saved_position(positions, index))
        logger.debug("Lock reset to %r", self.get_response())

    def show_solutions(self):
        for segment in self.segments:
            segment.show_solution()

    # Focus

    def focus_segment(self, index: int):
        """Move roving focus to a segment, clamped to the row."""
        index = max(0, min(index, len(self.segments) - 1))
        if index != self.current_focus_index:
            self.active_segment.deactivate()
            self.current_focus_index = index
            self.active_segment.activate()
        self.focus()

    def focus(self):
        """Reassert keyboard focus on the active segment."""
        if self.on_focus:
            self.on_focus(self.current_focus_index)

    def dispatch(self, action: Action) -> bool:
        """Route a keyboard intent to the focused segment.

        Returns True if a segment changed position.
        """
        changed = self.active_segment.handle_action(action)
        if action in (Action.NEXT, Action.PREVIOUS):
            # Label updates may take focus away from the segment
            self.focus()
        return changed

    def _handle_navigation(self, segment: Segment, action: Action):
        if action is Action.FOCUS_LEFT:
            self.focus_segment(segment.index - 1)
        elif action is Action.FOCUS_RIGHT:
            self.focus_segment(segment.index + 1)
        elif action is Action.FOCUS_HOME:
            self.focus_segment(0)
        elif action is Action.FOCUS_END:
            self.focus_segment(len(self.segments) - 1)

    def _handle_segment_changed(self, segment: Segment):
        logger.debug("Segment %d changed, response %r", segment.index, self.get_response())
        if self._on_changed:
            self._on_changed()

    # Message and feedback

    def set_message(self, text: str):
        self.message = text
        if self.on_message:
            self.on_message(text)

    def get_message(self) -> str:
        return self.message

    def show_animation_wrong_combination(self):
        """Start the one-shot wrong-combination shake. Ignored while running."""
        if self.wrong_animation_active:
            return
        self.wrong_animation_active = True
        self._animation_event = self._scheduler.schedule_once(
            self.handle_animation_end, self.WRONG_ANIMATION_DURATION
        )
        if self.on_animation:
            self.on_animation(True)

    def handle_animation_end(self, *args):
        """End of the shake, from the timer or the view. Safe to call repeatedly."""
        if self._animation_event is not None:
            self._animation_event.cancel()
            self._animation_event = None
        if not self.wrong_animation_active:
            return
        self.wrong_animation_active = False
        if self.on_animation:
            self.on_animation(False)

    def __repr__(self):
        return f"Lock({self.get_response()!r}, focus={self.current_focus_index})"
