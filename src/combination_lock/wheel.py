"""
Symbol wheel

Holds the scroll state of one segment's symbol column. The column is the
alphabet with a copy of the last symbol prepended and a copy of the first
symbol appended:

    items:  [Z] A B C ... Z [A]
    index:   0  1 2 3     n  n+1

so logical position p sits at scroll index p + 1. Wrapping from the first
to the last symbol (or back) scrolls onto the copy first, which keeps the
motion going in the same direction, and snaps to the real item once the
scroll animation is over.

Views attach to on_scroll(index, animate) and on_uncloak().
"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Wheel:
    """Infinite-looking scroll model over an alphabet."""

    SCROLL_DURATION = 0.25  # seconds, matches the view's scroll animation

    def __init__(self, alphabet: list, position: int = 0, *, scheduler):
        self.alphabet = list(alphabet)
        self.items = [self.alphabet[-1], *self.alphabet, self.alphabet[0]]
        self.position = position
        self.index = position + 1
        self.cloaked = True

        self.on_scroll: Optional[Callable[[int, bool], None]] = None
        self.on_uncloak: Optional[Callable[[], None]] = None

        self._scheduler = scheduler
        self._snap_event = None
        self._snap_index = None

    @property
    def displayed_symbol(self) -> str:
        return self.items[self.index]

    @property
    def is_snapping(self) -> bool:
        return self._snap_event is not None

    def get_position(self) -> int:
        return self.position

    def set_position(self, position: int):
        """Scroll to a logical position, wrapping through the copies if needed."""
        # A newer request supersedes a pending snap
        self.settle()

        previous = self.position
        last = len(self.alphabet) - 1

        if position == previous and self.index == position + 1:
            return

        if previous == 0 and position == last:
            target = 0
            self._schedule_snap(position + 1)
        elif previous == last and position == 0:
            target = len(self.items) - 1
            self._schedule_snap(1)
        else:
            target = position + 1

        self.position = position
        self.scroll_to(target)

    def scroll_to(self, index: int, animate: bool = True):
        if not 0 <= index < len(self.items):
            return
        self.index = index
        if self.on_scroll:
            self.on_scroll(index, animate)

    def refresh(self):
        """Re-apply the current index without animation (e.g. after a resize)."""
        self.scroll_to(self.index, animate=False)

    def settle(self):
        """Apply a pending boundary snap right away."""
        if self._snap_event is None:
            return
        self._snap_event.cancel()
        self._snap(0)

    def uncloak(self):
        if not self.cloaked:
            return
        self.cloaked = False
        if self.on_uncloak:
            self.on_uncloak()

    def _schedule_snap(self, index: int):
        self._snap_index = index
        self._snap_event = self._scheduler.schedule_once(self._snap, self.SCROLL_DURATION)

    def _snap(self, dt):
        index = self._snap_index
        self._snap_event = None
        self._snap_index = None
        logger.debug("Wheel snap to index %d", index)
        self.scroll_to(index, animate=False)
