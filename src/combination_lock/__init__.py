"""Combination Lock - rotating symbol wheels that open on the right combination."""

__version__ = "0.1.0"

from .config import CombinationLockParams, Behaviour, PreviousState, split_graphemes
from .controller import AttemptController, Announcement, ViewState
from .lock import Lock
from .segment import Segment
from .wheel import Wheel
from .widget import CombinationLock
