"""Keyboard intents understood by lock segments."""

from enum import Enum
from typing import Optional


class Action(Enum):
    NEXT = 'next'
    PREVIOUS = 'previous'
    FOCUS_LEFT = 'focus-left'
    FOCUS_RIGHT = 'focus-right'
    FOCUS_HOME = 'focus-home'
    FOCUS_END = 'focus-end'


# Handled by the lock, never by a segment itself
NAVIGATION_ACTIONS = frozenset({
    Action.FOCUS_LEFT, Action.FOCUS_RIGHT, Action.FOCUS_HOME, Action.FOCUS_END,
})

# Key names as reported by kivy.core.window.Keyboard.keycodes
KEY_ACTIONS = {
    'up': Action.NEXT,
    'down': Action.PREVIOUS,
    'left': Action.FOCUS_LEFT,
    'right': Action.FOCUS_RIGHT,
    'home': Action.FOCUS_HOME,
    'end': Action.FOCUS_END,
}


def action_for_key(name: Optional[str]) -> Optional[Action]:
    """Map a key name to an Action, or None if the key is not bound."""
    if not name:
        return None
    return KEY_ACTIONS.get(name.strip().lower())
