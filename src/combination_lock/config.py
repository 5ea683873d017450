"""Combination lock parameters and saved-state structures."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import regex

logger = logging.getLogger(__name__)

DEFAULT_SOLUTION = 'OPEN'
DEFAULT_TITLE = 'Combination Lock'
MIN_ALPHABET_SIZE = 3  # Wheel needs a symbol above and below the current one

# View states, kept as plain ints in snapshots
VIEW_TASK = 0
VIEW_RESULTS = 1
VIEW_SOLUTIONS = 2
VIEW_STATES = (VIEW_TASK, VIEW_RESULTS, VIEW_SOLUTIONS)

_GRAPHEME = regex.compile(r'\X')


def split_graphemes(text: Optional[str]) -> list[str]:
    """Split text into user-perceived characters (extended grapheme clusters)."""
    if not text:
        return []
    return _GRAPHEME.findall(text)


def sanitize_solution(solution: Optional[str]) -> list[str]:
    """Return solution symbols, falling back to DEFAULT_SOLUTION if empty."""
    symbols = split_graphemes(solution if isinstance(solution, str) else None)
    if not symbols:
        logger.warning("Empty or invalid solution %r, using %r", solution, DEFAULT_SOLUTION)
        symbols = split_graphemes(DEFAULT_SOLUTION)
    return symbols


def sanitize_alphabet(alphabet: Optional[str], solution: list[str]) -> list[str]:
    """Build the wheel alphabet from the configured symbols plus the solution.

    Symbols are unique in first-seen order. If fewer than MIN_ALPHABET_SIZE
    remain, the list is repeated until it is long enough to scroll.
    """
    raw = alphabet if isinstance(alphabet, str) else ''
    symbols = []
    for symbol in split_graphemes(raw) + list(solution):
        if symbol not in symbols:
            symbols.append(symbol)

    if not symbols:
        symbols = split_graphemes(DEFAULT_SOLUTION)

    while len(symbols) < MIN_ALPHABET_SIZE:
        symbols = symbols + symbols
    return symbols


def _parse_max_attempts(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        logger.warning("Ignoring invalid maxAttempts %r, attempts are unbounded", value)
        return None
    return value


@dataclass
class Behaviour:
    """Behaviour settings of the lock task."""
    auto_check: bool = True
    enable_retry: bool = True
    enable_solutions_button: bool = True
    max_attempts: Optional[int] = None  # None = unbounded

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Behaviour":
        data = data if isinstance(data, dict) else {}
        return cls(
            auto_check=bool(data.get('autoCheck', True)),
            enable_retry=bool(data.get('enableRetry', True)),
            enable_solutions_button=bool(data.get('enableSolutionsButton', True)),
            max_attempts=_parse_max_attempts(data.get('maxAttempts')),
        )

    @property
    def effective_max_attempts(self) -> Optional[int]:
        """Attempts cap in force. Auto-check always allows unlimited attempts."""
        if self.auto_check:
            return None
        return self.max_attempts

    def to_dict(self) -> dict:
        return {
            'autoCheck': self.auto_check,
            'enableRetry': self.enable_retry,
            'enableSolutionsButton': self.enable_solutions_button,
            'maxAttempts': self.max_attempts,
        }


@dataclass
class CombinationLockParams:
    """Sanitized task parameters."""
    solution: list[str] = field(default_factory=lambda: split_graphemes(DEFAULT_SOLUTION))
    alphabet: list[str] = field(default_factory=list)
    behaviour: Behaviour = field(default_factory=Behaviour)
    l10n: dict = field(default_factory=dict)
    a11y: dict = field(default_factory=dict)
    title: str = DEFAULT_TITLE

    def __post_init__(self):
        if not self.alphabet:
            self.alphabet = sanitize_alphabet('', self.solution)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "CombinationLockParams":
        """Build params from the host parameter shape.

        Expects {solution, alphabet, behaviour, l10n, a11y, title}; every
        field is optional.
        """
        data = data if isinstance(data, dict) else {}
        solution = sanitize_solution(data.get('solution', DEFAULT_SOLUTION))
        l10n = data.get('l10n')
        a11y = data.get('a11y')
        title = data.get('title')
        return cls(
            solution=solution,
            alphabet=sanitize_alphabet(data.get('alphabet'), solution),
            behaviour=Behaviour.from_dict(data.get('behaviour')),
            l10n=l10n if isinstance(l10n, dict) else {},
            a11y=a11y if isinstance(a11y, dict) else {},
            title=title if isinstance(title, str) and title else DEFAULT_TITLE,
        )

    @property
    def solution_text(self) -> str:
        return ''.join(self.solution)

    def __repr__(self):
        return (f"CombinationLockParams({self.solution_text!r}, "
                f"{len(self.alphabet)} symbols, {self.behaviour})")


@dataclass
class PreviousState:
    """Snapshot of a session, as persisted by the host."""
    attempts_left: Optional[int] = None
    was_answer_given: bool = False
    view_state: int = VIEW_TASK
    message: str = ''
    positions: Optional[list[int]] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PreviousState":
        """Parse a saved state, dropping fields that do not fit the shape."""
        if not isinstance(data, dict):
            return cls()

        attempts_left = data.get('attemptsLeft')
        if isinstance(attempts_left, bool) or not isinstance(attempts_left, int):
            attempts_left = None

        view_state = data.get('viewState', VIEW_TASK)
        if view_state not in VIEW_STATES or isinstance(view_state, bool):
            logger.warning("Unknown view state %r, restoring task view", view_state)
            view_state = VIEW_TASK

        message = data.get('message')
        lock = data.get('lock')
        positions = lock.get('positions') if isinstance(lock, dict) else None

        return cls(
            attempts_left=attempts_left,
            was_answer_given=bool(data.get('wasAnswerGiven', False)),
            view_state=view_state,
            message=message if isinstance(message, str) else '',
            positions=list(positions) if isinstance(positions, list) else None,
        )

    def to_dict(self) -> dict:
        state = {
            'wasAnswerGiven': self.was_answer_given,
            'attemptsLeft': self.attempts_left,
            'viewState': self.view_state,
            'message': self.message,
            'lock': {},
        }
        if self.positions is not None:
            state['lock']['positions'] = list(self.positions)
        return state


def load_params(path: Path) -> CombinationLockParams:
    """Read task parameters from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        return CombinationLockParams.from_dict(json.load(f))


def load_state(path: Path) -> Optional[dict]:
    """Read a saved state snapshot. Returns None if the file does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_state(path: Path, state: dict):
    """Write a state snapshot as JSON."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(state, f, indent=2, ensure_ascii=False)
