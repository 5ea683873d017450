"""Localized text lookup for visible and assistive strings."""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_L10N = {
    'check': 'Check',
    'submit': 'Submit',
    'showSolution': 'Show solution',
    'retry': 'Retry',
    'lockOpen': 'Lock open!',
    'lockDisabled': 'No more attempts. Lock disabled.',
    'attemptsLeft': 'Attempts left: @number',
    'correctCombination': 'This combination opens the lock.',
    'wrongCombination': 'This combination does not open the lock.',
    'noMessage': '...',
}

DEFAULT_A11Y = {
    'check': 'Check whether the combination opens the lock.',
    'submit': 'Check whether the combination opens the lock and submit attempt to server.',
    'showSolution': 'Show the solution. The correct symbols that will open the lock will be displayed.',
    'retry': 'Retry the task. Reset all lock segments and start the task over again.',
    'currentSymbol': 'Current symbol: @symbol',
    'currentSymbols': 'Current symbols: @symbols',
    'previousSymbol': 'Previous symbol',
    'nextSymbol': 'Next symbol',
    'correctCombination': 'This combination opens the lock. @combination.',
    'wrongCombination': 'Wrong combination',
    'disabled': 'disabled',
    'combinationLock': 'combination lock',
    'segment': 'Segment @number of @total',
}

_PLACEHOLDER = re.compile(r'@(\w+)')


class Dictionary:
    """Text store keyed by 'l10n.<key>' or 'a11y.<key>'.

    Host overrides are merged over the English defaults. Placeholders of
    the form @name are replaced by keyword arguments passed to get().
    """

    def __init__(self, l10n: Optional[dict] = None, a11y: Optional[dict] = None):
        self._texts = {
            'l10n': dict(DEFAULT_L10N),
            'a11y': dict(DEFAULT_A11Y),
        }
        self.fill(l10n=l10n, a11y=a11y)

    def fill(self, l10n: Optional[dict] = None, a11y: Optional[dict] = None):
        """Merge host-provided texts. Non-string values are ignored."""
        for namespace, texts in (('l10n', l10n), ('a11y', a11y)):
            for key, value in (texts or {}).items():
                if isinstance(value, str):
                    self._texts[namespace][key] = value

    def get(self, key: str, **replacements) -> str:
        namespace, _, name = key.partition('.')
        text = self._texts.get(namespace, {}).get(name)
        if text is None:
            logger.warning("No text for key %r", key)
            return ''

        if not replacements:
            return text

        def replace(match):
            value = replacements.get(match.group(1))
            return match.group(0) if value is None else str(value)

        return _PLACEHOLDER.sub(replace, text)
