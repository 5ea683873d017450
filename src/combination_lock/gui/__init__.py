"""
Combination Lock GUI - Kivy front end

Install dependencies:
    pip install .[gui]

Run:
    python -m combination_lock.gui
"""

from .app import CombinationLockApp

__all__ = ['CombinationLockApp']
