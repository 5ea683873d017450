"""Tests for parameter sanitization and saved-state parsing."""

import json

import pytest
from combination_lock.config import (
    Behaviour,
    CombinationLockParams,
    PreviousState,
    DEFAULT_SOLUTION,
    DEFAULT_TITLE,
    VIEW_RESULTS,
    VIEW_TASK,
    load_params,
    load_state,
    save_state,
    sanitize_alphabet,
    sanitize_solution,
    split_graphemes,
)


class TestSplitGraphemes:
    """Tests for split_graphemes()."""

    def test_ascii(self):
        assert split_graphemes('H5P') == ['H', '5', 'P']

    def test_empty(self):
        assert split_graphemes('') == []
        assert split_graphemes(None) == []

    def test_combining_mark_stays_with_base(self):
        """e + combining acute accent is one symbol."""
        assert split_graphemes('e\u0301a') == ['e\u0301', 'a']

    def test_emoji_sequence(self):
        """Family emoji joined with ZWJ is one symbol."""
        family = '\U0001F468\u200d\U0001F469\u200d\U0001F467'
        assert split_graphemes(family + 'x') == [family, 'x']


class TestSanitizeSolution:
    """Tests for sanitize_solution()."""

    def test_valid(self):
        assert sanitize_solution('LOCK') == ['L', 'O', 'C', 'K']

    def test_empty_falls_back(self):
        assert sanitize_solution('') == list(DEFAULT_SOLUTION)

    def test_non_string_falls_back(self):
        assert sanitize_solution(42) == list(DEFAULT_SOLUTION)
        assert sanitize_solution(None) == list(DEFAULT_SOLUTION)


class TestSanitizeAlphabet:
    """Tests for sanitize_alphabet()."""

    def test_solution_symbols_added(self):
        assert sanitize_alphabet('ABC', ['X', 'A']) == ['A', 'B', 'C', 'X']

    def test_duplicates_removed_in_order(self):
        assert sanitize_alphabet('BAAB', ['C']) == ['B', 'A', 'C']

    def test_padded_to_three_symbols(self):
        """Fewer than three unique symbols are repeated until scrollable."""
        assert sanitize_alphabet('', ['A']) == ['A', 'A', 'A', 'A']
        assert sanitize_alphabet('B', ['A']) == ['B', 'A', 'B', 'A']

    def test_three_symbols_unchanged(self):
        assert sanitize_alphabet('', list('ABC')) == ['A', 'B', 'C']

    def test_non_string_alphabet_ignored(self):
        assert sanitize_alphabet(None, list('XYZ')) == ['X', 'Y', 'Z']


class TestBehaviour:
    """Tests for Behaviour parsing."""

    def test_defaults(self):
        b = Behaviour.from_dict(None)
        assert b.auto_check is True
        assert b.enable_retry is True
        assert b.enable_solutions_button is True
        assert b.max_attempts is None

    def test_camel_case_keys(self):
        b = Behaviour.from_dict({
            'autoCheck': False,
            'enableRetry': False,
            'enableSolutionsButton': False,
            'maxAttempts': 3,
        })
        assert b == Behaviour(False, False, False, 3)

    @pytest.mark.parametrize('value', [0, -2, 'three', 2.5, True])
    def test_invalid_max_attempts_unbounded(self, value):
        assert Behaviour.from_dict({'maxAttempts': value}).max_attempts is None

    def test_auto_check_forces_unbounded(self):
        """Every rotation is a check in auto mode, so attempts are never capped."""
        assert Behaviour(auto_check=True, max_attempts=3).effective_max_attempts is None
        assert Behaviour(auto_check=False, max_attempts=3).effective_max_attempts == 3

    def test_to_dict_round_trip(self):
        b = Behaviour(False, True, False, 5)
        assert Behaviour.from_dict(b.to_dict()) == b


class TestCombinationLockParams:
    """Tests for CombinationLockParams.from_dict()."""

    def test_empty_dict_uses_defaults(self):
        params = CombinationLockParams.from_dict({})
        assert params.solution_text == DEFAULT_SOLUTION
        assert params.title == DEFAULT_TITLE
        assert len(params.alphabet) >= 3

    def test_full_params(self):
        params = CombinationLockParams.from_dict({
            'solution': 'CAB',
            'alphabet': 'ABCDE',
            'behaviour': {'autoCheck': False, 'maxAttempts': 2},
            'l10n': {'check': 'Prüfen'},
            'title': 'Vault',
        })
        assert params.solution == ['C', 'A', 'B']
        assert params.alphabet == list('ABCDE')
        assert params.behaviour.max_attempts == 2
        assert params.l10n == {'check': 'Prüfen'}
        assert params.title == 'Vault'

    def test_invalid_solution_falls_back(self):
        params = CombinationLockParams.from_dict({'solution': ''})
        assert params.solution_text == DEFAULT_SOLUTION

    def test_invalid_text_overrides_dropped(self):
        params = CombinationLockParams.from_dict({'l10n': 'nope', 'a11y': ['x']})
        assert params.l10n == {}
        assert params.a11y == {}

    def test_direct_construction_builds_alphabet(self):
        params = CombinationLockParams(solution=['A'])
        assert params.alphabet == ['A', 'A', 'A', 'A']


class TestPreviousState:
    """Tests for PreviousState parsing."""

    def test_from_none(self):
        state = PreviousState.from_dict(None)
        assert state.view_state == VIEW_TASK
        assert state.positions is None
        assert state.attempts_left is None

    def test_full_state(self):
        state = PreviousState.from_dict({
            'attemptsLeft': 2,
            'wasAnswerGiven': True,
            'viewState': VIEW_RESULTS,
            'message': 'Lock open!',
            'lock': {'positions': [1, 2, 3]},
        })
        assert state.attempts_left == 2
        assert state.was_answer_given is True
        assert state.view_state == VIEW_RESULTS
        assert state.message == 'Lock open!'
        assert state.positions == [1, 2, 3]

    def test_unknown_view_state(self):
        assert PreviousState.from_dict({'viewState': 7}).view_state == VIEW_TASK
        assert PreviousState.from_dict({'viewState': 'results'}).view_state == VIEW_TASK

    def test_malformed_fields(self):
        state = PreviousState.from_dict({
            'attemptsLeft': 'two',
            'lock': {'positions': 'abc'},
            'message': 5,
        })
        assert state.attempts_left is None
        assert state.positions is None
        assert state.message == ''

    def test_to_dict_shape(self):
        state = PreviousState(attempts_left=1, positions=[0, 1]).to_dict()
        assert state == {
            'wasAnswerGiven': False,
            'attemptsLeft': 1,
            'viewState': VIEW_TASK,
            'message': '',
            'lock': {'positions': [0, 1]},
        }


class TestFiles:
    """Tests for JSON file helpers."""

    def test_load_params(self, tmp_path):
        path = tmp_path / 'task.json'
        path.write_text(json.dumps({'solution': 'ZZ', 'alphabet': 'XYZ'}), encoding='utf-8')
        params = load_params(path)
        assert params.solution == ['Z', 'Z']
        assert params.alphabet == ['X', 'Y', 'Z']

    def test_load_state_missing_file(self, tmp_path):
        assert load_state(tmp_path / 'missing.json') is None

    def test_save_and_load_state(self, tmp_path):
        path = tmp_path / 'state.json'
        state = PreviousState(attempts_left=2, positions=[4, 0]).to_dict()
        save_state(path, state)
        assert load_state(path) == state
