"""Tests for the wheel scroll model."""

import pytest
from combination_lock.wheel import Wheel


ALPHABET = list('ABCDE')


@pytest.fixture
def wheel(scheduler):
    w = Wheel(ALPHABET, 0, scheduler=scheduler)
    w.scrolls = []
    w.on_scroll = lambda index, animate: w.scrolls.append((index, animate))
    return w


class TestWheelLayout:
    """Tests for the padded item list."""

    def test_items_have_boundary_copies(self, wheel):
        assert wheel.items == ['E', 'A', 'B', 'C', 'D', 'E', 'A']

    def test_initial_index_offset(self, scheduler):
        assert Wheel(ALPHABET, 3, scheduler=scheduler).index == 4

    def test_starts_cloaked(self, wheel):
        assert wheel.cloaked is True

    def test_uncloak_once(self, wheel):
        calls = []
        wheel.on_uncloak = lambda: calls.append(True)
        wheel.uncloak()
        wheel.uncloak()
        assert wheel.cloaked is False
        assert calls == [True]


class TestWheelSetPosition:
    """Tests for set_position()."""

    @pytest.mark.parametrize('position', range(len(ALPHABET)))
    def test_displayed_symbol_matches(self, wheel, elapse, position):
        wheel.set_position(position)
        assert wheel.get_position() == position
        assert wheel.displayed_symbol == ALPHABET[position]
        elapse(1)
        assert wheel.displayed_symbol == ALPHABET[position]

    def test_ordinary_move_animates_directly(self, wheel):
        wheel.set_position(1)
        assert wheel.scrolls == [(2, True)]
        assert not wheel.is_snapping

    def test_same_position_is_noop(self, wheel):
        wheel.set_position(2)
        wheel.set_position(2)
        assert wheel.scrolls == [(3, True)]

    def test_wrap_backwards_uses_top_copy(self, wheel, elapse):
        """0 -> last scrolls onto the copy above the first item, then snaps."""
        wheel.set_position(4)
        assert wheel.scrolls == [(0, True)]
        assert wheel.index == 0
        assert wheel.is_snapping

        elapse(Wheel.SCROLL_DURATION)
        assert wheel.scrolls[-1] == (5, False)
        assert wheel.index == 5
        assert not wheel.is_snapping

    def test_wrap_forwards_uses_bottom_copy(self, scheduler, elapse):
        wheel = Wheel(ALPHABET, 4, scheduler=scheduler)
        scrolls = []
        wheel.on_scroll = lambda index, animate: scrolls.append((index, animate))

        wheel.set_position(0)
        assert scrolls == [(6, True)]
        elapse(Wheel.SCROLL_DURATION)
        assert scrolls[-1] == (1, False)
        assert wheel.index == 1

    def test_snap_not_early(self, wheel, elapse):
        wheel.set_position(4)
        elapse(Wheel.SCROLL_DURATION / 2)
        assert wheel.index == 0

    def test_new_request_supersedes_pending_snap(self, wheel, elapse, scheduler):
        """A stale snap must not override a newer position."""
        wheel.set_position(4)  # wrap, snap pending
        wheel.set_position(3)
        assert wheel.index == 4
        assert wheel.scrolls == [(0, True), (5, False), (4, True)]

        elapse(1)
        assert wheel.index == 4
        assert wheel.get_position() == 3
        assert scheduler.pending == []

    def test_wrap_back_and_forth_during_snap(self, wheel, elapse):
        wheel.set_position(4)
        wheel.set_position(0)
        # Settled on the real last item first, then wrapped forward
        assert wheel.index == 6
        elapse(1)
        assert wheel.index == 1
        assert wheel.displayed_symbol == 'A'

    def test_cyclic_closure(self, wheel, elapse):
        """Stepping through the whole alphabet returns to the start."""
        start = 2
        wheel.set_position(start)
        position = start
        for _ in range(len(ALPHABET)):
            position = (position + 1) % len(ALPHABET)
            wheel.set_position(position)
            assert wheel.displayed_symbol == ALPHABET[position]
            elapse(Wheel.SCROLL_DURATION)
        assert wheel.get_position() == start
        assert wheel.index == start + 1

    def test_refresh_reapplies_without_animation(self, wheel):
        wheel.set_position(2)
        wheel.refresh()
        assert wheel.scrolls[-1] == (3, False)
