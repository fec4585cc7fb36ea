"""Unit tests for FireFront."""

from wildfire_ca.front import FireFront


class TestFireFront:
    """Test cases for FireFront class."""

    def test_starts_empty(self):
        front = FireFront()
        assert front.size() == 0
        assert not front

    def test_ignite_is_idempotent(self):
        """Test that igniting twice keeps one entry."""
        front = FireFront()
        front.ignite((1, 2))
        front.ignite((1, 2))
        assert front.size() == 1
        assert (1, 2) in front

    def test_membership_by_value(self):
        """Test that equal coordinates built separately match."""
        front = FireFront()
        front.ignite([3, 4])
        assert (3, 4) in front
        front.extinguish(tuple([3, 4]))
        assert front.size() == 0

    def test_extinguish_absent_is_noop(self):
        front = FireFront()
        front.ignite((0, 0))
        front.extinguish((5, 5))
        assert front.snapshot() == [(0, 0)]

    def test_snapshot_is_decoupled(self):
        """Test that later mutations do not change an earlier snapshot."""
        front = FireFront()
        front.ignite((0, 0))
        snap = front.snapshot()
        front.ignite((0, 1))
        front.extinguish((0, 0))
        assert snap == [(0, 0)]
        assert front.snapshot() == [(0, 1)]

    def test_insertion_order(self):
        """Test that iteration follows insertion order."""
        front = FireFront()
        for pos in [(2, 2), (0, 1), (1, 0)]:
            front.ignite(pos)
        assert list(front) == [(2, 2), (0, 1), (1, 0)]

    def test_clear(self):
        front = FireFront()
        front.ignite((0, 0))
        front.clear()
        assert len(front) == 0
