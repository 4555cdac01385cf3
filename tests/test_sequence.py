"""Unit tests for the sequence allocator."""

import logging

import pytest

from shortduid.core.exceptions import IdentifierOverflowError, InvalidBatchSizeError
from shortduid.utils.clock import ClockController
from shortduid.utils.sequence import (
    BATCH_CAPACITY,
    MAX_SEQUENCE,
    SequenceAllocator,
    Slot,
    Transition,
    effective_batch_size,
)

EPOCH = 1000


@pytest.fixture
def allocator(fake_clock):
    fake_clock.now = EPOCH + 500
    return SequenceAllocator(ClockController(fake_clock), EPOCH)


class TestTransitions:
    """Tests for the three allocator transitions."""

    def test_first_slot_adopts_clock(self, allocator):
        """First use seeds virtual time from the clock."""
        assert allocator.next_slot() == Slot(500, 0, Transition.ADOPT)

    def test_same_tick_increments(self, allocator):
        """A second slot in the same millisecond bumps the sequence."""
        allocator.next_slot()
        assert allocator.next_slot() == Slot(500, 1, Transition.INCREMENT)

    def test_new_tick_resets_sequence(self, allocator, fake_clock):
        """Moving clock is adopted and sequence restarts at 0."""
        allocator.next_slot()
        allocator.next_slot()
        fake_clock.now += 3
        assert allocator.next_slot() == Slot(503, 0, Transition.ADOPT)

    def test_backward_clock_keeps_virtual_time(self, allocator):
        """An earlier reading never lowers virtual time."""
        allocator.next_slot()
        allocator.clock.drift_time(-200)
        slot = allocator.next_slot()
        assert slot == Slot(500, 1, Transition.INCREMENT)
        assert allocator.last_virtual_time == 500

    def test_exhaustion_forces_advance(self, allocator):
        """Sequence rollover moves virtual time ahead of the clock."""
        slots = [allocator.next_slot() for _ in range(BATCH_CAPACITY)]
        assert slots[-1] == Slot(500, MAX_SEQUENCE, Transition.INCREMENT)

        assert allocator.next_slot() == Slot(501, 0, Transition.ADVANCE)
        # Clock is still at 500, so the forced tick keeps filling
        assert allocator.next_slot() == Slot(501, 1, Transition.INCREMENT)

    def test_clock_catching_up_after_advance(self, allocator, fake_clock):
        """Once the clock passes forced virtual time it is adopted again."""
        for _ in range(BATCH_CAPACITY + 1):
            allocator.next_slot()
        fake_clock.now += 2
        assert allocator.next_slot() == Slot(502, 0, Transition.ADOPT)

    def test_slots_strictly_increase_under_drift(self, allocator):
        """Pairs increase whatever the drift does."""
        issued = []
        for drift in (0, -5000, 20, -1, -10000, 0):
            allocator.clock.drift_time(drift)
            issued.extend((s.virtual_time, s.sequence) for s in allocator.allocate(3000))

        assert all(a < b for a, b in zip(issued, issued[1:]))

    def test_backward_clock_warns_once(self, allocator, caplog):
        """A regression is logged once until the clock is adopted again."""
        allocator.next_slot()
        allocator.clock.drift_time(-50)
        with caplog.at_level(logging.WARNING, logger="shortduid.sequence"):
            allocator.allocate(10)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "50 ms" in warnings[0].getMessage()

    def test_clock_before_epoch_leaves_state_untouched(self, allocator):
        """A pre-epoch reading on first use raises without moving the state."""
        allocator.clock.drift_time(-10_000)
        with pytest.raises(IdentifierOverflowError):
            allocator.next_slot()
        assert (allocator.last_virtual_time, allocator.sequence) == (-1, 0)

        allocator.clock.drift_time(0)
        assert allocator.next_slot() == Slot(500, 0, Transition.ADOPT)


class TestBatchSize:
    """Tests for effective_batch_size."""

    @pytest.mark.parametrize(
        "requested,expected",
        [(0, 0), (1, 1), (10, 10), (8191, 8191), (8192, 8192), (8193, 1), (16384, 8192)],
    )
    def test_batch_size(self, requested, expected):
        """Batches are taken modulo the tick capacity."""
        assert effective_batch_size(requested) == expected

    def test_negative_batch_rejected(self):
        """Negative sizes raise InvalidBatchSizeError."""
        with pytest.raises(InvalidBatchSizeError):
            effective_batch_size(-1)

    @pytest.mark.parametrize("requested", [1.5, "10", True, None])
    def test_non_integer_batch_rejected(self, requested):
        """Non-integer sizes raise InvalidBatchSizeError."""
        with pytest.raises(InvalidBatchSizeError):
            effective_batch_size(requested)

    def test_invalid_batch_is_value_error(self):
        """InvalidBatchSizeError is a ValueError."""
        with pytest.raises(ValueError):
            effective_batch_size(-10)

    def test_allocate_zero(self, allocator):
        """Allocating zero slots leaves state untouched."""
        assert allocator.allocate(0) == []
        assert allocator.last_virtual_time == -1
