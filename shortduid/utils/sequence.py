"""
Sequence Allocator Module

Issues ``(virtual_time, sequence)`` slots for the DUID composer. Virtual time is
elapsed milliseconds since the generator epoch as seen by this instance, and it
never decreases, even when the clock controller reports an earlier time.

Each slot is produced by exactly one of three transitions:

    ADOPT      the clock moved past virtual time; adopt it, sequence = 0
    INCREMENT  same or earlier tick; sequence += 1 under the current tick
    ADVANCE    sequence space exhausted; virtual time += 1, sequence = 0

The pairs issued by one allocator are strictly increasing, which is what the
uniqueness of composed IDs rests on. A first reading from before the epoch raises
``IdentifierOverflowError`` and leaves the state untouched. The allocator holds no lock; callers that
share one across threads must serialize calls to ``next_slot``/``allocate``.
"""

import logging
from enum import Enum
from typing import NamedTuple

from shortduid.core.exceptions import IdentifierOverflowError, InvalidBatchSizeError
from shortduid.utils.clock import ClockController

logger = logging.getLogger("shortduid.sequence")

SEQUENCE_BITS = 13
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
BATCH_CAPACITY = MAX_SEQUENCE + 1


class Transition(str, Enum):
    ADOPT = "adopt"
    INCREMENT = "increment"
    ADVANCE = "advance"


class Slot(NamedTuple):
    virtual_time: int
    sequence: int
    transition: Transition


def effective_batch_size(count: int) -> int:
    """Maps a requested batch size onto the number of slots actually issued.

    Batches are capped by the per-tick sequence capacity: the request is taken
    modulo 8192, and a non-zero multiple of 8192 yields a full 8192.

    Args:
        count: Requested number of identifiers.

    Returns:
        The number of identifiers that will be issued.

    Raises:
        InvalidBatchSizeError: If ``count`` is negative or not an integer.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidBatchSizeError(f"Batch size must be an integer, got {count!r}")
    if count < 0:
        raise InvalidBatchSizeError(f"Batch size must be non-negative, got {count}")
    if count == 0:
        return 0
    return count % BATCH_CAPACITY or BATCH_CAPACITY


class SequenceAllocator:
    """Virtual-time state machine driving slot allocation.

    Attributes:
        last_virtual_time: Last issued virtual time, -1 until first use.
        sequence: Sequence number of the last issued slot (0-8191).
    """

    def __init__(self, clock: ClockController, epoch_start: int):
        self.clock = clock
        self.epoch_start = epoch_start
        self.last_virtual_time = -1
        self.sequence = 0
        self._regressed = False

    def _elapsed(self) -> int:
        return self.clock.current_time_ms() - self.epoch_start

    def _adopt(self, now: int) -> Slot:
        self.last_virtual_time = now
        self.sequence = 0
        self._regressed = False
        return Slot(now, 0, Transition.ADOPT)

    def _advance(self) -> Slot:
        self.last_virtual_time += 1
        self.sequence = 0
        logger.debug(
            "Sequence exhausted, forcing virtual time to %s", self.last_virtual_time
        )
        return Slot(self.last_virtual_time, 0, Transition.ADVANCE)

    def next_slot(self) -> Slot:
        """Issues the next ``(virtual_time, sequence)`` slot."""
        now = self._elapsed()

        if now > self.last_virtual_time:
            return self._adopt(now)

        if self.last_virtual_time < 0:
            raise IdentifierOverflowError(
                f"Clock reads {-now} ms before the epoch, no virtual time to hold"
            )

        if now < self.last_virtual_time and not self._regressed:
            logger.warning(
                "Clock behind virtual time by %s ms, holding virtual time at %s",
                self.last_virtual_time - now,
                self.last_virtual_time,
            )
            self._regressed = True

        if self.sequence < MAX_SEQUENCE:
            self.sequence += 1
            return Slot(self.last_virtual_time, self.sequence, Transition.INCREMENT)

        return self._advance()

    def allocate(self, count: int) -> list[Slot]:
        """Issues a batch of slots.

        Args:
            count: Requested batch size, see ``effective_batch_size``.

        Returns:
            The issued slots in increasing order.
        """
        return [self.next_slot() for _ in range(effective_batch_size(count))]
