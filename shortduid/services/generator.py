"""
Short DUID Generator Module

Distributed unique ID generation for entities partitioned across shards. Every
instance owns a shard identity, an epoch origin and a salt, and produces IDs
that are time-ordered within the instance and distinct across shards without
any coordination.

Generation Flow:
    caller asks for N IDs
        → SequenceAllocator issues N (virtual_time, sequence) slots, forcing
          virtual time forward whenever a tick's 8192 sequence numbers run out
        → composer packs each slot with the shard ID into a 64-bit integer
        → ShortEncoder optionally renders each integer as a salted base62 string

Key Features:
    - **Monotonic**: integer IDs from one instance strictly increase, even when
      the clock (real or drifted) moves backwards
    - **Shard-aware**: 10-bit shard identity embedded in every ID
    - **Exact**: IDs are Python ints, never floats
    - **Thread-safe**: one lock guards each issuing call

Input Normalisation:
    - shard_id keeps its low 10 bits only (1024 → 0)
    - an epoch_start in the future falls back to 0, the Unix epoch

Batch Size:
    Batches are capped by the 8192-slot tick capacity: ``n`` is taken modulo
    8192 and a non-zero multiple of 8192 yields 8192 IDs. See
    ``shortduid.utils.sequence.effective_batch_size``.
"""

import logging
import threading
from typing import TYPE_CHECKING

from shortduid.utils.clock import ClockController, wall_clock_ms
from shortduid.utils.composer import MAX_SHARD_ID, compose
from shortduid.utils.sequence import SequenceAllocator
from shortduid.utils.short_encoder import ShortEncoder

if TYPE_CHECKING:
    from shortduid.core.config import Settings

logger = logging.getLogger("shortduid.generator")


class ShortDUID:
    """Thread-safe generator of integer and short-string DUIDs.

    Attributes:
        clock: Clock controller holding this instance's drift.
        allocator: Virtual-time and sequence state machine.
        encoder: Salt-keyed short string encoder.
    """

    def __init__(self, shard_id: int, salt: str, epoch_start: int, clock_source=wall_clock_ms):
        """Initializes a new generator instance.

        Args:
            shard_id: Shard identity, truncated to its low 10 bits.
            salt: Key for the short encoder.
            epoch_start: Custom epoch in milliseconds, must not lie in the future.
            clock_source: Callable returning wall-clock milliseconds.
        """
        masked_shard_id = shard_id & MAX_SHARD_ID
        if masked_shard_id != shard_id:
            logger.warning(
                "Shard ID %s does not fit in 10 bits, using %s", shard_id, masked_shard_id
            )

        if epoch_start > clock_source():
            logger.warning("Epoch start %s lies in the future, using 0", epoch_start)
            epoch_start = 0

        self._shard_id = masked_shard_id
        self._salt = salt
        self._epoch_start = epoch_start

        self.clock = ClockController(clock_source)
        self.allocator = SequenceAllocator(self.clock, epoch_start)
        self.encoder = ShortEncoder(salt)
        self.lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ShortDUID":
        """Builds a generator from application settings."""
        return cls(settings.SHARD_ID, settings.SALT, settings.EPOCH)

    def get_epoch_start(self) -> int:
        return self._epoch_start

    def get_salt(self) -> str:
        return self._salt

    def get_shard_id(self) -> int:
        return self._shard_id

    def get_current_time_ms(self) -> int:
        """Returns the wall clock in milliseconds with drift applied."""
        return self.clock.current_time_ms()

    def drift_time(self, delta_ms: int) -> int:
        """Sets the clock drift in milliseconds and returns it."""
        return self.clock.drift_time(delta_ms)

    def get_duid_int(self, count: int) -> list[int]:
        """Generates a batch of integer DUIDs.

        Args:
            count: Requested batch size.

        Returns:
            Strictly increasing integer IDs.

        Raises:
            InvalidBatchSizeError: If ``count`` is negative or not an integer.
            IdentifierOverflowError: If virtual time no longer fits in 41 bits.
        """
        with self.lock:
            slots = self.allocator.allocate(count)
            return [
                compose(slot.virtual_time, self._shard_id, slot.sequence)
                for slot in slots
            ]

    def get_duid(self, count: int) -> list[str]:
        """Generates a batch of short-encoded DUIDs, in issuance order."""
        return [self.encoder.encode(duid) for duid in self.get_duid_int(count)]


init = ShortDUID
