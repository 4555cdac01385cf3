"""
DUID Composer Module

Packs a virtual-time delta, a shard ID and a sequence number into one unsigned
64-bit integer:

    |         41 bits          |  10 bits  |  13 bits  |
    |   virtual time delta     | shard_id  | sequence  |
    | ms since custom epoch    |  0-1023   |  0-8191   |

    - Virtual time: 41 bits = ~69 years of milliseconds from the custom epoch
    - Shard ID: 10 bits = 1024 shards
    - Sequence: 13 bits = 8192 IDs per virtual millisecond per shard

Python integers are arbitrary precision, so composed values are exact. Fields
that do not fit their width raise ``IdentifierOverflowError`` instead of
wrapping into another field.
"""

from typing import NamedTuple

from shortduid.core.exceptions import IdentifierOverflowError
from shortduid.utils.sequence import SEQUENCE_BITS

ID_BITS = 64
SHARD_ID_BITS = 10
TIME_BITS = ID_BITS - SHARD_ID_BITS - SEQUENCE_BITS
MAX_SHARD_ID = (1 << SHARD_ID_BITS) - 1
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
MAX_TIME_DELTA = (1 << TIME_BITS) - 1
SHARD_ID_SHIFT = SEQUENCE_BITS
TIME_SHIFT = SHARD_ID_BITS + SEQUENCE_BITS


class DUIDParts(NamedTuple):
    virtual_time: int
    shard_id: int
    sequence: int


def _check_field(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise IdentifierOverflowError(
            f"{name} {value} does not fit in the ID layout (0-{maximum})"
        )


def compose(virtual_time: int, shard_id: int, sequence: int) -> int:
    """Composes an ID from its three fields.

    Args:
        virtual_time: Milliseconds since the generator epoch.
        shard_id: Shard identity (0-1023).
        sequence: Sequence number within the virtual millisecond (0-8191).

    Returns:
        The composed unsigned integer.

    Raises:
        IdentifierOverflowError: If any field falls outside its bit width.
    """
    _check_field("virtual time delta", virtual_time, MAX_TIME_DELTA)
    _check_field("shard id", shard_id, MAX_SHARD_ID)
    _check_field("sequence", sequence, MAX_SEQUENCE)

    return (
        (virtual_time << TIME_SHIFT)
        | (shard_id << SHARD_ID_SHIFT)
        | sequence
    )


def decompose(duid: int) -> DUIDParts:
    """Splits a composed ID back into its fields."""
    if not 0 <= duid < (1 << ID_BITS):
        raise IdentifierOverflowError(f"{duid} is not a {ID_BITS}-bit DUID")

    return DUIDParts(
        duid >> TIME_SHIFT,
        (duid >> SHARD_ID_SHIFT) & MAX_SHARD_ID,
        duid & MAX_SEQUENCE,
    )
