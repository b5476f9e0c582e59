"""
Challenge-driven obfuscation pass.

Walks the challenge against the key-scheduled permutation table, swapping
entries as it goes and XORing each challenge byte with a table lookup.
This is NOT the textbook stream-cipher output step: the first accumulator
is driven by the challenge byte plus one, and that offset must stay for
peers to agree on the result.
"""

from .schedule import TABLE_SIZE
from .validate import MAX_CHALLENGE_LENGTH


# Two spare zero bytes let the encoder read whole 3-byte groups
STATE_CAPACITY = MAX_CHALLENGE_LENGTH + 2


class RawState:
    """
    Mixer output: a logical byte sequence backed by a larger zeroed buffer.

    Bytes past ``len(state)`` are always zero, so a trailing partial group
    can be read as full 3-byte groups without any padding logic.
    """

    __slots__ = ('buffer', 'length')

    def __init__(self, length: int):
        if not 0 <= length <= MAX_CHALLENGE_LENGTH:
            raise ValueError(f"State length must be 0-{MAX_CHALLENGE_LENGTH}")
        self.buffer = bytearray(STATE_CAPACITY)
        self.length = length

    def __len__(self) -> int:
        return self.length

    def group_count(self) -> int:
        """Number of 3-byte groups covering the logical bytes."""
        return -(-self.length // 3)

    def groups(self) -> memoryview:
        """View of the buffer covering every group, trailing zeros included."""
        return memoryview(self.buffer)[:self.group_count() * 3]

    def data(self) -> bytes:
        """The logical bytes only."""
        return bytes(self.buffer[:self.length])


def mix_challenge(table: bytearray, challenge: bytes) -> RawState:
    """
    Run the obfuscation pass over a (validated) challenge.

    The table is mutated in place and should not be reused afterwards.

    Args:
        table: 256-byte permutation from ``schedule_key``
        challenge: Challenge bytes, 0-64 bytes with no zero byte

    Returns:
        RawState whose logical length equals the challenge length
    """
    if len(table) != TABLE_SIZE:
        raise ValueError(f"Permutation table must be {TABLE_SIZE} bytes")

    state = RawState(len(challenge))
    x = 0
    y = 0

    for i, c in enumerate(challenge):
        x = (c + x + 1) & 0xFF
        y = (table[x] + y) & 0xFF
        table[x], table[y] = table[y], table[x]
        j = (table[x] + table[y]) & 0xFF
        state.buffer[i] = c ^ table[j]

    return state
