"""
Base64 rendering of the mixer state.

Every 3-byte group of the state becomes 4 symbols from the standard
alphabet. The final group reads the state's zeroed spare bytes, so the
encoding never needs a padding symbol and never emits ``=``.
"""

import base64

from .mixer import RawState
from .validate import MAX_CHALLENGE_LENGTH


ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def encoded_length(challenge_length: int) -> int:
    """Token length for a challenge of the given length."""
    return 4 * -(-challenge_length // 3)


OUTPUT_CAPACITY = encoded_length(MAX_CHALLENGE_LENGTH)  # 88


def encode_state(state: RawState) -> bytes:
    """
    Encode every group of ``state`` as base64 without padding.

    Args:
        state: Mixer output

    Returns:
        ASCII bytes, 4 per group
    """
    return base64.b64encode(state.groups())
