"""
Input validation for secret keys and challenges.

Both checks are pure: they return ``None`` when the input is acceptable,
otherwise the reason it was rejected. Checks run in a fixed order
(emptiness, then length, then content) so a given input always reports
the same reason.
"""

from typing import Optional

from ..errors import KeyReason, ChallengeReason


# Input limits
MAX_KEY_LENGTH = 256
MAX_CHALLENGE_LENGTH = 64


def has_interior_nul(data: bytes) -> bool:
    """Return True if any byte of ``data`` is zero."""
    return 0 in data


def validate_key(key: bytes) -> Optional[KeyReason]:
    """
    Check a secret key.

    Args:
        key: Secret key bytes

    Returns:
        None if the key is valid, otherwise the ``KeyReason`` for rejecting it
    """
    if len(key) == 0:
        return KeyReason.ZERO_LENGTH
    if len(key) > MAX_KEY_LENGTH:
        return KeyReason.TOO_LONG
    if has_interior_nul(key):
        return KeyReason.INTERIOR_NUL
    return None


def validate_challenge(challenge: bytes) -> Optional[ChallengeReason]:
    """
    Check a server-issued challenge. An empty challenge is valid.

    Args:
        challenge: Challenge bytes

    Returns:
        None if the challenge is valid, otherwise the ``ChallengeReason``
    """
    if len(challenge) > MAX_CHALLENGE_LENGTH:
        return ChallengeReason.TOO_LONG
    if has_interior_nul(challenge):
        return ChallengeReason.INTERIOR_NUL
    return None
