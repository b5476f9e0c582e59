"""
Challenge issuing for the server side of a secure/validate exchange.
"""

import logging
import secrets
import string

from ..crypto.validate import MAX_CHALLENGE_LENGTH


logger = logging.getLogger(__name__)

# Classic lobby challenges are six uppercase letters
DEFAULT_CHALLENGE_LENGTH = 6
DEFAULT_ALPHABET = string.ascii_uppercase


def check_alphabet(alphabet: str) -> bytes:
    """
    Validate a challenge alphabet and return it as bytes.

    Raises:
        ValueError: If the alphabet is empty, not ASCII, or contains NUL
    """
    if not alphabet:
        raise ValueError("Challenge alphabet must not be empty")
    try:
        encoded = alphabet.encode('ascii')
    except UnicodeEncodeError:
        raise ValueError("Challenge alphabet must be ASCII")
    if 0 in encoded:
        raise ValueError("Challenge alphabet must not contain NUL")
    return encoded


def check_length(length: int) -> int:
    """Validate a challenge length (1-64)."""
    if not isinstance(length, int) or isinstance(length, bool):
        raise ValueError("Challenge length must be an integer")
    if not 1 <= length <= MAX_CHALLENGE_LENGTH:
        raise ValueError(f"Challenge length must be 1-{MAX_CHALLENGE_LENGTH}")
    return length


def generate_challenge(length: int = DEFAULT_CHALLENGE_LENGTH,
                       alphabet: str = DEFAULT_ALPHABET) -> bytes:
    """
    Draw a random challenge that always passes validation.

    Args:
        length: Number of characters (1-64)
        alphabet: Characters to draw from

    Returns:
        Challenge bytes
    """
    symbols = check_alphabet(alphabet)
    check_length(length)

    challenge = bytes(secrets.choice(symbols) for _ in range(length))
    logger.debug(f"Issued {length}-byte challenge")
    return challenge


class ChallengeIssuer:
    """Issues challenges using a fixed length and alphabet."""

    def __init__(self, length: int = DEFAULT_CHALLENGE_LENGTH,
                 alphabet: str = DEFAULT_ALPHABET):
        self.length = check_length(length)
        check_alphabet(alphabet)
        self.alphabet = alphabet

    @classmethod
    def from_config(cls, config) -> 'ChallengeIssuer':
        """Create an issuer from a ``GsValidateConfig``."""
        return cls(config.challenge_length, config.challenge_alphabet)

    def issue(self) -> bytes:
        """Issue a fresh challenge."""
        return generate_challenge(self.length, self.alphabet)
