"""
Secure/validate response generation.

The response to a lobby challenge is computed in four linear steps:

    validate -> schedule key -> mix challenge -> base64 encode

Nothing is shared between calls, so ``generate`` is safe to call from
any number of threads at once. Inputs are fully validated before the key
schedule starts; no partial output is ever produced.

Usage:
    >>> from gsvalidate import generate
    >>> str(generate(b"gamespy", b"ABCDEF"))
    'U5sLZqnk'
"""

import logging
from typing import Union

from cryptography.hazmat.primitives.constant_time import bytes_eq

from ..crypto.validate import validate_key, validate_challenge
from ..crypto.schedule import schedule_key
from ..crypto.mixer import mix_challenge
from ..crypto.encode import encode_state, ALPHABET, OUTPUT_CAPACITY
from ..errors import InvalidKey, InvalidChallenge, Error, ValidationError
from ..utils.memory import secure_zero


logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class Output:
    """
    The generated response to a secure/validate challenge.

    Holds the ASCII token in a fixed 88-byte buffer. Instances are
    immutable and compare by content.
    """

    __slots__ = ('_buffer', '_length')

    def __init__(self, token: bytes):
        """
        Wrap an encoded token.

        Args:
            token: Base64 symbols, a multiple of 4 long and at most 88 bytes

        Raises:
            ValueError: If the length is wrong or a byte is outside the alphabet
        """
        if len(token) > OUTPUT_CAPACITY:
            raise ValueError(f"Token cannot exceed {OUTPUT_CAPACITY} bytes")
        if len(token) % 4:
            raise ValueError("Token length must be a multiple of 4")
        if bytes(token).strip(ALPHABET):
            raise ValueError("Token must contain only base64 alphabet symbols")

        object.__setattr__(self, '_buffer', bytes(token).ljust(OUTPUT_CAPACITY, b'\x00'))
        object.__setattr__(self, '_length', len(token))

    @classmethod
    def generate(cls, secret_key: BytesLike, challenge: BytesLike) -> 'Output':
        """Generate a response; see ``gsvalidate.generate``."""
        return generate(secret_key, challenge)

    def as_bytes(self) -> bytes:
        """Get the token as ASCII bytes."""
        return self._buffer[:self._length]

    def as_str(self) -> str:
        """Get the token as a string."""
        return self.as_bytes().decode('ascii')

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __str__(self) -> str:
        return self.as_str()

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other) -> bool:
        if not isinstance(other, Output):
            return NotImplemented
        return self.as_bytes() == other.as_bytes()

    def __hash__(self) -> int:
        return hash(self.as_bytes())

    def __repr__(self) -> str:
        return f"Output({self.as_str()!r})"

    def __setattr__(self, name, value):
        raise AttributeError("Output is immutable")

    def __delattr__(self, name):
        raise AttributeError("Output is immutable")


def _to_bytes(value: BytesLike, name: str) -> bytes:
    """Copy a bytes-like argument, rejecting text."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes-like, not {type(value).__name__}")


def check_inputs(secret_key: bytes, challenge: bytes) -> Union[Error, None]:
    """
    Validate a key and challenge, key first.

    Returns:
        None if both are valid, otherwise the ``InvalidKey`` or
        ``InvalidChallenge`` value for the first failure
    """
    key_reason = validate_key(secret_key)
    if key_reason is not None:
        return InvalidKey(key_reason)

    challenge_reason = validate_challenge(challenge)
    if challenge_reason is not None:
        return InvalidChallenge(challenge_reason)

    return None


def generate(secret_key: BytesLike, challenge: BytesLike) -> Output:
    """
    Generate a secure/validate response from a secret key and challenge.

    Args:
        secret_key: Shared secret, 1-256 bytes with no zero byte
        challenge: Server-issued challenge, 0-64 bytes with no zero byte

    Returns:
        Output holding 4 * ceil(len(challenge) / 3) base64 symbols

    Raises:
        ValidationError: If the key or challenge is invalid; ``error``
            identifies which one and ``reason`` says why
        TypeError: If either argument is not bytes-like
    """
    key = _to_bytes(secret_key, 'secret_key')
    challenge = _to_bytes(challenge, 'challenge')

    error = check_inputs(key, challenge)
    if error is not None:
        logger.debug(f"Rejected input: {error} ({error.reason.name})")
        raise ValidationError(error)

    table = schedule_key(key)
    try:
        state = mix_challenge(table, challenge)
    finally:
        secure_zero(table)

    token = encode_state(state)
    secure_zero(state.buffer)

    return Output(token)


def try_generate(secret_key: BytesLike, challenge: BytesLike) -> Union[Output, Error]:
    """
    Like ``generate`` but returns the error value instead of raising.

    Returns:
        Output on success, otherwise ``InvalidKey`` or ``InvalidChallenge``
    """
    try:
        return generate(secret_key, challenge)
    except ValidationError as e:
        return e.error


def verify_response(secret_key: BytesLike, challenge: BytesLike,
                    response: Union[str, BytesLike]) -> bool:
    """
    Check a client's response against the expected token.

    The comparison runs in constant time. A response that is not ASCII
    simply fails to match.

    Args:
        secret_key: Shared secret the client should hold
        challenge: Challenge that was issued to the client
        response: Token returned by the client

    Returns:
        True if the response matches

    Raises:
        ValidationError: If the key or challenge itself is invalid
    """
    expected = generate(secret_key, challenge).as_bytes()

    if isinstance(response, str):
        try:
            candidate = response.encode('ascii')
        except UnicodeEncodeError:
            logger.info("Response verification failed: non-ASCII response")
            return False
    else:
        candidate = _to_bytes(response, 'response')

    if bytes_eq(expected, candidate):
        return True

    logger.info("Response verification failed")
    return False
