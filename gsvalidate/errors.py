"""
Error model for secure/validate response generation.

Invalid input is described by a small tagged union: the outer arm says
which input was rejected (``InvalidKey`` or ``InvalidChallenge``) and the
inner ``reason`` says why. The union values are plain data; callers that
prefer exceptions get them wrapped in ``ValidationError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class KeyReason(Enum):
    """Reasons a secret key can be rejected."""
    INTERIOR_NUL = "secret key contains one or more interior NUL bytes"
    ZERO_LENGTH = "secret key is empty"
    TOO_LONG = "secret key is longer than 256 bytes"

    def __str__(self) -> str:
        return self.value


class ChallengeReason(Enum):
    """Reasons a challenge can be rejected."""
    INTERIOR_NUL = "challenge contains one or more interior NUL bytes"
    TOO_LONG = "challenge is longer than 64 bytes"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InvalidKey:
    """The provided secret key is invalid."""
    reason: KeyReason

    def __str__(self) -> str:
        return "invalid secret key"


@dataclass(frozen=True)
class InvalidChallenge:
    """The provided challenge is invalid."""
    reason: ChallengeReason

    def __str__(self) -> str:
        return "invalid challenge"


Error = Union[InvalidKey, InvalidChallenge]


class ValidationError(ValueError):
    """
    Raised when a secret key or challenge fails validation.

    Attributes:
        error: The ``InvalidKey`` or ``InvalidChallenge`` value describing
            the failure
    """

    def __init__(self, error: Error):
        self.error = error
        super().__init__(f"{error}: {error.reason}")

    @property
    def reason(self) -> Union[KeyReason, ChallengeReason]:
        """The specific reason the input was rejected."""
        return self.error.reason

    @property
    def is_key_error(self) -> bool:
        return isinstance(self.error, InvalidKey)

    @property
    def is_challenge_error(self) -> bool:
        return isinstance(self.error, InvalidChallenge)
