"""
gsvalidate: responses to legacy game-lobby secure/validate challenges.

A lobby server sends a short challenge; the client proves it holds the
game's secret key by returning a token derived from both. The transform
is a legacy obfuscation scheme kept bit-exact for interoperability. It
offers no cryptographic strength.

Basic Usage:
    >>> from gsvalidate import generate, verify_response
    >>>
    >>> token = generate(b"gamespy", b"ABCDEF")
    >>> print(token)  # U5sLZqnk
    >>>
    >>> verify_response(b"gamespy", b"ABCDEF", "U5sLZqnk")
    True
"""

__version__ = "1.0.0"
__author__ = "gsvalidate developers"

# Response generation
from .protocol.response import Output, generate, try_generate, verify_response
from .protocol.challenge import ChallengeIssuer, generate_challenge

# Error model
from .errors import (
    KeyReason,
    ChallengeReason,
    InvalidKey,
    InvalidChallenge,
    Error,
    ValidationError,
)

# Validation
from .crypto.validate import validate_key, validate_challenge

# Configuration
from .config import GsValidateConfig, ConfigError


__all__ = [
    # Version info
    '__version__',

    # Response generation
    'Output',
    'generate',
    'try_generate',
    'verify_response',
    'ChallengeIssuer',
    'generate_challenge',

    # Errors
    'KeyReason',
    'ChallengeReason',
    'InvalidKey',
    'InvalidChallenge',
    'Error',
    'ValidationError',

    # Validation
    'validate_key',
    'validate_challenge',

    # Configuration
    'GsValidateConfig',
    'ConfigError',
]
