"""
Message-level API for the secure/validate exchange.

- Response generation and verification
- Challenge issuing
"""

from .response import Output, generate, try_generate, verify_response
from .challenge import ChallengeIssuer, generate_challenge

__all__ = [
    'Output',
    'generate',
    'try_generate',
    'verify_response',
    'ChallengeIssuer',
    'generate_challenge',
]
