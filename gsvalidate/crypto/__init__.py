"""
Primitives for the secure/validate transform.

- Input validation
- Key scheduling (256-byte permutation)
- Challenge obfuscation pass
- Padding-free base64 rendering
"""

from .validate import validate_key, validate_challenge, MAX_KEY_LENGTH, MAX_CHALLENGE_LENGTH
from .schedule import schedule_key, TABLE_SIZE
from .mixer import RawState, mix_challenge
from .encode import encode_state, encoded_length, ALPHABET, OUTPUT_CAPACITY

__all__ = [
    'validate_key',
    'validate_challenge',
    'schedule_key',
    'mix_challenge',
    'encode_state',
    'encoded_length',
    'RawState',
    'ALPHABET',
    'MAX_KEY_LENGTH',
    'MAX_CHALLENGE_LENGTH',
    'OUTPUT_CAPACITY',
    'TABLE_SIZE',
]
