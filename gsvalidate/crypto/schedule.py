"""
Key scheduling for the secure/validate transform.

Builds a 256-entry byte permutation from the secret key using the
classic stream-cipher key-setup pattern. All arithmetic wraps modulo 256.
"""

TABLE_SIZE = 256


def schedule_key(key: bytes) -> bytearray:
    """
    Build the permutation table for a (validated) secret key.

    Args:
        key: Secret key, 1-256 bytes with no zero byte

    Returns:
        A fresh 256-byte bytearray holding a permutation of 0..255
    """
    table = bytearray(range(TABLE_SIZE))
    key_length = len(key)
    x = 0

    for i in range(TABLE_SIZE):
        x = (key[i % key_length] + table[i] + x) & 0xFF
        table[i], table[x] = table[x], table[i]

    return table
