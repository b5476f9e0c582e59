"""
Correctness Tests for gsvalidate.

Tests input validation order, the key schedule, the mixing pass, the
encoder, and end-to-end responses against known values.
"""

import base64
import math

import pytest

from gsvalidate import (
    generate,
    try_generate,
    Output,
    ValidationError,
    InvalidKey,
    InvalidChallenge,
    Error,
    KeyReason,
    ChallengeReason,
)
from gsvalidate.crypto.validate import (
    validate_key,
    validate_challenge,
    has_interior_nul,
    MAX_KEY_LENGTH,
    MAX_CHALLENGE_LENGTH,
)
from gsvalidate.crypto.schedule import schedule_key, TABLE_SIZE
from gsvalidate.crypto.mixer import RawState, mix_challenge, STATE_CAPACITY
from gsvalidate.crypto.encode import encode_state, encoded_length, ALPHABET, OUTPUT_CAPACITY


KNOWN_RESPONSES = [
    (b"gamespy", b"ABCDEF", "U5sLZqnk"),
    (b"Xn221z", b"IBOMUE", "8QEKlI4V"),
    (b"HA6zkS", b"x", "lwAA"),
    (b"HA6zkS", b"xy", "l7YA"),
    (b"secret", b"1234567", "aqYwvF6GnQAA"),
    (b"\x7f" * 256, b"abc", "6xqY"),
    (b"k", b"A" * 64,
     "VLg0mwWL9yCropScvaBiNS+H2CO+YQwEwBm53pBZdq5S9CPQuOm1uDa8jgp/"
     "TkxC08cKTZ5AeFlG9WDXLhXbagAA"),
]


class TestValidation:
    """Test key and challenge validation."""

    def test_valid_inputs(self):
        """Test that well-formed inputs pass."""
        assert validate_key(b"k") is None
        assert validate_key(b"\xff" * MAX_KEY_LENGTH) is None
        assert validate_challenge(b"") is None
        assert validate_challenge(b"A" * MAX_CHALLENGE_LENGTH) is None

    def test_empty_key(self):
        assert validate_key(b"") is KeyReason.ZERO_LENGTH

    def test_key_too_long(self):
        assert validate_key(b"\x01" * 257) is KeyReason.TOO_LONG

    def test_key_interior_nul(self):
        assert validate_key(b"ab\x00cd") is KeyReason.INTERIOR_NUL
        assert validate_key(b"\x00") is KeyReason.INTERIOR_NUL

    def test_key_length_checked_before_content(self):
        """Test that an overlong key with a NUL reports TooLong."""
        assert validate_key(b"\x00" * 300) is KeyReason.TOO_LONG

    def test_challenge_too_long(self):
        assert validate_challenge(b"A" * 65) is ChallengeReason.TOO_LONG
        assert validate_challenge(b"\x00" * 65) is ChallengeReason.TOO_LONG

    def test_challenge_interior_nul(self):
        assert validate_challenge(b"ABCDE\x00GHIJ") is ChallengeReason.INTERIOR_NUL

    def test_validation_is_idempotent(self):
        """Test that validating twice gives the same verdict."""
        for key in [b"", b"abc", b"a\x00b", b"x" * 257]:
            assert validate_key(key) == validate_key(key)
        for challenge in [b"", b"abc", b"a\x00b", b"x" * 65]:
            assert validate_challenge(challenge) == validate_challenge(challenge)

    def test_has_interior_nul(self):
        assert has_interior_nul(b"\x00")
        assert has_interior_nul(b"abc\x00")
        assert not has_interior_nul(b"")
        assert not has_interior_nul(b"abc")


class TestGenerateErrors:
    """Test the errors raised by generate."""

    @pytest.mark.parametrize("key, challenge, expected", [
        (b"", b"", InvalidKey(KeyReason.ZERO_LENGTH)),
        (b"\x01" * 257, b"", InvalidKey(KeyReason.TOO_LONG)),
        (b"ab\x00cd", b"", InvalidKey(KeyReason.INTERIOR_NUL)),
        (b"key", b"A" * 65, InvalidChallenge(ChallengeReason.TOO_LONG)),
        (b"key", b"ABCD\x00FGHIJ", InvalidChallenge(ChallengeReason.INTERIOR_NUL)),
    ])
    def test_error_values(self, key, challenge, expected):
        """Test that each invalid input maps to its error."""
        with pytest.raises(ValidationError) as exc_info:
            generate(key, challenge)

        assert exc_info.value.error == expected
        assert exc_info.value.reason is expected.reason

    def test_key_checked_before_challenge(self):
        """Test that a bad key wins over a bad challenge."""
        with pytest.raises(ValidationError) as exc_info:
            generate(b"", b"A" * 100)

        assert exc_info.value.is_key_error
        assert not exc_info.value.is_challenge_error
        assert exc_info.value.reason is KeyReason.ZERO_LENGTH

    def test_error_messages(self):
        with pytest.raises(ValidationError) as exc_info:
            generate(b"", b"")
        assert str(exc_info.value) == "invalid secret key: secret key is empty"

        with pytest.raises(ValidationError) as exc_info:
            generate(b"key", b"A" * 65)
        assert str(exc_info.value) == "invalid challenge: challenge is longer than 64 bytes"

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate(b"", b"")

    def test_text_input_rejected(self):
        """Test that str arguments are refused rather than encoded."""
        with pytest.raises(TypeError):
            generate("gamespy", b"ABCDEF")
        with pytest.raises(TypeError):
            generate(b"gamespy", "ABCDEF")

    def test_try_generate_returns_error_value(self):
        assert try_generate(b"", b"") == InvalidKey(KeyReason.ZERO_LENGTH)
        assert try_generate(b"k", b"\x00") == InvalidChallenge(ChallengeReason.INTERIOR_NUL)

    def test_error_union_exported(self):
        result = try_generate(b"gamespy", b"A" * 65)
        assert isinstance(result, Error.__args__)
        assert result == InvalidChallenge(ChallengeReason.TOO_LONG)

    def test_try_generate_returns_output(self):
        result = try_generate(b"gamespy", b"ABCDEF")
        assert isinstance(result, Output)
        assert str(result) == "U5sLZqnk"


class TestKeySchedule:
    """Test the key scheduling pass."""

    def test_table_is_permutation(self):
        for key in [b"\x01", b"gamespy", bytes(range(1, 256)), b"\xff" * 256]:
            table = schedule_key(key)
            assert len(table) == TABLE_SIZE
            assert sorted(table) == list(range(256))

    def test_known_table_prefix(self):
        table = schedule_key(b"gamespy")
        assert list(table[:8]) == [112, 124, 56, 160, 23, 76, 55, 121]

    def test_different_keys_different_tables(self):
        assert schedule_key(b"abc") != schedule_key(b"abd")

    def test_returns_fresh_table(self):
        """Test that each call builds its own table."""
        first = schedule_key(b"gamespy")
        second = schedule_key(b"gamespy")
        assert first == second
        assert first is not second


class TestMixer:
    """Test the challenge mixing pass."""

    def test_known_state(self):
        table = schedule_key(b"gamespy")
        state = mix_challenge(table, b"ABCDEF")
        assert state.data() == bytes.fromhex("539b0b66a9e4")

    def test_state_length_matches_challenge(self):
        for n in range(0, MAX_CHALLENGE_LENGTH + 1):
            state = mix_challenge(schedule_key(b"key"), b"Q" * n)
            assert len(state) == n

    def test_spare_bytes_are_zero(self):
        """Test that bytes past the logical end stay zero."""
        for n in [1, 2, 4, 5, 63, 64]:
            state = mix_challenge(schedule_key(b"key"), b"Z" * n)
            assert len(state.buffer) == STATE_CAPACITY
            assert all(b == 0 for b in state.buffer[n:])

    def test_table_remains_permutation(self):
        table = schedule_key(b"gamespy")
        mix_challenge(table, b"A" * 64)
        assert sorted(table) == list(range(256))

    def test_table_is_mutated(self):
        table = schedule_key(b"gamespy")
        before = bytes(table)
        mix_challenge(table, b"ABCDEF")
        assert bytes(table) != before

    def test_empty_challenge(self):
        table = schedule_key(b"gamespy")
        before = bytes(table)
        state = mix_challenge(table, b"")
        assert len(state) == 0
        assert state.group_count() == 0
        assert bytes(table) == before

    def test_bad_table_size(self):
        with pytest.raises(ValueError):
            mix_challenge(bytearray(255), b"A")

    def test_raw_state_bounds(self):
        with pytest.raises(ValueError):
            RawState(MAX_CHALLENGE_LENGTH + 1)
        with pytest.raises(ValueError):
            RawState(-1)


class TestEncoder:
    """Test base64 rendering of the mixer state."""

    def test_full_groups(self):
        state = RawState(3)
        state.buffer[:3] = b"Man"
        assert encode_state(state) == b"TWFu"

    def test_partial_group_reads_zero_bytes(self):
        """Test that a trailing partial group encodes trailing zeros."""
        state = RawState(1)
        state.buffer[0] = ord("M")
        assert encode_state(state) == b"TQAA"

        state = RawState(2)
        state.buffer[:2] = b"Ma"
        assert encode_state(state) == b"TWEA"

    def test_matches_standard_base64_of_padded_groups(self):
        state = RawState(5)
        state.buffer[:5] = b"\xfb\xff\xfe\x01\x02"
        assert encode_state(state) == base64.b64encode(b"\xfb\xff\xfe\x01\x02\x00")

    def test_encoded_length(self):
        assert encoded_length(0) == 0
        assert encoded_length(1) == 4
        assert encoded_length(3) == 4
        assert encoded_length(4) == 8
        assert encoded_length(64) == OUTPUT_CAPACITY == 88

    def test_alphabet(self):
        assert len(ALPHABET) == 64
        assert len(set(ALPHABET)) == 64
        assert b"=" not in ALPHABET


class TestResponses:
    """Test end-to-end response generation."""

    @pytest.mark.parametrize("key, challenge, expected", KNOWN_RESPONSES)
    def test_known_responses(self, key, challenge, expected):
        assert generate(key, challenge).as_str() == expected

    def test_empty_challenge(self):
        """Test that an empty challenge yields an empty token."""
        output = generate(b"\x01", b"")
        assert output.as_bytes() == b""
        assert output.as_str() == ""
        assert len(output) == 0

    @pytest.mark.parametrize("n", range(0, MAX_CHALLENGE_LENGTH + 1))
    def test_output_length(self, n):
        output = generate(b"length-test", bytes((i % 255) + 1 for i in range(n)))
        assert len(output) == 4 * math.ceil(n / 3)
        assert len(output) % 4 == 0
        assert len(output) <= OUTPUT_CAPACITY

    def test_output_alphabet(self):
        for n in [1, 2, 3, 17, 64]:
            token = generate(bytes(range(1, 256)), bytes(range(255, 255 - n, -1))).as_bytes()
            assert all(c in ALPHABET for c in token)
            assert b"=" not in token

    def test_deterministic(self):
        first = generate(b"gamespy", b"ABCDEF")
        second = generate(b"gamespy", b"ABCDEF")
        assert first == second
        assert first.as_bytes() == second.as_bytes()

    def test_accepts_bytearray_and_memoryview(self):
        expected = generate(b"gamespy", b"ABCDEF")
        assert generate(bytearray(b"gamespy"), memoryview(b"ABCDEF")) == expected

    def test_inputs_not_modified(self):
        key = bytearray(b"gamespy")
        challenge = bytearray(b"ABCDEF")
        generate(key, challenge)
        assert key == bytearray(b"gamespy")
        assert challenge == bytearray(b"ABCDEF")


class TestOutput:
    """Test the Output value type."""

    def test_views(self):
        output = generate(b"gamespy", b"ABCDEF")
        assert bytes(output) == b"U5sLZqnk"
        assert str(output) == "U5sLZqnk"
        assert repr(output) == "Output('U5sLZqnk')"

    def test_classmethod_generate(self):
        assert Output.generate(b"gamespy", b"ABCDEF") == generate(b"gamespy", b"ABCDEF")

    def test_immutable(self):
        output = generate(b"gamespy", b"ABCDEF")
        with pytest.raises(AttributeError):
            output._length = 0
        with pytest.raises(AttributeError):
            output.extra = 1

    def test_hashable(self):
        a = generate(b"gamespy", b"ABCDEF")
        b = generate(b"gamespy", b"ABCDEF")
        assert len({a, b}) == 1

    def test_not_equal_to_bytes(self):
        assert generate(b"gamespy", b"ABCDEF") != b"U5sLZqnk"

    def test_rejects_bad_tokens(self):
        with pytest.raises(ValueError):
            Output(b"ABC")
        with pytest.raises(ValueError):
            Output(b"A" * 92)

    @pytest.mark.parametrize("token", [b"AB==", b"\xff\xff\xff\xff", b"\xff===", b"AA\x00A", b"AAA-"])
    def test_rejects_symbols_outside_alphabet(self, token):
        """Test that only base64 alphabet symbols are accepted."""
        with pytest.raises(ValueError):
            Output(token)

    def test_accepts_full_alphabet(self):
        output = Output(ALPHABET)
        assert output.as_bytes() == ALPHABET
        assert output.as_str() == ALPHABET.decode("ascii")
