"""
Proquint Codec.

Bidirectional mapping between a 4-byte name id and its 11-character
pronounceable form (CVCVC-CVCVC), bit-exact with LibProquint.sol.

Each 16-bit half is read low to high:
- consonant: bits [0, 4)
- vowel:     bits [4, 6)
- consonant: bits [6, 10)
- vowel:     bits [10, 12)
- consonant: bits [12, 16)

Ids are always normalized: the numerically smaller half comes first, so a
name and its half-swapped twin are the same identity.
"""

from __future__ import annotations

import re
import secrets
from typing import Union

CONSONANTS = "bdfghjklmnprstvz"
VOWELS = "aiou"

# Matches LibProquint.sol DECODE_LOOKUP. Letters outside the alphabet
# (c, e, q, w, x, y) decode to 0.
DECODE_LOOKUP: dict[str, int] = {
    "a": 0, "b": 0, "c": 0, "d": 1, "e": 0, "f": 2, "g": 3, "h": 4,
    "i": 1, "j": 5, "k": 6, "l": 7, "m": 8, "n": 9, "o": 2, "p": 10,
    "q": 0, "r": 11, "s": 12, "t": 13, "u": 3, "v": 14, "w": 0,
    "x": 0, "y": 0, "z": 15,
}

_C = f"[{CONSONANTS}]"
_V = f"[{VOWELS}]"
_CVCVC = _C + _V + _C + _V + _C
CVCVC_PATTERN = re.compile(rf"^{_CVCVC}-{_CVCVC}$", re.IGNORECASE)

BytesLike = Union[bytes, bytearray, int, str]


class ProquintError(ValueError):
    exit_code: int = 1


class InvalidProquintLength(ProquintError):
    exit_code = 2

    def __init__(self, value: str, expected: int = 10) -> None:
        super().__init__(f"Invalid proquint length: {value!r} (expected {expected} letters)")
        self.value = value
        self.expected = expected


InvalidProquint = InvalidProquintLength


# ============ Conversions ============


def to_bytes4(value: BytesLike) -> bytes:
    """Coerce bytes, a 32-bit int or a hex string into 4 raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 4:
            raise ValueError(f"Name id must be 4 bytes, got {len(value)}")
        return bytes(value)
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"Name id out of uint32 range: {value}")
        return value.to_bytes(4, "big")
    if isinstance(value, str):
        hexed = value[2:] if value.lower().startswith("0x") else value
        if not hexed or len(hexed) > 8:
            raise ValueError(f"Name id must be at most 8 hex digits: {value!r}")
        return bytes.fromhex(hexed.rjust(8, "0"))
    raise TypeError(f"Unsupported name id type: {type(value).__name__}")


def to_hex(name_id: BytesLike) -> str:
    return "0x" + to_bytes4(name_id).hex()


def to_token_id(name_id: BytesLike) -> int:
    """ERC-721 token id of a name: its normalized id read as a uint32."""
    return int.from_bytes(normalize(name_id), "big")


def _halves(name_id: bytes) -> tuple[int, int]:
    return int.from_bytes(name_id[:2], "big"), int.from_bytes(name_id[2:], "big")


def _join(first: int, second: int) -> bytes:
    return first.to_bytes(2, "big") + second.to_bytes(2, "big")


# ============ Core ============


def normalize(name_id: BytesLike) -> bytes:
    """Order the two halves so the smaller one comes first."""
    first, second = _halves(to_bytes4(name_id))
    if first > second:
        first, second = second, first
    return _join(first, second)


def is_palindrome(name_id: BytesLike) -> bool:
    first, second = _halves(to_bytes4(name_id))
    return first == second


def encode_half(n: int) -> str:
    return (
        CONSONANTS[n & 0x0F]
        + VOWELS[(n >> 4) & 0x03]
        + CONSONANTS[(n >> 6) & 0x0F]
        + VOWELS[(n >> 10) & 0x03]
        + CONSONANTS[(n >> 12) & 0x0F]
    )


def decode_half(chars: str) -> int:
    """
    Decode five characters into a uint16. Never raises on unknown letters.

    Raises:
        InvalidProquintLength: If chars is not exactly 5 characters.
    """
    if len(chars) != 5:
        raise InvalidProquintLength(chars, expected=5)
    values = [DECODE_LOOKUP.get(c, 0) for c in chars.lower()]
    return (
        (values[4] << 12)
        | (values[3] << 10)
        | (values[2] << 6)
        | (values[1] << 4)
        | values[0]
    )


def encode(name_id: BytesLike) -> str:
    """Encode a name id as a proquint string (auto-normalizes)."""
    first, second = _halves(normalize(name_id))
    return f"{encode_half(first)}-{encode_half(second)}"


def decode(proquint: str) -> bytes:
    """
    Decode a proquint string into a normalized 4-byte name id.

    The input is lowercased and its first hyphen removed; nothing else is
    trimmed. Any character outside the alphabet decodes to 0; only a
    length other than 10 is an error.

    Raises:
        InvalidProquintLength: If the cleaned input is not 10 characters.
    """
    cleaned = proquint.lower().replace("-", "", 1)
    if len(cleaned) != 10:
        raise InvalidProquintLength(proquint)

    first = decode_half(cleaned[:5])
    second = decode_half(cleaned[5:])
    if first > second:
        first, second = second, first
    return _join(first, second)


# ============ Validation ============


def is_valid_cvcvc(proquint: str) -> bool:
    """Strict CVCVC-CVCVC check (case-insensitive)."""
    return bool(CVCVC_PATTERN.match(proquint))


def validate_proquint(proquint: str) -> bool:
    """True if the input holds exactly 10 ASCII letters once cleaned."""
    return len(re.sub(r"[^a-z]", "", proquint.lower())) == 10


def canonicalize(proquint: str) -> str:
    """Normalize user input to canonical form, or return it trimmed."""
    try:
        return encode(decode(proquint))
    except InvalidProquintLength:
        return proquint.strip().lower()


def random_name() -> str:
    return encode(secrets.token_bytes(4))
