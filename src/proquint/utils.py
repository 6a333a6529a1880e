from __future__ import annotations

import time
from datetime import datetime, timezone

from eth_hash.auto import keccak
from eth_utils import is_address, to_checksum_address


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def hex0x(data: bytes) -> str:
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    return bytes.fromhex(value[2:] if value.lower().startswith("0x") else value)


def checksum_address(address: str) -> str:
    """Validate an address and return it in EIP-55 checksummed form."""
    if not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return to_checksum_address(address)


def same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def now_ts() -> int:
    return int(time.time())


def format_timestamp(ts: int) -> str:
    if not ts:
        return "—"
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")
