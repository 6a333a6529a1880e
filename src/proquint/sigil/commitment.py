"""
Commit-reveal protocol for name registration.

Commit:
    packed_input    = uint8(years) || bytes4(id) || bytes27(secret)   (32 bytes)
    commitment_hash = keccak256(bytes31(packed_input[1:]) || address(recipient))

Reveal:
    The unmodified packed_input goes to register(input) or
    registerTo(input, to) once the commitment is at least
    MIN_COMMITMENT_AGE old and no older than MAX_COMMITMENT_AGE.

Ages are measured from the moment the commit transaction is observed as
confirmed, not from when the commitment was built.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from eth_abi.packed import encode_packed

from ..ledger.constants import MAX_COMMITMENT_AGE, MIN_COMMITMENT_AGE
from ..ledger.pricing import validate_years
from ..utils import checksum_address, from_hex, hex0x, keccak256, same_address
from .codec import BytesLike, ProquintError, normalize

SECRET_SIZE = 27
PACKED_INPUT_SIZE = 32


class CommitmentError(ProquintError):
    exit_code = 4


class CommitmentNotYetReady(CommitmentError):
    exit_code = 4

    def __init__(self, seconds_remaining: int) -> None:
        super().__init__(f"Commitment not ready, wait {seconds_remaining} more seconds")
        self.seconds_remaining = seconds_remaining


class CommitmentExpired(CommitmentError):
    exit_code = 5

    def __init__(self, age: int) -> None:
        super().__init__(
            f"Commitment expired ({age}s old, limit {MAX_COMMITMENT_AGE}s). "
            "Start over with a new secret."
        )
        self.age = age


class CommitmentNotConfirmed(CommitmentError):
    exit_code = 6

    def __init__(self) -> None:
        super().__init__("Commit transaction has not been confirmed yet")


class CommitmentNotFound(CommitmentError):
    exit_code = 7

    def __init__(self, commitment_hash: str) -> None:
        super().__init__(f"No stored commitment for {commitment_hash}")
        self.commitment_hash = commitment_hash


class CommitmentState(str, Enum):
    WAITING = "waiting"
    READY = "ready"
    EXPIRED = "expired"


@dataclass(frozen=True)
class CommitmentStatus:
    state: CommitmentState
    elapsed: int
    seconds_left: int = 0

    @property
    def ready(self) -> bool:
        return self.state is CommitmentState.READY

    @property
    def expired(self) -> bool:
        return self.state is CommitmentState.EXPIRED


@dataclass(frozen=True)
class Commitment:
    packed_input: bytes
    commitment_hash: bytes
    recipient: str
    years: int
    name_id: bytes
    is_register_to: bool = False
    created_at: Optional[int] = None

    @property
    def id_secret(self) -> bytes:
        return self.packed_input[1:]

    @property
    def secret(self) -> bytes:
        return self.packed_input[5:]

    @property
    def key(self) -> str:
        return hex0x(self.commitment_hash)

    def confirmed(self, at: int) -> "Commitment":
        """Copy with created_at set to the observed confirmation time."""
        return replace(self, created_at=at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "commitment": hex0x(self.commitment_hash),
            "data": hex0x(self.packed_input),
            "recipient": self.recipient,
            "years": self.years,
            "id": hex0x(self.name_id),
            "is_register_to": self.is_register_to,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Commitment":
        commitment = cls(
            packed_input=from_hex(payload["data"]),
            commitment_hash=from_hex(payload["commitment"]),
            recipient=checksum_address(payload["recipient"]),
            years=int(payload["years"]),
            name_id=from_hex(payload["id"]),
            is_register_to=bool(payload.get("is_register_to", False)),
            created_at=payload.get("created_at"),
        )
        expected = compute_commitment_hash(commitment.packed_input, commitment.recipient)
        if expected != commitment.commitment_hash:
            raise ValueError(f"Stored commitment {payload['commitment']} does not match its data")
        return commitment


# ============ Commit ============


def generate_secret() -> bytes:
    return secrets.token_bytes(SECRET_SIZE)


def pack_registration_input(years: int, name_id: BytesLike, secret: bytes) -> bytes:
    """Pack uint8(years) || bytes4(normalized id) || bytes27(secret)."""
    validate_years(years)
    if len(secret) != SECRET_SIZE:
        raise ValueError(f"Secret must be {SECRET_SIZE} bytes, got {len(secret)}")
    return encode_packed(
        ["uint8", "bytes4", "bytes27"],
        [years, normalize(name_id), bytes(secret)],
    )


def pack_renew_input(years: int, name_id: BytesLike) -> bytes:
    """
    Pack the renew() argument: uint8(years) || bytes4(normalized id).

    The contract reads only the first five bytes of the bytes32; the rest
    is zero-padded. No commitment is needed to renew.
    """
    validate_years(years)
    packed = encode_packed(["uint8", "bytes4"], [years, normalize(name_id)])
    return packed.ljust(PACKED_INPUT_SIZE, b"\x00")


def compute_commitment_hash(packed_input: bytes, recipient: str) -> bytes:
    """keccak256(bytes31(id || secret) || address(recipient)), 51 bytes hashed."""
    if len(packed_input) != PACKED_INPUT_SIZE:
        raise ValueError(f"Packed input must be {PACKED_INPUT_SIZE} bytes, got {len(packed_input)}")
    return keccak256(
        encode_packed(["bytes31", "address"], [packed_input[1:], checksum_address(recipient)])
    )


def make_commitment(
    years: int,
    name_id: BytesLike,
    secret: bytes,
    recipient: str,
    is_register_to: bool = False,
) -> Commitment:
    """
    Build a commitment bound to the final owner of the name.

    Args:
        years: Registration length (1..MAX_YEARS)
        name_id: Name id; normalized before packing
        secret: 27 random bytes
        recipient: Address the commitment is bound to
        is_register_to: Reveal through registerTo(input, to)

    Returns:
        Unconfirmed Commitment (created_at is None)
    """
    packed = pack_registration_input(years, name_id, secret)
    recipient = checksum_address(recipient)
    return Commitment(
        packed_input=packed,
        commitment_hash=compute_commitment_hash(packed, recipient),
        recipient=recipient,
        years=years,
        name_id=normalize(name_id),
        is_register_to=is_register_to,
    )


def select_recipient(
    caller: str,
    receiver: Optional[str] = None,
    caller_has_primary: bool = False,
) -> tuple[str, bool]:
    """
    Pick the commitment recipient and the reveal entry point.

    register(input) mints to the caller as primary. registerTo(input, to)
    is used when minting to someone else or when the caller already holds
    a primary name (the name then lands in an inbox).

    Returns:
        (recipient, is_register_to)
    """
    caller = checksum_address(caller)
    final = checksum_address(receiver) if receiver else caller
    is_register_to = caller_has_primary or not same_address(final, caller)
    return final, is_register_to


# ============ Wait / Reveal ============


def commitment_status(created_at: int, now: int) -> CommitmentStatus:
    elapsed = now - created_at
    if elapsed < MIN_COMMITMENT_AGE:
        return CommitmentStatus(
            CommitmentState.WAITING, elapsed, seconds_left=MIN_COMMITMENT_AGE - elapsed
        )
    if elapsed > MAX_COMMITMENT_AGE:
        return CommitmentStatus(CommitmentState.EXPIRED, elapsed)
    return CommitmentStatus(CommitmentState.READY, elapsed)


def ensure_revealable(commitment: Commitment, now: int) -> CommitmentStatus:
    """
    Guard the reveal window.

    Raises:
        CommitmentNotConfirmed: If the commit was never confirmed
        CommitmentNotYetReady: Before MIN_COMMITMENT_AGE has passed
        CommitmentExpired: After MAX_COMMITMENT_AGE has passed
    """
    if commitment.created_at is None:
        raise CommitmentNotConfirmed()
    status = commitment_status(commitment.created_at, now)
    if status.state is CommitmentState.WAITING:
        raise CommitmentNotYetReady(status.seconds_left)
    if status.state is CommitmentState.EXPIRED:
        raise CommitmentExpired(status.elapsed)
    return status
