"""
Lifecycle Window Calculator.

Pure time-window arithmetic over timestamps read from the registry.

Registration:  ACTIVE -> GRACE (300d) -> PREMIUM (65d) -> AVAILABLE
Inbox:         OWNER_CLAIMABLE -> OPEN_CLAIMABLE (7d) -> BURNABLE

The owner-claim window shrinks linearly from 42 days to 7 days as the
receiver's inbox fills up.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..sigil.codec import ProquintError
from .constants import (
    ANYONE_PERIOD,
    BASE_PENDING_PERIOD,
    GRACE_PERIOD,
    GRACE_PLUS_PREMIUM,
    MAX_INBOX,
    MIN_PENDING_PERIOD,
    TRANSFER_PENALTY,
)


class ActionNotAllowed(ProquintError):
    exit_code = 8


class RegistrationPhase(str, Enum):
    ACTIVE = "active"
    GRACE = "grace"
    PREMIUM = "premium"
    AVAILABLE = "available"


class InboxPhase(str, Enum):
    OWNER_CLAIMABLE = "owner_claimable"
    OPEN_CLAIMABLE = "open_claimable"
    BURNABLE = "burnable"


@dataclass(frozen=True)
class Availability:
    phase: RegistrationPhase
    is_new: bool
    expiry: int

    @property
    def is_available(self) -> bool:
        return self.phase is RegistrationPhase.AVAILABLE


# ============ Registration ============


def registration_phase(expiry: int, now: int) -> RegistrationPhase:
    if now < expiry:
        return RegistrationPhase.ACTIVE
    if now < expiry + GRACE_PERIOD:
        return RegistrationPhase.GRACE
    if now < expiry + GRACE_PLUS_PREMIUM:
        return RegistrationPhase.PREMIUM
    return RegistrationPhase.AVAILABLE


def availability(expiry: int, now: int) -> Availability:
    """Classify a name; a zero expiry means it was never registered."""
    if expiry == 0:
        return Availability(RegistrationPhase.AVAILABLE, is_new=True, expiry=0)
    return Availability(registration_phase(expiry, now), is_new=False, expiry=expiry)


def apply_transfer_penalty(expiry: int) -> int:
    """Expiry after a transfer or shelve, which costs TRANSFER_PENALTY."""
    return expiry - TRANSFER_PENALTY


# ============ Inbox ============


def is_in_inbox(inbox_expiry: int) -> bool:
    return inbox_expiry > 0


def inbox_phase(inbox_expiry: int, now: int) -> InboxPhase:
    if now < inbox_expiry:
        return InboxPhase.OWNER_CLAIMABLE
    if now < inbox_expiry + ANYONE_PERIOD:
        return InboxPhase.OPEN_CLAIMABLE
    return InboxPhase.BURNABLE


def window_seconds(inbox_count: int) -> int:
    """
    Owner-claim window for an item placed into inbox slot `inbox_count`.

    Args:
        inbox_count: Items already in the receiver's inbox (0..MAX_INBOX)

    Returns:
        Window length in seconds, 42 days for an empty inbox down to 7 days.

    Raises:
        ValueError: If inbox_count is outside [0, MAX_INBOX]
    """
    if not 0 <= inbox_count <= MAX_INBOX:
        raise ValueError(f"Inbox count must be between 0 and {MAX_INBOX}, got {inbox_count}")
    return BASE_PENDING_PERIOD - (
        inbox_count * (BASE_PENDING_PERIOD - MIN_PENDING_PERIOD) // MAX_INBOX
    )


def predict_inbox_expiry(now: int, inbox_count: int) -> int:
    return now + window_seconds(inbox_count)


# ============ Inbox permissions ============


def can_accept(phase: InboxPhase, is_receiver: bool, receiver_has_primary: bool) -> bool:
    """Whether the caller may accept an inbox item as the receiver's primary."""
    if receiver_has_primary:
        return False
    if phase is InboxPhase.OWNER_CLAIMABLE:
        return is_receiver
    return phase is InboxPhase.OPEN_CLAIMABLE


def can_refund(is_receiver: bool) -> bool:
    # The receiver may reject for a refund at any point before a burn.
    return is_receiver


def can_burn(phase: InboxPhase, is_receiver: bool) -> bool:
    return phase is InboxPhase.BURNABLE and not is_receiver


def can_shelve(phase: RegistrationPhase, is_owner: bool, in_inbox: bool) -> bool:
    """Whether the caller may move an active primary name back into their inbox."""
    return is_owner and not in_inbox and phase is RegistrationPhase.ACTIVE


def format_duration(seconds: int) -> str:
    if seconds <= 0:
        return "0s"
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
