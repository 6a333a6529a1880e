"""
Registry constants.

Every value mirrors the ProquintNFT contract. Times are in seconds,
amounts in wei.
"""

from __future__ import annotations

DAY = 24 * 60 * 60

PRICE_PER_YEAR = 240_000_000_000_000  # 0.00024 ETH
PRICE_PER_MONTH = 20_000_000_000_000  # 0.00002 ETH
PALINDROME_MULTIPLIER = 5
SECONDS_PER_MONTH = 30 * DAY

MAX_YEARS = 12
MAX_INBOX = 255

BASE_PENDING_PERIOD = 42 * DAY
MIN_PENDING_PERIOD = 7 * DAY
GRACE_PERIOD = 300 * DAY
PREMIUM_PERIOD = 65 * DAY
GRACE_PLUS_PREMIUM = GRACE_PERIOD + PREMIUM_PERIOD  # 365 days
TRANSFER_PENALTY = 7 * DAY
ANYONE_PERIOD = 7 * DAY

MIN_COMMITMENT_AGE = 5
MAX_COMMITMENT_AGE = 15 * 60

ZERO_ID = b"\x00\x00\x00\x00"
ZERO_ADDRESS = "0x" + "0" * 40
