"""
Pricing Engine.

Registration cost grows exponentially with the number of years paid up
front: `(2**years - 1) * PRICE_PER_YEAR`, five times that for palindromes.
Refunds are paid per whole month of remaining registration.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..sigil.codec import BytesLike, ProquintError, is_palindrome
from .constants import (
    MAX_YEARS,
    PALINDROME_MULTIPLIER,
    PRICE_PER_MONTH,
    PRICE_PER_YEAR,
    SECONDS_PER_MONTH,
)


class YearsOutOfRange(ProquintError):
    exit_code = 3

    def __init__(self, years: int) -> None:
        super().__init__(f"Years must be between 1 and {MAX_YEARS}, got {years}")
        self.years = years


@dataclass(frozen=True)
class PriceQuote:
    years: int
    is_palindrome: bool
    amount_wei: int


def validate_years(years: int) -> int:
    if isinstance(years, bool) or not isinstance(years, int) or not 1 <= years <= MAX_YEARS:
        raise YearsOutOfRange(years)
    return years


def registration_price(years: int, is_palindrome: bool = False) -> int:
    """
    Registration or renewal price in wei.

    Raises:
        YearsOutOfRange: If years is outside [1, MAX_YEARS].
    """
    validate_years(years)
    price = ((1 << years) - 1) * PRICE_PER_YEAR
    if is_palindrome:
        price *= PALINDROME_MULTIPLIER
    return price


def quote(name_id: BytesLike, years: int) -> PriceQuote:
    palindrome = is_palindrome(name_id)
    return PriceQuote(
        years=years,
        is_palindrome=palindrome,
        amount_wei=registration_price(years, palindrome),
    )


def refund_amount(remaining_seconds: int) -> int:
    """Whole remaining months times PRICE_PER_MONTH; partial months are dropped."""
    if remaining_seconds <= 0:
        return 0
    return (remaining_seconds // SECONDS_PER_MONTH) * PRICE_PER_MONTH


def burn_reward(remaining_seconds: int, has_receiver: bool = True) -> int:
    """
    Reward paid to a third party burning an abandoned inbox entry.

    With more than one month's worth left and a receiver on record the
    refund is split 50/50 and the burner gets the floored half.
    """
    total = refund_amount(remaining_seconds)
    if total > PRICE_PER_MONTH and has_receiver:
        return total // 2
    return total


def receiver_share(remaining_seconds: int, has_receiver: bool = True) -> int:
    """Part of a burn refund credited to the original receiver."""
    if not has_receiver:
        return 0
    return refund_amount(remaining_seconds) - burn_reward(remaining_seconds, has_receiver)


def format_eth(wei: int) -> str:
    eth = wei / 10**18
    if eth >= 0.01:
        return f"{eth:.4f}"
    if eth >= 0.001:
        return f"{eth:.5f}"
    return f"{eth:.6f}"
