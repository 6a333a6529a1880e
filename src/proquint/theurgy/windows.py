"""
Theurgy Windows - Offline lifecycle arithmetic.

- refund:        refund and burn reward for the remaining registration
- inbox-window:  decaying claim window for the next inbox slot
- lifecycle:     classify registration and inbox phases from timestamps
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from ..ledger.constants import ANYONE_PERIOD, MAX_INBOX, SECONDS_PER_MONTH
from ..ledger.lifecycle import (
    InboxPhase,
    RegistrationPhase,
    availability,
    format_duration,
    inbox_phase,
    is_in_inbox,
    predict_inbox_expiry,
    window_seconds,
)
from ..ledger.pricing import burn_reward, format_eth, receiver_share, refund_amount
from ..utils import format_timestamp
from .common import now_option, resolve_now

PHASE_COLORS = {
    RegistrationPhase.ACTIVE: "green",
    RegistrationPhase.GRACE: "yellow",
    RegistrationPhase.PREMIUM: "magenta",
    RegistrationPhase.AVAILABLE: "cyan",
}

PHASE_LABELS = {
    RegistrationPhase.ACTIVE: "Active",
    RegistrationPhase.GRACE: "Grace period - only the previous owner can renew",
    RegistrationPhase.PREMIUM: "Premium period - anyone can register at a premium",
    RegistrationPhase.AVAILABLE: "Available for registration",
}

INBOX_LABELS = {
    InboxPhase.OWNER_CLAIMABLE: "Receiver can claim",
    InboxPhase.OPEN_CLAIMABLE: "Anyone can claim for the receiver",
    InboxPhase.BURNABLE: "Burnable",
}


def echo_registration(expiry: int, now: int) -> None:
    result = availability(expiry, now)
    label = "Never registered" if result.is_new else PHASE_LABELS[result.phase]
    click.echo(f"  Expiry:       {format_timestamp(expiry)}")
    click.echo("  Status:       " + click.style(label, fg=PHASE_COLORS[result.phase]))
    if result.phase is RegistrationPhase.ACTIVE:
        click.echo(f"  Remaining:    {format_duration(expiry - now)}")


def echo_inbox(inbox_expiry: int, expiry: int, now: int, has_receiver: bool = True) -> None:
    if not is_in_inbox(inbox_expiry):
        click.echo("  Inbox:        (not in an inbox)")
        return

    phase = inbox_phase(inbox_expiry, now)
    click.echo(f"  Inbox:        {INBOX_LABELS[phase]}")
    if phase is InboxPhase.OWNER_CLAIMABLE:
        click.echo(f"  Receiver:     {format_duration(inbox_expiry - now)} left to claim")
    elif phase is InboxPhase.OPEN_CLAIMABLE:
        click.echo(f"  Open claim:   {format_duration(inbox_expiry + ANYONE_PERIOD - now)} left")

    remaining = expiry - now
    click.echo(f"  Refund:       {format_eth(refund_amount(remaining))} ETH (receiver, any time)")
    click.echo(f"  Burn reward:  {format_eth(burn_reward(remaining, has_receiver))} ETH")


@click.command()
@click.option("--remaining", type=int, default=None, help="Remaining registration in seconds")
@click.option("--expiry", type=int, default=None, help="Registration expiry timestamp")
@now_option
@click.option("--no-receiver", is_flag=True, help="No receiver on record (burner takes all)")
def refund(remaining: Optional[int], expiry: Optional[int], now: Optional[int], no_receiver: bool) -> None:
    """Show refund and burn reward for the remaining registration."""
    if remaining is None and expiry is None:
        click.secho("ERROR: pass --remaining or --expiry", fg="red", err=True)
        sys.exit(1)
    if remaining is None:
        remaining = expiry - resolve_now(now)

    has_receiver = not no_receiver
    months = max(remaining, 0) // SECONDS_PER_MONTH
    total = refund_amount(remaining)

    click.echo(f"  Remaining:       {format_duration(remaining)} ({months} whole months)")
    click.echo(f"  Refund:          {format_eth(total)} ETH ({total} wei)")
    click.echo(f"  Burn reward:     {format_eth(burn_reward(remaining, has_receiver))} ETH")
    click.echo(f"  Receiver share:  {format_eth(receiver_share(remaining, has_receiver))} ETH")


@click.command("inbox-window")
@click.option("--count", "-c", type=click.IntRange(0, MAX_INBOX), required=True, help="Items already in the inbox")
@now_option
def inbox_window(count: int, now: Optional[int]) -> None:
    """Predict the claim window for a new inbox item."""
    current = resolve_now(now)
    seconds = window_seconds(count)
    click.echo(f"  Inbox count:  {count}")
    click.echo(f"  Window:       {format_duration(seconds)} ({seconds}s)")
    click.echo(f"  Claim until:  {format_timestamp(predict_inbox_expiry(current, count))}")


@click.command()
@click.option("--expiry", type=int, required=True, help="Registration expiry timestamp (0 = never registered)")
@click.option("--inbox-expiry", type=int, default=0, help="Inbox claim deadline (0 = not in an inbox)")
@now_option
def lifecycle(expiry: int, inbox_expiry: int, now: Optional[int]) -> None:
    """Classify registration and inbox phases."""
    current = resolve_now(now)
    click.echo(f"  Now:          {format_timestamp(current)}")
    echo_registration(expiry, current)
    echo_inbox(inbox_expiry, expiry, current)
