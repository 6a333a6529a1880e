"""
Theurgy Register - Commit-reveal registration.

Flow:
1. commit   Build a commitment bound to the final owner and store it.
            Send the printed commit(bytes32) call from your wallet.
2. confirm  Record when the commit transaction was confirmed.
3. status   Poll the age window (5s minimum, 15min maximum).
4. reveal   Print the register / registerTo call carrying the packed input.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click
import httpx

from ..ledger.constants import MAX_INBOX
from ..ledger.lifecycle import format_duration, window_seconds
from ..ledger.pricing import format_eth, registration_price
from ..pneuma.rpc import get_confirmation_time, get_inbox_count, get_primary_name
from ..pneuma.tx import build_commit_tx, build_reveal_tx
from ..sigil.codec import ProquintError, decode as decode_name, encode as encode_name, is_palindrome
from ..sigil.commitment import (
    Commitment,
    CommitmentState,
    commitment_status,
    ensure_revealable,
    generate_secret,
    make_commitment,
    select_recipient,
)
from ..store import FileCommitmentStore, require
from ..utils import format_timestamp, hex0x, now_ts
from .common import echo_tx, fail, now_option, preset_option, resolve_caller, resolve_config, resolve_now


def open_store() -> FileCommitmentStore:
    store_dir = os.environ.get("PROQUINT_COMMITMENTS_DIR")
    if store_dir:
        return FileCommitmentStore(Path(store_dir))
    return FileCommitmentStore()


def _load(key: str) -> Commitment:
    try:
        return require(open_store(), key)
    except ProquintError as exc:
        fail(exc)
    except OSError as exc:
        click.secho(f"ERROR: Failed to read commitment: {exc}", fg="red", err=True)
        sys.exit(1)


@click.command()
@click.argument("name")
@click.option("--years", "-y", default=1, show_default=True, type=int, help="Registration years (1-12)")
@click.option("--to", "receiver", default=None, help="Mint to this address instead of yourself")
@click.option("--caller", default=None, help="Your address (default: derived from PRIVATE_KEY)")
@click.option("--has-primary", is_flag=True, help="You already hold a primary name")
@click.option("--online", is_flag=True, help="Read primary name and inbox count from the chain")
@preset_option
def commit(
    name: str,
    years: int,
    receiver: Optional[str],
    caller: Optional[str],
    has_primary: bool,
    online: bool,
    preset: Optional[str],
) -> None:
    """Build and store a registration commitment."""
    click.echo("=== Proquint Commit ===")
    click.echo("")

    caller = resolve_caller(caller)
    config = resolve_config(preset)
    inbox_count = None

    try:
        name_id = decode_name(name)
        if online:
            has_primary = has_primary or get_primary_name(config, caller) is not None
        recipient, is_register_to = select_recipient(caller, receiver, has_primary)
        if online and is_register_to:
            inbox_count = get_inbox_count(config, recipient)
        commitment = make_commitment(years, name_id, generate_secret(), recipient, is_register_to)
    except ProquintError as exc:
        fail(exc)
    except (ValueError, RuntimeError, httpx.HTTPError) as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)

    open_store().set(commitment)

    price = registration_price(commitment.years, is_palindrome(commitment.name_id))
    click.echo(f"  Name:         {encode_name(commitment.name_id)}")
    click.echo(f"  Years:        {commitment.years}")
    click.echo(f"  Price:        {format_eth(price)} ETH")
    click.echo(f"  Recipient:    {commitment.recipient}")
    click.echo(f"  Entry point:  {'registerTo' if is_register_to else 'register'}")
    click.echo(f"  Commitment:   {commitment.key}")
    if is_register_to:
        click.secho("  The name will land in the recipient's inbox.", fg="yellow")
        if inbox_count is not None and inbox_count <= MAX_INBOX:
            click.echo(f"  Claim window: {format_duration(window_seconds(inbox_count))}")

    if config.has_contract:
        click.echo("")
        click.echo("Send from your wallet:")
        echo_tx(build_commit_tx(config, commitment))

    click.echo("")
    click.echo(f"Then run 'proquint confirm {commitment.key}' once it is mined.")


@click.command()
@click.argument("commitment_hash")
@click.option("--at", "at", type=int, default=None, help="Confirmation timestamp (default: now)")
@click.option("--tx", "tx_hash", default=None, help="Read the confirmation time from this commit transaction")
@preset_option
def confirm(commitment_hash: str, at: Optional[int], tx_hash: Optional[str], preset: Optional[str]) -> None:
    """Record when the commit transaction was confirmed."""
    commitment = _load(commitment_hash)

    if tx_hash:
        config = resolve_config(preset)
        try:
            at = get_confirmation_time(config, tx_hash)
        except (RuntimeError, httpx.HTTPError) as exc:
            click.secho(f"ERROR: Failed to read receipt: {exc}", fg="red", err=True)
            sys.exit(1)
        if at is None:
            click.secho("Commit transaction is still pending.", fg="yellow")
            sys.exit(1)

    confirmed = commitment.confirmed(now_ts() if at is None else at)
    open_store().set(confirmed)
    click.echo(f"Confirmed at {format_timestamp(confirmed.created_at)}")


@click.command()
@click.argument("commitment_hash")
@now_option
def status(commitment_hash: str, now: Optional[int]) -> None:
    """Show whether a commitment can be revealed."""
    commitment = _load(commitment_hash)
    if commitment.created_at is None:
        click.secho("Unconfirmed: run 'proquint confirm' after the commit is mined.", fg="yellow")
        return

    result = commitment_status(commitment.created_at, resolve_now(now))
    if result.state is CommitmentState.WAITING:
        click.secho(f"Waiting: {result.seconds_left}s left", fg="yellow")
    elif result.state is CommitmentState.READY:
        click.secho("Ready to reveal", fg="green")
    else:
        click.secho("Expired: start over with a new commitment", fg="red")


@click.command()
@click.argument("commitment_hash")
@now_option
@preset_option
def reveal(commitment_hash: str, now: Optional[int], preset: Optional[str]) -> None:
    """Print the registration call for a ready commitment."""
    commitment = _load(commitment_hash)
    config = resolve_config(preset)

    try:
        ensure_revealable(commitment, resolve_now(now))
    except ProquintError as exc:
        fail(exc)

    click.echo(f"  Name:         {encode_name(commitment.name_id)}")
    click.echo(f"  Input:        {hex0x(commitment.packed_input)}")
    if not config.has_contract:
        click.secho("  No registry contract configured; set PROQUINT_CONTRACT_ADDRESS for calldata.", fg="yellow")
        return

    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(build_reveal_tx(config, commitment))


@click.group()
def commitments() -> None:
    """Manage stored commitments."""
    pass


@commitments.command("list")
@now_option
def commitments_list(now: Optional[int]) -> None:
    """List stored commitments."""
    try:
        entries = open_store().list()
    except OSError as exc:
        click.secho(f"ERROR: Failed to read commitments: {exc}", fg="red", err=True)
        sys.exit(1)
    if not entries:
        click.echo("No stored commitments.")
        return

    current = resolve_now(now)
    for entry in entries:
        if entry.created_at is None:
            state = "unconfirmed"
        else:
            state = commitment_status(entry.created_at, current).state.value
        click.echo(f"  {entry.key}  {encode_name(entry.name_id)}  {state}")


@commitments.command("clear")
@click.argument("commitment_hash", required=False)
def commitments_clear(commitment_hash: Optional[str]) -> None:
    """Delete one or all stored commitments."""
    open_store().clear(commitment_hash)
    if commitment_hash:
        click.echo(f"Cleared: {commitment_hash}")
    else:
        click.echo("Commitments cleared.")
