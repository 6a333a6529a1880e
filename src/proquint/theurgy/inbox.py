"""
Theurgy Inbox - Renewal, inbox actions and transfers.

- renew:     extend a registration (no commitment needed)
- accept:    inbox -> primary (receiver, or anyone during the open window)
- reject:    receiver burns an inbox entry for a refund
- burn:      anyone burns an expired inbox entry for a reward
- shelve:    owner moves an active primary back into their inbox
- transfer:  send a name to another inbox (7 day penalty)

Gated actions read the registry first and refuse calldata the contract
would revert on.
"""

from __future__ import annotations

import sys
from typing import Optional

import click
import httpx

from ..config import AppConfig
from ..ledger.lifecycle import (
    ActionNotAllowed,
    InboxPhase,
    apply_transfer_penalty,
    can_accept,
    can_burn,
    can_refund,
    can_shelve,
    inbox_phase,
    is_in_inbox,
    registration_phase,
)
from ..ledger.pricing import burn_reward, format_eth, refund_amount, registration_price
from ..pneuma.rpc import NameState, read_name_state
from ..pneuma.tx import build_inbox_tx, build_renew_tx, build_transfer_tx
from ..sigil.codec import ProquintError, decode as decode_name, encode as encode_name, is_palindrome, to_hex
from ..sigil.commitment import pack_renew_input
from ..utils import format_timestamp, hex0x, same_address
from .common import echo_tx, fail, now_option, preset_option, resolve_caller, resolve_config

caller_option = click.option("--caller", default=None, help="Your address (default: derived from PRIVATE_KEY)")


def _load_state(name: str, now: Optional[int], preset: Optional[str]) -> tuple[AppConfig, NameState]:
    """Decode NAME, resolve the network and read the name's registry state."""
    try:
        name_id = decode_name(name)
    except ProquintError as exc:
        fail(exc)

    config = resolve_config(preset)
    if not config.has_contract:
        click.secho("ERROR: PROQUINT_CONTRACT_ADDRESS must be set.", fg="red", err=True)
        sys.exit(1)

    try:
        state = read_name_state(config, name_id, now)
    except (RuntimeError, httpx.HTTPError) as exc:
        click.secho(f"ERROR: Failed to read on-chain data: {exc}", fg="red", err=True)
        sys.exit(1)

    if state.owner is None:
        fail(ActionNotAllowed(f"{encode_name(name_id)} is not registered"))
    return config, state


def _require_inbox(state: NameState) -> InboxPhase:
    if not is_in_inbox(state.inbox_expiry):
        fail(ActionNotAllowed(f"{encode_name(state.name_id)} is not in an inbox"))
    return inbox_phase(state.inbox_expiry, state.now)


def _echo_name(state: NameState) -> None:
    click.echo(f"  Name:         {encode_name(state.name_id)}  ({to_hex(state.name_id)})")
    click.echo(f"  Owner:        {state.owner}")


@click.command()
@click.argument("name")
@click.option("--years", "-y", default=1, show_default=True, type=int, help="Additional years (1-12)")
@preset_option
def renew(name: str, years: int, preset: Optional[str]) -> None:
    """Build the renewal call for a name."""
    try:
        name_id = decode_name(name)
        packed = pack_renew_input(years, name_id)
    except ProquintError as exc:
        fail(exc)

    price = registration_price(years, is_palindrome(name_id))
    click.echo(f"  Name:         {encode_name(name_id)}")
    click.echo(f"  Years:        +{years}")
    click.echo(f"  Price:        {format_eth(price)} ETH ({price} wei)")
    click.echo(f"  Input:        {hex0x(packed)}")

    config = resolve_config(preset)
    if not config.has_contract:
        click.secho("  No registry contract configured; set PROQUINT_CONTRACT_ADDRESS for calldata.", fg="yellow")
        return

    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(build_renew_tx(config, name_id, years))


@click.command()
@click.argument("name")
@caller_option
@now_option
@preset_option
def accept(name: str, caller: Optional[str], now: Optional[int], preset: Optional[str]) -> None:
    """Claim an inbox entry as the receiver's primary name."""
    caller = resolve_caller(caller)
    config, state = _load_state(name, now, preset)
    phase = _require_inbox(state)
    is_receiver = same_address(caller, state.owner)

    if not can_accept(phase, is_receiver, state.owner_has_primary):
        if state.owner_has_primary:
            reason = "the receiver already holds a primary name; shelve it first"
        elif phase is InboxPhase.BURNABLE:
            reason = "both claim windows have closed; the entry can only be burned"
        else:
            reason = f"only the receiver can claim until {format_timestamp(state.inbox_expiry)}"
        fail(ActionNotAllowed(f"Cannot accept: {reason}"))

    _echo_name(state)
    if not is_receiver:
        click.echo("  Claiming on behalf of the receiver.")
    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(build_inbox_tx(config, "acceptInbox", state.name_id))


@click.command()
@click.argument("name")
@caller_option
@now_option
@preset_option
def reject(name: str, caller: Optional[str], now: Optional[int], preset: Optional[str]) -> None:
    """Burn an inbox entry as its receiver and take the refund."""
    caller = resolve_caller(caller)
    config, state = _load_state(name, now, preset)
    _require_inbox(state)

    if not can_refund(same_address(caller, state.owner)):
        fail(ActionNotAllowed("Cannot reject: only the receiver can refund an inbox entry"))

    _echo_name(state)
    click.echo(f"  Refund:       {format_eth(refund_amount(state.expiry - state.now))} ETH")
    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(build_inbox_tx(config, "rejectInbox", state.name_id))


@click.command()
@click.argument("name")
@caller_option
@now_option
@preset_option
def burn(name: str, caller: Optional[str], now: Optional[int], preset: Optional[str]) -> None:
    """Burn an abandoned inbox entry for the burn reward."""
    caller = resolve_caller(caller)
    config, state = _load_state(name, now, preset)
    phase = _require_inbox(state)
    is_receiver = same_address(caller, state.owner)

    if not can_burn(phase, is_receiver):
        if is_receiver:
            reason = "the receiver rejects instead ('proquint reject')"
        else:
            reason = f"claim windows are still open for {encode_name(state.name_id)}"
        fail(ActionNotAllowed(f"Cannot burn: {reason}"))

    _echo_name(state)
    click.echo(f"  Burn reward:  {format_eth(burn_reward(state.expiry - state.now))} ETH")
    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(build_inbox_tx(config, "cleanInbox", state.name_id))


@click.command()
@click.argument("name")
@caller_option
@now_option
@preset_option
def shelve(name: str, caller: Optional[str], now: Optional[int], preset: Optional[str]) -> None:
    """Move your primary name back into your inbox."""
    caller = resolve_caller(caller)
    config, state = _load_state(name, now, preset)
    phase = registration_phase(state.expiry, state.now)

    if not can_shelve(phase, same_address(caller, state.owner), is_in_inbox(state.inbox_expiry)):
        fail(ActionNotAllowed("Cannot shelve: only the owner can shelve an active primary name"))

    _echo_name(state)
    click.echo(f"  Expiry:       {format_timestamp(state.expiry)}")
    click.echo(f"  After shelve: {format_timestamp(apply_transfer_penalty(state.expiry))} (7 day penalty)")
    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(build_inbox_tx(config, "shelve", state.name_id))


@click.command()
@click.argument("name")
@click.argument("recipient")
@caller_option
@now_option
@preset_option
def transfer(name: str, recipient: str, caller: Optional[str], now: Optional[int], preset: Optional[str]) -> None:
    """Transfer a name into another address's inbox."""
    caller = resolve_caller(caller)
    config, state = _load_state(name, now, preset)

    if not same_address(caller, state.owner):
        fail(ActionNotAllowed("Cannot transfer: only the owner can transfer a name"))

    try:
        tx = build_transfer_tx(config, caller, recipient, state.name_id)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)

    _echo_name(state)
    click.echo(f"  Recipient:    {recipient}")
    click.echo(f"  After move:   {format_timestamp(apply_transfer_penalty(state.expiry))} (7 day penalty)")
    click.echo("")
    click.echo("Send from your wallet:")
    echo_tx(tx)
