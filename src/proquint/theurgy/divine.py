"""
Theurgy Divine - Query on-chain status of a name.

Reads the registry and reports:
- Registration phase (active / grace / premium / available)
- Inbox phase and claim countdowns
- Refund and burn reward estimates
- Renewal and registration price
"""

from __future__ import annotations

import sys
from typing import Optional

import click
import httpx

from ..ledger.pricing import format_eth, registration_price
from ..pneuma.rpc import get_block_timestamp, get_expiry, get_inbox_expiry
from ..sigil.codec import ProquintError, decode as decode_name, encode as encode_name, is_palindrome, to_hex
from .common import fail, now_option, preset_option, resolve_config
from .windows import echo_inbox, echo_registration


@click.command()
@click.argument("name")
@now_option
@preset_option
def divine(name: str, now: Optional[int], preset: Optional[str]) -> None:
    """
    Query on-chain status of a name.

    Uses the latest block timestamp as "now" unless --now is given.
    """
    click.echo("=== Proquint Divine ===")
    click.echo("")

    try:
        name_id = decode_name(name)
    except ProquintError as exc:
        fail(exc)

    config = resolve_config(preset)
    if not config.has_contract:
        click.secho("ERROR: PROQUINT_CONTRACT_ADDRESS must be set.", fg="red", err=True)
        sys.exit(1)

    try:
        expiry = get_expiry(config, name_id)
        inbox_expiry = get_inbox_expiry(config, name_id)
        current = now if now is not None else get_block_timestamp(config)
    except (RuntimeError, httpx.HTTPError) as exc:
        click.secho(f"ERROR: Failed to read on-chain data: {exc}", fg="red", err=True)
        sys.exit(1)

    palindrome = is_palindrome(name_id)
    click.echo(f"  {encode_name(name_id)}  ({to_hex(name_id)})")
    click.echo("  ─────────────────────────────")
    echo_registration(expiry, current)
    echo_inbox(inbox_expiry, expiry, current)
    if palindrome:
        click.secho("  Palindrome:   yes (5x price)", fg="magenta")
    click.echo(f"  1 year:       {format_eth(registration_price(1, palindrome))} ETH")

    if config.explorer_url:
        click.echo(f"  Explorer:     {config.explorer_address_url(config.contract_address)}")

    click.echo("")
    click.echo("=== Divine Complete ===")
