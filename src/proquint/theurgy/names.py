"""
Theurgy Names - Offline codec and pricing commands.

- encode:  name id (hex or int) -> proquint
- decode:  proquint -> normalized name id
- random:  fresh random name
- quote:   registration price for a name
"""

from __future__ import annotations

import sys

import click

from ..ledger.pricing import format_eth, quote as price_quote
from ..sigil.codec import (
    ProquintError,
    decode as decode_name,
    encode as encode_name,
    is_palindrome,
    is_valid_cvcvc,
    random_name,
    to_bytes4,
    to_hex,
)
from .common import fail


@click.command()
@click.argument("name_id")
def encode(name_id: str) -> None:
    """Encode a 4-byte name id (0x-hex or integer) as a proquint."""
    try:
        value = int(name_id) if name_id.isdigit() else name_id
        raw = to_bytes4(value)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)

    click.echo(encode_name(raw))


@click.command()
@click.argument("name")
def decode(name: str) -> None:
    """Decode a proquint into its normalized name id."""
    try:
        raw = decode_name(name)
    except ProquintError as exc:
        fail(exc)

    click.echo(f"  ID:         {to_hex(raw)}")
    click.echo(f"  Canonical:  {encode_name(raw)}")
    click.echo(f"  Palindrome: {'yes' if is_palindrome(raw) else 'no'}")
    if not is_valid_cvcvc(name):
        click.secho(
            "  Note: input is not strict CVCVC-CVCVC; unknown letters decode to 0.",
            fg="yellow",
        )


@click.command("random")
def random_cmd() -> None:
    """Print a random proquint name."""
    click.echo(random_name())


@click.command()
@click.argument("name")
@click.option("--years", "-y", default=1, show_default=True, type=int, help="Registration years (1-12)")
def quote(name: str, years: int) -> None:
    """Show the registration price for a name."""
    try:
        raw = decode_name(name)
        result = price_quote(raw, years)
    except ProquintError as exc:
        fail(exc)

    click.echo(f"  Name:       {encode_name(raw)}")
    click.echo(f"  Years:      {result.years}")
    if result.is_palindrome:
        click.secho("  Palindrome: yes (5x price)", fg="magenta")
    click.echo(f"  Price:      {format_eth(result.amount_wei)} ETH ({result.amount_wei} wei)")
