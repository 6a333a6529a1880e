"""Helpers shared by the command modules."""

from __future__ import annotations

import sys
from typing import Any, NoReturn, Optional

import click

from ..config import AppConfig, load_config
from ..sigil.codec import ProquintError
from ..sigil.eth import get_address
from ..utils import now_ts

now_option = click.option(
    "--now",
    type=int,
    default=None,
    help="Unix timestamp to evaluate at (default: local clock)",
)

preset_option = click.option(
    "--preset",
    type=click.Choice(["mainnet", "anvil"]),
    default=None,
    help="Network preset (default: PROQUINT_PRESET or mainnet)",
)


def fail(exc: ProquintError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


def resolve_now(now: Optional[int]) -> int:
    return now_ts() if now is None else now


def resolve_config(preset: Optional[str]) -> AppConfig:
    try:
        return load_config(preset)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)


def resolve_caller(caller: Optional[str]) -> str:
    """Return --caller, or the address derived from PRIVATE_KEY."""
    if caller is not None:
        return caller
    try:
        return get_address()
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        click.echo("Pass --caller or set PRIVATE_KEY.")
        sys.exit(1)


def echo_tx(tx: dict[str, Any]) -> None:
    click.echo(f"  To:           {tx['to']}")
    click.echo(f"  Function:     {tx['function']}")
    click.echo(f"  Value:        {tx['value']} wei")
    click.echo(f"  Data:         {tx['data']}")
