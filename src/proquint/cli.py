"""
Proquint CLI

Command-line interface for proquint names on the ProquintNFT registry.

Nothing here signs or sends transactions: commands print the calldata for
your own wallet to send.

Commands:
  encode        - Name id -> proquint
  decode        - Proquint -> normalized name id
  random        - Random name
  quote         - Registration price
  refund        - Refund and burn reward
  inbox-window  - Claim window for a new inbox item
  lifecycle     - Classify registration / inbox phases
  commit        - Build a registration commitment
  confirm       - Record commit confirmation time
  status        - Commitment age window
  reveal        - Registration calldata
  renew         - Renewal calldata
  accept        - Claim an inbox entry as primary
  reject        - Refund an inbox entry (receiver)
  burn          - Burn an expired inbox entry for a reward
  shelve        - Move your primary into your inbox
  transfer      - Send a name to another inbox
  commitments   - Manage stored commitments
  divine        - Query on-chain status
  whoami        - Show current wallet address
  config        - Show effective configuration
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from .sigil.eth import get_address, load_private_key
from .theurgy.common import preset_option, resolve_config


# ============ Constants ============

VERSION = "1.0.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="proquint")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Proquint — pronounceable names on Ethereum."""
    if ctx.invoked_subcommand is None:
        click.echo(
            click.style("  ◆ ", fg="cyan")
            + click.style("P R O Q U I N T", fg="bright_white", bold=True)
            + click.style(f"  v{VERSION}", dim=True)
        )
        click.echo()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.divine import divine
from .theurgy.inbox import accept, burn, reject, renew, shelve, transfer
from .theurgy.names import decode, encode, quote, random_cmd
from .theurgy.register import commit, commitments, confirm, reveal, status
from .theurgy.windows import inbox_window, lifecycle, refund

cli.add_command(encode)
cli.add_command(decode)
cli.add_command(random_cmd)
cli.add_command(quote)
cli.add_command(refund)
cli.add_command(inbox_window)
cli.add_command(lifecycle)
cli.add_command(commit)
cli.add_command(confirm)
cli.add_command(status)
cli.add_command(reveal)
cli.add_command(commitments)
cli.add_command(renew)
cli.add_command(accept)
cli.add_command(reject)
cli.add_command(burn)
cli.add_command(shelve)
cli.add_command(transfer)
cli.add_command(divine)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show current wallet identity."""
    try:
        pk = load_private_key()
        address = get_address(pk)
        click.echo(f"Address: {address}")
    except ValueError:
        click.echo("No wallet found.")
        click.echo("Set PRIVATE_KEY in the environment or in ~/.proquint/.env.")
        sys.exit(1)


@cli.command("config")
@preset_option
def show_config(preset: Optional[str]) -> None:
    """Show the effective network configuration."""
    config = resolve_config(preset)
    click.echo(f"  RPC URL:      {config.rpc_url or '(not set)'}")
    click.echo(f"  Chain ID:     {config.chain_id}")
    click.echo(f"  Contract:     {config.contract_address}")
    if not config.has_contract:
        click.secho("                (no registry deployed for this preset)", fg="yellow")
    click.echo(f"  Explorer:     {config.explorer_url or '(none)'}")


# ============ Entry Points ============


def main() -> None:
    """Proquint CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
