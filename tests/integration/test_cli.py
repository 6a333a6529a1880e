"""
CLI integration tests using Click's test runner.

Tests verify that the CLI commands work end-to-end via the Click
CliRunner, without requiring network access or chain interaction.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from proquint.cli import cli
from proquint.ledger.constants import DAY
from proquint.pneuma.rpc import NameState

CALLER = "0x" + "ab" * 20
OTHER = "0x" + "cd" * 20
PRIVATE_KEY = "0x" + "11" * 32


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def proquint_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate ~/.proquint and the PROQUINT_* environment."""
    home = tmp_path / ".proquint"
    home.mkdir()
    for name in [
        "PRIVATE_KEY",
        "PROQUINT_PRESET",
        "PROQUINT_RPC_URL",
        "PROQUINT_CONTRACT_ADDRESS",
        "PROQUINT_CHAIN_ID",
        "PROQUINT_EXPLORER_URL",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PROQUINT_COMMITMENTS_DIR", str(home / "commitments"))
    monkeypatch.setattr("proquint.config.PROQUINT_ENV", home / ".env")
    monkeypatch.setattr("proquint.sigil.eth.PROQUINT_ENV", home / ".env")
    return home


def _commit(runner: CliRunner, *args: str) -> str:
    result = runner.invoke(cli, ["commit", "dabab-fabab", "--caller", CALLER, "--preset", "anvil", *args])
    assert result.exit_code == 0, result.output
    line = next(l for l in result.output.splitlines() if "Commitment:" in l)
    return line.split()[-1]


class TestVersionAndInfo:
    """Test basic CLI commands."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_banner(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "P R O Q U I N T" in result.output

    def test_config(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["config", "--preset", "anvil"])
        assert result.exit_code == 0
        assert "31337" in result.output


class TestWhoami:
    """Test wallet identity display."""

    def test_whoami_with_wallet(self, runner: CliRunner) -> None:
        with patch.dict(os.environ, {"PRIVATE_KEY": PRIVATE_KEY}):
            result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 0
        assert "Address: 0x" in result.output

    def test_whoami_without_wallet(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 1
        assert "No wallet found" in result.output


class TestNames:
    """Test offline codec and pricing commands."""

    def test_encode_hex(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "0x00020001"])
        assert result.exit_code == 0
        assert result.output.strip() == "dabab-fabab"

    def test_encode_int(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "65538"])
        assert result.output.strip() == "dabab-fabab"

    def test_encode_invalid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["encode", "0x123456789"])
        assert result.exit_code == 1

    def test_decode(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["decode", "FABAB-DABAB"])
        assert result.exit_code == 0
        assert "0x00010002" in result.output
        assert "dabab-fabab" in result.output

    def test_decode_lossy_warns(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["decode", "cecec-babab"])
        assert result.exit_code == 0
        assert "0x00000000" in result.output
        assert "not strict" in result.output

    def test_decode_bad_length(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["decode", "dabab"])
        assert result.exit_code == 2

    def test_random(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["random"])
        assert result.exit_code == 0
        assert len(result.output.strip()) == 11

    def test_quote_palindrome(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["quote", "zuzuz-zuzuz"])
        assert result.exit_code == 0
        assert "Palindrome" in result.output
        assert "1200000000000000 wei" in result.output

    def test_quote_years_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["quote", "dabab-fabab", "--years", "13"])
        assert result.exit_code == 3


class TestWindows:
    """Test offline lifecycle commands."""

    def test_refund(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["refund", "--remaining", str(90 * DAY)])
        assert result.exit_code == 0
        assert "3 whole months" in result.output
        assert "60000000000000 wei" in result.output

    def test_refund_needs_input(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["refund"])
        assert result.exit_code == 1

    def test_inbox_window(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["inbox-window", "--count", "255", "--now", "0"])
        assert result.exit_code == 0
        assert "7d 0h" in result.output

    def test_inbox_window_range(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["inbox-window", "--count", "256"])
        assert result.exit_code != 0

    def test_lifecycle_active(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["lifecycle", "--expiry", "1000", "--now", "500"])
        assert result.exit_code == 0
        assert "Active" in result.output
        assert "not in an inbox" in result.output

    def test_lifecycle_never_registered(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["lifecycle", "--expiry", "0", "--now", "500"])
        assert "Never registered" in result.output

    def test_lifecycle_inbox_burnable(self, runner: CliRunner) -> None:
        now = 100 * DAY
        result = runner.invoke(
            cli,
            ["lifecycle", "--expiry", str(now + 90 * DAY), "--inbox-expiry", str(now - 8 * DAY), "--now", str(now)],
        )
        assert result.exit_code == 0
        assert "Burnable" in result.output


class TestCommitReveal:
    """Test the full commit / confirm / reveal flow against the file store."""

    def test_commit_prints_calldata(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["commit", "dabab-fabab", "--caller", CALLER, "--preset", "anvil"])
        assert result.exit_code == 0
        assert "Entry point:  register" in result.output
        assert "Function:     commit" in result.output

    def test_commit_to_other(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["commit", "dabab-fabab", "--caller", CALLER, "--to", OTHER, "--preset", "anvil"]
        )
        assert result.exit_code == 0
        assert "registerTo" in result.output
        assert "inbox" in result.output

    def test_commit_without_caller(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["commit", "dabab-fabab"])
        assert result.exit_code == 1

    def test_commit_bad_years(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["commit", "dabab-fabab", "--caller", CALLER, "--years", "0"])
        assert result.exit_code == 3

    def test_full_flow(self, runner: CliRunner) -> None:
        key = _commit(runner)

        result = runner.invoke(cli, ["status", key])
        assert "Unconfirmed" in result.output

        result = runner.invoke(cli, ["reveal", key, "--now", "1000"])
        assert result.exit_code == 6

        result = runner.invoke(cli, ["confirm", key, "--at", "1000"])
        assert result.exit_code == 0

        result = runner.invoke(cli, ["status", key, "--now", "1002"])
        assert "Waiting: 3s left" in result.output

        result = runner.invoke(cli, ["status", key, "--now", "1005"])
        assert "Ready to reveal" in result.output

        result = runner.invoke(cli, ["reveal", key, "--now", "1003"])
        assert result.exit_code == 4

        result = runner.invoke(cli, ["reveal", key, "--now", "1901"])
        assert result.exit_code == 5

        result = runner.invoke(cli, ["reveal", key, "--now", "1010", "--preset", "anvil"])
        assert result.exit_code == 0
        assert "Function:     register" in result.output
        assert "240000000000000 wei" in result.output

    def test_confirm_from_receipt(self, runner: CliRunner) -> None:
        key = _commit(runner)
        with patch("proquint.theurgy.register.get_confirmation_time", return_value=5000):
            result = runner.invoke(cli, ["confirm", key, "--tx", "0xfeed", "--preset", "anvil"])
        assert result.exit_code == 0
        result = runner.invoke(cli, ["status", key, "--now", "5010"])
        assert "Ready to reveal" in result.output

    def test_confirm_pending(self, runner: CliRunner) -> None:
        key = _commit(runner)
        with patch("proquint.theurgy.register.get_confirmation_time", return_value=None):
            result = runner.invoke(cli, ["confirm", key, "--tx", "0xfeed", "--preset", "anvil"])
        assert result.exit_code == 1

    def test_unknown_commitment(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["status", "0x" + "00" * 32])
        assert result.exit_code == 7

    def test_list_and_clear(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["commitments", "list"])
        assert "No stored commitments." in result.output

        key = _commit(runner)
        result = runner.invoke(cli, ["commitments", "list"])
        assert key in result.output
        assert "unconfirmed" in result.output

        result = runner.invoke(cli, ["commitments", "clear", key])
        assert f"Cleared: {key}" in result.output
        result = runner.invoke(cli, ["commitments", "list"])
        assert "No stored commitments." in result.output

    def test_unreadable_store_keeps_file(self, runner: CliRunner, proquint_home: Path) -> None:
        key = _commit(runner)
        path = proquint_home / "commitments" / f"commitment_{key}.json"

        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            listed = runner.invoke(cli, ["commitments", "list"])
            status = runner.invoke(cli, ["status", key])

        assert listed.exit_code == 1
        assert status.exit_code == 1
        assert path.exists()
        assert runner.invoke(cli, ["status", key]).exit_code == 0


class TestDivine:
    """Test on-chain status with mocked registry reads."""

    def test_requires_contract(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["divine", "dabab-fabab", "--preset", "mainnet"])
        assert result.exit_code == 1

    def test_active_name(self, runner: CliRunner) -> None:
        with patch("proquint.theurgy.divine.get_expiry", return_value=2000 * DAY), patch(
            "proquint.theurgy.divine.get_inbox_expiry", return_value=0
        ):
            result = runner.invoke(cli, ["divine", "dabab-fabab", "--now", str(1000 * DAY), "--preset", "anvil"])
        assert result.exit_code == 0
        assert "Active" in result.output
        assert "Divine Complete" in result.output

    def test_block_time_used(self, runner: CliRunner) -> None:
        with patch("proquint.theurgy.divine.get_expiry", return_value=1000), patch(
            "proquint.theurgy.divine.get_inbox_expiry", return_value=0
        ), patch("proquint.theurgy.divine.get_block_timestamp", return_value=1000 + 301 * DAY):
            result = runner.invoke(cli, ["divine", "dabab-fabab", "--preset", "anvil"])
        assert result.exit_code == 0
        assert "Premium" in result.output

    def test_rpc_failure(self, runner: CliRunner) -> None:
        with patch("proquint.theurgy.divine.get_expiry", side_effect=RuntimeError("down")):
            result = runner.invoke(cli, ["divine", "dabab-fabab", "--preset", "anvil"])
        assert result.exit_code == 1


class TestRenew:
    """Test renewal calldata."""

    def test_renew_anvil(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["renew", "fabab-dabab", "--years", "2", "--preset", "anvil"])
        assert result.exit_code == 0, result.output
        assert "Years:        +2" in result.output
        assert "0x0200010002" + "00" * 27 in result.output
        assert "Function:     renew" in result.output
        assert "720000000000000 wei" in result.output

    def test_renew_without_contract(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["renew", "dabab-fabab", "--preset", "mainnet"])
        assert result.exit_code == 0
        assert "No registry contract configured" in result.output
        assert "Function:" not in result.output

    def test_renew_bad_years(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["renew", "dabab-fabab", "--years", "13", "--preset", "anvil"])
        assert result.exit_code == 3

    def test_renew_bad_name(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["renew", "dabab", "--preset", "anvil"])
        assert result.exit_code == 2


NOW = 1000 * DAY


def _state(**overrides) -> NameState:
    fields = {
        "name_id": b"\x00\x01\x00\x02",
        "owner": CALLER,
        "expiry": 2000 * DAY,
        "inbox_expiry": 0,
        "owner_has_primary": False,
        "now": NOW,
    }
    fields.update(overrides)
    return NameState(**fields)


def _run(runner: CliRunner, state: NameState, *args: str):
    with patch("proquint.theurgy.inbox.read_name_state", return_value=state):
        return runner.invoke(cli, [*args, "--preset", "anvil"])


class TestInboxActions:
    """Test inbox actions against a mocked registry snapshot."""

    def test_accept_by_receiver(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW + DAY)
        result = _run(runner, state, "accept", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 0, result.output
        assert "Function:     acceptInbox" in result.output
        assert "on behalf" not in result.output

    def test_accept_by_other_in_owner_window(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW + DAY)
        result = _run(runner, state, "accept", "dabab-fabab", "--caller", OTHER)
        assert result.exit_code == 8

    def test_accept_by_other_in_open_window(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW - DAY)
        result = _run(runner, state, "accept", "dabab-fabab", "--caller", OTHER)
        assert result.exit_code == 0, result.output
        assert "Claiming on behalf of the receiver." in result.output

    def test_accept_blocked_by_primary(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW + DAY, owner_has_primary=True)
        result = _run(runner, state, "accept", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_accept_after_windows(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW - 8 * DAY)
        result = _run(runner, state, "accept", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_accept_not_in_inbox(self, runner: CliRunner) -> None:
        result = _run(runner, _state(), "accept", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_reject_by_receiver(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW + DAY)
        result = _run(runner, state, "reject", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 0, result.output
        assert "Refund:" in result.output
        assert "Function:     rejectInbox" in result.output

    def test_reject_by_other(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW + DAY)
        result = _run(runner, state, "reject", "dabab-fabab", "--caller", OTHER)
        assert result.exit_code == 8

    def test_burn_when_burnable(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW - 8 * DAY)
        result = _run(runner, state, "burn", "dabab-fabab", "--caller", OTHER)
        assert result.exit_code == 0, result.output
        assert "Burn reward:" in result.output
        assert "Function:     cleanInbox" in result.output

    def test_burn_while_claimable(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW - DAY)
        result = _run(runner, state, "burn", "dabab-fabab", "--caller", OTHER)
        assert result.exit_code == 8

    def test_burn_by_receiver(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW - 8 * DAY)
        result = _run(runner, state, "burn", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_shelve_active_primary(self, runner: CliRunner) -> None:
        result = _run(runner, _state(), "shelve", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 0, result.output
        assert "7 day penalty" in result.output
        assert "Function:     shelve" in result.output

    def test_shelve_inbox_entry(self, runner: CliRunner) -> None:
        state = _state(inbox_expiry=NOW + DAY)
        result = _run(runner, state, "shelve", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_shelve_expired(self, runner: CliRunner) -> None:
        state = _state(expiry=NOW - DAY)
        result = _run(runner, state, "shelve", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_unregistered_name(self, runner: CliRunner) -> None:
        state = _state(owner=None, expiry=0)
        result = _run(runner, state, "shelve", "dabab-fabab", "--caller", CALLER)
        assert result.exit_code == 8

    def test_requires_contract(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["accept", "dabab-fabab", "--caller", CALLER, "--preset", "mainnet"])
        assert result.exit_code == 1

    def test_rpc_failure(self, runner: CliRunner) -> None:
        with patch("proquint.theurgy.inbox.read_name_state", side_effect=RuntimeError("down")):
            result = runner.invoke(cli, ["burn", "dabab-fabab", "--caller", OTHER, "--preset", "anvil"])
        assert result.exit_code == 1

    def test_caller_from_private_key(self, runner: CliRunner) -> None:
        with patch.dict(os.environ, {"PRIVATE_KEY": PRIVATE_KEY}):
            result = _run(runner, _state(owner=OTHER), "shelve", "dabab-fabab")
        assert result.exit_code == 8

    def test_missing_caller(self, runner: CliRunner) -> None:
        result = _run(runner, _state(), "shelve", "dabab-fabab")
        assert result.exit_code == 1


class TestTransfer:
    """Test transfers into another inbox."""

    def test_owner_transfers(self, runner: CliRunner) -> None:
        result = _run(runner, _state(), "transfer", "dabab-fabab", OTHER, "--caller", CALLER)
        assert result.exit_code == 0, result.output
        assert "Function:     safeTransferFrom" in result.output
        assert "7 day penalty" in result.output

    def test_non_owner_refused(self, runner: CliRunner) -> None:
        result = _run(runner, _state(), "transfer", "dabab-fabab", OTHER, "--caller", OTHER)
        assert result.exit_code == 8

    def test_zero_recipient(self, runner: CliRunner) -> None:
        result = _run(runner, _state(), "transfer", "dabab-fabab", "0x" + "00" * 20, "--caller", CALLER)
        assert result.exit_code == 1
