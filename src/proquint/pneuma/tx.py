"""
Transaction Builder - unsigned registry calls.

Produces {to, data, value} dicts for the commit and reveal steps, renewal,
the inbox actions and transfers. Signing and sending belong to the
user's wallet.
"""

from __future__ import annotations

from typing import Any

from ..config import AppConfig
from ..ledger.constants import ZERO_ADDRESS
from ..ledger.pricing import registration_price
from ..sigil.codec import BytesLike, is_palindrome, normalize, to_token_id
from ..sigil.commitment import Commitment, pack_renew_input
from ..utils import checksum_address
from .abi import PROQUINT_ABI, encode_call


def build_contract_tx(
    config: AppConfig,
    function_name: str,
    args: list,
    value: int = 0,
) -> dict[str, Any]:
    if not config.has_contract:
        raise RuntimeError("No registry contract configured. Set PROQUINT_CONTRACT_ADDRESS.")
    return {
        "to": config.contract_address,
        "function": function_name,
        "data": encode_call(PROQUINT_ABI, function_name, args),
        "value": value,
        "chainId": config.chain_id,
    }


def build_commit_tx(config: AppConfig, commitment: Commitment) -> dict[str, Any]:
    return build_contract_tx(config, "commit", [commitment.commitment_hash])


def build_reveal_tx(config: AppConfig, commitment: Commitment) -> dict[str, Any]:
    """
    Reveal call carrying the unmodified packed input and the price.

    register(input) when minting to the caller as primary,
    registerTo(input, to) otherwise.
    """
    value = registration_price(commitment.years, is_palindrome(commitment.name_id))
    if commitment.is_register_to:
        return build_contract_tx(
            config,
            "registerTo",
            [commitment.packed_input, commitment.recipient],
            value=value,
        )
    return build_contract_tx(config, "register", [commitment.packed_input], value=value)


def build_renew_tx(config: AppConfig, name_id: BytesLike, years: int) -> dict[str, Any]:
    """renew(input) paying the same price as a fresh registration."""
    value = registration_price(years, is_palindrome(name_id))
    return build_contract_tx(config, "renew", [pack_renew_input(years, name_id)], value=value)


INBOX_ACTIONS = ("acceptInbox", "rejectInbox", "cleanInbox", "shelve")


def build_inbox_tx(config: AppConfig, function_name: str, name_id: BytesLike) -> dict[str, Any]:
    """
    One of the single-argument inbox calls:

    - acceptInbox: inbox -> primary
    - rejectInbox: receiver burns for a refund
    - cleanInbox:  anyone burns an expired entry for a reward
    - shelve:      primary -> owner's inbox (7 day penalty)
    """
    if function_name not in INBOX_ACTIONS:
        raise ValueError(f"Not an inbox action: {function_name}")
    return build_contract_tx(config, function_name, [normalize(name_id)])


def build_transfer_tx(config: AppConfig, sender: str, recipient: str, name_id: BytesLike) -> dict[str, Any]:
    """
    safeTransferFrom(sender, recipient, tokenId). The name lands in the
    recipient's inbox with its expiry reduced by the transfer penalty.

    Raises:
        ValueError: If recipient is the zero address (burn with cleanInbox instead)
    """
    recipient = checksum_address(recipient)
    if recipient.lower() == ZERO_ADDRESS:
        raise ValueError("Cannot transfer to the zero address")
    return build_contract_tx(
        config,
        "safeTransferFrom",
        [checksum_address(sender), recipient, to_token_id(name_id)],
    )
