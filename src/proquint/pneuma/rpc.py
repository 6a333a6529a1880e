"""
JSON-RPC Client for the ProquintNFT registry.

Read-only: eth_call against the registry plus block and receipt lookups.
Uses httpx for HTTP and eth-abi for encoding. Each call is a single
request; retrying is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..config import AppConfig
from ..ledger.constants import ZERO_ID
from ..sigil.codec import BytesLike, normalize, to_bytes4, to_token_id
from ..utils import checksum_address
from .abi import PROQUINT_ABI, decode_result, encode_call


def _rpc_call(method: str, params: list, rpc_url: str) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        rpc_url: RPC endpoint URL

    Returns:
        Result field from the RPC response

    Raises:
        RuntimeError: If no endpoint is configured or the node returns an error
    """
    if not rpc_url:
        raise RuntimeError("No RPC URL configured. Set PROQUINT_RPC_URL or pick a preset.")

    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    with httpx.Client(timeout=30) as client:
        response = client.post(rpc_url, json=payload)
        response.raise_for_status()
        data = response.json()

    if "error" in data:
        raise RuntimeError(f"RPC error: {data['error']}")

    return data.get("result")


def read_contract(
    config: AppConfig,
    function_name: str,
    args: Optional[list] = None,
    abi: Optional[list] = None,
) -> Any:
    """
    Read from the registry contract (eth_call).

    Returns:
        Decoded return value(s), or None for empty return data
    """
    if not config.has_contract:
        raise RuntimeError("No registry contract configured. Set PROQUINT_CONTRACT_ADDRESS.")

    abi = abi or PROQUINT_ABI
    calldata = encode_call(abi, function_name, args or [])

    result = _rpc_call(
        "eth_call",
        [{"to": config.contract_address, "data": calldata}, "latest"],
        rpc_url=config.rpc_url,
    )

    if result is None or result == "0x":
        return None

    return decode_result(abi, function_name, result)


def get_block_timestamp(config: AppConfig, block: str = "latest") -> int:
    """Timestamp of a block, used as "now" for window checks."""
    result = _rpc_call("eth_getBlockByNumber", [block, False], rpc_url=config.rpc_url)
    if result is None:
        raise RuntimeError(f"Block {block} not found")
    return int(result["timestamp"], 16)


def get_transaction_receipt(config: AppConfig, tx_hash: str) -> Optional[dict]:
    """Receipt of a transaction, or None while it is pending."""
    return _rpc_call("eth_getTransactionReceipt", [tx_hash], rpc_url=config.rpc_url)


def get_confirmation_time(config: AppConfig, tx_hash: str) -> Optional[int]:
    """
    Timestamp of the block that confirmed a transaction.

    Returns:
        Block timestamp, or None if the transaction is still pending

    Raises:
        RuntimeError: If the transaction reverted
    """
    receipt = get_transaction_receipt(config, tx_hash)
    if receipt is None:
        return None
    if int(receipt.get("status", "0x0"), 16) != 1:
        raise RuntimeError(f"Transaction {tx_hash} reverted")
    return get_block_timestamp(config, receipt["blockNumber"])


# ============ Registry reads ============


def get_expiry(config: AppConfig, name_id: BytesLike) -> int:
    return read_contract(config, "getExpiry", [to_bytes4(name_id)]) or 0


def get_inbox_expiry(config: AppConfig, name_id: BytesLike) -> int:
    return read_contract(config, "inboxExpiry", [to_bytes4(name_id)]) or 0


def get_inbox_count(config: AppConfig, address: str) -> int:
    return read_contract(config, "inboxCount", [checksum_address(address)]) or 0


def get_primary_name(config: AppConfig, address: str) -> Optional[bytes]:
    """Primary name id of an address, or None when it holds none."""
    primary = read_contract(config, "primaryName", [checksum_address(address)])
    if not primary or primary == ZERO_ID:
        return None
    return bytes(primary)


def get_owner(config: AppConfig, name_id: BytesLike) -> Optional[str]:
    """Current ERC-721 holder of a name (the receiver while it sits in an inbox)."""
    owner = read_contract(config, "ownerOf", [to_token_id(name_id)])
    if not owner or int(owner, 16) == 0:
        return None
    return checksum_address(owner)


@dataclass(frozen=True)
class NameState:
    name_id: bytes
    owner: Optional[str]
    expiry: int
    inbox_expiry: int
    owner_has_primary: bool
    now: int


def read_name_state(config: AppConfig, name_id: BytesLike, now: Optional[int] = None) -> NameState:
    """
    Snapshot of everything the inbox actions are gated on.

    The owner is only looked up for names that were ever registered;
    ownerOf reverts for unminted ids.

    Args:
        now: Timestamp to evaluate at (default: latest block timestamp)
    """
    name_id = normalize(name_id)
    expiry = get_expiry(config, name_id)
    owner = get_owner(config, name_id) if expiry else None
    return NameState(
        name_id=name_id,
        owner=owner,
        expiry=expiry,
        inbox_expiry=get_inbox_expiry(config, name_id),
        owner_has_primary=owner is not None and get_primary_name(config, owner) is not None,
        now=now if now is not None else get_block_timestamp(config),
    )
