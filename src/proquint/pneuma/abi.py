"""
ABI for the ProquintNFT registry.

Only the entries this client reads or builds calldata for are listed.
"""

from __future__ import annotations

from typing import Any

from eth_abi import decode, encode

from ..utils import from_hex, keccak256


def _fn(name: str, inputs: list[str], outputs: list[str], mutability: str = "view") -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": "", "type": t} for t in inputs],
        "outputs": [{"name": "", "type": t} for t in outputs],
        "stateMutability": mutability,
    }


PROQUINT_ABI: list[dict[str, Any]] = [
    _fn("commit", ["bytes32"], [], "nonpayable"),
    _fn("register", ["bytes32"], [], "payable"),
    _fn("registerTo", ["bytes32", "address"], [], "payable"),
    _fn("renew", ["bytes32"], [], "payable"),
    _fn("acceptInbox", ["bytes4"], [], "nonpayable"),
    _fn("rejectInbox", ["bytes4"], [], "nonpayable"),
    _fn("cleanInbox", ["bytes4"], [], "nonpayable"),
    _fn("shelve", ["bytes4"], [], "nonpayable"),
    _fn("safeTransferFrom", ["address", "address", "uint256"], [], "nonpayable"),
    _fn("ownerOf", ["uint256"], ["address"]),
    _fn("getExpiry", ["bytes4"], ["uint256"]),
    _fn("inboxExpiry", ["bytes4"], ["uint256"]),
    _fn("inboxCount", ["address"], ["uint256"]),
    _fn("primaryName", ["address"], ["bytes4"]),
]


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_selector(function_name: str, input_types: list[str]) -> bytes:
    """First 4 bytes of keccak256 of the canonical signature."""
    sig = f"{function_name}({','.join(input_types)})"
    return keccak256(sig.encode("utf-8"))[:4]


def encode_call(abi: list[dict[str, Any]], function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    selector = function_selector(function_name, input_types)
    encoded_args = encode(input_types, args) if args else b""
    return "0x" + selector.hex() + encoded_args.hex()


def decode_result(abi: list[dict[str, Any]], function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value or tuple)
    """
    func = find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    decoded = decode(output_types, from_hex(data))
    if len(decoded) == 1:
        return decoded[0]
    return decoded
