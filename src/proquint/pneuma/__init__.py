"""
Pneuma - On-chain interaction layer for the ProquintNFT registry.

Provides a read-only JSON-RPC client, the registry ABI, and unsigned
calldata for the commit and reveal transactions.

Uses httpx + eth-abi instead of the heavyweight web3.py.
"""
