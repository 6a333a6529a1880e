"""
Client configuration.

Selects the RPC endpoint, block explorer and ProquintNFT deployment. Values
come from a preset, then ~/.proquint/.env, then PROQUINT_* environment
variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .ledger.constants import ZERO_ADDRESS
from .sigil.eth import PROQUINT_ENV


@dataclass(frozen=True)
class AppConfig:
    rpc_url: str
    explorer_url: str
    contract_address: str
    chain_id: int

    @property
    def has_contract(self) -> bool:
        return bool(self.contract_address) and self.contract_address.lower() != ZERO_ADDRESS

    def explorer_tx_url(self, tx_hash: str) -> str:
        if not self.explorer_url:
            return ""
        return f"{self.explorer_url}/tx/{tx_hash}"

    def explorer_address_url(self, address: str) -> str:
        if not self.explorer_url:
            return ""
        return f"{self.explorer_url}/address/{address}"


PRESETS: dict[str, AppConfig] = {
    "mainnet": AppConfig(
        rpc_url="",
        explorer_url="https://etherscan.io",
        contract_address=ZERO_ADDRESS,
        chain_id=1,
    ),
    "anvil": AppConfig(
        rpc_url="http://localhost:8545",
        explorer_url="",
        contract_address="0x5fbdb2315678afecb367f032d93f642f64180aa3",
        chain_id=31337,
    ),
}

DEFAULT_PRESET = "mainnet"


def load_config(preset: Optional[str] = None, env_path: Optional[Path] = None) -> AppConfig:
    """
    Resolve the effective configuration.

    Args:
        preset: Preset name; falls back to PROQUINT_PRESET, then mainnet
        env_path: .env file to load first (default: ~/.proquint/.env)

    Raises:
        ValueError: On an unknown preset or a non-integer chain id
    """
    env_path = env_path or PROQUINT_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    name = preset or os.environ.get("PROQUINT_PRESET", DEFAULT_PRESET)
    if name not in PRESETS:
        raise ValueError(f"Unknown preset {name!r}. Choose from: {', '.join(sorted(PRESETS))}")
    config = PRESETS[name]

    overrides: dict = {}
    if "PROQUINT_RPC_URL" in os.environ:
        overrides["rpc_url"] = os.environ["PROQUINT_RPC_URL"]
    if "PROQUINT_EXPLORER_URL" in os.environ:
        overrides["explorer_url"] = os.environ["PROQUINT_EXPLORER_URL"].rstrip("/")
    if "PROQUINT_CONTRACT_ADDRESS" in os.environ:
        overrides["contract_address"] = os.environ["PROQUINT_CONTRACT_ADDRESS"]
    if "PROQUINT_CHAIN_ID" in os.environ:
        overrides["chain_id"] = int(os.environ["PROQUINT_CHAIN_ID"])

    return replace(config, **overrides)
