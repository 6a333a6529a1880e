"""
Commitment Store

Keeps commitments between the commit and reveal steps, keyed by
commitment hash. Callers inject a store; the protocol functions never
touch it.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from .sigil.commitment import Commitment, CommitmentNotFound


class CommitmentStore(Protocol):
    def get(self, key: str) -> Optional[Commitment]: ...

    def set(self, commitment: Commitment) -> None: ...

    def clear(self, key: Optional[str] = None) -> None: ...

    def list(self) -> list[Commitment]: ...


def require(store: CommitmentStore, key: str) -> Commitment:
    """
    Raises:
        CommitmentNotFound: If nothing is stored under key
    """
    commitment = store.get(key)
    if commitment is None:
        raise CommitmentNotFound(key)
    return commitment


def _normalize_key(key: str) -> str:
    key = key.lower()
    return key if key.startswith("0x") else "0x" + key


@dataclass
class MemoryCommitmentStore:
    entries: dict[str, Commitment] = field(default_factory=dict)

    def get(self, key: str) -> Optional[Commitment]:
        return self.entries.get(_normalize_key(key))

    def set(self, commitment: Commitment) -> None:
        self.entries[commitment.key] = commitment

    def clear(self, key: Optional[str] = None) -> None:
        if key:
            self.entries.pop(_normalize_key(key), None)
        else:
            self.entries.clear()

    def list(self) -> list[Commitment]:
        return list(self.entries.values())


@dataclass
class FileCommitmentStore:
    """
    Commitment store backed by one JSON file per commitment.

    Files hold the secret, so they are written owner-readable only.
    Entries that fail to parse or whose hash does not match their data are
    moved aside to `*.json.corrupt` on read; I/O errors are raised.
    """

    store_dir: Path = field(
        default_factory=lambda: Path.home() / ".proquint" / "commitments"
    )

    def __post_init__(self) -> None:
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.store_dir / f"commitment_{_normalize_key(key)}.json"

    def get(self, key: str) -> Optional[Commitment]:
        path = self._path(key)
        if not path.exists():
            return None

        # Read errors propagate: the file holds the only copy of the secret.
        text = path.read_text(encoding="utf-8")
        try:
            return Commitment.from_dict(json.loads(text))
        except (TypeError, KeyError, ValueError):
            path.replace(path.with_name(path.name + ".corrupt"))
            return None

    def set(self, commitment: Commitment) -> None:
        path = self._path(commitment.key)
        path.write_text(
            json.dumps(commitment.to_dict(), indent=2, sort_keys=True),
            encoding="utf-8",
        )
        self._set_secure_permissions(path)

    def clear(self, key: Optional[str] = None) -> None:
        if key:
            self._path(key).unlink(missing_ok=True)
        else:
            for path in self.store_dir.glob("commitment_*.json"):
                path.unlink(missing_ok=True)

    def list(self) -> list[Commitment]:
        results = []
        for path in sorted(self.store_dir.glob("commitment_*.json")):
            commitment = self.get(path.stem.replace("commitment_", "", 1))
            if commitment is not None:
                results.append(commitment)
        return results

    def _set_secure_permissions(self, path: Path) -> None:
        if os.name != "nt":
            path.chmod(0o600)
