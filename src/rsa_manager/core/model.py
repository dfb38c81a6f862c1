from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

INDENT = "    "


@dataclass
class HostBlock:
    id: str
    hostname: str
    username: str
    identity_file: str

    def serialize(self) -> str:
        lines = [f"Host {self.id}"]
        lines.append(f"{INDENT}Hostname {self.hostname}")
        lines.append(f"{INDENT}User {self.username}")
        lines.append(f"{INDENT}IdentityFile {self.identity_file}")
        return "\n".join(lines) + "\n"


class KeyPairPaths(NamedTuple):
    private_key_path: Path
    public_key_path: Path


class KeyPairRecord(NamedTuple):
    id: str
    private_key_path: Path
    public_key_path: Path
    has_matching_config: bool
