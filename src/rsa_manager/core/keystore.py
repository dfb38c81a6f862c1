from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import IOFailure

KEY_SUFFIX = ".key"
PUB_SUFFIX = ".pub"


class KeyStore:
    """Directory of ``<id>.key`` / ``<id>.key.pub`` pairs."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def private_key_path(self, host_id: str) -> Path:
        return self.directory / f"{host_id}{KEY_SUFFIX}"

    def public_key_path(self, host_id: str) -> Path:
        return self.directory / f"{host_id}{KEY_SUFFIX}{PUB_SUFFIX}"

    def ensure_exists(self) -> bool:
        if self.directory.is_dir():
            return False
        try:
            self.directory.mkdir(mode=0o700, parents=True)
            self.directory.chmod(0o700)
        except OSError as exc:
            raise IOFailure(f"Cannot create {self.directory}: {exc}") from exc
        return True

    def exists(self, host_id: str) -> bool:
        return self.private_key_path(host_id).is_file()

    def delete(self, host_id: str) -> None:
        for p in (self.private_key_path(host_id), self.public_key_path(host_id)):
            try:
                p.unlink(missing_ok=True)
            except OSError as exc:
                raise IOFailure(f"Cannot delete {p}: {exc}") from exc

    def list_ids(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return [
            p.name[: -len(KEY_SUFFIX)]
            for p in sorted(self.directory.glob(f"*{KEY_SUFFIX}"))
            if p.is_file()
        ]

    def secure(self, host_id: str) -> None:
        """Restrict permissions: 600 on the private key, 644 on the public one."""
        try:
            self.private_key_path(host_id).chmod(0o600)
            pub = self.public_key_path(host_id)
            if pub.exists():
                pub.chmod(0o644)
        except OSError as exc:
            raise IOFailure(f"Cannot set permissions for {host_id}: {exc}") from exc

    def read_public_key(self, host_id: str) -> str:
        p = self.public_key_path(host_id)
        try:
            return p.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise IOFailure(f"Cannot read {p}: {exc}") from exc
