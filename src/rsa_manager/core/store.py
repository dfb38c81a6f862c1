from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from . import parser
from .errors import IOFailure
from .model import HostBlock


def atomic_write_text(path: Path, text: str) -> None:
    """Replace path with text via a sibling temp file and a rename.

    The original is never truncated; on any failure it is left as it was and
    the temp file is cleaned up.
    """
    tmp = path.with_name(path.name + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", errors="surrogateescape", newline="") as fh:
            fh.write(text)
        if path.exists():
            tmp.chmod(path.stat().st_mode & 0o777)
        else:
            tmp.chmod(0o600)
        tmp.replace(path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise IOFailure(f"Cannot update {path}: {exc}") from exc


class HostConfigFile:
    """Keeps exactly one ``Host`` block per identifier in an ssh config file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def ensure_exists(self) -> bool:
        if self.path.exists():
            return False
        try:
            self.path.touch(mode=0o600)
            self.path.chmod(0o600)
        except OSError as exc:
            raise IOFailure(f"Cannot create {self.path}: {exc}") from exc
        return True

    def _read_lines(self) -> List[str]:
        try:
            with self.path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as fh:
                return parser.split_lines(fh.read())
        except OSError as exc:
            raise IOFailure(f"Cannot read {self.path}: {exc}") from exc

    def read_text(self) -> str:
        return "".join(self._read_lines())

    def remove_block(self, host_id: str) -> None:
        lines = self._read_lines()
        kept = parser.strip_block(lines, host_id)
        if len(kept) == len(lines):
            return
        atomic_write_text(self.path, "".join(kept))

    def upsert_block(self, host_id: str, hostname: str, username: str, identity_file: str) -> None:
        block = HostBlock(id=host_id, hostname=hostname, username=username, identity_file=identity_file)
        text = "".join(parser.strip_block(self._read_lines(), host_id))
        if text and not text.endswith("\n"):
            text += "\n"
        atomic_write_text(self.path, text + "\n" + block.serialize())

    def has_block(self, host_id: str) -> bool:
        if not self.path.exists():
            return False
        return parser.has_block(self.read_text(), host_id)

    def get_block(self, host_id: str) -> Optional[HostBlock]:
        return parser.find_block(self.read_text(), host_id)
