from __future__ import annotations

import subprocess
from typing import Protocol

from .errors import GenerationFailure, IOFailure
from .keystore import KeyStore
from .model import KeyPairPaths

DEFAULT_TIMEOUT = 120


class KeyGenerator(Protocol):
    def generate(self, host_id: str, bit_length: int, comment: str) -> KeyPairPaths:
        """Create the key pair for host_id or raise GenerationFailure."""
        ...


class SshKeygen:
    """Generate RSA key pairs into a KeyStore by running ssh-keygen.

    Either both files exist afterwards or neither does: any artifact left by
    a failed run is removed before GenerationFailure is raised.
    """

    def __init__(self, key_store: KeyStore, timeout: float = DEFAULT_TIMEOUT, executable: str = "ssh-keygen") -> None:
        self.key_store = key_store
        self.timeout = timeout
        self.executable = executable

    def command(self, host_id: str, bit_length: int, comment: str) -> list[str]:
        priv = self.key_store.private_key_path(host_id)
        return [
            self.executable,
            "-t", "rsa",
            "-b", str(bit_length),
            "-f", str(priv),
            "-N", "",
            "-C", comment,
        ]

    def generate(self, host_id: str, bit_length: int, comment: str) -> KeyPairPaths:
        cmd = self.command(host_id, bit_length, comment)
        try:
            subprocess.run(cmd, check=True, stdin=subprocess.DEVNULL, timeout=self.timeout)
        except subprocess.CalledProcessError as exc:
            raise self._failure(host_id, f"{self.executable} exited with status {exc.returncode}") from exc
        except subprocess.TimeoutExpired as exc:
            raise self._failure(host_id, f"{self.executable} did not finish within {self.timeout}s") from exc
        except OSError as exc:
            raise self._failure(host_id, f"Cannot run {self.executable}: {exc}") from exc

        paths = KeyPairPaths(self.key_store.private_key_path(host_id), self.key_store.public_key_path(host_id))
        if not (paths.private_key_path.is_file() and paths.public_key_path.is_file()):
            raise self._failure(host_id, f"{self.executable} did not produce both key files for {host_id}")
        self.key_store.secure(host_id)
        return paths

    def _failure(self, host_id: str, message: str) -> GenerationFailure:
        """Remove partial artifacts and build the error to raise."""
        try:
            self.key_store.delete(host_id)
        except IOFailure as exc:
            message = f"{message}; partial key files may remain: {exc}"
        return GenerationFailure(message)
