from __future__ import annotations

from typing import List

from .keystore import KeyStore
from .model import KeyPairRecord
from .store import HostConfigFile


def list_key_pairs(key_store: KeyStore, config: HostConfigFile) -> List[KeyPairRecord]:
    """Cross-reference key files against host blocks. Read-only."""
    return [
        KeyPairRecord(
            id=host_id,
            private_key_path=key_store.private_key_path(host_id),
            public_key_path=key_store.public_key_path(host_id),
            has_matching_config=config.has_block(host_id),
        )
        for host_id in key_store.list_ids()
    ]
