from __future__ import annotations

from typing import Optional

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Footer, Header, ListItem, ListView, Static

from ..core.errors import RsaManagerError
from ..core.inventory import list_key_pairs
from ..core.keystore import KeyStore
from ..core.model import HostBlock, KeyPairRecord
from ..core.store import HostConfigFile


def describe_record(record: KeyPairRecord, block: Optional[HostBlock], public_key: Optional[str]) -> str:
    """Text for the detail pane: key paths, the Host block, the public key."""
    lines = [
        f"Private key: {record.private_key_path}",
        f"Public key:  {record.public_key_path}",
        "",
    ]
    if block is not None:
        lines.append(block.serialize().rstrip("\n"))
    elif record.has_matching_config:
        lines.append(f"Host {record.id} (incomplete entry)")
    else:
        lines.append("No matching Host entry in ssh config")
    if public_key:
        lines.extend(["", public_key])
    return "\n".join(lines)


class KeyItem(ListItem):
    def __init__(self, record: KeyPairRecord) -> None:
        mark = "configured" if record.has_matching_config else "no config"
        super().__init__(Static(f"{record.id} ({mark})", markup=False))
        self.record = record


class KeyList(ListView):  # pragma: no cover - thin widget wrapper
    pass


class KeyDetail(Vertical):
    status: reactive[str] = reactive("")

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Static("Key Details", id="title")
        self.summary = Static(id="key-summary", markup=False)
        yield self.summary
        self.status_widget = Static(id="status", markup=False)
        yield self.status_widget

    def watch_status(self, value: str) -> None:  # pragma: no cover - trivial
        self.status_widget.update(value)

    def show(self, record: Optional[KeyPairRecord], block: Optional[HostBlock], public_key: Optional[str]) -> None:
        if record is None:
            self.summary.update("No key selected")
            return
        self.summary.update(describe_record(record, block, public_key))


class KeyInventoryApp(App):  # pragma: no cover - UI glue
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        ("d", "delete", "Delete"),
    ]

    def __init__(self, key_store: KeyStore, config: HostConfigFile) -> None:
        super().__init__()
        self.key_store = key_store
        self.config = config
        self.current_record: Optional[KeyPairRecord] = None

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Header(show_clock=True)
        self.key_list = KeyList(id="keys")
        self.detail = KeyDetail(id="detail")
        yield Horizontal(
            Vertical(Static("Keys", id="keys_title"), self.key_list, id="left"),
            self.detail,
            id="main",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_keys()

    def refresh_keys(self) -> None:
        self.key_list.clear()
        try:
            records = list_key_pairs(self.key_store, self.config)
        except RsaManagerError as exc:
            self.detail.status = str(exc)
            records = []
        for rec in records:
            self.key_list.append(KeyItem(rec))
        if records:
            self.select_record(records[0])
            self.key_list.index = 0
        else:
            self.select_record(None)

    def select_record(self, record: Optional[KeyPairRecord]) -> None:
        self.current_record = record
        block = public_key = None
        if record is not None:
            try:
                block = self.config.get_block(record.id)
                if record.public_key_path.exists():
                    public_key = self.key_store.read_public_key(record.id)
            except RsaManagerError as exc:
                self.detail.status = str(exc)
        self.detail.show(record, block, public_key)

    def on_list_view_highlighted(self, message: ListView.Highlighted) -> None:
        if isinstance(message.item, KeyItem):
            self.select_record(message.item.record)

    def action_refresh(self) -> None:
        self.refresh_keys()
        self.detail.status = "Refreshed"

    def action_delete(self) -> None:
        if self.current_record is None:
            return
        host_id = self.current_record.id
        try:
            self.key_store.delete(host_id)
            self.config.remove_block(host_id)
        except RsaManagerError as exc:
            self.detail.status = f"Delete failed: {exc}"
            return
        self.refresh_keys()
        self.detail.status = f"Deleted {host_id}"


__all__ = ["KeyInventoryApp", "describe_record"]
