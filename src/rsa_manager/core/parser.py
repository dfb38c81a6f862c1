from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .model import HostBlock

HOST_KEYWORD = "Host "
ATTRIBUTE_RE = re.compile(r"^\s*(?P<key>[A-Za-z][A-Za-z0-9]*)\s+(?P<value>.+)$")


class ScanState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def split_lines(text: str) -> List[str]:
    r"""Split on ``\n`` only, keeping each terminator.

    Unlike ``str.splitlines`` a form feed, NEL or U+2028 stays inside its line.
    """
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _content(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def block_intro_id(line: str) -> Optional[str]:
    """Return everything after ``Host `` on a block-introducing line.

    ``None`` for any other line. The remainder is not tokenized, so
    ``Host web1 # note`` yields ``"web1 # note"`` and never equals ``"web1"``.
    """
    text = _content(line)
    if text.startswith(HOST_KEYWORD):
        return text[len(HOST_KEYWORD):]
    return None


def next_state(line: str, host_id: str, state: ScanState) -> ScanState:
    if not _content(line):
        return ScanState.OUTSIDE
    intro = block_intro_id(line)
    if intro is None:
        return state
    return ScanState.INSIDE if intro == host_id else ScanState.OUTSIDE


def strip_block(lines: Iterable[str], host_id: str) -> List[str]:
    """Drop every line belonging to the block for host_id.

    Lines keep their terminators; everything outside the block comes back
    untouched and in order.
    """
    kept: List[str] = []
    state = ScanState.OUTSIDE
    for line in lines:
        state = next_state(line, host_id, state)
        if state is not ScanState.INSIDE:
            kept.append(line)
    return kept


def has_block(text: str, host_id: str) -> bool:
    return any(block_intro_id(line) == host_id for line in split_lines(text))


def find_block(text: str, host_id: str) -> Optional[HostBlock]:
    attrs: Optional[Dict[str, str]] = None
    state = ScanState.OUTSIDE
    for line in split_lines(text):
        state = next_state(line, host_id, state)
        if state is not ScanState.INSIDE:
            if attrs is not None:
                break
            continue
        if attrs is None:
            # the Host line itself
            attrs = {}
            continue
        m = ATTRIBUTE_RE.match(_content(line))
        if m:
            attrs.setdefault(m.group("key").lower(), m.group("value").strip())
    if not attrs:
        return None
    try:
        return HostBlock(
            id=host_id,
            hostname=attrs["hostname"],
            username=attrs["user"],
            identity_file=attrs["identityfile"],
        )
    except KeyError:
        return None
