from __future__ import annotations

from .errors import ValidationError

DEFAULT_KEY_SIZE = 4096
MIN_KEY_SIZE = 1024

_ALLOWED = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")


def require(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"All fields are required ({field} is empty)")
    return value


def validate_host_id(value: str | None) -> str:
    """Return a usable server id or raise ValidationError.

    The id doubles as the key file stem and the ``Host`` alias, so it is
    limited to alnum, dot, dash and underscore and may not start with a dot
    or a dash.
    """
    host_id = require(value, "server id")
    bad = sorted({ch for ch in host_id if ch not in _ALLOWED})
    if bad:
        raise ValidationError(f"Invalid server id {host_id!r}: unexpected characters {''.join(bad)!r}")
    if host_id[0] in ".-":
        raise ValidationError(f"Invalid server id {host_id!r}: must not start with '{host_id[0]}'")
    return host_id


def parse_key_size(raw: str | None, default: int = DEFAULT_KEY_SIZE) -> int:
    raw = (raw or "").strip()
    if not raw:
        return default
    if not (raw.isascii() and raw.isdigit()) or int(raw) < MIN_KEY_SIZE:
        raise ValidationError(f"Key size must be an integer >= {MIN_KEY_SIZE}")
    return int(raw)


__all__ = ["DEFAULT_KEY_SIZE", "MIN_KEY_SIZE", "require", "validate_host_id", "parse_key_size"]
