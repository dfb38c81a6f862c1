from __future__ import annotations


class RsaManagerError(Exception):
    """Base class for failures reported to the operator."""


class ValidationError(RsaManagerError):
    """Missing or malformed input; nothing has been changed."""


class GenerationFailure(RsaManagerError):
    """ssh-keygen failed; no configuration change was attempted."""


class IOFailure(RsaManagerError):
    """A file could not be read, written or replaced.

    The underlying ``OSError`` is chained as ``__cause__``.
    """


__all__ = ["RsaManagerError", "ValidationError", "GenerationFailure", "IOFailure"]
