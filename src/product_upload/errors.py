from __future__ import annotations


class ValidationError(ValueError):
    """Raised when merchant input cannot be turned into an import row."""


class TunnelError(RuntimeError):
    """Raised when no public URL could be obtained for the image server."""
