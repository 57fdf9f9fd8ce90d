"""Raw snapshot loading and caching."""

from .service import EnsureResult, RawKind, RawStore

__all__ = ["EnsureResult", "RawKind", "RawStore"]
