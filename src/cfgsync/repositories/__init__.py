"""Remote document store interfaces."""

from .protocol import DocumentBatchProtocol, DocumentStoreProtocol

__all__ = [
    "DocumentBatchProtocol",
    "DocumentStoreProtocol",
]
