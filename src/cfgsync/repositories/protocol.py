"""Protocol for remote document stores."""

from typing import Protocol

from ..models import CommitResult


class DocumentBatchProtocol(Protocol):
    """A pending set of changes to one document collection.

    Changes are only recorded until ``commit`` sends them all at once.
    """

    def upsert(self, name: str, content: str) -> None:
        """Create or replace a document.

        Args:
            name: Document name (a basename, e.g. "video.cfg")
            content: Full document content
        """
        ...

    def delete(self, name: str) -> None:
        """Remove a document.

        Args:
            name: Document name
        """
        ...

    def commit(self) -> CommitResult:
        """Send all recorded changes in a single request.

        Returns:
            Sizes of the documents in the collection after the commit,
            and the collection URL.

        Raises:
            RemoteUnavailableError: If the store rejects or cannot be reached.
        """
        ...


class DocumentStoreProtocol(Protocol):
    """Interface for key-document stores addressed by a collection id.

    The sync engines depend only on this contract. The GitHub gist client
    implements it; tests use an in-memory store.
    """

    def fetch(self, collection_id: str) -> dict[str, str]:
        """Fetch every document of a collection.

        Args:
            collection_id: Collection identifier (e.g. a gist id)

        Returns:
            Mapping of document name to content.

        Raises:
            RemoteUnavailableError: If the store cannot be reached.
        """
        ...

    def begin_update(self, collection_id: str) -> DocumentBatchProtocol:
        """Start a batch of changes against a collection."""
        ...
