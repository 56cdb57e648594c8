"""Sync-related data models for gist synchronization."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class IncludedFile:
    """One physical config file reached from the root file.

    Two entries are equal when their relative paths are equal.
    """

    relative_path: PurePosixPath  # Relative to the config tree root
    contents: str = field(compare=False, repr=False)  # Raw file text

    @property
    def size(self) -> int:
        """Size of the contents in bytes."""
        return len(self.contents.encode("utf-8"))


class OperationKind(str, Enum):
    """Kind of change applied to a remote document."""

    UPSERT = "upsert"  # Create or replace
    DELETE = "delete"


@dataclass(frozen=True)
class DocumentOperation:
    """A single planned change to the remote document set."""

    kind: OperationKind
    name: str  # Remote document name
    content: str | None = None  # None for deletes

    @property
    def size(self) -> int:
        """Size of the new content in bytes (0 for deletes)."""
        if self.content is None:
            return 0
        return len(self.content.encode("utf-8"))


@dataclass
class CommitResult:
    """What the document store reports after a committed batch."""

    files: dict[str, int] = field(default_factory=dict)  # Document name -> size
    url: str = ""

    @property
    def document_count(self) -> int:
        """Number of documents in the collection after the commit."""
        return len(self.files)

    @property
    def total_bytes(self) -> int:
        """Total size of all documents in the collection."""
        return sum(self.files.values())


@dataclass
class PushResult:
    """Result of a push operation."""

    upserted: list[str] = field(default_factory=list)  # Document names created/replaced
    deleted: list[str] = field(default_factory=list)  # Document names removed
    document_count: int = 0
    total_bytes: int = 0
    url: str = ""
    dry_run: bool = False


@dataclass
class PulledFile:
    """A local file written (or that would be written) by a pull."""

    path: Path
    size: int


@dataclass
class PullResult:
    """Result of a pull operation."""

    written: list[PulledFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)  # Per-document error messages
    dry_run: bool = False

    @property
    def total_bytes(self) -> int:
        """Total bytes written (or that would be written)."""
        return sum(f.size for f in self.written)

    @property
    def has_errors(self) -> bool:
        """Whether any document failed."""
        return len(self.errors) > 0
