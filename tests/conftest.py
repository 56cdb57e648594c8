"""Shared fixtures for cfgsync tests."""

from pathlib import Path

import pytest

from cfgsync.errors import RemoteUnavailableError
from cfgsync.models import CommitResult


class InMemoryBatch:
    """Batch that applies to an InMemoryDocumentStore on commit."""

    def __init__(self, store: "InMemoryDocumentStore", collection_id: str) -> None:
        self.store = store
        self.collection_id = collection_id
        self.operations: list[tuple[str, str, str | None]] = []

    def upsert(self, name: str, content: str) -> None:
        self.operations.append(("upsert", name, content))

    def delete(self, name: str) -> None:
        self.operations.append(("delete", name, None))

    def commit(self) -> CommitResult:
        if self.store.fail_commit:
            raise RemoteUnavailableError("commit refused")
        self.store.commits += 1
        documents = self.store.collections.setdefault(self.collection_id, {})
        for kind, name, content in self.operations:
            if kind == "delete":
                documents.pop(name, None)
            else:
                documents[name] = content or ""
        return CommitResult(
            files={name: len(content.encode("utf-8")) for name, content in documents.items()},
            url=f"https://gist.example/{self.collection_id}",
        )


class InMemoryDocumentStore:
    """Document store kept in a dict, with failure switches."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, str]] = {}
        self.commits = 0
        self.fetches = 0
        self.fail_fetch = False
        self.fail_commit = False

    def __enter__(self) -> "InMemoryDocumentStore":
        return self

    def __exit__(self, *args) -> None:
        pass

    def fetch(self, collection_id: str) -> dict[str, str]:
        if self.fail_fetch:
            raise RemoteUnavailableError("network down")
        self.fetches += 1
        return dict(self.collections.get(collection_id, {}))

    def begin_update(self, collection_id: str) -> InMemoryBatch:
        return InMemoryBatch(self, collection_id)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def cfg_dir(tmp_path: Path) -> Path:
    """Create a temporary cfg directory."""
    root = tmp_path / "cfg"
    root.mkdir()
    return root


@pytest.fixture
def make_tree(cfg_dir: Path):
    """Return a helper writing ``{relative_path: contents}`` under cfg_dir, byte for byte."""

    def _make_tree(files: dict[str, str]) -> Path:
        for relative_path, contents in files.items():
            path = cfg_dir / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(contents.encode("utf-8"))
        return cfg_dir

    return _make_tree
