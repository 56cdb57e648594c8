"""Unit tests for sync models."""

from pathlib import Path

from cfgsync.models import (
    CommitResult,
    DocumentOperation,
    OperationKind,
    PulledFile,
    PullResult,
    PushResult,
)


class TestOperationKind:
    """Tests for OperationKind enum."""

    def test_values(self):
        assert OperationKind.UPSERT == "upsert"
        assert OperationKind.DELETE == "delete"


class TestDocumentOperation:
    """Tests for DocumentOperation."""

    def test_upsert_size(self):
        op = DocumentOperation(kind=OperationKind.UPSERT, name="a.cfg", content="héllo")
        assert op.size == 6

    def test_delete_size(self):
        assert DocumentOperation(kind=OperationKind.DELETE, name="a.cfg").size == 0


class TestCommitResult:
    """Tests for CommitResult."""

    def test_totals(self):
        result = CommitResult(files={"a": 3, "b": 4}, url="u")
        assert result.document_count == 2
        assert result.total_bytes == 7

    def test_empty(self):
        assert CommitResult().total_bytes == 0


class TestPushResult:
    """Tests for PushResult dataclass."""

    def test_defaults(self):
        result = PushResult()
        assert result.upserted == []
        assert result.deleted == []
        assert result.dry_run is False


class TestPullResult:
    """Tests for PullResult dataclass."""

    def test_empty(self):
        result = PullResult()
        assert result.written == []
        assert result.total_bytes == 0
        assert result.has_errors is False

    def test_with_files_and_errors(self):
        result = PullResult(
            written=[PulledFile(Path("a.cfg"), 3), PulledFile(Path("b.cfg"), 5)],
            errors=["Failed to pull 'c.cfg': boom"],
        )
        assert result.total_bytes == 8
        assert result.has_errors is True
