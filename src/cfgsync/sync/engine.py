"""Push and pull engines for syncing a config tree with a document store.

Push walks the local tree, plans the full set of remote changes, then commits
them in one batch. Pull rebuilds local files from remote documents, handling
each document independently so one bad document does not stop the others.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from ..errors import (
    CfgsyncError,
    ConfigFileNotFoundError,
    DocumentNameCollisionError,
    MalformedHeaderError,
    WriteFailureError,
)
from ..models import (
    DocumentOperation,
    IncludedFile,
    OperationKind,
    PulledFile,
    PullResult,
    PushResult,
)
from ..resolver import walk_included_files
from ..utils.datetime import now_local
from .document_mapper import (
    README_FILE,
    ParsedDocument,
    document_name,
    parse_document,
    render_document,
    render_readme,
)

if TYPE_CHECKING:
    from ..repositories import DocumentStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def build_desired_documents(
    included: list[IncludedFile],
    compiled_at: datetime,
) -> dict[str, str]:
    """Build the document set a push should leave in the store.

    Args:
        included: Files from the walker (repeats of the same path are fine)
        compiled_at: Timestamp for the README summary

    Returns:
        Mapping of document name to content, README first

    Raises:
        DocumentNameCollisionError: If two different files share a basename,
            or a local file is named like the reserved README
    """
    documents: dict[str, str] = {README_FILE: render_readme(compiled_at)}
    owners: dict[str, PurePosixPath] = {}

    for included_file in included:
        name = document_name(included_file.relative_path)
        owner = owners.get(name)
        if owner == included_file.relative_path:
            continue
        if owner is not None:
            raise DocumentNameCollisionError(name, [owner, included_file.relative_path])
        if name == README_FILE:
            raise DocumentNameCollisionError(name, [included_file.relative_path])

        owners[name] = included_file.relative_path
        documents[name] = render_document(included_file)

    return documents


def plan_operations(desired: dict[str, str], remote: dict[str, str]) -> list[DocumentOperation]:
    """Diff the desired set against the remote set.

    Remote documents missing from the desired set are deleted; every desired
    document is upserted. Deletes come first, in name order.
    """
    operations = [
        DocumentOperation(kind=OperationKind.DELETE, name=name)
        for name in sorted(remote)
        if name not in desired
    ]
    operations.extend(
        DocumentOperation(kind=OperationKind.UPSERT, name=name, content=content)
        for name, content in desired.items()
    )
    return operations


class PushEngine:
    """Publishes a config tree to a document collection."""

    def __init__(self, store: DocumentStoreProtocol, cfg_dir: Path) -> None:
        """Initialize the push engine.

        Args:
            store: Document store to publish to
            cfg_dir: Root of the config tree
        """
        self._store = store
        self._cfg_dir = cfg_dir

    def push(
        self,
        root_file: PurePosixPath | str,
        collection_id: str,
        dry_run: bool = False,
        now: datetime | None = None,
    ) -> PushResult:
        """Make the remote collection mirror the files reachable from ``root_file``.

        All local work (walking, rendering, diffing) is finished before the
        store is asked to change anything, and the changes go out as one
        commit.

        Args:
            root_file: Root config file, relative to the config directory
            collection_id: Collection (gist) id
            dry_run: If True, report the planned result without committing
            now: Timestamp for the README summary (defaults to now)

        Returns:
            PushResult with the applied (or planned) changes

        Raises:
            ConfigFileNotFoundError: If an included file is missing
            CyclicIncludeError: If the include graph has a cycle
            DocumentNameCollisionError: If two files map to one document name
            RemoteUnavailableError: If fetching or committing fails
        """
        included = walk_included_files(self._cfg_dir, root_file)
        desired = build_desired_documents(included, now or now_local())

        remote = self._store.fetch(collection_id)
        operations = plan_operations(desired, remote)

        result = PushResult(dry_run=dry_run)
        for op in operations:
            if op.kind == OperationKind.DELETE:
                result.deleted.append(op.name)
            else:
                result.upserted.append(op.name)

        if dry_run:
            result.document_count = len(desired)
            result.total_bytes = sum(op.size for op in operations)
            logger.info(
                "[DRY RUN] Would upload %d file(s), %dB to %s (%d deletion(s))",
                result.document_count,
                result.total_bytes,
                collection_id,
                len(result.deleted),
            )
            return result

        batch = self._store.begin_update(collection_id)
        for op in operations:
            if op.kind == OperationKind.DELETE:
                batch.delete(op.name)
            else:
                batch.upsert(op.name, op.content or "")

        committed = batch.commit()
        result.document_count = committed.document_count
        result.total_bytes = committed.total_bytes
        result.url = committed.url
        logger.info(
            "Uploaded %d file(s), %dB to %s",
            result.document_count,
            result.total_bytes,
            committed.url or collection_id,
        )
        return result


class PullEngine:
    """Rebuilds local config files from a document collection."""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        cfg_dir: Path,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize the pull engine.

        Args:
            store: Document store to read from
            cfg_dir: Root of the config tree to write into
            max_workers: Number of documents processed in parallel
        """
        self._store = store
        self._cfg_dir = cfg_dir
        self._max_workers = max_workers

    def pull(
        self,
        collection_id: str,
        update_only: bool = False,
        dry_run: bool = False,
    ) -> PullResult:
        """Write every remote config document back to its relative path.

        Documents are processed independently. A failing document is recorded
        in ``PullResult.errors`` and the rest still run; the result is only
        returned once all of them have finished.

        Args:
            collection_id: Collection (gist) id
            update_only: If True, only overwrite files that already exist
            dry_run: If True, report what would be written without writing

        Returns:
            PullResult with written files and per-document errors

        Raises:
            RemoteUnavailableError: If the collection cannot be fetched
        """
        documents = self._store.fetch(collection_id)
        result = PullResult(dry_run=dry_run)

        pending = {name: content for name, content in documents.items() if name != README_FILE}
        if not pending:
            logger.info("No config documents found in %s", collection_id)
            return result

        parsed = self._parse_documents(pending, result)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                executor.submit(self._write_document, name, document, update_only, dry_run): name
                for name, document in parsed.items()
            }

            for future in as_completed(futures):
                name = futures[future]
                try:
                    result.written.append(future.result())
                except CfgsyncError as e:
                    self._record_error(result, name, e)

        result.written.sort(key=lambda f: f.path)
        result.errors.sort()
        return result

    def _parse_documents(
        self,
        pending: dict[str, str],
        result: PullResult,
    ) -> dict[str, ParsedDocument]:
        """Parse headers up front and drop documents that cannot be written.

        A document with a malformed header is recorded as an error. When
        several documents name the same relative path, none of them is
        written, so no local file is ever the target of two tasks.
        """
        parsed: dict[str, ParsedDocument] = {}
        claims: dict[PurePosixPath, list[str]] = {}

        for name in sorted(pending):
            try:
                document = parse_document(name, pending[name])
            except CfgsyncError as e:
                self._record_error(result, name, e)
                continue
            parsed[name] = document
            claims.setdefault(document.relative_path, []).append(name)

        for relative_path, names in claims.items():
            if len(names) < 2:
                continue
            for name in names:
                others = ", ".join(f"'{other}'" for other in names if other != name)
                error = MalformedHeaderError(
                    name, f"path '{relative_path}' is also claimed by {others}"
                )
                self._record_error(result, name, error)
                del parsed[name]

        return parsed

    @staticmethod
    def _record_error(result: PullResult, name: str, error: CfgsyncError) -> None:
        error_msg = f"Failed to pull '{name}': {error}"
        result.errors.append(error_msg)
        logger.error(error_msg)

    def _write_document(
        self,
        name: str,
        document: ParsedDocument,
        update_only: bool,
        dry_run: bool,
    ) -> PulledFile:
        """Write one parsed document's body to the local tree."""
        local_path = self._cfg_dir / document.relative_path
        data = document.body.encode("utf-8")

        if update_only and not local_path.is_file():
            raise ConfigFileNotFoundError(local_path)

        if dry_run:
            logger.info("Skipping writing %dB to %s due to --dry-run", len(data), local_path)
            return PulledFile(path=local_path, size=len(data))

        try:
            if not update_only:
                local_path.parent.mkdir(parents=True, exist_ok=True)
            local_path.write_bytes(data)
        except OSError as e:
            raise WriteFailureError(local_path, e) from e
        except ValueError as e:
            # pathlib refuses paths the OS cannot take, e.g. embedded NUL bytes
            raise MalformedHeaderError(name, str(e)) from e

        logger.info("Wrote %dB to %s", len(data), local_path)
        return PulledFile(path=local_path, size=len(data))
