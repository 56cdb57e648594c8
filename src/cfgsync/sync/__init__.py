"""Gist synchronization package."""

from .document_mapper import (
    PATH_HEADER_PREFIX,
    README_FILE,
    ParsedDocument,
    document_name,
    parse_document,
    render_document,
    render_readme,
)
from .engine import PullEngine, PushEngine, build_desired_documents, plan_operations

__all__ = [
    "PATH_HEADER_PREFIX",
    "README_FILE",
    "ParsedDocument",
    "PullEngine",
    "PushEngine",
    "build_desired_documents",
    "document_name",
    "parse_document",
    "plan_operations",
    "render_document",
    "render_readme",
]
