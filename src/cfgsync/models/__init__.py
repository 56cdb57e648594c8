"""Data models."""

from .cfgsync_config import CfgsyncConfig
from .sync import (
    CommitResult,
    DocumentOperation,
    IncludedFile,
    OperationKind,
    PulledFile,
    PullResult,
    PushResult,
)

__all__ = [
    "CfgsyncConfig",
    "CommitResult",
    "DocumentOperation",
    "IncludedFile",
    "OperationKind",
    "PulledFile",
    "PullResult",
    "PushResult",
]
