"""Exception hierarchy for cfgsync."""

from pathlib import PurePosixPath


class CfgsyncError(Exception):
    """Base exception for cfgsync errors."""

    pass


class ConfigFileNotFoundError(CfgsyncError, FileNotFoundError):
    """A config file referenced by the tree (or required by pull) is missing."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class CyclicIncludeError(CfgsyncError):
    """An exec chain revisits one of its own ancestors."""

    def __init__(self, chain: list[PurePosixPath]) -> None:
        self.chain = chain
        rendered = " -> ".join(str(p) for p in chain)
        super().__init__(f"Cyclic include: {rendered}")


class MalformedHeaderError(CfgsyncError):
    """A remote document does not start with a valid path header."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Malformed header in '{name}': {reason}")


class DocumentNameCollisionError(CfgsyncError):
    """Two local files would be stored under the same remote document name."""

    def __init__(self, name: str, paths: list[PurePosixPath]) -> None:
        self.name = name
        self.paths = paths
        rendered = ", ".join(str(p) for p in paths)
        super().__init__(f"Remote document name '{name}' is claimed by: {rendered}")


class RemoteUnavailableError(CfgsyncError):
    """The document store could not be reached or refused the request."""

    pass


class WriteFailureError(CfgsyncError):
    """The local filesystem refused a write."""

    def __init__(self, path: object, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {cause}")


class ConfigDecodeError(CfgsyncError):
    """A config file is not valid UTF-8 text."""

    def __init__(self, path: object, cause: UnicodeDecodeError) -> None:
        self.path = path
        super().__init__(
            f"Config file {path} is not valid UTF-8: {cause.reason} at byte {cause.start}"
        )
