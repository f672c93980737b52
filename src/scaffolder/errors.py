"""Exceptions raised by the plugin scaffolder.

Validation errors (``InvalidIdentifier``, ``UnknownFeature``,
``DestinationExists``) are raised during pre-flight, before anything is
written.  ``IOFailure`` is raised mid-run and leaves a partial tree behind.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised while generating a plugin."""


class InvalidIdentifier(ScaffoldError):
    """Raised when the plugin identifier is empty or malformed."""

    def __init__(self, identifier: str, reason: str = "identifier must not be empty") -> None:
        self.identifier = identifier
        super().__init__(f"Invalid plugin identifier {identifier!r}: {reason}")


class DestinationExists(ScaffoldError):
    """Raised when the destination directory is already present."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Destination already exists: {self.path}")


class UnknownFeature(ScaffoldError):
    """Raised when a requested feature is not in the feature catalog."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = sorted(names)
        super().__init__(f"Unknown feature(s): {', '.join(self.names)}")


class IOFailure(ScaffoldError):
    """Raised when a copy, read, write or delete fails during a run.

    The original ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
