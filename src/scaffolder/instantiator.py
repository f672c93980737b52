"""Copies a stub directory into a new plugin tree.

Each entry is handled as one operation: the destination name is resolved by
substituting placeholders in the path segment (``{Name}Controller.stub``
becomes ``HelloWorldController.php``), then directories are created and
files are copied with their contents rewritten.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from src.config import DEFAULT_OUTPUT_SUFFIX, DEFAULT_STUB_SUFFIX

from .errors import DestinationExists, IOFailure
from .rewriter import ContentRewriter


@dataclass
class OutputTree:
    """Paths created by one instantiation, relative to ``root``, in walk order."""

    root: Path
    paths: list[Path] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        return [p for p in self.paths if (self.root / p).is_file()]

    @property
    def directories(self) -> list[Path]:
        return [p for p in self.paths if (self.root / p).is_dir()]

    def as_posix(self) -> list[str]:
        """Relative paths as forward-slash strings."""
        return [p.as_posix() for p in self.paths]


class TreeInstantiator:
    """Depth-first copy of a stub tree with placeholder renaming.

    Args:
        rewriter: Applies the token table to both path segments and file
            contents.
        stub_suffix: File suffix marking stub sources.
        output_suffix: Suffix that replaces ``stub_suffix`` in the output.
    """

    def __init__(
        self,
        rewriter: ContentRewriter,
        *,
        stub_suffix: str = DEFAULT_STUB_SUFFIX,
        output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
    ) -> None:
        self.rewriter = rewriter
        self.stub_suffix = stub_suffix
        self.output_suffix = output_suffix

    def destination_name(self, name: str, *, is_file: bool) -> str:
        """Resolve the output name for a single stub path segment."""
        resolved = self.rewriter.rewrite(name)
        if is_file and self.stub_suffix and resolved.endswith(self.stub_suffix):
            resolved = resolved[: -len(self.stub_suffix)] + self.output_suffix
        return resolved

    def instantiate(self, stub_root: str | Path, dest_root: str | Path) -> OutputTree:
        """Copy *stub_root* into the new directory *dest_root*.

        Raises:
            DestinationExists: If *dest_root* is already present.
            IOFailure: If the stub tree is missing or any copy fails.
        """
        src = Path(stub_root)
        dest = Path(dest_root)
        if dest.exists():
            raise DestinationExists(dest)
        if not src.is_dir():
            raise IOFailure(src, "Stub directory not found")

        _mkdir(dest, parents=True)
        tree = OutputTree(root=dest)
        self._copy_dir(src, dest, Path(), tree)
        return tree

    def _copy_dir(self, src_dir: Path, dest_dir: Path, rel: Path, tree: OutputTree) -> None:
        try:
            entries = sorted(src_dir.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise IOFailure(src_dir, "Failed to list stub directory") from exc

        for entry in entries:
            is_dir = entry.is_dir()
            name = self.destination_name(entry.name, is_file=not is_dir)
            target = dest_dir / name
            rel_target = rel / name
            if is_dir:
                _mkdir(target, exist_ok=True)
                tree.paths.append(rel_target)
                self._copy_dir(entry, target, rel_target, tree)
            else:
                self.rewriter.copy_file(entry, target)
                tree.paths.append(rel_target)


def instantiate(
    stub_root: str | Path,
    dest_root: str | Path,
    tokens: Mapping[str, str],
    *,
    stub_suffix: str = DEFAULT_STUB_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> OutputTree:
    """Instantiate *stub_root* into *dest_root* with the given token table."""
    instantiator = TreeInstantiator(
        ContentRewriter(tokens), stub_suffix=stub_suffix, output_suffix=output_suffix
    )
    return instantiator.instantiate(stub_root, dest_root)


def _mkdir(path: Path, *, parents: bool = False, exist_ok: bool = False) -> None:
    try:
        path.mkdir(parents=parents, exist_ok=exist_ok)
    except OSError as exc:
        raise IOFailure(path, "Failed to create directory") from exc
