"""Optional plugin features and the paths each of them owns.

After a plugin has been instantiated, :func:`prune` deletes every path that
belongs to a feature the caller did not select, the always-excluded stub
files, and finally any directory left empty.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .errors import IOFailure, UnknownFeature


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

FEATURE_CATALOG: dict[str, str] = {
    "helpers": "Helpers",
    "config": "Config",
    "database": "Database",
    "permissions": "Permissions",
    "translations": "Translations",
    "views": "Views",
    "routes": "Routes",
    "publishing_assets": "Publishing assets",
}

# Features switched on by the CRUD example.
CRUD_FEATURES: tuple[str, ...] = ("permissions", "database", "translations", "routes")

FEATURE_PATHS: dict[str, tuple[str, ...]] = {
    "helpers": ("helpers",),
    "config": ("config/general.php",),
    "database": ("database",),
    "permissions": ("config/permissions.php",),
    "translations": ("resources/lang",),
    "views": ("resources/views",),
    "routes": ("routes",),
    "publishing_assets": ("public",),
}

# Example CRUD sources, kept only when the CRUD example is requested.
CRUD_PATHS: tuple[str, ...] = ("src/Forms", "src/Models", "src/Tables", "src/Http")

# Stub-only files that never belong in a generated plugin.
BASE_EXCLUSIONS: tuple[str, ...] = ("composer.json",)


@dataclass(frozen=True)
class FeatureSet:
    """Validated, immutable selection of optional features."""

    features: frozenset[str] = field(default_factory=frozenset)
    crud: bool = False

    @classmethod
    def from_names(cls, names: Iterable[str] = (), *, crud: bool = False) -> "FeatureSet":
        """Build a feature set, expanding the CRUD example's implied features.

        Raises:
            UnknownFeature: If any name is not in ``FEATURE_CATALOG``.
        """
        selected = {n.strip() for n in names if n and n.strip()}
        unknown = selected - FEATURE_CATALOG.keys()
        if unknown:
            raise UnknownFeature(unknown)
        if crud:
            selected.update(CRUD_FEATURES)
        return cls(features=frozenset(selected), crud=crud)

    def __contains__(self, name: object) -> bool:
        return name in self.features

    def sorted(self) -> list[str]:
        """Selected features in catalog order."""
        return [name for name in FEATURE_CATALOG if name in self.features]


def paths_to_remove(features: FeatureSet) -> list[str]:
    """Relative paths that must not survive in a plugin built with *features*."""
    paths: list[str] = list(BASE_EXCLUSIONS)
    for name, owned in FEATURE_PATHS.items():
        if name not in features:
            paths.extend(owned)
    if not features.crud:
        paths.extend(CRUD_PATHS)
    return paths


# ---------------------------------------------------------------------------
# Pruning
# ---------------------------------------------------------------------------


def prune(root: str | Path, features: FeatureSet) -> list[Path]:
    """Delete unselected feature paths, base exclusions, then empty directories.

    Running it again on an already pruned tree removes nothing.

    Returns:
        Every path that was deleted, in deletion order.

    Raises:
        IOFailure: If a delete fails.  Earlier deletions are not undone.
    """
    root_path = Path(root)
    removed: list[Path] = []

    for rel in paths_to_remove(features):
        target = root_path / rel
        if not target.exists() and not target.is_symlink():
            continue
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise IOFailure(target, "Failed to remove path") from exc
        removed.append(target)

    removed.extend(remove_empty_dirs(root_path))
    return removed


def remove_empty_dirs(root: str | Path) -> list[Path]:
    """Remove every empty directory below *root*, deepest first.

    Directories emptied by the removal of their children are removed too.
    *root* itself is kept.
    """
    root_path = Path(root)
    removed: list[Path] = []
    for dirpath, _dirnames, _filenames in os.walk(root_path, topdown=False):
        current = Path(dirpath)
        if current == root_path:
            continue
        try:
            if any(current.iterdir()):
                continue
            current.rmdir()
        except OSError as exc:
            raise IOFailure(current, "Failed to remove empty directory") from exc
        removed.append(current)
    return removed
