"""Tests for feature selection and pruning (src.scaffolder.features)."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.scaffolder.errors import UnknownFeature
from src.scaffolder.features import (
    BASE_EXCLUSIONS,
    CRUD_FEATURES,
    CRUD_PATHS,
    FEATURE_CATALOG,
    FEATURE_PATHS,
    FeatureSet,
    paths_to_remove,
    prune,
    remove_empty_dirs,
)

pytestmark = pytest.mark.unit


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x", encoding="utf-8")


@pytest.fixture
def plugin_tree(tmp_path: Path) -> Path:
    """An instantiated plugin with every optional path present."""
    root = tmp_path / "plugin"
    for rel in [
        "composer.json",
        "plugin.json",
        "config/general.php",
        "config/permissions.php",
        "database/migrations/create_table.php",
        "helpers/constants.php",
        "public/css/app.css",
        "resources/lang/en/plugin.php",
        "resources/views/index.blade.php",
        "routes/web.php",
        "src/Plugin.php",
        "src/Forms/Form.php",
        "src/Http/Controllers/Controller.php",
        "src/Models/Model.php",
        "src/Providers/ServiceProvider.php",
        "src/Tables/Table.php",
    ]:
        _touch(root / rel)
    return root


def _listing(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


# ---------------------------------------------------------------------------
# FeatureSet
# ---------------------------------------------------------------------------


class TestFeatureSet:
    def test_from_names(self) -> None:
        features = FeatureSet.from_names(["views", " routes "])
        assert "views" in features
        assert "routes" in features
        assert "database" not in features
        assert features.crud is False

    def test_unknown_feature_rejected(self) -> None:
        with pytest.raises(UnknownFeature) as exc_info:
            FeatureSet.from_names(["views", "bogus", "nope"])
        assert exc_info.value.names == ["bogus", "nope"]

    def test_crud_implies_features(self) -> None:
        features = FeatureSet.from_names([], crud=True)
        assert features.crud is True
        for name in CRUD_FEATURES:
            assert name in features

    def test_sorted_follows_catalog(self) -> None:
        features = FeatureSet.from_names(["routes", "helpers", "views"])
        assert features.sorted() == ["helpers", "views", "routes"]

    def test_every_catalog_feature_has_paths(self) -> None:
        assert set(FEATURE_PATHS) == set(FEATURE_CATALOG)


# ---------------------------------------------------------------------------
# Pruning
# ---------------------------------------------------------------------------


class TestPathsToRemove:
    def test_empty_selection(self, no_features: FeatureSet) -> None:
        paths = paths_to_remove(no_features)
        for owned in FEATURE_PATHS.values():
            assert set(owned) <= set(paths)
        assert set(CRUD_PATHS) <= set(paths)
        assert set(BASE_EXCLUSIONS) <= set(paths)

    def test_full_selection_only_base(self, all_features: FeatureSet) -> None:
        assert paths_to_remove(all_features) == list(BASE_EXCLUSIONS)


class TestPrune:
    def test_no_features(self, plugin_tree: Path, no_features: FeatureSet) -> None:
        prune(plugin_tree, no_features)

        assert _listing(plugin_tree) == {
            "plugin.json",
            "src",
            "src/Plugin.php",
            "src/Providers",
            "src/Providers/ServiceProvider.php",
        }

    def test_routes_and_database(self, plugin_tree: Path) -> None:
        prune(plugin_tree, FeatureSet.from_names(["routes", "database"]))

        assert (plugin_tree / "routes").is_dir()
        assert (plugin_tree / "database").is_dir()
        assert not (plugin_tree / "resources" / "lang").exists()
        assert not (plugin_tree / "resources").exists()
        assert not (plugin_tree / "composer.json").exists()

    def test_permissions_without_config(self, plugin_tree: Path) -> None:
        prune(plugin_tree, FeatureSet.from_names(["permissions"]))
        assert (plugin_tree / "config" / "permissions.php").is_file()
        assert not (plugin_tree / "config" / "general.php").exists()

    def test_empty_config_dir_removed(self, plugin_tree: Path) -> None:
        prune(plugin_tree, FeatureSet.from_names(["views"]))
        assert not (plugin_tree / "config").exists()
        assert (plugin_tree / "resources" / "views" / "index.blade.php").is_file()

    def test_crud_keeps_example_sources(self, plugin_tree: Path) -> None:
        prune(plugin_tree, FeatureSet.from_names([], crud=True))
        for rel in CRUD_PATHS:
            assert (plugin_tree / rel).is_dir()
        assert (plugin_tree / "resources" / "lang").is_dir()

    def test_returns_removed_paths(self, plugin_tree: Path, no_features: FeatureSet) -> None:
        removed = prune(plugin_tree, no_features)
        assert plugin_tree / "composer.json" in removed
        assert plugin_tree / "routes" in removed
        assert plugin_tree / "config" in removed

    def test_second_run_is_noop(self, plugin_tree: Path) -> None:
        features = FeatureSet.from_names(["views", "helpers"])
        prune(plugin_tree, features)
        before = _listing(plugin_tree)

        assert prune(plugin_tree, features) == []
        assert _listing(plugin_tree) == before

    def test_missing_paths_are_skipped(self, tmp_path: Path, no_features: FeatureSet) -> None:
        root = tmp_path / "bare"
        _touch(root / "plugin.json")
        assert prune(root, no_features) == []


class TestRemoveEmptyDirs:
    def test_nested_empty_dirs(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b" / "c").mkdir(parents=True)
        (tmp_path / "d" / "e").mkdir(parents=True)
        _touch(tmp_path / "d" / "keep.txt")

        removed = remove_empty_dirs(tmp_path)

        assert _listing(tmp_path) == {"d", "d/keep.txt"}
        assert removed.index(tmp_path / "a" / "b" / "c") < removed.index(tmp_path / "a")

    def test_root_is_kept(self, tmp_path: Path) -> None:
        root = tmp_path / "empty"
        root.mkdir()
        assert remove_empty_dirs(root) == []
        assert root.is_dir()
