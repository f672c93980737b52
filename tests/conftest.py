"""Shared pytest fixtures for the plugin scaffolder test suite.

Provides reusable fixtures for:
- Temporary plugin and stub directories
- A small hand-built stub tree with placeholder names
- Scaffolder configuration pointing at temporary directories
- Ready-made token tables and feature sets
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from src.config import Config
from src.scaffolder.features import FeatureSet
from src.scaffolder.tokens import resolve_metadata, resolve_tokens


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def plugins_dir(tmp_path: Path) -> Path:
    """Empty directory that generated plugins are written into."""
    path = tmp_path / "plugins"
    path.mkdir()
    return path


@pytest.fixture
def config(plugins_dir: Path) -> Config:
    """Config using the bundled stubs and a temporary plugins directory."""
    return Config(plugins_dir=plugins_dir)


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")


@pytest.fixture
def stub_tree(tmp_path: Path) -> Path:
    """A small stub tree whose names and contents use placeholders.

    Layout::

        {module}/
            {Name}.stub
            {-modules}/
                index.txt
        routes/web.stub
        resources/lang/en/{-module}.stub
        resources/views/index.blade.stub
        composer.json
    """
    root = tmp_path / "stubs"
    _write(
        root / "{module}" / "{Name}.stub",
        """
        <?php

        namespace {Module};

        class {Name}
        {
            protected $table = '{modules}';
        }
        """,
    )
    _write(root / "{module}" / "{-modules}" / "index.txt", "{-modules} for {PluginId}\n")
    _write(root / "routes" / "web.stub", "<?php // routes for {-module}\n")
    _write(root / "resources" / "lang" / "en" / "{-module}.stub", "<?php return ['name' => '{PluginName}'];\n")
    _write(root / "resources" / "views" / "index.blade.stub", "<h1>{Name}</h1>\n")
    _write(root / "composer.json", '{"name": "{PluginId}"}\n')
    return root


@pytest.fixture
def stub_catalog(tmp_path: Path, stub_tree: Path) -> Path:
    """A complete catalog (``module/`` + ``plugin/``) built around ``stub_tree``."""
    catalog = tmp_path / "catalog"
    catalog.mkdir()
    stub_tree.rename(catalog / "module")
    _write(catalog / "plugin" / "plugin.json", '{"id": "{PluginId}", "namespace": "{PluginNamespace}"}\n')
    _write(catalog / "plugin" / "Plugin.stub", "<?php // remove: {PluginHandleMethodRemove}\n")
    _write(
        catalog / "plugin" / "src" / "Providers" / "{Name}ServiceProvider.stub",
        "<?php\n$this{PluginBootProvider}\n",
    )
    return catalog


# ---------------------------------------------------------------------------
# Tokens & Features
# ---------------------------------------------------------------------------


@pytest.fixture
def hello_tokens() -> dict[str, str]:
    """Token table for ``acme/hello-world`` with default metadata."""
    return resolve_tokens("acme/hello-world")


@pytest.fixture
def hello_metadata() -> dict[str, str]:
    """Resolved default metadata for ``acme/hello-world``."""
    return resolve_metadata("acme/hello-world")


@pytest.fixture
def no_features() -> FeatureSet:
    return FeatureSet.from_names([])


@pytest.fixture
def all_features() -> FeatureSet:
    return FeatureSet.from_names(
        [
            "helpers",
            "config",
            "database",
            "permissions",
            "translations",
            "views",
            "routes",
            "publishing_assets",
        ],
        crud=True,
    )
