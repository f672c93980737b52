"""Plugin scaffolder configuration.

Settings that stay the same between generator runs: where plugins are
written, which stub catalog is used, the vendor prefix for default
namespaces and the host core version.  All settings use a Pydantic v2 model
so they are validated at construction time and round-trip through JSON,
YAML or environment variables.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_VENDOR_PREFIX = "Botble"
DEFAULT_CORE_VERSION = "7.3.0"
DEFAULT_STUB_SUFFIX = ".stub"
DEFAULT_OUTPUT_SUFFIX = ".php"

BUNDLED_STUBS_DIR = Path(__file__).parent / "scaffolder" / "stubs"


class Config(BaseModel):
    """Global scaffolder configuration.

    Instances are typically created once by the CLI entry point and passed
    to ``PluginGenerator``.
    """

    plugins_dir: Path = Field(
        default=Path("./platform/plugins"),
        description="Directory new plugins are created in",
    )
    stubs_dir: Path = Field(
        default=BUNDLED_STUBS_DIR,
        description="Stub catalog root (contains module/ and plugin/)",
    )
    vendor_prefix: str = Field(
        default=DEFAULT_VENDOR_PREFIX,
        min_length=1,
        description="Vendor used in the default plugin namespace",
    )
    core_version: str = Field(
        default=DEFAULT_CORE_VERSION,
        description="Default minimum host core version for new plugins",
    )
    stub_suffix: str = Field(default=DEFAULT_STUB_SUFFIX)
    output_suffix: str = Field(default=DEFAULT_OUTPUT_SUFFIX)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def module_stubs_path(self) -> Path:
        """Recursively templated plugin body."""
        return self.stubs_dir / "module"

    @property
    def plugin_stubs_path(self) -> Path:
        """Manifest, root plugin class and service provider stubs."""
        return self.stubs_dir / "plugin"

    def plugin_path(self, name: str) -> Path:
        """Destination directory for the plugin called *name*."""
        return self.plugins_dir / name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from a JSON or YAML file.

        Files ending in ``.yaml`` or ``.yml`` are parsed with PyYAML;
        everything else is treated as JSON.
        """
        file_path = Path(path)
        raw = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() in (".yaml", ".yml"):
            data: Any = yaml.safe_load(raw) or {}
        else:
            data = json.loads(raw)
        return cls.model_validate(data)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PLUGIN_SCAFFOLD_PLUGINS_DIR, PLUGIN_SCAFFOLD_STUBS_DIR,
            PLUGIN_SCAFFOLD_VENDOR, PLUGIN_SCAFFOLD_CORE_VERSION.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PLUGIN_SCAFFOLD_PLUGINS_DIR"):
            kwargs["plugins_dir"] = Path(os.environ["PLUGIN_SCAFFOLD_PLUGINS_DIR"])
        if os.environ.get("PLUGIN_SCAFFOLD_STUBS_DIR"):
            kwargs["stubs_dir"] = Path(os.environ["PLUGIN_SCAFFOLD_STUBS_DIR"])
        if os.environ.get("PLUGIN_SCAFFOLD_VENDOR"):
            kwargs["vendor_prefix"] = os.environ["PLUGIN_SCAFFOLD_VENDOR"]
        if os.environ.get("PLUGIN_SCAFFOLD_CORE_VERSION"):
            kwargs["core_version"] = os.environ["PLUGIN_SCAFFOLD_CORE_VERSION"]
        return cls(**kwargs)
