"""Main plugin scaffolding orchestrator.

Takes a ``PluginOptions`` (identifier, metadata, selected features) and
generates a plugin directory from the stub catalog:

1. Pre-flight: validate the identifier, plugin name and features, and make
   sure the destination does not exist.  Nothing is written before this passes.
2. Build the token table, including the feature-dependent snippets.
3. Copy the ``module`` stub tree with renamed paths and rewritten contents.
4. Copy the manifest and root plugin class to their fixed names and replace
   ``src/Providers`` with the plugin provider stubs.
5. Prune paths owned by unselected features, then empty directories.

A failure after step 1 leaves a partial plugin behind; the caller is
expected to tell the user to delete it before retrying.
"""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field

from src.config import Config

from .errors import DestinationExists, IOFailure
from .features import FeatureSet, prune
from .instantiator import OutputTree, TreeInstantiator
from .rewriter import ContentRewriter
from .snippets import assemble_snippets
from .templates import TemplateRenderer
from .tokens import (
    resolve_metadata,
    resolve_tokens,
    validate_plugin_id,
    validate_plugin_name,
)


MANIFEST_STUB = "plugin.json"
MANIFEST_TARGET = "plugin.json"
PLUGIN_CLASS_STUB = "Plugin.stub"
PLUGIN_CLASS_TARGET = Path("src") / "Plugin.php"
PROVIDERS_DIR = Path("src") / "Providers"


# ---------------------------------------------------------------------------
# Input / output models
# ---------------------------------------------------------------------------


class PluginOptions(BaseModel):
    """Everything the caller supplies for one plugin.

    Metadata fields left as ``None`` are filled from the defaults table in
    :mod:`src.scaffolder.tokens`.
    """

    id: str = Field(..., description="Plugin ID (ex: botble/example-name)")
    name: str | None = Field(default=None, description="Plugin name")
    description: str | None = Field(default=None, description="Plugin description")
    namespace: str | None = Field(default=None, description="Plugin namespace")
    provider: str | None = Field(default=None, description="Plugin service provider class")
    author: str | None = Field(default=None, description="Plugin author")
    author_url: str | None = Field(default=None, description="Plugin author URL")
    version: str | None = Field(default=None, description="Plugin version")
    minimum_core_version: str | None = Field(
        default=None, description="Minimum host core version"
    )
    features: list[str] = Field(default_factory=list, description="Optional features")
    crud: bool = Field(default=False, description="Include the CRUD example")

    def metadata(self) -> dict[str, str | None]:
        """The metadata fields as a plain dict."""
        return self.model_dump(exclude={"id", "features", "crud"})


@dataclass
class GenerationResult:
    """Outcome of a successful generation run.

    ``created`` holds the relative paths written by the run that are still
    present after pruning; ``removed`` holds the absolute paths pruning
    deleted.
    """

    plugin_id: str
    name: str
    location: Path
    features: FeatureSet
    tokens: dict[str, str]
    created: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)

    def files(self) -> list[Path]:
        """Files present in the generated plugin, relative and sorted."""
        return sorted(
            p.relative_to(self.location)
            for p in self.location.rglob("*")
            if p.is_file()
        )


@dataclass(frozen=True)
class _Plan:
    plugin_id: str
    metadata: dict[str, str]
    features: FeatureSet
    location: Path


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class PluginGenerator:
    """Generates one plugin directory from the stub catalog."""

    def __init__(
        self,
        options: PluginOptions,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.options = options
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    # -- Pre-flight ----------------------------------------------------------

    def preflight(self) -> _Plan:
        """Validate every input before anything touches the filesystem.

        Raises:
            InvalidIdentifier: Malformed or empty plugin id or name.
            UnknownFeature: A feature outside the catalog.
            DestinationExists: The plugin directory is already there.
        """
        plugin_id = validate_plugin_id(self.options.id)
        features = FeatureSet.from_names(self.options.features, crud=self.options.crud)
        metadata = resolve_metadata(
            plugin_id,
            self.options.metadata(),
            vendor_prefix=self.config.vendor_prefix,
            core_version=self.config.core_version,
        )
        validate_plugin_name(metadata["name"])
        location = self.config.plugin_path(metadata["name"])
        if location.exists():
            raise DestinationExists(location)
        return _Plan(plugin_id, metadata, features, location)

    def build_tokens(self, plan: _Plan) -> dict[str, str]:
        """Token table for *plan*, snippet tokens included."""
        tokens = resolve_tokens(
            plan.plugin_id,
            plan.metadata,
            vendor_prefix=self.config.vendor_prefix,
            core_version=self.config.core_version,
        )
        tokens.update(assemble_snippets(plan.features, plan.metadata, self.renderer))
        return tokens

    # -- Public API ----------------------------------------------------------

    async def generate(self) -> GenerationResult:
        """Generate the plugin.

        Steps run strictly one after another; each filesystem step runs in a
        worker thread so the event loop is not blocked.

        Returns:
            A ``GenerationResult`` describing the new plugin.
        """
        plan = self.preflight()
        tokens = self.build_tokens(plan)
        rewriter = ContentRewriter(tokens)
        instantiator = TreeInstantiator(
            rewriter,
            stub_suffix=self.config.stub_suffix,
            output_suffix=self.config.output_suffix,
        )

        tree = await asyncio.to_thread(
            instantiator.instantiate, self.config.module_stubs_path, plan.location
        )
        created = list(tree.paths)
        created.extend(
            await asyncio.to_thread(self._copy_plugin_files, rewriter, plan.location)
        )
        providers = await asyncio.to_thread(
            self._replace_providers, instantiator, plan.location
        )
        created.extend(PROVIDERS_DIR / p for p in providers.paths)

        removed = await asyncio.to_thread(prune, plan.location, plan.features)
        # Drop replaced providers and pruned paths, keep the first write order.
        created = [p for p in dict.fromkeys(created) if (plan.location / p).exists()]

        return GenerationResult(
            plugin_id=plan.plugin_id,
            name=plan.metadata["name"],
            location=plan.location,
            features=plan.features,
            tokens=tokens,
            created=created,
            removed=removed,
        )

    # -- Fixed-name files ----------------------------------------------------

    def _copy_plugin_files(self, rewriter: ContentRewriter, location: Path) -> list[Path]:
        """Copy the manifest and root plugin class to their fixed names."""
        stubs = self.config.plugin_stubs_path
        copies = [
            (stubs / MANIFEST_STUB, Path(MANIFEST_TARGET)),
            (stubs / PLUGIN_CLASS_STUB, PLUGIN_CLASS_TARGET),
        ]
        for source, rel_target in copies:
            target = location / rel_target
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise IOFailure(target.parent, "Failed to create directory") from exc
            rewriter.copy_file(source, target)
        return [rel for _, rel in copies]

    def _replace_providers(self, instantiator: TreeInstantiator, location: Path) -> OutputTree:
        """Swap the module's providers for the plugin provider stubs."""
        target = location / PROVIDERS_DIR
        if target.exists():
            try:
                shutil.rmtree(target)
            except OSError as exc:
                raise IOFailure(target, "Failed to remove directory") from exc
        return instantiator.instantiate(
            self.config.plugin_stubs_path / PROVIDERS_DIR, target
        )
