"""Feature-dependent code fragments substituted as ordinary tokens.

Each snippet placeholder has exactly one builder.  A builder receives the
feature set and the resolved plugin metadata and returns either a fragment
or that snippet's neutral value, so the placeholder never survives into the
generated files.

| Placeholder                      | Needs                 | Neutral value |
|----------------------------------|-----------------------|---------------|
| ``{PluginBootProvider}``         | any loading feature   | ``;``         |
| ``{PluginRegisterLanguage}``     | CRUD example          | ``""``        |
| ``{PluginRegisterDashboardMenu}``| CRUD example          | ``""``        |
| ``{PluginServiceProviderImports}``| CRUD example         | ``""``        |
| ``{PluginHandleMethodRemove}``   | CRUD example or database | ``//``     |
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from . import naming
from .features import FeatureSet
from .templates import TemplateRenderer


SnippetBuilder = Callable[[FeatureSet, Mapping[str, str], TemplateRenderer], str]

BOOT_CHAIN_INDENT = " " * 12
REMOVE_INDENT = " " * 8


def build_boot_provider(
    features: FeatureSet, metadata: Mapping[str, str], renderer: TemplateRenderer
) -> str:
    """Chained ``load*()`` calls for the service provider's ``boot()``."""
    calls: list[str] = []

    if "helpers" in features:
        calls.append("loadHelpers()")

    configurations = [
        name
        for feature, name in (("config", "general"), ("permissions", "permissions"))
        if feature in features
    ]
    if configurations:
        quoted = ", ".join(f"'{name}'" for name in configurations)
        calls.append(f"loadAndPublishConfigurations([{quoted}])")

    if "translations" in features:
        calls.append("loadAndPublishTranslations()")
    if "routes" in features:
        calls.append("loadRoutes()")
    if "views" in features or "publishing_assets" in features:
        calls.append("loadAndPublishViews()")
    if "publishing_assets" in features:
        calls.append("publishAssets()")
    if "database" in features:
        calls.append("loadMigrations()")

    if not calls:
        return ";"
    return "->" + f"\n{BOOT_CHAIN_INDENT}->".join(calls) + ";"


def build_register_language(
    features: FeatureSet, metadata: Mapping[str, str], renderer: TemplateRenderer
) -> str:
    if not features.crud:
        return ""
    body = renderer.render(
        "register_language.php.j2", {"model": naming.studly(metadata["name"])}
    )
    return "\n" + body


def build_dashboard_menu(
    features: FeatureSet, metadata: Mapping[str, str], renderer: TemplateRenderer
) -> str:
    if not features.crud:
        return ""
    return "\n" + renderer.render("dashboard_menu.php.j2", {"name": metadata["name"]})


def build_provider_imports(
    features: FeatureSet, metadata: Mapping[str, str], renderer: TemplateRenderer
) -> str:
    if not features.crud:
        return ""
    imports = [
        "Botble\\Base\\Facades\\DashboardMenu",
        f"{metadata['namespace']}\\Models\\{naming.studly(metadata['name'])}",
    ]
    return renderer.render("provider_imports.php.j2", {"imports": imports})


def build_handle_remove(
    features: FeatureSet, metadata: Mapping[str, str], renderer: TemplateRenderer
) -> str:
    """``Schema::dropIfExists`` calls for the plugin's ``remove()`` hook."""
    if not features.crud and "database" not in features:
        return "//"
    table = naming.plural(metadata["name"].replace("-", "_"))
    return renderer.render(
        "handle_remove.php.j2",
        {
            "tables": [table, f"{table}_translations"],
            "separator": "\n" + REMOVE_INDENT,
        },
    )


SNIPPET_BUILDERS: dict[str, SnippetBuilder] = {
    "{PluginBootProvider}": build_boot_provider,
    "{PluginRegisterLanguage}": build_register_language,
    "{PluginRegisterDashboardMenu}": build_dashboard_menu,
    "{PluginServiceProviderImports}": build_provider_imports,
    "{PluginHandleMethodRemove}": build_handle_remove,
}


def assemble_snippets(
    features: FeatureSet,
    metadata: Mapping[str, str],
    renderer: TemplateRenderer | None = None,
) -> dict[str, str]:
    """Build every snippet token for *features*.

    Args:
        features: The validated feature selection.
        metadata: Resolved plugin metadata (see
            :func:`src.scaffolder.tokens.resolve_metadata`).
        renderer: Snippet template renderer; the bundled one by default.

    Returns:
        ``{placeholder: fragment}`` for every key of ``SNIPPET_BUILDERS``.
    """
    renderer = renderer or TemplateRenderer()
    return {
        placeholder: builder(features, metadata, renderer)
        for placeholder, builder in SNIPPET_BUILDERS.items()
    }
