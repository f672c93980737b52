"""Token table derivation for plugin stubs.

Takes a plugin identifier (``vendor/name`` or a bare ``name``) plus optional
metadata and produces the ``{placeholder: value}`` table that the
instantiator and rewriter apply to stub paths and contents.

Missing metadata fields are filled from ``METADATA_DEFAULTS``.  Default
templates may reference other fields (the provider default references the
namespace), so fields are resolved in topological order of their declared
dependencies.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from graphlib import TopologicalSorter

from src.config import DEFAULT_CORE_VERSION, DEFAULT_VENDOR_PREFIX

from . import naming
from .errors import InvalidIdentifier
from .rewriter import substitute


_ID_SEGMENT = re.compile(r"^[a-z0-9\-_.]+$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Metadata defaults
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetadataDefault:
    """Default template for one metadata field.

    ``alias`` is the placeholder other templates use to refer to this field
    once it is resolved; ``depends_on`` lists the fields whose aliases the
    template uses.
    """

    template: str
    depends_on: tuple[str, ...] = ()
    alias: str | None = None


METADATA_DEFAULTS: dict[str, MetadataDefault] = {
    "name": MetadataDefault("{plugin-name}"),
    "description": MetadataDefault(
        "This is a {Vendor} plugin generated by the plugin scaffolder"
    ),
    "namespace": MetadataDefault("{Vendor}/{PluginName}", alias="{Namespace}"),
    "provider": MetadataDefault(
        "{Namespace}/Providers/{PluginName}ServiceProvider",
        depends_on=("namespace",),
    ),
    "author": MetadataDefault(""),
    "author_url": MetadataDefault(""),
    "version": MetadataDefault("1.0.0"),
    "minimum_core_version": MetadataDefault("{CoreVersion}"),
}

NAMESPACE_FIELDS: frozenset[str] = frozenset({"namespace", "provider"})


def normalize_identifier(identifier: str) -> str:
    """Trim and lower-case *identifier*.

    Raises:
        InvalidIdentifier: If nothing is left after trimming.
    """
    value = (identifier or "").strip().lower()
    if not value:
        raise InvalidIdentifier(identifier or "")
    return value


def validate_plugin_id(identifier: str) -> str:
    """Check that *identifier* is ``name`` or ``vendor/name``.

    Each part may only contain letters, digits, ``-``, ``_`` and ``.``.

    Returns:
        The normalized identifier.

    Raises:
        InvalidIdentifier: If the identifier is empty or malformed.
    """
    value = normalize_identifier(identifier)
    parts = value.split("/")
    if len(parts) > 2:
        raise InvalidIdentifier(identifier, "expected <vendor>/<name>")
    for part in parts:
        if not _ID_SEGMENT.match(part):
            raise InvalidIdentifier(
                identifier, "only letters, digits, '-', '_' and '.' are allowed"
            )
    return value


def validate_plugin_name(name: str) -> str:
    """Check that *name* is usable as a single directory name.

    The name becomes the plugin directory and the source of every path
    token, so it follows the same character rules as an id segment and may
    not be made of dots only.

    Raises:
        InvalidIdentifier: If the name is empty or malformed.
    """
    if not name or not _ID_SEGMENT.match(name) or not name.strip("."):
        raise InvalidIdentifier(
            name, "plugin name may only contain letters, digits, '-', '_' and '.'"
        )
    return name


def plugin_segment(identifier: str) -> str:
    """Return the name part of ``vendor/name`` (or the whole bare name)."""
    _, sep, after = identifier.partition("/")
    return after if sep else identifier


def normalize_namespace(value: str) -> str:
    """Use single backslashes as namespace separators.

    ``Acme/Blog`` and the JSON-escaped ``Acme\\\\Blog`` both become
    ``Acme\\Blog``.
    """
    value = value.strip().replace("/", "\\")
    while "\\\\" in value:
        value = value.replace("\\\\", "\\")
    return value.strip("\\")


def resolve_metadata(
    identifier: str,
    provided: Mapping[str, str | None] | None = None,
    *,
    vendor_prefix: str = DEFAULT_VENDOR_PREFIX,
    core_version: str = DEFAULT_CORE_VERSION,
) -> dict[str, str]:
    """Fill in every metadata field, resolving defaults in dependency order.

    Args:
        identifier: Normalized plugin identifier.
        provided: Caller-supplied values.  ``None`` or a blank string means
            "use the default".
        vendor_prefix: Substituted for ``{Vendor}`` in default templates.
        core_version: Substituted for ``{CoreVersion}``.

    Returns:
        A dict with one entry per key of ``METADATA_DEFAULTS``.
    """
    provided = dict(provided or {})
    segment = plugin_segment(identifier)
    variables: dict[str, str] = {
        "{plugin-name}": naming.kebab(segment),
        "{PluginName}": naming.studly(segment),
        "{Vendor}": vendor_prefix,
        "{CoreVersion}": core_version,
    }

    graph = {field: default.depends_on for field, default in METADATA_DEFAULTS.items()}
    resolved: dict[str, str] = {}
    for field in TopologicalSorter(graph).static_order():
        default = METADATA_DEFAULTS[field]
        value = provided.get(field)
        if value is None or not value.strip():
            value = substitute(default.template, variables)
        value = value.strip()
        if field in NAMESPACE_FIELDS:
            value = normalize_namespace(value)
        resolved[field] = value
        if default.alias:
            variables[default.alias] = value

    resolved["name"] = resolved["name"].lower()
    return {field: resolved[field] for field in METADATA_DEFAULTS}


# ---------------------------------------------------------------------------
# Token table
# ---------------------------------------------------------------------------


def _json_escape(value: str) -> str:
    # Body of a JSON string literal, without the surrounding quotes.
    return json.dumps(value, ensure_ascii=False)[1:-1]


def resolve_tokens(
    identifier: str,
    metadata: Mapping[str, str | None] | None = None,
    *,
    vendor_prefix: str = DEFAULT_VENDOR_PREFIX,
    core_version: str = DEFAULT_CORE_VERSION,
) -> dict[str, str]:
    """Derive the full placeholder table for a plugin.

    Pure: the same inputs always produce an equal table.  Snippet tokens are
    not included; see :func:`src.scaffolder.snippets.assemble_snippets`.

    Raises:
        InvalidIdentifier: If *identifier* is empty after trimming.
    """
    plugin_id = normalize_identifier(identifier)
    meta = resolve_metadata(
        plugin_id, metadata, vendor_prefix=vendor_prefix, core_version=core_version
    )

    name = meta["name"]
    snake_name = naming.snake(name.replace("-", "_"))
    plural_snake = naming.plural(snake_name)

    return {
        "{type}": "plugin",
        "{types}": "plugins",
        "{-module}": name.lower(),
        "{module}": snake_name,
        "{+module}": naming.camel(name),
        "{modules}": plural_snake,
        "{Modules}": naming.ucfirst(plural_snake),
        "{-modules}": naming.plural(name),
        "{MODULE}": naming.upper_snake(snake_name),
        "{Name}": naming.studly(name),
        "{Module}": meta["namespace"],
        "{PluginId}": plugin_id,
        "{PluginName}": naming.ucfirst(name.replace("-", " ")),
        "{PluginNamespace}": _json_escape(meta["namespace"]) + "\\\\",
        "{PluginServiceProvider}": _json_escape(meta["provider"]),
        "{PluginAuthor}": _json_escape(meta["author"]),
        "{PluginAuthorURL}": _json_escape(meta["author_url"]),
        "{PluginVersion}": _json_escape(meta["version"]),
        "{PluginDescription}": _json_escape(meta["description"]),
        "{PluginMinimumCoreVersion}": _json_escape(meta["minimum_core_version"]),
    }
