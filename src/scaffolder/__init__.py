"""Plugin scaffolder -- generates plugin source trees from stub templates.

A stub catalog is a directory whose file and directory names, and file
contents, contain ``{token}`` placeholders.  The scaffolder derives the token
values from a plugin identifier, copies the stubs with every placeholder
resolved, then removes the parts that belong to features the caller did not
select.

Quick usage::

    from src.scaffolder import PluginGenerator, PluginOptions

    options = PluginOptions(id="acme/hello-world", features=["views", "routes"])
    result = await PluginGenerator(options).generate()
"""

from src.scaffolder.errors import (
    DestinationExists,
    InvalidIdentifier,
    IOFailure,
    ScaffoldError,
    UnknownFeature,
)
from src.scaffolder.features import FEATURE_CATALOG, FeatureSet, prune
from src.scaffolder.generator import GenerationResult, PluginGenerator, PluginOptions
from src.scaffolder.instantiator import OutputTree, TreeInstantiator, instantiate
from src.scaffolder.rewriter import ContentRewriter
from src.scaffolder.snippets import assemble_snippets
from src.scaffolder.templates import TemplateRenderer
from src.scaffolder.tokens import resolve_metadata, resolve_tokens

__all__ = [
    "ContentRewriter",
    "DestinationExists",
    "FEATURE_CATALOG",
    "FeatureSet",
    "GenerationResult",
    "IOFailure",
    "InvalidIdentifier",
    "OutputTree",
    "PluginGenerator",
    "PluginOptions",
    "ScaffoldError",
    "TemplateRenderer",
    "TreeInstantiator",
    "UnknownFeature",
    "assemble_snippets",
    "instantiate",
    "prune",
    "resolve_metadata",
    "resolve_tokens",
]
