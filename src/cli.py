"""Command-line entry point for the plugin scaffolder.

Usage::

    python -m src.cli acme/hello-world
    python -m src.cli acme/hello-world --features views,routes --author "Jane"
    python -m src.cli acme/blog --crud --plugins-dir ./platform/plugins
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

import yaml

from src.config import Config
from src.scaffolder.errors import IOFailure, ScaffoldError
from src.scaffolder.features import FEATURE_CATALOG
from src.scaffolder.generator import PluginGenerator, PluginOptions
from src.utils import (
    console,
    format_duration,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``python -m src.cli``."""
    parser = argparse.ArgumentParser(
        description="Create a new plugin from the stub catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Features:\n"
            + "".join(f"  {key:<18} {label}\n" for key, label in FEATURE_CATALOG.items())
            + "\nExamples:\n"
            "  python -m src.cli acme/hello-world --features views,routes\n"
            "  python -m src.cli acme/blog --crud\n"
        ),
    )

    parser.add_argument("id", help="Plugin ID (ex: botble/example-name)")
    parser.add_argument("--name", default=None, help="Plugin name (default: kebab-case of the ID)")
    parser.add_argument("--description", default=None, help="Plugin description")
    parser.add_argument("--namespace", default=None, help="Plugin namespace (ex: Acme/HelloWorld)")
    parser.add_argument("--provider", default=None, help="Plugin service provider class")
    parser.add_argument("--author", default=None, help="Plugin author")
    parser.add_argument("--author-url", default=None, help="Plugin author URL")
    parser.add_argument("--version", dest="plugin_version", default=None, help="Plugin version")
    parser.add_argument(
        "--minimum-core-version", default=None, help="Minimum host core version"
    )
    parser.add_argument(
        "--features",
        default="",
        help="Comma-separated optional features (see list below)",
    )
    parser.add_argument(
        "--crud",
        action="store_true",
        help="Include the CRUD example (implies permissions, database, translations, routes)",
    )
    parser.add_argument("--config", default=None, help="JSON or YAML scaffolder config file")
    parser.add_argument("--plugins-dir", default=None, help="Directory plugins are created in")
    parser.add_argument("--stubs-dir", default=None, help="Alternative stub catalog")
    parser.add_argument("--vendor-prefix", default=None, help="Vendor for the default namespace")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Config file (or environment) first, then command-line overrides."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    overrides: dict[str, object] = {}
    if args.plugins_dir:
        overrides["plugins_dir"] = Path(args.plugins_dir)
    if args.stubs_dir:
        overrides["stubs_dir"] = Path(args.stubs_dir)
    if args.vendor_prefix:
        overrides["vendor_prefix"] = args.vendor_prefix
    if overrides:
        config = config.model_copy(update=overrides)
    return config


def options_from_args(args: argparse.Namespace) -> PluginOptions:
    features = [f.strip() for f in args.features.split(",") if f.strip()]
    return PluginOptions(
        id=args.id,
        name=args.name,
        description=args.description,
        namespace=args.namespace,
        provider=args.provider,
        author=args.author,
        author_url=args.author_url,
        version=args.plugin_version,
        minimum_core_version=args.minimum_core_version,
        features=features,
        crud=args.crud,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m src.cli``."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print_error(f"Error: could not load config: {exc}")
        sys.exit(1)

    generator = PluginGenerator(options_from_args(args), config)
    console.print("[bold cyan]Welcome to the plugin generator[/bold cyan]")

    started = time.monotonic()
    try:
        with console.status("Generating plugin..."):
            result = asyncio.run(generator.generate())
    except IOFailure as exc:
        print_error(f"Error: {exc}")
        print_warning(
            "The plugin was only partially created. Delete it and run the command again."
        )
        sys.exit(1)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_summary_table(
        {
            "Plugin ID": result.plugin_id,
            "Namespace": result.tokens["{Module}"],
            "Features": ", ".join(result.features.sorted()) or "(none)",
            "CRUD example": "yes" if result.features.crud else "no",
            "Location": str(result.location),
            "Duration": format_duration(time.monotonic() - started),
        },
        title="Plugin created",
    )
    print_file_tree(result.name, result.files())
    print_success(f"The plugin {result.name} was created in {result.location}, customize it!")


if __name__ == "__main__":
    main()
