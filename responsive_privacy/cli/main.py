#!/usr/bin/env python3
"""Responsive privacy CLI - filter content records at a disclosure level."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
import yaml

from responsive_privacy import __version__
from responsive_privacy.core.config import PrivacyConfig
from responsive_privacy.core.config_loader import ConfigLoader
from responsive_privacy.core.context import read_privacy_level
from responsive_privacy.core.exceptions import ResponsivePrivacyError
from responsive_privacy.core.levels import parse_privacy_level
from responsive_privacy.engine import PrivacyEngine


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def _resolve_level(level: Optional[str]) -> int:
    """CLI level wins over PRIVACY_LEVEL; invalid values fall back with a warning."""
    environment_level = read_privacy_level()
    if level is None:
        return environment_level
    return parse_privacy_level(level, fallback=environment_level)


def _load_config(config_path: Optional[str]) -> PrivacyConfig:
    if config_path is None:
        # Catalog-only commands need no collections
        return PrivacyConfig(collections={})
    try:
        return ConfigLoader().load_config(config_path)
    except ResponsivePrivacyError as e:
        raise click.ClickException(e.describe()) from e


def _read_records_file(records_path: Path) -> Any:
    try:
        with records_path.open(encoding="utf-8") as f:
            if records_path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not parse records file {records_path}: {e}") from e


def _check_collection(name: str, records: Any, records_path: Path) -> list[dict[str, Any]]:
    if not isinstance(records, list):
        raise click.ClickException(
            f"Collection '{name}' in {records_path} must be a list of records, "
            f"got {type(records).__name__}"
        )
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise click.ClickException(
                f"Record {index} of collection '{name}' in {records_path} must be a mapping, "
                f"got {type(record).__name__}"
            )
    return records


def _load_records(records_path: Path, collection: Optional[str]) -> dict[str, list[dict[str, Any]]]:
    data = _read_records_file(records_path)

    if isinstance(data, list):
        if not collection:
            raise click.ClickException(
                "Records file holds a single list; pass --collection to name it"
            )
        return {collection: _check_collection(collection, data, records_path)}

    if isinstance(data, dict):
        if collection:
            if collection not in data:
                raise click.ClickException(
                    f"Collection '{collection}' not found in {records_path}"
                )
            data = {collection: data[collection]}
        return {
            name: _check_collection(name, records, records_path)
            for name, records in data.items()
        }

    raise click.ClickException(
        f"Records file must contain a list or a mapping of collection to list, "
        f"got {type(data).__name__}"
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Responsive Privacy - disclosure-level filtering for content records."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@cli.command()
@click.argument("records_file", type=click.Path(exists=True))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True),
    required=True,
    help="Path to the responsive privacy config (YAML or JSON)",
)
@click.option(
    "--collection",
    help="Collection name for a records file holding a single list",
)
@click.option(
    "--level",
    "-l",
    help="Disclosure level 0-4 (default: PRIVACY_LEVEL, then 4)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output file path (default: <records>_filtered.json)",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=1,
    help="Worker threads per collection",
)
@click.option(
    "--summary/--no-summary",
    default=True,
    help="Print the build summary",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with an error if any compliance warning was raised",
)
def transform(
    records_file: str,
    config_path: str,
    collection: Optional[str],
    level: Optional[str],
    output: Optional[str],
    workers: int,
    summary: bool,
    strict: bool,
) -> None:
    """Filter content records at a disclosure level."""
    records_path = Path(records_file)
    config = _load_config(config_path)
    records = _load_records(records_path, collection)

    engine = PrivacyEngine(config, level=_resolve_level(level), max_workers=workers)
    click.echo(f"Filtering at Level {engine.level} ({engine.level_name})")

    results = engine.transform_collections(records)
    filtered = {name: [result.data for result in entries] for name, entries in results.items()}

    output_path = (
        Path(output)
        if output
        else records_path.parent / f"{records_path.stem}_filtered.json"
    )
    output_path.write_text(json.dumps(filtered, indent=2, default=str), encoding="utf-8")
    click.echo(f"Saving filtered records to: {output_path}")

    audit = engine.summarize(results)
    if summary:
        click.echo(audit.render())

    if strict and audit.total_warnings:
        raise click.ClickException(
            f"{audit.total_warnings} compliance warnings require review"
        )


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def check(config_file: str) -> None:
    """Validate a responsive privacy config file."""
    errors = ConfigLoader().validate_config_file(config_file)
    if errors:
        for error in errors:
            click.echo(f"✗ {error}", err=True)
        raise click.ClickException(f"Invalid configuration: {config_file}")

    config = _load_config(config_file)
    click.echo(f"✓ {config_file} is valid ({len(config.collections)} collections)")


@cli.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True))
@click.option("--level", "-l", help="Disclosure level 0-4")
def attributes(config_path: Optional[str], level: Optional[str]) -> None:
    """List the resolved attribute catalog and visibility at a level."""
    engine = PrivacyEngine(_load_config(config_path), level=_resolve_level(level))
    click.echo(f"Level {engine.level} - {engine.level_name}")

    for attribute_id, attribute in engine.context.config.attributes.items():
        state = "visible" if engine.is_visible(attribute_id) else "hidden"
        flags = " [compliance]" if attribute.compliance_protected else ""
        click.echo(
            f"  {attribute_id:<6} {attribute.name:<28} threshold={attribute.threshold} "
            f"{attribute.redaction.value:<7} {state}{flags}"
        )


@cli.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True))
@click.option("--level", "-l", help="Disclosure level 0-4")
def status(config_path: Optional[str], level: Optional[str]) -> None:
    """Show the active disclosure level."""
    current = PrivacyEngine(_load_config(config_path), level=_resolve_level(level)).status()
    click.echo(f"Level {current.level}: {current.name}")
    if current.description:
        click.echo(current.description)
    if current.is_reduced:
        click.echo("Reduced disclosure is active")


@cli.command()
def version() -> None:
    """Show responsive privacy version."""
    click.echo(f"responsive-privacy v{__version__}")


def main() -> int:
    """Main entry point."""
    try:
        cli()
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
