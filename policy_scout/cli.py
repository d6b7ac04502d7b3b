"""policy-scout CLI - list collections and collect image sources for a policy.

The CLI is a thin wrapper around the library (see pipeline.py). It parses
arguments, resolves settings, wires up the HTTP clients and prints results.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from policy_scout.chain import ChainIndexClient
from policy_scout.config import list_settings, load_settings, resolve_quota
from policy_scout.directory import fetch_directory
from policy_scout.errors import ScoutError
from policy_scout.http import JsonClient
from policy_scout.json_output import (
    ErrorDetail,
    OutputEnvelope,
    error_envelope,
    success_envelope,
)
from policy_scout.models import CollectionDirectory
from policy_scout.output import detail, error, info, success, warn
from policy_scout.pipeline import HarvestResult, collect_image_sources
from policy_scout.resolver import resolve

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

PACKAGE_LOGGER = "policy_scout"


class _ClickEchoHandler(logging.Handler):
    """Log handler that writes through click so output follows the current stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-except
            self.handleError(record)


def configure_logging(level: str) -> None:
    """Attach a single stderr handler to the package logger at ``level``."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, _ClickEchoHandler):
            logger.removeHandler(handler)
    handler = _ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())


def should_output_json(ctx: click.Context) -> bool:
    """True if the global --format option selected JSON."""
    obj = ctx.find_root().obj or {}
    return obj.get("format", "text") == "json"


def output_json_envelope(envelope: OutputEnvelope) -> None:
    """Output a JSON envelope to stdout."""
    click.echo(envelope.to_json())


def _fail(command: str, err: ScoutError, *, use_json: bool) -> NoReturn:
    """Report a structured error and exit with status 1."""
    if use_json:
        output_json_envelope(error_envelope(command, [ErrorDetail.from_exception(err)]))
    else:
        error(err.message)
        detail(f"  ({err.code})", file=sys.stderr)
    raise SystemExit(1) from err


def _config_file(ctx: click.Context) -> Path | None:
    obj = ctx.find_root().obj or {}
    return obj.get("config_file")


@click.group()
@click.version_option(package_name="policy-scout")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostic logging level (written to stderr).",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./policy-scout.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, output_format: str, log_level: str, config_file: Path | None) -> None:
    """policy-scout - Collect NFT image sources from on-chain metadata."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format
    ctx.obj["config_file"] = config_file
    configure_logging(log_level)


# ─────────────────────────────────────────────────────────────────────────────
# Listing mode
# ─────────────────────────────────────────────────────────────────────────────


def _directory_data(directory: CollectionDirectory) -> dict[str, Any]:
    return {
        "type": directory.type,
        "collections": [entry.to_dict() for entry in directory.entries],
        "count": len(directory.entries),
    }


def _print_directory(directory: CollectionDirectory) -> None:
    if not directory.entries:
        info("No collections listed")
        return
    info(f"{len(directory.entries)} collections ({directory.type})")
    for entry in directory.entries:
        info(entry.collection_id)
        detail(f"  {entry.description}")
        detail(f"  {entry.blockchain}/{entry.network}")


def _list_collections(ctx: click.Context, command: str) -> None:
    use_json = should_output_json(ctx)
    try:
        settings = load_settings(_config_file(ctx))
        with JsonClient(timeout=settings.timeout) as http:
            directory = fetch_directory(http, settings.catalog_url)
    except ScoutError as err:
        _fail(command, err, use_json=use_json)

    if use_json:
        output_json_envelope(success_envelope(command, _directory_data(directory)))
    else:
        _print_directory(directory)


@cli.command()
@click.pass_context
def collections(ctx: click.Context) -> None:
    """List the collections published by the catalog service.

    Examples:

        policy-scout collections

        policy-scout --format json collections
    """
    _list_collections(ctx, "collections")


# ─────────────────────────────────────────────────────────────────────────────
# Source collection
# ─────────────────────────────────────────────────────────────────────────────


def _print_harvest(result: HarvestResult) -> None:
    success(f"Collected {len(result.sources)} image sources for {result.policy_id}")
    for src in sorted(result.sources):
        detail(f"  {src}")
    info(
        f"Inspected {result.assets_inspected} of {result.assets_total} assets"
        + (" (quota reached)" if result.quota_reached else "")
    )
    if result.skipped:
        warn(f"Skipped {len(result.skipped)} assets with unusable metadata")
        for skipped in result.skipped:
            detail(f"  {skipped.asset_id}: {skipped.error.message}")


@cli.command()
@click.argument("policy_id", required=False)
@click.option(
    "--path",
    "-p",
    "target_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Directory the images are meant to be saved in (default: current directory).",
)
@click.option(
    "--quota",
    "-q",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of distinct image sources to collect (default: 10).",
)
@click.option(
    "--skip-bad-assets",
    is_flag=True,
    default=False,
    help="Skip assets whose metadata cannot be fetched or parsed instead of aborting.",
)
@click.pass_context
def sources(
    ctx: click.Context,
    policy_id: str | None,
    target_path: Path,
    quota: int | None,
    skip_bad_assets: bool,
) -> None:
    """Collect image sources for a policy.

    POLICY_ID is the collection to inspect. Without it, the available
    collections are listed instead.

    Assets are inspected one at a time, so large policies take a while.
    The run stops as soon as QUOTA distinct sources have been found.

    Examples:

        policy-scout sources

        policy-scout sources 5e8e7c... --quota 25

        policy-scout --format json sources 5e8e7c... --skip-bad-assets
    """
    if policy_id is None:
        _list_collections(ctx, "sources")
        return

    use_json = should_output_json(ctx)
    try:
        settings = load_settings(_config_file(ctx))
        resolved_quota = resolve_quota(quota, _config_file(ctx))
        with JsonClient(timeout=settings.timeout) as http:
            directory = fetch_directory(http, settings.catalog_url)
            # Unknown policies are reported before missing credentials
            resolve(policy_id, directory)
            project_id = settings.require_project_id()
            chain = ChainIndexClient(http, project_id, api_url=settings.api_url)
            result = collect_image_sources(
                directory,
                policy_id,
                chain,
                quota=resolved_quota,
                skip_bad_assets=skip_bad_assets,
                notify=None if use_json else info,
            )
    except ScoutError as err:
        _fail("sources", err, use_json=use_json)

    if use_json:
        data = result.to_dict()
        data["path"] = str(target_path)
        output_json_envelope(success_envelope("sources", data))
    else:
        _print_harvest(result)


# ─────────────────────────────────────────────────────────────────────────────
# Config commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.group()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Inspect configuration."""
    ctx.ensure_object(dict)


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show every setting with its resolved value and source.

    Sources are cli, env, file or default. The project id is masked.
    """
    use_json = should_output_json(ctx)
    try:
        settings = list_settings(_config_file(ctx))
    except ScoutError as err:
        _fail("config show", err, use_json=use_json)

    if use_json:
        output_json_envelope(success_envelope("config show", {"settings": settings}))
        return

    for key, entry in settings.items():
        value = entry["value"]
        info(f"{key} = {value if value is not None else '(not set)'}")
        detail(f"  source: {entry['source']}")
