"""CLI command: critsplit split -- split every stylesheet in a build directory."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from critsplit.assets import AssetMap, BytesAsset
from critsplit.config import SplitConfig
from critsplit.errors import ConfigError
from critsplit.logs import LOG_LEVELS, resolve_level
from critsplit.model.outcome import Status
from critsplit.splitter import CriticalSplitter


def _build_config(
    config_file: str | None,
    additional_css: str | None,
    additional_css_file: str | None,
    matchers: tuple[str, ...],
    ignore_case: bool,
    include: str | None,
    minify: bool | None,
    log_level: str | None,
) -> SplitConfig:
    config = SplitConfig.from_file(config_file) if config_file else SplitConfig()
    if additional_css_file:
        additional_css = Path(additional_css_file).read_text(encoding="utf-8")
    patterns = tuple(f"(?i){m}" if ignore_case else m for m in matchers)
    return config.merged(
        additional_css=additional_css,
        additional_matchers=(*config.additional_matchers, *patterns) if patterns else None,
        include=include,
        minify=minify,
        log_level=log_level,
    )


@click.command()
@click.argument("build_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--out-dir", default=None, help="Write results here instead of BUILD_DIR")
@click.option("--additional-css", default=None, help="Raw CSS appended to every critical output")
@click.option(
    "--additional-css-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="File whose contents are appended to every critical output",
)
@click.option("--matcher", "matchers", multiple=True, help="Extra critical selector regex (repeatable)")
@click.option("--ignore-case", is_flag=True, help="Match --matcher patterns case-insensitively")
@click.option("--include", default=None, help="Regex selecting stylesheet files (default: \\.css$)")
@click.option("--minify/--no-minify", default=None, help="Minify the critical output")
@click.option(
    "--log-level",
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    default=None,
    help="Verbosity of progress output",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file of options",
)
def split(
    build_dir: str,
    out_dir: str | None,
    additional_css: str | None,
    additional_css_file: str | None,
    matchers: tuple[str, ...],
    ignore_case: bool,
    include: str | None,
    minify: bool | None,
    log_level: str | None,
    config_file: str | None,
) -> None:
    """Split the stylesheets under BUILD_DIR into critical and deferred CSS.

    Each stylesheet is rewritten with its non-critical remainder and a
    ``<name>.critical`` file is written beside it when anything was critical.
    """
    try:
        config = _build_config(
            config_file,
            additional_css,
            additional_css_file,
            matchers,
            ignore_case,
            include,
            minify,
            log_level,
        )
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=min(resolve_level(config.log_level), logging.CRITICAL),
        format="%(levelname)s %(name)s: %(message)s",
    )

    splitter = CriticalSplitter(config)
    root = Path(build_dir)
    assets = AssetMap()
    for path in sorted(root.rglob("*")):
        name = path.relative_to(root).as_posix()
        if path.is_file() and splitter.is_stylesheet(name):
            assets[name] = BytesAsset(path.read_bytes())

    report = splitter.process_assets(assets)

    target = Path(out_dir) if out_dir else root
    for name, asset in assets.items():
        dest = target / name
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(asset.source())

    if not report.sheets:
        click.echo(f"No stylesheets found in {build_dir}")
        return

    for outcome in report.sheets:
        line = f"  {outcome.name}: {outcome.status.value}"
        if outcome.status is Status.SUCCESS:
            line += f" ({outcome.size_after} of {outcome.size_before} bytes critical)"
        elif outcome.failure_reason:
            line += f" - {outcome.failure_reason}"
        click.echo(line, err=outcome.failed)

    minified = sum(1 for o in report.minified if o.status is Status.SUCCESS)
    if report.minified:
        click.echo(f"Minified {minified}/{len(report.minified)} critical files")

    if report.failed:
        click.echo(f"{len(report.failed)} stylesheet(s) failed", err=True)
        sys.exit(1)
