"""CLI command: critsplit inspect -- show how a stylesheet would be split."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from critsplit.errors import StylesheetError
from critsplit.logs import build_logger
from critsplit.partition import RuleWalker, describe_node
from critsplit.stylesheet import parse_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--matcher", "matchers", multiple=True, help="Extra critical selector regex (repeatable)")
@click.option("--ignore-case", is_flag=True, help="Match --matcher patterns case-insensitively")
def inspect(cssfile: str, matchers: tuple[str, ...], ignore_case: bool) -> None:
    """Parse a stylesheet and list the rules that would be inlined.

    Nothing is written; each critical node is printed with the reason it
    was picked.
    """
    css_path = Path(cssfile)

    try:
        sheet = parse_stylesheet(css_path.read_text(encoding="utf-8-sig"))
    except (StylesheetError, UnicodeDecodeError) as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    patterns = [f"(?i){m}" if ignore_case else m for m in matchers]
    walker = RuleWalker(patterns, logger=build_logger("warn"))
    partition = walker.partition(sheet)

    click.echo(f"Stylesheet: {css_path.name}")
    buckets = (
        ("font-face", partition.font_defs),
        ("element", partition.element_rules),
        ("matcher", partition.additional_rules),
    )
    for label, nodes in buckets:
        for node in nodes:
            click.echo(f"  [{label}] {describe_node(node)}")
    click.echo()
    click.echo(f"Critical nodes: {len(partition)}")
    click.echo(f"Remaining rules: {len(sheet.rules)}")
