"""Parse CSS text into a mutable stylesheet tree using tinycss2."""

from __future__ import annotations

import tinycss2

from critsplit.errors import StylesheetError
from critsplit.stylesheet.model import (
    AtRule,
    Container,
    Node,
    Raw,
    Rule,
    Stylesheet,
    is_container_name,
)

__all__ = ["parse_stylesheet"]

BOM = "\ufeff"

# HTML comment markers, ignored by CSS between top-level rules.
_CDO_CDC = ("<!--", "-->")


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse *source* into a :class:`Stylesheet`.

    Whitespace, comments and ``<!--``/``-->`` markers between top-level rules
    are kept as :class:`Raw` nodes so the tree serializes back to the
    original text.  A leading byte-order mark is dropped.  Raises
    :class:`StylesheetError` at the first syntax error tinycss2 reports.
    """
    if source.startswith(BOM):
        source = source[len(BOM):]
    tokens = tinycss2.parse_component_value_list(source, skip_comments=False)
    sheet = Stylesheet()
    for segment in _top_level_segments(tokens):
        if isinstance(segment, list):
            _populate(
                sheet,
                tinycss2.parse_stylesheet(
                    segment, skip_comments=False, skip_whitespace=False
                ),
            )
        else:
            sheet.append(Raw(segment.value))
    return sheet


def _top_level_segments(tokens: list):
    """Yield runs of tokens to parse, and the CDO/CDC tokens between them.

    tinycss2 drops CDO/CDC tokens found where a top-level rule may start, so
    those are cut out here and kept.  Anywhere else they belong to the rule
    being read and stay in the run.
    """
    run: list = []
    at_rule_start = True
    in_at_rule = False
    for token in tokens:
        if token.type in ("whitespace", "comment"):
            run.append(token)
            continue
        if at_rule_start and token.type == "literal" and token.value in _CDO_CDC:
            if run:
                yield run
                run = []
            yield token
            continue
        run.append(token)
        if at_rule_start:
            at_rule_start = False
            in_at_rule = token.type == "at-keyword"
        if token.type == "{} block" or (
            in_at_rule and token.type == "literal" and token.value == ";"
        ):
            at_rule_start = True
    if run:
        yield run


def _populate(container: Container, nodes: list) -> None:
    for node in nodes:
        container.append(_convert(node))


def _convert(node) -> Node:
    if node.type == "error":
        raise StylesheetError(node.message, node.source_line, node.source_column)
    if node.type == "qualified-rule":
        return Rule(prelude=node.prelude, content=node.content)
    if node.type == "at-rule":
        if node.content is not None and is_container_name(node.lower_at_keyword):
            at_rule = AtRule(at_keyword=node.at_keyword, prelude=node.prelude, children=[])
            _populate(
                at_rule,
                tinycss2.parse_rule_list(
                    node.content, skip_comments=False, skip_whitespace=False
                ),
            )
            return at_rule
        return AtRule(at_keyword=node.at_keyword, prelude=node.prelude, content=node.content)
    # whitespace and comments
    return Raw(tinycss2.serialize([node]))
