"""Rule walker: moves critical nodes out of a stylesheet into buckets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from critsplit.partition.selectors import Matcher, compile_matchers, is_element_selector, matches_any
from critsplit.stylesheet.model import AtRule, Container, Node, Rule, Stylesheet


@dataclass
class Partition:
    """Nodes detached from a source stylesheet, grouped by the reason."""

    font_defs: list[Node] = field(default_factory=list)
    element_rules: list[Node] = field(default_factory=list)
    additional_rules: list[Node] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.font_defs) + len(self.element_rules) + len(self.additional_rules)

    def nodes(self) -> list[Node]:
        """All detached nodes in assembly order."""
        return [*self.font_defs, *self.element_rules, *self.additional_rules]


class RuleWalker:
    """Walks a stylesheet once and relocates critical nodes.

    - ``@font-face`` rules always go to ``font_defs``.
    - Rules whose selector list passes the element heuristic go to
      ``element_rules``.
    - Rules matched by an additional matcher go to ``additional_rules``.

    A qualifying rule nested in a container at-rule (``@media`` etc.) pulls
    its whole parent at-rule along, siblings and condition included.  Each
    container's children are snapshotted before iterating, and nodes whose
    ancestor was already relocated are skipped.  A node is relocated at most
    once: the first bucket that claims it keeps it.
    """

    def __init__(
        self,
        matchers: Iterable[object] = (),
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("critsplit")
        self.matchers: list[Matcher] = compile_matchers(matchers, self.logger)

    def partition(self, source: Stylesheet) -> Partition:
        """Detach critical nodes from *source* (in place) and return them."""
        buckets = Partition()
        self._walk(source, source, buckets)
        return buckets

    def _walk(self, source: Stylesheet, container: Container, buckets: Partition) -> None:
        for node in list(container.children or ()):
            if not node.is_attached_to(source):
                continue
            if isinstance(node, AtRule):
                if node.name == "font-face":
                    self._relocate(source, node, buckets.font_defs)
                elif node.is_container:
                    self._walk(source, node, buckets)
            elif isinstance(node, Rule):
                self._classify(source, node, buckets)

    def _classify(self, source: Stylesheet, rule: Rule, buckets: Partition) -> None:
        selectors = rule.selectors
        if is_element_selector(selectors):
            self._relocate(source, self._target(rule), buckets.element_rules)
        for matcher in self.matchers:
            if matches_any(selectors, [matcher], self.logger):
                self._relocate(source, self._target(rule), buckets.additional_rules)

    @staticmethod
    def _target(rule: Rule) -> Node:
        # promote to the enclosing at-rule unless the rule sits at the root
        if isinstance(rule.parent, AtRule):
            return rule.parent
        return rule

    def _relocate(self, source: Stylesheet, node: Node, bucket: list[Node]) -> None:
        if not node.is_attached_to(source):
            self.logger.debug("Skipping %s, already relocated", describe_node(node))
            return
        bucket.append(node.detach())


def describe_node(node: Node) -> str:
    if isinstance(node, AtRule):
        return f"@{node.name} {node.params}".rstrip()
    if isinstance(node, Rule):
        return node.selector
    return type(node).__name__
