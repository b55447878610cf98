"""Stylesheet tree: Stylesheet, Rule, AtRule, and Raw nodes over tinycss2 tokens.

Unlike tinycss2's own AST, this tree is mutable and parent-linked so that
rules can be detached from one container and appended to another.  Every node
keeps the original tinycss2 tokens, so serialization reproduces the source
text exactly as authored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

import tinycss2
from tinycss2.serializer import serialize_identifier

# At-rules whose block holds nested rules rather than declarations.
CONTAINER_AT_RULES = frozenset(
    {
        "media",
        "supports",
        "document",
        "layer",
        "container",
        "scope",
        "starting-style",
        "keyframes",
    }
)

_VENDOR_PREFIX_RE = re.compile(r"^-[a-z]+-")


def is_container_name(name: str) -> bool:
    """Return True if an at-rule named *name* holds nested rules."""
    return _VENDOR_PREFIX_RE.sub("", name.lower()) in CONTAINER_AT_RULES


def split_on_commas(tokens: list) -> list[str]:
    """Split a component value list on top-level commas.

    Commas nested inside functions or blocks (``:is(a, b)``) do not split.
    Comments are dropped, each part is trimmed and empty parts are skipped.
    """
    parts: list[str] = []
    current: list = []
    for token in [*tokens, None]:
        if token is None or (token.type == "literal" and token.value == ","):
            text = tinycss2.serialize(current).strip()
            if text:
                parts.append(text)
            current = []
        elif token.type != "comment":
            current.append(token)
    return parts


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair read from a block."""

    property: str
    value: str
    important: bool = False


def _read_declarations(content: list | None) -> list[Declaration]:
    if not content:
        return []
    items = tinycss2.parse_blocks_contents(
        content, skip_comments=True, skip_whitespace=True
    )
    return [
        Declaration(
            property=item.lower_name,
            value=tinycss2.serialize(item.value).strip(),
            important=item.important,
        )
        for item in items
        if item.type == "declaration"
    ]


class Node:
    """Base class for everything that can live inside a container."""

    parent: Container | None = None

    def detach(self) -> Node:
        """Remove this node from its parent, if any, and return it."""
        if self.parent is not None:
            self.parent.remove(self)
        return self

    def root(self) -> Node | Container:
        """Return the top-most ancestor (the node itself when detached)."""
        current: Node | Container = self
        while getattr(current, "parent", None) is not None:
            current = current.parent  # type: ignore[assignment]
        return current

    def is_attached_to(self, root: Container) -> bool:
        """True if *root* is reachable through this node's ancestor chain."""
        return self.root() is root

    def serialize(self) -> str:
        raise NotImplementedError


class Container:
    """Mixin for nodes owning an ordered list of children."""

    children: list[Node] | None

    def _adopt_children(self) -> None:
        for child in self.children or ():
            child.parent = self

    def append(self, node: Node) -> None:
        """Append *node*, detaching it from its previous parent first."""
        if self.children is None:
            raise TypeError(f"{self!r} cannot hold child rules")
        node.detach()
        node.parent = self
        self.children.append(node)

    def remove(self, node: Node) -> None:
        """Remove *node* (matched by identity) from the children."""
        for index, child in enumerate(self.children or ()):
            if child is node:
                del self.children[index]
                node.parent = None
                return
        raise ValueError(f"{node!r} is not a child of {self!r}")

    def walk(self) -> Iterator[Node]:
        """Yield every descendant depth-first, in document order."""
        for child in list(self.children or ()):
            yield child
            if isinstance(child, Container):
                yield from child.walk()

    def serialize_children(self) -> str:
        return "".join(child.serialize() for child in self.children or ())


@dataclass(eq=False)
class Raw(Node):
    """Whitespace or a comment between rules, kept verbatim."""

    text: str

    def serialize(self) -> str:
        return self.text


@dataclass(eq=False)
class Rule(Node):
    """A qualified (style) rule: selector list plus declaration block."""

    prelude: list = field(default_factory=list)
    content: list = field(default_factory=list)

    @property
    def selector(self) -> str:
        """The full selector list as written, trimmed."""
        return ", ".join(self.selectors)

    @property
    def selectors(self) -> list[str]:
        """Comma-separated selectors in authoring order."""
        return split_on_commas(self.prelude)

    @property
    def declarations(self) -> list[Declaration]:
        return _read_declarations(self.content)

    def serialize(self) -> str:
        return (
            tinycss2.serialize(self.prelude)
            + "{"
            + tinycss2.serialize(self.content)
            + "}"
        )


@dataclass(eq=False)
class AtRule(Container, Node):
    """An ``@``-rule.

    Container at-rules (``@media``, ``@supports``, ``@keyframes``...) carry
    parsed ``children``; all others keep their block as raw ``content``
    tokens (``None`` for statement at-rules such as ``@import``).
    """

    at_keyword: str
    prelude: list = field(default_factory=list)
    content: list | None = None
    children: list[Node] | None = None

    def __post_init__(self) -> None:
        self._adopt_children()

    @property
    def name(self) -> str:
        return self.at_keyword.lower()

    @property
    def params(self) -> str:
        """The prelude text, e.g. the media condition."""
        return tinycss2.serialize(self.prelude).strip()

    @property
    def is_container(self) -> bool:
        return self.children is not None

    @property
    def declarations(self) -> list[Declaration]:
        return _read_declarations(self.content)

    def serialize(self) -> str:
        head = "@" + serialize_identifier(self.at_keyword) + tinycss2.serialize(self.prelude)
        if self.children is not None:
            return head + "{" + self.serialize_children() + "}"
        if self.content is None:
            return head + ";"
        return head + "{" + tinycss2.serialize(self.content) + "}"


@dataclass(eq=False)
class Stylesheet(Container):
    """Root of a stylesheet tree."""

    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._adopt_children()

    @property
    def rules(self) -> list[Node]:
        """Top-level rules and at-rules, without whitespace or comments."""
        return [child for child in self.children if not isinstance(child, Raw)]

    def serialize(self) -> str:
        return self.serialize_children()
