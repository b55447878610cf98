"""Selector classifier: element-type heuristic and additional matchers.

Classification is purely lexical.  A selector list qualifies as soon as any
one of its comma-separated components qualifies; rules are never split into
critical and non-critical halves.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Union

import tinycss2

from critsplit.errors import ConfigError
from critsplit.stylesheet.model import split_on_commas

SelectorInput = Union[str, Iterable[str]]


def split_selectors(selector: str) -> list[str]:
    """Split a selector list on top-level commas, trimming each component."""
    tokens = tinycss2.parse_component_value_list(selector, skip_comments=True)
    return split_on_commas(tokens)


def _components(selector: SelectorInput) -> list[str]:
    if isinstance(selector, str):
        return split_selectors(selector)
    return [part.strip() for part in selector if part.strip()]


def _is_element_component(component: str) -> bool:
    first = component[0]
    return first == "*" or (first.isascii() and first.isalnum())


def is_element_selector(selector: SelectorInput) -> bool:
    """True if any component starts with an ASCII letter, a digit, or ``*``.

    ``p``, ``div.note``, ``*``, ``a:hover`` and keyframe selectors such as
    ``from`` or ``50%`` qualify; ``.foo``, ``#bar``, ``[x]`` and ``:root`` do
    not.
    """
    return any(_is_element_component(c) for c in _components(selector))


def _never(selector: str) -> bool:
    return False


@dataclass(frozen=True)
class Matcher:
    """An additional selector pattern."""

    label: str
    test: Callable[[str], object]

    def matches(self, selector: str, logger: logging.Logger | logging.LoggerAdapter | None = None) -> bool:
        """Test one selector component; a failing test counts as no match."""
        try:
            return bool(self.test(selector))
        except Exception as exc:
            (logger or logging.getLogger("critsplit")).warning(
                "Matcher %s failed on selector %r, treating as non-matching: %s",
                self.label,
                selector,
                exc,
            )
            return False


def compile_matchers(
    raw: Iterable[object],
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[Matcher]:
    """Turn configured patterns into :class:`Matcher` objects.

    Accepts regular expression strings, compiled patterns (tested with
    ``search``), callables and ready-made matchers.  A string that is not a
    valid regular expression is logged and never matches.
    """
    log = logger or logging.getLogger("critsplit")
    matchers: list[Matcher] = []
    for item in raw:
        if isinstance(item, Matcher):
            matchers.append(item)
        elif isinstance(item, re.Pattern):
            matchers.append(Matcher(label=f"/{item.pattern}/", test=item.search))
        elif isinstance(item, str):
            try:
                pattern = re.compile(item)
            except re.error as exc:
                log.warning("Ignoring invalid matcher pattern %r: %s", item, exc)
                matchers.append(Matcher(label=item, test=_never))
            else:
                matchers.append(Matcher(label=f"/{item}/", test=pattern.search))
        elif callable(item):
            matchers.append(Matcher(label=getattr(item, "__name__", repr(item)), test=item))
        else:
            raise ConfigError(f"Unsupported matcher {item!r}")
    return matchers


def matches_any(
    selector: SelectorInput,
    patterns: Iterable[object],
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> bool:
    """True if any selector component satisfies at least one pattern."""
    matchers = [p if isinstance(p, Matcher) else compile_matchers([p], logger)[0] for p in patterns]
    components = _components(selector)
    return any(m.matches(c, logger) for m in matchers for c in components)
