from critsplit.stylesheet.model import (
    AtRule,
    Declaration,
    Node,
    Raw,
    Rule,
    Stylesheet,
    split_on_commas,
)
from critsplit.stylesheet.parser import parse_stylesheet

__all__ = [
    "parse_stylesheet",
    "Stylesheet",
    "Rule",
    "AtRule",
    "Raw",
    "Node",
    "Declaration",
    "split_on_commas",
]
