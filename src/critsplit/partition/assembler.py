"""Critical assembler: builds the critical stylesheet from walker buckets."""

from __future__ import annotations

from critsplit.partition.walker import Partition
from critsplit.stylesheet.model import Stylesheet


def build_critical_sheet(partition: Partition) -> Stylesheet:
    """Append the buckets to a fresh stylesheet.

    Order is by category (font faces, element rules, matcher rules), not by
    original document position.
    """
    critical = Stylesheet()
    for node in partition.nodes():
        critical.append(node)
    return critical


def assemble_critical(partition: Partition, additional_css: str = "") -> str:
    """Serialize the critical stylesheet and append *additional_css* verbatim.

    Returns ``""`` when there is nothing critical, including when the result
    would only be whitespace.
    """
    text = build_critical_sheet(partition).serialize() + (additional_css or "")
    if not text.strip():
        return ""
    return text
