from critsplit.partition.assembler import assemble_critical, build_critical_sheet
from critsplit.partition.selectors import (
    Matcher,
    compile_matchers,
    is_element_selector,
    matches_any,
    split_selectors,
)
from critsplit.partition.walker import Partition, RuleWalker, describe_node

__all__ = [
    "Matcher",
    "Partition",
    "RuleWalker",
    "assemble_critical",
    "build_critical_sheet",
    "compile_matchers",
    "describe_node",
    "is_element_selector",
    "matches_any",
    "split_selectors",
]
