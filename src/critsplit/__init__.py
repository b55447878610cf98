"""critsplit: split a stylesheet into critical (inlined) and deferred CSS."""

from critsplit.assets import CRITICAL_SUFFIX, AssetMap, BytesAsset, TextAsset, write_assets
from critsplit.config import SplitConfig
from critsplit.errors import ConfigError, StylesheetError
from critsplit.minify import minify_critical
from critsplit.model.outcome import Outcome, Status
from critsplit.partition import (
    Partition,
    RuleWalker,
    assemble_critical,
    is_element_selector,
    matches_any,
)
from critsplit.splitter import BuildReport, CriticalSplitter
from critsplit.stylesheet import parse_stylesheet

__version__ = "0.1.0"

__all__ = [
    "CRITICAL_SUFFIX",
    "AssetMap",
    "BuildReport",
    "ConfigError",
    "CriticalSplitter",
    "Outcome",
    "Partition",
    "RuleWalker",
    "SplitConfig",
    "Status",
    "StylesheetError",
    "BytesAsset",
    "TextAsset",
    "assemble_critical",
    "is_element_selector",
    "matches_any",
    "minify_critical",
    "parse_stylesheet",
    "write_assets",
]
