"""CriticalSplitter: splits stylesheets in a build into critical and deferred CSS."""

from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from critsplit.assets import CRITICAL_SUFFIX, Asset, write_assets
from critsplit.config import SplitConfig
from critsplit.logs import build_logger
from critsplit.minify import Minifier, minify_critical
from critsplit.model.outcome import Outcome, Status
from critsplit.partition import RuleWalker, assemble_critical
from critsplit.report import split_summary
from critsplit.stylesheet import Stylesheet, parse_stylesheet


@dataclass
class BuildReport:
    """Outcomes of one build: one per stylesheet, one per minified asset."""

    sheets: list[Outcome] = field(default_factory=list)
    minified: list[Outcome] = field(default_factory=list)

    @property
    def failed(self) -> list[Outcome]:
        return [o for o in self.sheets if o.failed]

    @property
    def succeeded(self) -> bool:
        """True when every stylesheet was split (minification never fails a build)."""
        return not self.failed


def _decode(contents: str | bytes) -> str:
    if isinstance(contents, str):
        return contents
    return bytes(contents).decode("utf-8-sig")


class CriticalSplitter:
    """Splits each stylesheet into a critical part and the remainder.

    Usage::

        splitter = CriticalSplitter(SplitConfig(additional_matchers=[r"\\.btn-"]))
        report = splitter.process_assets(assets)

    ``process_assets`` rewrites every ``*.css`` asset with its non-critical
    remainder, adds a ``*.css.critical`` asset next to it when anything was
    critical, then minifies the critical assets.
    """

    def __init__(
        self,
        config: SplitConfig | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        minifier: Minifier | None = None,
    ) -> None:
        self.config = config or SplitConfig()
        self.logger = logger or build_logger(self.config.log_level)
        self.minifier = minifier
        self.walker = RuleWalker(self.config.additional_matchers, self.logger)
        self._include = re.compile(self.config.include)

    # --- single stylesheet ------------------------------------------------------

    def split(self, contents: str | bytes) -> tuple[Stylesheet, str]:
        """Partition CSS text.

        Returns the remaining stylesheet tree and the critical CSS text
        (``""`` when nothing is critical).  Raises ``StylesheetError`` if the
        CSS cannot be parsed.
        """
        source = parse_stylesheet(_decode(contents))
        partition = self.walker.partition(source)
        return source, assemble_critical(partition, self.config.additional_css)

    def process_sheet(
        self, contents: str | bytes, assets: MutableMapping[str, Asset], name: str
    ) -> Outcome:
        """Split one stylesheet and publish both halves into *assets*."""
        text = _decode(contents)
        source, critical = self.split(text)
        write_assets(assets, name, source, critical)

        original = len(text.encode("utf-8"))
        remaining = assets[name].size()
        if not critical:
            self.logger.info("No critical CSS in %s", name)
            return Outcome(
                name=name,
                status=Status.SKIPPED,
                notes="nothing critical",
                size_before=original,
                size_after=0,
            )

        critical_size = len(critical.encode("utf-8"))
        self.logger.info(split_summary(name, original, critical_size, remaining))
        return Outcome(
            name=name,
            status=Status.SUCCESS,
            size_before=original,
            size_after=critical_size,
        )

    def _process_named(self, assets: MutableMapping[str, Asset], name: str) -> Outcome:
        return self.process_sheet(assets[name].source(), assets, name)

    # --- whole build -------------------------------------------------------------

    def is_stylesheet(self, name: str) -> bool:
        return bool(self._include.search(name)) and not name.endswith(CRITICAL_SUFFIX)

    def stylesheet_names(self, assets: MutableMapping[str, Asset]) -> list[str]:
        """Names of the assets treated as stylesheets, in map order."""
        return [name for name in list(assets) if self.is_stylesheet(name)]

    def process_assets(
        self, assets: MutableMapping[str, Asset], max_workers: int | None = None
    ) -> BuildReport:
        """Split every stylesheet in *assets*, then minify the critical assets.

        Stylesheets are processed concurrently.  A stylesheet that fails is
        reported as a FAIL outcome and does not affect the others.
        Minification starts only after every stylesheet is done.
        """
        names = self.stylesheet_names(assets)
        if not names:
            self.logger.warning("No stylesheets found in build")
            return BuildReport()

        self.logger.info("Found %d sheets in build", len(names))
        results: dict[str, Outcome] = {}
        with ThreadPoolExecutor(max_workers=max_workers or min(len(names), 8)) as pool:
            futures = {
                pool.submit(self._process_named, assets, name): name
                for name in names
            }
            for future in as_completed(futures):
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as exc:
                    self.logger.error("Failed to split %s: %s", name, exc)
                    results[name] = Outcome(
                        name=name, status=Status.FAIL, failure_reason=str(exc)
                    )

        report = BuildReport(sheets=[results[name] for name in names])
        if self.config.minify:
            report.minified = self.minify_critical(assets)
        return report

    def minify_critical(self, assets: MutableMapping[str, Asset]) -> list[Outcome]:
        """Run the minification pass over every critical asset in *assets*."""
        return minify_critical(assets, minifier=self.minifier, logger=self.logger)
