"""Minification pass: best-effort minification of every critical asset."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

import csscompressor

from critsplit.assets import CRITICAL_SUFFIX, Asset, TextAsset, asset_text
from critsplit.model.outcome import Outcome, Status

Minifier = Callable[[str], str]


def default_minifier(css: str) -> str:
    return csscompressor.compress(css)


def _minify_one(assets: MutableMapping[str, Asset], name: str, minifier: Minifier) -> Outcome:
    before = assets[name]
    minified = minifier(asset_text(before))
    if not isinstance(minified, str):
        raise TypeError(f"minifier returned {type(minified).__name__}, expected str")
    after = TextAsset(minified)
    assets[name] = after
    return Outcome(
        name=name,
        status=Status.SUCCESS,
        size_before=before.size(),
        size_after=after.size(),
    )


def minify_critical(
    assets: MutableMapping[str, Asset],
    minifier: Minifier | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    max_workers: int | None = None,
) -> list[Outcome]:
    """Minify every ``*.critical`` asset in place.

    Assets are minified concurrently and the call returns once all of them
    have been attempted.  A failing minification leaves that asset's content
    untouched and is reported as a FAIL outcome; it never raises and never
    stops the other assets.
    """
    log = logger or logging.getLogger("critsplit")
    minify = minifier or default_minifier
    names = [name for name in list(assets) if name.endswith(CRITICAL_SUFFIX)]
    if not names:
        log.debug("No critical assets to minify")
        return []

    outcomes: list[Outcome] = []
    with ThreadPoolExecutor(max_workers=max_workers or min(len(names), 8)) as pool:
        futures = {pool.submit(_minify_one, assets, name, minify): name for name in names}
        for future in as_completed(futures):
            name = futures[future]
            try:
                outcome = future.result()
            except Exception as exc:
                log.warning("Could not minify %s, keeping it unminified: %s", name, exc)
                outcome = Outcome(name=name, status=Status.FAIL, failure_reason=str(exc))
            else:
                log.debug(
                    "Minified %s: %d -> %d bytes", name, outcome.size_before, outcome.size_after
                )
            outcomes.append(outcome)
    return outcomes
