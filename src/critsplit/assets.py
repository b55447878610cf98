"""Build assets: the asset protocol, the build-wide asset map, and the writer
that publishes a split stylesheet as two assets.
"""

from __future__ import annotations

import threading
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Iterator, Protocol

from critsplit.stylesheet.model import Stylesheet

CRITICAL_SUFFIX = ".critical"


class Asset(Protocol):
    """Anything a build can publish: raw bytes plus their length."""

    def source(self) -> bytes: ...

    def size(self) -> int: ...


@dataclass(frozen=True)
class TextAsset:
    """A UTF-8 encoded text asset."""

    text: str

    def source(self) -> bytes:
        return self.text.encode("utf-8")

    def size(self) -> int:
        return len(self.source())


@dataclass(frozen=True)
class BytesAsset:
    """An asset read from disk, kept as bytes until a worker decodes it."""

    data: bytes

    def source(self) -> bytes:
        return self.data

    def size(self) -> int:
        return len(self.data)


def asset_text(asset: Asset) -> str:
    """Decode an asset's content as UTF-8 text, dropping a byte-order mark."""
    if isinstance(asset, TextAsset):
        return asset.text
    data = asset.source()
    if isinstance(data, str):
        return data
    return bytes(data).decode("utf-8-sig")


def critical_name(name: str) -> str:
    """The identifier of the critical asset derived from *name*."""
    return name + CRITICAL_SUFFIX


@dataclass
class AssetMap(MutableMapping):
    """Build-wide map of asset name to asset.

    Every read and write takes a lock, so concurrent workers writing
    different names never see a half-updated map.
    """

    _assets: dict[str, Asset] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __getitem__(self, name: str) -> Asset:
        with self._lock:
            return self._assets[name]

    def __setitem__(self, name: str, asset: Asset) -> None:
        with self._lock:
            self._assets[name] = asset

    def __delitem__(self, name: str) -> None:
        with self._lock:
            del self._assets[name]

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._assets))

    def __len__(self) -> int:
        with self._lock:
            return len(self._assets)

    def names(self, suffix: str = "") -> list[str]:
        """Snapshot of asset names, optionally only those ending in *suffix*."""
        return [name for name in self if name.endswith(suffix)]


def write_assets(
    assets: MutableMapping[str, Asset],
    name: str,
    source: Stylesheet,
    critical_text: str,
) -> list[str]:
    """Publish a split stylesheet.

    The remaining (non-critical) stylesheet replaces the asset under *name*;
    *critical_text* is published under ``name + ".critical"`` only when it is
    non-empty.  Returns the names written.
    """
    assets[name] = TextAsset(source.serialize())
    written = [name]
    if critical_text:
        assets[critical_name(name)] = TextAsset(critical_text)
        written.append(critical_name(name))
    return written
