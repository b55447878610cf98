"""Tests for assets, the asset map and the dual-asset writer."""

import threading

from critsplit.assets import (
    CRITICAL_SUFFIX,
    AssetMap,
    BytesAsset,
    TextAsset,
    asset_text,
    critical_name,
    write_assets,
)
from critsplit.stylesheet import parse_stylesheet


class TestTextAsset:
    def test_source_is_utf8_bytes(self):
        asset = TextAsset("p{content:'é'}")
        assert asset.source() == "p{content:'é'}".encode("utf-8")

    def test_size_is_byte_length(self):
        assert TextAsset("é").size() == 2
        assert TextAsset("").size() == 0

    def test_asset_text_from_foreign_asset(self):
        class RawAsset:
            def source(self):
                return b"p {}"

            def size(self):
                return 4

        assert asset_text(RawAsset()) == "p {}"


class TestBytesAsset:
    def test_source_and_size(self):
        asset = BytesAsset(b"p {}")
        assert asset.source() == b"p {}"
        assert asset.size() == 4

    def test_asset_text_drops_byte_order_mark(self):
        assert asset_text(BytesAsset(b"\xef\xbb\xbfp {}")) == "p {}"


class TestAssetMap:
    def test_mapping_behaviour(self):
        assets = AssetMap()
        assets["a.css"] = TextAsset("a")
        assets["b.js"] = TextAsset("b")
        assert len(assets) == 2
        assert "a.css" in assets
        del assets["b.js"]
        assert list(assets) == ["a.css"]

    def test_names_by_suffix(self):
        assets = AssetMap()
        for name in ("a.css", "a.css.critical", "b.css"):
            assets[name] = TextAsset("")
        assert assets.names(CRITICAL_SUFFIX) == ["a.css.critical"]
        assert assets.names() == ["a.css", "a.css.critical", "b.css"]

    def test_concurrent_writes(self):
        assets = AssetMap()

        def write(i):
            assets[f"{i}.css"] = TextAsset(str(i))

        threads = [threading.Thread(target=write, args=(i,)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(assets) == 50


class TestWriteAssets:
    def test_writes_both_assets(self):
        sheet = parse_stylesheet(".foo {} ")
        assets = {}
        written = write_assets(assets, "foo", sheet, "p {}")
        assert written == ["foo", "foo.critical"]
        assert assets["foo"].source() == b".foo {} "
        assert assets["foo.critical"].source() == b"p {}"
        assert assets["foo.critical"].size() == 4

    def test_empty_critical_not_published(self):
        sheet = parse_stylesheet(".foo {}")
        assets = {}
        assert write_assets(assets, "foo", sheet, "") == ["foo"]
        assert critical_name("foo") not in assets

    def test_replaces_original(self):
        assets = {"main.css": TextAsset(".a {} p {}")}
        write_assets(assets, "main.css", parse_stylesheet(".a {} "), "p {}")
        assert asset_text(assets["main.css"]) == ".a {} "
        assert asset_text(assets["main.css.critical"]) == "p {}"
