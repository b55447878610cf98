"""Tests for byte-size statistics."""

import pytest

from critsplit.report import format_bytes, percent, split_summary


class TestFormatBytes:
    @pytest.mark.parametrize(
        "size, text",
        [
            (0, "0 B"),
            (999, "999 B"),
            (1000, "1 kB"),
            (1536, "1.54 kB"),
            (999_999, "1 MB"),
            (2_340_000, "2.34 MB"),
        ],
    )
    def test_format(self, size, text):
        assert format_bytes(size) == text


class TestSummary:
    def test_percent_of_empty(self):
        assert percent(5, 0) == 0

    def test_summary_line(self):
        line = split_summary("main.css", 2000, 500, 1500)
        assert line == (
            "Inlined 500 B (25% of original 2 kB) of main.css, "
            "reducing non-inlined size 75% to 1.5 kB."
        )
