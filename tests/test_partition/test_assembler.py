"""Tests for the critical assembler."""

from critsplit.partition import Partition, RuleWalker, assemble_critical, build_critical_sheet
from critsplit.stylesheet import parse_stylesheet


def _split(source, matchers=()):
    sheet = parse_stylesheet(source)
    return sheet, RuleWalker(matchers).partition(sheet)


class TestAssembleCritical:
    def test_additional_css_appended_verbatim(self):
        _, partition = _split("p {color: blue}")
        assert assemble_critical(partition, ".foo {color: red}") == "p {color: blue}.foo {color: red}"

    def test_category_order_not_document_order(self):
        source = ".btn-a {} p {} @font-face {font-family: x}"
        _, partition = _split(source, [r"\.btn-"])
        assert assemble_critical(partition) == "@font-face {font-family: x}p {}.btn-a {}"

    def test_nothing_critical(self):
        _, partition = _split(".foo {} #bar {}")
        assert assemble_critical(partition) == ""

    def test_whitespace_only_fragment_counts_as_empty(self):
        assert assemble_critical(Partition(), "\n\t ") == ""

    def test_fragment_alone(self):
        assert assemble_critical(Partition(), ".fixed {position: fixed}") == ".fixed {position: fixed}"

    def test_none_fragment(self):
        _, partition = _split("p {}")
        assert assemble_critical(partition, None) == "p {}"


class TestBuildCriticalSheet:
    def test_nodes_reparented(self):
        source, partition = _split("p {} a {}")
        critical = build_critical_sheet(partition)
        assert [n.parent for n in critical.children] == [critical, critical]
        assert source.serialize() == " "
