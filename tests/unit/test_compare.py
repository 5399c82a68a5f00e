"""Unit tests for the comparison orchestrator."""

import logging
import sys

import pytest

from recdiff.compare import (
    MultisetDiffReport,
    PositionalDiffReport,
    UnifiedDiffReport,
    compare_files,
    compare_positional,
    compare_texts,
    looks_like_xml,
    read_text,
)
from recdiff.exceptions import FileError, FileNotFoundError
from recdiff.options import CanonicalizationOptions, CompareOptions, XmlRecordOptions

MULTISET = CompareOptions(ignore_order=True)


@pytest.mark.unit
class TestLooksLikeXml:
    """Tests for the XML-likeness heuristic."""

    @pytest.mark.parametrize("text", ["<a/>", "  <a>x</a>\n", "\ufeff<a/>", "<?xml version='1.0'?><a/>"])
    def test_xml_like(self, text):
        """Test inputs treated as XML."""
        assert looks_like_xml(text)

    @pytest.mark.parametrize("text", ["", "a", "<a> trailing", "leading <a>", "   "])
    def test_not_xml_like(self, text):
        """Test inputs treated as plain text."""
        assert not looks_like_xml(text)


@pytest.mark.unit
class TestOrderSensitive:
    """Tests for the order-sensitive mode."""

    def test_identical_texts(self):
        """Test the identity short-circuit."""
        report = compare_texts("a\nb", "a\nb")
        assert isinstance(report, UnifiedDiffReport)
        assert report.identical
        assert report.diff_text == ""

    def test_newline_styles_are_equivalent(self):
        """Test that CRLF and LF inputs compare equal."""
        assert compare_texts("a\r\nb\r\n", "a\nb\n").identical

    def test_terminal_newline_is_ignored(self):
        """Test that a missing final newline is not a difference."""
        report = compare_texts("a\nb\n", "a\nb")
        assert report.identical
        assert report.diff.hunks == []

    def test_canonicalization_options_do_not_apply(self):
        """Test that trailing whitespace matters in sequence mode."""
        report = compare_texts("a ", "a", CompareOptions(line=CanonicalizationOptions(trim=True)))
        assert not report.identical
        assert report.diff_text.endswith("+a\n-a ")

    def test_labels_in_header(self):
        """Test that the labels name the header lines."""
        report = compare_texts("a", "b", CompareOptions(label_a="left", label_b="right"))
        assert report.diff_text.splitlines()[:2] == ["--- left", "+++ right"]

    def test_xml_is_diffed_as_lines(self):
        """Test that XML is not treated specially without ignore_order."""
        report = compare_texts("<a/>", "<b/>")
        assert isinstance(report, UnifiedDiffReport)
        assert "+<b/>" in report.diff_text

    def test_to_dict(self):
        """Test serialization keys."""
        data = compare_texts("x", "y").to_dict()
        assert set(data) == {"identical", "diffText", "hunks"}
        assert data["hunks"][0]["countA"] == 1


@pytest.mark.unit
class TestOrderInsensitiveLines:
    """Tests for the line multiset mode."""

    def test_permutation_is_identical(self):
        """Test that reordering lines is not a difference."""
        report = compare_texts("a\nb\nc", "c\na\nb", MULTISET)
        assert isinstance(report, MultisetDiffReport)
        assert report.identical
        assert report.source == "lines"

    def test_counts(self):
        """Test totals and unique counts."""
        report = compare_texts("a\na\nb", "a\nc", MULTISET)
        assert (report.total_a, report.unique_a, report.total_b, report.unique_b) == (3, 2, 2, 2)
        assert (report.only_in_a_count, report.only_in_b_count, report.freq_delta_count) == (1, 1, 1)

    def test_canonicalization_options_apply(self):
        """Test that line options drive equality."""
        options = MULTISET.create_updated(line=CanonicalizationOptions(case_sensitive=False, collapse_whitespace=True))
        assert compare_texts("Hello   World", "hello world", options).identical

    def test_empty_inputs(self):
        """Test that two empty texts are identical multisets."""
        report = compare_texts("", "", MULTISET)
        assert report.identical
        assert report.total_a == report.total_b == 0

    def test_to_dict_keys(self):
        """Test the camelCase serialization."""
        data = compare_texts("a", "b", MULTISET).to_dict()
        assert list(data)[:11] == [
            "totalA",
            "totalB",
            "uniqueA",
            "uniqueB",
            "onlyInACount",
            "onlyInBCount",
            "freqDeltaCount",
            "identical",
            "onlyInA",
            "onlyInB",
            "freqDelta",
        ]


@pytest.mark.unit
class TestOrderInsensitiveXml:
    """Tests for the XML record multiset mode."""

    @pytest.fixture(autouse=True)
    def _require_defusedxml(self):
        pytest.importorskip("defusedxml")

    def test_reordered_records_are_identical(self, incident_xml_a, incident_xml_b):
        """Test that records compare independently of order and formatting."""
        report = compare_texts(incident_xml_a, incident_xml_b, MULTISET)
        assert report.source == "xml"
        assert report.identical
        assert report.total_a == report.total_b == 2
        assert report.fallback_reason is None

    def test_changed_record(self):
        """Test that a changed record appears on both sides."""
        a = '<r><Incident id="1"><Unit>E1</Unit></Incident><Incident id="2"/></r>'
        b = '<r><Incident id="2"/><Incident id="1"><Unit>E2</Unit></Incident></r>'
        report = compare_texts(a, b, MULTISET)

        assert report.source == "xml"
        record = '<Incident id="1">|/Incident/@id="1"|/Incident/Unit/#text="{}"'
        assert [entry.value for entry in report.only_in_a] == [record.format("E1")]
        assert [entry.value for entry in report.only_in_b] == [record.format("E2")]

    def test_duplicate_records_are_counted(self):
        """Test that duplicate records produce a count mismatch."""
        report = compare_texts("<r><Incident/><Incident/></r>", "<r><Incident/></r>", MULTISET)
        assert [(d.value, d.a, d.b) for d in report.freq_delta] == [("<Incident>|", 2, 1)]

    def test_record_selector_option(self):
        """Test that the selector picks the compared elements."""
        options = MULTISET.create_updated(xml=XmlRecordOptions(record_selector="Event"))
        report = compare_texts("<r><Event a='1'/><Incident/></r>", "<r><Event a='1'/></r>", options)
        assert report.identical
        assert report.total_a == 1

    def test_fallback_on_malformed_side_b(self, caplog):
        """Test fallback when only the second document is malformed."""
        with caplog.at_level(logging.WARNING, logger="recdiff"):
            report = compare_texts("<r/>", "<r>", MULTISET.create_updated(label_b="new.xml"))

        assert report.source == "lines"
        assert report.fallback_reason.startswith("XML record extraction failed for new.xml")
        assert "falling back to line comparison" in caplog.text

    def test_fallback_on_unencodable_text(self):
        """Test fallback when a document holds a lone surrogate."""
        report = compare_texts("<r><Incident>\ud800</Incident></r>", "<r/>", CompareOptions(ignore_order=True))

        assert report.source == "lines"
        assert report.fallback_reason is not None
        assert report.fallback_reason.startswith("XML record extraction failed")

    def test_fallback_on_missing_dependency(self, monkeypatch, incident_xml_a):
        """Test fallback when defusedxml cannot be imported."""
        monkeypatch.setitem(sys.modules, "defusedxml.ElementTree", None)
        report = compare_texts(incident_xml_a, incident_xml_a, MULTISET)
        assert report.source == "lines"
        assert "defusedxml" in report.fallback_reason
        assert report.identical

    def test_plain_text_side_uses_lines(self):
        """Test that XML is only attempted when both sides look like XML."""
        report = compare_texts("<r/>", "r", MULTISET)
        assert report.source == "lines"
        assert report.fallback_reason is None


@pytest.mark.unit
class TestComparePositional:
    """Tests for compare_positional."""

    def test_report(self):
        """Test the positional report."""
        report = compare_positional("a\nb\n", "a\nc")
        assert isinstance(report, PositionalDiffReport)
        assert not report.identical
        assert report.diff_text == "  a\n- b\n+ c"

    def test_identical(self):
        """Test identical inputs."""
        assert compare_positional("a\r\nb", "a\nb").identical


@pytest.mark.unit
class TestFiles:
    """Tests for read_text and compare_files."""

    def test_compare_files_labels_with_paths(self, temp_dir):
        """Test that file paths become the diff labels."""
        a = temp_dir / "a.txt"
        b = temp_dir / "b.txt"
        a.write_text("x\ny\n", encoding="utf-8")
        b.write_text("x\nz\n", encoding="utf-8")

        report = compare_files(a, b)

        assert report.diff_text.splitlines()[:2] == [f"--- {a}", f"+++ {b}"]

    def test_explicit_labels_win(self, temp_dir):
        """Test that configured labels are kept."""
        a = temp_dir / "a.txt"
        a.write_text("x", encoding="utf-8")
        report = compare_files(a, a, CompareOptions(label_a="old"))
        assert report.identical
        assert (report.diff.label_a, report.diff.label_b) == ("old", str(a))

    def test_bom_is_stripped(self, temp_dir):
        """Test that a UTF-8 BOM does not count as content."""
        a = temp_dir / "a.txt"
        b = temp_dir / "b.txt"
        a.write_bytes(b"\xef\xbb\xbfline\n")
        b.write_bytes(b"line\n")
        assert compare_files(a, b).identical

    def test_missing_file(self, temp_dir):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError) as exc_info:
            read_text(temp_dir / "missing.txt")
        assert isinstance(exc_info.value, FileError)

    def test_invalid_utf8(self, temp_dir):
        """Test that undecodable bytes raise FileError."""
        path = temp_dir / "bad.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(FileError, match="not valid UTF-8"):
            read_text(path)

    def test_directory_is_not_readable(self, temp_dir):
        """Test that a directory raises FileError."""
        with pytest.raises(FileError):
            read_text(temp_dir)
