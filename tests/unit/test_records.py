"""Unit tests for XML record flattening."""

import sys

import pytest

from recdiff.exceptions import DependencyError, ParsingError, XmlParseError
from recdiff.options import XmlRecordOptions
from recdiff.records import extract_records, flatten_record, parse_xml, records_to_canonical_strings

pytest.importorskip("defusedxml", reason="defusedxml not installed, skipping XML record tests")


@pytest.mark.unit
class TestParseXml:
    """Tests for parse_xml."""

    def test_parses_document(self):
        """Test that a well-formed document returns its root."""
        assert parse_xml("<root><a/></root>").tag == "root"

    def test_byte_order_mark_is_ignored(self):
        """Test that a leading BOM does not break parsing."""
        assert parse_xml("\ufeff<root/>").tag == "root"

    def test_malformed_document(self):
        """Test that malformed XML raises XmlParseError."""
        with pytest.raises(XmlParseError) as exc_info:
            parse_xml("<a><b></a>")

        error = exc_info.value
        assert isinstance(error, ParsingError)
        assert error.parsing_stage == "xml_parsing"
        assert "mismatched tag" in str(error)
        assert error.original_error is not None

    def test_message_whitespace_is_collapsed(self):
        """Test that the diagnostic is a single line."""
        with pytest.raises(XmlParseError) as exc_info:
            parse_xml("<a>\n\n<b>")
        assert "\n" not in str(exc_info.value)

    def test_entity_declarations_are_rejected(self):
        """Test that defusedxml's protections surface as XmlParseError."""
        with pytest.raises(XmlParseError):
            parse_xml('<!DOCTYPE r [<!ENTITY e "boom">]><r>&e;</r>')

    def test_lone_surrogate_is_a_parse_error(self):
        """Test that text expat cannot encode raises XmlParseError."""
        with pytest.raises(XmlParseError) as exc_info:
            parse_xml("<r><Incident>\ud800</Incident></r>")
        assert isinstance(exc_info.value.original_error, UnicodeEncodeError)

    def test_missing_dependency(self, monkeypatch):
        """Test that a missing defusedxml raises DependencyError."""
        monkeypatch.setitem(sys.modules, "defusedxml.ElementTree", None)
        with pytest.raises(DependencyError) as exc_info:
            parse_xml("<root/>")
        assert "defusedxml" in str(exc_info.value)


@pytest.mark.unit
class TestFlattenRecord:
    """Tests for flatten_record and records_to_canonical_strings."""

    def test_canonical_string_format(self):
        """Test the header and sorted entries."""
        root = parse_xml('<Incident kind="fire" id="7"><Unit>E12</Unit></Incident>')
        assert flatten_record(root) == (
            '<Incident id="7" kind="fire">|/Incident/@id="7"|/Incident/@kind="fire"|/Incident/Unit/#text="E12"'
        )

    def test_empty_record(self):
        """Test a record with no attributes or content."""
        assert flatten_record(parse_xml("<Incident/>")) == "<Incident>|"

    def test_whitespace_text_is_skipped_and_collapsed(self):
        """Test text handling with the default options."""
        root = parse_xml("<Incident>\n  <A>  hello \n  world </A>\n</Incident>")
        assert flatten_record(root) == '<Incident>|/Incident/A/#text="hello world"'

    def test_tail_text_belongs_to_parent(self):
        """Test mixed content."""
        root = parse_xml("<Incident>before<b>bold</b>after</Incident>")
        assert flatten_record(root) == (
            '<Incident>|/Incident/#text="after"|/Incident/#text="before"|/Incident/b/#text="bold"'
        )

    def test_values_are_json_quoted(self):
        """Test that delimiters and quotes inside values are escaped."""
        root = parse_xml("<Incident note='a|b \"c\"'/>")
        assert flatten_record(root) == r'<Incident note="a|b \"c\"">|/Incident/@note="a|b \"c\""'

    def test_include_text_false(self):
        """Test dropping text entries."""
        options = XmlRecordOptions(include_text=False)
        assert flatten_record(parse_xml("<Incident><A>x</A></Incident>"), options) == "<Incident>|"

    def test_include_attributes_false_keeps_header(self):
        """Test that the header still lists the record's attributes."""
        options = XmlRecordOptions(include_attributes=False)
        result = flatten_record(parse_xml('<Incident id="1"><A k="v">x</A></Incident>'), options)
        assert result == '<Incident id="1">|/Incident/A/#text="x"'

    def test_keep_empty_text(self):
        """Test that whitespace-only text is emitted as empty when not ignored."""
        options = XmlRecordOptions(ignore_empty_text=False)
        result = flatten_record(parse_xml("<Incident><A> </A></Incident>"), options)
        assert result == '<Incident>|/Incident/A/#text=""'

    def test_no_inner_collapse(self):
        """Test that inner whitespace is kept when collapsing is off."""
        options = XmlRecordOptions(collapse_inner_whitespace=False)
        result = flatten_record(parse_xml("<Incident><A> a  b </A></Incident>"), options)
        assert result == '<Incident>|/Incident/A/#text="a  b"'

    def test_namespaces_reduced_to_local_names(self):
        """Test that namespace URIs do not appear in record strings."""
        records = records_to_canonical_strings('<r xmlns="urn:x"><Incident><A>1</A></Incident></r>')
        assert records == ['<Incident>|/Incident/A/#text="1"']

    def test_comments_are_ignored(self):
        """Test that comments do not contribute entries."""
        records = records_to_canonical_strings("<r><Incident><!-- note --><A>1</A></Incident></r>")
        assert records == ['<Incident>|/Incident/A/#text="1"']

    def test_records_in_document_order(self):
        """Test that one string is produced per record, in order."""
        records = records_to_canonical_strings('<r><Incident id="2"/><x><Incident id="1"/></x></r>')
        assert records == ['<Incident id="2">|/Incident/@id="2"', '<Incident id="1">|/Incident/@id="1"']

    def test_nested_records_flatten_into_parent(self):
        """Test the single-level record model."""
        records = records_to_canonical_strings('<r><Incident id="1"><Incident id="2"/></Incident></r>')
        assert records == ['<Incident id="1">|/Incident/@id="1"|/Incident/Incident/@id="2"']

    def test_custom_selector(self):
        """Test selecting other elements."""
        options = XmlRecordOptions(record_selector="row.open")
        records = records_to_canonical_strings('<t><row class="open">1</row><row>2</row></t>', options)
        assert records == ['<row class="open">|/row/#text="1"|/row/@class="open"']

    def test_no_matching_records(self):
        """Test that no matches give an empty list."""
        assert records_to_canonical_strings("<r><Other/></r>") == []


@pytest.mark.unit
class TestExtractRecords:
    """Tests for the fail-soft extract_records."""

    def test_success(self):
        """Test a successful extraction."""
        extraction = extract_records("<r><Incident/></r>")
        assert extraction.ok
        assert extraction.records == ["<Incident>|"]

    def test_parse_failure_is_returned(self):
        """Test that a parse error is captured, not raised."""
        extraction = extract_records("<a><b></a>")
        assert not extraction.ok
        assert isinstance(extraction.error, XmlParseError)
        assert extraction.records is None

    def test_missing_dependency_is_returned(self, monkeypatch):
        """Test that a missing dependency is captured, not raised."""
        monkeypatch.setitem(sys.modules, "defusedxml.ElementTree", None)
        extraction = extract_records("<r/>")
        assert isinstance(extraction.error, DependencyError)
