"""Tests for the document parser."""

import pytest
import json
from json_exploder.parser import DocumentParser


class TestDocumentParser:
    """Tests for DocumentParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = DocumentParser()

    def test_parse_mapping(self):
        """Test parsing a JSON object."""
        data = self.parser.parse('{"a": {"b": 1}, "c": [1, 2]}')

        assert data == {"a": {"b": 1}, "c": [1, 2]}

    def test_parse_preserves_key_order(self):
        """Test that object key order survives parsing."""
        data = self.parser.parse('{"z": 1, "a": 2, "m": 3}')

        assert list(data.keys()) == ["z", "a", "m"]

    def test_parse_scalar_root(self):
        """Test that scalar roots are accepted."""
        assert self.parser.parse("42") == 42
        assert self.parser.parse('"text"') == "text"
        assert self.parser.parse("null") is None

    def test_parse_invalid_json_syntax(self):
        """Test parsing invalid JSON syntax."""
        with pytest.raises(ValueError, match="Invalid JSON input"):
            self.parser.parse('{"users": {"user1": {"name": "Alice"}')

    def test_parse_empty_json(self):
        """Test parsing empty JSON string."""
        with pytest.raises(ValueError, match="Invalid JSON input"):
            self.parser.parse("")

    def test_parse_lines(self):
        """Test parsing JSON Lines into a list of records."""
        records = self.parser.parse_lines('{"id": 1}\n\n{"id": 2}\n[3]\n')

        assert records == [{"id": 1}, {"id": 2}, [3]]

    def test_parse_lines_crlf(self):
        """Test parsing JSON Lines with Windows line endings."""
        records = self.parser.parse_lines('{"id": 1}\r\n{"id": 2}\r\n')

        assert records == [{"id": 1}, {"id": 2}]

    def test_parse_lines_invalid_line(self):
        """Test that an invalid line is reported with its number."""
        with pytest.raises(ValueError, match="line 2, column"):
            self.parser.parse_lines('{"id": 1}\n{"id": \n')

    def test_parse_lines_reports_every_invalid_line(self):
        """Test that all invalid lines are reported through validation."""
        with pytest.raises(ValueError) as exc_info:
            self.parser.parse_lines('{"id": 1}\n{oops\n{"id": 3}\n[1,\n')

        message = str(exc_info.value)
        assert message.startswith("Invalid JSON Lines input")
        assert "line 2" in message
        assert "line 4" in message

    def test_parse_lines_deep_record_warns(self, make_nested, caplog):
        """Test that validation warnings for deep records are logged."""
        text = json.dumps(make_nested(25)) + "\n"

        with caplog.at_level("WARNING"):
            records = self.parser.parse_lines(text)

        assert len(records) == 1
        assert "Deep nesting detected at line 1" in caplog.text

    def test_parse_lines_empty(self):
        """Test parsing empty JSON Lines input."""
        with pytest.raises(ValueError, match="empty"):
            self.parser.parse_lines("  \n")

    def test_parse_file(self, order_file, sample_order):
        """Test reading and parsing a JSON file."""
        assert self.parser.parse_file(order_file) == sample_order

    def test_parse_file_lines(self, records_file, sample_records):
        """Test reading and parsing a JSON Lines file."""
        assert self.parser.parse_file(records_file, lines=True) == sample_records

    def test_parse_missing_file(self, temp_dir):
        """Test that a missing file raises ValueError."""
        with pytest.raises(ValueError, match="Cannot read"):
            self.parser.parse_file(temp_dir / "missing.json")

    def test_parse_file_with_unicode(self, temp_dir):
        """Test reading UTF-8 content."""
        path = temp_dir / "unicode.json"
        path.write_text(json.dumps({"city": "Zürich"}, ensure_ascii=False), encoding="utf-8")

        assert self.parser.parse_file(path) == {"city": "Zürich"}
