"""Tests for the options document parser."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from nixdocs.errors import ParseError
from nixdocs.models import OptionRecord
from nixdocs.parser import OptionsParser


@pytest.fixture
def parser() -> OptionsParser:
    """Create an OptionsParser instance.

    Returns:
        OptionsParser instance.
    """
    return OptionsParser()


def test_parse_basic_document(parser: OptionsParser) -> None:
    """Test parsing a document with every field present."""
    data = json.dumps(
        {
            "services.foo.enable": {
                "description": "Whether to enable foo.",
                "readOnly": True,
                "loc": ["services", "foo", "enable"],
                "type": "boolean",
                "default": {"_type": "literalExpression", "text": "false"},
            }
        }
    ).encode()

    options = parser.parse_bytes(data)

    assert options == {
        "services.foo.enable": OptionRecord(
            location=("services", "foo", "enable"),
            option_type="boolean",
            description="Whether to enable foo.",
            read_only=True,
        )
    }


def test_optional_fields_default(parser: OptionsParser) -> None:
    """Test that description and readOnly fall back to defaults."""
    options = parser.parse_bytes(b'{"a.b": {"loc": ["a", "b"], "type": "string"}}')

    record = options["a.b"]
    assert record.description == ""
    assert record.read_only is False


def test_markdown_description_wrapper(parser: OptionsParser) -> None:
    """Test that mdDoc-wrapped descriptions are unwrapped."""
    data = {"a": {"loc": ["a"], "type": "string", "description": {"_type": "mdDoc", "text": "Some *markdown*."}}}

    options = parser.parse_bytes(json.dumps(data).encode())

    assert options["a"].description == "Some *markdown*."


def test_empty_document(parser: OptionsParser) -> None:
    """Test that an empty object yields no options."""
    assert parser.parse_bytes(b"{}") == {}


@pytest.mark.parametrize(
    "data",
    [
        b"not json",
        b"[]",
        b'{"a": "string"}',
        b'{"a": {"type": "boolean"}}',
        b'{"a": {"loc": [], "type": "boolean"}}',
        b'{"a": {"loc": ["a", 1], "type": "boolean"}}',
        b'{"a": {"loc": ["a"]}}',
        b'{"a": {"loc": ["a"], "type": "boolean", "readOnly": "yes"}}',
        b'{"a": {"loc": ["a"], "type": "boolean", "description": 5}}',
        b"\xff\xfe",
    ],
)
def test_malformed_documents_raise(parser: OptionsParser, data: bytes) -> None:
    """Test that schema violations reject the document."""
    with pytest.raises(ParseError):
        parser.parse_bytes(data)


def test_one_bad_record_rejects_whole_document(parser: OptionsParser) -> None:
    """Test all-or-nothing parsing."""
    data = {"good": {"loc": ["good"], "type": "string"}, "bad": {"loc": ["bad"]}}

    with pytest.raises(ParseError, match="bad"):
        parser.parse_bytes(json.dumps(data).encode())


def test_parse_file(parser: OptionsParser, write_options: Callable[[dict[str, Any]], Path]) -> None:
    """Test parsing a document from disk."""
    path = write_options({"x.y": {"loc": ["x", "y"], "type": "int"}})

    options = parser.parse_file(path)

    assert list(options) == ["x.y"]


def test_parse_missing_file(parser: OptionsParser, tmp_path: Path) -> None:
    """Test that an unreadable file is a parse error."""
    with pytest.raises(ParseError, match="Cannot read"):
        parser.parse_file(tmp_path / "missing.json")
