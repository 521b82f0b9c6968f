"""Parser for option documentation JSON exported by the nix module system."""

import json
import logging
from pathlib import Path
from typing import Any

from nixdocs.errors import ParseError
from nixdocs.models import OptionRecord

logger = logging.getLogger(__name__)


class OptionsParser:
    """Parses ``options.json`` documents into option records.

    Parsing is all-or-nothing: a single malformed record rejects the whole
    document.
    """

    def parse_file(self, file_path: Path) -> dict[str, OptionRecord]:
        """Read and parse an options document.

        Args:
            file_path: Path to the JSON file.

        Returns:
            Mapping of dotted option names to records.

        Raises:
            ParseError: If the file cannot be read or is malformed.
        """
        try:
            data = Path(file_path).read_bytes()
        except OSError as exc:
            msg = f"Cannot read options document {file_path}: {exc}"
            raise ParseError(msg) from exc

        options = self.parse_bytes(data)
        logger.debug("Parsed %d options from %s", len(options), file_path)
        return options

    def parse_bytes(self, data: bytes) -> dict[str, OptionRecord]:
        """Parse an options document held in memory.

        Args:
            data: Raw JSON bytes.

        Returns:
            Mapping of dotted option names to records.

        Raises:
            ParseError: If the data is not valid JSON or violates the schema.
        """
        try:
            document = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Invalid options JSON: {exc}"
            raise ParseError(msg) from exc

        if not isinstance(document, dict):
            msg = f"Expected a JSON object of options, got {type(document).__name__}"
            raise ParseError(msg)

        return {key: self._parse_record(key, value) for key, value in document.items()}

    def _parse_record(self, key: str, value: Any) -> OptionRecord:
        """Build a record from one JSON value.

        Args:
            key: Option name the value is stored under (for error messages).
            value: Decoded JSON value.

        Returns:
            OptionRecord instance.
        """
        if not isinstance(value, dict):
            raise ParseError(f"Option {key!r}: expected an object")

        location = value.get("loc")
        if not isinstance(location, list) or not location or not all(isinstance(part, str) for part in location):
            raise ParseError(f"Option {key!r}: 'loc' must be a non-empty list of strings")

        option_type = value.get("type")
        if not isinstance(option_type, str):
            raise ParseError(f"Option {key!r}: 'type' must be a string")

        read_only = value.get("readOnly", False)
        if not isinstance(read_only, bool):
            raise ParseError(f"Option {key!r}: 'readOnly' must be a boolean")

        return OptionRecord(
            location=tuple(location),
            option_type=option_type,
            description=self._extract_description(key, value.get("description")),
            read_only=read_only,
        )

    def _extract_description(self, key: str, description: Any) -> str:
        """Normalise the description field.

        Newer nixpkgs revisions wrap markdown descriptions as
        ``{"_type": "mdDoc", "text": ...}``.

        Args:
            key: Option name (for error messages).
            description: Raw description value.

        Returns:
            Description text, empty when absent.
        """
        if description is None:
            return ""
        if isinstance(description, str):
            return description
        if isinstance(description, dict) and isinstance(description.get("text"), str):
            return description["text"]
        raise ParseError(f"Option {key!r}: 'description' must be a string")
