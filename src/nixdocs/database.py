"""Option documentation backend for NixOS, nix-darwin and Home Manager."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from nixdocs.cache import Cache
from nixdocs.fetcher import NixBuildFetcher
from nixdocs.matching import Lowercase, contains_insensitive, starts_with_insensitive
from nixdocs.models import BackendVariant, DocEntry, OptionRecord
from nixdocs.parser import OptionsParser
from nixdocs.source import DocSource

logger = logging.getLogger(__name__)

Resolver = Callable[[BackendVariant], Path]


class OptionsDatabase(DocSource, Cache):
    """In-memory index of the options of one backend variant.

    The mapping starts empty and is only ever replaced as a whole by
    ``update``; a failed update leaves it untouched.
    """

    def __init__(
        self,
        variant: BackendVariant,
        resolver: Resolver | None = None,
        parser: OptionsParser | None = None,
    ) -> None:
        """Initialise an empty database.

        Args:
            variant: Backend whose options this database holds.
            resolver: Callable returning the options JSON path for a variant.
                Defaults to building it with nix-build.
            parser: Options document parser.
        """
        self._variant = variant
        self.resolver = resolver or NixBuildFetcher()
        self.parser = parser or OptionsParser()
        self.options: dict[str, OptionRecord] = {}

    @property
    def variant(self) -> BackendVariant:
        return self._variant

    def __getstate__(self) -> dict[str, Any]:
        # resolvers may be closures; only the data is persisted
        return {"variant": self._variant, "options": self.options}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._variant = state["variant"]
        self.options = state["options"]
        self.resolver = NixBuildFetcher()
        self.parser = OptionsParser()

    def all_keys(self) -> list[str]:
        return list(self.options)

    def search(self, query: Lowercase) -> list[DocEntry]:
        return [
            DocEntry(self._variant, record)
            for key, record in self.options.items()
            if starts_with_insensitive(key, query)
        ]

    def search_liberal(self, query: Lowercase) -> list[DocEntry]:
        return [
            DocEntry(self._variant, record)
            for key, record in self.options.items()
            if contains_insensitive(key, query)
        ]

    def update(self) -> bool:
        """Re-fetch and re-parse the options document.

        Returns:
            True if the refreshed key set equals the previous one.

        Raises:
            FetchError: If the options document could not be built.
            ParseError: If the document is unreadable or malformed.
            MissingEnvironmentError: If a fallback needs an unset variable.
        """
        path = self.resolver(self._variant)
        options = self.parser.parse_file(path)

        old, self.options = self.options, options
        unchanged = old.keys() == options.keys()

        logger.debug(
            "Updated %s options from %s: %d keys (%s)",
            self._variant.value,
            path,
            len(options),
            "unchanged" if unchanged else "changed",
        )
        return unchanged
