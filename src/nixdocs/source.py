"""Uniform interface over documentation backends."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from nixdocs.matching import Lowercase
from nixdocs.models import DocEntry


class DocSource(ABC):
    """Abstract base class for searchable documentation backends.

    Read operations work purely on data already held in memory. Only
    ``update`` talks to the outside world.
    """

    @abstractmethod
    def all_keys(self) -> list[str]:
        """Return every currently known dotted name, in no particular order."""

    @abstractmethod
    def search(self, query: Lowercase) -> list[DocEntry]:
        """Return entries whose key starts with ``query``, ignoring ASCII case.

        Args:
            query: Pre-lowercased query.

        Returns:
            Matching entries tagged with this source's backend variant.
        """

    @abstractmethod
    def search_liberal(self, query: Lowercase) -> list[DocEntry]:
        """Return entries whose key contains ``query``, ignoring ASCII case.

        Always a superset of ``search`` for the same query.

        Args:
            query: Pre-lowercased query.

        Returns:
            Matching entries tagged with this source's backend variant.
        """

    @abstractmethod
    def update(self) -> bool:
        """Refresh the source from its backing data.

        Returns:
            True if the set of keys is unchanged, False otherwise.

        Raises:
            NixDocsError: If fetching or parsing fails. State is left untouched.
        """


def search_sources(sources: Iterable[DocSource], query: str) -> list[DocEntry]:
    """Search several sources, falling back to substring search on no hits.

    Args:
        sources: Documentation sources to query.
        query: Raw query text; folded once here.

    Returns:
        Prefix matches from every source, or substring matches when no
        source had a prefix match. Sorted by entry name.
    """
    sources = list(sources)
    lowered = Lowercase.of(query)

    results = [entry for source in sources for entry in source.search(lowered)]
    if not results:
        results = [entry for source in sources for entry in source.search_liberal(lowered)]

    return sorted(results, key=lambda entry: (entry.name, entry.variant.value))
