"""Case-insensitive ASCII matching primitives used by documentation search."""

_UPPER = bytes(range(ord("A"), ord("Z") + 1))
_LOWER = bytes(range(ord("a"), ord("z") + 1))
_ASCII_FOLD = bytes.maketrans(_UPPER, _LOWER)


class Lowercase(str):
    """A query string folded to ASCII lowercase on construction.

    Build one per query and reuse it across every candidate so the query is
    folded only once.
    """

    __slots__ = ()

    def __new__(cls, text: str = "") -> "Lowercase":
        return super().__new__(cls, ascii_lower(text.encode("utf-8")).decode("utf-8"))

    @classmethod
    def of(cls, text: str) -> "Lowercase":
        """Fold ``text`` to ASCII lowercase, reusing an already folded query.

        Args:
            text: Raw query text.

        Returns:
            Lowercase instance wrapping the folded text.
        """
        if isinstance(text, cls):
            return text
        return cls(text)


def ascii_lower(data: bytes) -> bytes:
    """Lowercase ``A``-``Z`` only; every other byte is returned verbatim."""
    return data.translate(_ASCII_FOLD)


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def _folded_needle(needle: str | bytes) -> bytes:
    if isinstance(needle, Lowercase):
        return needle.encode("utf-8")
    return ascii_lower(_as_bytes(needle))


def starts_with_insensitive(haystack: str | bytes, needle: str | bytes) -> bool:
    """Check whether ``haystack`` begins with ``needle``, ignoring ASCII case.

    Args:
        haystack: Candidate key.
        needle: Query, ideally a ``Lowercase`` instance.

    Returns:
        True if the folded haystack starts with the folded needle.
    """
    return ascii_lower(_as_bytes(haystack)).startswith(_folded_needle(needle))


def contains_insensitive(haystack: str | bytes, needle: str | bytes) -> bool:
    """Check whether ``needle`` occurs anywhere in ``haystack``, ignoring ASCII case.

    Args:
        haystack: Candidate key.
        needle: Query, ideally a ``Lowercase`` instance.

    Returns:
        True if the folded needle is a substring of the folded haystack.
    """
    return _folded_needle(needle) in ascii_lower(_as_bytes(haystack))
