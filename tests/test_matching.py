"""Tests for case-insensitive ASCII matching."""

import pytest

from nixdocs.matching import Lowercase, ascii_lower, contains_insensitive, starts_with_insensitive


def test_ascii_lower_only_folds_ascii_letters() -> None:
    """Test that only A-Z are folded."""
    assert ascii_lower(b"Services.NGINX-1") == b"services.nginx-1"
    assert ascii_lower("ÄBC".encode()) == "Äbc".encode()


def test_lowercase_constructor_folds() -> None:
    """Test that building a Lowercase directly folds ASCII letters."""
    assert Lowercase("Foo") == "foo"
    assert Lowercase("SERVICES.Foo") == "services.foo"
    assert starts_with_insensitive("services", Lowercase("SERV"))
    assert contains_insensitive("Services.Foo", Lowercase("FOO"))


def test_lowercase_of_folds_once() -> None:
    """Test building a pre-lowercased query."""
    query = Lowercase.of("Services.Foo")
    assert query == "services.foo"
    assert Lowercase.of(query) is query


@pytest.mark.parametrize(
    ("haystack", "needle"),
    [
        ("services.foo.enable", "services"),
        ("Services.Foo.Enable", "services.foo"),
        ("services.foo.enable", "SERVICES.FOO"),
        ("services.foo.enable", "services.foo.enable"),
    ],
)
def test_starts_with_insensitive_matches(haystack: str, needle: str) -> None:
    """Test prefix matching ignores ASCII case on both sides."""
    assert starts_with_insensitive(haystack, needle)


def test_starts_with_insensitive_rejects_non_prefix() -> None:
    """Test that a substring which is not a prefix does not match."""
    assert not starts_with_insensitive("services.foo.enable", "foo")
    assert not starts_with_insensitive("foo", "foobar")


def test_empty_needle_matches_everything() -> None:
    """Test that the empty query matches any key."""
    assert starts_with_insensitive("anything", "")
    assert contains_insensitive("anything", "")
    assert starts_with_insensitive("", Lowercase.of(""))


def test_contains_insensitive() -> None:
    """Test substring matching."""
    assert contains_insensitive("services.foo.enable", "foo.en")
    assert contains_insensitive("services.FOO.enable", Lowercase.of("Foo.EN"))
    assert not contains_insensitive("services.foo.enable", "bar")


def test_prefix_implies_substring() -> None:
    """Test that every prefix match is also a substring match."""
    keys = ["programs.git.enable", "Programs.Zsh.enable", "boot.loader.grub"]
    for needle in ["", "pro", "PROGRAMS.g", "boot", "x"]:
        for key in keys:
            if starts_with_insensitive(key, needle):
                assert contains_insensitive(key, needle)


def test_accepts_bytes() -> None:
    """Test that raw byte sequences are accepted."""
    assert starts_with_insensitive(b"Networking.HostName", b"networking.h")
    assert contains_insensitive(b"Networking.HostName", b"HOSTNAME")


def test_non_ascii_is_compared_verbatim() -> None:
    """Test that non-ASCII letters are not case folded."""
    assert not contains_insensitive("straße.ÄRGER", "ärger")
    assert contains_insensitive("straße.ÄRGER", "ÄRGER")
