"""Searchable option documentation for NixOS, nix-darwin and Home Manager."""

from nixdocs.database import OptionsDatabase
from nixdocs.errors import BuildFailedError, CacheError, FetchError, MissingEnvironmentError, NixDocsError, ParseError
from nixdocs.matching import Lowercase, contains_insensitive, starts_with_insensitive
from nixdocs.models import BackendVariant, DocEntry, OptionRecord
from nixdocs.source import DocSource, search_sources

__all__ = [
    "BackendVariant",
    "BuildFailedError",
    "CacheError",
    "DocEntry",
    "DocSource",
    "FetchError",
    "Lowercase",
    "MissingEnvironmentError",
    "NixDocsError",
    "OptionRecord",
    "OptionsDatabase",
    "ParseError",
    "contains_insensitive",
    "search_sources",
    "starts_with_insensitive",
]
