"""Data models for option documentation."""

from dataclasses import dataclass
from enum import Enum

from rich.text import Text


class BackendVariant(Enum):
    """Configuration tool whose option documentation a record belongs to."""

    NIXOS = "nixos"
    NIX_DARWIN = "nix-darwin"
    HOME_MANAGER = "home-manager"


@dataclass(frozen=True)
class OptionRecord:
    """Documentation for a single configuration option."""

    location: tuple[str, ...]
    option_type: str
    description: str = ""
    read_only: bool = False

    @property
    def name(self) -> str:
        """Dotted option name, e.g. ``services.nginx.enable``."""
        return ".".join(self.location)

    def pretty_printed(self) -> str:
        """Render the record as a plain three-line block.

        Returns:
            Name heading, description and type, followed by a blank line.
        """
        return f"# {self.name}\n{self.description}\ntype: {self.option_type}\n\n"

    def render(self) -> Text:
        """Render the record for a terminal with a highlighted heading.

        Returns:
            Rich Text with the same layout as ``pretty_printed``.
        """
        text = Text("# ")
        text.append(self.name, style="bold blue")
        text.append(f"\n{self.description}\ntype: {self.option_type}\n\n")
        return text


@dataclass(frozen=True)
class DocEntry:
    """A search hit: an option record tagged with the backend it came from."""

    variant: BackendVariant
    record: OptionRecord

    @property
    def name(self) -> str:
        """Dotted name of the wrapped record."""
        return self.record.name

    def pretty_printed(self) -> str:
        """Plain rendering of the wrapped record."""
        return self.record.pretty_printed()

    def render(self) -> Text:
        """Rich rendering of the wrapped record."""
        return self.record.render()
