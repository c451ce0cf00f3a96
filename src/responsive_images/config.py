"""Configuration loading for responsive_images.

Options live in ``responsive-images.toml``::

    [images]
    sizes = "(max-width: 600px) 100vw, 50vw"
    lazy = true
    debug = false

    [markdown]
    extensions = ["extra", "sane_lists"]
"""

import difflib
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

from .logging import warning

CONFIG_FILENAME = "responsive-images.toml"


def _suggest(key: str, valid_keys: set[str]) -> str | None:
    """Closest valid key to a misspelled one, if any is close enough."""
    matches = difflib.get_close_matches(key.lower(), sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _check_keys(table: dict, valid_keys: set[str], section: str, config_path: Path) -> None:
    """Warn about keys in a table that no option reads."""
    for key in sorted(set(table) - valid_keys):
        msg = f"Unknown config key '{key}' in [{section}] in {config_path}"
        similar = _suggest(key, valid_keys)
        if similar:
            msg += f". Did you mean '{similar}'?"
        warning(msg)


def _field_names(cls) -> set[str]:
    return {f.name for f in fields(cls)}


@dataclass
class ImageConfig:
    """Responsive image rendering options."""

    sizes: str | None = None  # e.g. "(max-width: 600px) 100vw, 50vw"
    lazy: bool = True
    debug: bool = False

    @classmethod
    def from_table(cls, table: dict, config_path: Path) -> "ImageConfig":
        """Build from the ``[images]`` table; an empty ``sizes`` means unset."""
        _check_keys(table, _field_names(cls), "images", config_path)
        return cls(
            sizes=table.get("sizes") or None,
            lazy=table.get("lazy", True),
            debug=table.get("debug", False),
        )

    def to_extension_config(self) -> dict:
        """Keyword arguments for ResponsiveImageExtension."""
        return {"sizes": self.sizes or "", "lazy": self.lazy, "debug": self.debug}


@dataclass
class MarkdownConfig:
    """Markdown conversion options."""

    # Extra Python-Markdown extensions loaded alongside responsive images
    extensions: list[str] = field(default_factory=lambda: ["extra", "sane_lists"])

    @classmethod
    def from_table(cls, table: dict, config_path: Path) -> "MarkdownConfig":
        """Build from the ``[markdown]`` table; a single name counts as a list."""
        _check_keys(table, _field_names(cls), "markdown", config_path)
        if "extensions" not in table:
            return cls()
        extensions = table["extensions"]
        if isinstance(extensions, str):
            extensions = [extensions]
        return cls(extensions=list(extensions))


@dataclass
class Config:
    """Main configuration container."""

    images: ImageConfig = field(default_factory=ImageConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)

    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path) -> "Config":
        """Load configuration from a TOML file.

        A missing file gives the defaults.

        Raises:
            tomllib.TOMLDecodeError: If the file is not valid TOML
        """
        config = cls(config_path=config_path)
        if not config_path.exists():
            return config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        _check_keys(data, {"images", "markdown"}, "top-level", config_path)

        if "images" in data:
            config.images = ImageConfig.from_table(data["images"], config_path)
        if "markdown" in data:
            config.markdown = MarkdownConfig.from_table(data["markdown"], config_path)
        return config

    @classmethod
    def find_and_load(cls, start_path: Path | None = None) -> "Config":
        """Load the nearest responsive-images.toml, or return defaults."""
        config_path = cls.find_config(start_path or Path.cwd())
        if config_path is None:
            return cls()
        return cls.load(config_path)

    @staticmethod
    def find_config(start_path: Path) -> Path | None:
        """Nearest responsive-images.toml in start_path or one of its parents."""
        start = start_path.resolve()
        for directory in (start, *start.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                return candidate
        return None
