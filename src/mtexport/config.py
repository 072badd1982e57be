"""Configuration and constants for mtexport."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mtexport.errors import ConfigError

# Export format sentinels
ENTRY_SEPARATOR = "--------"
SECTION_SEPARATOR = "-----"

# Keys whose "KEY:" header opens a block terminated by SECTION_SEPARATOR
MULTILINE_KEYS = frozenset({
    "BODY",
    "EXTENDED BODY",
    "EXCERPT",
    "KEYWORDS",
    "COMMENT",
    "PING",
})

# Multi-line sections the renderer reads vs. parses and drops
CONTENT_KEYS = ("BODY", "EXTENDED BODY")
IGNORED_MULTILINE_KEYS = frozenset({"EXCERPT", "KEYWORDS", "COMMENT", "PING"})

# DATE field layouts, tried in order
DATE_FORMATS = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
)

STATUS_VALUES = {
    "draft": True,
    "publish": False,
}

TAG_KEYS = ("PRIMARY CATEGORY", "CATEGORY")

# Defaults
DEFAULT_OUTPUT_DIR = Path("content")
DEFAULT_TIMEZONE = "Asia/Tokyo"
DEFAULT_EXTRA_MULTILINE_KEYS = ("IMAGE",)
DEFAULT_ENCODING = "utf-8"


def load_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA time zone name."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown time zone: {name}") from e


def check_encoding(name: str) -> str:
    """Return the canonical codec name, or raise ConfigError."""
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise ConfigError(f"Unknown encoding: {name}") from e


@dataclass
class ConvertConfig:
    """Settings for one conversion run."""

    input_path: Path
    output_dir: Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)
    timezone: str = DEFAULT_TIMEZONE
    extra_multiline_keys: tuple[str, ...] = DEFAULT_EXTRA_MULTILINE_KEYS
    template_path: Path | None = None
    encoding: str = DEFAULT_ENCODING

    @property
    def tzinfo(self) -> ZoneInfo:
        return load_timezone(self.timezone)

    @property
    def multiline_keys(self) -> frozenset[str]:
        return MULTILINE_KEYS | frozenset(self.extra_multiline_keys)

    def validate(self):
        """Fail early on settings that would break every entry."""
        load_timezone(self.timezone)
        check_encoding(self.encoding)
        if self.template_path is not None and not self.template_path.is_file():
            raise ConfigError(f"Template not found: {self.template_path}")
