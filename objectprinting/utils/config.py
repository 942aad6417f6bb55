"""Configuration management."""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

_INDENT_ALIASES = {
    "\\t": "\t",
    "tab": "\t",
    "space": " ",
}


def parse_indent_char(value: str) -> str:
    """Translate shell-friendly spellings (``\\t``, ``tab``, ``space``) to the character."""
    return _INDENT_ALIASES.get(value.strip().lower(), value)


class Config:
    """Global configuration for objectprinting."""

    def __init__(self):
        self.data_dir = Path(__file__).parent.parent / "data"
        self._defaults = self._load_defaults()

    def _load_defaults(self) -> Dict[str, Any]:
        """Load defaults.yaml"""
        defaults_path = self.data_dir / "defaults.yaml"
        if defaults_path.exists():
            with open(defaults_path, encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        return {}

    def _printer_defaults(self) -> Dict[str, Any]:
        return self._defaults.get("printer", {}) or {}

    @property
    def defaults(self) -> Dict[str, Any]:
        return self._defaults

    @property
    def indent_char(self) -> str:
        override = os.getenv("OBJECTPRINTING_INDENT_CHAR")
        if override:
            return parse_indent_char(override)
        return str(self._printer_defaults().get("indent_char", "\t"))

    @property
    def max_depth(self) -> int:
        defaults = self._printer_defaults()
        override = os.getenv("OBJECTPRINTING_MAX_DEPTH")
        if override:
            try:
                return int(override)
            except ValueError:
                logger.warning("Ignoring non-integer OBJECTPRINTING_MAX_DEPTH=%r", override)
        try:
            return int(defaults.get("max_depth", 10))
        except (TypeError, ValueError):
            return 10

    @property
    def member_selection(self) -> str:
        defaults = self._printer_defaults()
        value = os.getenv("OBJECTPRINTING_MEMBER_SELECTION") or defaults.get("member_selection", "both")
        return str(value).strip().lower()

    @property
    def placeholder(self) -> str:
        defaults = self._printer_defaults()
        return os.getenv(
            "OBJECTPRINTING_PLACEHOLDER",
            defaults.get("placeholder", "<max depth reached>"),
        )

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "indent_char": self.indent_char,
            "max_depth": self.max_depth,
            "member_selection": self.member_selection,
            "placeholder": self.placeholder,
            "log_level": self.log_level,
        }


# Global config instance
config = Config()
