"""
Pydantic schemas for printer settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from objectprinting.errors import InvalidConfiguration
from objectprinting.members import MemberSelection

if TYPE_CHECKING:  # pragma: no cover - typing only
    from objectprinting.utils.config import Config

DEFAULT_INDENT_CHAR = "\t"
DEFAULT_MAX_DEPTH = 10
DEFAULT_PLACEHOLDER = "<max depth reached>"
# Each nesting level costs one interpreter frame; stay well inside the default recursion limit.
MAX_SUPPORTED_DEPTH = 500


class PrintSettings(BaseModel):
    """Traversal parameters for a print pass."""
    model_config = ConfigDict(frozen=True)

    indent_char: str = Field(default=DEFAULT_INDENT_CHAR, min_length=1, max_length=1)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0, le=MAX_SUPPORTED_DEPTH)
    member_selection: MemberSelection = MemberSelection.BOTH
    placeholder: str = DEFAULT_PLACEHOLDER  # substituted for subtrees past max_depth

    @field_validator("member_selection", mode="before")
    @classmethod
    def _parse_member_selection(cls, value: Any) -> MemberSelection:
        return MemberSelection.parse(value)

    @classmethod
    def from_config(cls, cfg: "Config") -> "PrintSettings":
        """Build settings from the YAML defaults and environment overrides."""
        return make_settings(
            indent_char=cfg.indent_char,
            max_depth=cfg.max_depth,
            member_selection=cfg.member_selection,
            placeholder=cfg.placeholder,
        )


def make_settings(**values: Any) -> PrintSettings:
    """Create :class:`PrintSettings`, reporting bad values as InvalidConfiguration."""
    try:
        return PrintSettings(**values)
    except ValidationError as exc:
        raise InvalidConfiguration(f"Invalid printer settings: {exc}") from exc


__all__ = [
    "DEFAULT_INDENT_CHAR",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_PLACEHOLDER",
    "MAX_SUPPORTED_DEPTH",
    "PrintSettings",
    "make_settings",
]
