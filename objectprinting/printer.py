"""Recursive text printer.

Renders a value graph depth first as indented lines::

    Person
    \tName = Alice
    \tAge = 30

Composite members are resolved through a :class:`ConfigurationRegistry`
(exclusions, property/type formatters, numeric cultures). Subtrees deeper than
``max_depth`` are replaced by a placeholder line instead of failing.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from objectprinting.members import MemberSelection, ValueKind, classify, iter_members
from objectprinting.registry import ConfigurationRegistry
from objectprinting.schemas import (
    DEFAULT_INDENT_CHAR,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PLACEHOLDER,
    PrintSettings,
    make_settings,
)

logger = logging.getLogger(__name__)

NEWLINE = "\n"
NULL_TOKEN = "null"


class _PrintPass:
    """Traversal state owned by a single print call."""

    def __init__(self, registry: ConfigurationRegistry, settings: PrintSettings):
        self.registry = registry
        self.settings = settings

    def render(self, value: Any, depth: int, *, formatted: bool = False) -> str:
        settings = self.settings
        if depth >= settings.max_depth:
            logger.debug(
                "Depth limit %d reached at %s; substituting placeholder",
                settings.max_depth,
                type(value).__name__,
            )
            return settings.placeholder + NEWLINE

        # Formatter output is final text, never re-resolved or descended into.
        if formatted:
            return f"{value}{NEWLINE}"

        kind = classify(value)
        if kind is ValueKind.NULL:
            return NULL_TOKEN + NEWLINE
        if kind is ValueKind.SCALAR:
            return f"{value}{NEWLINE}"

        indentation = settings.indent_char * (depth + 1)
        lines: List[str] = [type(value).__name__ + NEWLINE]

        if kind is ValueKind.MAPPING:
            for key, item in value.items():
                lines.append(f"{indentation}[{key}] = {self.render(item, depth + 1)}")
        elif kind is ValueKind.SEQUENCE:
            for index, element in enumerate(value):
                lines.append(f"{indentation}[{index}] = {self.render(element, depth + 1)}")
        else:
            for member in iter_members(value, settings.member_selection):
                resolution = self.registry.resolve(member)
                if resolution.skip:
                    logger.debug(
                        "Skipping excluded %s %r of %s",
                        member.kind,
                        member.name,
                        type(value).__name__,
                    )
                    continue
                rendered = self.render(
                    resolution.value, depth + 1, formatted=resolution.formatted
                )
                lines.append(f"{indentation}{member.name} = {rendered}")

        return "".join(lines)


class ObjectPrinter:
    """Prints values using a registry of printing rules.

    ``print`` is a pure function of the root value, the registry and the
    settings, so one printer can be reused for any number of calls.
    """

    def __init__(
        self,
        registry: Optional[ConfigurationRegistry] = None,
        settings: Optional[PrintSettings] = None,
    ):
        self.registry = registry if registry is not None else ConfigurationRegistry()
        self.settings = settings if settings is not None else PrintSettings()

    def print(self, root: Any) -> str:
        return _PrintPass(self.registry, self.settings).render(root, 0)


def print_to_string(
    root: Any,
    registry: Optional[ConfigurationRegistry] = None,
    indent_char: str = DEFAULT_INDENT_CHAR,
    max_depth: int = DEFAULT_MAX_DEPTH,
    member_selection: Union[MemberSelection, str] = MemberSelection.BOTH,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    """Render ``root`` as indented text.

    Args:
        root: Value to print.
        registry: Exclusion and formatting rules; none by default.
        indent_char: Single character repeated ``depth + 1`` times per line.
        max_depth: Nesting level at which subtrees become ``placeholder``.
        member_selection: Print fields, properties or both for composites.
        placeholder: Text substituted for subtrees past ``max_depth``.

    Raises:
        UnsupportedMemberSelection: for selections other than FIELDS, PROPERTIES, BOTH.
        InvalidConfiguration: for an invalid indent character, or a depth below 0
            or above ``MAX_SUPPORTED_DEPTH``.
    """
    settings = make_settings(
        indent_char=indent_char,
        max_depth=max_depth,
        member_selection=member_selection,
        placeholder=placeholder,
    )
    return ObjectPrinter(registry, settings).print(root)


__all__ = ["NEWLINE", "NULL_TOKEN", "ObjectPrinter", "print_to_string"]
