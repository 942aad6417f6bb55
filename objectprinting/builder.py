"""Chainable configuration surface over :class:`ConfigurationRegistry`.

Example::

    config = (
        PrintingConfig(Person)
        .excluding(UUID)
        .printing(int).using(hex)
        .printing(lambda p: p.height).using(culture="de_DE")
        .printing("name").using(str.upper)
    )
    text = config.print_to_string(person)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from objectprinting.errors import InvalidConfiguration
from objectprinting.members import MemberSelection, declared_type_of
from objectprinting.printer import print_to_string
from objectprinting.registry import ConfigurationRegistry, CultureLike, ValueFormatter
from objectprinting.schemas import DEFAULT_INDENT_CHAR, DEFAULT_MAX_DEPTH, DEFAULT_PLACEHOLDER

logger = logging.getLogger(__name__)

MemberSelector = Union[str, Callable[[Any], Any]]


class _MemberAccess:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name


class _MemberRecorder:
    """Stand-in owner handed to selectors; records which attribute is read."""

    def __getattr__(self, name: str) -> _MemberAccess:
        return _MemberAccess(name)


def member_name(selector: MemberSelector) -> str:
    """Return the member named by ``selector`` (``"age"`` or ``lambda p: p.age``).

    Raises:
        InvalidConfiguration: if the selector is not a single attribute access.
    """
    if isinstance(selector, str):
        if not selector.isidentifier():
            raise InvalidConfiguration(f"{selector!r} is not a valid member name")
        return selector
    if not callable(selector):
        raise InvalidConfiguration(f"Expected a member selector, got {selector!r}")
    try:
        access = selector(_MemberRecorder())
    except Exception as exc:
        raise InvalidConfiguration("Member selector must be a simple member access") from exc
    if not isinstance(access, _MemberAccess):
        raise InvalidConfiguration("Member selector must be a simple member access")
    return access.name


class MemberPrintingConfig:
    """Pending rule for a type or a member, completed by :meth:`using`."""

    def __init__(
        self,
        parent: "PrintingConfig",
        member_type: Optional[type] = None,
        name: Optional[str] = None,
    ):
        self._parent = parent
        self._member_type = member_type
        self._name = name

    def using(
        self,
        func: Optional[ValueFormatter] = None,
        *,
        culture: Optional[CultureLike] = None,
    ) -> "PrintingConfig":
        """Attach a formatter ``value -> str`` or a numeric culture."""
        if (func is None) == (culture is None):
            raise InvalidConfiguration("Pass exactly one of a formatter or a culture")

        registry = self._parent.registry
        if culture is not None:
            if self._member_type is None:
                raise InvalidConfiguration(
                    f"Cannot determine the declared type of member {self._name!r}; "
                    "annotate it on the owner type or configure the type directly"
                )
            registry.set_numeric_culture(self._member_type, culture)
        elif self._name is not None:
            registry.set_property_formatter(self._name, func)
        else:
            registry.set_type_formatter(self._member_type, func)
        return self._parent


class PrintingConfig:
    """Fluent builder of printing rules for values of ``owner``."""

    def __init__(
        self,
        owner: Optional[type] = None,
        registry: Optional[ConfigurationRegistry] = None,
    ):
        self.owner = owner
        self.registry = registry if registry is not None else ConfigurationRegistry()

    def printing(self, target: Union[type, MemberSelector]) -> MemberPrintingConfig:
        """Start a rule for every member of type ``target`` or for one member."""
        if isinstance(target, type):
            return MemberPrintingConfig(self, member_type=target)
        name = member_name(target)
        member_type = declared_type_of(self.owner, name) if self.owner is not None else None
        return MemberPrintingConfig(self, member_type=member_type, name=name)

    def excluding(self, target: Union[type, MemberSelector]) -> "PrintingConfig":
        if isinstance(target, type):
            self.registry.exclude_type(target)
        else:
            self.registry.exclude_property(member_name(target))
        return self

    def print_to_string(
        self,
        obj: Any,
        indent_char: str = DEFAULT_INDENT_CHAR,
        max_depth: int = DEFAULT_MAX_DEPTH,
        member_selection: Union[MemberSelection, str] = MemberSelection.BOTH,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ) -> str:
        if self.owner is not None and obj is not None and not isinstance(obj, self.owner):
            logger.debug(
                "Printing %s with a configuration built for %s",
                type(obj).__name__,
                self.owner.__name__,
            )
        return print_to_string(
            obj,
            self.registry,
            indent_char=indent_char,
            max_depth=max_depth,
            member_selection=member_selection,
            placeholder=placeholder,
        )


__all__ = ["MemberPrintingConfig", "PrintingConfig", "member_name"]
