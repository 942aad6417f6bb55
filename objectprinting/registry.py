"""Registry of exclusion and formatting rules consulted while printing."""

from __future__ import annotations

import decimal
import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Optional, Set, Union

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from objectprinting.errors import InvalidConfiguration
from objectprinting.members import Member, is_number, is_numeric_type

logger = logging.getLogger(__name__)

# Plain decimal form: no grouping, every fractional digit the value carries.
_CULTURE_NUMBER_FORMAT = "0.#"
# Enough digits to lay out any float (1e308) without rounding.
_CULTURE_DECIMAL_PRECISION = 400

ValueFormatter = Callable[[Any], str]
CultureLike = Union[str, Locale]


class FormatterKind(str, enum.Enum):
    TYPE = "type"
    PROPERTY = "property"
    CULTURE = "culture"


@dataclass(frozen=True)
class Formatter:
    """A validated rendering rule: what it applies to and how it renders."""

    kind: FormatterKind
    target: Union[type, str]
    func: Optional[ValueFormatter] = None
    locale: Optional[Locale] = None

    def __call__(self, value: Any) -> str:
        if self.kind is FormatterKind.CULTURE:
            with decimal.localcontext() as ctx:
                ctx.prec = _CULTURE_DECIMAL_PRECISION
                return format_decimal(
                    value,
                    format=_CULTURE_NUMBER_FORMAT,
                    locale=self.locale,
                    decimal_quantization=False,
                )
        return self.func(value)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a member against the registry."""

    skip: bool = False
    value: Any = None
    formatted: bool = False


SKIP = Resolution(skip=True)


def _require_type(tp: Any) -> type:
    if not isinstance(tp, type):
        raise InvalidConfiguration(f"Expected a class, got {tp!r}")
    return tp


def _require_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidConfiguration(f"Expected a member name, got {name!r}")
    return name


def _require_callable(func: Any) -> ValueFormatter:
    if not callable(func):
        raise InvalidConfiguration(f"Formatter must be callable, got {func!r}")
    return func


def parse_culture(culture: CultureLike) -> Locale:
    """Parse a locale identifier such as ``"de_DE"`` or ``"fr-FR"``."""
    if isinstance(culture, Locale):
        return culture
    if not isinstance(culture, str) or not culture.strip():
        raise InvalidConfiguration(f"Expected a locale identifier, got {culture!r}")
    try:
        return Locale.parse(culture.strip().replace("-", "_"))
    except (UnknownLocaleError, ValueError) as exc:
        raise InvalidConfiguration(f"Unknown culture {culture!r}: {exc}") from exc


class ConfigurationRegistry:
    """Exclusion and formatting rules for one output shape.

    Build it up front and reuse it across print calls. It is not safe to
    register rules while a print pass that uses the registry is running.
    """

    def __init__(self) -> None:
        self._excluded_types: Set[type] = set()
        self._excluded_properties: Set[str] = set()
        self._type_formatters: Dict[type, Formatter] = {}
        self._property_formatters: Dict[str, Formatter] = {}
        self._numeric_cultures: Dict[type, Formatter] = {}

    # Registration -------------------------------------------------------

    def exclude_type(self, tp: type) -> None:
        self._excluded_types.add(_require_type(tp))
        logger.debug("Excluding members of type %s", tp.__name__)

    def exclude_property(self, name: str) -> None:
        self._excluded_properties.add(_require_name(name))
        logger.debug("Excluding member %r", name)

    def set_type_formatter(self, tp: type, func: ValueFormatter) -> None:
        formatter = Formatter(FormatterKind.TYPE, _require_type(tp), func=_require_callable(func))
        self._type_formatters[tp] = formatter
        logger.debug("Registered formatter for type %s", tp.__name__)

    def set_property_formatter(self, name: str, func: ValueFormatter) -> None:
        formatter = Formatter(FormatterKind.PROPERTY, _require_name(name), func=_require_callable(func))
        self._property_formatters[name] = formatter
        logger.debug("Registered formatter for member %r", name)

    def set_numeric_culture(self, tp: type, culture: CultureLike) -> None:
        """Render numbers declared as ``tp`` using the conventions of ``culture``.

        Raises:
            InvalidConfiguration: if ``tp`` is not an integer or floating-point
                type, or ``culture`` is not a known locale.
        """
        _require_type(tp)
        if not is_numeric_type(tp):
            raise InvalidConfiguration(
                f"Culture formatting requires a numeric type, got {tp.__name__}"
            )
        locale = parse_culture(culture)
        self._numeric_cultures[tp] = Formatter(FormatterKind.CULTURE, tp, locale=locale)
        logger.debug("Registered culture %s for type %s", locale, tp.__name__)

    # Lookup -------------------------------------------------------------

    @property
    def excluded_types(self) -> FrozenSet[type]:
        return frozenset(self._excluded_types)

    @property
    def excluded_properties(self) -> FrozenSet[str]:
        return frozenset(self._excluded_properties)

    def type_formatter(self, tp: Any) -> Optional[Formatter]:
        return self._type_formatters.get(tp)

    def property_formatter(self, name: str) -> Optional[Formatter]:
        return self._property_formatters.get(name)

    def numeric_culture(self, tp: Any) -> Optional[Formatter]:
        return self._numeric_cultures.get(tp)

    def is_excluded(self, name: str, declared_type: Any = None) -> bool:
        if name in self._excluded_properties:
            return True
        return declared_type is not None and declared_type in self._excluded_types

    def resolve(self, member: Member) -> Resolution:
        """Decide how ``member`` is printed.

        Exclusion wins over everything. A property formatter wins over a type
        formatter, which wins over a numeric culture. Without any rule the raw
        value is returned for recursive printing.

        A member excluded by name is skipped before its value is read; an
        unannotated member is read once to learn its runtime type.
        """
        if self.is_excluded(member.name):
            return SKIP
        declared_type = member.declared_type
        if self.is_excluded(member.name, declared_type):
            return SKIP

        value = member.load()
        formatter = self.property_formatter(member.name)
        if formatter is None:
            formatter = self.type_formatter(declared_type)
        if formatter is None and is_number(value):
            formatter = self.numeric_culture(declared_type)

        if formatter is None:
            return Resolution(value=value)
        return Resolution(value=formatter(value), formatted=True)


__all__ = [
    "ConfigurationRegistry",
    "Formatter",
    "FormatterKind",
    "Resolution",
    "SKIP",
    "parse_culture",
]
