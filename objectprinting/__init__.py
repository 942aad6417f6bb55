"""
objectprinting: configurable, indented text dumps of arbitrary Python values
"""

__version__ = "0.1.0"

from objectprinting.builder import MemberPrintingConfig, PrintingConfig
from objectprinting.errors import (
    InvalidConfiguration,
    ObjectPrintingError,
    UnsupportedMemberSelection,
)
from objectprinting.members import MemberSelection
from objectprinting.printer import ObjectPrinter, print_to_string
from objectprinting.registry import ConfigurationRegistry
from objectprinting.schemas import PrintSettings

__all__ = [
    "ConfigurationRegistry",
    "InvalidConfiguration",
    "MemberPrintingConfig",
    "MemberSelection",
    "ObjectPrinter",
    "ObjectPrintingError",
    "PrintSettings",
    "PrintingConfig",
    "UnsupportedMemberSelection",
    "print_to_string",
]
