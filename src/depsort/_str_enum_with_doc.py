"""Module providing a base class for string enums with docstrings."""

from enum import StrEnum
from typing import Self


class StrEnumWithDoc(StrEnum):
    """Base class for string enums whose members carry their own docstring.

    Members are declared as ``NAME = "value", "docstring"``; the docstring is
    optional and defaults to an empty string.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a new enum member with a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj

    @classmethod
    def describe(cls) -> dict[str, str]:
        """Map each member value to its docstring."""
        return {member.value: member.__doc__ or "" for member in cls}
