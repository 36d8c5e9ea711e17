"""Enum definitions for readings."""

from enum import Enum


class MeasureType(str, Enum):
    """Kind of utility meter a reading was taken from."""

    WATER = "WATER"
    GAS = "GAS"

    @classmethod
    def parse(cls, value: str) -> "MeasureType":
        """Match a measure type case-insensitively.

        Raises:
            ValueError: if ``value`` is not a known measure type.
        """
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Unknown measure type: {value!r}") from None
