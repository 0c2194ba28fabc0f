"""Exact note durations: rational fractions of a whole note and duration classes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from fractions import Fraction
from typing import Final

#: Number of decomposition units in one whole note (finest class is a 128th).
UNITS_PER_WHOLE: Final[int] = 128


class DurationClass(IntEnum):
    """
    A duration a single notation symbol can represent.

    The value is the power-of-two denominator of the note value, so
    ``DurationClass.QUARTER == 4`` and a quarter lasts ``1/4`` of a whole note.
    """

    WHOLE = 1
    HALF = 2
    QUARTER = 4
    EIGHTH = 8
    SIXTEENTH = 16
    THIRTY_SECOND = 32
    SIXTY_FOURTH = 64
    HUNDRED_TWENTY_EIGHTH = 128

    @property
    def units(self) -> int:
        """Length of this class in 128ths of a whole note."""
        return UNITS_PER_WHOLE // self.value

    @property
    def duration(self) -> Duration:
        return Duration(1, self.value)

    @classmethod
    def from_units(cls, units: int) -> DurationClass:
        """
        Return the class that lasts exactly *units* 128ths.

        Raises:
            ValueError: If no single symbol has that length.
        """
        if units <= 0 or UNITS_PER_WHOLE % units != 0:
            raise ValueError(f"No duration class lasts {units}/128 of a whole note.")
        return cls(UNITS_PER_WHOLE // units)


@dataclass(frozen=True)
class Duration:
    """
    An exact, immutable fraction of a whole note.

    Every instance is stored in lowest terms; arithmetic always returns a new,
    simplified value.
    """

    num: int
    den: int = 1

    def __post_init__(self) -> None:
        if self.den == 0:
            raise ValueError(f"Duration denominator must be non-zero, got {self.num}/0")
        if self.num < 0 or self.den < 0:
            raise ValueError(f"Duration must not be negative, got {self.num}/{self.den}")
        divisor = math.gcd(self.num, self.den)
        if divisor > 1:
            object.__setattr__(self, "num", self.num // divisor)
            object.__setattr__(self, "den", self.den // divisor)

    @classmethod
    def from_fraction(cls, value: Fraction) -> Duration:
        return cls(value.numerator, value.denominator)

    def simplify(self) -> Duration:
        """Return the equivalent fraction with the smallest denominator."""
        divisor = math.gcd(self.num, self.den)
        return Duration(self.num // divisor, self.den // divisor)

    def add(self, other: Duration) -> Duration:
        return Duration(self.num * other.den + other.num * self.den, self.den * other.den)

    def multiply(self, other: Duration) -> Duration:
        return Duration(self.num * other.num, self.den * other.den)

    def to_fraction(self) -> Fraction:
        return Fraction(self.num, self.den)

    def to_float(self) -> float:
        """Floating point value, for width proportions only."""
        return self.num / self.den

    def to_units(self) -> int:
        """Length in whole 128ths of a whole note; finer remainders are dropped."""
        return self.num * UNITS_PER_WHOLE // self.den

    def scale(self, length: int) -> int:
        """Return ``self * length`` rounded down to an integer coordinate."""
        return self.num * length // self.den

    @property
    def is_zero(self) -> bool:
        return self.num == 0

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __mul__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.multiply(other)

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.num * other.den < other.num * self.den

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.num * other.den <= other.num * self.den

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return other < self

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return other <= self

    def __str__(self) -> str:
        return f"{self.num}/{self.den}"


ZERO: Final[Duration] = Duration(0, 1)
WHOLE: Final[Duration] = Duration(1, 1)
