"""Directed rounding of arbitrary real inputs into a target format.

`round_to` is the single conversion point used by every constructor: it maps
an exact or symbolic input to the nearest value of the target format that
lies on the requested side of the true value. Exact inputs go through gmpy2
rationals so nothing is lost before the one final rounding; symbolic
constants are evaluated by MPFR directly in the target context.

New source types plug in with `register_source`:

    >>> @register_source(MyNumber)
    ... def _(value, fmt, direction):
    ...     return round_to(fmt, value.as_fraction(), direction)
"""

import math
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import singledispatch
from typing import Any, Callable

import gmpy2
import numpy as np

from outward.numeric import FLOAT64, FloatFormat


class RoundingDirection(Enum):
    """Side of the exact value a rounded result must lie on."""

    DOWN = "down"
    UP = "up"

    @property
    def mode(self) -> int:
        """The matching gmpy2 rounding mode."""
        return gmpy2.RoundDown if self is RoundingDirection.DOWN else gmpy2.RoundUp


DOWN = RoundingDirection.DOWN
UP = RoundingDirection.UP


def round_to(fmt: FloatFormat, value: Any, direction: RoundingDirection) -> float:
    """Convert `value` into `fmt`, rounding toward `direction` when inexact.

    Args:
        fmt: Target format
        value: Any registered source (int, float, Fraction, Decimal, NumPy
            scalar, gmpy2 number, symbolic constant)
        direction: DOWN for a lower bound, UP for an upper bound

    Returns:
        A Python float exactly representable in `fmt`. NaN and infinities
        pass through unchanged.

    Raises:
        TypeError: If no conversion is registered for the value's type
    """
    return _convert(value, fmt, direction)


def register_source(cls: type) -> Callable[[Callable[..., float]], Callable[..., float]]:
    """Register a conversion `(value, fmt, direction) -> float` for `cls`."""
    return _convert.register(cls)


@singledispatch
def _convert(value: Any, fmt: FloatFormat, direction: RoundingDirection) -> float:
    raise TypeError(
        f"No directed-rounding conversion for {type(value).__name__!r}: {value!r}\n"
        f"Hint: register one with outward.rounding.register_source({type(value).__name__})"
    )


def _round_rational(q: "gmpy2.mpq", fmt: FloatFormat, direction: RoundingDirection) -> float:
    with fmt.context(direction):
        return float(gmpy2.mpfr(q))


@_convert.register
def _(value: float, fmt: FloatFormat, direction: RoundingDirection) -> float:
    if fmt == FLOAT64 or not math.isfinite(value):
        return float(value)
    return _round_rational(gmpy2.mpq(float(value)), fmt, direction)


@_convert.register
def _(value: int, fmt: FloatFormat, direction: RoundingDirection) -> float:
    return _round_rational(gmpy2.mpq(int(value)), fmt, direction)


@_convert.register
def _(value: Fraction, fmt: FloatFormat, direction: RoundingDirection) -> float:
    return _round_rational(gmpy2.mpq(value.numerator, value.denominator), fmt, direction)


@_convert.register
def _(value: Decimal, fmt: FloatFormat, direction: RoundingDirection) -> float:
    if not value.is_finite():
        return float(value)
    return _convert(Fraction(value), fmt, direction)


@_convert.register
def _(value: np.floating, fmt: FloatFormat, direction: RoundingDirection) -> float:
    if not np.isfinite(value):
        return float(value)
    numerator, denominator = value.as_integer_ratio()
    return _round_rational(gmpy2.mpq(int(numerator), int(denominator)), fmt, direction)


@_convert.register
def _(value: np.integer, fmt: FloatFormat, direction: RoundingDirection) -> float:
    return _convert(int(value), fmt, direction)


@_convert.register(gmpy2.mpz)
@_convert.register(gmpy2.mpq)
def _(value: Any, fmt: FloatFormat, direction: RoundingDirection) -> float:
    return _round_rational(gmpy2.mpq(value), fmt, direction)


@_convert.register(gmpy2.mpfr)
def _(value: Any, fmt: FloatFormat, direction: RoundingDirection) -> float:
    if not gmpy2.is_finite(value):
        return float(value)
    return _round_rational(gmpy2.mpq(value), fmt, direction)


def enclose(value: Any, direction: RoundingDirection, precision: int) -> Any:
    """Return an exact or one-sided bound of `value` for intermediate arithmetic.

    Exact finite inputs come back as a `gmpy2.mpq` equal to the value;
    symbolic constants as an `mpfr` of `precision` bits rounded toward
    `direction`; non-finite inputs as a Python float.
    """
    from outward.constants import SymbolicConstant

    if isinstance(value, SymbolicConstant):
        return value.enclose(precision, direction)
    if isinstance(value, Decimal):
        return gmpy2.mpq(Fraction(value)) if value.is_finite() else float(value)
    if isinstance(value, Fraction):
        return gmpy2.mpq(value.numerator, value.denominator)
    if isinstance(value, np.floating):
        if not np.isfinite(value):
            return float(value)
        numerator, denominator = value.as_integer_ratio()
        return gmpy2.mpq(int(numerator), int(denominator))
    if isinstance(value, (float, gmpy2.mpfr)) and not gmpy2.is_finite(value):
        return float(value)
    if isinstance(value, (bool, np.integer)):
        value = int(value)
    return gmpy2.mpq(value)


def round_offset(
    fmt: FloatFormat, center: Any, radius: Any, direction: RoundingDirection
) -> float:
    """Round `center - radius` DOWN or `center + radius` UP into `fmt`.

    The sum is exact when both operands are exact; a symbolic operand is
    bounded on the safe side at a working precision well above the target,
    so the one final rounding stays outward.
    """
    precision = 2 * fmt.precision + 64
    # Both offsets need the radius from above: it is subtracted for the
    # lower bound and added for the upper one.
    c = enclose(center, direction, precision)
    r = enclose(radius, UP, precision)

    if isinstance(c, float) or isinstance(r, float):
        # A finite operand cannot move an infinite one; it may also exceed
        # the float range, so it is dropped rather than converted.
        c = c if isinstance(c, float) else 0.0
        r = r if isinstance(r, float) else 0.0
        return c - r if direction is DOWN else c + r

    with gmpy2.context(precision=precision, round=direction.mode):
        total = c - r if direction is DOWN else c + r
    return round_to(fmt, total, direction)
