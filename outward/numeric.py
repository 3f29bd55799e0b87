"""Binary floating-point formats and input classification.

Interval endpoints are stored as Python floats, so every target format is a
binary format no wider than IEEE binary64. Formats are described with the
MPFR exponent convention (mantissa in [0.5, 1)), which lets them be turned
straight into gmpy2 contexts.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, Any

import gmpy2
import numpy as np

if TYPE_CHECKING:
    from outward.rounding import RoundingDirection


@dataclass(frozen=True)
class FloatFormat:
    """A binary floating-point format that endpoints can be rounded into."""

    name: str = field(compare=False)
    precision: int
    emax: int

    def __post_init__(self) -> None:
        if not 2 <= self.precision <= 53 or not 2 <= self.emax <= 1024:
            raise ValueError(
                f"FloatFormat {self.name!r} must fit in a binary64 float.\n"
                f"Got precision={self.precision}, emax={self.emax}\n"
                f"Hint: precision must be in [2, 53] and emax in [2, 1024]"
            )

    @property
    def emin(self) -> int:
        # Smallest exponent with gradual underflow down to one subnormal ulp.
        return 4 - self.emax - self.precision

    def contains(self, other: "FloatFormat") -> bool:
        """True if every value of `other` is representable in this format."""
        return (
            self.precision >= other.precision
            and self.emax >= other.emax
            and self.emin <= other.emin
        )

    def context(self, direction: "RoundingDirection") -> gmpy2.context:
        """Return a gmpy2 context rounding into this format in `direction`."""
        return gmpy2.context(
            precision=self.precision,
            emin=self.emin,
            emax=self.emax,
            subnormalize=True,
            round=direction.mode,
        )

    def __repr__(self) -> str:
        return self.name


FLOAT16 = FloatFormat("float16", 11, 16)
BFLOAT16 = FloatFormat("bfloat16", 8, 128)
FLOAT32 = FloatFormat("float32", 24, 128)
FLOAT64 = FloatFormat("float64", 53, 1024)

# Narrowest first, used to find a common format for incomparable inputs.
BUILTIN_FORMATS = (FLOAT16, BFLOAT16, FLOAT32, FLOAT64)

_NUMPY_FORMATS = {16: FLOAT16, 32: FLOAT32, 64: FLOAT64}


class Kind(Enum):
    """Closed set of argument kinds accepted by the interval builders."""

    INTEGER = "integer"
    REAL = "real"
    SYMBOLIC = "symbolic"
    INTERVAL = "interval"
    COMPLEX = "complex"
    TUPLE = "tuple"


_REAL_TYPES = (float, Fraction, Decimal, np.floating, gmpy2.mpq, gmpy2.mpfr)
_INTEGER_TYPES = (int, np.integer, gmpy2.mpz)


def classify(value: Any) -> Kind:
    """Return the kind of an interval-building argument.

    Raises:
        TypeError: If the value cannot be used as an interval endpoint
    """
    from outward.constants import SymbolicConstant
    from outward.interval import Interval

    if isinstance(value, Interval):
        return Kind.INTERVAL
    if isinstance(value, SymbolicConstant):
        return Kind.SYMBOLIC
    if isinstance(value, _INTEGER_TYPES):
        return Kind.INTEGER
    if isinstance(value, _REAL_TYPES):
        return Kind.REAL
    if isinstance(value, (complex, np.complexfloating)):
        return Kind.COMPLEX
    if isinstance(value, tuple):
        return Kind.TUPLE
    raise TypeError(
        f"Cannot build an interval from {type(value).__name__!r}: {value!r}\n"
        f"Accepted: int, float, Fraction, Decimal, NumPy scalars, gmpy2 numbers,\n"
        f"symbolic constants (outward.pi, ...), Interval, complex, or a 2-tuple.\n"
        f"Hint: parse strings yourself, e.g. interval(Fraction('0.1'))"
    )


def format_of(value: Any) -> FloatFormat | None:
    """Return the format a value carries, or None if it adopts its peer's."""
    from outward.interval import Interval

    if isinstance(value, Interval):
        return value.fmt
    if isinstance(value, np.floating):
        bits = np.finfo(type(value)).bits
        return _NUMPY_FORMATS.get(bits, FLOAT64)
    if isinstance(value, float):
        return FLOAT64
    return None


def promote_format(*values: Any) -> FloatFormat:
    """Return the common format of the given endpoints.

    Values without a format of their own (integers, rationals, decimals,
    symbolic constants) take the format of the others; with no format at
    all the result is FLOAT64.
    """
    formats = [fmt for fmt in map(format_of, values) if fmt is not None]
    return join_formats(*formats)


def join_formats(*formats: FloatFormat) -> FloatFormat:
    """Return the narrowest format containing all of `formats`."""
    if not formats:
        return FLOAT64
    for candidate in formats:
        if all(candidate.contains(other) for other in formats):
            return candidate
    for candidate in BUILTIN_FORMATS:
        if all(candidate.contains(other) for other in formats):
            return candidate
    return FLOAT64
