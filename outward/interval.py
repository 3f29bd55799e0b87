import math
from dataclasses import KW_ONLY, InitVar, dataclass, field
from typing import Any

from outward.config import validity_check
from outward.numeric import FLOAT64, FloatFormat, Kind, classify, promote_format
from outward.rounding import DOWN, UP, round_to
from outward.validation import (
    Diagnostic,
    InvalidIntervalError,
    Reason,
    diagnose,
    exceeds,
    normalize_zero,
    report,
)

_HASH_SEED = hash("Interval")

_MISSING = object()

_ENDPOINT_KINDS = (Kind.INTEGER, Kind.REAL, Kind.SYMBOLIC)


def require_endpoint(value: Any) -> Kind:
    kind = classify(value)
    if kind not in _ENDPOINT_KINDS:
        raise TypeError(
            f"Interval endpoints must be real numbers or symbolic constants.\n"
            f"Got {kind.value} {value!r}\n"
            f"Hint: use Interval.of(x) for intervals, (lo, hi) tuples and complex values"
        )
    return kind


def _is_empty_sentinel(diagnostic: Diagnostic) -> bool:
    """The empty interval `(+inf, -inf)` is terminal and never rejected."""
    return (
        diagnostic.reason is Reason.REVERSED_BOUNDS
        and diagnostic.lo == math.inf
        and diagnostic.hi == -math.inf
    )


@dataclass(frozen=True)
class Interval:
    """Closed real interval `[lo, hi]` whose endpoints live in `fmt`.

    Endpoints are rounded outward into `fmt` (lower bound down, upper bound
    up), negative zeros are stored as positive zeros, and when `checked`
    (default: the `IA_VALID` setting) is true an invalid pair is replaced by
    the empty interval with an `InvalidIntervalWarning`.
    """

    lo: float
    hi: float
    _: KW_ONLY
    fmt: FloatFormat | None = field(default=None, compare=False)
    checked: InitVar[bool | None] = None

    def __post_init__(self, checked: bool | None) -> None:
        require_endpoint(self.lo)
        require_endpoint(self.hi)

        fmt = self.fmt if self.fmt is not None else promote_format(self.lo, self.hi)
        lo = normalize_zero(round_to(fmt, self.lo, DOWN))
        hi = normalize_zero(round_to(fmt, self.hi, UP))

        if checked is None:
            checked = validity_check()
        # Validation sees the raw bounds, not the rounded ones.
        if checked:
            diagnostic = diagnose(self.lo, self.hi)
            if diagnostic is not None and not _is_empty_sentinel(diagnostic):
                report(diagnostic, stacklevel=3)
                lo, hi = math.inf, -math.inf

        object.__setattr__(self, "lo", lo)
        object.__setattr__(self, "hi", hi)
        object.__setattr__(self, "fmt", fmt)

    @classmethod
    def of(
        cls,
        *args: Any,
        fmt: FloatFormat | None = None,
        checked: bool | None = None,
    ) -> "Interval | ComplexInterval":
        """Build an interval from one or two arguments of any supported kind.

        - `Interval.of(lo, hi)` is `Interval(lo, hi)`
        - `Interval.of(x)` for a real or symbolic `x` is `Interval(x, x)`
        - `Interval.of((lo, hi))` unpacks the tuple
        - `Interval.of(x: Interval)` is `x`, or `x.to(fmt)` for another format
        - `Interval.of(z: complex)` is a `ComplexInterval`
        """
        if len(args) == 2:
            return cls(args[0], args[1], fmt=fmt, checked=checked)
        if len(args) != 1:
            raise TypeError(
                f"Interval.of() takes one or two arguments, got {len(args)}.\n"
                f"Examples: Interval.of(1), Interval.of(1, 2), Interval.of((1, 2))"
            )

        value = args[0]
        kind = classify(value)
        if kind is Kind.INTERVAL:
            return value if fmt is None else value.to(fmt)
        if kind is Kind.TUPLE:
            if len(value) != 2:
                raise TypeError(
                    f"Interval.of() needs a (lo, hi) pair, got a {len(value)}-tuple: {value!r}"
                )
            return cls(value[0], value[1], fmt=fmt, checked=checked)
        if kind is Kind.COMPLEX:
            return ComplexInterval(
                real=cls(value.real, value.real, fmt=fmt, checked=checked),
                imag=cls(value.imag, value.imag, fmt=fmt, checked=checked),
            )
        return cls(value, value, fmt=fmt, checked=checked)

    def to(self, fmt: FloatFormat) -> "Interval":
        """Re-express the endpoints in `fmt`, rounding outward, without re-validating."""
        if fmt == self.fmt:
            return self
        return Interval(self.lo, self.hi, fmt=fmt, checked=False)

    @property
    def is_empty(self) -> bool:
        return self.lo == math.inf and self.hi == -math.inf

    @property
    def is_entire(self) -> bool:
        return self.lo == -math.inf and self.hi == math.inf

    @property
    def is_thin(self) -> bool:
        """True for a degenerate interval `[x, x]`."""
        return self.lo == self.hi

    @property
    def is_unbounded(self) -> bool:
        return self.lo == -math.inf or self.hi == math.inf

    def __hash__(self) -> int:
        return hash((self.hi, hash((self.lo, _HASH_SEED))))

    def __str__(self) -> str:
        """Human-friendly string showing the bounds."""
        if self.is_empty:
            return "∅"
        return f"[{self.lo}, {self.hi}]"


@dataclass(frozen=True)
class ComplexInterval:
    """Rectangular complex interval `real + imag·i`."""

    real: Interval
    imag: Interval

    def __str__(self) -> str:
        return f"{self.real} + {self.imag}im"


@dataclass(frozen=True)
class Construction:
    """Result of a construction that may have been rejected.

    Attributes:
        interval: The built interval, or the empty interval if rejected
        diagnostic: Why the inputs were rejected, None on success
    """

    interval: Interval
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    def report(self, stacklevel: int = 1) -> Interval:
        """Warn about a rejection, then return the interval either way."""
        if self.diagnostic is not None:
            report(self.diagnostic, stacklevel=stacklevel + 1)
        return self.interval

    def unwrap(self) -> Interval:
        """Return the interval, or raise `InvalidIntervalError` if rejected."""
        if self.diagnostic is not None:
            raise InvalidIntervalError(self.diagnostic)
        return self.interval


def empty_interval(fmt: FloatFormat = FLOAT64) -> Interval:
    """The canonical empty interval `(+inf, -inf)`."""
    return Interval(math.inf, -math.inf, fmt=fmt, checked=False)


def entire_interval(fmt: FloatFormat = FLOAT64) -> Interval:
    """The interval `(-inf, +inf)` covering the whole real line."""
    return Interval(-math.inf, math.inf, fmt=fmt, checked=False)


def atomic(fmt: FloatFormat, value: Any) -> Interval:
    """Return the tightest interval of `fmt` containing `value`."""
    if isinstance(value, Interval):
        return value.to(fmt)
    return Interval(value, value, fmt=fmt, checked=False)


def construct(
    a: Any,
    b: Any = _MISSING,
    *,
    fmt: FloatFormat | None = None,
    checked: bool = True,
) -> Construction:
    """Build `[a, b]` and say whether the inputs were valid, without warning.

    Validation runs on the raw inputs before any rounding. On failure the
    result holds the empty interval of the promoted format.
    """
    if b is _MISSING:
        if classify(a) is Kind.INTERVAL:
            return Construction(a if fmt is None else a.to(fmt))
        b = a

    require_endpoint(a)
    require_endpoint(b)
    target = fmt if fmt is not None else promote_format(a, b)

    if checked:
        diagnostic = diagnose(a, b)
        if diagnostic is not None:
            return Construction(empty_interval(target), diagnostic)

    return Construction(Interval(a, b, fmt=target, checked=False))


def interval(a: Any, b: Any = _MISSING, *, fmt: FloatFormat | None = None) -> Interval:
    """Checks whether `[a, b]` is a valid interval.

    If so an `Interval(a, b)` is returned; if not an `InvalidIntervalWarning`
    is emitted and the empty interval is returned. Validation happens
    regardless of the `IA_VALID` setting. `interval(a)` is `interval(a, a)`
    and `interval(x)` for an `Interval` is `x`.
    """
    return construct(a, b, fmt=fmt).report(stacklevel=2)


def force_interval(a: Any, b: Any, *, fmt: FloatFormat | None = None) -> Interval:
    """Make an interval even if `a > b`, by swapping the bounds."""
    if exceeds(a, b):
        return construct(b, a, fmt=fmt).report(stacklevel=2)
    return construct(a, b, fmt=fmt).report(stacklevel=2)
