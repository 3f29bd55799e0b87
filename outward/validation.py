"""Endpoint validity, signed-zero normalization and construction diagnostics.

Malformed bounds are never raised from a constructor. They are described by
a `Diagnostic` which the caller either reports on the warnings channel
(the default) or escalates with `InvalidIntervalError`.
"""

import math
import warnings
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from outward.constants import SymbolicConstant

INVALID_INPUT_MESSAGE = "Invalid input, empty interval is returned"


class Reason(Enum):
    """Why a pair of endpoints does not form an interval."""

    NAN_ENDPOINT = "NaN endpoint"
    REVERSED_BOUNDS = "lower bound exceeds upper bound"
    UNBOUNDED_ENDPOINT = "lower bound is +inf or upper bound is -inf"


@dataclass(frozen=True)
class Diagnostic:
    """A rejected construction: the reason plus the offending inputs."""

    kind: ClassVar[str] = "MalformedBounds"

    reason: Reason
    lo: Any
    hi: Any

    @property
    def message(self) -> str:
        return f"{INVALID_INPUT_MESSAGE} ({self.reason.value}: lo={self.lo!r}, hi={self.hi!r})"


class InvalidIntervalWarning(UserWarning):
    """Emitted when invalid bounds are replaced by the empty interval."""


class InvalidIntervalError(ValueError):
    """Raised by `Construction.unwrap()` for a rejected construction."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic: Diagnostic = diagnostic


def _is_nan(value: Any) -> bool:
    if isinstance(value, SymbolicConstant):
        return False
    if isinstance(value, Decimal):
        return value.is_nan()
    return value != value


def exceeds(a: Any, b: Any) -> bool:
    """Exact `a > b` across all endpoint kinds, symbolic constants included."""
    if isinstance(b, SymbolicConstant):
        return b < a
    return bool(a > b)


def diagnose(a: Any, b: Any) -> Diagnostic | None:
    """Return why `(a, b)` is not a valid interval, or None if it is."""
    if _is_nan(a) or _is_nan(b):
        return Diagnostic(Reason.NAN_ENDPOINT, a, b)
    if exceeds(a, b):
        return Diagnostic(Reason.REVERSED_BOUNDS, a, b)
    if a == math.inf or b == -math.inf:
        return Diagnostic(Reason.UNBOUNDED_ENDPOINT, a, b)
    return None


def is_valid_interval(a: Any, b: Any) -> bool:
    """Check if `(a, b)` constitute a valid interval.

    False if either value is NaN, if `a > b`, or if `a` is +inf or `b` is
    -inf; True otherwise.
    """
    return diagnose(a, b) is None


def normalize_zero(value: Any) -> Any:
    """Return positive zero for a negative zero, anything else unchanged."""
    if isinstance(value, SymbolicConstant) or value != 0:
        return value
    return abs(value) if math.copysign(1.0, value) < 0 else value


def report(diagnostic: Diagnostic, stacklevel: int = 1) -> None:
    """Emit `diagnostic` on the warnings channel.

    `stacklevel` counts from the caller of this function, as in `warnings.warn`.
    """
    warnings.warn(diagnostic.message, InvalidIntervalWarning, stacklevel=stacklevel + 1)
