"""Symbolic (irrational) constants with correctly rounded enclosures.

A `SymbolicConstant` is never stored as a float. Each time it is needed it is
evaluated by MPFR in the caller's context, so converting it into a format
with a given rounding direction yields the adjacent representable value on
the requested side.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Callable

import gmpy2
from typing_extensions import override

from outward.numeric import FloatFormat, Kind, classify
from outward.rounding import DOWN, UP, RoundingDirection, enclose, register_source

# Working precisions tried in turn when ordering a constant against a value.
_COMPARISON_PRECISIONS = (64, 256, 1024, 4096)


class SymbolicConstant(ABC):
    """An exact real number known only through correctly rounded evaluation.

    Subclasses implement `_evaluate`, which must return the constant rounded
    according to the active gmpy2 context (precision, exponent range and
    rounding mode).
    """

    def __init__(self, name: str, symbol: str):
        self.name: str = name
        self.symbol: str = symbol

    @abstractmethod
    def _evaluate(self) -> "gmpy2.mpfr":
        pass

    def enclose(self, precision: int, direction: RoundingDirection) -> "gmpy2.mpfr":
        """Return the constant at `precision` bits rounded toward `direction`."""
        with gmpy2.context(precision=precision, round=direction.mode):
            return self._evaluate()

    def round_to(self, fmt: FloatFormat, direction: RoundingDirection) -> float:
        """Return the adjacent value of `fmt` on the `direction` side."""
        with fmt.context(direction):
            return float(self._evaluate())

    def _order(self, other: Any) -> Any:
        """Return -1, 0 or 1, None when `other` is NaN, or NotImplemented."""
        if other is self:
            return 0
        if isinstance(other, SymbolicConstant):
            for precision in _COMPARISON_PRECISIONS:
                if self.enclose(precision, UP) < other.enclose(precision, DOWN):
                    return -1
                if self.enclose(precision, DOWN) > other.enclose(precision, UP):
                    return 1
            return 0

        try:
            kind = classify(other)
        except TypeError:
            return NotImplemented
        if kind not in (Kind.INTEGER, Kind.REAL):
            return NotImplemented

        bound = enclose(other, DOWN, _COMPARISON_PRECISIONS[0])
        if isinstance(bound, float):
            if math.isnan(bound):
                return None
            return -1 if bound > 0 else 1

        for precision in _COMPARISON_PRECISIONS:
            if self.enclose(precision, UP) < bound:
                return -1
            if self.enclose(precision, DOWN) > bound:
                return 1
        # Indistinguishable at every working precision: a rational constant.
        return 0

    def __lt__(self, other: Any) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order < 0

    def __le__(self, other: Any) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order <= 0

    def __gt__(self, other: Any) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order > 0

    def __ge__(self, other: Any) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order >= 0

    @override
    def __eq__(self, other: Any) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order == 0

    @override
    def __hash__(self) -> int:
        return hash(float(self))

    def __float__(self) -> float:
        with gmpy2.context(gmpy2.ieee(64)):
            return float(self._evaluate())

    @override
    def __repr__(self) -> str:
        return self.symbol

    @override
    def __str__(self) -> str:
        return self.symbol


class MPFRConstant(SymbolicConstant):
    """A constant computed by a zero-argument gmpy2 function."""

    def __init__(self, name: str, symbol: str, function: Callable[[], "gmpy2.mpfr"]):
        super().__init__(name, symbol)
        self._function: Callable[[], "gmpy2.mpfr"] = function

    @override
    def _evaluate(self) -> "gmpy2.mpfr":
        return self._function()


def _golden() -> "gmpy2.mpfr":
    # 1 + sqrt(5) stays in the binade of sqrt(5), so only the sqrt rounds.
    return (1 + gmpy2.sqrt(5)) / 2


pi = MPFRConstant("pi", "π", gmpy2.const_pi)
e = MPFRConstant("e", "ℯ", lambda: gmpy2.exp(1))
euler_gamma = MPFRConstant("eulergamma", "γ", gmpy2.const_euler)
golden = MPFRConstant("golden", "φ", _golden)
catalan = MPFRConstant("catalan", "catalan", gmpy2.const_catalan)
log2 = MPFRConstant("log2", "log(2)", gmpy2.const_log2)
sqrt2 = MPFRConstant("sqrt2", "√2", lambda: gmpy2.sqrt(2))


@register_source(SymbolicConstant)
def _(value: SymbolicConstant, fmt: FloatFormat, direction: RoundingDirection) -> float:
    return value.round_to(fmt, direction)
