"""Interval-building operators: `a..b` and `a ± b` as named functions.

Python has no `..` or `±` operators, so they are spelled `from_bounds` and
`from_center_radius` (alias `pm`). `I[a:b]` is slice sugar for `a..b`.

    >>> from_bounds(1, 2)
    Interval(lo=1.0, hi=2.0, fmt=float64)
    >>> pm(3, 1)
    Interval(lo=2.0, hi=4.0, fmt=float64)
    >>> I[0:pi].hi > 3.14159  # pi from outward.constants
    True
"""

import math
from typing import Any

from outward.interval import Interval, empty_interval, interval, require_endpoint
from outward.numeric import FloatFormat, Kind, promote_format
from outward.rounding import DOWN, UP, round_offset, round_to
from outward.validation import diagnose, report


def from_bounds(a: Any, b: Any, *, fmt: FloatFormat | None = None) -> Interval:
    """Return the tightest interval of the promoted format enclosing `[a, b]`.

    The lower bound is rounded down and the upper bound up, whatever the
    kind of each side, so narrowing conversions and symbolic constants are
    both enclosed. Invalid raw inputs give the empty interval and an
    `InvalidIntervalWarning`.
    """
    kinds = (require_endpoint(a), require_endpoint(b))
    target = fmt if fmt is not None else promote_format(a, b)

    diagnostic = diagnose(a, b)
    if diagnostic is not None:
        report(diagnostic, stacklevel=2)
        return empty_interval(target)

    if kinds == (Kind.SYMBOLIC, Kind.SYMBOLIC):
        return interval(a, b, fmt=target)
    return Interval(round_to(target, a, DOWN), round_to(target, b, UP), fmt=target)


def from_center_radius(a: Any, b: Any, *, fmt: FloatFormat | None = None) -> Interval:
    """Return `(a - b)..(a + b)` with both offsets rounded outward.

    For an `Interval` center this widens it: `(a.lo - b)..(a.hi + b)`. The
    empty interval stays empty.
    """
    require_endpoint(b)
    target = fmt if fmt is not None else promote_format(a, b)

    if isinstance(a, Interval):
        if a.is_empty:
            return a.to(target)
        lo = round_offset(target, a.lo, b, DOWN)
        hi = round_offset(target, a.hi, b, UP)
    else:
        require_endpoint(a)
        lo = round_offset(target, a, b, DOWN)
        hi = round_offset(target, a, b, UP)

    return from_bounds(lo, hi, fmt=target)


pm = from_center_radius


class _IntervalBuilder:
    """`I[a:b]` builds `a..b`; an omitted bound is infinite; `I[x]` is `interval(x)`."""

    def __getitem__(self, item: Any) -> Interval:
        if not isinstance(item, slice):
            return interval(item)
        if item.step is not None:
            raise TypeError(
                f"I[a:b] does not take a step, got I[{item.start}:{item.stop}:{item.step}]\n"
                f"Hint: use pm(center, radius) for a center/radius interval"
            )
        given = [bound for bound in (item.start, item.stop) if bound is not None]
        target = promote_format(*given)
        lo = -math.inf if item.start is None else item.start
        hi = math.inf if item.stop is None else item.stop
        return from_bounds(lo, hi, fmt=target)


I = _IntervalBuilder()
