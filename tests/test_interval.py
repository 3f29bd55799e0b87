import math
import warnings
from dataclasses import FrozenInstanceError
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from outward.config import get_settings
from outward.constants import pi
from outward.interval import (
    ComplexInterval,
    Interval,
    atomic,
    empty_interval,
    entire_interval,
)
from outward.numeric import FLOAT32, FLOAT64
from outward.validation import InvalidIntervalWarning

inf = math.inf


def above(x: float) -> float:
    return math.nextafter(x, inf)


def test_exact_endpoints_are_stored_as_is() -> None:
    x = Interval(1.0, 2.0)

    assert (x.lo, x.hi) == (1.0, 2.0)
    assert x.fmt == FLOAT64


def test_integer_endpoints_become_floats() -> None:
    x = Interval(1, 2)

    assert x == Interval(1.0, 2.0)
    assert type(x.lo) is float and type(x.hi) is float


def test_negative_zero_is_normalized() -> None:
    x = Interval(-0.0, 1.0)
    y = Interval(-1.0, -0.0)

    assert math.copysign(1.0, x.lo) == 1.0
    assert math.copysign(1.0, y.hi) == 1.0
    assert x == Interval(0.0, 1.0)
    assert hash(x) == hash(Interval(0.0, 1.0))


def test_equal_intervals_hash_equal_across_formats() -> None:
    narrow = Interval(1, 2, fmt=FLOAT32)
    wide = Interval(1, 2)

    assert narrow == wide
    assert hash(narrow) == hash(wide)


def test_invalid_bounds_become_empty_when_checked() -> None:
    with pytest.warns(InvalidIntervalWarning, match="Invalid input, empty interval is returned"):
        x = Interval(2.0, 1.0, checked=True)

    assert x.is_empty
    assert x == Interval(inf, -inf)


def test_nan_bound_becomes_empty_when_checked() -> None:
    with pytest.warns(InvalidIntervalWarning):
        x = Interval(math.nan, 1.0, checked=True)

    assert x.is_empty


def test_unchecked_construction_trusts_the_caller() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", InvalidIntervalWarning)
        x = Interval(2.0, 1.0, checked=False)

    assert (x.lo, x.hi) == (2.0, 1.0)


def test_checked_construction_validates_raw_bounds() -> None:
    # Both bounds round to 1.0, but the raw pair is reversed.
    with pytest.warns(InvalidIntervalWarning):
        x = Interval(Fraction(10**20 + 1, 10**20), 1, checked=True)

    assert x.is_empty


def test_checked_construction_accepts_close_raw_bounds() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", InvalidIntervalWarning)
        x = Interval(1, Fraction(10**20 + 1, 10**20), checked=True)

    assert (x.lo, x.hi) == (1.0, above(1.0))


def test_default_checking_follows_ia_valid(monkeypatch) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", InvalidIntervalWarning)
        assert Interval(2.0, 1.0).lo == 2.0

    monkeypatch.setenv("IA_VALID", "1")
    get_settings.cache_clear()

    with pytest.warns(InvalidIntervalWarning):
        assert Interval(2.0, 1.0).is_empty


def test_empty_sentinel_is_never_rejected() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", InvalidIntervalWarning)
        x = Interval(inf, -inf, checked=True)

    assert x.is_empty
    assert str(x) == "∅"


def test_symbolic_endpoints_round_outward() -> None:
    assert Interval(pi, 4).lo == math.pi
    assert Interval(3, pi).hi == above(math.pi)

    enclosure = Interval.of(pi)
    assert (enclosure.lo, enclosure.hi) == (math.pi, above(math.pi))
    assert not enclosure.is_thin


def test_inexact_exact_inputs_round_outward() -> None:
    third = Interval(Fraction(1, 3), Fraction(1, 3))
    assert (third.lo, third.hi) == (1 / 3, above(1 / 3))

    tenth = Interval(Decimal("0.1"), Decimal("0.1"))
    assert tenth.lo < 0.1 == tenth.hi

    big = Interval(2**53 + 1, 2**53 + 1)
    assert (big.lo, big.hi) == (2.0**53, 2.0**53 + 2)


def test_format_promotion() -> None:
    assert Interval(np.float32(1.5), np.float32(2)).fmt == FLOAT32
    assert Interval(1, np.float32(2)).fmt == FLOAT32
    assert Interval(np.float32(1), 2.0).fmt == FLOAT64
    assert Interval(1, 2).fmt == FLOAT64
    assert Interval(Fraction(1, 2), Decimal(1)).fmt == FLOAT64


def test_symbolic_endpoint_adopts_narrow_format() -> None:
    x = Interval(pi, np.float32(4))

    assert x.fmt == FLOAT32
    assert x.lo == float(np.nextafter(np.float32(math.pi), np.float32(0)))


def test_explicit_format_narrows_outward() -> None:
    x = Interval(0.1, 0.1, fmt=FLOAT32)

    assert x.lo < 0.1 < x.hi
    assert x.hi == float(np.float32(0.1))


def test_of_is_identity_on_intervals() -> None:
    x = Interval(1, 2)

    assert Interval.of(x) is x
    assert Interval.of(Interval.of(x)) == x


def test_of_single_values_and_tuples() -> None:
    assert Interval.of(2.5) == Interval(2.5, 2.5)
    assert Interval.of(2.5).is_thin
    assert Interval.of((1, 2)) == Interval(1.0, 2.0)
    assert Interval.of(1, 2) == Interval(1.0, 2.0)


def test_of_complex_splits_parts() -> None:
    z = Interval.of(1 + 2j)

    assert z == ComplexInterval(real=Interval(1, 1), imag=Interval(2, 2))
    assert str(z) == "[1.0, 1.0] + [2.0, 2.0]im"


def test_of_with_format_reinterprets() -> None:
    x = Interval(0.1, 0.2)
    narrow = Interval.of(x, fmt=FLOAT32)

    assert narrow.fmt == FLOAT32
    assert narrow.lo <= 0.1 and narrow.hi >= 0.2
    assert narrow == x.to(FLOAT32)


def test_to_same_format_is_identity() -> None:
    x = Interval(0.1, 0.2)
    assert x.to(FLOAT64) is x


def test_to_keeps_empty_empty() -> None:
    assert empty_interval().to(FLOAT32).is_empty


@pytest.mark.parametrize(
    "args",
    [(), (1, 2, 3)],
)
def test_of_rejects_wrong_arity(args) -> None:
    with pytest.raises(TypeError, match="one or two arguments"):
        Interval.of(*args)


def test_of_rejects_long_tuples() -> None:
    with pytest.raises(TypeError, match="pair"):
        Interval.of((1, 2, 3))


def test_constructor_rejects_non_real_endpoints() -> None:
    with pytest.raises(TypeError, match="Cannot build an interval"):
        Interval("1", 2)

    with pytest.raises(TypeError, match="Interval.of"):
        Interval(1 + 2j, 3)


def test_intervals_are_frozen() -> None:
    x = Interval(1, 2)
    with pytest.raises(FrozenInstanceError):
        x.lo = 0.0  # type: ignore[misc]


def test_special_intervals_and_predicates() -> None:
    empty = empty_interval()
    entire = entire_interval(FLOAT32)

    assert empty.is_empty and not empty.is_unbounded and not empty.is_thin
    assert entire.is_entire and entire.is_unbounded
    assert entire.fmt == FLOAT32
    assert Interval(-inf, 0).is_unbounded
    assert not Interval(1, 2).is_unbounded
    assert Interval(1, 1).is_thin


def test_atomic_is_tightest_enclosure() -> None:
    x = atomic(FLOAT64, Fraction(1, 3))
    assert (x.lo, x.hi) == (1 / 3, above(1 / 3))

    assert atomic(FLOAT64, 0.5) == Interval(0.5, 0.5)
    assert atomic(FLOAT32, Interval(0.1, 0.1)).fmt == FLOAT32


def test_display() -> None:
    assert str(Interval(1, 2)) == "[1.0, 2.0]"
    assert repr(Interval(1, 2)) == "Interval(lo=1.0, hi=2.0, fmt=float64)"
