from .config import Settings, get_settings
from .constants import SymbolicConstant, catalan, e, euler_gamma, golden, log2, pi, sqrt2
from .interval import (
    ComplexInterval,
    Construction,
    Interval,
    atomic,
    construct,
    empty_interval,
    entire_interval,
    force_interval,
    interval,
)
from .numeric import BFLOAT16, FLOAT16, FLOAT32, FLOAT64, FloatFormat, Kind, classify
from .rounding import DOWN, UP, RoundingDirection, register_source, round_to
from .syntax import I, from_bounds, from_center_radius, pm
from .validation import (
    Diagnostic,
    InvalidIntervalError,
    InvalidIntervalWarning,
    Reason,
    diagnose,
    is_valid_interval,
    normalize_zero,
)

__all__ = [
    "Interval",
    "ComplexInterval",
    "Construction",
    "interval",
    "construct",
    "force_interval",
    "atomic",
    "empty_interval",
    "entire_interval",
    "from_bounds",
    "from_center_radius",
    "pm",
    "I",
    "is_valid_interval",
    "normalize_zero",
    "diagnose",
    "Diagnostic",
    "Reason",
    "InvalidIntervalWarning",
    "InvalidIntervalError",
    "round_to",
    "register_source",
    "RoundingDirection",
    "DOWN",
    "UP",
    "FloatFormat",
    "FLOAT16",
    "BFLOAT16",
    "FLOAT32",
    "FLOAT64",
    "Kind",
    "classify",
    "SymbolicConstant",
    "pi",
    "e",
    "euler_gamma",
    "golden",
    "catalan",
    "log2",
    "sqrt2",
    "Settings",
    "get_settings",
]
