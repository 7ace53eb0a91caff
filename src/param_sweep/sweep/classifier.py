"""OK/NG classification of evaluator outputs."""

from __future__ import annotations

import math
from enum import Enum

from .parameter_space import Interval


class Classification(str, Enum):
    OK = "OK"
    NG = "NG"


def classify(value: float, interval: Interval) -> Classification:
    """
    Classify one evaluator output against the acceptance interval.

    Non-finite outputs (NaN, +/-inf) are always NG, however wide the interval is.
    """
    if math.isfinite(value) and interval.contains(value):
        return Classification.OK
    return Classification.NG
