"""
Wireless power transfer evaluators.

Series-series (SS) compensated two-coil link: primary R1, L1, C1 in series,
secondary R2, L2, C2 in series, coupling factor k, drive frequency f in Hz.
"""

import math
from typing import Mapping

import numpy as np

from .evaluator_registry import EvaluatorRegistry


@EvaluatorRegistry.register("wpt_ss_power_ratio")
def wpt_ss_power_ratio(x: Mapping[str, float]) -> float:
    """
    Ratio of power delivered to the secondary load against the maximum available power.

    Reads keys k, f, R1, R2, L1, L2, C1, C2. Arithmetic follows IEEE rules, so a
    zero f, C1 or C2 gives an infinite reactance instead of raising; the result
    is then NaN or a finite ratio. Returns NaN when the denominator vanishes.
    """
    k = np.float64(x["k"])
    f_hz = np.float64(x["f"])
    r1 = np.float64(x["R1"])
    r2 = np.float64(x["R2"])
    l1 = np.float64(x["L1"])
    l2 = np.float64(x["L2"])
    c1 = np.float64(x["C1"])
    c2 = np.float64(x["C2"])

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        w = 2 * np.pi * f_hz
        x1 = w * l1 - 1.0 / (w * c1)
        x2 = w * l2 - 1.0 / (w * c2)

        a = r1 * r2 + x1 * x2 - w * w * k * k * l1 * l2
        b = r1 * x2 - r2 * x1

        num = 4.0 * k * k * r1 * r2 * l1 * l2 * w * w
        den = a * a + b * b + num
        if den == 0:
            return math.nan
        return float(num / den)


@EvaluatorRegistry.register("identity_x")
def identity_x(x: Mapping[str, float]) -> float:
    return x["x"]
