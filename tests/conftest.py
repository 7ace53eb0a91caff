"""
Shared fixtures for the sweep tests.
"""

from __future__ import annotations

import math
from typing import Callable

import pytest

from param_sweep.sweep import (
    Interval,
    ParameterSpace,
    ParameterSpec,
    SamplingMethod,
    SweepExecutor,
)


@pytest.fixture()
def unit_space() -> ParameterSpace:
    """One linear parameter ``x`` over [0, 1]."""
    return ParameterSpace.from_definitions([ParameterSpec("x", 0.0, 1.0, SamplingMethod.LINEAR)])


@pytest.fixture()
def mixed_space() -> ParameterSpace:
    """Linear, log and pinned parameters with display metadata."""
    return ParameterSpace.from_definitions(
        [
            ParameterSpec("k", 0.01, 0.02, SamplingMethod.LINEAR),
            ParameterSpec("f", 1e4, 1e5, SamplingMethod.LOG, label="f [kHz]", display_scale=1e-3),
            ParameterSpec("R1", 1.0, 1.0, SamplingMethod.LOG, label="R1 [ohm]"),
        ]
    )


@pytest.fixture()
def upper_half() -> Interval:
    return Interval(0.5, 1.0)


@pytest.fixture()
def make_executor(unit_space, upper_half) -> Callable[..., SweepExecutor]:
    """Factory for executors over ``unit_space`` with ``f(x) = x`` unless overridden."""

    def _make(**overrides) -> SweepExecutor:
        options = dict(
            parameter_space=unit_space,
            evaluator=lambda a: a["x"],
            interval=upper_half,
            max_iterations=100,
            seed=1234,
            ok_capacity=10,
            ng_capacity=10,
        )
        options.update(overrides)
        return SweepExecutor(**options)

    return _make


@pytest.fixture()
def always_nan() -> Callable:
    return lambda assignment: math.nan
