import itertools
import math
import random

import numpy as np
import pytest

from param_sweep.sweep import (
    ConfigurationError,
    DomainError,
    MonteCarloSampler,
    ParameterSpace,
    ParameterSpec,
    SamplingMethod,
    sample_parameter,
)


# ----------------------------------------------------------------------------
# 1. Single draws
# ----------------------------------------------------------------------------

def test_linear_values_stay_inside_domain():
    spec = ParameterSpec("x", -3.0, 7.0, SamplingMethod.LINEAR)
    rng = random.Random(7)
    values = [sample_parameter(spec, rng) for _ in range(5000)]
    assert all(-3.0 <= v <= 7.0 for v in values)
    assert min(values) < -2.5 and max(values) > 6.5


def test_log_values_stay_inside_domain():
    spec = ParameterSpec("C", 1e-9, 47e-9, SamplingMethod.LOG)
    rng = random.Random(11)
    values = [sample_parameter(spec, rng) for _ in range(5000)]
    eps = 1e-12
    assert all(v > 0 for v in values)
    assert all(math.log(1e-9) - eps <= math.log(v) <= math.log(47e-9) + eps for v in values)


def test_linear_formula_matches_uniform_draw():
    spec = ParameterSpec("x", 2.0, 4.0)
    expected_u = random.Random(3).random()
    assert sample_parameter(spec, random.Random(3)) == pytest.approx(2.0 + expected_u * 2.0)


def test_log_formula_matches_uniform_draw():
    spec = ParameterSpec("f", 1e3, 1e5, SamplingMethod.LOG)
    u = random.Random(5).random()
    assert sample_parameter(spec, random.Random(5)) == pytest.approx(10 ** (3 + 2 * u))


def test_pinned_parameters_return_their_value():
    rng = random.Random(0)
    assert sample_parameter(ParameterSpec("k", 0.01, 0.01), rng) == 0.01
    assert sample_parameter(ParameterSpec("R", 10.0, 10.0, SamplingMethod.LOG), rng) == pytest.approx(10.0)


def test_log_with_zero_lower_bound_fails():
    spec = ParameterSpec("f", 0.0, 100.0, SamplingMethod.LOG)
    with pytest.raises(DomainError) as err:
        sample_parameter(spec, random.Random(0))
    assert err.value.key == "f"
    assert err.value.lower == 0.0 and err.value.upper == 100.0


def test_inverted_linear_domain_fails():
    with pytest.raises(DomainError):
        sample_parameter(ParameterSpec("x", 1.0, 0.0), random.Random(0))


# ----------------------------------------------------------------------------
# 2. Sampler streams
# ----------------------------------------------------------------------------

def test_log_sampling_is_uniform_per_decade():
    space = ParameterSpace.from_definitions([ParameterSpec("r", 1.0, 100.0, SamplingMethod.LOG)])
    sampler = MonteCarloSampler(space, seed=2024)
    exponents = np.log10([sampler.draw()["r"] for _ in range(10_000)])
    counts, _ = np.histogram(exponents, bins=4, range=(0.0, 2.0))
    assert counts.sum() == 10_000
    assert all(2250 <= count <= 2750 for count in counts)
    # linear sampling would put ~91% above 10
    assert 0.45 <= np.mean(exponents < 1.0) <= 0.55


def test_stream_consumes_one_draw_per_parameter_in_order():
    space = ParameterSpace.from_definitions(
        [ParameterSpec("a", 0.0, 1.0), ParameterSpec("pinned", 5.0, 5.0), ParameterSpec("b", 0.0, 1.0)]
    )
    first, second = itertools.islice(MonteCarloSampler(space, seed=99), 2)
    reference = random.Random(99)
    draws = [reference.random() for _ in range(6)]
    assert first["a"] == draws[0] and first["b"] == draws[2]
    assert second["a"] == draws[3] and second["b"] == draws[5]
    assert first["pinned"] == second["pinned"] == 5.0


def test_sampler_is_reproducible_per_seed():
    space = ParameterSpace.from_definitions(
        [ParameterSpec("x", 0.0, 1.0), ParameterSpec("f", 1e4, 1e5, SamplingMethod.LOG)]
    )

    def stream(seed):
        sampler = MonteCarloSampler(space, seed)
        values = [sampler.draw().to_dict() for _ in range(50)]
        assert sampler.draws == 50
        return values

    assert stream(42) == stream(42)
    assert stream(42) != stream(43)


def test_sampler_rejects_empty_space():
    with pytest.raises(ConfigurationError):
        MonteCarloSampler(ParameterSpace(), seed=1)
