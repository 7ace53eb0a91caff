"""Monte Carlo sampling with reproducible draws via seed."""

from __future__ import annotations

import math
import random
from typing import Iterator

from .errors import ConfigurationError
from .parameter_space import Assignment, ParameterSpace, ParameterSpec, SamplingMethod


def sample_parameter(spec: ParameterSpec, rng: random.Random) -> float:
    """
    Draw one value for ``spec`` from the shared stream ``rng``.

    Linear domains are sampled uniformly. Log domains are sampled uniformly in
    ``ln(value)``, which gives every decade the same density. Exactly one
    ``rng.random()`` draw is consumed per call, pinned domains included.

    Raises:
        DomainError: if the bounds are not finite, ``upper < lower`` or a log
            domain has a non-positive bound.
    """
    spec.check_domain()
    u = rng.random()
    if spec.method is SamplingMethod.LINEAR:
        return spec.lower + u * (spec.upper - spec.lower)
    ln_lower = math.log(spec.lower)
    ln_upper = math.log(spec.upper)
    return math.exp(ln_lower + u * (ln_upper - ln_lower))


class MonteCarloSampler:
    """Endless stream of independent assignments drawn from one seeded generator.

    Parameters are sampled in configured order, so a seed fixes the whole
    sequence of assignments.
    """

    def __init__(self, space: ParameterSpace, seed: int) -> None:
        if not len(space):
            raise ConfigurationError("MonteCarloSampler requires at least one parameter")
        self.space = space
        self.seed = seed
        self.draws = 0
        self._rng = random.Random(seed)

    def draw(self) -> Assignment:
        values = {spec.key: sample_parameter(spec, self._rng) for spec in self.space}
        self.draws += 1
        return Assignment(values)

    def __iter__(self) -> Iterator[Assignment]:
        while True:
            yield self.draw()
