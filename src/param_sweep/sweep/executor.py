"""Orchestrator responsible for running a Monte Carlo sweep end-to-end."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

from .cancellation import CancellationToken
from .classifier import classify
from .errors import ConfigurationError
from .parameter_space import Assignment, Interval, ParameterSpace
from .results_store import ResultSet, TrialOutcome
from .sampling import MonteCarloSampler

logger = logging.getLogger(__name__)

Evaluator = Callable[[Assignment], float]


class RunStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProgressReport:
    """Snapshot handed to progress callbacks."""

    iterations: int
    max_iterations: int
    ok_hits: int
    ng_hits: int

    @property
    def percent(self) -> float:
        if self.max_iterations <= 0:
            return 0.0
        return self.iterations / self.max_iterations * 100.0


ProgressCallback = Callable[[ProgressReport], None]


@dataclass
class SweepResult:
    """Terminal state of a run, read-only for reporting and export."""

    status: RunStatus
    seed: int
    interval: Interval
    parameter_space: ParameterSpace
    results: ResultSet
    duration_seconds: float = 0.0

    @property
    def cancelled(self) -> bool:
        return self.status is RunStatus.CANCELLED

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "seed": self.seed,
            "interval": self.interval.to_config(),
            "parameters": self.parameter_space.to_config(),
            "duration_seconds": self.duration_seconds,
            "results": self.results.to_dict(),
        }


def default_seed() -> int:
    """Time-derived seed for runs that did not pin one."""
    return time.time_ns()


@dataclass
class SweepExecutor:
    """Drive a sweep: sample assignments, evaluate them, classify, retain and count."""

    parameter_space: ParameterSpace
    evaluator: Evaluator
    interval: Interval
    max_iterations: int
    seed: int | None = None
    ok_capacity: int = 10
    ng_capacity: int = 10
    progress_every: int = 0
    callbacks: Iterable[ProgressCallback] = field(default_factory=tuple)
    cancellation: CancellationToken = field(default_factory=CancellationToken)

    def __post_init__(self) -> None:
        if not isinstance(self.max_iterations, int) or self.max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be a non-negative integer, got {self.max_iterations!r}")
        if not isinstance(self.progress_every, int) or self.progress_every < 0:
            raise ConfigurationError(f"progress_every must be a non-negative integer, got {self.progress_every!r}")
        if self.seed is None:
            self.seed = default_seed()
        self.callbacks = tuple(self.callbacks)

    def run(self) -> SweepResult:
        """
        Execute trials until ``max_iterations`` is reached or cancellation is requested.

        Returns:
            SweepResult with status COMPLETED or CANCELLED; both carry the
            outcomes and counters accumulated up to the stop point.

        Raises:
            ConfigurationError: on invalid parameter domains or when the evaluator
                reads an undeclared key. The run is aborted and no result is produced.
        """
        try:
            self.parameter_space.validate()
        except ConfigurationError as exc:
            logger.error("Sweep aborted before the first trial: %s", exc)
            raise

        results = ResultSet(ok_capacity=self.ok_capacity, ng_capacity=self.ng_capacity)
        logger.info(
            "Starting sweep seed=%d parameters=%d max_iterations=%d interval=[%g, %g]",
            self.seed,
            len(self.parameter_space),
            self.max_iterations,
            self.interval.lower,
            self.interval.upper,
        )

        started = time.perf_counter()
        candidates = iter(MonteCarloSampler(self.parameter_space, self.seed))
        while True:
            if results.total >= self.max_iterations:
                status = RunStatus.COMPLETED
                break
            if self.cancellation.cancelled:
                status = RunStatus.CANCELLED
                break
            try:
                assignment = next(candidates)
                outcome = self._evaluate(results.total + 1, assignment)
            except ConfigurationError as exc:
                logger.error("Sweep aborted at trial %d: %s", results.total + 1, exc)
                raise
            results.record(outcome)
            if self.progress_every and results.total % self.progress_every == 0:
                self._report_progress(results)

        duration = time.perf_counter() - started
        logger.info(
            "%s sweep after %d trials in %.2f seconds (OK=%d NG=%d)",
            status.value.capitalize(),
            results.total,
            duration,
            results.ok_hits,
            results.ng_hits,
        )
        return SweepResult(
            status=status,
            seed=self.seed,
            interval=self.interval,
            parameter_space=self.parameter_space,
            results=results,
            duration_seconds=duration,
        )

    def _evaluate(self, iteration: int, assignment: Assignment) -> TrialOutcome:
        output = float(self.evaluator(assignment))
        return TrialOutcome(
            iteration=iteration,
            assignment=assignment,
            output=output,
            classification=classify(output, self.interval),
        )

    def _report_progress(self, results: ResultSet) -> None:
        report = ProgressReport(
            iterations=results.total,
            max_iterations=self.max_iterations,
            ok_hits=results.ok_hits,
            ng_hits=results.ng_hits,
        )
        for callback in self.callbacks:
            callback(report)
