"""Bounded retention of trial outcomes plus running counters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List

from .classifier import Classification
from .errors import ConfigurationError
from .parameter_space import Assignment


@dataclass(frozen=True)
class TrialOutcome:
    """Outcome of a single trial."""

    iteration: int
    assignment: Assignment
    output: float
    classification: Classification

    @property
    def ok(self) -> bool:
        return self.classification is Classification.OK

    def to_dict(self) -> dict[str, Any]:
        """Convert the outcome into a JSON serialisable dictionary."""
        return {
            "iteration": self.iteration,
            "parameters": self.assignment.to_dict(),
            "output": self.output,
            "classification": self.classification.value,
        }


class ResultSet:
    """
    OK and NG samples with fixed capacities, and hit counters.

    Counters keep increasing after a list is full: only retention stops. The
    engine is the single writer; consumers read it once the run has ended.
    """

    def __init__(self, *, ok_capacity: int = 10, ng_capacity: int = 10) -> None:
        for name, value in (("ok_capacity", ok_capacity), ("ng_capacity", ng_capacity)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        self.ok_capacity = ok_capacity
        self.ng_capacity = ng_capacity
        self.total = 0
        self.ok_hits = 0
        self.ng_hits = 0
        self._ok: List[TrialOutcome] = []
        self._ng: List[TrialOutcome] = []

    def record(self, outcome: TrialOutcome) -> bool:
        """Count ``outcome`` and retain it while its list has room; return True if retained."""
        if outcome.ok:
            self.ok_hits += 1
            bucket, capacity = self._ok, self.ok_capacity
        else:
            self.ng_hits += 1
            bucket, capacity = self._ng, self.ng_capacity
        self.total += 1
        if len(bucket) < capacity:
            bucket.append(outcome)
            return True
        return False

    @property
    def ok_outcomes(self) -> tuple[TrialOutcome, ...]:
        return tuple(self._ok)

    @property
    def ng_outcomes(self) -> tuple[TrialOutcome, ...]:
        return tuple(self._ng)

    def outcomes(self, kind: Classification | str) -> tuple[TrialOutcome, ...]:
        kind = Classification(kind)
        return self.ok_outcomes if kind is Classification.OK else self.ng_outcomes

    @property
    def ok_full(self) -> bool:
        return len(self._ok) >= self.ok_capacity

    @property
    def ng_full(self) -> bool:
        return len(self._ng) >= self.ng_capacity

    @property
    def ok_ratio(self) -> float:
        return self.ok_hits / self.total if self.total else 0.0

    @property
    def ng_ratio(self) -> float:
        return self.ng_hits / self.total if self.total else 0.0

    def __iter__(self) -> Iterator[TrialOutcome]:
        return iter(self._ok + self._ng)

    def __len__(self) -> int:
        return len(self._ok) + len(self._ng)

    def counters(self) -> dict[str, int]:
        return {"total": self.total, "ok_hits": self.ok_hits, "ng_hits": self.ng_hits}

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.counters(),
            "ok_capacity": self.ok_capacity,
            "ng_capacity": self.ng_capacity,
            "ok": [item.to_dict() for item in self._ok],
            "ng": [item.to_dict() for item in self._ng],
        }

    def __repr__(self) -> str:
        return (
            f"ResultSet(total={self.total}, ok_hits={self.ok_hits}, ng_hits={self.ng_hits}, "
            f"ok={len(self._ok)}/{self.ok_capacity}, ng={len(self._ng)}/{self.ng_capacity})"
        )
