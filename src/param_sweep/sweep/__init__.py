"""Monte Carlo sweep engine: sampling, classification, bounded retention."""

from .cancellation import CancellationToken, interrupt_on_sigint
from .classifier import Classification, classify
from .errors import ConfigurationError, DomainError, UndeclaredParameterError
from .executor import ProgressReport, RunStatus, SweepExecutor, SweepResult
from .parameter_space import Assignment, Interval, ParameterSpace, ParameterSpec, SamplingMethod
from .reporting import SweepReporter
from .results_store import ResultSet, TrialOutcome
from .sampling import MonteCarloSampler, sample_parameter

__all__ = [
    "Assignment",
    "CancellationToken",
    "Classification",
    "ConfigurationError",
    "DomainError",
    "Interval",
    "MonteCarloSampler",
    "ParameterSpace",
    "ParameterSpec",
    "ProgressReport",
    "ResultSet",
    "RunStatus",
    "SamplingMethod",
    "SweepExecutor",
    "SweepReporter",
    "SweepResult",
    "TrialOutcome",
    "UndeclaredParameterError",
    "classify",
    "interrupt_on_sigint",
    "sample_parameter",
]
