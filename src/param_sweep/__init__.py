"""Bounded Monte Carlo parameter sweep with OK/NG interval classification."""

from .config import OutputConfig, SweepConfig, load_config
from .sweep import (
    Assignment,
    CancellationToken,
    Classification,
    ConfigurationError,
    DomainError,
    Interval,
    ParameterSpace,
    ParameterSpec,
    RunStatus,
    SamplingMethod,
    SweepExecutor,
    SweepReporter,
    SweepResult,
    UndeclaredParameterError,
)

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "CancellationToken",
    "Classification",
    "ConfigurationError",
    "DomainError",
    "Interval",
    "OutputConfig",
    "ParameterSpace",
    "ParameterSpec",
    "RunStatus",
    "SamplingMethod",
    "SweepConfig",
    "SweepExecutor",
    "SweepReporter",
    "SweepResult",
    "UndeclaredParameterError",
    "load_config",
]
