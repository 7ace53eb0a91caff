"""Exceptions raised by the sweep engine and its configuration helpers."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Sweep configuration is missing, invalid, or inconsistent."""


class DomainError(ConfigurationError):
    """A parameter's sampling domain cannot be sampled with its method."""

    def __init__(self, key: str, lower: float, upper: float, reason: str) -> None:
        self.key = key
        self.lower = lower
        self.upper = upper
        self.reason = reason
        super().__init__(f"Parameter {key}: {reason} (got lower={lower!r} upper={upper!r})")


class UndeclaredParameterError(ConfigurationError, KeyError):
    """An evaluator read a key that is not part of the active parameter set."""

    def __init__(self, key: str, declared: tuple[str, ...]) -> None:
        self.key = key
        self.declared = declared
        super().__init__(
            f"Evaluator requested undeclared parameter {key!r}. Declared: {', '.join(declared) or '(none)'}"
        )

    # KeyError.__str__ would repr() the whole message
    def __str__(self) -> str:
        return str(self.args[0])
