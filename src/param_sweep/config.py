"""Sweep configuration: YAML files mapped onto a dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from .evaluators import resolve_evaluator
from .sweep.errors import ConfigurationError
from .sweep.executor import default_seed
from .sweep.parameter_space import Interval, ParameterSpace

_TOP_LEVEL_KEYS = {
    "seed",
    "max_iterations",
    "progress_every",
    "ok_capacity",
    "ng_capacity",
    "max_print",
    "interval",
    "evaluator",
    "parameters",
    "output",
}
_OUTPUT_KEYS = {"xlsx", "ok_tsv", "ng_tsv", "summary_json"}


@dataclass
class OutputConfig:
    """Export destinations; ``None`` disables the export."""

    xlsx: Path | None = None
    ok_tsv: Path | None = None
    ng_tsv: Path | None = None
    summary_json: Path | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "OutputConfig":
        raw = dict(raw or {})
        unknown = sorted(set(raw) - _OUTPUT_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown output option(s): {', '.join(unknown)}")
        return cls(**{name: Path(value) if value else None for name, value in raw.items()})

    def to_dict(self) -> dict[str, str]:
        return {name: str(getattr(self, name)) for name in sorted(_OUTPUT_KEYS) if getattr(self, name)}


@dataclass
class SweepConfig:
    """Everything a run needs, as loaded from a configuration file."""

    parameters: ParameterSpace
    interval: Interval
    evaluator: Callable[[Mapping[str, float]], float]
    evaluator_ref: str = ""
    max_iterations: int = 10_000_000
    progress_every: int = 200_000
    ok_capacity: int = 10
    ng_capacity: int = 10
    max_print: int = 10
    seed: int | None = None
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self) -> None:
        for name in ("max_iterations", "progress_every", "ok_capacity", "ng_capacity", "max_print"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        if self.seed is not None and (not isinstance(self.seed, int) or isinstance(self.seed, bool)):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SweepConfig":
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"Configuration root must be a mapping, got {type(raw).__name__}")
        unknown = sorted(set(raw) - _TOP_LEVEL_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown configuration key(s): {', '.join(unknown)}")
        for required in ("parameters", "interval", "evaluator"):
            if required not in raw:
                raise ConfigurationError(f"Configuration is missing '{required}'")

        interval_raw = raw["interval"]
        if isinstance(interval_raw, (list, tuple)) and len(interval_raw) == 2:
            interval_raw = {"lower": interval_raw[0], "upper": interval_raw[1]}
        if not isinstance(interval_raw, Mapping):
            raise ConfigurationError("'interval' must be {lower, upper} or a two-element list")
        interval = Interval(lower=_number(interval_raw, "lower"), upper=_number(interval_raw, "upper"))

        evaluator_ref = raw["evaluator"]
        options = {
            name: raw[name]
            for name in ("max_iterations", "progress_every", "ok_capacity", "ng_capacity", "max_print", "seed")
            if raw.get(name) is not None
        }
        return cls(
            parameters=ParameterSpace.from_config(raw["parameters"]),
            interval=interval,
            evaluator=resolve_evaluator(evaluator_ref),
            evaluator_ref=evaluator_ref if isinstance(evaluator_ref, str) else getattr(evaluator_ref, "__name__", ""),
            output=OutputConfig.from_mapping(raw.get("output")),
            **options,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise back into the YAML layout accepted by :meth:`from_dict`."""
        payload: dict[str, Any] = {
            "seed": self.seed,
            "max_iterations": self.max_iterations,
            "progress_every": self.progress_every,
            "ok_capacity": self.ok_capacity,
            "ng_capacity": self.ng_capacity,
            "max_print": self.max_print,
            "interval": self.interval.to_config(),
            "evaluator": self.evaluator_ref,
            "parameters": self.parameters.to_config(),
        }
        output = self.output.to_dict()
        if output:
            payload["output"] = output
        return payload

    def with_overrides(self, **overrides: Any) -> "SweepConfig":
        """Return a copy with non-None overrides applied; output paths go by their option name."""
        overrides = {name: value for name, value in overrides.items() if value is not None}
        output_overrides = {name: Path(overrides.pop(name)) for name in list(overrides) if name in _OUTPUT_KEYS}
        output = replace(self.output, **output_overrides) if output_overrides else self.output
        return replace(self, output=output, **overrides)

    def resolve_seed(self) -> int:
        return self.seed if self.seed is not None else default_seed()


def load_config(path: str | Path) -> SweepConfig:
    """Read a YAML configuration file."""
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration '{config_path}': {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{config_path}': {exc}") from exc
    return SweepConfig.from_dict(raw or {})


def _number(raw: Mapping[str, Any], name: str) -> float:
    if name not in raw:
        raise ConfigurationError(f"'interval' is missing '{name}'")
    try:
        return float(raw[name])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"'interval.{name}' must be a number, got {raw[name]!r}") from exc
