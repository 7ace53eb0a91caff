"""Parameter space definitions and helpers for Monte Carlo sweeps."""

from __future__ import annotations

import math
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Sequence

from .errors import ConfigurationError, DomainError, UndeclaredParameterError


class SamplingMethod(str, Enum):
    """How a parameter value is drawn from its domain."""

    LINEAR = "linear"
    LOG = "log"

    @classmethod
    def parse(cls, value: "SamplingMethod | str") -> "SamplingMethod":
        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower()
        aliases = {"lin": cls.LINEAR, "logarithmic": cls.LOG}
        if normalised in aliases:
            return aliases[normalised]
        try:
            return cls(normalised)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ConfigurationError(f"Unknown sampling method {value!r}. Allowed: {allowed}") from None


@dataclass(frozen=True)
class ParameterSpec:
    """Immutable description of a single swept parameter.

    ``label`` and ``display_scale`` are presentation metadata only: the engine
    always works in native units.
    """

    key: str
    lower: float
    upper: float
    method: SamplingMethod = SamplingMethod.LINEAR
    label: str = ""
    display_scale: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", SamplingMethod.parse(self.method))
        object.__setattr__(self, "lower", float(self.lower))
        object.__setattr__(self, "upper", float(self.upper))
        object.__setattr__(self, "display_scale", float(self.display_scale))
        if not self.label:
            object.__setattr__(self, "label", self.key)

    @property
    def is_pinned(self) -> bool:
        """Return True when the domain collapses to a single value."""
        return self.lower == self.upper

    def check_domain(self) -> None:
        """
        Verify that the domain can be sampled with the configured method.

        Raises:
            DomainError: if a bound is not finite, ``upper < lower``, the linear
                span overflows or a log domain has a non-positive bound.
        """
        if not (math.isfinite(self.lower) and math.isfinite(self.upper)):
            raise DomainError(self.key, self.lower, self.upper, "bounds must be finite")
        if self.upper < self.lower:
            raise DomainError(self.key, self.lower, self.upper, "upper < lower")
        if self.method is SamplingMethod.LINEAR and not math.isfinite(self.upper - self.lower):
            raise DomainError(self.key, self.lower, self.upper, "upper - lower overflows")
        if self.method is SamplingMethod.LOG and (self.lower <= 0 or self.upper <= 0):
            raise DomainError(self.key, self.lower, self.upper, "log sampling requires lower > 0 and upper > 0")

    def display_value(self, value: float) -> float:
        return value * self.display_scale

    def to_config(self) -> dict[str, Any]:
        item: dict[str, Any] = {
            "key": self.key,
            "lower": self.lower,
            "upper": self.upper,
            "method": self.method.value,
        }
        if self.label != self.key:
            item["label"] = self.label
        if self.display_scale != 1.0:
            item["display_scale"] = self.display_scale
        return item

    @classmethod
    def from_config(cls, raw: Mapping[str, Any], *, key: str | None = None) -> "ParameterSpec":
        """Build a spec from a YAML/JSON style mapping."""
        if not isinstance(raw, MappingABC):
            raise ConfigurationError(f"Parameter {key or '?'} must be a mapping, got {type(raw).__name__}")
        payload = dict(raw)
        name = key if key is not None else payload.pop("key", None)
        payload.pop("key", None)
        if name is None:
            raise ConfigurationError("Parameter definition is missing 'key'")
        unknown = sorted(set(payload) - {"lower", "upper", "method", "label", "display_scale"})
        if unknown:
            raise ConfigurationError(f"Parameter {name}: unknown field(s) {', '.join(unknown)}")
        missing = [bound for bound in ("lower", "upper") if bound not in payload]
        if missing:
            raise ConfigurationError(f"Parameter {name}: missing {', '.join(missing)}")
        try:
            return cls(
                key=str(name),
                lower=float(payload["lower"]),
                upper=float(payload["upper"]),
                method=payload.get("method", SamplingMethod.LINEAR),
                label=str(payload.get("label") or ""),
                display_scale=float(payload.get("display_scale", 1.0)),
            )
        except (TypeError, ValueError) as exc:
            if isinstance(exc, ConfigurationError):
                raise
            raise ConfigurationError(f"Parameter {name}: {exc}") from exc


@dataclass(frozen=True)
class Interval:
    """Closed acceptance band ``lower <= y <= upper``."""

    lower: float
    upper: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "lower", float(self.lower))
        object.__setattr__(self, "upper", float(self.upper))
        if math.isnan(self.lower) or math.isnan(self.upper):
            raise ConfigurationError("Interval bounds must not be NaN")
        if self.upper < self.lower:
            raise ConfigurationError(f"Interval has upper < lower ({self.lower!r} > {self.upper!r})")

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def to_config(self) -> dict[str, float]:
        return {"lower": self.lower, "upper": self.upper}


class Assignment(Mapping[str, float]):
    """
    Read-only mapping of parameter key to the value sampled for one trial.

    Reading a key outside the declared parameter set raises
    :class:`UndeclaredParameterError` instead of returning a default, including
    through ``get``.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, float]) -> None:
        self._values: Dict[str, float] = dict(values)

    def __getitem__(self, key: str) -> float:
        try:
            return self._values[key]
        except KeyError:
            raise UndeclaredParameterError(key, tuple(self._values)) from None

    def get(self, key: str, default: Any = None) -> float:  # type: ignore[override]
        return self[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Assignment):
            return self._values == other._values
        if isinstance(other, MappingABC):
            return self._values == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Assignment({self._values!r})"

    def to_dict(self) -> dict[str, float]:
        return dict(self._values)


@dataclass
class ParameterSpace:
    """Ordered container for the parameters swept in one run."""

    parameters: Dict[str, ParameterSpec] = field(default_factory=dict)

    @classmethod
    def from_definitions(cls, definitions: Sequence[ParameterSpec]) -> "ParameterSpace":
        """Construct a parameter space from an ordered sequence of specs."""
        parameters: Dict[str, ParameterSpec] = {}
        for definition in definitions:
            if not definition.key:
                raise ConfigurationError("Parameter key is empty")
            if definition.key in parameters:
                raise ConfigurationError(f"Duplicate parameter key: {definition.key}")
            parameters[definition.key] = definition
        return cls(parameters=parameters)

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> "ParameterSpace":
        """
        Load a parameter space from a YAML/JSON style structure.

        Accepts either a list of mappings carrying ``key`` or a mapping of
        ``key -> definition``. Order is preserved in both cases and becomes the
        sampling order.
        """
        definitions: list[ParameterSpec] = []
        if isinstance(config, MappingABC):
            for name, raw in config.items():
                definitions.append(ParameterSpec.from_config(raw, key=str(name)))
        elif isinstance(config, (list, tuple)):
            for raw in config:
                definitions.append(ParameterSpec.from_config(raw))
        else:
            raise ConfigurationError(f"'parameters' must be a list or mapping, got {type(config).__name__}")
        return cls.from_definitions(definitions)

    def to_config(self) -> list[dict[str, Any]]:
        """Serialise the parameter space back into a list of mappings."""
        return [spec.to_config() for spec in self.parameters.values()]

    def validate(self) -> None:
        """Check every domain before a run starts."""
        if not self.parameters:
            raise ConfigurationError("At least one parameter must be configured")
        for spec in self.parameters.values():
            spec.check_domain()

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self.parameters)

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self.parameters.values())

    def __len__(self) -> int:
        return len(self.parameters)

    def __getitem__(self, key: str) -> ParameterSpec:
        return self.parameters[key]
