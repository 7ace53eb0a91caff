"""
Evaluator registry for managing and resolving sweep evaluators.
"""

import importlib
from typing import Callable, Dict, List, Mapping

from ..sweep.errors import ConfigurationError

EvaluatorFunc = Callable[[Mapping[str, float]], float]


class EvaluatorRegistry:
    """Registry of named evaluators available to configuration files."""

    _evaluators: Dict[str, EvaluatorFunc] = {}

    @classmethod
    def register(cls, name: str):
        """
        Decorator that registers an evaluator function under ``name``.

        Usage:
            @EvaluatorRegistry.register("my_metric")
            def my_metric(x):
                return x["a"] * x["b"]

        Raises:
            ValueError: if the name is already taken
        """

        def _wrap(func: EvaluatorFunc) -> EvaluatorFunc:
            if name in cls._evaluators:
                raise ValueError(f"Evaluator '{name}' is already registered")
            cls._evaluators[name] = func
            return func

        return _wrap

    @classmethod
    def get(cls, name: str) -> EvaluatorFunc:
        """
        Get an evaluator by name

        Raises:
            ConfigurationError: if the evaluator is not registered
        """
        if name not in cls._evaluators:
            available = ", ".join(cls._evaluators.keys()) or "no evaluators registered"
            raise ConfigurationError(f"Evaluator '{name}' is not registered. Available evaluators: {available}")
        return cls._evaluators[name]

    @classmethod
    def list_evaluators(cls) -> List[str]:
        return list(cls._evaluators.keys())

    @classmethod
    def get_all(cls) -> Dict[str, EvaluatorFunc]:
        return cls._evaluators.copy()


def resolve_evaluator(reference) -> EvaluatorFunc:
    """
    Turn a configuration reference into a callable.

    Accepts a callable (returned as is), a registered name, or an import path
    of the form ``package.module:function``.
    """
    if callable(reference):
        return reference
    if not isinstance(reference, str) or not reference:
        raise ConfigurationError(f"Evaluator reference must be a name or 'module:function', got {reference!r}")
    if ":" not in reference:
        return EvaluatorRegistry.get(reference)

    module_name, _, attribute = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import evaluator module '{module_name}': {exc}") from exc
    target = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ConfigurationError(f"Module '{module_name}' has no attribute '{attribute}'") from None
    if not callable(target):
        raise ConfigurationError(f"Evaluator '{reference}' is not callable")
    return target
