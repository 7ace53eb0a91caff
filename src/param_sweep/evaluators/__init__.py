"""
Evaluator catalogue.

Evaluators are plain callables ``f(assignment) -> float``. Built-in ones are
registered in the EvaluatorRegistry on import, so configuration files can
refer to them by name.

Usage:
    from param_sweep.evaluators import EvaluatorRegistry, resolve_evaluator

    print(EvaluatorRegistry.list_evaluators())
    f = resolve_evaluator("wpt_ss_power_ratio")
    g = resolve_evaluator("my_project.models:efficiency")
"""

from .evaluator_registry import EvaluatorRegistry, resolve_evaluator

# Import evaluators (this triggers registration via the decorator)
from .wpt import identity_x, wpt_ss_power_ratio

__all__ = [
    "EvaluatorRegistry",
    "identity_x",
    "resolve_evaluator",
    "wpt_ss_power_ratio",
]
