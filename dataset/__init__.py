"""
dataset/
--------
Core data layer.  Public API:

    from dataset import Dataset, Step, Compare, Swap, Overwrite, MarkFinal
    from dataset import InvalidInput, UnknownAlgorithm
"""

from dataset.errors    import InvalidInput, UnknownAlgorithm
from dataset.step      import Step, Compare, Swap, Overwrite, MarkFinal, step_from_dict, steps_to_dicts
from dataset.dataset   import Dataset, validate_values
from dataset.generator import random_values, optimal_bar_count, clamp_bar_count, MIN_BARS, MAX_BARS

__all__ = [
    "Dataset",      "validate_values",
    "Step",         "Compare",   "Swap",   "Overwrite",   "MarkFinal",
    "step_from_dict", "steps_to_dicts",
    "InvalidInput", "UnknownAlgorithm",
    "random_values", "optimal_bar_count", "clamp_bar_count",
    "MIN_BARS",     "MAX_BARS",
]
