"""
labcoat

Run a trusted control and a new candidate implementation side by side,
return control's outcome and report whether the two diverged.
"""

__version__ = "1.0.0"

from .results import Results, Outcome
from .definition import ExperimentDefinition, ExperimentOptions
from .publishers import DifferencePublisher, has_difference, publish_differences
from .engine import experiment, wrap

__all__ = [
    "Results",
    "Outcome",
    "ExperimentDefinition",
    "ExperimentOptions",
    "DifferencePublisher",
    "has_difference",
    "publish_differences",
    "experiment",
    "wrap",
]
