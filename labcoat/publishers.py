"""
Result Publishers

The default reporter used when an experiment has no publish callback.
It only speaks up when control and candidate disagree.
"""

import logging

from .results import Results, has_difference

class DifferencePublisher:
    """
    Logs a warning when an experiment's results differ.

    Usage:
        publish = DifferencePublisher(logging.getLogger("refactors"))
        checked = experiment("totals", control=old, candidate=new, publish=publish)
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def __call__(self, results: Results) -> None:
        if has_difference(results):
            self.logger.warning(f"Experiment {results.experiment_name}: difference found")


publish_differences = DifferencePublisher()
