"""
Experiment Results

The per-call record of how control and candidate behaved.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success or failure of a single implementation call."""
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the captured value or re-raise the captured exception."""
        if self.error is not None:
            raise self.error
        return self.value


@dataclass(frozen=True)
class Results(Generic[T]):
    """
    Outcome of one experiment call.

    A missing error means the implementation succeeded, even when its
    result is None. Both candidate fields are None when the candidate
    did not run.
    """
    experiment_name: str
    control_result: T | None = None
    candidate_result: T | None = None
    control_error: Exception | None = None
    candidate_error: Exception | None = None

    @classmethod
    def from_outcomes(
        cls,
        experiment_name: str,
        control: Outcome[T],
        candidate: Outcome[T]
    ) -> "Results[T]":
        return cls(
            experiment_name=experiment_name,
            control_result=control.value,
            candidate_result=candidate.value,
            control_error=control.error,
            candidate_error=candidate.error,
        )

    @property
    def control_succeeded(self) -> bool:
        return self.control_error is None

    @property
    def candidate_succeeded(self) -> bool:
        return self.candidate_error is None

    @property
    def matched(self) -> bool:
        """True when control and candidate behaved the same."""
        return not has_difference(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for log aggregators and JSON export."""
        return {
            "experiment_name": self.experiment_name,
            "control_result": self.control_result,
            "candidate_result": self.candidate_result,
            "control_error": _describe(self.control_error),
            "candidate_error": _describe(self.candidate_error),
            "matched": self.matched,
        }


def _describe(error: Exception | None) -> str | None:
    if error is None:
        return None
    return f"{type(error).__name__}: {error}"


def has_difference(results: "Results") -> bool:
    """
    Check whether control and candidate behaved differently.

    Differing success status counts as a difference. Two failures count
    as a match. Two successes are compared with ``!=``; a comparison that
    raises counts as a difference.
    """
    if results.control_succeeded != results.candidate_succeeded:
        return True

    if not results.control_succeeded:
        return False

    try:
        return bool(results.control_result != results.candidate_result)
    except Exception as e:
        logger.debug(f"Experiment {results.experiment_name}: results not comparable: {e}")
        return True
