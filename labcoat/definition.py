"""
Experiment Definition Models

Pydantic models describing an experiment at wrap time.
"""

import inspect
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .publishers import publish_differences
from .results import Results


def _always_enabled(*args, **kwargs) -> bool:
    return True


class ExperimentOptions(BaseModel):
    """Optional behaviour for an experiment."""
    model_config = ConfigDict(frozen=True)

    publish: Callable[[Results], Any] | None = Field(
        None, description="Reporter called with every Results; defaults to logging differences"
    )
    enabled: Callable[..., bool] | None = Field(
        None, description="Per-call gate taking the experiment arguments; defaults to always on"
    )

    @field_validator("enabled")
    @classmethod
    def validate_enabled(cls, v):
        if v is not None and inspect.iscoroutinefunction(v):
            raise ValueError("enabled must be a synchronous predicate")
        return v


class ExperimentDefinition(BaseModel):
    """
    Complete experiment definition.

    Usage:
        definition = ExperimentDefinition(name="totals", control=old, candidate=new)
        totals = wrap(definition)
    """
    model_config = ConfigDict(frozen=True)

    name: str
    control: Callable[..., Any]
    candidate: Callable[..., Any]
    options: ExperimentOptions = Field(default_factory=ExperimentOptions)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Experiment name cannot be empty")
        return v

    @property
    def publish(self) -> Callable[[Results], Any]:
        return self.options.publish or publish_differences

    @property
    def enabled(self) -> Callable[..., bool]:
        return self.options.enabled or _always_enabled
