"""
Experiment Settings

Optional operator switches for turning experiments on and off. Not
imported by the ``labcoat`` package itself; install the ``settings``
extra for PyYAML. A switch file looks like:

    default_enabled: true
    experiments:
      order-totals: false
"""

import logging
from pathlib import Path
from typing import Callable

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ExperimentSettings(BaseModel):
    """
    Per-experiment on/off switches.

    Usage:
        settings = ExperimentSettings.from_yaml("experiments.yaml")
        totals = experiment("order-totals", old, new, enabled=settings.predicate("order-totals"))
    """
    default_enabled: bool = True
    experiments: dict[str, bool] = Field(default_factory=dict)

    @field_validator("experiments")
    @classmethod
    def validate_experiments(cls, v):
        blank = [name for name in v if not name or not name.strip()]
        if blank:
            raise ValueError("Experiment names cannot be empty")
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ExperimentSettings":
        """Load settings from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    def to_yaml(self, path: str | Path) -> None:
        """Save settings to YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)

    def is_enabled(self, name: str) -> bool:
        return self.experiments.get(name, self.default_enabled)

    def set_enabled(self, name: str, value: bool) -> None:
        logger.info(f"Experiment {name}: {'enabled' if value else 'disabled'}")
        self.experiments[name] = value

    def predicate(self, name: str) -> Callable[..., bool]:
        """
        Build an ``enabled`` predicate for one experiment.

        The switch is read on every call, so ``set_enabled`` takes effect
        immediately for already wrapped functions.
        """
        def enabled(*args, **kwargs) -> bool:
            return self.is_enabled(name)

        return enabled
