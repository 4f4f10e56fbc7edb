"""
Experiment Engine

Runs control and candidate side by side, publishes the Results and hands
the caller whatever control produced.
"""

import asyncio
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable

from .definition import ExperimentDefinition, ExperimentOptions
from .results import Outcome, Results

logger = logging.getLogger(__name__)

Pending = Outcome | Awaitable[Outcome]


def _capture(func: Callable[..., Any], args: tuple, kwargs: dict) -> Pending:
    """Call func, returning its Outcome or an awaitable resolving to one."""
    try:
        value = func(*args, **kwargs)
    except Exception as e:
        return Outcome.failure(e)

    if inspect.isawaitable(value):
        return _settle(value)
    return Outcome.success(value)


async def _settle(awaitable: Awaitable[Any]) -> Outcome:
    try:
        return Outcome.success(await awaitable)
    except Exception as e:
        return Outcome.failure(e)


async def _resolve(pending: Pending) -> Outcome:
    if isinstance(pending, Outcome):
        return pending
    return await pending


def _report(definition: ExperimentDefinition, control: Outcome, candidate: Outcome) -> Any:
    """Build the Results for this call and pass them to the reporter."""
    if candidate.error is not None:
        logger.debug(f"Experiment {definition.name}: candidate raised {candidate.error!r}")

    results = Results.from_outcomes(definition.name, control, candidate)
    return definition.publish(results)


async def _conclude(published: Awaitable[Any], control: Outcome) -> Any:
    await published
    return control.unwrap()


async def _finish(definition: ExperimentDefinition, control: Pending, candidate: Pending) -> Any:
    control, candidate = await asyncio.gather(_resolve(control), _resolve(candidate))

    published = _report(definition, control, candidate)
    if inspect.isawaitable(published):
        await published

    return control.unwrap()


def _check_enabled(definition: ExperimentDefinition, *args, **kwargs) -> bool:
    """Evaluate the enabled predicate, refusing anything but a plain answer."""
    decision = definition.enabled(*args, **kwargs)
    if inspect.isawaitable(decision):
        if inspect.iscoroutine(decision):
            decision.close()
        raise TypeError(f"Experiment {definition.name}: enabled returned an awaitable, not a bool")
    return bool(decision)


def _is_async(definition: ExperimentDefinition) -> bool:
    return any(
        inspect.iscoroutinefunction(func)
        for func in (definition.control, definition.candidate, definition.options.publish)
        if func is not None
    )


def wrap(definition: ExperimentDefinition) -> Callable[..., Any]:
    """
    Build the instrumented replacement for ``definition.control``.

    The returned callable takes the same arguments as control. It is a
    coroutine function when control, candidate or publish is one;
    otherwise it completes synchronously, unless one of them hands back
    an awaitable at call time, in which case the call returns a coroutine.

    Args:
        definition: Validated experiment definition

    Returns:
        Callable returning control's value or raising control's exception
    """
    control = definition.control
    candidate = definition.candidate
    enabled = functools.partial(_check_enabled, definition)

    if _is_async(definition):
        @functools.wraps(control)
        async def run_async(*args, **kwargs):
            if not enabled(*args, **kwargs):
                logger.debug(f"Experiment {definition.name}: disabled, running control only")
                value = control(*args, **kwargs)
                if inspect.isawaitable(value):
                    return await value
                return value

            return await _finish(
                definition,
                _capture(control, args, kwargs),
                _capture(candidate, args, kwargs)
            )

        return run_async

    @functools.wraps(control)
    def run(*args, **kwargs):
        if not enabled(*args, **kwargs):
            logger.debug(f"Experiment {definition.name}: disabled, running control only")
            return control(*args, **kwargs)

        control_outcome = _capture(control, args, kwargs)
        candidate_outcome = _capture(candidate, args, kwargs)

        if not (isinstance(control_outcome, Outcome) and isinstance(candidate_outcome, Outcome)):
            return _finish(definition, control_outcome, candidate_outcome)

        published = _report(definition, control_outcome, candidate_outcome)
        if inspect.isawaitable(published):
            return _conclude(published, control_outcome)

        return control_outcome.unwrap()

    return run


def experiment(
    name: str,
    control: Callable[..., Any] | None = None,
    candidate: Callable[..., Any] | None = None,
    options: ExperimentOptions | dict[str, Any] | None = None,
    *,
    publish: Callable[[Results], Any] | None = None,
    enabled: Callable[..., bool] | None = None
) -> Callable[..., Any]:
    """
    Define and wrap an experiment in one step.

    Without ``control`` this returns a decorator for the control function:

        @experiment("totals", candidate=new_totals)
        def totals(order):
            ...

    ``publish`` and ``enabled`` override the matching entries of ``options``.
    """
    if isinstance(options, ExperimentOptions):
        options = {"publish": options.publish, "enabled": options.enabled}

    merged = dict(options or {})
    if publish is not None:
        merged["publish"] = publish
    if enabled is not None:
        merged["enabled"] = enabled

    def decorate(func: Callable[..., Any]) -> Callable[..., Any]:
        return wrap(ExperimentDefinition(
            name=name,
            control=func,
            candidate=candidate,
            options=ExperimentOptions(**merged)
        ))

    if control is None:
        return decorate
    return decorate(control)
