"""Result adapter - one async call contract for every kind of task work.

Task work can signal completion in three ways:

- Return a plain value (or raise) synchronously
- Return an awaitable (coroutine, asyncio.Future, concurrent Future, ...)
- Accept a second ``done`` parameter and call ``done(error, result)``

adapt_work() inspects the callable once, tags it with a WorkShape, and
returns an AdaptedWork that is always awaited the same way.

Example:
    >>> work = adapt_work(lambda results: results["compile"] + 1)
    >>> await work({"compile": 41})
    42

    >>> def legacy(results, done):
    ...     done(None, "finished")
    >>> await adapt_work(legacy)({})
    'finished'
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from dataclasses import dataclass
from typing import Any

from tasker.core.types import DoneCallback, Results, TaskWork, WorkShape

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class AdaptedWork:
    """Task work normalized to ``async (results) -> result``.

    Attributes:
        shape: How the wrapped callable signals completion.
        fn: The wrapped callable (None for NOOP).
        takes_results: Whether fn is called with the result mapping.
    """

    shape: WorkShape
    fn: TaskWork | None = None
    takes_results: bool = True

    async def __call__(self, results: Results) -> Any:
        if self.shape is WorkShape.NOOP:
            return None
        if self.shape is WorkShape.CALLBACK:
            return await self._call_with_done(results)

        value = self.fn(results) if self.takes_results else self.fn()
        return await _settle(value)

    async def _call_with_done(self, results: Results) -> Any:
        outcome: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        value = self.fn(results, done_callback(outcome))
        if _is_future_like(value):
            outcome.cancel()
            return await _settle(value)
        return await outcome


def done_callback(outcome: asyncio.Future[Any]) -> DoneCallback:
    """Build the ``done(error, result)`` callback that settles outcome.

    The callback may be called from any thread. Only the first call counts;
    a non-exception error value is wrapped in RuntimeError.
    """
    loop = outcome.get_loop()

    def settle(error: Any, result: Any) -> None:
        # First call wins
        if outcome.done():
            return
        if error is None:
            outcome.set_result(result)
        elif isinstance(error, BaseException):
            outcome.set_exception(error)
        else:
            outcome.set_exception(RuntimeError(error))

    def done(error: Any = None, result: Any = None) -> None:
        loop.call_soon_threadsafe(settle, error, result)

    return done


def _is_future_like(value: Any) -> bool:
    return inspect.isawaitable(value) or isinstance(value, concurrent.futures.Future)


async def _settle(value: Any) -> Any:
    """Await value if it is future-like, otherwise return it as-is."""
    if isinstance(value, concurrent.futures.Future):
        return await asyncio.wrap_future(value)
    if inspect.isawaitable(value):
        return await value
    return value


def _signature(fn: TaskWork) -> inspect.Signature | None:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature
        return None


def required_positional(fn: TaskWork) -> int:
    """Count positional parameters without defaults.

    *args and keyword-only parameters are not counted.
    """
    sig = _signature(fn)
    if sig is None:
        return 1
    return sum(
        1
        for p in sig.parameters.values()
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


def accepts_results(fn: TaskWork) -> bool:
    """Whether fn can be called with the result mapping as first argument."""
    sig = _signature(fn)
    if sig is None:
        return True
    return any(
        p.kind in _POSITIONAL or p.kind is inspect.Parameter.VAR_POSITIONAL
        for p in sig.parameters.values()
    )


def detect_shape(fn: TaskWork | None) -> WorkShape:
    """Decide how fn signals completion.

    Functions requiring a second positional parameter are callback style.
    Everything else is PLAIN; whether a PLAIN call returned an awaitable
    is checked on each call, and awaitables always take precedence.

    Raises:
        ValueError: If fn is neither None nor callable.
    """
    if fn is None:
        return WorkShape.NOOP
    if not callable(fn):
        raise ValueError(f"Task work must be callable, got {type(fn).__name__}")
    if required_positional(fn) >= 2:
        return WorkShape.CALLBACK
    return WorkShape.PLAIN


def adapt_work(fn: TaskWork | None) -> AdaptedWork:
    """Wrap task work in the uniform async contract.

    Args:
        fn: Zero-, one- or two-argument callable, or None for a no-op.

    Returns:
        AdaptedWork awaiting to the work's single result.

    Raises:
        ValueError: If fn is not callable.
    """
    shape = detect_shape(fn)
    if shape is WorkShape.NOOP:
        return AdaptedWork(shape=shape)
    return AdaptedWork(shape=shape, fn=fn, takes_results=accepts_results(fn))
