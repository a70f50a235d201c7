"""Error classification: declared failure vs everything else."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from klaw_fallible._logging import get_logger
from klaw_fallible.errors import ContractViolationError, UncheckedError, require_non_null
from klaw_fallible.result import Err, Ok

__all__ = [
    'UNDISTINGUISHED',
    'ErrorTypes',
    'attempt',
    'error_types',
    'require_callable',
]

logger = get_logger(__name__)

# Never treated as a declared failure, whatever the declared type says.
UNDISTINGUISHED: tuple[type[BaseException], ...] = (UncheckedError, ContractViolationError)

type ErrorTypes = type[BaseException] | tuple[type[BaseException], ...]


def error_types(error_type: ErrorTypes | None) -> tuple[type[BaseException], ...]:
    """Normalize an exception class or tuple of classes to a tuple.

    An empty tuple is valid and declares no error at all.

    Raises:
        ContractViolationError: If error_type is None or contains anything
            other than exception classes.
    """
    require_non_null(error_type, 'error_type')
    types = error_type if isinstance(error_type, tuple) else (error_type,)
    for candidate in types:
        if not (isinstance(candidate, type) and issubclass(candidate, BaseException)):
            msg = f'error_type must be an exception class or a tuple of them, got {candidate!r}'
            raise ContractViolationError(msg)
    return types


def require_callable[F: Callable[..., Any]](value: F | None, name: str) -> F:
    """Return value if it is callable, else raise ContractViolationError."""
    require_non_null(value, name)
    if not callable(value):
        msg = f'{name} must be callable, got {type(value).__name__}'
        raise ContractViolationError(msg)
    return value


def attempt[T](
    call: Callable[..., T],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    declared: tuple[type[BaseException], ...],
) -> Ok[T] | Err[BaseException]:
    """Invoke call once and classify the outcome.

    Returns Ok(result) on success and Err(error) for a declared failure.
    Any other exception propagates unchanged.
    """
    try:
        value = call(*args, **kwargs)
    except UNDISTINGUISHED:
        raise
    except declared as e:
        logger.debug('declared_failure_intercepted', error_type=type(e).__qualname__)
        return Err(e)
    return Ok(value)
