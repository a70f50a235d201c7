"""Exception tunnel: carry a declared failure across a plain-callable boundary.

The wrap direction is ``FallibleOperation.unchecked()`` (or `unchecked` below):
a declared failure leaves as an `UncheckedError` whose cause is the original
exception. The unwrap direction is `checked` (lazy, reusable) and
`invoke_and_unwrap` (eager, one-shot). Both re-raise the carried cause when it
is an instance of the requested error type and let anything else propagate
unchanged.

Example:
    ```python
    read = CheckedFunction(load_bytes, OSError)

    # hand a plain callable to code that cannot declare OSError
    results = list(map(read.unchecked(), paths))  # may raise UncheckedError

    # and recover OSError on the way back
    safe_read = checked(read.unchecked(), OSError)
    safe_read(path)  # raises the original OSError
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from klaw_fallible._classify import ErrorTypes, error_types, require_callable
from klaw_fallible._logging import get_logger
from klaw_fallible.errors import ContractViolationError, UncheckedError, require_non_null

if TYPE_CHECKING:
    from klaw_fallible.algebra import FallibleOperation

__all__ = ['checked', 'invoke_and_unwrap', 'unchecked']

logger = get_logger(__name__)


def unwrap_call[T](
    operation: Callable[..., T],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    declared: tuple[type[BaseException], ...],
) -> T:
    try:
        return operation(*args, **kwargs)
    except UncheckedError as carrier:
        if not isinstance(carrier.cause, declared):
            logger.debug('carrier_passed_through', cause_type=type(carrier.cause).__qualname__)
            raise
        cause = carrier.cause
    # Raised outside the handler so the cause's __context__ is left alone.
    logger.debug('carrier_unwrapped', cause_type=type(cause).__qualname__)
    raise cause


def invoke_and_unwrap[T](
    operation: Callable[..., T],
    /,
    *args: Any,
    error_type: ErrorTypes,
    **kwargs: Any,
) -> T:
    """Invoke a plain callable now, unwrapping a carried declared failure.

    Args:
        operation: The plain callable to invoke.
        *args: Positional arguments for the call.
        error_type: Exception class (or tuple) to recover from carriers.
        **kwargs: Keyword arguments for the call.

    Returns:
        The callable's result.

    Raises:
        BaseException: The carried cause, if it is an instance of error_type.
        UncheckedError: The carrier itself, if its cause does not match.
        ContractViolationError: If operation or error_type is invalid.

    Example:
        ```python
        invoke_and_unwrap(read.unchecked(), 'config.toml', error_type=OSError)
        ```
    """
    require_callable(operation, 'operation')
    declared = error_types(error_type)
    return unwrap_call(operation, args, kwargs, declared)


def checked[S: FallibleOperation[Any]](
    operation: Callable[..., Any],
    error_type: ErrorTypes | None = None,
    *,
    shape: type[S] | None = None,
) -> S:
    """Build a fallible operation from a plain callable.

    With an error_type, every invocation unwraps carriers whose cause is an
    instance of it and the operation declares error_type. Without one the
    callable is wrapped as-is and declares nothing.

    Args:
        operation: The plain callable.
        error_type: Exception class (or tuple) to recover from carriers.
        shape: The operation class to build. Defaults to CheckedFunction.

    Returns:
        An operation of the requested shape.
    """
    require_callable(operation, 'operation')
    if shape is None:
        from klaw_fallible.operations import CheckedFunction

        shape = CheckedFunction  # type: ignore[assignment]
    else:
        from klaw_fallible.algebra import require_shape

        require_shape(shape)
    if error_type is None:
        return shape(operation)  # type: ignore[misc]

    declared = error_types(error_type)

    def unwrapping(*args: Any, **kwargs: Any) -> Any:
        return unwrap_call(operation, args, kwargs, declared)

    return shape(unwrapping, declared)  # type: ignore[misc]


def unchecked(operation: FallibleOperation[Any]) -> Callable[..., Any]:
    """Return ``operation.unchecked()``.

    Raises:
        ContractViolationError: If operation is None or not a fallible operation.
    """
    from klaw_fallible.algebra import FallibleOperation

    if not isinstance(require_non_null(operation, 'operation'), FallibleOperation):
        msg = f'operation must be a FallibleOperation, got {type(operation).__name__}'
        raise ContractViolationError(msg)
    return operation.unchecked()
