"""@fallible and @unwrapping decorators."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

from klaw_fallible._classify import ErrorTypes, error_types
from klaw_fallible.algebra import FallibleOperation, require_shape
from klaw_fallible.operations import CheckedFunction
from klaw_fallible.tunnel import unwrap_call

__all__ = ['fallible', 'unwrapping']


def fallible[S: FallibleOperation[Any]](
    error_type: ErrorTypes,
    *,
    shape: type[S] = CheckedFunction,  # type: ignore[assignment]
) -> Callable[[Callable[..., Any]], S]:
    """Declare a function as a fallible operation.

    Args:
        error_type: Exception class or tuple of classes the function declares.
            Use ``()`` to declare nothing.
        shape: The operation class to build. Defaults to CheckedFunction.

    Returns:
        A decorator turning the function into an operation of the given shape.

    Example:
        ```python
        @fallible(OSError)
        def read_text(path: str) -> str:
            with open(path) as f:
                return f.read()

        read_text.on_error_return('')('missing.txt')
        # ''

        @fallible(ValidationError, shape=CheckedPredicate)
        def is_valid(record: Record) -> bool: ...
        ```
    """
    declared = error_types(error_type)
    require_shape(shape)

    def decorator(func: Callable[..., Any]) -> S:
        return shape(func, declared)

    return decorator


def unwrapping(error_type: ErrorTypes) -> Any:
    """Decorator that recovers declared failures tunnelled out as carriers.

    Every call of the decorated function behaves like
    ``invoke_and_unwrap(func, *args, error_type=error_type, **kwargs)``: an
    `UncheckedError` whose cause is an instance of error_type is replaced by
    that cause. Anything else propagates unchanged.

    Args:
        error_type: Exception class or tuple of classes to recover.

    Example:
        ```python
        @unwrapping(OSError)
        def load_all(paths: list[str]) -> list[str]:
            return list(map(read_text.unchecked(), paths))

        load_all(['a.txt', 'missing.txt'])  # raises the original OSError
        ```
    """
    declared = error_types(error_type)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        return unwrap_call(wrapped, args, kwargs, declared)

    return wrapper
