"""Error types: the unchecked carrier and contract violations.

`UncheckedError` is the carrier used to tunnel a declared failure through code
that only expects undistinguished exceptions. Like the runtime error types it
has a struct twin (`Unchecked`) for Result-based code.
"""

from __future__ import annotations

import traceback
from typing import Any, NoReturn

import msgspec

__all__ = [
    'ContractViolationError',
    'Unchecked',
    'UncheckedError',
    'UnexpectedCauseError',
    'describe',
    'require_non_null',
]


class ContractViolationError(TypeError):
    """A combinator or factory was called with an invalid argument.

    Raised eagerly, before any operation runs. Never intercepted by a
    recovery combinator.
    """


def require_non_null[T](value: T | None, name: str) -> T:
    """Return value, or raise ContractViolationError if it is None.

    Args:
        value: The argument to check.
        name: Argument name used in the error message.

    Returns:
        The value, unchanged.

    Raises:
        ContractViolationError: If value is None.
    """
    if value is None:
        msg = f'{name} must not be None'
        raise ContractViolationError(msg)
    return value


def describe(error: BaseException) -> str:
    """Render an exception as ``TypeName: message``, or just ``TypeName``."""
    text = str(error)
    name = type(error).__qualname__
    return f'{name}: {text}' if text else name


class UnexpectedCauseError(RuntimeError):
    """The carrier's cause did not match any of the requested types."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f'Unexpected exception thrown: {describe(cause)}')

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.cause,))


class UncheckedError(Exception):
    """Carrier that transports a failure across an undistinguished boundary.

    The cause is fixed at construction and is the original failure object,
    never a copy. It is also installed as ``__cause__`` so tracebacks chain
    to it.

    Use `with_trace` to record the construction site as a stack summary, or
    `without_trace` when the cause's own traceback is sufficient.

    Example:
        ```python
        try:
            read_config()
        except OSError as e:
            raise UncheckedError.without_trace(e) from e
        ```
    """

    __slots__ = ('_cause', '_message', '_stack')

    def __init__(self, message: str, cause: BaseException, *, include_trace: bool = True) -> None:
        require_non_null(cause, 'cause')
        super().__init__(message)
        self._message = message
        self._cause = cause
        self._stack = traceback.extract_stack() if include_trace else None
        self.__cause__ = cause
        self.__suppress_context__ = True

    @classmethod
    def with_trace(cls, cause: BaseException, message: str | None = None) -> UncheckedError:
        """Create a carrier that records where it was constructed.

        Args:
            cause: The failure to carry. Must not be None.
            message: Optional message. Defaults to the rendered cause.
        """
        require_non_null(cause, 'cause')
        return cls(describe(cause) if message is None else message, cause, include_trace=True)

    @classmethod
    def without_trace(cls, cause: BaseException, message: str | None = None) -> UncheckedError:
        """Create a carrier without capturing any extra diagnostic context.

        Args:
            cause: The failure to carry. Must not be None.
            message: Optional message. Defaults to the rendered cause.
        """
        require_non_null(cause, 'cause')
        return cls(describe(cause) if message is None else message, cause, include_trace=False)

    @property
    def cause(self) -> BaseException:
        """The carried failure."""
        return self._cause

    @property
    def message(self) -> str:
        """Human-readable message."""
        return self._message

    @property
    def stack(self) -> traceback.StackSummary | None:
        """Construction-site stack, or None for carriers built without trace."""
        return self._stack

    @property
    def include_trace(self) -> bool:
        return self._stack is not None

    def raise_cause_as(self, *error_types: type[BaseException]) -> NoReturn:
        """Re-raise the cause if it is an instance of one of error_types.

        Args:
            *error_types: Candidate exception classes, checked in order.

        Raises:
            BaseException: The cause itself, when it matches.
            UnexpectedCauseError: When the cause matches none of the types.
            ContractViolationError: When no types are given.
        """
        if not error_types:
            msg = 'at least one error type is required'
            raise ContractViolationError(msg)
        cause = self._cause
        for error_type in error_types:
            if isinstance(cause, require_non_null(error_type, 'error_type')):
                raise cause
        raise UnexpectedCauseError(cause) from cause

    def __reduce__(self) -> tuple[Any, ...]:
        # args only holds the message; rebuild from the slots instead.
        frames = None if self._stack is None else [(f.filename, f.lineno, f.name, f.line) for f in self._stack]
        return (_rebuild_carrier, (type(self), self._message, self._cause, frames))

    def to_struct(self) -> Unchecked:
        """Convert to struct for Result-based code."""
        return Unchecked(self._message, self._cause)


def _rebuild_carrier(
    cls: type[UncheckedError],
    message: str,
    cause: BaseException,
    frames: list[tuple[str, int | None, str, str | None]] | None,
) -> UncheckedError:
    carrier = cls(message, cause, include_trace=False)
    if frames is not None:
        carrier._stack = traceback.StackSummary.from_list(frames)
    return carrier


class Unchecked(msgspec.Struct, frozen=True):
    """Carried failure - struct variant for Result[T, Unchecked].

    In-memory only: the cause is a live exception object, which msgspec
    cannot encode. Use it as the error side of a Result, not as a wire type.
    """

    message: str
    cause: BaseException

    def to_exception(self) -> UncheckedError:
        """Convert to a carrier exception without trace."""
        return UncheckedError(self.message, self.cause, include_trace=False)
