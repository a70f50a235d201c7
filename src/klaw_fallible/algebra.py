"""The combinator algebra shared by every operation shape.

A `FallibleOperation` is a callable proxy around a plain callable plus the
exception type(s) it *declares*. Every recovery combinator is implemented once
here, in terms of `attempt`: run the operation, get ``Ok(value)`` or
``Err(declared_error)``, and decide what to do with a declared failure outside
of any ``except`` block. Exceptions that are not declared never reach the
decision and propagate untouched.

The shape classes in `klaw_fallible.operations` only bind these primitives to
shape-specific names (``on_error_apply_checked``, ``on_error_test_checked``,
...).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, NoReturn, Self

import wrapt

from klaw_fallible import tunnel
from klaw_fallible._classify import ErrorTypes, attempt, error_types, require_callable
from klaw_fallible._config import CarrierTrace, get_config
from klaw_fallible.errors import ContractViolationError, UncheckedError
from klaw_fallible.result import Err, Ok

__all__ = ['FallibleOperation', 'chain', 'conjunction', 'disjunction', 'negation', 'require_shape', 'sequence']

type _OnError = Callable[[BaseException, tuple[Any, ...], dict[str, Any]], Any]


def _declared_by(candidate: object, error_type: ErrorTypes | None) -> tuple[type[BaseException], ...]:
    """Declared types of a composite whose recovery path may raise from candidate."""
    if error_type is not None:
        return error_types(error_type)
    if isinstance(candidate, FallibleOperation):
        return candidate.error_type
    return ()


class FallibleOperation[X: BaseException](wrapt.ObjectProxy):
    """A callable that may fail with a declared exception type.

    The wrapped callable's metadata (``__name__``, ``__doc__``, ...) is
    preserved. Instances are immutable and hold no state besides the wrapped
    callable and the declared types.

    Attributes:
        has_result: False for shapes whose invocation produces no value
            (consumers, runnables); such shapes always return None.

    Example:
        ```python
        def read_text(path: str) -> str:
            with open(path) as f:
                return f.read()

        read = CheckedFunction(read_text, OSError)
        read.on_error_return('')('missing.txt')
        # ''
        ```
    """

    has_result: ClassVar[bool] = True

    def __init__(self, operation: Callable[..., Any], error_type: ErrorTypes = ()) -> None:
        """Wrap a plain callable.

        Args:
            operation: The callable to wrap.
            error_type: Exception class or tuple of classes the callable
                declares. The empty tuple declares nothing.

        Raises:
            ContractViolationError: If operation is None or not callable, or
                error_type is not an exception class or tuple of them.
        """
        super().__init__(require_callable(operation, 'operation'))
        self._self_error_types = error_types(error_type)
        self._self_orig_class = None

    @property
    def error_type(self) -> tuple[type[X], ...]:
        """The declared exception types."""
        return self._self_error_types  # type: ignore[return-value]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.__wrapped__(*args, **kwargs)

    def __repr__(self) -> str:
        names = ', '.join(t.__qualname__ for t in self._self_error_types)
        return f'{type(self).__name__}({self.__wrapped__!r}, error_type=({names}))'

    # ObjectProxy forwards these to the wrapped callable; shape and declared
    # types are part of an operation's identity.

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FallibleOperation):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._self_error_types == other._self_error_types
            and self.__wrapped__ == other.__wrapped__
        )

    def __ne__(self, other: object) -> bool:
        equal = self.__eq__(other)
        return equal if equal is NotImplemented else not equal

    def __hash__(self) -> int:
        return hash((type(self), self._self_error_types, self.__wrapped__))

    @property
    def __orig_class__(self) -> Any:
        """The parameterized class this operation was created through, if any."""
        if self._self_orig_class is None:
            raise AttributeError('__orig_class__')
        return self._self_orig_class

    @__orig_class__.setter
    def __orig_class__(self, alias: Any) -> None:
        # Set by typing on CheckedFunction[...](...); kept off the wrapped callable.
        self._self_orig_class = alias

    @classmethod
    def checked(cls, operation: Callable[..., Any], error_type: ErrorTypes | None = None) -> Self:
        """Build this shape from a plain callable, see `klaw_fallible.tunnel.checked`."""
        return tunnel.checked(operation, error_type, shape=cls)

    def attempt(self, *args: Any, **kwargs: Any) -> Ok[Any] | Err[X]:
        """Invoke once and return the outcome instead of raising.

        Returns:
            Ok(result) on success, Err(error) on a declared failure.

        Raises:
            BaseException: Any failure that is not declared.
        """
        return attempt(self.__wrapped__, args, kwargs, self._self_error_types)  # type: ignore[return-value]

    # --- Building blocks ---

    def _derive(self, operation: Callable[..., Any], declared: ErrorTypes) -> Self:
        """Create an operation of the same shape."""
        return type(self)(operation, declared)

    def _recovering(self, on_error: _OnError) -> Callable[..., Any]:
        """Plain callable that hands declared failures to on_error."""
        call = self.__wrapped__
        declared = self._self_error_types
        has_result = self.has_result

        def recovering(*args: Any, **kwargs: Any) -> Any:
            outcome = attempt(call, args, kwargs, declared)
            if isinstance(outcome, Ok):
                value = outcome.value
            else:
                value = on_error(outcome.error, args, kwargs)
            return value if has_result else None

        return recovering

    # --- Error mapping ---

    def on_error_throw_as_checked[Y: BaseException](
        self,
        mapper: Callable[[X], Y],
        error_type: ErrorTypes,
    ) -> Self:
        """Replace a declared failure with the exception returned by mapper.

        Args:
            mapper: Maps the caught error to the exception to raise instead.
            error_type: Type(s) mapper produces. The new operation declares
                them, so downstream recovery can intercept the mapped error.

        Returns:
            An operation of the same shape declaring error_type.

        Raises:
            ContractViolationError: If mapper is not callable or error_type
                is None or not an exception class or tuple of them.
        """
        require_callable(mapper, 'mapper')
        declared = error_types(error_type)

        def throw(error: BaseException, args: tuple[Any, ...], kwargs: dict[str, Any]) -> NoReturn:
            raise mapper(error)  # type: ignore[arg-type]

        return self._derive(self._recovering(throw), declared)

    def on_error_throw_as_unchecked(self, mapper: Callable[[X], BaseException]) -> Callable[..., Any]:
        """Replace a declared failure with the exception returned by mapper.

        Returns:
            A plain callable that declares nothing.
        """
        require_callable(mapper, 'mapper')

        def throw(error: BaseException, args: tuple[Any, ...], kwargs: dict[str, Any]) -> NoReturn:
            raise mapper(error)  # type: ignore[arg-type]

        return self._recovering(throw)

    def unchecked(self, trace: CarrierTrace | None = None) -> Callable[..., Any]:
        """Tunnel declared failures out as `UncheckedError` carriers.

        Args:
            trace: Carrier construction mode. Defaults to the configured
                ``carrier_trace``, read when a failure is wrapped.

        Returns:
            A plain callable that declares nothing.
        """

        def wrap(error: BaseException) -> UncheckedError:
            mode = trace if trace is not None else get_config().carrier_trace
            if mode is CarrierTrace.WITH:
                return UncheckedError.with_trace(error)
            return UncheckedError.without_trace(error)

        return self.on_error_throw_as_unchecked(wrap)

    # --- Error handling ---

    def on_error_handle_checked(
        self,
        handler: Callable[[X], Any],
        error_type: ErrorTypes | None = None,
    ) -> Self:
        """Use handler(error) as the result of a declared failure.

        For shapes without a result the handler's return value is ignored.

        Args:
            handler: Receives the caught error. May itself raise.
            error_type: Declared type(s) of the new operation. Defaults to
                handler's declared types when it is a FallibleOperation.
        """
        require_callable(handler, 'handler')

        def handle(error: BaseException, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            return handler(error)  # type: ignore[arg-type]

        return self._derive(self._recovering(handle), _declared_by(handler, error_type))

    def on_error_handle_unchecked(self, handler: Callable[[X], Any]) -> Callable[..., Any]:
        """Use handler(error) as the result of a declared failure.

        Returns:
            A plain callable that declares nothing.
        """
        require_callable(handler, 'handler')

        def handle(error: BaseException, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            return handler(error)  # type: ignore[arg-type]

        return self._recovering(handle)

    # --- Fallbacks ---

    def _on_error_call_checked(
        self,
        fallback: Callable[..., Any],
        error_type: ErrorTypes | None,
        *,
        forward_inputs: bool,
    ) -> Self:
        require_callable(fallback, 'fallback')
        return self._derive(
            self._recovering(_fallback_to(fallback, forward_inputs=forward_inputs)),
            _declared_by(fallback, error_type),
        )

    def _on_error_call_unchecked(self, fallback: Callable[..., Any], *, forward_inputs: bool) -> Callable[..., Any]:
        require_callable(fallback, 'fallback')
        return self._recovering(_fallback_to(fallback, forward_inputs=forward_inputs))

    def _on_error_return(self, default: Any) -> Callable[..., Any]:
        def fixed(error: BaseException, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            return default

        return self._recovering(fixed)


def require_shape[S: FallibleOperation[Any]](shape: type[S] | None) -> type[S]:
    """Return shape if it is a FallibleOperation subclass, else raise ContractViolationError."""
    require_callable(shape, 'shape')
    if not (isinstance(shape, type) and issubclass(shape, FallibleOperation)):
        msg = f'shape must be a FallibleOperation subclass, got {shape!r}'
        raise ContractViolationError(msg)
    return shape


def _fallback_to(fallback: Callable[..., Any], *, forward_inputs: bool) -> _OnError:
    """Recovery step that invokes fallback, with or without the original inputs."""

    def call(error: BaseException, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        if forward_inputs:
            return fallback(*args, **kwargs)
        return fallback()

    return call


# --- Structural composition ---
# Evaluation is strictly left to right. A failure of the first operand
# propagates as-is and the second operand is never invoked.


def chain(first: Callable[..., Any], second: Callable[[Any], Any]) -> Callable[..., Any]:
    """Feed the result of first into second."""
    require_callable(first, 'other')
    require_callable(second, 'other')

    def chained(*args: Any, **kwargs: Any) -> Any:
        return second(first(*args, **kwargs))

    return chained


def sequence(first: Callable[..., Any], second: Callable[..., Any]) -> Callable[..., None]:
    """Run first, then second, with the same inputs."""
    require_callable(second, 'other')

    def sequenced(*args: Any, **kwargs: Any) -> None:
        first(*args, **kwargs)
        second(*args, **kwargs)

    return sequenced


def conjunction(first: Callable[..., Any], second: Callable[..., Any]) -> Callable[..., bool]:
    """Short-circuit AND of two predicates."""
    require_callable(second, 'other')

    def both(*args: Any, **kwargs: Any) -> bool:
        return bool(first(*args, **kwargs)) and bool(second(*args, **kwargs))

    return both


def disjunction(first: Callable[..., Any], second: Callable[..., Any]) -> Callable[..., bool]:
    """Short-circuit OR of two predicates."""
    require_callable(second, 'other')

    def either(*args: Any, **kwargs: Any) -> bool:
        return bool(first(*args, **kwargs)) or bool(second(*args, **kwargs))

    return either


def negation(predicate: Callable[..., Any]) -> Callable[..., bool]:
    def negated(*args: Any, **kwargs: Any) -> bool:
        return not predicate(*args, **kwargs)

    return negated
