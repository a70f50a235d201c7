"""Operation shapes: runnables, suppliers, consumers, functions, predicates.

Each shape binds the generic algebra of `FallibleOperation` to the names that
fit it. Numeric inputs and results use the same shapes; there are no
int/float variants.

| Shape | Call | Composition | Fallback |
|---|---|---|---|
| `CheckedRunnable` | ``run()`` | | ``on_error_run_*`` |
| `CheckedSupplier` | ``get()`` | | ``on_error_get_*`` |
| `CheckedConsumer`, `CheckedBiConsumer` | ``accept(...)`` | ``and_then`` | ``on_error_accept_*`` |
| `CheckedFunction`, `CheckedUnaryOperator` | ``apply(t)`` | ``compose``, ``and_then`` | ``on_error_apply_*``, ``on_error_get_*`` |
| `CheckedBiFunction`, `CheckedBinaryOperator` | ``apply(t, u)`` | ``and_then`` | ``on_error_apply_*``, ``on_error_get_*`` |
| `CheckedPredicate`, `CheckedBiPredicate` | ``test(...)`` | ``and_``, ``or_``, ``negate`` | ``on_error_test_*``, ``on_error_get_*`` |

Example:
    ```python
    is_valid = CheckedPredicate(validate, ValidationError)
    has_owner = CheckedPredicate(lookup_owner, MissingOwnerError)

    check = is_valid.and_(has_owner).on_error_return(False)
    check(record)
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Self

from klaw_fallible._classify import ErrorTypes
from klaw_fallible.algebra import FallibleOperation, chain, conjunction, disjunction, negation, sequence

__all__ = [
    'CheckedBiConsumer',
    'CheckedBiFunction',
    'CheckedBiPredicate',
    'CheckedBinaryOperator',
    'CheckedConsumer',
    'CheckedFunction',
    'CheckedPredicate',
    'CheckedRunnable',
    'CheckedSupplier',
    'CheckedUnaryOperator',
]


class _WithResult[X: BaseException](FallibleOperation[X]):
    """Recovery combinators for shapes that produce a value."""

    def on_error_return(self, default: Any) -> Callable[..., Any]:
        """Return default instead of failing with the declared error.

        Nothing else is invoked on failure. The success path is unaffected.

        Returns:
            A plain callable that declares nothing.
        """
        return self._on_error_return(default)

    def on_error_get_checked(self, fallback: Callable[[], Any], error_type: ErrorTypes | None = None) -> Self:
        """On a declared failure, return ``fallback()`` instead.

        Args:
            fallback: Zero-argument callable. May raise its own declared type.
            error_type: Declared type(s) of the new operation. Defaults to the
                fallback's declared types when it is a FallibleOperation.
        """
        return self._on_error_call_checked(fallback, error_type, forward_inputs=False)

    def on_error_get_unchecked(self, fallback: Callable[[], Any]) -> Callable[..., Any]:
        """On a declared failure, return ``fallback()`` instead.

        Returns:
            A plain callable that declares nothing.
        """
        return self._on_error_call_unchecked(fallback, forward_inputs=False)


class _WithoutResult[X: BaseException](FallibleOperation[X]):
    has_result: ClassVar[bool] = False

    def on_error_discard(self) -> Callable[..., None]:
        """Swallow the declared error and complete normally.

        Returns:
            A plain callable that declares nothing.
        """
        return self._on_error_return(None)


class CheckedRunnable[X: BaseException](_WithoutResult[X]):
    """A zero-argument action that may fail with X."""

    def run(self) -> None:
        self()

    def on_error_run_checked(self, fallback: Callable[[], Any], error_type: ErrorTypes | None = None) -> Self:
        """On a declared failure, run fallback instead."""
        return self._on_error_call_checked(fallback, error_type, forward_inputs=True)

    def on_error_run_unchecked(self, fallback: Callable[[], Any]) -> Callable[[], None]:
        """On a declared failure, run fallback instead. Returns a plain callable."""
        return self._on_error_call_unchecked(fallback, forward_inputs=True)


class CheckedSupplier[T, X: BaseException](_WithResult[X]):
    """A zero-argument producer of T that may fail with X."""

    def get(self) -> T:
        return self()


class _Consumer[X: BaseException](_WithoutResult[X]):
    def accept(self, *args: Any, **kwargs: Any) -> None:
        self(*args, **kwargs)

    def and_then(self, after: Callable[..., Any]) -> Self:
        """Run self, then after with the same inputs.

        after is not invoked if self fails.
        """
        return self._derive(sequence(self, after), self.error_type)

    def on_error_accept_checked(self, fallback: Callable[..., Any], error_type: ErrorTypes | None = None) -> Self:
        """On a declared failure, pass the same inputs to fallback instead."""
        return self._on_error_call_checked(fallback, error_type, forward_inputs=True)

    def on_error_accept_unchecked(self, fallback: Callable[..., Any]) -> Callable[..., None]:
        """On a declared failure, pass the same inputs to fallback instead. Returns a plain callable."""
        return self._on_error_call_unchecked(fallback, forward_inputs=True)


class CheckedConsumer[T, X: BaseException](_Consumer[X]):
    """Consumes one input and may fail with X."""


class CheckedBiConsumer[T, U, X: BaseException](_Consumer[X]):
    """Consumes two inputs and may fail with X."""


class _Function[X: BaseException](_WithResult[X]):
    def apply(self, *args: Any, **kwargs: Any) -> Any:
        return self(*args, **kwargs)

    def and_then(self, after: Callable[[Any], Any]) -> Self:
        """Apply self, then after to its result.

        after is not invoked if self fails.
        """
        return self._derive(chain(self, after), self.error_type)

    def on_error_apply_checked(self, fallback: Callable[..., Any], error_type: ErrorTypes | None = None) -> Self:
        """On a declared failure, apply fallback to the same inputs instead.

        Args:
            fallback: Same-shaped callable. May raise its own declared type.
            error_type: Declared type(s) of the new operation. Defaults to the
                fallback's declared types when it is a FallibleOperation.
        """
        return self._on_error_call_checked(fallback, error_type, forward_inputs=True)

    def on_error_apply_unchecked(self, fallback: Callable[..., Any]) -> Callable[..., Any]:
        """On a declared failure, apply fallback to the same inputs instead. Returns a plain callable."""
        return self._on_error_call_unchecked(fallback, forward_inputs=True)


class _UnaryFunction[X: BaseException](_Function[X]):
    def compose(self, before: Callable[..., Any]) -> Self:
        """Apply before, then self to its result.

        self is not invoked if before fails.
        """
        return self._derive(chain(before, self), self.error_type)


class CheckedFunction[T, R, X: BaseException](_UnaryFunction[X]):
    """Maps T to R and may fail with X."""


class CheckedUnaryOperator[T, X: BaseException](_UnaryFunction[X]):
    """Maps T to T and may fail with X."""


class CheckedBiFunction[T, U, R, X: BaseException](_Function[X]):
    """Maps (T, U) to R and may fail with X."""


class CheckedBinaryOperator[T, X: BaseException](_Function[X]):
    """Maps (T, T) to T and may fail with X."""


class _Predicate[X: BaseException](_WithResult[X]):
    def test(self, *args: Any, **kwargs: Any) -> bool:
        return self(*args, **kwargs)

    def and_(self, other: Callable[..., Any]) -> Self:
        """Short-circuit AND: other runs only if self returns true."""
        return self._derive(conjunction(self, other), self.error_type)

    def or_(self, other: Callable[..., Any]) -> Self:
        """Short-circuit OR: other runs only if self returns false."""
        return self._derive(disjunction(self, other), self.error_type)

    def negate(self) -> Self:
        """Invert the result. Failures propagate unchanged."""
        return self._derive(negation(self), self.error_type)

    def on_error_test_checked(self, fallback: Callable[..., Any], error_type: ErrorTypes | None = None) -> Self:
        """On a declared failure, test the same inputs with fallback instead."""
        return self._on_error_call_checked(fallback, error_type, forward_inputs=True)

    def on_error_test_unchecked(self, fallback: Callable[..., Any]) -> Callable[..., Any]:
        """On a declared failure, test the same inputs with fallback instead. Returns a plain callable."""
        return self._on_error_call_unchecked(fallback, forward_inputs=True)


class CheckedPredicate[T, X: BaseException](_Predicate[X]):
    """Tests one input and may fail with X."""


class CheckedBiPredicate[T, U, X: BaseException](_Predicate[X]):
    """Tests two inputs and may fail with X."""
