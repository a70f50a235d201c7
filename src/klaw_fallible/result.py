"""Outcome type: Ok[T] | Err[X] for a single fallible invocation.

`Err` only ever holds a *declared* failure. Undistinguished failures are not
captured in an outcome; they propagate as exceptions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypeIs

import msgspec

__all__ = ['Err', 'Ok', 'Result']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok."""
        return True

    def is_err(self) -> TypeIs[Err[BaseException]]:
        """Return False since this is Ok."""
        return False

    def unwrap(self) -> T:
        """Return the contained Ok value."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[BaseException], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err(self, _f: Callable[[BaseException], BaseException]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def and_then[U, X: BaseException](self, f: Callable[[T], Ok[U] | Err[X]]) -> Ok[U] | Err[X]:
        """Apply a function that returns a Result to the contained value."""
        return f(self.value)

    def or_else(self, _f: Callable[[BaseException], Ok[T] | Err[BaseException]]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self


class Err[X: BaseException](msgspec.Struct, frozen=True):
    """Declared-failure variant of Result containing the caught error.

    Examples:
        >>> err = Err(OSError('disk'))
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: X

    def is_ok(self) -> TypeIs[Ok[object]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[X]]:
        """Return True if the result is Err."""
        return True

    def unwrap(self) -> NoReturn:
        """Re-raise the contained error.

        The error is raised as-is: same object, same traceback.

        Raises:
            X: Always.
        """
        raise self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[X], T]) -> T:
        """Compute a value from the contained error."""
        return f(self.error)

    def map[T, U](self, _f: Callable[[T], U]) -> Err[X]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[Y: BaseException](self, f: Callable[[X], Y]) -> Err[Y]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[X]]) -> Err[X]:
        """Return self unchanged since this is Err."""
        return self

    def or_else[T, Y: BaseException](self, f: Callable[[X], Ok[T] | Err[Y]]) -> Ok[T] | Err[Y]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)


type Result[T, X: BaseException = Exception] = Ok[T] | Err[X]
