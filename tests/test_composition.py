"""Tests for structural composition: and_, or_, negate, compose, and_then."""

import operator
from unittest.mock import Mock

import pytest
from hypothesis import given
from klaw_fallible import (
    CheckedBiConsumer,
    CheckedBiFunction,
    CheckedBinaryOperator,
    CheckedBiPredicate,
    CheckedConsumer,
    CheckedFunction,
    CheckedPredicate,
    CheckedUnaryOperator,
    ContractViolationError,
)

from strategies import CustomCheckedError, booleans, integers


class TestPredicateAnd:
    """Tests for short-circuit AND."""

    def test_first_failure_short_circuits(self):
        """A failing first predicate propagates unchanged and the second is never invoked."""
        error = OSError('x')

        def equals_ignore_case(a, b):
            raise error

        second = Mock(return_value=True)
        composite = CheckedBiPredicate(equals_ignore_case, OSError).and_(second)

        with pytest.raises(OSError, match='x') as exc_info:
            composite.test('foo', 'bar')

        assert exc_info.value is error
        second.assert_not_called()

    def test_false_first_skips_second(self):
        """A false first result returns False without invoking the second."""
        second = Mock(return_value=True)
        composite = CheckedPredicate(lambda x: False, OSError).and_(second)

        assert composite.test(1) is False
        second.assert_not_called()

    def test_true_first_invokes_second_with_same_inputs(self):
        """A true first result passes the same inputs to the second."""
        second = Mock(return_value=True)
        composite = CheckedBiPredicate(lambda a, b: True, OSError).and_(second)

        assert composite.test('foo', 'bar') is True
        second.assert_called_once_with('foo', 'bar')

    def test_second_failure_propagates(self):
        """A failure of the second predicate propagates unchanged."""
        error = CustomCheckedError('second')
        composite = CheckedPredicate(lambda x: True, CustomCheckedError).and_(Mock(side_effect=error))

        with pytest.raises(CustomCheckedError) as exc_info:
            composite.test(1)

        assert exc_info.value is error

    def test_undeclared_first_failure_skips_second(self):
        """Undeclared failures short-circuit the same way."""
        error = ValueError('undeclared')
        second = Mock(return_value=True)
        composite = CheckedPredicate(Mock(side_effect=error), OSError).and_(second)

        with pytest.raises(ValueError, match='undeclared'):
            composite.test(1)

        second.assert_not_called()

    def test_keeps_shape_and_declared_type(self):
        """The composite has the receiver's shape and declared type."""
        composite = CheckedPredicate(lambda x: True, OSError).and_(lambda x: True)

        assert isinstance(composite, CheckedPredicate)
        assert composite.error_type == (OSError,)

    @given(booleans, booleans)
    def test_matches_logical_and(self, a, b):
        """and_ agrees with logical AND for any pair of results."""
        composite = CheckedPredicate(lambda x: a, OSError).and_(lambda x: b)
        assert composite.test(None) is (a and b)


class TestPredicateOr:
    """Tests for short-circuit OR."""

    def test_true_first_skips_second(self):
        """A true first result returns True without invoking the second."""
        second = Mock(return_value=False)
        composite = CheckedPredicate(lambda x: True, OSError).or_(second)

        assert composite.test(1) is True
        second.assert_not_called()

    def test_false_first_invokes_second(self):
        """A false first result returns the second's result."""
        second = Mock(return_value=True)
        composite = CheckedPredicate(lambda x: False, OSError).or_(second)

        assert composite.test(1) is True
        second.assert_called_once_with(1)

    def test_first_failure_short_circuits(self):
        """A failing first predicate never invokes the second."""
        error = CustomCheckedError('first')
        second = Mock(return_value=True)
        composite = CheckedPredicate(Mock(side_effect=error), CustomCheckedError).or_(second)

        with pytest.raises(CustomCheckedError) as exc_info:
            composite.test(1)

        assert exc_info.value is error
        second.assert_not_called()

    @given(booleans, booleans)
    def test_matches_logical_or(self, a, b):
        """or_ agrees with logical OR for any pair of results."""
        composite = CheckedPredicate(lambda x: a, OSError).or_(lambda x: b)
        assert composite.test(None) is (a or b)


class TestPredicateNegate:
    """Tests for negate()."""

    @given(booleans)
    def test_inverts_result(self, value):
        """negate() inverts the result."""
        assert CheckedPredicate(lambda x: value, OSError).negate().test(0) is (not value)

    def test_failure_propagates_unchanged(self):
        """negate() does not touch failures."""
        error = CustomCheckedError('boom')
        negated = CheckedPredicate(Mock(side_effect=error), CustomCheckedError).negate()

        with pytest.raises(CustomCheckedError) as exc_info:
            negated.test(1)

        assert exc_info.value is error
        assert negated.error_type == (CustomCheckedError,)


class TestFunctionComposition:
    """Tests for compose() and and_then() on functions."""

    @given(integers)
    def test_and_then_applies_after_to_result(self, value):
        """and_then feeds the receiver's result into after."""
        composite = CheckedFunction(lambda x: x + 1, CustomCheckedError).and_then(lambda y: y * 2)
        assert composite.apply(value) == (value + 1) * 2

    @given(integers)
    def test_compose_applies_before_first(self, value):
        """compose feeds before's result into the receiver."""
        composite = CheckedFunction(lambda x: x + 1, CustomCheckedError).compose(lambda y: y * 2)
        assert composite.apply(value) == value * 2 + 1

    def test_and_then_skips_after_on_failure(self):
        """after is not invoked when the receiver fails."""
        error = CustomCheckedError('boom')
        after = Mock()
        composite = CheckedFunction(Mock(side_effect=error), CustomCheckedError).and_then(after)

        with pytest.raises(CustomCheckedError) as exc_info:
            composite.apply(1)

        assert exc_info.value is error
        after.assert_not_called()

    def test_compose_skips_receiver_on_failure(self):
        """The receiver is not invoked when before fails."""
        error = CustomCheckedError('before')
        receiver = Mock(return_value=0)
        composite = CheckedFunction(receiver, CustomCheckedError).compose(Mock(side_effect=error))

        with pytest.raises(CustomCheckedError) as exc_info:
            composite.apply(1)

        assert exc_info.value is error
        receiver.assert_not_called()

    def test_unary_operator_composes(self):
        """Unary operators compose like functions."""
        double = CheckedUnaryOperator(lambda x: x * 2, CustomCheckedError)
        composite = double.compose(lambda x: x + 3).and_then(str)

        assert isinstance(composite, CheckedUnaryOperator)
        assert composite.apply(1) == '8'

    def test_bi_function_and_then(self):
        """BiFunction.and_then applies after to the two-argument result."""
        composite = CheckedBiFunction(operator.add, CustomCheckedError).and_then(str)

        assert isinstance(composite, CheckedBiFunction)
        assert composite.apply(1, 2) == '3'

    def test_composite_is_reusable(self):
        """A composite holds no per-call state."""
        composite = CheckedFunction(lambda x: x + 1, CustomCheckedError).and_then(lambda y: y * 2)
        assert [composite(i) for i in range(3)] == [2, 4, 6]
        assert [composite(i) for i in range(3)] == [2, 4, 6]


class TestConsumerAndThen:
    """Tests for and_then() on consumers."""

    def test_runs_both_in_order(self):
        """Both consumers receive the same input, receiver first."""
        seen = []
        composite = CheckedConsumer(seen.append, CustomCheckedError).and_then(lambda x: seen.append(x * 2))

        assert composite.accept(3) is None
        assert seen == [3, 6]

    def test_skips_after_on_failure(self):
        """after is not invoked when the receiver fails."""
        after = Mock()
        composite = CheckedConsumer(Mock(side_effect=CustomCheckedError('boom')), CustomCheckedError).and_then(after)

        with pytest.raises(CustomCheckedError):
            composite.accept(1)

        after.assert_not_called()

    def test_bi_consumer_passes_both_inputs(self):
        """BiConsumer.and_then passes both inputs to each consumer."""
        first = Mock()
        second = Mock()
        CheckedBiConsumer(first, OSError).and_then(second).accept('k', 'v')

        first.assert_called_once_with('k', 'v')
        second.assert_called_once_with('k', 'v')


class TestNullRejection:
    """Composition combinators reject None eagerly."""

    @pytest.mark.parametrize(
        'build',
        [
            pytest.param(lambda: CheckedPredicate(bool, OSError).and_(None), id='and_'),
            pytest.param(lambda: CheckedPredicate(bool, OSError).or_(None), id='or_'),
            pytest.param(lambda: CheckedFunction(abs, OSError).compose(None), id='compose'),
            pytest.param(lambda: CheckedFunction(abs, OSError).and_then(None), id='function_and_then'),
            pytest.param(lambda: CheckedConsumer(print, OSError).and_then(None), id='consumer_and_then'),
            pytest.param(lambda: CheckedBiPredicate(max, OSError).and_(None), id='bi_and_'),
            pytest.param(lambda: CheckedBiPredicate(max, OSError).or_(None), id='bi_or_'),
            pytest.param(lambda: CheckedUnaryOperator(abs, OSError).compose(None), id='unary_compose'),
            pytest.param(lambda: CheckedBiFunction(max, OSError).and_then(None), id='bi_function_and_then'),
            pytest.param(lambda: CheckedBinaryOperator(max, OSError).and_then(None), id='binary_and_then'),
            pytest.param(lambda: CheckedBiConsumer(print, OSError).and_then(None), id='bi_consumer_and_then'),
        ],
    )
    def test_rejects_none(self, build):
        """Passing None raises ContractViolationError at construction time."""
        with pytest.raises(ContractViolationError):
            build()

    def test_rejects_non_callable(self):
        """A non-callable operand is a contract violation too."""
        with pytest.raises(ContractViolationError):
            CheckedFunction(abs, OSError).and_then(42)

    def test_contract_violation_is_type_error(self):
        """ContractViolationError is a TypeError."""
        with pytest.raises(TypeError):
            CheckedFunction(None)


class TestOperationIdentity:
    """Equality and hashing cover shape and declared types."""

    def test_equal_when_all_parts_match(self):
        """Same callable, shape and declared types compare equal."""
        assert CheckedFunction(abs, OSError) == CheckedFunction(abs, OSError)
        assert hash(CheckedFunction(abs, OSError)) == hash(CheckedFunction(abs, OSError))

    def test_declared_types_distinguish(self):
        """Different declared types make different operations."""
        assert CheckedFunction(abs, OSError) != CheckedFunction(abs, ValueError)

    def test_shape_distinguishes(self):
        """Different shapes over one callable are different operations."""
        assert CheckedFunction(bool, OSError) != CheckedPredicate(bool, OSError)

    def test_not_equal_to_wrapped_callable(self):
        """An operation is not equal to the plain callable it wraps."""
        assert CheckedFunction(abs, OSError) != abs

    def test_usable_as_set_members(self):
        """Operations can be deduplicated by value."""
        assert len({CheckedFunction(abs, OSError), CheckedFunction(abs, OSError), CheckedFunction(abs)}) == 2

    def test_parameterized_construction_leaves_callable_alone(self):
        """Building through CheckedFunction[...] never sets attributes on the callable."""

        def increment(x):
            return x + 1

        operation = CheckedFunction[int, int, OSError](increment, OSError)

        assert operation.apply(1) == 2
        assert '__orig_class__' not in vars(increment)
        assert operation.__orig_class__ == CheckedFunction[int, int, OSError]
