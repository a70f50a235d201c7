"""klaw-fallible: Declared-error combinators and an exception tunnel.

Wrap plain callables together with the exception type they declare, compose
them, recover from the declared failure in a controlled way, and carry it
through code that cannot declare it.

Flat imports (preferred):
    from klaw_fallible import CheckedFunction, CheckedPredicate, UncheckedError
    from klaw_fallible import checked, invoke_and_unwrap, fallible

Submodule imports (for organization):
    from klaw_fallible.operations import CheckedFunction
    from klaw_fallible.tunnel import checked, invoke_and_unwrap
    from klaw_fallible.errors import UncheckedError
"""

# Configuration
from klaw_fallible._config import CarrierTrace, FallibleConfig, get_config, init, reset

# Logging
from klaw_fallible._logging import configure_logging, get_logger

# Algebra
from klaw_fallible.algebra import FallibleOperation

# Decorators
from klaw_fallible.decorators import fallible, unwrapping

# Errors
from klaw_fallible.errors import (
    ContractViolationError,
    Unchecked,
    UncheckedError,
    UnexpectedCauseError,
)

# Shapes
from klaw_fallible.operations import (
    CheckedBiConsumer,
    CheckedBiFunction,
    CheckedBinaryOperator,
    CheckedBiPredicate,
    CheckedConsumer,
    CheckedFunction,
    CheckedPredicate,
    CheckedRunnable,
    CheckedSupplier,
    CheckedUnaryOperator,
)

# Outcomes
from klaw_fallible.result import Err, Ok, Result

# Tunnel
from klaw_fallible.tunnel import checked, invoke_and_unwrap, unchecked

__all__ = [
    # Configuration
    'CarrierTrace',
    # Shapes
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
    # Errors
    'ContractViolationError',
    # Outcomes
    'Err',
    'FallibleConfig',
    # Algebra
    'FallibleOperation',
    'Ok',
    'Result',
    'Unchecked',
    'UncheckedError',
    'UnexpectedCauseError',
    # Tunnel
    'checked',
    # Logging
    'configure_logging',
    # Decorators
    'fallible',
    'get_config',
    'get_logger',
    'init',
    'invoke_and_unwrap',
    'reset',
    'unchecked',
    'unwrapping',
]
