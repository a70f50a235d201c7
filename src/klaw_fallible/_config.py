"""Package configuration: CarrierTrace enum, FallibleConfig, and initialization."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from klaw_fallible._logging import configure_logging, get_logger
from klaw_fallible.errors import ContractViolationError

__all__ = [
    'CarrierTrace',
    'FallibleConfig',
    'get_config',
    'init',
    'reset',
]

logger = get_logger(__name__)


class CarrierTrace(Enum):
    """Whether carriers built by ``unchecked()`` record their construction site."""

    WITH = 'with'
    WITHOUT = 'without'


@dataclass(frozen=True)
class FallibleConfig:
    """Configuration for klaw-fallible.

    Attributes:
        carrier_trace: Carrier construction mode used by ``unchecked()``.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
    """

    carrier_trace: CarrierTrace = CarrierTrace.WITHOUT
    log_level: str | None = None


# Global configuration (set by init())
_config: FallibleConfig | None = None


def _resolve_carrier_trace(carrier_trace: CarrierTrace | str | None) -> CarrierTrace:
    if carrier_trace is None:
        return CarrierTrace.WITHOUT
    if isinstance(carrier_trace, CarrierTrace):
        return carrier_trace
    try:
        return CarrierTrace(str(carrier_trace).lower())
    except ValueError as e:
        choices = ', '.join(repr(mode.value) for mode in CarrierTrace)
        msg = f'carrier_trace must be one of {choices}, got {carrier_trace!r}'
        raise ContractViolationError(msg) from e


def init(
    carrier_trace: CarrierTrace | str | None = None,
    log_level: str | None = None,
) -> FallibleConfig:
    """Initialize klaw-fallible with the specified configuration.

    Args:
        carrier_trace: Carrier mode for ``unchecked()``. Defaults to WITHOUT.
            Can be CarrierTrace enum or string ("with", "without").
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The FallibleConfig that was set.

    Raises:
        ContractViolationError: If carrier_trace is not a known mode.

    Example:
        ```python
        from klaw_fallible import init, CarrierTrace

        init(carrier_trace=CarrierTrace.WITH, log_level="DEBUG")
        ```
    """
    global _config  # noqa: PLW0603

    _config = FallibleConfig(carrier_trace=_resolve_carrier_trace(carrier_trace), log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    logger.debug('fallible_initialized', carrier_trace=_config.carrier_trace.value, log_level=log_level)
    return _config


def get_config() -> FallibleConfig:
    """Get the current configuration, initializing defaults on first use."""
    if _config is None:
        return init()
    return _config


def reset() -> None:
    """Discard the current configuration."""
    global _config  # noqa: PLW0603
    _config = None
