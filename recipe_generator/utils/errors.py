"""Error taxonomy for recipe generation and improvement.

Generation entry points absorb every one of these into fallback synthesis.
The improvement entry point raises them to its caller.
"""

from enum import Enum


class FailureReason(str, Enum):
    """Why a model-backed step could not produce a trusted result."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    VALIDATION = "validation"
    INPUT = "input"


class RecipeGenerationError(Exception):
    """Base class carrying a reason code and a human-readable message."""

    reason: FailureReason

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(RecipeGenerationError):
    """No usable model credential is configured."""

    reason = FailureReason.CONFIGURATION


class TransportError(RecipeGenerationError):
    """The model call raised or timed out (network, quota, provider error)."""

    reason = FailureReason.TRANSPORT


class OutputValidationError(RecipeGenerationError):
    """The model responded, but not in the shape the output contract requires."""

    reason = FailureReason.VALIDATION


class InputError(RecipeGenerationError, ValueError):
    """The caller supplied nothing to work with."""

    reason = FailureReason.INPUT


ERRORS_BY_REASON: dict[FailureReason, type[RecipeGenerationError]] = {
    FailureReason.CONFIGURATION: ConfigurationError,
    FailureReason.TRANSPORT: TransportError,
    FailureReason.VALIDATION: OutputValidationError,
    FailureReason.INPUT: InputError,
}
