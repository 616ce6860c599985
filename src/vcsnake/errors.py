"""Error kinds raised by vector commitment schemes"""

from enum import Enum


class ErrorKind(Enum):
    LENGTH_MISMATCH = "length mismatch"
    INDEX_OUT_OF_RANGE = "index out of range"
    MALFORMED_PARAMETERS = "malformed parameters"
    INVALID_DIMENSION = "invalid dimension"
    RANDOMNESS_FAILURE = "randomness failure"


class VectorCommitmentError(ValueError):
    """
    Base class of every input-validation failure.

    Failures are deterministic for a given input, so callers
    should not retry. `kind` tags the failure for callers
    that dispatch on it instead of on the exception class.
    """

    kind: ErrorKind = None

    def __str__(self):
        msg = super().__str__()
        return f"{self.kind.value}: {msg}" if msg else self.kind.value


class LengthMismatch(VectorCommitmentError):
    kind = ErrorKind.LENGTH_MISMATCH


class IndexOutOfRange(VectorCommitmentError):
    kind = ErrorKind.INDEX_OUT_OF_RANGE


class MalformedParameters(VectorCommitmentError):
    kind = ErrorKind.MALFORMED_PARAMETERS


class InvalidDimension(VectorCommitmentError):
    kind = ErrorKind.INVALID_DIMENSION


class RandomnessFailure(VectorCommitmentError):
    kind = ErrorKind.RANDOMNESS_FAILURE
