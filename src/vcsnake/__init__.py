"""
Pairing-based vector commitments
"""

import logging

from .commitment.vector import CF13, AuxData, Parameters, VectorCommitmentScheme
from .ecc import EllipticCurve
from .errors import (
    ErrorKind,
    IndexOutOfRange,
    InvalidDimension,
    LengthMismatch,
    MalformedParameters,
    RandomnessFailure,
    VectorCommitmentError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())
