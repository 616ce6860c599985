"""
Vector commitment schemes
"""

from .base import VectorCommitmentScheme
from .cf13 import CF13
from .serialization import AuxData, Parameters
