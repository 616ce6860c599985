from abc import ABC, abstractmethod


class VectorCommitmentScheme(ABC):
    """
    Capability shared by every vector commitment construction.

    A construction names its associated types as class attributes
    and implements the four operations below. Input validation
    failures raise `vcsnake.errors.VectorCommitmentError` subclasses;
    a false opening claim is reported by `verify` returning False.
    """

    Parameters = None
    Message = bytes
    Commitment = None
    AuxData = None
    Proof = None

    def __init__(self):
        self.order = None
        self.name = ""

    @abstractmethod
    def generate_parameters(self, q: int, rng=None):
        raise NotImplementedError()

    @abstractmethod
    def commit(self, parameters, messages):
        raise NotImplementedError()

    @abstractmethod
    def open(self, parameters, aux, index: int):
        raise NotImplementedError()

    @abstractmethod
    def verify(self, parameters, commitment, message, index: int, proof) -> bool:
        raise NotImplementedError()
