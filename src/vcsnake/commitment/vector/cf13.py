"""
Vector commitment of Catalano and Fiore ("Vector Commitments and their
Applications", PKC 2013, section 3.1) over a pairing-friendly curve.

Setup samples trapdoor scalars z_1..z_q and publishes

    h1[i] = g1 * z_i            h2[i] = g2 * z_i
    hh1[i][j] = h1[i] * z_j     hh2[i][j] = h2[i] * z_j

A vector is committed as C = sum(h1[i] * H(m_i)) and the proof for
index i is P = sum_{j != i}(hh1[i][j] * H(m_j)). The verifier strips
the contribution of index i from C and checks

    e(C - h1[i] * H(m_i), h2[i]) == e(P, g2)

Setup costs O(q^2) scalar multiplications and produces O(q^2) points,
so `q` should be chosen with care.
"""

import logging
import random
from contextlib import contextmanager

from joblib import Parallel, delayed

from ...constant import DEFAULT_DST
from ...ecc import Curve, EllipticCurve, ispointG1
from ...errors import (
    IndexOutOfRange,
    InvalidDimension,
    LengthMismatch,
    MalformedParameters,
    RandomnessFailure,
)
from ...hashing import FieldHasher, check_dst
from ...utils import Timer, get_n_jobs, get_random_int
from .base import VectorCommitmentScheme
from .serialization import AuxData, Parameters

logger = logging.getLogger(__name__)


@contextmanager
def trapdoor(order: int, size: int, rng):
    """
    Sample `size` non-zero scalars below `order`.

    The list is overwritten with zeros and emptied when the block
    exits, also when sampling or the block itself raises.
    """
    z = []
    try:
        for _ in range(size):
            try:
                z.append(get_random_int(order - 1, rng))
            except Exception as exc:
                raise RandomnessFailure(f"Randomness source failed: {exc}") from exc
        yield z
    finally:
        for i in range(len(z)):
            z[i] = 0
        z.clear()


def _upper_row(point, z, i):
    return [point * z[j] for j in range(i, len(z))]


def _cross_products(points, z):
    """
    Compute `points[i] * z[j]` for every i, j.

    The matrix is symmetric since points[i] = g * z[i], so only
    j >= i is multiplied. Threads keep the trapdoor in this process.
    """
    q = len(points)
    upper = Parallel(n_jobs=get_n_jobs(), backend="threading")(
        delayed(_upper_row)(point, z, i) for i, point in enumerate(points)
    )

    matrix = [[None] * q for _ in range(q)]
    for i in range(q):
        for j in range(i, q):
            matrix[i][j] = matrix[j][i] = upper[i][j - i]

    return matrix


class CF13(VectorCommitmentScheme):
    """
    CF13 vector commitment

    Args:
        curve: `BN254` or `BLS12_381`
        dst: domain separation tag of the message hash, parameters
            generated under another tag are rejected
    """

    Parameters = Parameters
    Message = bytes
    Commitment = Curve
    AuxData = AuxData
    Proof = Curve

    def __init__(self, curve: str = "BN254", dst: bytes = DEFAULT_DST):
        super().__init__()
        check_dst(dst)
        self.E = EllipticCurve(curve)
        self.order = self.E.order
        self.name = "CF13"
        self.dst = dst

    def generate_parameters(self, q: int, rng=None) -> Parameters:
        """
        Run the trusted setup for vectors of length `q`

        Args:
            q: vector length, at least 1
            rng: `random.Random` compatible source, defaults to
                `random.SystemRandom`
        """
        if not isinstance(q, int) or isinstance(q, bool):
            raise TypeError(f"Vector length must be int, got {type(q)}")
        if q < 1:
            raise InvalidDimension(f"Vector length must be at least 1, got {q}")

        rng = rng or random.SystemRandom()
        logger.info("Generating %s parameters on %s for q=%d", self.name, self.E.name, q)

        with Timer(f"{self.name} setup (q={q})"):
            with trapdoor(self.order, 2, rng) as generators:
                g1 = self.E.G1() * generators[0]
                g2 = self.E.G2() * generators[1]

            with trapdoor(self.order, q, rng) as z:
                h1, h2 = Parallel(n_jobs=get_n_jobs(), backend="threading")(
                    delayed(lambda g: [g * zi for zi in z])(g) for g in (g1, g2)
                )
                hh1 = _cross_products(h1, z)
                hh2 = _cross_products(h2, z)

        return Parameters(g2, h1, h2, hh1, hh2, self.E.name, self.dst)

    def commit(self, parameters: Parameters, messages) -> tuple:
        """
        Commit to `messages`, a sequence of exactly `q` byte strings

        Returns the commitment and the `AuxData` needed to open it
        """
        self._check_parameters(parameters)
        if len(messages) != parameters.q:
            raise LengthMismatch(
                f"Expected vector of length {parameters.q}, got {len(messages)}"
            )

        hasher = FieldHasher(parameters.dst, self.E.name)
        msg_hashes = [hasher(message) for message in messages]

        commitment = self.E.multiexp(parameters.h1, msg_hashes)
        logger.debug("Committed to vector of length %d", parameters.q)

        return commitment, AuxData(msg_hashes, self.E.name)

    def open(self, parameters: Parameters, aux: AuxData, index: int):
        """Create the proof that the committed vector holds its message at `index`"""
        self._check_parameters(parameters)
        self._check_index(parameters, index)
        if not isinstance(aux, AuxData):
            raise TypeError(f"Expected AuxData, got {type(aux)}")
        if aux.curve != self.E.name:
            raise MalformedParameters(
                f"Aux data is for {aux.curve}, scheme uses {self.E.name}"
            )
        if len(aux) != parameters.q:
            raise LengthMismatch(
                f"Aux data holds {len(aux)} hashes, expected {parameters.q}"
            )

        row = parameters.hh1[index]
        points = [p for j, p in enumerate(row) if j != index]
        scalars = [h for j, h in enumerate(aux.msg_hashes) if j != index]

        if not points:
            return self.E.identity_G1()

        return self.E.multiexp(points, scalars)

    def verify(
        self, parameters: Parameters, commitment, message: bytes, index: int, proof
    ) -> bool:
        """Check that `message` is committed at `index`"""
        self._check_parameters(parameters)
        self._check_index(parameters, index)
        for label, point in (("Commitment", commitment), ("Proof", proof)):
            if not ispointG1(point) or point.name != self.E.name:
                raise TypeError(f"{label} must be a G1 point of {self.E.name}")

        msg_hash = FieldHasher(parameters.dst, self.E.name)(message)
        a = commitment - parameters.h1[index] * msg_hash

        # e(A, h2[i]) * e(-P, g2) == 1
        result = self.E.pairing_check(
            [a, -proof], [parameters.h2[index], parameters.g2]
        )
        logger.debug("Opening at index %d verified: %s", index, result)

        return result

    def _check_parameters(self, parameters):
        if not isinstance(parameters, Parameters):
            raise TypeError(f"Expected Parameters, got {type(parameters)}")
        if parameters.curve != self.E.name:
            raise MalformedParameters(
                f"Parameters are for {parameters.curve}, scheme uses {self.E.name}"
            )
        if parameters.dst != self.dst:
            raise MalformedParameters(
                f"Parameters use hash tag {parameters.dst!r}, scheme uses {self.dst!r}"
            )
        parameters.validate()

    @staticmethod
    def _check_index(parameters, index):
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"Index must be int, got {type(index)}")
        if not 0 <= index < parameters.q:
            raise IndexOutOfRange(f"Index {index} is outside [0, {parameters.q})")
