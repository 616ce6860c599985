from ...constant import DEFAULT_DST
from ...ecc import EllipticCurve, CurvePointSize, CurveScalarSize, ispointG1, ispointG2
from ...errors import MalformedParameters
from ...hashing import check_dst
from ...utils import split_list


class Parameters:
    """
    Public parameters of the CF13 vector commitment.

    `h1`, `h2` hold one point per index in G1 and G2, `hh1`, `hh2`
    are the `q x q` cross products `h[i] * z_j`, `dst` is the
    hash-to-field domain separation tag. Parameters are never
    mutated after setup.
    """

    def __init__(self, g2, h1, h2, hh1, hh2, curve="BN254", dst=DEFAULT_DST):
        self.g2 = g2
        self.h1 = h1
        self.h2 = h2
        self.hh1 = hh1
        self.hh2 = hh2
        self.curve = EllipticCurve(curve).name
        self.dst = dst

    @property
    def q(self) -> int:
        return len(self.h1)

    def __eq__(self, other):
        if not isinstance(other, Parameters):
            return NotImplemented
        return (
            self.curve == other.curve
            and self.dst == other.dst
            and self.g2 == other.g2
            and self.h1 == other.h1
            and self.h2 == other.h2
            and self.hh1 == other.hh1
            and self.hh2 == other.hh2
        )

    def __repr__(self):
        return f"Parameters(curve={self.curve}, q={self.q}, dst={self.dst!r})"

    def validate(self):
        """Raise `MalformedParameters` if the shape or the point types are wrong"""
        q = self.q
        if q < 1:
            raise MalformedParameters("Parameters must cover at least one index")
        if len(self.h2) != q:
            raise MalformedParameters(f"Length of h2 is {len(self.h2)}, expected {q}")

        for label, matrix in (("hh1", self.hh1), ("hh2", self.hh2)):
            if len(matrix) != q or any(len(row) != q for row in matrix):
                raise MalformedParameters(f"{label} must be a {q}x{q} matrix")

        g1_points = list(self.h1) + [p for row in self.hh1 for p in row]
        g2_points = [self.g2] + list(self.h2) + [p for row in self.hh2 for p in row]
        if not all(ispointG1(p) and p.name == self.curve for p in g1_points):
            raise MalformedParameters(f"h1 and hh1 must hold G1 points of {self.curve}")
        if not all(ispointG2(p) and p.name == self.curve for p in g2_points):
            raise MalformedParameters(f"g2, h2 and hh2 must hold G2 points of {self.curve}")

        try:
            check_dst(self.dst)
        except (TypeError, ValueError) as exc:
            raise MalformedParameters(str(exc)) from exc

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254"):
        """Construct Parameters from bytes"""
        E = EllipticCurve(crv)
        n = CurvePointSize[E.name].value
        s = bytes(s)

        if len(s) < 1:
            raise MalformedParameters("Empty parameters")
        dst_length = s[0]
        header = 1 + dst_length + 8
        if len(s) < header:
            raise MalformedParameters("Truncated parameters header")

        dst = s[1 : 1 + dst_length]
        q = int.from_bytes(s[1 + dst_length : header], "little")
        if q < 1:
            raise MalformedParameters("Parameters must cover at least one index")

        blocks = s[header:]
        expected = n * 2 + q * n * 3 + q * q * n * 3
        if len(blocks) != expected:
            raise MalformedParameters(
                f"Invalid parameters length, expected {expected} bytes of points for q={q}"
            )

        h1_end = n * 2 + q * n
        h2_end = h1_end + q * n * 2
        hh1_end = h2_end + q * q * n

        try:
            g2 = E.from_bytes(blocks[: n * 2])
            h1 = [E.from_bytes(b) for b in split_list(blocks[n * 2 : h1_end], n)]
            h2 = [E.from_bytes(b) for b in split_list(blocks[h1_end:h2_end], n * 2)]
            hh1 = split_list(
                [E.from_bytes(b) for b in split_list(blocks[h2_end:hh1_end], n)], q
            )
            hh2 = split_list(
                [E.from_bytes(b) for b in split_list(blocks[hh1_end:], n * 2)], q
            )
        except ValueError as exc:
            raise MalformedParameters(f"Invalid point encoding: {exc}") from exc

        params = cls(g2, h1, h2, hh1, hh2, E.name, dst)
        params.validate()
        return params

    def to_bytes(self) -> bytes:
        """Return bytes representation of the Parameters"""
        s = bytes([len(self.dst)]) + self.dst + self.q.to_bytes(8, "little")
        s += self.g2.to_bytes()
        s += b"".join(p.to_bytes() for p in self.h1)
        s += b"".join(p.to_bytes() for p in self.h2)
        s += b"".join(p.to_bytes() for row in self.hh1 for p in row)
        s += b"".join(p.to_bytes() for row in self.hh2 for p in row)
        return s


class AuxData:
    """
    Private state of one commitment: the hash of every message.
    Kept by the committer to open positions, never sent to a verifier.
    """

    def __init__(self, msg_hashes: list, curve="BN254"):
        self.msg_hashes = msg_hashes
        self.curve = EllipticCurve(curve).name

    def __len__(self):
        return len(self.msg_hashes)

    def __eq__(self, other):
        if not isinstance(other, AuxData):
            return NotImplemented
        return self.curve == other.curve and self.msg_hashes == other.msg_hashes

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254"):
        """Construct AuxData from bytes"""
        E = EllipticCurve(crv)
        n = CurveScalarSize[E.name].value
        s = bytes(s)

        if len(s) < 8:
            raise MalformedParameters("Truncated aux data header")

        q = int.from_bytes(s[:8], "little")
        blocks = s[8:]
        if len(blocks) != q * n:
            raise MalformedParameters(f"Expected {q} scalars of {n} bytes in aux data")

        try:
            msg_hashes = [E.scalar_from_bytes(b) for b in split_list(blocks, n)]
        except ValueError as exc:
            raise MalformedParameters(f"Invalid aux data: {exc}") from exc

        return cls(msg_hashes, E.name)

    def to_bytes(self) -> bytes:
        """Return bytes representation of the AuxData"""
        E = EllipticCurve(self.curve)
        return len(self.msg_hashes).to_bytes(8, "little") + b"".join(
            E.scalar_to_bytes(h) for h in self.msg_hashes
        )
