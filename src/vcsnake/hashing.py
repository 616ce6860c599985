"""
Hash-to-field over the scalar field of a pairing curve,
following `hash_to_field` of RFC 9380 with `expand_message_xmd`
and SHA-256.
"""

import hashlib

from py_ecc.bls.hash import expand_message_xmd

from .constant import DEFAULT_DST, HASH_TO_FIELD_SECURITY_BITS
from .ecc import CurveOrder


def check_dst(domain_separation_tag):
    if not isinstance(domain_separation_tag, bytes):
        raise TypeError("Domain separation tag must be bytes")
    if not 0 < len(domain_separation_tag) <= 255:
        raise ValueError("Domain separation tag must be between 1 and 255 bytes")


class FieldHasher:
    """
    Deterministic map from byte strings to scalar field elements

    Args:
        domain_separation_tag: non-empty tag of at most 255 bytes
        curve: `BN254` or `BLS12_381`
    """

    def __init__(self, domain_separation_tag: bytes = DEFAULT_DST, curve: str = "BN254"):
        check_dst(domain_separation_tag)

        self.dst = domain_separation_tag
        self.order = CurveOrder[curve].value
        # L = ceil((ceil(log2(r)) + k) / 8)
        self.element_size = -(-(self.order.bit_length() + HASH_TO_FIELD_SECURITY_BITS) // 8)

    def hash_to_field(self, data: bytes, count: int = 1) -> list:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Cannot hash {type(data)}, bytes expected")

        uniform = expand_message_xmd(
            bytes(data), self.dst, count * self.element_size, hashlib.sha256
        )

        n = self.element_size
        return [
            int.from_bytes(uniform[i * n : (i + 1) * n], "big") % self.order
            for i in range(count)
        ]

    def __call__(self, data: bytes) -> int:
        return self.hash_to_field(data, 1)[0]


def hash_to_scalar(data: bytes, domain_separation_tag: bytes, curve: str = "BN254"):
    return FieldHasher(domain_separation_tag, curve)(data)
