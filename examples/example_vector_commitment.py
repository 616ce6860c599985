import logging

from vcsnake import CF13, Parameters
from vcsnake.ecc import EllipticCurve

logging.basicConfig(level=logging.DEBUG)

vector = [b"Alice", b"Bob", b"Carol", b"Dave"]

# trusted setup, run once and publish the parameters
cf13 = CF13("BN254")
params = cf13.generate_parameters(len(vector))
published = params.to_bytes()

# committer
commitment, aux = cf13.commit(params, vector)
proof = cf13.open(params, aux, 2)
print("Commitment:", commitment.hex())
print("Proof:", proof.hex())

# verifier only holds the published parameters and the exchanged bytes
E = EllipticCurve("BN254")
verifier_params = Parameters.from_bytes(published, "BN254")

assert cf13.verify(verifier_params, E.from_bytes(commitment.to_bytes()), b"Carol", 2, proof)
assert not cf13.verify(verifier_params, commitment, b"Mallory", 2, proof)
print("Opening at index 2 verified")
