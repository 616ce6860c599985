import time
from vcsnake import CF13


def run(q, crv):

    time_results = []

    msgs = [f"message {i}".encode() for i in range(q)]
    cf13 = CF13(crv)

    start = time.time()
    params = cf13.generate_parameters(q)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    commitment, aux = cf13.commit(params, msgs)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    proof = cf13.open(params, aux, q // 2)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    assert cf13.verify(params, commitment, msgs[q // 2], q // 2, proof)
    end = time.time() - start
    time_results.append(end)

    time_results.append(len(params.to_bytes()))

    return time_results


vector_lengths = [4, 8, 16, 32]
crvs = ["BN254", "BLS12_381"]

results = []
for q in vector_lengths:
    for crv in crvs:
        result = run(q, crv)
        print(f"q = {q} with {crv} curve")
        print("=" * 50)
        print("Setup time:", result[0])
        print("Commit time:", result[1])
        print("Open time:", result[2])
        print("Verify time:", result[3])
        print("Parameters size:", result[4], "bytes")
        print()
