"""Gate error example: decompose a noisy X gate and sample its errors.

The channel is a mixture of depolarizing noise and amplitude damping. The
decomposition separates the cheap parts (no error, Pauli errors) from the
genuinely non-unitary part, then each simulated gate execution draws one of
them.
"""

from __future__ import annotations

import math
from collections import Counter

import gatenoise as gn


def main() -> None:
    """Decompose the channel and sample 2000 noisy X gates."""
    # Half depolarizing(0.1), half amplitude damping(0.2)
    weight = math.sqrt(0.5)
    mats = [weight * k for k in gn.depolarizing_kraus(0.1)]
    mats += [weight * k for k in gn.amplitude_damping_kraus(0.2)]

    error = gn.GateError(mats, p_error=0.5)
    print(error)

    rng = gn.RngEngine(seed=1234)
    gate = gn.GateOp(name="X", qubits=(0,))
    counts = Counter()
    for _ in range(2000):
        ops = error.sample_noise(gate, gate.qubits, rng)
        counts[" + ".join(op.name for op in ops)] += 1

    print("Branch frequencies:")
    for label, count in counts.most_common():
        print(f"  {label:<12} {count / 2000:.3f}")


if __name__ == "__main__":
    main()
