"""
Gate and operator definitions.

The simulator only needs a single-qubit Hadamard to prepare the uniform
superposition. I_gate and the dense N×N forms of the Grover oracle and
diffusion are reference operators for the test suite: the simulation never
builds them, and they are not exported from the package.
"""

import numpy as np

# =============================================================================
# Single-qubit gates
# =============================================================================

H_gate = np.array([[1,  1],     # Hadamard gate
                   [1, -1]]) * np.sqrt(1/2)

I_gate = np.array([[1, 0],      # Identity gate
                   [0, 1]])


# =============================================================================
# Dense N×N Grover operators
# =============================================================================

def oracle_matrix(target, n):
    """Phase oracle O = I - 2|t⟩⟨t| on n qubits."""
    N = 2 ** n
    O = np.eye(N, dtype=complex)
    O[target, target] = -1
    return O


def diffusion_matrix(n):
    """Diffusion D = 2|s⟩⟨s| - I where |s⟩ is the uniform superposition."""
    N = 2 ** n
    s = np.ones((N, 1), dtype=complex) / np.sqrt(N)
    return 2 * (s @ s.conj().T) - np.eye(N)


def grover_iterate_matrix(target, n):
    """One Grover iteration G = D · O (oracle first, then diffusion)."""
    return diffusion_matrix(n) @ oracle_matrix(target, n)
