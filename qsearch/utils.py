"""
Utility functions.

This module provides helper functions for:
- Quantum state comparison (fidelity)
- Binary encoding of database indices
"""

import numpy as np
from typing import List


# =============================================================================
# Quantum state utilities
# =============================================================================

def state_fidelity(v, w) -> float:
    """
    Compute the fidelity between two pure quantum states.

    Fidelity F = |⟨v|w⟩|² ranges from 0 (orthogonal) to 1 (identical).

    Args:
        v: First quantum state
        w: Second quantum state

    Returns:
        Fidelity value between 0 and 1
    """
    v = np.asarray(v).reshape(-1)
    w = np.asarray(w).reshape(-1)
    return np.abs(np.vdot(v, w)) ** 2


def basis_state(index: int, n: int) -> np.ndarray:
    """Computational basis vector |index⟩ on n qubits (test reference)."""
    state = np.zeros(2 ** n, dtype=complex)
    state[index] = 1.0
    return state


# =============================================================================
# Binary utilities
# =============================================================================

def int_to_bits(x: int, n: int) -> List[int]:
    """
    Convert integer to list of bits (LSB first).

    Args:
        x: Integer to convert
        n: Number of bits

    Returns:
        List of n bits, LSB first
    """
    return [(x >> i) & 1 for i in range(n)]


def register_labels(x: int, n: int) -> List[str]:
    """Measured register as "One"/"Zero" labels, LSB first."""
    return ["One" if bit else "Zero" for bit in int_to_bits(x, n)]
