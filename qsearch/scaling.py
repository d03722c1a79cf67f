"""
Closed-form success probabilities and simulation cost.

The theoretical success probability of Grover search with one marked entry
after k iterations is sin²((2k+1)·θ) with θ = asin(1/√N). The reporting
layer prints it next to the empirical statistics.

Classical simulation of the register is exponential: the dense vector holds
2^n complex amplitudes, which is what bounds the qubit counts this
simulator is meant for.
"""

import math


# =============================================================================
# Success probabilities
# =============================================================================

def success_probability(database_size: int, iterations: int) -> float:
    """
    Theoretical probability of measuring the marked entry.

    Args:
        database_size: N, number of entries
        iterations: Number of Grover iterations k

    Returns:
        sin²((2k+1)·asin(1/√N)); equals 1/N when k = 0
    """
    theta = math.asin(1.0 / math.sqrt(database_size))
    return math.sin((2 * iterations + 1) * theta) ** 2


def classical_success_probability(database_size: int) -> float:
    """Probability of guessing the marked entry with one uniform draw."""
    return 1.0 / database_size


def optimal_iterations(num_qubits: int) -> int:
    """Optimal number of Grover iterations ⌊π/4·√N⌋ for N = 2^n."""
    N = 2 ** num_qubits
    return int(math.floor(math.pi / 4 * math.sqrt(N)))


def queries_per_search(iterations: int) -> int:
    """Oracle queries charged per search: two per iteration plus the final check."""
    return 2 * iterations + 1


def speedup_factor(empirical_probability: float, database_size: int, iterations: int) -> float:
    """
    How much faster the quantum search performs on average than classical
    guessing, per oracle query.
    """
    return (empirical_probability
            / classical_success_probability(database_size)
            / queries_per_search(iterations))


# =============================================================================
# Resource Estimation
# =============================================================================

def estimate_simulation_resources(num_qubits: int) -> dict:
    """
    Estimate the memory needed to simulate an n-qubit database register.

    Args:
        num_qubits: Number of database qubits

    Returns:
        Dictionary with resource estimates
    """
    n = num_qubits

    # complex128 = 16 bytes = 2^4; 1GB = 2^30
    log2_memory_gb = n + 4 - 30

    if n <= 60:
        state_vector_size = 2 ** n
        memory_bytes = state_vector_size * 16
        memory_gb = memory_bytes / (1024**3)
    else:
        state_vector_size = float('inf')
        memory_bytes = float('inf')
        memory_gb = 2 ** log2_memory_gb if log2_memory_gb < 100 else float('inf')

    return {
        "num_qubits": n,
        "database_size": 2 ** n,
        "optimal_iterations": optimal_iterations(n),
        "state_vector_size": state_vector_size,
        "memory_bytes": memory_bytes,
        "memory_gb": memory_gb,
        "log2_memory_gb": log2_memory_gb,
    }


def print_scaling_analysis():
    """Print simulation cost for a range of register sizes."""

    print("=" * 72)
    print("GROVER SEARCH SIMULATION SCALING")
    print("=" * 72)
    print()

    print(f"{'Qubits':>7} | {'Entries':>16} | {'Iterations':>10} | {'P(success)':>10} | {'Memory':>12}")
    print("-" * 72)

    for n in (3, 6, 10, 16, 20, 24, 30, 40, 50):
        r = estimate_simulation_resources(n)

        if r["memory_gb"] > 1024:
            mem_str = f"{r['memory_gb'] / 1024:.0f} TB"
        elif r["memory_gb"] > 1:
            mem_str = f"{r['memory_gb']:.1f} GB"
        elif r["memory_bytes"] >= 1024**2:
            mem_str = f"{r['memory_bytes'] / 1024**2:.1f} MB"
        else:
            mem_str = f"{r['memory_bytes'] / 1024:.1f} KB"

        p = success_probability(r["database_size"], r["optimal_iterations"])
        print(f"{n:>7} | {r['database_size']:>16} | {r['optimal_iterations']:>10} | "
              f"{p:>10.4f} | {mem_str:>12}")

    print()
    print("Key observations:")
    print("  • Dense simulation memory: O(2^n) - doubles with each additional qubit")
    print("  • Oracle queries: O(√N) versus O(N) for classical search")
    print("  • Beyond ~30 qubits the amplitude vector no longer fits in RAM")
    print()
