"""
qsearch - Grover database search on a dense state-vector simulator.

This package simulates Grover's amplitude-amplification search over a
database of N = 2^n entries with one marked entry, and gathers measurement
statistics over many independent runs.

Modules:
    core     - AmplitudeVector, the dense register state
    gates    - Hadamard gate (plus reference operators used by the tests)
    grover   - Oracle, diffusion and the single-use GroverEngine
    sampler  - Born-rule measurement and repeated trials
    scaling  - Closed-form success probabilities and simulation cost
    config   - SearchConfig for batches of trials
    demo     - Console demo (python -m qsearch)
    utils    - Utility functions (fidelity, register labels)

Quick Start:
    >>> from qsearch import *
    >>> engine = GroverEngine(3, target=7, iterations=2)
    >>> engine.run()
    >>> engine.measure().index  # 7 with probability ~0.95
"""

# Core functionality
from .core import (
    AmplitudeVector,
    NORM_ATOL,
)

# Gates
from .gates import (
    H_gate,
)

# Errors
from .errors import (
    GroverError,
    InvalidIndex,
    InvalidConfiguration,
    UnnormalizedState,
    StateConsumed,
)

# Algorithms
from .grover import (
    mark_phase,
    create_single_target_oracle,
    diffusion_operator,
    Stage,
    GroverEngine,
    grover_search,
)

from .sampler import (
    MeasurementOutcome,
    TrialStatistics,
    measure,
    run_trials,
)

from .scaling import (
    success_probability,
    classical_success_probability,
    optimal_iterations,
    queries_per_search,
    speedup_factor,
    estimate_simulation_resources,
    print_scaling_analysis,
)

from .config import SearchConfig

# Utilities
from .utils import (
    state_fidelity,
    int_to_bits,
    register_labels,
)

__version__ = "0.1.0"
__all__ = [
    # Core
    "AmplitudeVector",
    "NORM_ATOL",
    # Gates
    "H_gate",
    # Errors
    "GroverError",
    "InvalidIndex",
    "InvalidConfiguration",
    "UnnormalizedState",
    "StateConsumed",
    # Grover
    "mark_phase",
    "create_single_target_oracle",
    "diffusion_operator",
    "Stage",
    "GroverEngine",
    "grover_search",
    # Sampler
    "MeasurementOutcome",
    "TrialStatistics",
    "measure",
    "run_trials",
    # Scaling
    "success_probability",
    "classical_success_probability",
    "optimal_iterations",
    "queries_per_search",
    "speedup_factor",
    "estimate_simulation_resources",
    "print_scaling_analysis",
    # Config
    "SearchConfig",
    # Utils
    "state_fidelity",
    "int_to_bits",
    "register_labels",
]
