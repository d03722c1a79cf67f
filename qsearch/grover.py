"""
Grover's search algorithm on a dense amplitude vector.

Grover's algorithm provides quadratic speedup for unstructured search problems.
Given a database of N = 2^n entries with exactly one marked index (the
"needle"), Grover's algorithm finds it in O(√N) oracle queries instead of O(N).

The circuit-level model (Hadamards, multi-controlled Z, an ancilla marker
qubit) is reduced here to its action on the N amplitudes of the database
register: the oracle flips the sign of one amplitude and the diffusion
reflects every amplitude about the mean. Measurement statistics are the same
as those of the full circuit.
"""

import enum
import logging
import numbers
import numpy as np
from typing import Callable, Optional

from .core import AmplitudeVector
from .errors import (
    InvalidConfiguration,
    InvalidIndex,
    StateConsumed,
    UnnormalizedState,
)
from .sampler import MeasurementOutcome, measure
from .scaling import optimal_iterations

logger = logging.getLogger(__name__)


def _check_target(target, size: int):
    if isinstance(target, bool) or not isinstance(target, numbers.Integral):
        raise InvalidIndex(f"target must be an integer, got {target!r}")
    if not (0 <= target < size):
        raise InvalidIndex(f"target must be in [0, {size - 1}], got {target}")


# =============================================================================
# Oracle
# =============================================================================

def mark_phase(vector: AmplitudeVector, target: int):
    """
    Phase oracle that marks a single target index.

    Multiplies the amplitude at ``target`` by -1. All magnitudes, and hence
    all measurement probabilities, are unchanged.

    Args:
        vector: Amplitude vector to modify in place
        target: Index of the marked entry

    Raises:
        InvalidIndex: If target is outside [0, N)
    """
    _check_target(target, len(vector))
    ws = vector.get_workspace()
    ws[target] = -ws[target]


def create_single_target_oracle(target: int, n: int) -> Callable[[AmplitudeVector], None]:
    """
    Create an oracle that marks a single target value.

    Args:
        target: The value to search for (0 to 2^n - 1)
        n: Number of qubits. Must be >= 1.

    Returns:
        Oracle function taking an AmplitudeVector

    Raises:
        InvalidConfiguration: If n < 1
        InvalidIndex: If target out of range
    """
    if n < 1:
        raise InvalidConfiguration(f"n must be >= 1, got {n}")
    _check_target(target, 2 ** n)

    def oracle(vector: AmplitudeVector):
        mark_phase(vector, target)

    return oracle


# =============================================================================
# Diffusion
# =============================================================================

def diffusion_operator(vector: AmplitudeVector):
    """
    Grover diffusion operator (inversion about average).

    D = 2|s⟩⟨s| - I where |s⟩ is the uniform superposition. On the amplitudes
    this is a ← 2·mean - a for every entry, applied in place.

    Args:
        vector: Amplitude vector to modify in place
    """
    ws = vector.get_workspace()
    mean = ws.mean()
    np.subtract(2 * mean, ws, out=ws)


# =============================================================================
# Engine
# =============================================================================

class Stage(enum.Enum):
    INITIALIZED = "initialized"
    PREPARED = "prepared"
    ITERATING = "iterating"
    READY = "ready"
    MEASURED = "measured"


class GroverEngine:
    """
    One single-use Grover search run.

    Stages advance INITIALIZED → PREPARED → ITERATING → READY → MEASURED.
    Measurement is destructive: an engine samples exactly once. Statistics
    over many runs are gathered from freshly constructed engines (see
    ``qsearch.sampler.run_trials``), never from one collapsed state.

    Args:
        num_qubits: Number of database qubits (searches 2^n items). Must be >= 1.
        target: Marked index (0 to 2^n - 1)
        iterations: Number of (oracle, diffusion) pairs. Defaults to the
                    optimal ⌊π/4·√N⌋.

    Raises:
        InvalidConfiguration: If num_qubits < 1 or iterations < 0
        InvalidIndex: If target out of range
    """

    def __init__(self, num_qubits: int, target: int, iterations: Optional[int] = None):
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, numbers.Integral) \
                or num_qubits < 1:
            raise InvalidConfiguration(f"num_qubits must be >= 1, got {num_qubits}")
        if iterations is None:
            iterations = optimal_iterations(num_qubits)
        if isinstance(iterations, bool) or not isinstance(iterations, numbers.Integral) \
                or iterations < 0:
            raise InvalidConfiguration(f"iterations must be >= 0, got {iterations}")

        self.num_qubits = int(num_qubits)
        self.database_size = 2 ** self.num_qubits
        _check_target(target, self.database_size)
        self.target = int(target)
        self.iterations = int(iterations)
        self.oracle = create_single_target_oracle(self.target, self.num_qubits)

        self.vector = AmplitudeVector.zero_state(self.num_qubits)
        self.completed = 0
        self.stage = Stage.INITIALIZED

    def __repr__(self) -> str:
        return (
            f"GroverEngine(num_qubits={self.num_qubits}, target={self.target}, "
            f"iterations={self.iterations}, stage={self.stage.name})"
        )

    def _require(self, *stages: Stage):
        if self.stage not in stages:
            raise StateConsumed(
                f"cannot do this in stage {self.stage.name}; "
                f"expected one of {[s.name for s in stages]}"
            )

    def _check_normalized(self):
        if not self.vector.is_normalized():
            raise UnnormalizedState(
                f"norm² = {self.vector.norm_squared():.12f} after "
                f"{self.completed} iteration(s)"
            )

    def prepare(self):
        """Build the uniform superposition."""
        self._require(Stage.INITIALIZED)
        self.vector = AmplitudeVector.uniform(self.num_qubits)
        self.stage = Stage.PREPARED
        logger.debug("prepared %d-qubit uniform superposition", self.num_qubits)

    def step(self):
        """Apply one Grover iteration: oracle, then diffusion."""
        self._require(Stage.PREPARED, Stage.ITERATING)
        if self.completed >= self.iterations:
            raise StateConsumed(f"all {self.iterations} iteration(s) already applied")

        self._check_normalized()
        self.stage = Stage.ITERATING
        self.oracle(self.vector)
        diffusion_operator(self.vector)
        self.completed += 1

    def run(self, verbose: bool = False) -> AmplitudeVector:
        """
        Prepare and iterate until the final distribution is ready.

        Args:
            verbose: If True, print progress

        Returns:
            The final (frozen) amplitude vector
        """
        if self.stage is Stage.INITIALIZED:
            self.prepare()
        self._require(Stage.PREPARED, Stage.ITERATING)

        if verbose:
            print(f"Grover search on {self.num_qubits} qubits ({self.database_size} items)")
            print(f"Using {self.iterations} iterations")

        while self.completed < self.iterations:
            self.step()
            if verbose:
                p = self.vector.probabilities()[self.target]
                print(f"Iteration {self.completed}: P(target) = {p:.4f}")

        self._check_normalized()
        self.vector.freeze()
        self.stage = Stage.READY
        logger.debug("engine ready after %d iteration(s)", self.completed)
        return self.vector

    def measure(self, rng: Optional[np.random.Generator] = None) -> MeasurementOutcome:
        """
        Sample the final distribution once. Terminal.

        Args:
            rng: Random generator (default: fresh unseeded generator)

        Raises:
            StateConsumed: If the engine is not READY (e.g. already measured)
        """
        self._require(Stage.READY)
        outcome = measure(self.vector, self.target, rng)
        self.stage = Stage.MEASURED
        return outcome


def grover_search(
    n: int,
    target: int,
    num_iterations: Optional[int] = None,
    seed: Optional[int] = None,
    verbose: bool = True
) -> int:
    """
    Run Grover's search algorithm once.

    Args:
        n: Number of qubits (searches 2^n items). Must be >= 1.
        target: Value to search for (0 to 2^n - 1)
        num_iterations: Number of Grover iterations (default: optimal ~π√N/4)
        seed: Seed for the measurement
        verbose: If True, print progress

    Returns:
        Measured result as integer (0 to 2^n - 1)
    """
    engine = GroverEngine(n, target, num_iterations)
    engine.run(verbose=verbose)

    if verbose:
        print("Measuring result...")

    outcome = engine.measure(np.random.default_rng(seed))

    if verbose:
        print(f"Measured: {outcome.index}")

    return outcome.index
