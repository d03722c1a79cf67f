"""
Core state-vector functionality.

The register of a search run is a dense numpy array of 2^n complex
amplitudes. Bit ordering is LSB-first: qubit i is bit i of the basis-state
index, so the integer decoded from a measurement is simply the index of the
sampled amplitude.

Memory grows as O(2^n) complex numbers (16 bytes each); see
``qsearch.scaling.estimate_simulation_resources`` for where dense
simulation stops being tractable.
"""

import numpy as np
from typing import Optional

from .errors import InvalidConfiguration, StateConsumed
from .gates import H_gate

# Tolerance for the normalization invariant
NORM_ATOL = 1e-9


class AmplitudeVector:
    """
    Amplitudes of an n-qubit register.

    Use the ``zero_state`` or ``uniform`` constructors rather than building
    one directly. Entries may only be changed by the oracle and the diffusion
    operator; once frozen the vector is read only.
    """

    def __init__(self, num_qubits: int, amplitudes: Optional[np.ndarray] = None):
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, (int, np.integer)) \
                or num_qubits < 1:
            raise InvalidConfiguration(f"num_qubits must be >= 1, got {num_qubits}")

        self.num_qubits = int(num_qubits)
        self.size = 2 ** self.num_qubits

        if amplitudes is None:
            amplitudes = np.zeros(self.size, dtype=complex)
        else:
            amplitudes = np.array(amplitudes, dtype=complex).reshape(-1)
            if amplitudes.shape != (self.size,):
                raise InvalidConfiguration(
                    f"expected {self.size} amplitudes for {self.num_qubits} qubits, "
                    f"got {amplitudes.shape[0]}"
                )
        self._workspace = amplitudes

    @classmethod
    def zero_state(cls, num_qubits: int) -> "AmplitudeVector":
        """Register with all probability in |0...0⟩."""
        vec = cls(num_qubits)
        vec._workspace[0] = 1.0
        return vec

    @classmethod
    def uniform(cls, num_qubits: int) -> "AmplitudeVector":
        """Uniform superposition H⊗n|0...0⟩, every entry 1/√N."""
        vec = cls.zero_state(num_qubits)
        vec.hadamard_all()
        return vec

    # -------------------------------------------------------------------------
    # Entry access
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index):
        return self._workspace[index]

    def __setitem__(self, index, value):
        self._check_writable()
        self._workspace[index] = value

    def __repr__(self) -> str:
        return f"AmplitudeVector(num_qubits={self.num_qubits}, frozen={self.frozen})"

    def get_state(self) -> np.ndarray:
        """Return a copy of the amplitudes."""
        return self._workspace.copy()

    def get_workspace(self) -> np.ndarray:
        """Return the live amplitude buffer (for the Grover operators)."""
        self._check_writable()
        return self._workspace

    def copy(self) -> "AmplitudeVector":
        """Return an unfrozen copy of this vector."""
        return AmplitudeVector(self.num_qubits, self._workspace)

    # -------------------------------------------------------------------------
    # Gates
    # -------------------------------------------------------------------------

    def apply_gate(self, gate: np.ndarray, qubit: int):
        """
        Apply a single-qubit gate.

        The workspace is viewed as (high bits, qubit, low bits) so the gate
        acts on the middle axis only.

        Args:
            gate: 2x2 gate matrix
            qubit: Index of the qubit (0 = least significant bit)
        """
        self._check_writable()
        if not (0 <= qubit < self.num_qubits):
            raise InvalidConfiguration(
                f"qubit must be in [0, {self.num_qubits - 1}], got {qubit}"
            )

        ws = np.reshape(self._workspace, (-1, 2, 2 ** qubit))
        ws = np.einsum("ij,ajb->aib", gate, ws)
        self._workspace = np.reshape(ws, -1).astype(complex)

    def hadamard_all(self):
        """Apply H to every qubit of the register."""
        for qubit in range(self.num_qubits):
            self.apply_gate(H_gate, qubit)

    # -------------------------------------------------------------------------
    # Derived quantities
    # -------------------------------------------------------------------------

    def mean(self) -> complex:
        """Average of all amplitudes."""
        return self._workspace.mean()

    def probabilities(self) -> np.ndarray:
        """Born-rule probabilities |a|² for every basis state."""
        return np.abs(self._workspace) ** 2

    def norm_squared(self) -> float:
        """Total squared magnitude (1 for a normalized state)."""
        return float(self.probabilities().sum())

    def is_normalized(self, atol: float = NORM_ATOL) -> bool:
        return abs(self.norm_squared() - 1.0) <= atol

    # -------------------------------------------------------------------------
    # Read-only handoff
    # -------------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return not self._workspace.flags.writeable

    def freeze(self):
        """Make the vector read only; done before it is handed to the sampler."""
        self._workspace.flags.writeable = False

    def _check_writable(self):
        if self.frozen:
            raise StateConsumed("amplitude vector is frozen and can no longer be modified")
