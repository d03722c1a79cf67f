"""
Exceptions raised by the Grover search simulator.

All errors are raised synchronously where they are detected and are never
retried: they indicate either bad input or a defect in the simulation.
"""


class GroverError(Exception):
    """Base class for all simulator errors."""


class InvalidIndex(GroverError, ValueError):
    """Target index outside [0, N)."""


class InvalidConfiguration(GroverError, ValueError):
    """Negative iteration count, non-positive qubit or trial count, etc."""


class UnnormalizedState(GroverError):
    """Squared magnitudes of the amplitude vector do not sum to 1."""


class StateConsumed(GroverError, RuntimeError):
    """A vector or engine was used after measurement or out of stage order."""
