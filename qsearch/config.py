"""
Search run configuration.

Collects the parameters a caller supplies for a batch of searches and
validates them up front with the simulator's own error types.
"""

import functools
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import InvalidConfiguration, InvalidIndex
from .scaling import optimal_iterations


@dataclass
class SearchConfig:
    """
    Parameters of one batch of Grover search trials.

    Attributes:
        num_qubits: Database qubits n (N = 2^n)
        target: Marked index; defaults to N - 1 (every qubit One)
        iterations: Grover iterations; defaults to the optimum
        trials: Number of independent searches
        seed: Seed for measurement randomness
        max_workers: Worker threads for the trials
    """
    num_qubits: int = 6
    target: Optional[int] = None
    iterations: Optional[int] = None
    trials: int = 1000
    seed: Optional[int] = None
    max_workers: Optional[int] = None

    @property
    def database_size(self) -> int:
        return 2 ** self.num_qubits

    def resolved_target(self) -> int:
        return self.database_size - 1 if self.target is None else self.target

    def resolved_iterations(self) -> int:
        if self.iterations is None:
            return optimal_iterations(self.num_qubits)
        return self.iterations

    def validate(self) -> "SearchConfig":
        """
        Check every field.

        Raises:
            InvalidConfiguration: For bad counts
            InvalidIndex: If target is outside [0, N)
        """
        if self.num_qubits < 1:
            raise InvalidConfiguration(f"num_qubits must be >= 1, got {self.num_qubits}")
        if self.iterations is not None and self.iterations < 0:
            raise InvalidConfiguration(f"iterations must be >= 0, got {self.iterations}")
        if self.trials < 1:
            raise InvalidConfiguration(f"trials must be >= 1, got {self.trials}")
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidConfiguration(f"max_workers must be >= 1, got {self.max_workers}")
        target = self.resolved_target()
        if not (0 <= target < self.database_size):
            raise InvalidIndex(f"target must be in [0, {self.database_size - 1}], got {target}")
        return self

    def engine_factory(self) -> Callable:
        """Zero-argument callable building a fresh GroverEngine per call."""
        from .grover import GroverEngine

        self.validate()
        return functools.partial(
            GroverEngine, self.num_qubits, self.resolved_target(), self.resolved_iterations()
        )

    @classmethod
    def from_args(cls, args) -> "SearchConfig":
        """Build a config from parsed command-line arguments."""
        return cls(
            num_qubits=args.qubits,
            target=args.target,
            iterations=args.iterations,
            trials=args.trials,
            seed=args.seed,
            max_workers=args.workers,
        )
