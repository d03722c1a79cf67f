"""
Measurement and repeated-trial statistics.

A measurement draws one basis-state index with probability |a|² (Born rule).
``run_trials`` repeats a full search on freshly built engines and keeps only
a running success count, so memory stays constant in the number of trials.
"""

import logging
import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, NamedTuple, Optional

from .core import NORM_ATOL
from .errors import InvalidConfiguration, UnnormalizedState

logger = logging.getLogger(__name__)


class MeasurementOutcome(NamedTuple):
    """Result of measuring one run: whether the marked entry was found, and where."""
    marked: bool
    index: int


class TrialStatistics(NamedTuple):
    """Aggregate of many independent runs."""
    successes: int
    trials: int

    @property
    def probability(self) -> float:
        """Empirical success probability."""
        return self.successes / self.trials


def measure(vector, target: int, rng: Optional[np.random.Generator] = None,
            atol: float = NORM_ATOL) -> MeasurementOutcome:
    """
    Sample one index from an amplitude vector.

    The vector is only read. Its probabilities must already sum to 1; an
    unnormalized state points to a simulation bug and is not renormalized.

    Args:
        vector: Final AmplitudeVector of a run
        target: Marked index, used to set the ``marked`` flag
        rng: Random generator (default: fresh unseeded generator)
        atol: Normalization tolerance

    Returns:
        MeasurementOutcome(marked, index)

    Raises:
        UnnormalizedState: If the probabilities do not sum to 1 within atol
    """
    if rng is None:
        rng = np.random.default_rng()

    prob = vector.probabilities()
    total = prob.sum()
    if not abs(total - 1.0) <= atol:
        raise UnnormalizedState(f"probabilities sum to {total:.12f}, expected 1")

    # numpy rejects p that is off by float residue
    index = int(rng.choice(len(prob), p=prob / total))
    return MeasurementOutcome(index == target, index)


def _run_batch(engine_factory, count: int, rng: np.random.Generator,
               callback=None) -> int:
    successes = 0
    for attempt in range(count):
        engine = engine_factory()
        engine.run()
        outcome = engine.measure(rng)
        successes += outcome.marked
        if callback is not None:
            callback(attempt, outcome, successes)
    return successes


def run_trials(
    engine_factory: Callable,
    trial_count: int,
    seed: Optional[int] = None,
    max_workers: Optional[int] = None,
    callback: Optional[Callable[[int, MeasurementOutcome, int], None]] = None,
) -> TrialStatistics:
    """
    Run independent searches and count how often the marked entry is found.

    Every trial builds its own engine, so trials share no mutable state and
    can be spread over worker threads. Each worker gets its own generator
    spawned from one SeedSequence, which keeps seeded runs reproducible.

    Args:
        engine_factory: Zero-argument callable returning a fresh GroverEngine
        trial_count: Number of trials. Must be >= 1.
        seed: Seed for the measurement randomness
        max_workers: If > 1, split the trials across this many threads
        callback: Called as callback(attempt, outcome, successes_so_far)
                  after every trial. Serial mode only.

    Returns:
        TrialStatistics(successes, trials)

    Raises:
        InvalidConfiguration: If trial_count < 1, max_workers < 1, or a
                              callback is combined with parallel workers
    """
    if trial_count < 1:
        raise InvalidConfiguration(f"trial_count must be >= 1, got {trial_count}")
    if max_workers is not None and max_workers < 1:
        raise InvalidConfiguration(f"max_workers must be >= 1, got {max_workers}")

    workers = min(max_workers or 1, trial_count)

    if workers == 1:
        successes = _run_batch(engine_factory, trial_count,
                               np.random.default_rng(seed), callback)
    else:
        if callback is not None:
            raise InvalidConfiguration("callback is only supported with a single worker")

        seeds = np.random.SeedSequence(seed).spawn(workers)
        sizes = [trial_count // workers + (i < trial_count % workers) for i in range(workers)]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_run_batch, engine_factory, size, np.random.default_rng(s))
                for size, s in zip(sizes, seeds)
            ]
            successes = sum(f.result() for f in futures)

    logger.debug("%d/%d trials succeeded (%d worker(s))", successes, trial_count, workers)
    return TrialStatistics(int(successes), trial_count)
