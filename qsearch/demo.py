#!/usr/bin/env python3

"""
Database search demo.

First runs a classical random search (no Grover iterations, so no amplitude
amplification) and checks that the success rate matches 1/N. Then runs the
quantum search with a few Grover iterations and compares the success rate
against the theoretical sin²((2k+1)·asin(1/√N)). Both searches look for the
entry whose every qubit is One unless --target says otherwise.
"""

import logging
import sys
from argparse import ArgumentParser
from dataclasses import replace

from .config import SearchConfig
from .errors import GroverError
from .sampler import run_trials
from .scaling import (
    classical_success_probability,
    print_scaling_analysis,
    speedup_factor,
    success_probability,
)
from .utils import register_labels


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="qsearch", description=__doc__)
    parser.add_argument('--qubits', '-n',
                        type=int,
                        default=6,
                        help='Number of database qubits. Default: %(default)s')
    parser.add_argument('--iterations', '-k',
                        type=int,
                        default=3,
                        help='Grover iterations for the quantum search. '
                             'Default: %(default)s')
    parser.add_argument('--target', '-t',
                        type=int,
                        default=None,
                        help='Marked database index. Default: 2^n - 1')
    parser.add_argument('--trials', '-r',
                        type=int,
                        default=1000,
                        help='Attempts per search. Default: %(default)s')
    parser.add_argument('--seed', '-s',
                        type=int,
                        default=None,
                        help='Seed for reproducible runs')
    parser.add_argument('--workers', '-w',
                        type=int,
                        default=None,
                        help='Run trials on this many threads (disables '
                             'progress reports)')
    parser.add_argument('--report-every',
                        type=int,
                        default=100,
                        help='Print progress every this many attempts. '
                             'Default: %(default)s')
    parser.add_argument('--skip-classical',
                        action='store_true',
                        help='Only run the quantum search')
    parser.add_argument('--scaling',
                        action='store_true',
                        help='Print the simulation scaling table and exit')
    parser.add_argument('--log-level',
                        default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level. Default: %(default)s')
    return parser


def run_search(config: SearchConfig, report_every: int = 100):
    """
    Run one batch of searches and print progress like the classic console demo.

    Returns:
        TrialStatistics of the batch
    """
    config.validate()
    N = config.database_size
    iterations = config.resolved_iterations()
    target = config.resolved_target()
    classical = classical_success_probability(N)

    if iterations == 0:
        print("Classical random search for marked element in database. "
              "No Grover iterations performed hence no amplitude amplification.")
    else:
        print(f"Quantum search for marked element in database. "
              f"Number of Grover iterations: {iterations}")
    print(f"  Database size: {N}")
    print(f"  Classical success probability: {classical}")
    if iterations > 0:
        print(f"  Quantum success probability: {success_probability(N, iterations)}")
    print(f"  Looking for marked element: {' '.join(register_labels(target, config.num_qubits))}")
    print()

    def report(attempt, outcome, successes):
        if report_every <= 0 or (attempt + 1) % report_every != 0:
            return
        probability = round(successes / (attempt + 1), 3)
        line = f"Attempt {attempt}. Success: {outcome.marked},  Probability: {probability} "
        if iterations > 0:
            line += f"Speedup: {round(speedup_factor(probability, N, iterations), 3)} "
        line += f"Found database index {', '.join(register_labels(outcome.index, config.num_qubits))}"
        print(line)

    parallel = config.max_workers is not None and config.max_workers > 1
    stats = run_trials(
        config.engine_factory(),
        config.trials,
        seed=config.seed,
        max_workers=config.max_workers,
        callback=None if parallel else report,
    )

    print()
    print(f"Total success count over {stats.trials} attempts: {stats.successes}.")
    print()
    return stats


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    )

    if args.scaling:
        print_scaling_analysis()
        return 0

    config = SearchConfig.from_args(args)
    try:
        config.validate()
        if not args.skip_classical:
            run_search(replace(config, iterations=0), args.report_every)
        run_search(config, args.report_every)
    except GroverError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
