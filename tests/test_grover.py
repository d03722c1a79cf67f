"""Tests for the Grover oracle, diffusion and engine."""

import numpy as np
import pytest

from qsearch import (
    AmplitudeVector, GroverEngine, Stage,
    mark_phase, create_single_target_oracle, diffusion_operator, grover_search,
    success_probability, state_fidelity,
    InvalidIndex, InvalidConfiguration, UnnormalizedState, StateConsumed,
)
from qsearch.gates import oracle_matrix, diffusion_matrix, grover_iterate_matrix


def random_state(n, seed=0):
    rng = np.random.default_rng(seed)
    v = rng.normal(size=2 ** n) + 1j * rng.normal(size=2 ** n)
    return v / np.linalg.norm(v)


class TestOracle:
    """Tests for the phase oracle."""

    def test_flips_only_target_sign(self):
        """mark_phase negates exactly the target entry."""
        vec = AmplitudeVector.uniform(3)
        before = vec.get_state()
        mark_phase(vec, 5)
        after = vec.get_state()
        assert np.isclose(after[5], -before[5])
        mask = np.arange(8) != 5
        assert np.allclose(after[mask], before[mask])

    def test_probabilities_invariant(self):
        """Phase marking alone does not change the measurement distribution."""
        vec = AmplitudeVector(3, random_state(3))
        before = vec.probabilities()
        mark_phase(vec, 2)
        assert np.allclose(vec.probabilities(), before)
        assert abs(vec.norm_squared() - 1.0) < 1e-9

    def test_matches_oracle_matrix(self):
        v = random_state(3, seed=1)
        vec = AmplitudeVector(3, v)
        mark_phase(vec, 6)
        assert np.allclose(vec.get_state(), oracle_matrix(6, 3) @ v)

    def test_target_equal_to_n_fails(self):
        """target = N is out of range."""
        vec = AmplitudeVector.uniform(3)
        with pytest.raises(InvalidIndex):
            mark_phase(vec, 8)

    def test_negative_target_fails(self):
        vec = AmplitudeVector.uniform(3)
        with pytest.raises(InvalidIndex):
            mark_phase(vec, -1)

    def test_non_integer_target_fails(self):
        vec = AmplitudeVector.uniform(3)
        with pytest.raises(InvalidIndex):
            mark_phase(vec, 1.5)

    def test_failed_mark_leaves_vector_untouched(self):
        vec = AmplitudeVector.uniform(2)
        with pytest.raises(InvalidIndex):
            mark_phase(vec, 4)
        assert np.allclose(vec.get_state(), 0.5)

    def test_oracle_factory_validates_once(self):
        with pytest.raises(InvalidIndex):
            create_single_target_oracle(4, 2)
        with pytest.raises(InvalidConfiguration):
            create_single_target_oracle(0, 0)

    def test_oracle_factory_marks_target(self):
        oracle = create_single_target_oracle(3, 2)
        vec = AmplitudeVector.uniform(2)
        oracle(vec)
        assert np.allclose(vec.get_state(), [0.5, 0.5, 0.5, -0.5])


class TestDiffusion:
    """Tests for inversion about the average."""

    def test_reflects_about_mean(self):
        """Every entry a becomes 2·mean - a."""
        v = np.array([0.1, 0.2, 0.3, 0.4], dtype=complex)
        vec = AmplitudeVector(2, v)
        diffusion_operator(vec)
        assert np.allclose(vec.get_state(), 2 * v.mean() - v)

    def test_matches_diffusion_matrix(self):
        """Vector form equals D = 2|s⟩⟨s| - I."""
        v = random_state(4, seed=2)
        vec = AmplitudeVector(4, v)
        diffusion_operator(vec)
        assert np.allclose(vec.get_state(), diffusion_matrix(4) @ v)

    def test_is_an_involution(self):
        """D² = I."""
        v = random_state(3, seed=3)
        vec = AmplitudeVector(3, v)
        diffusion_operator(vec)
        diffusion_operator(vec)
        assert np.allclose(vec.get_state(), v)

    def test_preserves_norm(self):
        """Unitarity: squared magnitude is unchanged for a normalized input."""
        vec = AmplitudeVector(5, random_state(5, seed=4))
        diffusion_operator(vec)
        assert abs(vec.norm_squared() - 1.0) < 1e-9

    def test_uniform_state_is_fixed_point(self):
        vec = AmplitudeVector.uniform(3)
        diffusion_operator(vec)
        assert np.allclose(vec.get_state(), np.ones(8) / np.sqrt(8))

    def test_amplification_direction(self):
        """One iteration on N=8, target 7 raises P(7) above 1/8 and lowers the rest."""
        vec = AmplitudeVector.uniform(3)
        mark_phase(vec, 7)
        diffusion_operator(vec)
        prob = vec.probabilities()
        assert prob[7] > 1 / 8
        assert np.all(prob[:7] < 1 / 8)
        assert np.isclose(prob[7], 0.78125)


class TestEngine:
    """Tests for the engine state machine."""

    def test_stage_progression(self):
        engine = GroverEngine(3, 7, iterations=2)
        assert engine.stage is Stage.INITIALIZED
        engine.prepare()
        assert engine.stage is Stage.PREPARED
        engine.step()
        assert engine.stage is Stage.ITERATING
        engine.run()
        assert engine.stage is Stage.READY
        assert engine.completed == 2
        engine.measure(np.random.default_rng(0))
        assert engine.stage is Stage.MEASURED

    def test_initialized_vector_is_zero_state(self):
        engine = GroverEngine(2, 1, iterations=1)
        assert np.allclose(engine.vector.get_state(), [1, 0, 0, 0])

    def test_default_iterations_are_optimal(self):
        assert GroverEngine(3, 0).iterations == 2
        assert GroverEngine(6, 0).iterations == 6

    def test_matches_matrix_iteration(self):
        """k engine iterations equal G^k applied to |s⟩."""
        n, target, k = 4, 9, 3
        engine = GroverEngine(n, target, iterations=k)
        final = engine.run().get_state()

        s = np.ones(2 ** n) / np.sqrt(2 ** n)
        expected = np.linalg.matrix_power(grover_iterate_matrix(target, n), k) @ s
        assert state_fidelity(final, expected) > 1 - 1e-9

    @pytest.mark.parametrize("n,k", [(3, 1), (3, 2), (3, 3), (6, 3), (6, 6)])
    def test_final_probability_matches_formula(self, n, k):
        """P(target) after k iterations is sin²((2k+1)·asin(1/√N))."""
        engine = GroverEngine(n, 2 ** n - 1, iterations=k)
        vec = engine.run()
        assert np.isclose(vec.probabilities()[-1], success_probability(2 ** n, k))

    def test_zero_iterations_is_uniform(self):
        """No iterations leaves the classical uniform distribution."""
        vec = GroverEngine(6, 63, iterations=0).run()
        assert np.allclose(vec.probabilities(), 1 / 64)

    def test_run_freezes_vector(self):
        engine = GroverEngine(3, 7, iterations=1)
        vec = engine.run()
        assert vec.frozen
        with pytest.raises(StateConsumed):
            vec[0] = 0

    def test_second_measurement_fails(self):
        """Measurement is destructive; an engine samples only once."""
        engine = GroverEngine(3, 7, iterations=2)
        engine.run()
        engine.measure(np.random.default_rng(0))
        with pytest.raises(StateConsumed):
            engine.measure(np.random.default_rng(0))

    def test_measure_before_run_fails(self):
        engine = GroverEngine(3, 7, iterations=2)
        with pytest.raises(StateConsumed):
            engine.measure()

    def test_step_after_ready_fails(self):
        engine = GroverEngine(3, 7, iterations=1)
        engine.run()
        with pytest.raises(StateConsumed):
            engine.step()

    def test_step_past_iteration_count_fails(self):
        engine = GroverEngine(3, 7, iterations=1)
        engine.prepare()
        engine.step()
        with pytest.raises(StateConsumed):
            engine.step()

    def test_prepare_twice_fails(self):
        engine = GroverEngine(3, 7, iterations=1)
        engine.prepare()
        with pytest.raises(StateConsumed):
            engine.prepare()

    def test_unnormalized_state_detected(self):
        """A corrupted vector is reported rather than iterated."""
        engine = GroverEngine(3, 7, iterations=2)
        engine.prepare()
        engine.vector[0] = 5
        with pytest.raises(UnnormalizedState):
            engine.step()


class TestEngineValidation:
    """Tests for configuration errors."""

    def test_target_equal_to_n_fails(self):
        with pytest.raises(InvalidIndex):
            GroverEngine(3, 8, iterations=1)

    def test_negative_iterations_fail(self):
        with pytest.raises(InvalidConfiguration):
            GroverEngine(3, 7, iterations=-1)

    def test_zero_qubits_fail(self):
        with pytest.raises(InvalidConfiguration):
            GroverEngine(0, 0, iterations=1)

    def test_errors_are_value_errors(self):
        """Bad input errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            GroverEngine(3, 8, iterations=1)
        with pytest.raises(ValueError):
            GroverEngine(3, 7, iterations=-2)


class TestGroverSearch:
    """Tests for the single-shot convenience function."""

    def test_finds_target_with_optimal_iterations(self):
        """With the optimal iteration count the target dominates."""
        hits = sum(grover_search(4, 11, seed=s, verbose=False) == 11 for s in range(20))
        assert hits >= 15

    def test_verbose_output(self, capsys):
        grover_search(3, 5, num_iterations=2, seed=0, verbose=True)
        out = capsys.readouterr().out
        assert "Grover search on 3 qubits (8 items)" in out
        assert "Using 2 iterations" in out
        assert "Measured:" in out

    def test_invalid_target(self):
        with pytest.raises(InvalidIndex):
            grover_search(3, 8, verbose=False)
