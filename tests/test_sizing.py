import logging

import pytest

from fin_bending.blade_structure.bending import compute_tip_angle
from fin_bending.blade_structure.blade_params import BeamParams
from fin_bending.blade_structure.sizing import SolverOptions, solve_for_load, solve_load


class TestSolveForLoad:
    def test_reaches_ninety_degrees(self, params):
        load = solve_for_load(params)
        assert abs(compute_tip_angle(load, params) - 90) <= 0.1

    def test_custom_target(self, params):
        load = solve_for_load(params, target_angle=45.0, tolerance=0.05)
        assert compute_tip_angle(load, params) == pytest.approx(45.0, abs=0.05)

    def test_bracket_expansion(self, params):
        # a stiff blade needs more than the initial upper bound
        stiff = params.replace(layers_foot=8, layers_tip=6)
        solution = solve_load(stiff)
        assert solution.bracket_expansions > 0
        assert solution.load > 100
        assert solution.converged
        assert abs(compute_tip_angle(solution.load, stiff) - 90) <= 0.1

    def test_segments_are_forwarded(self, params):
        load = solve_for_load(params, segments=25)
        assert abs(compute_tip_angle(load, params, segments=25) - 90) <= 0.1

    def test_params_not_modified(self, params):
        before = params.to_dict()
        solve_for_load(params)
        assert params.to_dict() == before


class TestLoadSolution:
    def test_converged_solution(self, params):
        solution = solve_load(params)
        assert solution.converged
        assert 0 < solution.iterations <= 40
        assert solution.tip_angle_deg == pytest.approx(compute_tip_angle(solution.load, params))
        assert solution.load_kg == pytest.approx(solution.load / 9.81)

    def test_same_load_as_solve_for_load(self, params):
        assert solve_load(params).load == solve_for_load(params)

    def test_bisection_budget_exhausted(self, params, caplog):
        with caplog.at_level(logging.WARNING):
            solution = solve_load(params, tolerance=0.0, max_iterations=5)
        assert not solution.converged
        assert solution.iterations == 5
        assert 0 < solution.load < 100
        assert "stopped" in caplog.text

    def test_unreachable_target_returns_upper_bound(self, params):
        solution = solve_load(params.replace(E=1e12), max_iterations=3)
        assert not solution.converged
        assert solution.load == 800
        assert solution.bracket_expansions == 3
        assert solution.tip_angle_deg < 90

    def test_degenerate_blade_does_not_raise(self):
        solution = solve_load(BeamParams(), max_iterations=2)
        assert solution.load == 400
        assert not solution.converged


class TestSolverOptions:
    def test_defaults_from_config(self):
        options = SolverOptions.from_config()
        assert options.target_angle == 90
        assert options.tolerance == pytest.approx(0.1)
        assert options.max_iterations == 40
        assert options.initial_upper_bound == 100
        assert options.segments == 200

    def test_none_keeps_default(self):
        assert SolverOptions.from_config(target_angle=None).target_angle == 90

    def test_options_instance(self, params):
        options = SolverOptions.from_config(target_angle=30.0)
        load = solve_for_load(params, options)
        assert compute_tip_angle(load, params) == pytest.approx(30.0, abs=0.1)

    def test_options_and_overrides_conflict(self, params):
        with pytest.raises(TypeError):
            solve_load(params, SolverOptions.from_config(), tolerance=1.0)

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            SolverOptions.from_config(damping=0.5)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"tolerance": -0.1},
            {"max_iterations": -1},
            {"initial_upper_bound": 0.0},
            {"target_angle": float("nan")},
        ],
    )
    def test_invalid_options(self, overrides):
        with pytest.raises(ValueError):
            SolverOptions.from_config(**overrides)
