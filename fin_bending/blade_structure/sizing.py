from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from fin_bending.utils.unit_converter import MetricConverter

from .bending import compute_tip_angle, resolve_segments
from .blade_params import BeamParams, toml


# === SOLVER OPTIONS ===

@dataclass(frozen=True)
class SolverOptions:
    target_angle: float = 90.0  # [deg]
    tolerance: float = 0.1  # [deg]
    max_iterations: int = 40
    initial_upper_bound: float = 100.0  # [N]
    segments: int | None = None

    @classmethod
    def from_config(cls, **overrides) -> SolverOptions:
        """
        Solver options from [config.solver], with keyword overrides.
        Overrides that are None keep the configured value.

        Raises:
            ValueError: If an option cannot drive the solver.
        """
        solver = toml["config"]["solver"]
        values = {
            "target_angle": float(solver["target_angle"]),
            "tolerance": float(solver["tolerance"]),
            "max_iterations": int(solver["max_iterations"]),
            "initial_upper_bound": float(solver["initial_upper_bound"]),
            "segments": None,
        }
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown solver option '{key}'")
            if value is not None:
                values[key] = value

        if not math.isfinite(values["target_angle"]):
            logging.error("The target angle must be finite.")
            raise ValueError("The target angle must be finite.")
        if not values["tolerance"] >= 0:
            logging.error("The tolerance cannot be negative.")
            raise ValueError("The tolerance cannot be negative.")
        if int(values["max_iterations"]) < 0:
            logging.error("max_iterations cannot be negative.")
            raise ValueError("max_iterations cannot be negative.")
        if not values["initial_upper_bound"] > 0:
            logging.error("The initial upper bound on the load must be positive.")
            raise ValueError("The initial upper bound on the load must be positive.")

        values["max_iterations"] = int(values["max_iterations"])
        values["segments"] = resolve_segments(values["segments"])
        return cls(**values)


@dataclass(frozen=True)
class LoadSolution:
    load: float  # [N]
    converged: bool
    iterations: int  # bisection steps taken
    bracket_expansions: int
    tip_angle_deg: float  # tip angle at the returned load

    @property
    def load_kg(self) -> float:
        return MetricConverter.force_N_kg(self.load)


# === LOAD SOLVER ===

def solve_load(params: BeamParams, options: SolverOptions | None = None, **overrides) -> LoadSolution:
    """
    Finds the tip load that bends the blade to the target tip angle.

    The bracket [0, upper] is doubled until the angle at the upper bound passes
    the target, then bisected. The tip angle must grow with the load for this
    to work. When the iteration budget runs out the best estimate so far is
    returned with converged=False instead of raising.

    Parameters:
        params (BeamParams): Blade geometry and material.
        options (SolverOptions, optional): Solver settings, default from config.
        **overrides: Individual solver settings (target_angle, tolerance, ...).

    Returns:
        LoadSolution: Load and convergence information.
    """
    if options is None:
        options = SolverOptions.from_config(**overrides)
    elif overrides:
        raise TypeError("Pass either a SolverOptions instance or keyword overrides, not both")

    target = options.target_angle
    segments = options.segments

    lower = 0.0
    upper = float(options.initial_upper_bound)
    angle_at_upper = compute_tip_angle(upper, params, segments=segments)
    expansions = 0

    while angle_at_upper < target and expansions < options.max_iterations:
        lower = upper
        upper *= 2
        angle_at_upper = compute_tip_angle(upper, params, segments=segments)
        expansions += 1

    if angle_at_upper < target:
        logging.warning(
            f"Load bracket did not reach {target} deg after {expansions} doublings "
            f"(angle {angle_at_upper:.2f} deg at {upper:.1f} N), returning the upper bound."
        )
        return LoadSolution(
            load=upper,
            converged=False,
            iterations=0,
            bracket_expansions=expansions,
            tip_angle_deg=angle_at_upper,
        )

    logging.debug(f"Load bracket [{lower:.2f}, {upper:.2f}] N after {expansions} doublings.")

    load = upper
    angle = angle_at_upper
    converged = False
    iterations = 0
    for _ in range(options.max_iterations):
        mid = (lower + upper) / 2
        angle = compute_tip_angle(mid, params, segments=segments)
        load = mid
        iterations += 1

        if abs(angle - target) <= options.tolerance:
            converged = True
            break

        if angle < target:
            lower = mid
        else:
            upper = mid

    if converged:
        logging.debug(f"Converged to {load:.4f} N ({angle:.3f} deg) in {iterations} iterations.")
    else:
        logging.warning(
            f"Load solver stopped after {iterations} iterations at {load:.4f} N "
            f"({angle:.3f} deg, target {target} deg)."
        )

    return LoadSolution(
        load=load,
        converged=converged,
        iterations=iterations,
        bracket_expansions=expansions,
        tip_angle_deg=angle,
    )


def solve_for_load(params: BeamParams, options: SolverOptions | None = None, **overrides) -> float:
    """
    Tip load [N] giving the target tip angle. See solve_load for the details.
    """
    return solve_load(params, options, **overrides).load
