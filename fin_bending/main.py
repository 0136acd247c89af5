import argparse
import json
import logging
import sys

import fin_bending.utils.define_logging  # do not remove this line, it sets up logging configuration
from fin_bending.blade_structure.bending import bending_profile_points, compute_bending_profile
from fin_bending.blade_structure.blade_params import BeamParams, compute_default_params, validate_params
from fin_bending.blade_structure.laminate import compute_laminate_stack
from fin_bending.blade_structure.section_geometry import compute_section_inertia
from fin_bending.blade_structure.sizing import SolverOptions, solve_load
from fin_bending.hydrodynamics import compute_hydrodynamic_resistance


def summarize(params: BeamParams, options: SolverOptions = None, digits: int = 4) -> dict:
    """
    Everything the fin calculator shows for one set of blade parameters:
    the load for the target tip angle, the resulting shape, the laminate
    stack, the section inertia and the resistance ratio.
    """
    if options is None:
        options = SolverOptions.from_config()

    solution = solve_load(params, options)
    profile = compute_bending_profile(solution.load, params, segments=options.segments)
    laminate = compute_laminate_stack(params)
    inertia = compute_section_inertia(params)
    resistance = compute_hydrodynamic_resistance(solution.load, params, profile=profile)

    logging.info(
        f"{params!r}: {solution.load:.2f} N for {profile.tip_angle_deg:.2f} deg "
        f"(converged={solution.converged})"
    )

    return {
        "params": params.to_dict(),
        "target_angle": options.target_angle,
        "load": solution.load,
        "load_kg": solution.load_kg,
        "converged": solution.converged,
        "iterations": solution.iterations,
        "tip_angle_deg": profile.tip_angle_deg,
        "tip_deflection": profile.tip_deflection,
        "max_curvature_position": profile.max_curvature_position,
        "inertia": {"foot": inertia.foot, "tip": inertia.tip},
        "resistance_ratio": resistance,
        "laminate": {
            "base_layers": [layer.length for layer in laminate.base_layers],
            "extra_layers": [layer.length for layer in laminate.extra_layers],
            "coverage": [round(layer.coverage_ratio, 4) for layer in laminate.extra_layers],
        },
        "points": bending_profile_points(profile, digits=digits),
    }


def format_summary(summary: dict) -> str:
    lines = [
        f"Angle at tip = {summary['tip_angle_deg']:.1f}°, "
        f"Load at tip = {summary['load']:.1f} N ({summary['load_kg']:.2f} kg)",
        f"Tip deflection = {summary['tip_deflection']:.1f} mm, "
        f"max bending at {summary['max_curvature_position']:.1f} mm from the foot",
        f"I foot = {summary['inertia']['foot']:.3f} mm^4, I tip = {summary['inertia']['tip']:.3f} mm^4",
        f"Resistance ratio = {summary['resistance_ratio']:.3f}",
    ]
    extra = ", ".join(f"{length:.0f}" for length in summary["laminate"]["extra_layers"])
    lines.append(
        f"Laminate: {len(summary['laminate']['base_layers'])} full length layers, "
        f"extra layers [{extra}] mm"
    )
    if not summary["converged"]:
        lines.append(f"Warning: load solver did not converge after {summary['iterations']} iterations")
    return "\n".join(lines)


def parse_args(argv=None):
    defaults = compute_default_params()
    p = argparse.ArgumentParser(description="Bending of a tapered laminate fin blade under a tip load")
    p.add_argument("--layers-foot", type=int, default=defaults.layers_foot)
    p.add_argument("--layers-tip", type=int, default=defaults.layers_tip)
    p.add_argument("--length", type=float, default=defaults.L, help="Free blade length [mm]")
    p.add_argument("--width", type=float, default=defaults.b, help="Blade width [mm]")
    p.add_argument("--modulus", type=float, default=defaults.E, help="Young's modulus [GPa]")
    p.add_argument("--thickness", type=float, default=defaults.thickness, help="Layer thickness [mm]")
    p.add_argument("--min-extra-layer-length", type=float, default=defaults.min_extra_layer_length)
    p.add_argument("--target-angle", type=float, default=None, help="Tip angle to solve for [deg]")
    p.add_argument("--segments", type=int, default=None)
    p.add_argument("--json", action="store_true", help="Print the full summary as JSON")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    params = BeamParams(
        layers_foot=args.layers_foot,
        layers_tip=args.layers_tip,
        L=args.length,
        b=args.width,
        E=args.modulus,
        thickness=args.thickness,
        min_extra_layer_length=args.min_extra_layer_length,
    )

    try:
        validate_params(params)
        options = SolverOptions.from_config(target_angle=args.target_angle, segments=args.segments)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    summary = summarize(params, options)
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(format_summary(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
