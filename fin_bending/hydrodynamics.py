from __future__ import annotations

import logging
import math
from typing import Any, Mapping

import numpy as np

from fin_bending.blade_structure.bending import BendingProfile, compute_bending_profile
from fin_bending.blade_structure.blade_params import BeamParams, toml
from fin_bending.utils.unit_converter import AngleConverter, MetricConverter


def _profile_field(profile: Any, name: str):
    if isinstance(profile, Mapping):
        return profile.get(name)
    return getattr(profile, name, None)


class Hydrodynamics:

    def __init__(self, params: BeamParams | None):
        """
        Drag proxy of a flexing blade swept broadside through the water.

        Parameters:
        params (BeamParams): The blade this model belongs to.
        """
        logging.debug("Initializing Hydrodynamics class...")

        self.params = params
        self.CD_flat_plate = toml["config"]["hydro"]["CD_flat_plate"]
        self.benchmark_area = toml["config"]["hydro"]["benchmark_area"]  # [m2]

    @property
    def benchmark_force(self) -> float:
        """
        Drag coefficient times area of the stiff reference blade [m2].
        """
        return self.CD_flat_plate * self.benchmark_area

    def drag_coefficient(self, angle):
        """
        Local drag coefficient for a blade segment tilted by angle (deg) away
        from facing the flow. Falls linearly from the flat plate value at 0 deg
        to nothing at 90 deg.
        """
        return self.CD_flat_plate * (1 - np.asarray(angle, dtype=float) / 90.0)

    def resistance_ratio(self, load: float, profile: BendingProfile | Mapping | None = None, segments=None) -> float:
        """
        Resistance of the deflected blade relative to the benchmark blade.

        Every link of the profile contributes Cd * sin(angle to flow) * area.
        Links that have folded to 90 deg or more no longer face the flow and
        contribute nothing.

        Parameters:
        load (float): Tip load [N], used when no profile is given.
        profile (BendingProfile | Mapping, optional): Precomputed shape; needs
            theta and, optionally, the arc positions x.
        segments (int, optional): Sample count when the profile is computed here.

        Returns:
        float: Dimensionless resistance ratio, 0 for degenerate input.
        """
        if self.params is None:
            return 0.0
        b = self.params.b
        L = self.params.L
        if not (math.isfinite(b) and b > 0 and math.isfinite(L) and L > 0):
            return 0.0

        if profile is None:
            if not math.isfinite(load):
                return 0.0
            profile = compute_bending_profile(load, self.params, segments=segments)

        theta = _profile_field(profile, "theta")
        if theta is None:
            return 0.0
        theta = np.asarray(theta, dtype=float)
        n = len(theta)
        if n < 2:
            return 0.0

        x = _profile_field(profile, "x")
        if x is not None and len(x) == n and np.all(np.isfinite(np.asarray(x, dtype=float))):
            segment_length = np.abs(np.diff(np.asarray(x, dtype=float)))
        else:
            segment_length = np.full(n - 1, L / (n - 1))

        projected_area = MetricConverter.area_mm2_m2(b * segment_length)  # [m2]

        with np.errstate(invalid="ignore"):
            angle = np.clip(AngleConverter.rad_to_deg(np.abs(theta[1:])), 0.0, 90.0)
            angle_to_flow = 90.0 - angle
            facing = np.isfinite(angle) & (angle < 90.0) & (angle_to_flow > 0)

        force = (
            self.drag_coefficient(angle[facing])
            * np.sin(AngleConverter.deg_to_rad(angle_to_flow[facing]))
            * projected_area[facing]
        )
        ratio = float(np.sum(force)) / self.benchmark_force
        return ratio if math.isfinite(ratio) else 0.0


def compute_hydrodynamic_resistance(
    load: float,
    params: BeamParams,
    profile: BendingProfile | Mapping | None = None,
    segments=None,
) -> float:
    """
    Resistance ratio of the blade under a tip load, see Hydrodynamics.resistance_ratio.
    """
    return Hydrodynamics(params).resistance_ratio(load, profile=profile, segments=segments)
