from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from fin_bending.constants import DEFAULT_SEGMENTS, MIN_SEGMENTS
from fin_bending.utils.unit_converter import AngleConverter, MetricConverter

from .blade_params import BeamParams, toml
from .section_geometry import effective_thickness_at, second_moment_of_area


# === CURVATURE ===

def compute_curvature(load, x, params: BeamParams):
    """
    Local curvature [1/mm] of the blade under a tip load.

    The bending moment of a tip load is load * (L - x); dividing by the local
    flexural rigidity E * I(x) gives the curvature. Positions where the
    rigidity vanishes get zero curvature.

    Parameters:
        load (float): Tip load [N].
        x (float | np.ndarray): Position(s) from the foot [mm].
        params (BeamParams): Blade geometry and material.

    Returns:
        float | np.ndarray: Curvature at x [1/mm].
    """
    positions = np.asarray(x, dtype=float)
    I = second_moment_of_area(params.b, effective_thickness_at(positions, params))
    EI = MetricConverter.pressure_GPa_MPa(params.E) * I  # [N mm^2]

    with np.errstate(divide="ignore", invalid="ignore"):
        kappa = load * (params.L - positions) / EI
    kappa = np.where(np.isfinite(kappa), kappa, 0.0)

    if np.ndim(x) == 0:
        return float(kappa)
    return kappa


# === PROFILE INTEGRATION ===

def resolve_segments(segments=None) -> int:
    """
    Number of sample points along the blade. Anything below 3 cannot describe
    a curve and is replaced by the configured default.
    """
    default = toml["config"]["bending"].get("segments", DEFAULT_SEGMENTS)
    if not isinstance(default, int) or default < MIN_SEGMENTS:
        default = DEFAULT_SEGMENTS

    if segments is None:
        return default
    if isinstance(segments, bool) or not isinstance(segments, (int, float, np.integer, np.floating)):
        logging.warning(f"Ignoring non-numeric segment count {segments!r}, using {default}.")
        return default
    if not math.isfinite(segments) or segments != int(segments) or segments < MIN_SEGMENTS:
        logging.warning(f"Segment count {segments} is not usable, using {default}.")
        return default
    return int(segments)


def _sample_positions(params: BeamParams, segments: int) -> tuple[np.ndarray, float]:
    dx = params.L / (segments - 1)
    return np.arange(segments) * dx, dx


def _tangent_angles(kappa: np.ndarray, dx: float) -> np.ndarray:
    # forward Euler, the curvature at the end of each link turns that link
    theta = np.zeros(len(kappa))
    theta[1:] = np.cumsum(kappa[1:] * dx)
    return theta


def _finite_or_zero(value) -> float:
    value = float(value)
    return value if math.isfinite(value) else 0.0


def compute_tip_angle(load, params: BeamParams, segments=None) -> float:
    """
    Tip angle [deg] for a given tip load, without building the full shape.
    """
    segments = resolve_segments(segments)
    x, dx = _sample_positions(params, segments)
    theta = _tangent_angles(compute_curvature(load, x, params), dx)
    return AngleConverter.rad_to_deg(_finite_or_zero(theta[-1]))


@dataclass(frozen=True)
class BendingProfile:
    x: np.ndarray  # arc length position [mm]
    kappa: np.ndarray  # curvature [1/mm]
    theta: np.ndarray  # tangent angle [rad]
    X: np.ndarray  # deflected centerline, along the undeformed axis [mm]
    Y: np.ndarray  # deflected centerline, in the load direction [mm]
    tip_angle_rad: float
    tip_angle_deg: float
    tip_deflection: float
    max_curvature_index: int

    @property
    def segments(self) -> int:
        return len(self.x)

    @property
    def max_curvature_position(self) -> float:
        """Arc length position [mm] where the blade bends the most."""
        return float(self.x[self.max_curvature_index])

    def __repr__(self):
        return (
            f"BendingProfile(n={self.segments}, tip angle={self.tip_angle_deg:.2f} deg, "
            f"tip deflection={self.tip_deflection:.2f} mm)"
        )


def compute_bending_profile(load, params: BeamParams, segments=None) -> BendingProfile:
    """
    Deflected shape of the blade under a tip load.

    The blade is treated as a chain of rigid links of length dx. Each link is
    rotated by the integrated curvature and projected onto the current tangent,
    so large tip angles are followed instead of a small-deflection line.

    Parameters:
        load (float): Tip load [N].
        params (BeamParams): Blade geometry and material.
        segments (int, optional): Number of sample points, default from config.

    Returns:
        BendingProfile: Sampled curvature, angle and shape.
    """
    segments = resolve_segments(segments)
    x, dx = _sample_positions(params, segments)
    kappa = compute_curvature(load, x, params)
    theta = _tangent_angles(kappa, dx)

    X = np.zeros(segments)
    Y = np.zeros(segments)
    X[1:] = np.cumsum(dx * np.cos(theta[1:]))
    Y[1:] = np.cumsum(dx * np.sin(theta[1:]))

    tip_angle_rad = _finite_or_zero(theta[-1])

    return BendingProfile(
        x=x,
        kappa=kappa,
        theta=theta,
        X=X,
        Y=Y,
        tip_angle_rad=tip_angle_rad,
        tip_angle_deg=AngleConverter.rad_to_deg(tip_angle_rad),
        tip_deflection=_finite_or_zero(Y[-1]),
        max_curvature_index=int(np.argmax(kappa)),
    )


def bending_profile_points(profile: BendingProfile, digits: int = 4) -> list[dict]:
    """
    Rounded (arc position, x, y) points of a profile, ready for plotting or
    for storing as a reference payload.
    """
    return [
        {
            "arc_position": round(float(s), 2),
            "x": round(float(X), digits),
            "y": round(float(Y), digits),
        }
        for s, X, Y in zip(profile.x, profile.X, profile.Y)
    ]
