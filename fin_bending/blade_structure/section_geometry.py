from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .blade_params import BeamParams


# === THICKNESS PROFILE ===

def extra_layer_lengths(params: BeamParams) -> np.ndarray:
    """
    Lengths [mm] of the layers that taper out between foot and tip.

    Layer i (1..n) covers min_len + (L - min_len) * i / n, so the lengths are
    evenly spaced from the minimum coverage up to the full blade length. No
    layer is shorter than min_extra_layer_length.
    """
    n = int(params.extra_layers)
    if n <= 0:
        return np.zeros(0)
    min_len = params.min_extra_layer_length
    fractions = np.arange(1, n + 1) / n
    return np.maximum(min_len, min_len + (params.L - min_len) * fractions)


def effective_thickness_at(x, params: BeamParams):
    """
    Laminate thickness [mm] at position x measured from the foot.

    All tip layers run the full length; an extra layer is present wherever x
    lies before its end. Works on scalars and numpy arrays.

    Parameters:
        x (float | np.ndarray): Position(s) along the blade [mm].
        params (BeamParams): Blade geometry.

    Returns:
        float | np.ndarray: Thickness at x [mm].
    """
    positions = np.asarray(x, dtype=float)
    lengths = extra_layer_lengths(params)
    present = (positions[..., np.newaxis] < lengths).sum(axis=-1)
    thickness = (params.layers_tip + present) * params.thickness
    if np.ndim(x) == 0:
        return float(thickness)
    return thickness


def second_moment_of_area(b, h):
    # rectangular section, bending about the width axis
    return b * h**3 / 12.0


# === SECTION INERTIA ===

@dataclass(frozen=True)
class SectionInertia:
    foot: float = 0.0  # [mm^4]
    tip: float = 0.0  # [mm^4]


def _is_positive(value) -> bool:
    return math.isfinite(value) and value > 0


def compute_section_inertia(params: BeamParams | None) -> SectionInertia:
    """
    Second moment of area at the clamped foot (x = 0) and the free tip (x = L).
    Degenerate geometry gives 0 instead of NaN.
    """
    if params is None:
        return SectionInertia()

    if not (_is_positive(params.b) and _is_positive(params.L) and _is_positive(params.thickness)):
        return SectionInertia()

    def inertia_at(x: float) -> float:
        I = second_moment_of_area(params.b, effective_thickness_at(x, params))
        return I if math.isfinite(I) and I > 0 else 0.0

    return SectionInertia(foot=inertia_at(0.0), tip=inertia_at(params.L))
