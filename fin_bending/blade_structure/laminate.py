from __future__ import annotations

from dataclasses import dataclass

from .blade_params import BeamParams
from .section_geometry import extra_layer_lengths


# === LAMINATE STACK ===

@dataclass(frozen=True)
class LaminateLayer:
    index: int
    length: float  # [mm]
    coverage_ratio: float  # fraction of the free length covered by this layer
    type: str = "tip"  # "tip" runs foot to tip, "foot-extra" stops short of the tip

    def __repr__(self):
        return f"LaminateLayer({self.type} #{self.index}, l={self.length:.1f} mm, {self.coverage_ratio:.0%})"


@dataclass(frozen=True)
class LaminateStack:
    layers_tip: int
    layers_foot: int
    length: float
    width: float
    thickness: float
    base_layers: tuple[LaminateLayer, ...]
    extra_layers: tuple[LaminateLayer, ...]
    min_extra_layer_length: float = 0.0

    @property
    def total_layers(self) -> int:
        return len(self.base_layers) + len(self.extra_layers)

    @property
    def layers(self) -> tuple[LaminateLayer, ...]:
        return self.base_layers + self.extra_layers

    def layer_count_at(self, x: float) -> int:
        """
        Number of layers present at position x [mm] from the foot.
        """
        return len(self.base_layers) + sum(1 for layer in self.extra_layers if x < layer.length)


def compute_laminate_stack(params: BeamParams) -> LaminateStack:
    """
    Describes how the physical plies are laid up to obtain the tapered blade.

    The geometry is echoed from the parameters, not recomputed. Used for
    reporting only, the bending solve works from the thickness profile.

    Parameters:
        params (BeamParams): Blade geometry.

    Returns:
        LaminateStack: Base layers (full length) and extra foot layers.
    """
    L = params.L

    base_layers = tuple(
        LaminateLayer(
            index=i + 1,
            length=L,
            coverage_ratio=1.0 if L > 0 else 0.0,
            type="tip",
        )
        for i in range(max(0, params.layers_tip))
    )

    extra_layers = tuple(
        LaminateLayer(
            index=j,
            length=float(layer_length),
            coverage_ratio=float(layer_length / L) if L > 0 else 0.0,
            type="foot-extra",
        )
        for j, layer_length in enumerate(extra_layer_lengths(params), start=1)
    )

    return LaminateStack(
        layers_tip=params.layers_tip,
        layers_foot=params.layers_foot,
        length=L,
        width=params.b,
        thickness=params.thickness,
        base_layers=base_layers,
        extra_layers=extra_layers,
        min_extra_layer_length=params.min_extra_layer_length,
    )
