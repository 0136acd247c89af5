from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from fin_bending.utils.import_toml import load_toml

toml = load_toml()


# === BLADE PARAMETERS ===

ALIASES = {
    "layersFoot": "layers_foot",
    "layersTip": "layers_tip",
    "minExtraLayerLength": "min_extra_layer_length",
    "layerThickness": "thickness",
    "length": "L",
    "width": "b",
    "modulus": "E",
}


def to_number(value: Any) -> float:
    """
    Permissive numeric parsing: anything that is not a number becomes 0.
    Infinite values are kept so that callers can decide how to degrade.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def to_layer_count(value: Any) -> int:
    number = to_number(value)
    if not math.isfinite(number):
        return 0
    return int(number)


@dataclass(frozen=True)
class BeamParams:
    layers_foot: int = 0
    layers_tip: int = 0
    L: float = 0.0  # free blade length [mm]
    b: float = 0.0  # blade width [mm]
    E: float = 0.0  # Young's modulus [GPa]
    thickness: float = 0.0  # single layer thickness [mm]
    min_extra_layer_length: float = toml["config"]["blade"]["min_extra_layer_length"]

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> BeamParams:
        """
        Build parameters from a loosely typed mapping, e.g. slider values or JSON.

        Both the snake_case field names and the camelCase names used by the web
        calculator are accepted. Missing or non-numeric values become 0, except
        for the minimum extra layer length which falls back to the config value.

        Parameters:
            values (Mapping): Raw parameter values.

        Returns:
            BeamParams: Coerced, immutable parameters.
        """
        raw = {}
        for key, value in values.items():
            raw[ALIASES.get(key, key)] = value

        min_length = raw.get("min_extra_layer_length")
        if min_length is None:
            min_length = toml["config"]["blade"]["min_extra_layer_length"]

        return cls(
            layers_foot=to_layer_count(raw.get("layers_foot")),
            layers_tip=to_layer_count(raw.get("layers_tip")),
            L=to_number(raw.get("L")),
            b=to_number(raw.get("b")),
            E=to_number(raw.get("E")),
            thickness=to_number(raw.get("thickness")),
            min_extra_layer_length=to_number(min_length),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **changes) -> BeamParams:
        return replace(self, **changes)

    @property
    def extra_layers(self) -> int:
        """Number of layers that taper out between foot and tip (never negative)."""
        return max(0, self.layers_foot - self.layers_tip)

    def __repr__(self):
        return (
            f"BeamParams({self.layers_foot}/{self.layers_tip} layers, L={self.L} mm, "
            f"b={self.b} mm, E={self.E} GPa, t={self.thickness} mm)"
        )


def compute_default_params() -> BeamParams:
    """
    Parameters the calculator starts with, read from the [config.blade] table.
    """
    blade = toml["config"]["blade"]
    return BeamParams(
        layers_foot=int(blade["layers_foot"]),
        layers_tip=int(blade["layers_tip"]),
        L=float(blade["L"]),
        b=float(blade["b"]),
        E=float(blade["E"]),
        thickness=float(blade["thickness"]),
        min_extra_layer_length=float(blade["min_extra_layer_length"]),
    )


def validate_params(params: BeamParams) -> BeamParams:
    """
    Strict check on top of the permissive numeric core.

    The core functions return 0 for degenerate geometry; callers that prefer
    an explicit failure run the parameters through here first.

    Raises:
        ValueError: If the geometry cannot describe a physical blade.
    """
    for name in ("L", "b", "E", "thickness"):
        value = getattr(params, name)
        if not math.isfinite(value) or value <= 0:
            logging.error(f"Blade parameter {name} must be positive and finite, got {value}.")
            raise ValueError(f"Blade parameter {name} must be positive and finite, got {value}.")

    if params.layers_tip < 0 or params.layers_foot < 0:
        logging.error("Layer counts cannot be negative.")
        raise ValueError("Layer counts cannot be negative.")

    if params.layers_tip == 0:
        logging.error("At least one layer must run all the way to the tip.")
        raise ValueError("At least one layer must run all the way to the tip.")

    if params.layers_foot < params.layers_tip:
        logging.error(
            "The foot needs at least as many layers as the tip "
            f"({params.layers_foot} < {params.layers_tip})."
        )
        raise ValueError(
            "The foot needs at least as many layers as the tip "
            f"({params.layers_foot} < {params.layers_tip})."
        )

    if params.min_extra_layer_length < 0:
        logging.error("The minimum extra layer length cannot be negative.")
        raise ValueError("The minimum extra layer length cannot be negative.")

    return params
