import dataclasses
import math

import pytest

from fin_bending.blade_structure.blade_params import (
    BeamParams,
    compute_default_params,
    to_number,
    validate_params,
)


class TestDefaults:
    def test_default_params_match_calculator(self):
        params = compute_default_params()
        assert params.layers_foot == 4
        assert params.layers_tip == 2
        assert params.L == 250
        assert params.b == 180
        assert params.E == 32
        assert params.thickness == pytest.approx(0.35)
        assert params.min_extra_layer_length == 50

    def test_extra_layers_never_negative(self):
        assert compute_default_params().extra_layers == 2
        assert BeamParams(layers_foot=1, layers_tip=3).extra_layers == 0


class TestCoercion:
    @pytest.mark.parametrize("raw", [None, "abc", [], float("nan")])
    def test_non_numeric_becomes_zero(self, raw):
        assert to_number(raw) == 0.0

    def test_numeric_strings_are_parsed(self):
        assert to_number("0.35") == pytest.approx(0.35)

    def test_infinity_is_kept(self):
        assert math.isinf(to_number("inf"))

    def test_from_dict_accepts_calculator_names(self):
        params = BeamParams.from_dict(
            {"layersFoot": "5", "layersTip": 2, "L": 300, "b": "200", "E": 30, "thickness": 0.4}
        )
        assert params.layers_foot == 5
        assert params.layers_tip == 2
        assert params.b == 200.0
        assert params.min_extra_layer_length == 50.0

    def test_from_dict_accepts_field_names(self, params):
        assert BeamParams.from_dict(params.to_dict()) == params

    def test_from_dict_zeroes_garbage(self):
        params = BeamParams.from_dict({"layersFoot": 4, "layersTip": "two", "b": None})
        assert params.layers_tip == 0
        assert params.b == 0.0
        assert params.L == 0.0


class TestImmutability:
    def test_params_are_frozen(self, params):
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.L = 100.0

    def test_replace_returns_copy(self, params):
        longer = params.replace(L=400.0)
        assert longer.L == 400.0
        assert params.L == 250.0


class TestValidation:
    def test_defaults_are_valid(self, params):
        assert validate_params(params) is params

    @pytest.mark.parametrize(
        "changes",
        [
            {"L": 0.0},
            {"b": -10.0},
            {"E": float("inf")},
            {"thickness": 0.0},
            {"layers_tip": 0},
            {"layers_foot": 1},
            {"min_extra_layer_length": -5.0},
        ],
    )
    def test_degenerate_geometry_is_rejected(self, params, changes):
        with pytest.raises(ValueError):
            validate_params(params.replace(**changes))
