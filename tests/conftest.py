import pytest

from fin_bending.blade_structure.blade_params import BeamParams, compute_default_params


@pytest.fixture
def params():
    """Calculator defaults with the minimum extra layer length spelled out."""
    return compute_default_params().replace(min_extra_layer_length=50.0)


@pytest.fixture
def stepped_params():
    """Unit layer thickness so that thickness equals the layer count."""
    return BeamParams(
        layers_foot=4,
        layers_tip=2,
        L=300.0,
        b=180.0,
        E=32.0,
        thickness=1.0,
        min_extra_layer_length=100.0,
    )
