import pytest

from runway import BeamConfiguration, RunwayDesigner, default_catalog, default_factor_table

REFERENCE_INPUTS = dict(
    rated_capacity=10_000,
    hoist_trolley_weight=1_700,
    girder_weight=3_000,
    panel_weight=2_000,
    end_truck_weight=1_000,
    num_columns=2,
    rail_height=20,
    wheelbase=7,
    support_centers=45,
    bridge_span=44,
    freestanding=False,
    capped=True,
)

# 1-ton crane on a short runway; every check passes
LIGHT_INPUTS = dict(
    rated_capacity=2_000,
    hoist_trolley_weight=300,
    girder_weight=500,
    panel_weight=300,
    end_truck_weight=200,
    num_columns=2,
    rail_height=10,
    wheelbase=5,
    support_centers=20,
    bridge_span=20,
    freestanding=False,
    capped=False,
)

# no catalog beam carries this at 60 ft
HEAVY_INPUTS = dict(
    rated_capacity=80_000,
    hoist_trolley_weight=5_000,
    girder_weight=10_000,
    panel_weight=5_000,
    end_truck_weight=5_000,
    num_columns=4,
    rail_height=30,
    wheelbase=10,
    support_centers=60,
    bridge_span=60,
    freestanding=True,
    capped=False,
)


@pytest.fixture
def reference_inputs():
    return dict(REFERENCE_INPUTS)


@pytest.fixture
def light_inputs():
    return dict(LIGHT_INPUTS)


@pytest.fixture
def heavy_inputs():
    return dict(HEAVY_INPUTS)


@pytest.fixture
def reference_config():
    return BeamConfiguration(**REFERENCE_INPUTS)


@pytest.fixture
def light_config():
    return BeamConfiguration(**LIGHT_INPUTS)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def factor_table():
    return default_factor_table()


@pytest.fixture
def designer(catalog, factor_table):
    return RunwayDesigner(catalog, factor_table)
