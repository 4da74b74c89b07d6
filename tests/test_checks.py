import pytest

from runway.checks import (
    check_axial_unity,
    check_bending_stress,
    check_lateral_deflection,
    check_longitudinal_deflection,
)


@pytest.fixture
def capped_beam(catalog):
    return catalog.section("W33x118+C15x33.9", capped=True)


class TestDeflection:
    def test_lateral(self, reference_config, capped_beam):
        res = check_lateral_deflection(reference_config, capped_beam, 2_340)
        expected = 2_340 * 240**3 / (3 * 29e6 * 6770.2)
        assert res.demand == pytest.approx(expected)
        assert res.demand == pytest.approx(0.0549, abs=1e-4)
        assert res.limit == pytest.approx(240 / 450)
        assert res.ok

    def test_longitudinal(self, reference_config, capped_beam):
        res = check_longitudinal_deflection(reference_config, capped_beam, 810)
        assert res.demand == pytest.approx(0.0190, abs=1e-4)
        assert res.limit == pytest.approx(0.48)
        assert res.ok

    def test_fails_for_flexible_beam(self, reference_config, catalog):
        res = check_lateral_deflection(reference_config, catalog.section("W6x9"), 2_340)
        assert not res.ok
        assert res.utilisation > 1


class TestStress:
    def test_bending_stress(self, reference_config, capped_beam):
        res = check_bending_stress(reference_config, capped_beam, 2_340)
        assert res.demand == pytest.approx(561_600 / 108.59)
        assert res.limit == 24_000
        assert res.units == "psi"
        assert res.ok


class TestAxialUnity:
    def test_reference_fails(self, reference_config):
        res = check_axial_unity(reference_config, 24_383.6)
        assert res.demand == pytest.approx(24_383.6 / 24_000 + 10 / 43.2)
        assert not res.ok

    def test_light_load_passes(self, light_config):
        res = check_axial_unity(light_config, 3_740)
        assert res.demand == pytest.approx(3_740 / 24_000 + 5 / 43.2)
        assert res.ok

    def test_demand_at_unity(self, reference_config):
        # 10 ft effective length takes 10/43.2 of the unity allowance
        load = (1 - 10 / 43.2) * 24_000
        res = check_axial_unity(reference_config, load)
        assert res.demand == pytest.approx(1.0)
        assert res.utilisation == pytest.approx(1.0)
