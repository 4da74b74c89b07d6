import pytest

from runway import BeamConfiguration, RunwayDesigner, SelectionError, analyze, validate


@pytest.fixture
def reference_result(designer, reference_config):
    return designer.analyze(reference_config)


class TestReferenceAnalysis:
    def test_load_distribution(self, reference_result):
        r = reference_result
        assert (r.k1, r.k2) == (1.702, 1.844)
        assert r.ecl == pytest.approx(1.702 * 8_100)
        assert r.ecl == pytest.approx(13_786.2)

    def test_selected_beam(self, reference_result):
        r = reference_result
        assert r.selected_beam.designation == "W33x118+C15x33.9"
        assert [c.designation for c in r.candidates] == ["W33x118+C15x33.9", "W36x135+C15x33.9"]
        assert r.selected_capacity == 15_357

    def test_loads_and_moments(self, reference_result):
        r = reference_result
        assert r.runway_beam_weight == pytest.approx(6_683.6)
        assert r.max_vertical_load == pytest.approx(24_383.6)
        assert r.column_load_foundation == pytest.approx(26.8836)
        assert r.column_moment == pytest.approx(561_600)
        assert r.foundation_moment == pytest.approx(194_400)
        assert r.lateral_otm == pytest.approx(46.8)
        assert r.longitudinal_otm == pytest.approx(16.2)

    def test_checks(self, reference_result):
        r = reference_result
        assert r.lateral_deflection_ok
        assert r.longitudinal_deflection_ok
        assert r.stress_ok
        assert not r.axial_ok
        assert not r.overall_pass
        assert r.axial_unity.demand == pytest.approx(1.2475, abs=1e-4)
        assert r.governing_check.name == "axial_unity"

    def test_deterministic(self, designer, reference_config, reference_result):
        assert designer.analyze(reference_config) == reference_result

    def test_to_dict(self, reference_result):
        d = reference_result.to_dict()
        assert d["selected_beam"]["designation"] == "W33x118+C15x33.9"
        assert d["selected_beam"]["w_shape"] == "W33x118"
        assert d["overall_pass"] is False
        assert [c["check"] for c in d["checks"]] == [
            "lateral_deflection",
            "longitudinal_deflection",
            "bending_stress",
            "axial_unity",
        ]
        assert d["candidates"][0]["rank"] == 1

    def test_print_summary(self, reference_result, capsys):
        reference_result.print_summary()
        out = capsys.readouterr().out
        assert "W33x118+C15x33.9" in out
        assert "Overall: FAIL" in out


class TestOtherConfigurations:
    def test_passing_configuration(self, designer, light_config):
        r = designer.analyze(light_config)
        assert r.selected_beam.designation == "W10x22"
        assert r.overall_pass
        assert r.ecl == pytest.approx(1.532 * 1_550)

    def test_uncapped_system(self, designer, reference_inputs):
        reference_inputs["capped"] = False
        r = designer.analyze(BeamConfiguration(**reference_inputs))
        assert r.selected_beam.designation == "W24x104"
        assert r.runway_beam_weight == pytest.approx(104 * 44)
        assert "web_thickness" in r.to_dict()["selected_beam"]

    def test_no_adequate_beam(self, designer, heavy_inputs):
        config = BeamConfiguration(**heavy_inputs)
        with pytest.raises(SelectionError) as exc:
            designer.analyze(config)
        assert exc.value.span == 60
        assert exc.value.capped is False
        assert "Consider using the capped beam system" in str(exc.value)

    def test_capped_selection_error_message(self, designer, heavy_inputs):
        heavy_inputs["capped"] = True
        with pytest.raises(SelectionError, match="larger capped"):
            designer.analyze(BeamConfiguration(**heavy_inputs))

    def test_module_level_analyze(self, reference_config):
        assert analyze(reference_config).selected_beam.designation == "W33x118+C15x33.9"


class TestDesignerHelpers:
    def test_required_capacity(self, designer, reference_config):
        assert designer.required_capacity(reference_config) == pytest.approx(13_786.2)

    def test_is_beam_adequate(self, designer, reference_config, catalog):
        assert designer.is_beam_adequate(reference_config, catalog.section("W24x104"))
        assert not designer.is_beam_adequate(reference_config, catalog.section("W12x40"))

    def test_find_alternatives(self, designer, reference_config):
        options = designer.find_alternatives(reference_config, max_options=4)
        assert [o.designation for o in options] == [
            "W33x118+C15x33.9",
            "W36x135+C15x33.9",
            "W24x104",
            "W21x111",
        ]

    def test_search_beams(self, designer):
        assert designer.search_beams(13_786.2, 44, capped=True)[0].weight == 151.9

    def test_custom_factor_table(self, catalog, reference_config):
        from runway.k_factors import LoadFactorRow, LoadFactorTable

        flat = LoadFactorTable((LoadFactorRow(0.0, 1.0, 1.0),))
        r = RunwayDesigner(catalog, flat).analyze(reference_config)
        assert r.ecl == pytest.approx(8_100)


class TestSearchProperties:
    def test_reference_candidates_cover_published_ecl(self, designer):
        # the published worked example quotes ECL ~ 14260 lbs
        beams = designer.search_beams(14_260, 44, capped=True)
        assert beams
        assert designer.lookup_capacity(beams[0].designation, 44, capped=True) >= 14_260

    def test_wheelbase_wider_than_support_centers(self, reference_inputs):
        reference_inputs.update(wheelbase=10, support_centers=8)
        assert not validate(reference_inputs).ok
