import math

import pytest

from runway.config import BeamConfiguration, Err, Ok, impact_factor_for, validate
from runway.errors import ValidationError


class TestDerivedValues:
    def test_reference_configuration(self, reference_config):
        c = reference_config
        assert c.total_beam_weight == 6_000
        assert c.impact_factor == pytest.approx(1.15)
        assert c.max_wheel_load == pytest.approx(8_100)
        assert c.wheelbase_span_ratio == pytest.approx(7 / 45)
        assert c.lateral_load == pytest.approx(2_340)
        assert c.longitudinal_load == pytest.approx(810)
        assert c.rail_height_in == 240
        assert c.effective_length == pytest.approx(10)

    def test_freestanding_effective_length(self, reference_inputs):
        reference_inputs["freestanding"] = True
        c = BeamConfiguration(**reference_inputs)
        assert c.effective_length_factor == 2.0
        assert c.effective_length == pytest.approx(40)

    def test_hoist_speed_sets_impact_factor(self, reference_inputs):
        reference_inputs["hoist_speed"] = 40
        c = BeamConfiguration(**reference_inputs)
        assert c.impact_factor == pytest.approx(1.2)
        assert c.max_wheel_load == pytest.approx(1.2 * 5_000 + 850 + 1_500)

    def test_impact_factor_default(self):
        assert impact_factor_for(0) == 1.15
        assert impact_factor_for(100) == pytest.approx(1.5)

    def test_immutable(self, reference_config):
        with pytest.raises(AttributeError):
            reference_config.rated_capacity = 1

    def test_inputs_round_trip(self, reference_config):
        assert BeamConfiguration(**reference_config.inputs()) == reference_config

    def test_summary_and_str(self, reference_config):
        text = reference_config.summary()
        assert "Capacity: 10,000 lbs" in text
        assert "Beam System: Capped" in text
        assert "Max Wheel Load: 8100 lbs" in text
        assert "Span=44ft" in str(reference_config)


class TestValidationRules:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("rated_capacity", 0),
            ("rated_capacity", 80_001),
            ("hoist_trolley_weight", 0),
            ("num_columns", 1),
            ("rail_height", 7.9),
            ("rail_height", 100.5),
            ("wheelbase", 0),
            ("wheelbase", 51),
            ("support_centers", 151),
            ("bridge_span", 0),
            ("bridge_span", 121),
            ("hoist_speed", -1),
            ("hoist_speed", 501),
        ],
    )
    def test_out_of_range(self, reference_inputs, field, value):
        reference_inputs[field] = value
        with pytest.raises(ValidationError) as exc:
            BeamConfiguration(**reference_inputs)
        assert exc.value.field == field

    def test_fractional_columns_rejected_on_construction(self, reference_inputs):
        reference_inputs["num_columns"] = 2.5
        with pytest.raises(ValidationError, match="whole number") as exc:
            BeamConfiguration(**reference_inputs)
        assert exc.value.field == "num_columns"

    def test_self_weight_must_be_positive(self, reference_inputs):
        reference_inputs.update(girder_weight=0, panel_weight=0, end_truck_weight=0)
        with pytest.raises(ValidationError, match="self-weight"):
            BeamConfiguration(**reference_inputs)

    def test_wheelbase_greater_than_support_centers(self, reference_inputs):
        reference_inputs.update(wheelbase=30, support_centers=20)
        with pytest.raises(ValidationError, match="cannot be greater than support centers"):
            BeamConfiguration(**reference_inputs)

    def test_boundary_values_accepted(self, reference_inputs):
        reference_inputs.update(
            rated_capacity=80_000, rail_height=100, bridge_span=120, hoist_speed=500
        )
        BeamConfiguration(**reference_inputs)

    def test_first_violation_reported(self, reference_inputs):
        reference_inputs.update(rated_capacity=0, rail_height=1)
        with pytest.raises(ValidationError) as exc:
            BeamConfiguration(**reference_inputs)
        assert exc.value.field == "rated_capacity"

    def test_validation_error_is_value_error(self, reference_inputs):
        reference_inputs["num_columns"] = 0
        with pytest.raises(ValueError):
            BeamConfiguration(**reference_inputs)


class TestValidate:
    def test_ok(self, reference_inputs):
        result = validate(reference_inputs)
        assert isinstance(result, Ok)
        assert result.ok
        assert result.unwrap().max_wheel_load == pytest.approx(8_100)

    def test_missing_input(self, reference_inputs):
        del reference_inputs["bridge_span"]
        result = validate(reference_inputs)
        assert isinstance(result, Err)
        assert result.error.field == "bridge_span"
        with pytest.raises(ValidationError, match="Missing"):
            result.unwrap()

    @pytest.mark.parametrize("value", ["heavy", None, True, math.inf, math.nan])
    def test_bad_numbers(self, reference_inputs, value):
        reference_inputs["rated_capacity"] = value
        result = validate(reference_inputs)
        assert not result.ok
        assert result.error.field == "rated_capacity"

    def test_numeric_strings_accepted(self, reference_inputs):
        reference_inputs["rated_capacity"] = "10000"
        assert validate(reference_inputs).ok

    def test_fractional_columns(self, reference_inputs):
        reference_inputs["num_columns"] = 2.5
        result = validate(reference_inputs)
        assert result.error.field == "num_columns"

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), (False, False), ("true", True), ("false", False), ("1", True), ("0", False), ("False", False)],
    )
    def test_flag_strings(self, reference_inputs, value, expected):
        reference_inputs["freestanding"] = value
        reference_inputs["capped"] = value
        config = validate(reference_inputs).unwrap()
        assert config.freestanding is expected
        assert config.capped is expected

    def test_freestanding_false_string_keeps_braced_length(self, reference_inputs):
        reference_inputs["freestanding"] = "false"
        config = validate(reference_inputs).unwrap()
        assert config.effective_length == pytest.approx(10.0)

    @pytest.mark.parametrize("field", ["freestanding", "capped"])
    @pytest.mark.parametrize("value", ["no", "yes", 2, 1.0, []])
    def test_bad_flags(self, reference_inputs, field, value):
        reference_inputs[field] = value
        result = validate(reference_inputs)
        assert not result.ok
        assert result.error.field == field

    def test_defaults(self, reference_inputs):
        del reference_inputs["capped"]
        del reference_inputs["freestanding"]
        config = validate(reference_inputs).unwrap()
        assert config.capped is True
        assert config.freestanding is False
        assert config.hoist_speed == 0

    def test_rule_violation(self, reference_inputs):
        reference_inputs["rail_height"] = 5
        result = validate(reference_inputs)
        assert result.error.field == "rail_height"
        assert "between 8 and 100" in result.error.message

    def test_create_raises(self, reference_inputs):
        reference_inputs["wheelbase"] = 60
        with pytest.raises(ValidationError):
            BeamConfiguration.create(**reference_inputs)
