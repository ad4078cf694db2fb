import pytest

from heat_transfer.units import (
    UnitSystem,
    area_to_si,
    from_si,
    length_to_si,
    temperature_from_celsius,
    temperature_to_celsius,
    to_si,
)


class TestParameterConversion:
    def test_si_passthrough(self):
        assert to_si(42.0, "U", "SI") == 42.0
        assert from_si(42.0, "U", UnitSystem.SI) == 42.0

    def test_none_passthrough(self):
        assert to_si(None, "Q", UnitSystem.IMPERIAL) is None

    @pytest.mark.parametrize(
        "param_id,imperial,si",
        [
            ("Th_in", 212.0, 100.0),
            ("Tc_out", 32.0, 0.0),
            ("m_h", 1.0, 0.45359237),
            ("cp_c", 1.0, 4186.8),
            ("A", 10.76391, 1.0),
            ("U", 1.0, 5.678263),
            ("Q", 3412.14, 1000.0),
        ],
    )
    def test_imperial_to_si(self, param_id, imperial, si):
        assert to_si(imperial, param_id, "Imperial") == pytest.approx(si, rel=1e-4)

    def test_back_to_display(self):
        assert from_si(100.0, "Th_out", UnitSystem.IMPERIAL) == pytest.approx(212.0)
        assert from_si(4186.8, "cp_h", UnitSystem.IMPERIAL) == pytest.approx(1.0)

    def test_unknown_parameter(self):
        with pytest.raises(ValueError):
            to_si(1.0, "X", UnitSystem.IMPERIAL)


class TestScalars:
    def test_temperatures(self):
        assert temperature_to_celsius(373.15, "K") == pytest.approx(100.0)
        assert temperature_from_celsius(0.0, "K") == pytest.approx(273.15)
        assert temperature_to_celsius(50.0, "C") == 50.0

    def test_lengths(self):
        assert length_to_si(250.0, "mm") == pytest.approx(0.25)
        assert length_to_si(1.0, "ft") == pytest.approx(0.3048)
        assert area_to_si(1.0, "ft") == pytest.approx(0.09290304)
        with pytest.raises(ValueError):
            length_to_si(1.0, "yd")
