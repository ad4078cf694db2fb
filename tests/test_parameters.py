import pytest

from heat_transfer.parameters import PARAMETER_IDS, FlowArrangement, Role, ShellTubeConfig, label, parameter


def test_registry_has_eleven_parameters():
    assert len(PARAMETER_IDS) == 11
    assert set(PARAMETER_IDS) == {"Th_in", "Tc_in", "Th_out", "Tc_out", "m_h", "m_c", "cp_h", "cp_c", "A", "U", "Q"}


def test_parameter_metadata():
    spec = parameter("cp_c")
    assert spec.role is Role.SPECIFIC_HEAT
    assert spec.si_unit == "J/kg·K"
    assert spec.side == "cold"
    assert label("Q") == "Heat Transfer Rate"
    assert label("not-a-parameter") == "not-a-parameter"


@pytest.mark.parametrize("value", ["shell-tube", FlowArrangement.SHELL_TUBE])
def test_parse_arrangement(value):
    assert FlowArrangement.parse(value) is FlowArrangement.SHELL_TUBE


def test_parse_invalid_arrangement():
    with pytest.raises(ValueError):
        FlowArrangement.parse("crossflow")


@pytest.mark.parametrize("config,shells,tubes", [("1-2", 1, 2), ("2-4", 2, 4), ("1-4", 1, 4), ("1-6", 1, 6)])
def test_shell_tube_passes(config, shells, tubes):
    parsed = ShellTubeConfig.parse(config)
    assert (parsed.shell_passes, parsed.tube_passes) == (shells, tubes)
