import logging

import matplotlib.pyplot as plt
from tabulate import tabulate

from heat_transfer.hex_solver import compare_arrangements, solve_heat_exchanger
from heat_transfer.lmtd import temperature_profile
from heat_transfer.logging_utils import configure_logging
from heat_transfer.parameters import FlowArrangement, ShellTubeConfig, label

# ---------------------------
# Case definition (SI)
# ---------------------------
# Water/water duty: 0.5 kg/s at 80 °C cooled by 0.75 kg/s at 20 °C
TEMPERATURES = {"Th_in": 80.0, "Tc_in": 20.0, "Th_out": 50.0, "Tc_out": 40.0}
STREAMS = {"m_h": 0.5, "cp_h": 4180.0, "m_c": 0.75, "cp_c": 4180.0}
U = 500.0  # W/m²K
SHELL_CONFIG = ShellTubeConfig.ONE_TWO
SHOW_PLOT = True
DEFAULT_DPI = 120


def _print_metrics_table():
    outcomes = compare_arrangements(TEMPERATURES | STREAMS | {"U": U}, shell_config=SHELL_CONFIG)
    metric_rows = ["Q", "A", "LMTD", "correctionFactor", "epsilon", "NTU", "thermalEfficiency"]
    headers = ["Metric"] + [arrangement.value for arrangement in outcomes]
    table_data = []
    for metric in metric_rows:
        row = [label(metric)]
        for outcome in outcomes.values():
            if not outcome.ok:
                row.append("n/a")
                continue
            values = outcome.result.as_dict()
            row.append(f"{values[metric]:.4g}" if metric in values else "-")
        table_data.append(row)
    print(tabulate(table_data, headers=headers, tablefmt="grid"))

    for arrangement, outcome in outcomes.items():
        if not outcome.ok:
            print(f"{arrangement.value}: {outcome.error}")


def _plot_profiles():
    fig, axes = plt.subplots(1, 2, figsize=(11, 4), dpi=DEFAULT_DPI, sharey=True)
    for ax, arrangement in zip(axes, (FlowArrangement.PARALLEL, FlowArrangement.COUNTER), strict=True):
        # rate the same exchanger in each arrangement: fix U·A, solve for the outlets
        known = {"Th_in": TEMPERATURES["Th_in"], "Tc_in": TEMPERATURES["Tc_in"], **STREAMS, "U": U, "A": 3.0}
        result = solve_heat_exchanger(known, ["Th_out", "Tc_out", "Q"], arrangement=arrangement)
        x, T_hot, T_cold = temperature_profile(
            result["Th_in"], result["Tc_in"], result["Th_out"], result["Tc_out"], arrangement
        )
        ax.plot(x, T_hot, color="tab:red", label="hot stream")
        ax.plot(x, T_cold, color="tab:blue", label="cold stream")
        ax.set_title(f"{arrangement.value} flow, Q = {result['Q'] / 1e3:.1f} kW")
        ax.set_xlabel("Position fraction along the exchanger")
        ax.grid(True, alpha=0.3)
    axes[0].set_ylabel("Temperature (°C)")
    axes[0].legend()
    fig.tight_layout()
    plt.show()


if __name__ == "__main__":
    configure_logging(logging.INFO)
    _print_metrics_table()
    if SHOW_PLOT:
        _plot_profiles()
