import logging

import matplotlib.pyplot as plt
import numpy as np
from tabulate import tabulate

from heat_transfer.correction_factor import correction_factor
from heat_transfer.logging_utils import configure_logging
from heat_transfer.parameters import ShellTubeConfig

# ---------------------------
# Quick plot configuration
# ---------------------------
# Capacity ratios drawn as separate curves on every chart
R_VALUES = [0.2, 0.5, 1.0, 1.5, 2.0, 4.0]
SHOW_PLOT = True
DEFAULT_DPI = 120

effectiveness = np.linspace(0.01, 0.99, 300)


def _print_quick_table():
    p_list = [0.1, 0.3, 0.5, 0.7]
    headers = ["P", "R"] + [config.value for config in ShellTubeConfig]
    table_data = []
    for P in p_list:
        for R in (0.5, 1.0, 2.0):
            table_data.append([f"{P:.2f}", f"{R:.2f}"] + [f"{correction_factor(P, R, c):.4f}" for c in ShellTubeConfig])
    print(tabulate(table_data, headers=headers, tablefmt="grid"))


def _plot_curves():
    fig, axes = plt.subplots(2, 2, figsize=(11, 8), dpi=DEFAULT_DPI, sharex=True, sharey=True)
    for ax, config in zip(axes.flat, ShellTubeConfig, strict=True):
        for R in R_VALUES:
            F = np.array([correction_factor(P, R, config) for P in effectiveness])
            # values that fell back to 1 outside the domain are hidden
            upper = min(1.0, 1.0 / R) if R > 0 else 1.0
            F = np.where(effectiveness < upper, F, np.nan)
            ax.plot(effectiveness, F, label=f"R = {R:g}")
        ax.set_title(f"{config.value} shell-and-tube")
        ax.set_ylim(0.4, 1.02)
        ax.grid(True, alpha=0.3)
    for ax in axes[-1]:
        ax.set_xlabel("P (cold-stream effectiveness)")
    for ax in axes[:, 0]:
        ax.set_ylabel("F")
    axes[0, 0].legend(loc="lower left", fontsize=8)
    fig.tight_layout()
    plt.show()


if __name__ == "__main__":
    configure_logging(logging.INFO)
    _print_quick_table()
    if SHOW_PLOT:
        _plot_curves()
