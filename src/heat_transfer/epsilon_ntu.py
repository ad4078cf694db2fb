import numpy as np

from heat_transfer.parameters import FlowArrangement


def epsilon_ntu(NTU, C_ratio, arrangement=FlowArrangement.COUNTER):
    """
    Calculate the effectiveness (epsilon) of a single pass heat exchanger using the Number of Transfer Units (NTU) method.

    Parameters:
    NTU (float/np array): Number of Transfer Units
    C_ratio (float): Capacity rate ratio 0 <= C_min/C_max <= 1
    arrangement (FlowArrangement or str, optional): 'parallel' or 'counter'. Default is 'counter'.

    Returns:
    epsilon (float/np array): Effectiveness of the heat exchanger, or None when no closed form
    exists for the arrangement (shell-and-tube pass layouts are solved iteratively instead).
    """
    assert 0 <= C_ratio <= 1, f"C_ratio should be between 0 and 1 (inclusive), but is {C_ratio:.1f}"
    arrangement = FlowArrangement.parse(arrangement)

    tol = 1e-6
    if arrangement is FlowArrangement.PARALLEL:
        return (1 - np.exp(-NTU * (1 + C_ratio))) / (1 + C_ratio)  # Kays & London (2-14)
    elif arrangement is FlowArrangement.COUNTER:
        if abs(C_ratio - 1) < tol:  # Close enough to 1
            return NTU / (NTU + 1)  # Kays & London (2-13b)
        return (1 - np.exp(-NTU * (1 - C_ratio))) / (
            1 - C_ratio * np.exp(-NTU * (1 - C_ratio))
        )  # Kays & London (2-13)
    return None


def ntu(U, area, c_min):
    """Number of transfer units UA / C_min."""
    return U * area / c_min


if __name__ == "__main__":
    from matplotlib import pyplot as plt

    NTUs = np.linspace(0, 7, 200)
    C_ratios = [0, 0.25, 0.5, 0.75, 1]
    for flow_tp, ls in (("counter", "-"), ("parallel", "--")):
        for C_ratio in C_ratios:
            eps = epsilon_ntu(NTUs, C_ratio, flow_tp)
            plt.plot(NTUs, eps, ls, label=rf"{flow_tp} $C_r$ = {C_ratio:.2f}")
    plt.xlabel("NTU")
    plt.ylabel(r"$\varepsilon$")
    plt.xlim(0, 7)
    plt.ylim(0, 1)
    plt.grid(True, which="both")
    plt.legend()
    plt.show()
