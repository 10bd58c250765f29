import os
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def plot_profit_progress(histories: Dict[str, List[int]], save_path: str) -> str:
    """Plot fittest profit per generation, one line per run, and save it.

    Generation 0 is the initial random population.
    """
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    for label, history in histories.items():
        ax.plot(range(len(history)), history, linewidth=1.6, label=label)
    ax.set_xlabel("Generation", fontsize=12)
    ax.set_ylabel("Total profit", fontsize=12)
    ax.set_title("GA progress", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.3)
    if histories and len(histories) <= 20:
        ax.legend(loc="lower right", fontsize=8, frameon=False)
    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path
