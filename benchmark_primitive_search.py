# benchmark_primitive_search.py
"""
Benchmark of the primitive polynomial search against p^n.

Outputs
=======
* A LaTeX table of search times and candidates tested (figures/search_table.tex)
* A log-log plot of search time against p^n for each p (figures/search_scaling.pdf|png)
* A plot of the cost of the fast test against the brute force maximal order
  check on the same polynomial (figures/confirmation_cost.pdf|png)
"""

from __future__ import annotations

import math
import time
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt
import numpy as np

from polynomial_format import to_text
from primitivity import PolyOrder, find_primitive_polynomial, maximal_order

# (p, degrees) grid; p^n stays far below the 64 bit limit
SEARCH_GRID: Dict[int, List[int]] = {
    2: [4, 8, 16, 24, 32, 48, 60],
    3: [4, 8, 12, 20, 30, 38],
    5: [4, 8, 12, 20, 26],
    7: [4, 8, 12, 18, 22],
}

# brute force confirmation takes time proportional to p^n
MAX_CONFIRM_P_TO_N = 5 * 10 ** 4


# ----------------------------------------------------------------------------
# 1.  Utility helpers
# ----------------------------------------------------------------------------

def scientific(val: float) -> str:
    """Return a LaTeX-friendly scientific-notation string."""
    if val == float("inf") or math.isnan(val):
        return "$\\infty$"
    exponent = int(math.floor(math.log10(abs(val)))) if val else 0
    mantissa = val / (10 ** exponent) if val else 0
    return f"${mantissa:.2f} \\times 10^{{{exponent}}}$"


def time_search(p: int, n: int, repetitions: int) -> Tuple[float, int, List[int]]:
    """Mean time of the search for (p, n), the candidates tested and the polynomial found."""
    times = []
    for _ in range(repetitions):
        t0 = time.perf_counter()
        f, stats = find_primitive_polynomial(p, n)
        times.append(time.perf_counter() - t0)
    return sum(times) / len(times), stats.num_poly, f


def time_confirmation(p: int, n: int, f: List[int]) -> Tuple[float, float]:
    """Time of the fast test and of the brute force check on one primitive polynomial."""
    order = PolyOrder(p, n)
    t0 = time.perf_counter()
    order.is_primitive(f)
    fast = time.perf_counter() - t0

    t0 = time.perf_counter()
    confirmed = maximal_order(f, n, p)
    slow = time.perf_counter() - t0
    if not confirmed:
        raise RuntimeError(f"{to_text(f)} modulo {p} failed the maximal order check")
    return fast, slow


# ----------------------------------------------------------------------------
# 2.  LaTeX table builder
# ----------------------------------------------------------------------------

def create_latex_table(results: Dict[Tuple[int, int], Tuple[float, int, List[int]]],
                       repetitions: int) -> str:
    """Return a LaTeX table with one row per (p, n)."""
    table = ["\\begin{table}[h]", "\\centering", "\\small"]
    table.append("\\begin{tabular}{|c|c|c|c|l|}")
    table.append("\\hline")
    table.append("\\textbf{$p$} & \\textbf{$n$} & \\textbf{Time (s)} & \\textbf{Tested} & \\textbf{Polynomial} \\\\")
    table.append("\\hline")

    for (p, n), (elapsed, tested, f) in sorted(results.items()):
        table.append(f"{p} & {n} & {scientific(elapsed)} & {tested} & ${to_text(f)}$ \\\\")

    table.append("\\hline\n\\end{tabular}")
    caption = (f"Time to find the first primitive polynomial of degree $n$ modulo $p$ "
               f"(mean of {repetitions} runs) and the number of candidates tested.")
    table.append(f"\\caption{{{caption}}}")
    table.append("\\label{tab:search}")
    table.append("\\end{table}")
    return "\n".join(table)


# ----------------------------------------------------------------------------
# 3.  Plots
# ----------------------------------------------------------------------------

def create_scaling_plot(results: Dict[Tuple[int, int], Tuple[float, int, List[int]]],
                        out_dir: Path) -> None:
    """Save a log-log plot of search time against p^n as PDF and PNG."""
    plt.figure(dpi=300, figsize=(10, 6))
    markers = ["o", "s", "^", "D", "v", "*"]
    for idx, p in enumerate(sorted({p for p, _ in results})):
        degrees = sorted(n for q, n in results if q == p)
        xs = np.array([float(p) ** n for n in degrees])
        ys = np.array([results[(p, n)][0] for n in degrees])
        plt.loglog(xs, ys, label=f"p = {p}", marker=markers[idx % len(markers)], linewidth=2)
    plt.grid(True, which="both", ls="--", alpha=0.6)
    plt.xlabel("Number of candidate polynomials $p^n$ (log scale)")
    plt.ylabel("Search time (s, log scale)")
    plt.legend()
    plt.tight_layout()

    plt.savefig(out_dir / "search_scaling.pdf")
    plt.savefig(out_dir / "search_scaling.png")
    plt.close()


def create_confirmation_plot(confirmations: Dict[Tuple[int, int], Tuple[float, float]],
                             out_dir: Path) -> None:
    """Bar chart of the fast test against the brute force check."""
    if not confirmations:
        return
    keys = sorted(confirmations, key=lambda k: k[0] ** k[1])
    labels = [f"{p}^{n}" for p, n in keys]
    fast = np.array([confirmations[k][0] for k in keys])
    slow = np.array([confirmations[k][1] for k in keys])
    x = np.arange(len(keys))

    fig, ax = plt.subplots(figsize=(10, 6), dpi=300)
    ax.bar(x - 0.2, fast, width=0.4, label="Fast test")
    ax.bar(x + 0.2, slow, width=0.4, label="Maximal order")
    ax.set_yscale("log")
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45)
    ax.set_xlabel("$p^n$")
    ax.set_ylabel("Time (s, log scale)")
    ax.legend()
    ax.grid(True, axis="y", ls="--", alpha=0.6)
    fig.tight_layout()

    fig.savefig(out_dir / "confirmation_cost.pdf")
    fig.savefig(out_dir / "confirmation_cost.png")
    plt.close(fig)


# ----------------------------------------------------------------------------
# 4.  Benchmark driver
# ----------------------------------------------------------------------------

def run_benchmarks(grid: Dict[int, List[int]] = SEARCH_GRID,
                   repetitions: int = 3,
                   out_dir: Path = Path("figures")):
    out_dir.mkdir(parents=True, exist_ok=True)
    results: Dict[Tuple[int, int], Tuple[float, int, List[int]]] = {}
    confirmations: Dict[Tuple[int, int], Tuple[float, float]] = {}

    for p, degrees in grid.items():
        for n in degrees:
            elapsed, tested, f = time_search(p, n, repetitions)
            results[(p, n)] = (elapsed, tested, f)
            print(f"  p = {p:<3} n = {n:<3} {elapsed:.6g}s  tested {tested:<6} {to_text(f)}")

            if p ** n <= MAX_CONFIRM_P_TO_N:
                confirmations[(p, n)] = time_confirmation(p, n, f)

    return results, confirmations


if __name__ == "__main__":
    out = Path("figures")
    reps = 3
    print("Timing primitive polynomial search...")
    search_results, confirm_results = run_benchmarks(repetitions=reps, out_dir=out)

    (out / "search_table.tex").write_text(create_latex_table(search_results, reps))
    create_scaling_plot(search_results, out)
    create_confirmation_plot(confirm_results, out)
    print(f"Results written to {out}/")
