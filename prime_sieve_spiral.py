# prime_sieve_spiral.py
"""
Golden-angle spiral of a prime container: n sits at radius sqrt(n) and angle
n * golden_angle. Primes are drawn over a faint layer of the composites
between the first and last prime.
"""

from __future__ import annotations
import math

# Optional for PNG
try:
    import matplotlib.pyplot as plt
    import numpy as np
    HAVE_MPL = True
except Exception:
    HAVE_MPL = False

from prime_sieve_contract import PrimeContainer

GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))


def spiral_coords(ns) -> tuple:
    """(xs, ys) arrays for x = sqrt(n) cos(n·φ), y = sqrt(n) sin(n·φ)."""
    n = np.asarray(ns, dtype=float)
    r = np.sqrt(n)
    th = n * GOLDEN_ANGLE
    return r * np.cos(th), r * np.sin(th)


def save_spiral_png(container: PrimeContainer,
                    png_path: str,
                    *,
                    show_composites: bool = True,
                    bw: bool = False,
                    show_grid: bool = True,
                    show_labels: bool = True) -> None:
    if not HAVE_MPL:
        raise RuntimeError("matplotlib is required to draw the spiral")

    # read both layers up front so a concurrent extend fails before drawing
    primes = container.to_list()
    composites = list(container.composites()) if show_composites else []

    plt.figure(figsize=(7, 7), dpi=150)
    ax = plt.gca()
    ax.set_aspect('equal', 'box')

    if composites:
        xs_c, ys_c = spiral_coords(composites)
        plt.scatter(xs_c, ys_c, s=2, alpha=0.20,
                    color="0.80" if bw else "#C7D3E3", label="composite")
    if primes:
        xs_p, ys_p = spiral_coords(primes)
        plt.scatter(xs_p, ys_p, s=4, alpha=0.90,
                    color="0.05" if bw else "tab:blue", label="prime")

    if show_grid:
        ax.minorticks_on()
        ax.grid(True, which='major', color="0.80", linewidth=0.6)
        ax.grid(True, which='minor', color="0.92", linewidth=0.3)

    if show_labels:
        plt.xlabel(r"$x=\sqrt{n}\cos(n\varphi)$", fontsize=9)
        plt.ylabel(r"$y=\sqrt{n}\sin(n\varphi)$", fontsize=9)

    title = f"Prime spiral — {len(primes)} primes"
    if primes:
        title += f" in [{primes[0]}, {primes[-1]}]"
    plt.title(title, fontsize=11)
    if primes or composites:
        plt.legend(loc="lower right", frameon=False, fontsize=8)
    plt.tight_layout()
    plt.savefig(png_path, dpi=150)
    plt.close()
    print(f"[saved] {png_path}")
