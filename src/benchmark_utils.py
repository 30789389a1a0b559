import math
import time
from typing import Iterable, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from tqdm import tqdm

from loopless._errors import InvalidParameters
from loopless._utils.intmath import binomial
from loopless.buffer import CombinationSet
from loopless.methods import METHODS, GeneratorFn, supports


class LapTimer:
    """Wall-clock lap timer; each `lap()` returns seconds since the previous one."""

    def __init__(self):
        self.last = time.perf_counter()

    def lap(self) -> float:
        now = time.perf_counter()
        elapsed = now - self.last
        self.last = now
        return elapsed


def time_generation(
    generate: GeneratorFn, k: int, z: int
) -> tuple[CombinationSet, float]:
    start = time.perf_counter()
    result = generate(k, z)
    return result, time.perf_counter() - start


def _warm_up(methods: Iterable[str]):
    # First call of a numba kernel includes compilation
    for name in methods:
        METHODS[name](3, 2)


def default_grid(k_max: int, k_min: int = 1) -> list[tuple[int, int]]:
    """Every (k, z) with k in [k_min, k_max] and z in [0, k]."""
    return [(k, z) for k in range(k_min, k_max + 1) for z in range(k + 1)]


def benchmark(
    grid: Sequence[tuple[int, int]],
    methods: Sequence[str] = ("coolest", "array"),
    repeats: int = 3,
    progress: bool = True,
    skip_unsupported: bool = False,
) -> pd.DataFrame:
    """
    Time every method on every (k, z) of `grid`, keeping the best of
    `repeats` runs. Raises RuntimeError if a method's count disagrees
    with binomial(k, z).

    With `skip_unsupported`, (k, z) points a method cannot handle (the
    register method above k = 63) are left out instead of raising.
    """
    for name in methods:
        if name not in METHODS:
            raise InvalidParameters(f"Unknown method {name!r}")
    _warm_up(methods)

    rows = []
    total = len(grid) * len(methods)
    with tqdm(total=total, desc="benchmark", disable=not progress) as pbar:
        for k, z in grid:
            expected = binomial(k, z)
            for name in methods:
                if skip_unsupported and not supports(name, k):
                    pbar.update(1)
                    continue
                best = math.inf
                count = 0
                for _ in range(max(1, repeats)):
                    result, seconds = time_generation(METHODS[name], k, z)
                    count = result.count
                    best = min(best, seconds)
                if count != expected:
                    raise RuntimeError(
                        f"{name} generated {count} combinations for "
                        f"k={k}, z={z}, expected {expected}"
                    )
                rows.append(
                    {
                        "k": k,
                        "z": z,
                        "method": name,
                        "count": count,
                        "seconds": best,
                        "ns_per_combination": best * 1e9 / count
                        if count
                        else float("nan"),
                    }
                )
                pbar.update(1)

    return pd.DataFrame(
        rows,
        columns=["k", "z", "method", "count", "seconds", "ns_per_combination"],
    )


def cross_validate(k: int, z: int, methods: Sequence[str] = tuple(METHODS)) -> dict:
    """
    Run every method on (k, z) and check counts, row validity and set equality.
    Returns {method: CombinationSet}; raises RuntimeError on the first
    disagreement.
    """
    expected = binomial(k, z)
    results = {name: METHODS[name](k, z) for name in methods}

    reference_set = None
    for name, cs in results.items():
        if cs.count != expected:
            raise RuntimeError(f"{name}: count {cs.count} != binomial {expected}")
        table = cs.table
        if table.size and (
            np.any(np.diff(table, axis=1) <= 0)
            or table.min() < 0
            or table.max() >= k
        ):
            raise RuntimeError(f"{name}: invalid combination row")
        as_set = cs.as_set()
        if len(as_set) != cs.count:
            raise RuntimeError(f"{name}: duplicate combinations")
        if reference_set is None:
            reference_set = as_set
        elif as_set != reference_set:
            first = next(iter(results))
            raise RuntimeError(f"{name}: combinations differ from {first}")

    return results


def compute_speed_stats(timings: pd.DataFrame) -> dict:
    """
    Summarize a benchmark() table:
        - per-method totals and mean ns/combination
        - plot_df restricted to rows with at least one combination
    """
    if timings.empty:
        raise ValueError("Empty timing table provided")

    plot_df = timings[timings["count"] > 0].copy()
    plot_df = plot_df.sort_values(["method", "count"]).reset_index(drop=True)

    summary = {}
    for name, group in plot_df.groupby("method"):
        combos = int(group["count"].sum())
        seconds = float(group["seconds"].sum())
        summary[name] = {
            "runs": int(len(group)),
            "combinations": combos,
            "seconds": seconds,
            "mean_ns_per_combination": float(group["ns_per_combination"].mean()),
            "overall_ns_per_combination": seconds * 1e9 / combos
            if combos
            else float("nan"),
        }

    return {"plot_df": plot_df, "methods": summary}


def render_timings(stats):
    plot_df = stats["plot_df"]
    if plot_df is None or plot_df.empty:
        print("Nothing to plot.")
        return

    fig = go.Figure()

    for name, group in plot_df.groupby("method"):
        fig.add_trace(
            go.Scatter(
                x=group["count"],
                y=group["ns_per_combination"],
                mode="markers",
                name=name,
                text=[f"k={k}, z={z}" for k, z in zip(group["k"], group["z"])],
                opacity=0.7,
            )
        )

    fig.update_layout(
        title="Time per Combination",
        xaxis_title="combinations generated",
        yaxis_title="ns / combination",
        xaxis_type="log",
        template="plotly_white",
    )

    fig.show()
