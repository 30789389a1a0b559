import pandas as pd
import pytest

import benchmark
from benchmark_utils import (
    LapTimer,
    benchmark as run_benchmark,
    compute_speed_stats,
    cross_validate,
    default_grid,
    render_timings,
    time_generation,
)
from loopless._errors import InvalidParameters
from loopless.coolest import generate_coolest


def test_lap_timer_is_monotonic():
    timer = LapTimer()
    assert timer.lap() >= 0.0
    assert timer.lap() >= 0.0


def test_time_generation():
    cs, seconds = time_generation(generate_coolest, 6, 3)
    assert cs.count == 20
    assert seconds >= 0.0


def test_default_grid():
    assert default_grid(2) == [(1, 0), (1, 1), (2, 0), (2, 1), (2, 2)]


def test_benchmark_table():
    grid = default_grid(4)
    timings = run_benchmark(grid, ("coolest", "array"), repeats=1, progress=False)
    assert len(timings) == 2 * len(grid)
    assert set(timings["method"]) == {"coolest", "array"}
    row = timings[(timings["k"] == 4) & (timings["z"] == 2)]
    assert row["count"].tolist() == [6, 6]

    stats = compute_speed_stats(timings)
    assert set(stats["methods"]) == {"coolest", "array"}
    assert stats["methods"]["array"]["combinations"] == sum(2**k for k in range(1, 5))


def test_benchmark_rejects_unknown_method():
    with pytest.raises(InvalidParameters):
        run_benchmark([(3, 1)], ("gosper",), progress=False)


def test_compute_speed_stats_empty():
    with pytest.raises(ValueError):
        compute_speed_stats(pd.DataFrame(columns=["k", "z", "method", "count"]))


def test_render_timings_nothing_to_plot(capsys):
    render_timings({"plot_df": pd.DataFrame()})
    assert "Nothing to plot." in capsys.readouterr().out


@pytest.mark.parametrize("k, z", [(0, 0), (5, 3), (8, 4), (4, 5)])
def test_cross_validate(k, z):
    results = cross_validate(k, z)
    assert set(results) == {"coolest", "array", "reference"}


def test_cli_single_run(capsys):
    assert benchmark.main(["5", "3", "--print", "--methods", "coolest", "array"]) == 0
    out = capsys.readouterr().out
    assert "Number of combinations (new method) : 10" in out
    assert "0 1 2 " in out
    assert out.count("End generation, 10 generated") == 2


def test_cli_register_width_error(capsys):
    assert benchmark.main(["70", "2", "--methods", "coolest"]) == 1
    assert "error:" in capsys.readouterr().err


def test_cli_sweep(capsys):
    assert benchmark.main(["4", "--sweep", "--repeats", "1"]) == 0
    out = capsys.readouterr().out
    assert "coolest" in out and "array" in out


def test_cli_print_registers(capsys):
    assert benchmark.main(["4", "2", "--print", "--bits", "--methods", "coolest"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "00011  0 1 " in lines
    assert "01001  0 3 " in lines


def test_benchmark_skips_register_method_above_width():
    grid = [(3, 1), (64, 1)]
    with pytest.raises(InvalidParameters):
        run_benchmark(grid, ("coolest", "array"), repeats=1, progress=False)

    timings = run_benchmark(
        grid, ("coolest", "array"), repeats=1, progress=False, skip_unsupported=True
    )
    assert sorted(zip(timings["k"], timings["method"])) == [
        (3, "array"),
        (3, "coolest"),
        (64, "array"),
    ]


def test_cli_large_k_defaults_to_supported_methods(capsys):
    assert benchmark.main(["70", "2"]) == 0
    out = capsys.readouterr().out
    assert "The coolest" not in out
    assert "New, Algorithm 5.7 method" in out
    assert out.count("End generation, 2415 generated") == 2
