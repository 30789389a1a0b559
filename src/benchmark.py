import argparse
import sys

from benchmark_utils import (
    LapTimer,
    benchmark,
    compute_speed_stats,
    default_grid,
    render_timings,
)
from loopless._errors import InvalidParameters
from loopless._utils.conversions import (
    format_combination,
    format_register,
    register_from_combination,
)
from loopless._utils.bitreg import MAX_REGISTER_UNIVERSE
from loopless._utils.intmath import binomial, factorial_binomial
from loopless.buffer import CombinationSet
from loopless.methods import METHODS, supports

DEFAULT_METHODS = ("coolest", "array", "reference")

TITLES = {
    "coolest": 'New, "The coolest" method',
    "array": "New, Algorithm 5.7 method",
    "reference": "Old method",
}


def print_combinations(cs: CombinationSet, bits: bool = False):
    for row in cs.table:
        if bits and cs.k <= MAX_REGISTER_UNIVERSE:
            reg = register_from_combination(row)
            print(f"{format_register(reg, cs.k + 1)}  {format_combination(row)}")
        else:
            print(format_combination(row))


def compare(k: int, z: int, methods, show: bool, bits: bool = False):
    timer = LapTimer()

    print("\n\n Count combinations, new vs old\n\n")
    timer.lap()
    print(f"Number of combinations (new method) : {binomial(k, z)} ")
    print(f" LAP TIME : {timer.lap():f} ")
    print(f"Number of combinations (old method) : {factorial_binomial(k, z)} ")
    print(f" LAP TIME : {timer.lap():f} ")

    print("\n\n    Generate combinations, new vs old \n\n")
    for name in methods:
        print("\n****")
        print(TITLES[name])
        print("Start generation")
        timer.lap()
        cs = METHODS[name](k, z)
        if show:
            print_combinations(cs, bits)
        print(f"End generation, {cs.count} generated ")
        print(f" LAP TIME : {timer.lap():f} ")


def sweep(k_max: int, methods, repeats: int, plot: bool, skip_unsupported=False):
    timings = benchmark(
        default_grid(k_max), methods, repeats, skip_unsupported=skip_unsupported
    )
    stats = compute_speed_stats(timings)
    for name, s in stats["methods"].items():
        print(
            f"{name:>10}: {s['combinations']} combinations in {s['seconds']:.4f}s, "
            f"{s['overall_ns_per_combination']:.1f} ns/combination"
        )
    if plot:
        render_timings(stats)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="loopless-bench",
        description="Generate all z-subsets of a k-set with loopless algorithms.",
    )
    parser.add_argument("k", type=int, help="universe size")
    parser.add_argument("z", type=int, nargs="?", help="subset size")
    parser.add_argument(
        "--methods",
        nargs="+",
        choices=sorted(METHODS),
        help="methods to run (default: all that support k)",
    )
    parser.add_argument(
        "--print", dest="show", action="store_true", help="print every combination"
    )
    parser.add_argument(
        "--bits",
        action="store_true",
        help="with --print, also show each combination as a register (guard bit first)",
    )
    parser.add_argument(
        "--sweep",
        action="store_true",
        help="benchmark every (k', z') with k' <= k instead of a single run",
    )
    parser.add_argument("--repeats", type=int, default=3)
    parser.add_argument("--plot", action="store_true", help="plot sweep timings")
    args = parser.parse_args(argv)

    # Explicitly requested methods run as asked, even if they reject k
    explicit = args.methods is not None
    methods = args.methods if explicit else list(DEFAULT_METHODS)

    try:
        if args.sweep:
            sweep(args.k, methods, args.repeats, args.plot, not explicit)
        else:
            if args.z is None:
                parser.error("z is required unless --sweep is given")
            if not explicit:
                methods = [name for name in methods if supports(name, args.k)]
            compare(args.k, args.z, methods, args.show, args.bits)
    except InvalidParameters as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
