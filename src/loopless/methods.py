from typing import Callable

from ._errors import InvalidParameters
from ._interface import CombinationIterator, Config, IteratorFn
from ._utils.bitreg import MAX_REGISTER_UNIVERSE
from ._utils.intmath import check_universe
from .array_successor import generate_array_successor, iter_array_successor
from .buffer import CombinationSet
from .coolest import generate_coolest, iter_coolest
from .reference import generate_reference

GeneratorFn = Callable[[int, int], CombinationSet]

METHODS: dict[str, GeneratorFn] = {
    "coolest": generate_coolest,
    "array": generate_array_successor,
    "reference": generate_reference,
}

ITERATORS: dict[str, IteratorFn] = {
    "coolest": iter_coolest,
    "array": iter_array_successor,
}


def select_method(k: int) -> str:
    """Register method while k fits a 64-bit register, array method above."""
    return "coolest" if k <= MAX_REGISTER_UNIVERSE else "array"


def supports(method: str, k: int) -> bool:
    """False only for the register method when k does not fit the register."""
    return method != "coolest" or k <= MAX_REGISTER_UNIVERSE


def resolve(config: Config) -> str:
    check_universe(config.k, config.z)
    method = config.method
    if method == "auto":
        return select_method(config.k)
    if method not in METHODS:
        raise InvalidParameters(
            f"Unknown method {method!r}, expected one of {sorted(METHODS)} or 'auto'"
        )
    return method


def generate(k: int, z: int, method: str = "auto") -> CombinationSet:
    return METHODS[resolve(Config(k, z, method))](k, z)


def iterate(k: int, z: int, method: str = "auto") -> CombinationIterator:
    name = resolve(Config(k, z, method))
    if name not in ITERATORS:
        raise InvalidParameters(f"Method {name!r} has no lazy variant")
    return ITERATORS[name](k, z)
