import math

from .._errors import InvalidParameters


def check_universe(k: int, z: int) -> None:
    """
    Validate (k, z) for the generators.

    Raises InvalidParameters unless both are non-negative ints.
    z > k is accepted: it simply has no combinations.
    """
    for name, value in (("k", k), ("z", z)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameters(f"{name} must be an int, got {value!r}")
        if value < 0:
            raise InvalidParameters(f"{name} must be >= 0, got {value}")


def binomial(k: int, z: int) -> int:
    """
    Number of z-subsets of a k-set, C(k, z).

    Multiplicative formula, no factorials:
        r <- r * (k - d + 1) / d,  d = 1..min(z, k - z)
    Every partial product is a binomial coefficient, so the division is exact.

    Returns 0 when z > k or either argument is negative.
    """
    if z < 0 or k < 0 or z > k:
        return 0
    if z > k - z:
        z = k - z  # C(k, z) = C(k, k - z)

    r = 1
    for d in range(1, z + 1):
        r = r * (k - d + 1) // d
    return r


def factorial_binomial(k: int, z: int) -> int:
    """
    C(k, z) as k! / (z! (k - z)!).

    Slow baseline kept for cross-checking binomial().
    """
    if z < 0 or k < 0 or z > k:
        return 0
    return math.factorial(k) // (math.factorial(z) * math.factorial(k - z))
