class LooplessError(Exception):
    """Base class for all errors raised by the generators."""


class InvalidParameters(LooplessError, ValueError):
    """k or z is not a non-negative integer, or the method name is unknown."""


class RegisterWidthExceeded(InvalidParameters):
    """k does not fit the bit register (one guard bit is needed above k)."""


class CapacityExceeded(LooplessError, AssertionError):
    """
    More combinations were emitted than binomial(k, z) allows.

    This is never a user error: the buffer is sized from binomial(k, z)
    before generation, so hitting it means a successor rule is broken.
    """
