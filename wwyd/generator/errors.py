"""Typed failures raised by the problem generator."""


class GenerationError(Exception):
    """Base class for every recoverable generation failure."""


class RestrictionConflict(GenerationError):
    """The restrictions make every hand impossible."""


class PoolExhausted(GenerationError):
    """A single assembly step found no legal tile with remaining supply."""


class GenerationInfeasible(GenerationError):
    """The composer ran out of attempts without completing a hand."""


class ShantenUnreachable(GenerationError):
    """The adjuster could not reach the requested shanten."""
