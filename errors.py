"""
Exception types shared by the polynomial algebra modules.

Three kinds of failure are kept apart:

- CapabilityError: an operation was asked of a coefficient structure that
  does not provide it. This is a programming error.
- DegenerateInputError: the zero polynomial (or another degenerate value)
  was passed where a proper polynomial is required.
- AlgorithmExhaustedError: a bounded search (prime selection, Kronecker
  candidates) ran out. Callers may retry with larger limits.
"""


class PolyFactorError(Exception):
    """Base class for all errors raised by this library."""


class CapabilityError(PolyFactorError, TypeError):
    """The coefficient structure lacks a capability the operation requires."""


class StructureMismatchError(CapabilityError):
    """Two operands live over different coefficient structures."""


class DegenerateInputError(PolyFactorError, ValueError):
    """Input is degenerate for the requested operation (e.g. factoring zero)."""


class AlgorithmExhaustedError(PolyFactorError, RuntimeError):
    """A configured search bound was exceeded before an answer was found."""


class NotDivisibleError(PolyFactorError, ArithmeticError):
    """An exact division left a nonzero remainder."""
